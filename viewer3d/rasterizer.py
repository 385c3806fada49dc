import logging
import math

import numpy as np
from numba import njit

from .color import lerp_color

logger = logging.getLogger(__name__)

DEGENERATE_AREA = 1e-8


def _round(v: float) -> int:
    """Round half up, so 0.5 -> 1 and -0.5 -> 0."""
    return int(math.floor(v + 0.5))


# ============================================================
#  Bresenham line
# ============================================================

def draw_line(x0, y0, x1, y1, set_pixel, color):
    """
    Bresenham integer line drawing.

    Parameters:
      x0, y0, x1, y1  - endpoints (floats are rounded to the nearest pixel)
      set_pixel(x,y,color) - callback for plotting
      color - (r, g, b) in [0, 1]

    Every step of the line is visited, so clip long segments with
    clip_line() first.
    """
    x0, y0, x1, y1 = _round(x0), _round(y0), _round(x1), _round(y1)
    steep = abs(x0 - x1) < abs(y0 - y1)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1
    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error2 = 0
    y = y0
    ystep = 1 if y1 > y0 else -1

    for x in range(x0, x1 + 1):
        if steep:
            set_pixel(y, x, color)
        else:
            set_pixel(x, y, color)
        error2 += 2 * dy
        if error2 > dx:
            y += ystep
            error2 -= 2 * dx


def clip_line(x0, y0, x1, y1, xmin, ymin, xmax, ymax):
    """
    Liang-Barsky clipping of a segment against an axis-aligned rectangle.

    Returns the clipped (x0, y0, x1, y1), or None when nothing of the
    segment is inside or an endpoint is not finite.
    """
    if not all(math.isfinite(v) for v in (x0, y0, x1, y1)):
        return None

    dx = x1 - x0
    dy = y1 - y0
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x0 - xmin), (dx, xmax - x0), (-dy, y0 - ymin), (dy, ymax - y0)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)

    return x0 + t0 * dx, y0 + t0 * dy, x0 + t1 * dx, y0 + t1 * dy


def _bresenham_steps(x0, y0, x1, y1):
    """
    Yield (i, x, y) along the integer line from (x0, y0) to (x1, y1), both
    ends included. i counts steps from the start; the walk has
    max(|dx|, |dy|) steps in total.
    """
    dx = abs(x1 - x0)
    dy = abs(y1 - y0)
    sx = 1 if x0 < x1 else -1
    sy = 1 if y0 < y1 else -1

    err = dx // 2 if dx > dy else -(dy // 2)
    x, y = x0, y0
    for i in range(dx + dy + 1):
        yield i, x, y
        if x == x1 and y == y1:
            return
        e2 = err
        if e2 > -dx:
            err -= dy
            x += sx
        if e2 < dy:
            err += dx
            y += sy


def _signed_area(x0, y0, x1, y1, x2, y2):
    """Twice the signed area of the triangle; its sign gives the winding."""
    return (y1 - y2) * (x0 - x2) + (x2 - x1) * (y0 - y2)


# ============================================================
#  Numba span shading
# ============================================================

@njit(cache=True)
def _barycentric(px, py, x0, y0, x1, y1, x2, y2, area):
    """
    Barycentric coordinates of (px, py) against the triangle, given its
    precomputed signed area. Returns (alpha, beta, gamma), summing to 1.
    """
    alpha = ((y1 - y2) * (px - x2) + (x2 - x1) * (py - y2)) / area
    beta = ((y2 - y0) * (px - x2) + (x0 - x2) * (py - y2)) / area
    gamma = 1.0 - alpha - beta
    return alpha, beta, gamma


@njit(cache=True)
def _shade_span_barycentric(out, y, x_start, x_end,
                            x0, y0, x1, y1, x2, y2, area,
                            c0, c1, c2):
    """
    Colors of pixels x_start..x_end on row y, written to out[0..n).
    Channels are clamped to [0, 1].
    """
    py = float(y)
    for i in range(x_end - x_start + 1):
        a, b, g = _barycentric(float(x_start + i), py, x0, y0, x1, y1, x2, y2, area)
        for ch in range(3):
            v = a * c0[ch] + b * c1[ch] + g * c2[ch]
            out[i, ch] = min(1.0, max(0.0, v))


@njit(cache=True)
def _shade_span_lerp(out, x_start, x_end, lc, rc):
    """Fast mode: blend the row's left/right edge colors across the span."""
    span = x_end - x_start
    for i in range(span + 1):
        t = 0.0 if span == 0 else i / span
        for ch in range(3):
            v = lc[ch] * (1.0 - t) + rc[ch] * t
            out[i, ch] = min(1.0, max(0.0, v))


@njit(cache=True)
def _fill_spans(img, min_y, left_x, right_x, left_c, right_c,
                x0, y0, x1, y1, x2, y2, area, c0, c1, c2, barycentric):
    """
    Fill every row of a span table straight into an image array.

    img:
      - shape (W,H,3), dtype=uint8
      - IMPORTANT: index order is [x,y,color], as in pygame surfarray
    """
    W = img.shape[0]
    out = np.empty((W, 3))

    for idx in range(left_x.shape[0]):
        left, right = left_x[idx], right_x[idx]
        if math.isinf(left) or math.isinf(right):
            continue
        x_start = max(0, int(math.ceil(left)))
        x_end = min(W - 1, int(math.floor(right)))
        if x_end < x_start:
            continue

        y = min_y + idx
        if barycentric:
            _shade_span_barycentric(out, y, x_start, x_end,
                                    x0, y0, x1, y1, x2, y2, area, c0, c1, c2)
        else:
            _shade_span_lerp(out, x_start, x_end, left_c[idx], right_c[idx])

        for i in range(x_end - x_start + 1):
            for ch in range(3):
                img[x_start + i, y, ch] = int(out[i, ch] * 255.0 + 0.5)


class _EdgeSpans:
    """
    Per-row left/right boundaries of one triangle, rows min_y..max_y.

    Each row starts at (+inf, -inf) and is widened by every edge pixel
    that lands on it. The color recorded with a boundary is the edge
    color at that pixel.
    """
    __slots__ = ('min_y', 'max_y', 'left_x', 'right_x', 'left_c', 'right_c')

    def __init__(self, min_y: int, max_y: int):
        rows = max_y - min_y + 1
        self.min_y = min_y
        self.max_y = max_y
        self.left_x = np.full(rows, np.inf)
        self.right_x = np.full(rows, -np.inf)
        self.left_c = np.zeros((rows, 3))
        self.right_c = np.zeros((rows, 3))

    def _record(self, x, y, c):
        idx = y - self.min_y
        if x < self.left_x[idx]:
            self.left_x[idx] = x
            self.left_c[idx] = c
        if x > self.right_x[idx]:
            self.right_x[idx] = x
            self.right_c[idx] = c

    def walk_edge(self, x0d, y0d, c0, x1d, y1d, c1):
        x0, y0, x1, y1 = _round(x0d), _round(y0d), _round(x1d), _round(y1d)

        steps = max(abs(x1 - x0), abs(y1 - y0))
        if steps == 0:
            if self.min_y <= y0 <= self.max_y:
                self._record(x0, y0, c0)
            return

        for i, x, y in _bresenham_steps(x0, y0, x1, y1):
            if self.min_y <= y <= self.max_y:
                self._record(x, y, lerp_color(c0, c1, min(1.0, i / steps)))

    def row_range(self, idx: int, width: int):
        """Integer pixel range of row idx clipped to [0, width), or None."""
        left, right = self.left_x[idx], self.right_x[idx]
        if math.isinf(left) or math.isinf(right):
            return None
        x_start = max(0, math.ceil(left))
        x_end = min(width - 1, math.floor(right))
        if x_end < x_start:
            return None
        return int(x_start), int(x_end)


# ============================================================
#  Triangle fill
# ============================================================

def fill_triangle(surface, p0, c0, p1, c1, p2, c2, barycentric: bool = True):
    """
    Fill a screen-space triangle with per-vertex color interpolation.

    Parameters:
      surface      - anything with width, height and set_pixel(x, y, color).
                     A surface exposing a numpy `pixels` array of shape
                     (W,H,3) is filled directly by the numba kernel.
      p0..p2       - (x, y) vertex positions in pixels
      c0..c2       - (r, g, b) vertex colors in [0, 1]
      barycentric  - True: color each pixel from its barycentric weights
                     against the triangle vertices (default).
                     False: blend the row's left/right edge colors.

    Rows are bounded by walking the three edges with Bresenham, then each
    row is filled from ceil(left) to floor(right). A triangle with
    near-zero area is drawn as a color-interpolated line between its two
    farthest vertices.
    """
    width, height = surface.width, surface.height
    x0, y0 = float(p0[0]), float(p0[1])
    x1, y1 = float(p1[0]), float(p1[1])
    x2, y2 = float(p2[0]), float(p2[1])

    coords = (x0, y0, x1, y1, x2, y2)
    if not all(math.isfinite(v) for v in coords):
        logger.debug("Dropping triangle with non-finite coordinates: %s", coords)
        return
    max_coord = max(abs(v) for v in coords)
    if max_coord > width * 20 or max_coord > height * 20:
        logger.debug("Dropping triangle far outside the surface: %s", coords)
        return

    area = _signed_area(x0, y0, x1, y1, x2, y2)
    if abs(area) < DEGENERATE_AREA:
        _draw_longest_edge(surface, ((x0, y0), (x1, y1), (x2, y2)), (c0, c1, c2))
        return

    min_x = math.floor(min(x0, x1, x2))
    max_x = math.ceil(max(x0, x1, x2))
    min_y = math.floor(min(y0, y1, y2))
    max_y = math.ceil(max(y0, y1, y2))

    # trivial reject if the bbox is fully off-surface or absurdly large
    if max_x < 0 or min_x >= width or max_y < 0 or min_y >= height:
        return
    if max_x - min_x > width * 10 or max_y - min_y > height * 10:
        return

    min_y = max(0, min_y)
    max_y = min(height - 1, max_y)
    if max_y < min_y:
        return

    spans = _EdgeSpans(min_y, max_y)
    spans.walk_edge(x0, y0, c0, x1, y1, c1)
    spans.walk_edge(x1, y1, c1, x2, y2, c2)
    spans.walk_edge(x2, y2, c2, x0, y0, c0)

    k0 = np.asarray(c0, dtype=np.float64)
    k1 = np.asarray(c1, dtype=np.float64)
    k2 = np.asarray(c2, dtype=np.float64)

    pixels = getattr(surface, "pixels", None)
    if isinstance(pixels, np.ndarray):
        _fill_spans(pixels, min_y, spans.left_x, spans.right_x, spans.left_c, spans.right_c,
                    x0, y0, x1, y1, x2, y2, area, k0, k1, k2, barycentric)
        return

    # generic surface: shade one row at a time, plot through set_pixel
    set_pixel = surface.set_pixel
    out = np.empty((width, 3))
    for idx in range(max_y - min_y + 1):
        r = spans.row_range(idx, width)
        if r is None:
            continue
        x_start, x_end = r
        y = min_y + idx
        if barycentric:
            _shade_span_barycentric(out, y, x_start, x_end,
                                    x0, y0, x1, y1, x2, y2, area, k0, k1, k2)
        else:
            _shade_span_lerp(out, x_start, x_end, spans.left_c[idx], spans.right_c[idx])
        for i in range(x_end - x_start + 1):
            set_pixel(x_start + i, y, (float(out[i, 0]), float(out[i, 1]), float(out[i, 2])))


def _draw_longest_edge(surface, points, colors):
    """Degenerate-triangle fallback: one gradient line between the farthest pair."""
    width, height = surface.width, surface.height

    a, b = 0, 1
    best = 0.0
    for i in range(3):
        for j in range(i + 1, 3):
            d = math.hypot(points[i][0] - points[j][0], points[i][1] - points[j][1])
            if d > best:
                best = d
                a, b = i, j

    xa, ya = _round(points[a][0]), _round(points[a][1])
    xb, yb = _round(points[b][0]), _round(points[b][1])
    ca, cb = colors[a], colors[b]

    steps = max(abs(xb - xa), abs(yb - ya))
    if steps == 0:
        if 0 <= xa < width and 0 <= ya < height:
            surface.set_pixel(xa, ya, ca)
        return

    for i, x, y in _bresenham_steps(xa, ya, xb, yb):
        if 0 <= x < width and 0 <= y < height:
            surface.set_pixel(x, y, lerp_color(ca, cb, i / steps))
