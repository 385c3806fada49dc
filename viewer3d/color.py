from typing import Tuple

from .errors import InvalidParameterError

# (r, g, b) with channels in [0, 1]
Color = Tuple[float, float, float]

LIGHT_GRAY: Color = (211 / 255, 211 / 255, 211 / 255)
DARK_GRAY: Color = (169 / 255, 169 / 255, 169 / 255)
BLACK: Color = (0.0, 0.0, 0.0)


def clamp01(v: float) -> float:
    if v < 0.0:
        return 0.0
    if v > 1.0:
        return 1.0
    return v


def lerp_color(a: Color, b: Color, t: float) -> Color:
    """Linear blend, t=0 -> a, t=1 -> b."""
    return (a[0] * (1.0 - t) + b[0] * t,
            a[1] * (1.0 - t) + b[1] * t,
            a[2] * (1.0 - t) + b[2] * t)


def to_rgb8(c) -> Tuple[int, int, int]:
    """Map [0, 1] floats to 0..255 ints, clamping out-of-range channels."""
    r, g, b = c if c else (1.0, 1.0, 1.0)
    return (int(clamp01(r) * 255 + 0.5),
            int(clamp01(g) * 255 + 0.5),
            int(clamp01(b) * 255 + 0.5))


def parse_hex_color(hex_str) -> Color:
    """
    Parse '#RRGGBB' or 'RRGGBB' (case-insensitive) to a [0, 1] float triple.
    """
    if hex_str is None:
        raise InvalidParameterError("Color cannot be None")
    val = str(hex_str).strip().lstrip('#')
    if len(val) != 6:
        raise InvalidParameterError(f"Invalid hex color: {hex_str!r}")
    try:
        r = int(val[0:2], 16)
        g = int(val[2:4], 16)
        b = int(val[4:6], 16)
    except ValueError:
        raise InvalidParameterError(f"Invalid hex color: {hex_str!r}") from None
    return (r / 255, g / 255, b / 255)
