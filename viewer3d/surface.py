from typing import Protocol, Tuple

import numpy as np
from PIL import Image

from .color import BLACK, Color, to_rgb8
from .errors import InvalidParameterError
from .rasterizer import clip_line, draw_line


class Surface(Protocol):
    """What the rasterizer and the render pipeline draw into."""
    width: int
    height: int

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        ...

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None:
        ...


class FrameBuffer:
    """
    RGB pixel buffer backed by a numpy array.

    pixels:
      - shape (W, H, 3), dtype=uint8
      - IMPORTANT: index order is [x, y, channel], the same layout as
        pygame.surfarray, so the array can be blitted directly.
    """

    def __init__(self, width: int, height: int, background: Color = BLACK):
        if width <= 0 or height <= 0:
            raise InvalidParameterError(f"Frame buffer size must be positive, got: {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros((self.width, self.height, 3), dtype=np.uint8)
        self.clear(background)

    def clear(self, color: Color = BLACK) -> None:
        self.pixels[:, :, :] = to_rgb8(color)

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[x, y] = to_rgb8(color)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b = self.pixels[x, y]
        return int(r), int(g), int(b)

    def stroke_line(self, x0: float, y0: float, x1: float, y1: float, color: Color) -> None:
        # only the visible part is stepped; endpoints may be far off-screen
        clipped = clip_line(x0, y0, x1, y1, 0, 0, self.width - 1, self.height - 1)
        if clipped is not None:
            draw_line(*clipped, self.set_pixel, color)

    def to_image(self) -> Image.Image:
        # PIL wants rows first: (H, W, 3)
        return Image.fromarray(np.ascontiguousarray(self.pixels.transpose(1, 0, 2)))

    def save(self, path) -> None:
        self.to_image().save(path, format="PNG")
