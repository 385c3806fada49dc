import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping

from .color import DARK_GRAY, LIGHT_GRAY, Color, parse_hex_color

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """
    What the render pipeline draws for each polygon.

    fill_color is applied to all three vertices of every triangle, so the
    filled mesh is uniformly colored even though the rasterizer itself
    interpolates per-vertex colors.

    backface_culling drops polygons whose projected winding is clockwise
    on screen (y down), using the first three vertices.
    """
    fill_color: Color = LIGHT_GRAY
    wireframe_color: Color = DARK_GRAY
    show_filled: bool = True
    show_wireframe: bool = False
    barycentric_shading: bool = True
    backface_culling: bool = False

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RenderSettings":
        """
        Build from a plain mapping (parsed config, CLI overrides).
        Colors may be given as '#RRGGBB' strings. Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in values.items():
            if key not in known:
                logger.warning("Ignoring unknown render setting %r", key)
                continue
            if key.endswith("_color") and isinstance(value, str):
                value = parse_hex_color(value)
            elif key.endswith("_color"):
                value = tuple(float(c) for c in value)
            kwargs[key] = value
        return cls(**kwargs)
