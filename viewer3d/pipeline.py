import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .camera import Camera
from .errors import InvalidParameterError
from .mesh import Mesh
from .rasterizer import fill_triangle
from .settings import RenderSettings
from .transforms import Transform
from .vecmath import W_EPS, Mat4, Vec3, vec3_to_vec4

logger = logging.getLogger(__name__)

# (max polygon count, stride); anything larger uses MAX_STRIDE
LOD_TIERS = ((10_000, 1), (50_000, 2), (100_000, 3))
MAX_STRIDE = 4


@dataclass
class RenderStats:
    polygon_count: int = 0
    stride: int = 1
    processed: int = 0
    skipped: int = 0
    culled: int = 0


def lod_stride(polygon_count: int) -> int:
    """
    Level-of-detail stride: only every n-th polygon is drawn.

    Large meshes are rendered with fewer polygons rather than cheaper
    ones, so the frame time stays bounded at the cost of holes.
    """
    for limit, stride in LOD_TIERS:
        if polygon_count <= limit:
            return stride
    return MAX_STRIDE


def to_screen(ndc_x: float, ndc_y: float, width: int, height: int) -> Tuple[float, float]:
    """
    Convert NDC coordinates [-1..1] to pixel coordinates.

    NDC:
      x=-1 left, x=+1 right
      y=-1 bottom, y=+1 top

    Screen:
      x=0 left, x=width right
      y=0 top, y=height bottom
    """
    sx = ndc_x * width / 2.0 + width / 2.0
    sy = -ndc_y * height / 2.0 + height / 2.0
    return sx, sy


def project_vertex(mvp: Mat4, v: Vec3, width: int, height: int) -> Tuple[float, float]:
    """Model space -> clip space -> (divide) -> pixel coordinates."""
    c = mvp.mul_vec4(vec3_to_vec4(v))
    if abs(c.w) > W_EPS:
        c = c.divide(c.w)
    return to_screen(c.x, c.y, width, height)


def is_front_facing(pts) -> bool:
    """Counter-clockwise on screen (y down) from the first three points."""
    (x0, y0), (x1, y1), (x2, y2) = pts[0], pts[1], pts[2]
    return (x1 - x0) * (y2 - y0) - (y1 - y0) * (x2 - x0) < 0


def _model_matrix(transform: Optional[Transform]) -> Mat4:
    if transform is None:
        return Mat4.identity()
    if isinstance(transform, Mat4):
        return transform
    return transform.matrix()


def render(surface, camera: Camera, mesh: Mesh, transform: Optional[Transform] = None,
           width: Optional[int] = None, height: Optional[int] = None,
           settings: Optional[RenderSettings] = None) -> RenderStats:
    """
    Draw one frame of `mesh` into `surface`.

    Steps:
      1) combined = Projection @ View @ Model
      2) pick the LOD stride from the polygon count
      3) project every vertex of each kept polygon to pixels
      4) fill (fan-triangulated for n-gons) and/or stroke the outline

    No depth buffer: polygons are painted in mesh order. With
    settings.backface_culling, polygons facing away are dropped and counted
    in RenderStats.culled.
    The surface is not cleared here.
    """
    if surface is None or camera is None or mesh is None:
        raise InvalidParameterError("Surface, camera and mesh cannot be None")
    width = surface.width if width is None else width
    height = surface.height if height is None else height
    if width <= 0 or height <= 0:
        raise InvalidParameterError(f"Viewport size must be positive, got: {width}x{height}")
    if settings is None:
        settings = RenderSettings()

    combined = camera.projection_matrix() @ camera.view_matrix() @ _model_matrix(transform)

    n = mesh.polygon_count
    stride = lod_stride(n)
    stats = RenderStats(polygon_count=n, stride=stride)

    vertex_count = mesh.vertex_count
    fill = settings.fill_color
    wire = settings.wireframe_color

    for pi in range(0, n, stride):
        idx = mesh.polygon(pi).vertex_indices
        if len(idx) < 3 or any(not 0 <= i < vertex_count for i in idx):
            stats.skipped += 1
            continue

        pts = [project_vertex(combined, mesh.vertex(i), width, height) for i in idx]

        if settings.backface_culling and not is_front_facing(pts):
            stats.culled += 1
            continue

        if settings.show_filled:
            # fan from vertex 0
            for k in range(1, len(pts) - 1):
                fill_triangle(surface, pts[0], fill, pts[k], fill, pts[k + 1], fill,
                              barycentric=settings.barycentric_shading)

        if settings.show_wireframe:
            for k in range(len(pts)):
                (x0, y0), (x1, y1) = pts[k], pts[(k + 1) % len(pts)]
                surface.stroke_line(x0, y0, x1, y1, wire)

        stats.processed += 1

    logger.debug("Rendered %d/%d polygons (stride %d, skipped %d, culled %d)",
                 stats.processed, n, stride, stats.skipped, stats.culled)
    return stats
