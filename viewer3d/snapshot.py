import logging

from .config import ViewerConfig
from .mesh import Mesh
from .pipeline import RenderStats, render
from .surface import FrameBuffer

logger = logging.getLogger(__name__)


def render_snapshot(mesh: Mesh, config: ViewerConfig, path) -> RenderStats:
    """Render a single frame without a window and save it as PNG."""
    fb = FrameBuffer(config.width, config.height, config.background)
    stats = render(fb, config.make_camera(), mesh, settings=config.render)
    fb.save(path)
    logger.info("Saved snapshot to %s (%d polygons drawn)", path, stats.processed)
    return stats
