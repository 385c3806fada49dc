import logging
from datetime import datetime

import pygame

from .config import ViewerConfig
from .mesh import Mesh
from .pipeline import RenderStats, render
from .rasterizer import fill_triangle
from .surface import FrameBuffer
from .transforms import ModelTransform

logger = logging.getLogger(__name__)

HUD_COLOR = (235, 235, 235)
HELP_LINE = ("LMB drag orbit | wheel zoom | WASD/QE move | R reset | "
             "1 fill | 2 wire | 3 shading | F2 screenshot | ESC exit")


class Viewer:
    """
    Interactive pygame window around the software pipeline.

    Every frame is rendered into a FrameBuffer and copied to the window
    with surfarray; pygame only handles input and presentation.
    """

    def __init__(self, mesh: Mesh, config: ViewerConfig, title: str = "viewer3d"):
        self.mesh = mesh
        self.config = config
        self.title = title
        self.camera = config.make_camera()
        self.controller = config.make_controller(self.camera)
        self.model = ModelTransform()
        self.settings = config.render
        self.framebuffer = FrameBuffer(config.width, config.height, config.background)
        self.stats = RenderStats()
        self.running = False

    def _warm_up(self):
        # first call triggers numba compilation
        tiny = FrameBuffer(4, 4)
        white = (1.0, 1.0, 1.0)
        fill_triangle(tiny, (0, 0), white, (3, 0), white, (0, 3), white)

    def mode_name(self) -> str:
        s = self.settings
        parts = []
        if s.show_filled:
            parts.append("FILL" if s.barycentric_shading else "FILL(fast)")
        if s.show_wireframe:
            parts.append("WIRE")
        if s.backface_culling:
            parts.append("CULL")
        return "+".join(parts) if parts else "NONE"

    def save_screenshot(self, path=None) -> str:
        if path is None:
            path = datetime.now().strftime("screenshot_%Y%m%d_%H%M%S.png")
        self.framebuffer.save(path)
        logger.info("Screenshot saved to %s", path)
        return path

    # ------------------------------------------------------------
    #  Input
    # ------------------------------------------------------------

    def handle_key(self, key):
        c = self.controller
        moves = {
            pygame.K_w: c.move_forward,
            pygame.K_s: c.move_backward,
            pygame.K_a: c.move_left,
            pygame.K_d: c.move_right,
            pygame.K_q: c.move_down,
            pygame.K_e: c.move_up,
        }
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key in moves:
            moves[key]()
        elif key == pygame.K_r:
            c.reset()
            self.model.reset()
        elif key == pygame.K_1:
            self.settings.show_filled = not self.settings.show_filled
        elif key == pygame.K_2:
            self.settings.show_wireframe = not self.settings.show_wireframe
        elif key == pygame.K_3:
            self.settings.barycentric_shading = not self.settings.barycentric_shading
        elif key == pygame.K_4:
            self.settings.backface_culling = not self.settings.backface_culling
        elif key == pygame.K_F2:
            self.save_screenshot()

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.controller.on_press(*event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.controller.on_release()
        elif event.type == pygame.MOUSEMOTION and self.controller.is_dragging:
            self.controller.on_drag(*event.pos)
        elif event.type == pygame.MOUSEWHEEL:
            self.controller.on_scroll(event.y * self.config.wheel_scale)

    # ------------------------------------------------------------
    #  Main loop
    # ------------------------------------------------------------

    def draw_frame(self) -> RenderStats:
        self.framebuffer.clear(self.config.background)
        self.stats = render(self.framebuffer, self.camera, self.mesh, self.model,
                            settings=self.settings)
        return self.stats

    def run(self):
        cfg = self.config
        pygame.init()
        screen = pygame.display.set_mode((cfg.width, cfg.height))
        pygame.display.set_caption(self.title)
        render_surface = pygame.Surface((cfg.width, cfg.height))
        clock = pygame.time.Clock()
        font = pygame.font.SysFont("consolas", 16)

        self._warm_up()
        logger.info("Viewer started: %dx%d, %d polygons",
                    cfg.width, cfg.height, self.mesh.polygon_count)

        self.running = True
        try:
            while self.running:
                clock.tick(60)
                for event in pygame.event.get():
                    self.handle_event(event)

                stats = self.draw_frame()
                pygame.surfarray.blit_array(render_surface, self.framebuffer.pixels)
                screen.blit(render_surface, (0, 0))

                hud = [
                    f"{self.mode_name()} | Polygons: {stats.polygon_count} | "
                    f"LOD stride: {stats.stride} | FPS: {clock.get_fps():.1f}",
                    HELP_LINE,
                ]
                y = 10
                for line in hud:
                    screen.blit(font.render(line, True, HUD_COLOR), (10, y))
                    y += 18

                pygame.display.flip()
        finally:
            pygame.quit()
            logger.info("Viewer closed")
