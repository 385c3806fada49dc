from dataclasses import dataclass, field

from .camera import Camera
from .color import BLACK, Color
from .orbit import OrbitController
from .settings import RenderSettings
from .vecmath import Vec3


@dataclass
class ViewerConfig:
    """Window, camera and controller settings for one viewer session."""
    width: int = 900
    height: int = 900
    fov: float = 60.0           # degrees (values > 10 are read as degrees)
    near_plane: float = 0.1
    far_plane: float = 100.0
    camera_position: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 5.0))
    camera_target: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))

    translation_speed: float = 0.5
    rotation_sensitivity: float = 0.01
    zoom_sensitivity: float = 5.0
    # pygame reports whole wheel clicks; scaled before OrbitController.on_scroll
    wheel_scale: float = 10.0

    background: Color = BLACK
    render: RenderSettings = field(default_factory=RenderSettings)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def make_camera(self) -> Camera:
        return Camera(self.camera_position, self.camera_target, self.fov,
                      self.aspect_ratio, self.near_plane, self.far_plane)

    def make_controller(self, camera: Camera) -> OrbitController:
        controller = OrbitController(camera, self.camera_position, self.camera_target)
        controller.translation_speed = self.translation_speed
        controller.rotation_sensitivity = self.rotation_sensitivity
        controller.zoom_sensitivity = self.zoom_sensitivity
        return controller
