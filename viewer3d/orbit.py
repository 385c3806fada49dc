import logging
import math

from .camera import Camera, WORLD_UP
from .errors import InvalidParameterError
from .vecmath import EPS, Vec3

logger = logging.getLogger(__name__)

PHI_MIN = 0.01
PHI_MAX = math.pi - 0.01
MIN_RADIUS = 0.1


class OrbitController:
    """
    Drives a Camera around its target in spherical coordinates.

    The orbit state is derived from the camera on each call:
      offset = position - target
      radius = |offset|
      theta  = atan2(offset.x, offset.z)   azimuth in the XZ plane
      phi    = acos(offset.y / radius)     angle from +Y

    rotate() and zoom() keep the camera on that sphere. The move_*()
    methods are free-fly moves that shift the position only, so they
    change the radius; both modes share the same camera.
    """

    def __init__(self, camera: Camera, initial_position=None, initial_target=None):
        if camera is None:
            raise InvalidParameterError("Camera cannot be None")
        if (initial_position is None) != (initial_target is None):
            raise InvalidParameterError("Initial position and target cannot be None")

        self.camera = camera
        if initial_position is None:
            self._initial_position = camera.position
            self._initial_target = camera.target
        else:
            self._initial_position = Vec3.of(initial_position)
            self._initial_target = Vec3.of(initial_target)

        self.translation_speed = 0.5
        self.rotation_sensitivity = 0.01
        self.zoom_sensitivity = 5.0

        self._last_x = 0.0
        self._last_y = 0.0
        self._dragging = False

    # ------------------------------------------------------------
    #  Free-fly movement
    # ------------------------------------------------------------

    def move_forward(self):
        direction = (self.camera.target - self.camera.position).normalize()
        self.camera.move_position(direction * self.translation_speed)

    def move_backward(self):
        direction = (self.camera.position - self.camera.target).normalize()
        self.camera.move_position(direction * self.translation_speed)

    def _right(self) -> Vec3:
        forward = self.camera.target - self.camera.position
        return forward.cross(WORLD_UP).normalize()

    def move_left(self):
        self.camera.move_position(self._right() * -self.translation_speed)

    def move_right(self):
        self.camera.move_position(self._right() * self.translation_speed)

    def move_up(self):
        self.camera.move_position(Vec3(0.0, self.translation_speed, 0.0))

    def move_down(self):
        self.camera.move_position(Vec3(0.0, -self.translation_speed, 0.0))

    def move_in_direction(self, direction):
        if direction is None:
            raise InvalidParameterError("Direction cannot be None")
        self.camera.move_position(Vec3.of(direction).normalize() * self.translation_speed)

    # ------------------------------------------------------------
    #  Orbit
    # ------------------------------------------------------------

    def _offset(self):
        offset = self.camera.position - self.camera.target
        radius = offset.norm()
        if radius < EPS:
            # camera sits on its target: orbit at unit distance along +Z
            radius = 1.0
            offset = Vec3(0.0, 0.0, radius)
        return offset, radius

    def rotate(self, delta_theta: float, delta_phi: float):
        """Orbit by angle deltas (radians). phi is clamped away from the poles."""
        offset, radius = self._offset()

        theta = math.atan2(offset.x, offset.z)
        phi = math.acos(max(-1.0, min(1.0, offset.y / radius)))

        theta += delta_theta
        phi = max(PHI_MIN, min(PHI_MAX, phi + delta_phi))

        sin_phi = math.sin(phi)
        new_offset = Vec3(radius * sin_phi * math.sin(theta),
                          radius * math.cos(phi),
                          radius * sin_phi * math.cos(theta))
        self.camera.set_position(self.camera.target + new_offset)

    def rotate_by_pointer(self, dx: float, dy: float):
        """Orbit by raw pointer deltas (pixels). Screen y grows downward, so dy is inverted."""
        self.rotate(dx * self.rotation_sensitivity, -dy * self.rotation_sensitivity)

    # ------------------------------------------------------------
    #  Zoom
    # ------------------------------------------------------------

    def zoom(self, delta: float):
        """Positive delta moves closer. The radius never drops below MIN_RADIUS."""
        offset = self.camera.position - self.camera.target
        radius = offset.norm()
        if radius < EPS:
            radius = 1.0
            offset = Vec3(0.0, 0.0, 1.0)

        new_radius = max(MIN_RADIUS, radius - delta * self.zoom_sensitivity * 0.01)
        if abs(new_radius - radius) < EPS:
            return

        self.camera.set_position(self.camera.target + offset.normalize() * new_radius)

    def zoom_in(self):
        self.zoom(1.0)

    def zoom_out(self):
        self.zoom(-1.0)

    # ------------------------------------------------------------
    #  Reset
    # ------------------------------------------------------------

    @property
    def initial_position(self) -> Vec3:
        return self._initial_position

    @property
    def initial_target(self) -> Vec3:
        return self._initial_target

    def set_initial_values(self, position, target):
        if position is None or target is None:
            raise InvalidParameterError("Position and target cannot be None")
        self._initial_position = Vec3.of(position)
        self._initial_target = Vec3.of(target)

    def reset(self):
        self.camera.set_position(self._initial_position)
        self.camera.set_target(self._initial_target)
        logger.debug("Camera reset to %s -> %s", self._initial_position, self._initial_target)

    # ------------------------------------------------------------
    #  Pointer session
    # ------------------------------------------------------------

    @property
    def is_dragging(self) -> bool:
        return self._dragging

    def on_press(self, x: float, y: float):
        self._last_x, self._last_y = x, y
        self._dragging = True

    def on_drag(self, x: float, y: float):
        if not self._dragging:
            return
        self.rotate_by_pointer(x - self._last_x, y - self._last_y)
        self._last_x, self._last_y = x, y

    def on_release(self):
        self._dragging = False

    def on_scroll(self, delta: float):
        self.zoom(delta)
