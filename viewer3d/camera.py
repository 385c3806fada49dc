import logging
import math

from .errors import InvalidParameterError
from .vecmath import EPS, Mat4, Vec3

logger = logging.getLogger(__name__)

WORLD_UP = Vec3(0.0, 1.0, 0.0)


# ============================================================
#  Projection
# ============================================================

def perspective(fov, aspect_ratio, near_plane, far_plane) -> Mat4:
    """
    Perspective projection matrix.

    Parameters:
      fov          - field of view. Values above 10 are taken to be degrees
                     and converted, anything else is radians. The threshold
                     is a convention of the API, keep it.
      aspect_ratio - width / height
      near_plane   - near plane distance
      far_plane    - far plane distance

    Raises InvalidParameterError when tan(fov/2), the aspect ratio or
    |far - near| is below EPS.

    Notes:
      - The view matrix looks down -Z, and this matrix yields w > 0
        for points in front of the camera, growing with depth.
    """
    fov_rad = math.radians(fov) if fov > 10.0 else fov
    t = math.tan(fov_rad * 0.5)

    if t < EPS or aspect_ratio < EPS or abs(far_plane - near_plane) < EPS:
        raise InvalidParameterError(
            f"Invalid perspective parameters: fov={fov}, aspect={aspect_ratio}, "
            f"near={near_plane}, far={far_plane}")

    m = Mat4.zero()
    m.m[0][0] = 1.0 / (t * aspect_ratio)
    m.m[1][1] = 1.0 / t
    m.m[2][2] = (far_plane + near_plane) / (far_plane - near_plane)
    m.m[2][3] = 1.0
    m.m[3][2] = -2.0 * far_plane * near_plane / (far_plane - near_plane)
    return m


# ============================================================
#  View
# ============================================================

def look_at(eye: Vec3, target: Vec3, up: Vec3 = WORLD_UP) -> Mat4:
    """
    World -> camera transform.

    eye maps to the origin, target lands on the negative Z axis.
    Degenerate inputs fall back to identity instead of raising:
      - eye and target coincide
      - forward is parallel to up, and the alternate up is parallel too
    """
    eye, target, up = Vec3.of(eye), Vec3.of(target), Vec3.of(up)

    forward = target - eye
    if forward.norm() < EPS:
        return Mat4.identity()
    forward = forward.normalize()

    right = up.cross(forward)
    if right.norm() < EPS:
        up = Vec3(0.0, 0.0, 1.0) if abs(forward.y) > 0.9 else Vec3(0.0, 1.0, 0.0)
        right = up.cross(forward)
        if right.norm() < EPS:
            return Mat4.identity()
    right = right.normalize()

    true_up = forward.cross(right).normalize()

    rotation = Mat4([
        [right.x, right.y, right.z, 0.0],
        [true_up.x, true_up.y, true_up.z, 0.0],
        [-forward.x, -forward.y, -forward.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ])

    translation = Mat4([
        [1.0, 0.0, 0.0, -eye.x],
        [0.0, 1.0, 0.0, -eye.y],
        [0.0, 0.0, 1.0, -eye.z],
        [0.0, 0.0, 0.0, 1.0],
    ])

    return rotation @ translation


# ============================================================
#  Camera
# ============================================================

class Camera:
    """
    Virtual camera: position, target and perspective parameters.

    View and projection matrices are derived on every query and never
    stored, so a setter is visible to the very next matrix call.
    Vectors are immutable Vec3, so getters cannot leak camera state.
    """

    def __init__(self, position, target, fov: float, aspect_ratio: float,
                 near_plane: float, far_plane: float):
        if position is None or target is None:
            raise InvalidParameterError("Camera position and target cannot be None")
        self._position = Vec3.of(position)
        self._target = Vec3.of(target)
        self._fov = fov
        self._aspect_ratio = aspect_ratio
        self._near_plane = near_plane
        self._far_plane = far_plane

    def __repr__(self):
        return (f"Camera(position={self._position}, target={self._target}, "
                f"fov={self._fov}, aspect_ratio={self._aspect_ratio:.3f})")

    @property
    def position(self) -> Vec3:
        return self._position

    @property
    def target(self) -> Vec3:
        return self._target

    @property
    def fov(self) -> float:
        return self._fov

    @property
    def aspect_ratio(self) -> float:
        return self._aspect_ratio

    @property
    def near_plane(self) -> float:
        return self._near_plane

    @property
    def far_plane(self) -> float:
        return self._far_plane

    def set_position(self, position) -> None:
        if position is None:
            raise InvalidParameterError("Camera position cannot be None")
        self._position = Vec3.of(position)

    def set_target(self, target) -> None:
        if target is None:
            raise InvalidParameterError("Camera target cannot be None")
        self._target = Vec3.of(target)

    def move_position(self, delta) -> None:
        self._position = self._position + Vec3.of(delta)

    def move_target(self, delta) -> None:
        self._target = self._target + Vec3.of(delta)

    def set_aspect_ratio(self, aspect_ratio: float) -> None:
        self._aspect_ratio = aspect_ratio

    def view_matrix(self) -> Mat4:
        return look_at(self._position, self._target)

    def projection_matrix(self) -> Mat4:
        return perspective(self._fov, self._aspect_ratio, self._near_plane, self._far_plane)
