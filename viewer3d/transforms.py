import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .errors import InvalidParameterError
from .vecmath import Mat4, Vec3


# ============================================================
#  Matrix factories
# ============================================================

def translate(tx, ty, tz) -> Mat4:
    """
    Translation matrix.

    Applies: (x, y, z) -> (x + tx, y + ty, z + tz)
    """
    m = Mat4.identity()
    m.m[0][3] = tx
    m.m[1][3] = ty
    m.m[2][3] = tz
    return m

def scale(sx, sy, sz) -> Mat4:
    """
    Scaling matrix.

    Applies: (x, y, z) -> (sx*x, sy*y, sz*z)
    """
    m = Mat4.identity()
    m.m[0][0] = sx
    m.m[1][1] = sy
    m.m[2][2] = sz
    return m

def rotate_x(a) -> Mat4:
    """Rotation around X axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[1][1] = c
    m.m[1][2] = -s
    m.m[2][1] = s
    m.m[2][2] = c
    return m

def rotate_y(a) -> Mat4:
    """Rotation around Y axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][2] = s
    m.m[2][0] = -s
    m.m[2][2] = c
    return m

def rotate_z(a) -> Mat4:
    """Rotation around Z axis by angle a (radians)."""
    c, s = math.cos(a), math.sin(a)
    m = Mat4.identity()
    m.m[0][0] = c
    m.m[0][1] = -s
    m.m[1][0] = s
    m.m[1][1] = c
    return m


class Axis(Enum):
    X = "x"
    Y = "y"
    Z = "z"

    @classmethod
    def parse(cls, value) -> "Axis":
        if isinstance(value, Axis):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidParameterError(f"Unknown axis: {value!r}") from None


_AXIS_ROTATIONS = {Axis.X: rotate_x, Axis.Y: rotate_y, Axis.Z: rotate_z}

def rotate(axis, angle: float) -> Mat4:
    """Rotation around a principal axis by angle (radians)."""
    return _AXIS_ROTATIONS[Axis.parse(axis)](angle)


# ============================================================
#  Transform objects
# ============================================================

class Transform(ABC):
    """
    Anything that produces a 4x4 matrix and can apply it to a point.

    apply() performs the homogeneous divide when |w| is not ~0.
    """

    @abstractmethod
    def matrix(self) -> Mat4:
        ...

    def apply(self, point: Vec3) -> Vec3:
        if point is None:
            raise InvalidParameterError("Point cannot be None")
        return self.matrix().transform_point(Vec3.of(point))


@dataclass(frozen=True)
class Translation(Transform):
    tx: float
    ty: float
    tz: float

    def matrix(self) -> Mat4:
        return translate(self.tx, self.ty, self.tz)


@dataclass(frozen=True)
class Scale(Transform):
    sx: float
    sy: float
    sz: float

    @classmethod
    def uniform(cls, s: float) -> "Scale":
        return cls(s, s, s)

    def matrix(self) -> Mat4:
        return scale(self.sx, self.sy, self.sz)


@dataclass(frozen=True)
class AxisRotation(Transform):
    """
    Rotation by `angle` radians around a principal axis.

    `kind` only records how the rotation was requested: the "quaternion"
    variant builds exactly the same matrix as the plain one.
    """
    axis: Axis
    angle: float
    kind: str = "matrix"

    def __post_init__(self):
        object.__setattr__(self, "axis", Axis.parse(self.axis))

    @classmethod
    def quaternion(cls, axis, angle: float) -> "AxisRotation":
        return cls(axis, angle, kind="quaternion")

    def matrix(self) -> Mat4:
        return rotate(self.axis, self.angle)


class SavedTransform(Transform):
    """Snapshot of an arbitrary matrix, isolated from later edits of the source."""

    def __init__(self, matrix: Mat4):
        if matrix is None:
            raise InvalidParameterError("Matrix cannot be None")
        self._matrix = matrix.copy()

    def matrix(self) -> Mat4:
        return self._matrix.copy()

    def __repr__(self):
        return f"SavedTransform({self._matrix!r})"


class CompositeTransform(Transform):
    """
    Ordered chain of transforms.

    For column vectors the last added transform is applied last:
    a chain [S, T] yields T @ S.
    """

    def __init__(self, *transforms: Transform):
        self.transforms: List[Transform] = []
        for t in transforms:
            self.add(t)

    def add(self, transform: Transform) -> "CompositeTransform":
        if transform is None:
            raise InvalidParameterError("Transformation cannot be None")
        self.transforms.append(transform)
        return self

    def matrix(self) -> Mat4:
        result = Mat4.identity()
        for t in self.transforms:
            result = t.matrix() @ result
        return result


@dataclass
class ModelTransform(Transform):
    """
    Position / rotation / scale of a model in the world.

    rotation holds degrees around X, Y, Z. The model matrix is
    M = T @ (Rx @ Ry @ Rz) @ S, so scale is applied first and translation last.
    """
    position: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    rotation: Vec3 = field(default_factory=lambda: Vec3(0.0, 0.0, 0.0))
    scale: Vec3 = field(default_factory=lambda: Vec3(1.0, 1.0, 1.0))

    def __post_init__(self):
        if self.position is None or self.rotation is None or self.scale is None:
            raise InvalidParameterError("Position, rotation and scale cannot be None")
        self.position = Vec3.of(self.position)
        self.rotation = Vec3.of(self.rotation)
        self.scale = Vec3.of(self.scale)

    def translate(self, delta) -> None:
        self.position = self.position + Vec3.of(delta)

    def rotate(self, delta_degrees) -> None:
        self.rotation = self.rotation + Vec3.of(delta_degrees)

    def rescale(self, factors) -> None:
        f = Vec3.of(factors)
        self.scale = Vec3(self.scale.x * f.x, self.scale.y * f.y, self.scale.z * f.z)

    def reset(self) -> None:
        self.position = Vec3(0.0, 0.0, 0.0)
        self.rotation = Vec3(0.0, 0.0, 0.0)
        self.scale = Vec3(1.0, 1.0, 1.0)

    def matrix(self) -> Mat4:
        rx, ry, rz = (math.radians(a) for a in self.rotation)
        r = rotate_x(rx) @ rotate_y(ry) @ rotate_z(rz)
        p, s = self.position, self.scale
        return translate(p.x, p.y, p.z) @ r @ scale(s.x, s.y, s.z)
