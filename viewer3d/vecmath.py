import math
from dataclasses import dataclass
from typing import List, Optional, Sequence


EPS = 1e-6      # tolerance for camera / projection parameter checks
W_EPS = 1e-7    # below this |w| the perspective divide is skipped


# ============================================================
#  Vectors
# ============================================================

@dataclass(frozen=True)
class Vec3:
    """
    3D vector for positions and directions.

    Frozen: operators return new vectors.
    Vec3.of() accepts any 3-sequence (tuples from config, CLI, tests).
    """
    x: float
    y: float
    z: float

    @staticmethod
    def of(seq: Sequence[float]) -> "Vec3":
        """Build from any (x, y, z) sequence."""
        if isinstance(seq, Vec3):
            return seq
        x, y, z = seq
        return Vec3(float(x), float(y), float(z))

    def __add__(self, o): return Vec3(self.x + o.x, self.y + o.y, self.z + o.z)
    def __sub__(self, o): return Vec3(self.x - o.x, self.y - o.y, self.z - o.z)
    def __mul__(self, k: float): return Vec3(self.x * k, self.y * k, self.z * k)
    def __truediv__(self, k: float): return Vec3(self.x / k, self.y / k, self.z / k)
    def __neg__(self): return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def dot(self, o) -> float:
        """Dot product (scalar product)."""
        return self.x * o.x + self.y * o.y + self.z * o.z

    def cross(self, o):
        """Cross product (vector product)."""
        return Vec3(
            self.y * o.z - self.z * o.y,
            self.z * o.x - self.x * o.z,
            self.x * o.y - self.y * o.x
        )

    def norm(self) -> float:
        """Euclidean length."""
        return math.sqrt(self.dot(self))

    def normalize(self):
        """Return normalized vector (length=1). Zero stays zero."""
        n = self.norm()
        if n <= 1e-12:
            return Vec3(0.0, 0.0, 0.0)
        return self * (1.0 / n)


@dataclass(frozen=True)
class Vec4:
    """
    4D homogeneous vector.
    Used for matrix multiplication in 3D transforms and projections.
    """
    x: float
    y: float
    z: float
    w: float

    def divide(self, d: float) -> "Vec4":
        return Vec4(self.x / d, self.y / d, self.z / d, self.w / d)


def vec3_to_vec4(v: Vec3, w: float = 1.0) -> Vec4:
    """Convert Vec3 to homogeneous Vec4."""
    return Vec4(v.x, v.y, v.z, w)


# ============================================================
#  Matrix
# ============================================================

class Mat4:
    """
    4x4 matrix (row-major, m[row][col]).

    Vectors are columns: v' = M * v, so a combined matrix reads
    right to left, e.g. Projection @ View @ Model.

    Multiplication:
      - Matrix @ Matrix => Mat4
      - Matrix.mul_vec4(Vec4) => Vec4
    """
    __slots__ = ('m',)

    def __init__(self, m: Optional[List[List[float]]] = None):
        self.m = m if m is not None else [[0.0]*4 for _ in range(4)]

    @staticmethod
    def zero():
        return Mat4()

    @staticmethod
    def identity():
        """Create identity matrix."""
        m = Mat4()
        for i in range(4):
            m.m[i][i] = 1.0
        return m

    def copy(self) -> "Mat4":
        return Mat4([row[:] for row in self.m])

    def __repr__(self):
        rows = ", ".join("[" + ", ".join(f"{v:.4f}" for v in row) + "]" for row in self.m)
        return f"Mat4([{rows}])"

    def __getitem__(self, rc):
        r, c = rc
        return self.m[r][c]

    def __setitem__(self, rc, value):
        r, c = rc
        self.m[r][c] = float(value)

    def __eq__(self, o):
        if not isinstance(o, Mat4):
            return NotImplemented
        return self.m == o.m

    def is_close(self, o: "Mat4", tol: float = 1e-6) -> bool:
        return all(abs(self.m[i][j] - o.m[i][j]) <= tol for i in range(4) for j in range(4))

    def __matmul__(self, o: "Mat4") -> "Mat4":
        """Matrix multiplication (Mat4 @ Mat4)."""
        r = Mat4()
        for i in range(4):
            for j in range(4):
                s = 0.0
                for k in range(4):
                    s += self.m[i][k] * o.m[k][j]
                r.m[i][j] = s
        return r

    def mul_vec4(self, v: Vec4) -> Vec4:
        """Multiply matrix by a Vec4 (Mat4 * Vec4)."""
        x = self.m[0][0]*v.x + self.m[0][1]*v.y + self.m[0][2]*v.z + self.m[0][3]*v.w
        y = self.m[1][0]*v.x + self.m[1][1]*v.y + self.m[1][2]*v.z + self.m[1][3]*v.w
        z = self.m[2][0]*v.x + self.m[2][1]*v.y + self.m[2][2]*v.z + self.m[2][3]*v.w
        w = self.m[3][0]*v.x + self.m[3][1]*v.y + self.m[3][2]*v.z + self.m[3][3]*v.w
        return Vec4(x, y, z, w)

    def transform_point(self, p: Vec3) -> Vec3:
        """
        Apply to a point (w=1) and divide by the resulting w.

        When |w| <= W_EPS the divide is skipped and the raw xyz is returned.
        """
        r = self.mul_vec4(vec3_to_vec4(p))
        if abs(r.w) > W_EPS:
            return Vec3(r.x / r.w, r.y / r.w, r.z / r.w)
        return Vec3(r.x, r.y, r.z)

    def transpose(self) -> "Mat4":
        return Mat4([[self.m[j][i] for j in range(4)] for i in range(4)])

    def det3(self) -> float:
        """Determinant of the upper-left 3x3 (rotation/scale) block."""
        m = self.m
        return (m[0][0] * (m[1][1]*m[2][2] - m[1][2]*m[2][1])
                - m[0][1] * (m[1][0]*m[2][2] - m[1][2]*m[2][0])
                + m[0][2] * (m[1][0]*m[2][1] - m[1][1]*m[2][0]))

    def determinant(self) -> float:
        """Full 4x4 determinant by cofactor expansion along the first row."""
        m = self.m
        total = 0.0
        for col in range(4):
            minor = [[m[r][c] for c in range(4) if c != col] for r in range(1, 4)]
            d = (minor[0][0] * (minor[1][1]*minor[2][2] - minor[1][2]*minor[2][1])
                 - minor[0][1] * (minor[1][0]*minor[2][2] - minor[1][2]*minor[2][0])
                 + minor[0][2] * (minor[1][0]*minor[2][1] - minor[1][1]*minor[2][0]))
            total += (-1) ** col * m[0][col] * d
        return total
