import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Union

from .errors import ObjReaderError
from .vecmath import Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Polygon:
    """
    Single face: 0-based indices into Mesh.vertices, in winding order.

    Triangles take the fast path in the renderer; larger polygons are
    fan-triangulated from their first vertex.
    """
    vertex_indices: Tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "vertex_indices", tuple(int(i) for i in self.vertex_indices))

    def __len__(self):
        return len(self.vertex_indices)


@dataclass
class Mesh:
    vertices: List[Vec3] = field(default_factory=list)
    polygons: List[Polygon] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def polygon_count(self) -> int:
        return len(self.polygons)

    def vertex(self, i: int) -> Vec3:
        return self.vertices[i]

    def polygon(self, i: int) -> Polygon:
        return self.polygons[i]

    def triangulated(self) -> "Mesh":
        """
        Convert every convex polygon (3..N vertices) into triangles using a fan:
          (0,1,2), (0,2,3), ..., (0,N-2,N-1)
        Polygons with fewer than 3 vertices are dropped.
        """
        tris = []
        for poly in self.polygons:
            idx = poly.vertex_indices
            for i in range(1, len(idx) - 1):
                tris.append(Polygon((idx[0], idx[i], idx[i + 1])))
        return Mesh(list(self.vertices), tris)

    @classmethod
    def cube(cls) -> "Mesh":
        """Unit cube centered at the origin, six quads."""
        vertices = [Vec3(*v) for v in (
            (-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1),
            (-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1),
        )]
        faces = [
            (0, 1, 2, 3),  # back (z=-1)
            (5, 4, 7, 6),  # front (z=+1)
            (4, 0, 3, 7),  # left
            (1, 5, 6, 2),  # right
            (3, 2, 6, 7),  # top
            (4, 5, 1, 0),  # bottom
        ]
        return cls(vertices, [Polygon(f) for f in faces])


# ============================================================
#  OBJ loader
# ============================================================

def _parse_index(token: str, count: int, line_no: int) -> int:
    """OBJ index -> 0-based. Negative indices count back from the last vertex."""
    try:
        i = int(token)
    except ValueError:
        raise ObjReaderError(f"Failed to parse int value {token!r}.", line_no) from None
    if i > 0:
        return i - 1
    if i < 0:
        return count + i
    raise ObjReaderError("Index 0 is not valid in OBJ.", line_no)


def parse_obj(text: str) -> Mesh:
    """
    Minimal OBJ parser.

    Supported:
      v  x y z
      f  v v v ...  /  v/vt v/vt ...  /  v/vt/vn ...  (any vertex count >= 3)

    Everything else (vt, vn, groups, materials) is skipped.
    """
    if text is None or not text.strip():
        raise ObjReaderError("File content is empty.", 0)

    mesh = Mesh()
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = line.split()
        token, args = parts[0], parts[1:]

        if token == "v":
            if len(args) < 3:
                raise ObjReaderError("Too few vertex arguments.", line_no)
            try:
                mesh.vertices.append(Vec3(float(args[0]), float(args[1]), float(args[2])))
            except ValueError:
                raise ObjReaderError("Failed to parse float value.", line_no) from None

        elif token == "f":
            if len(args) < 3:
                raise ObjReaderError("Too few face arguments.", line_no)
            idx = [_parse_index(a.split("/")[0], len(mesh.vertices), line_no) for a in args]
            for i in idx:
                if not 0 <= i < len(mesh.vertices):
                    raise ObjReaderError(f"Vertex index {i + 1} out of range.", line_no)
            mesh.polygons.append(Polygon(idx))

    if not mesh.vertices or not mesh.polygons:
        raise ObjReaderError("Model has no vertices or no faces.", line_no)
    return mesh


def load_obj(path: Union[str, Path]) -> Mesh:
    """Read and parse an OBJ file."""
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        mesh = parse_obj(f.read())
    logger.info("Loaded %s: %d vertices, %d polygons", path, mesh.vertex_count, mesh.polygon_count)
    return mesh
