import os
import tempfile
import unittest
from viewer3d.errors import ObjReaderError
from viewer3d.mesh import Mesh, Polygon, load_obj, parse_obj
from viewer3d.vecmath import Vec3

QUAD_OBJ = """# a unit quad
v 0 0 0
v 1 0 0
v 1 1 0
v 0 1 0
vt 0 0
vn 0 0 1
f 1/1/1 2/1/1 3/1/1 4/1/1
"""

class TestParseObj(unittest.TestCase):
    def test_vertices_and_faces(self):
        mesh = parse_obj(QUAD_OBJ)
        self.assertEqual(mesh.vertex_count, 4)
        self.assertEqual(mesh.polygon_count, 1)
        self.assertEqual(mesh.vertex(2), Vec3(1.0, 1.0, 0.0))
        self.assertEqual(mesh.polygon(0).vertex_indices, (0, 1, 2, 3))

    def test_face_token_forms(self):
        text = "v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 3\nf 1/1 2/2 3/3\nf 1//1 2//1 3//1\n"
        mesh = parse_obj(text)
        self.assertEqual([p.vertex_indices for p in mesh.polygons], [(0, 1, 2)] * 3)

    def test_negative_indices(self):
        mesh = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n")
        self.assertEqual(mesh.polygon(0).vertex_indices, (0, 1, 2))

    def test_empty_content(self):
        for text in ("", "   \n\n"):
            with self.assertRaises(ObjReaderError) as cm:
                parse_obj(text)
            self.assertEqual(cm.exception.line, 0)

    def test_errors_carry_line(self):
        cases = [
            ("v 0 0 0\nv 1 x 0\n", 2),
            ("v 0 0\n", 1),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\n\nf 1 2\n", 5),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 9\n", 4),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n", 4),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 a 3\n", 4),
        ]
        for text, line in cases:
            with self.assertRaises(ObjReaderError) as cm:
                parse_obj(text)
            self.assertEqual(cm.exception.line, line, text)
            self.assertIn(f"line {line}", str(cm.exception))

    def test_is_value_error(self):
        with self.assertRaises(ValueError):
            parse_obj("")

    def test_load_obj(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "quad.obj")
            with open(path, "w") as f:
                f.write(QUAD_OBJ)
            mesh = load_obj(path)
        self.assertEqual(mesh.polygon_count, 1)


class TestMesh(unittest.TestCase):
    def test_cube(self):
        cube = Mesh.cube()
        self.assertEqual(cube.vertex_count, 8)
        self.assertEqual(cube.polygon_count, 6)
        self.assertTrue(all(len(p) == 4 for p in cube.polygons))

    def test_triangulated(self):
        tris = Mesh.cube().triangulated()
        self.assertEqual(tris.polygon_count, 12)
        self.assertEqual(tris.polygon(0).vertex_indices, (0, 1, 2))
        self.assertEqual(tris.polygon(1).vertex_indices, (0, 2, 3))

    def test_triangulated_drops_short_polygons(self):
        mesh = Mesh([Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0)], [Polygon((0, 1))])
        self.assertEqual(mesh.triangulated().polygon_count, 0)

if __name__ == '__main__':
    unittest.main()
