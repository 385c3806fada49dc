import math
import time
import unittest
from viewer3d.camera import Camera
from viewer3d.errors import InvalidParameterError
from viewer3d.mesh import Mesh, Polygon
from viewer3d.pipeline import is_front_facing, lod_stride, project_vertex, render, to_screen
from viewer3d.settings import RenderSettings
from viewer3d.surface import FrameBuffer
from viewer3d.transforms import ModelTransform, Translation
from viewer3d.vecmath import Mat4, Vec3

WIREFRAME_ONLY = RenderSettings(show_filled=False, show_wireframe=True)
CULLED_WIREFRAME = RenderSettings(show_filled=False, show_wireframe=True, backface_culling=True)
NOTHING = RenderSettings(show_filled=False, show_wireframe=False)

class RecordingSurface:
    def __init__(self, width=100, height=100):
        self.width = width
        self.height = height
        self.pixels = {}
        self.strokes = []

    def set_pixel(self, x, y, color):
        self.pixels[(x, y)] = color

    def stroke_line(self, x0, y0, x1, y1, color):
        self.strokes.append((x0, y0, x1, y1, color))

def make_camera():
    """Looks down -Z from z=5; with these planes w == 20 for points on z=0."""
    return Camera(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, 0.0), math.pi / 2, 1.0, 1.0, 2.0)

def triangle_mesh(count):
    verts = [Vec3(0.0, 0.0, 0.0), Vec3(-10.0, 0.0, 0.0), Vec3(0.0, 10.0, 0.0)]
    return Mesh(verts, [Polygon((0, 1, 2)) for _ in range(count)])

class TestHelpers(unittest.TestCase):
    def test_lod_stride(self):
        for n, stride in [(0, 1), (5000, 1), (10000, 1), (10001, 2), (50000, 2),
                          (50001, 3), (100000, 3), (100001, 4), (10 ** 7, 4)]:
            self.assertEqual(lod_stride(n), stride, n)

    def test_to_screen(self):
        self.assertEqual(to_screen(0.0, 0.0, 200, 100), (100.0, 50.0))
        self.assertEqual(to_screen(-1.0, 1.0, 200, 100), (0.0, 0.0))
        self.assertEqual(to_screen(1.0, -1.0, 200, 100), (200.0, 100.0))

    def test_project_vertex_skips_divide_for_tiny_w(self):
        m = Mat4.identity()
        m[3, 3] = 0.0
        self.assertEqual(project_vertex(m, Vec3(0.5, 0.5, 0.0), 100, 100), (75.0, 25.0))

    def test_is_front_facing(self):
        self.assertTrue(is_front_facing([(50, 50), (75, 50), (50, 25)]))
        self.assertFalse(is_front_facing([(50, 50), (50, 25), (75, 50)]))
        self.assertFalse(is_front_facing([(0, 0), (5, 5), (10, 10)]))


class TestRender(unittest.TestCase):
    def assert_point(self, got, want):
        self.assertAlmostEqual(got[0], want[0], places=6)
        self.assertAlmostEqual(got[1], want[1], places=6)

    def test_known_triangle_wireframe(self):
        s = RecordingSurface()
        stats = render(s, make_camera(), triangle_mesh(1), settings=WIREFRAME_ONLY)
        self.assertEqual(stats.processed, 1)
        self.assertEqual(s.pixels, {})
        self.assertEqual(len(s.strokes), 3)

        expected = [((50, 50), (75, 50)), ((75, 50), (50, 25)), ((50, 25), (50, 50))]
        for (x0, y0, x1, y1, color), (a, b) in zip(s.strokes, expected):
            self.assert_point((x0, y0), a)
            self.assert_point((x1, y1), b)
            self.assertEqual(color, WIREFRAME_ONLY.wireframe_color)

    def test_model_transform_applied(self):
        s = RecordingSurface()
        render(s, make_camera(), triangle_mesh(1), transform=Translation(-10.0, 0.0, 0.0),
               settings=WIREFRAME_ONLY)
        self.assert_point(s.strokes[0][:2], (75, 50))

        s = RecordingSurface()
        render(s, make_camera(), triangle_mesh(1), transform=ModelTransform(), settings=WIREFRAME_ONLY)
        self.assert_point(s.strokes[0][:2], (50, 50))

    def test_quad_outline_not_fan(self):
        mesh = Mesh(list(Mesh.cube().vertices), [Polygon((0, 1, 2, 3))])
        s = RecordingSurface()
        render(s, make_camera(), mesh, settings=WIREFRAME_ONLY)
        self.assertEqual(len(s.strokes), 4)

    def test_filled_triangle(self):
        fb = FrameBuffer(100, 100)
        render(fb, make_camera(), triangle_mesh(1))
        self.assertEqual(fb.get_pixel(55, 45), (211, 211, 211))
        self.assertEqual(fb.get_pixel(40, 40), (0, 0, 0))

    def test_stride_large_mesh(self):
        s = RecordingSurface()
        stats = render(s, make_camera(), triangle_mesh(60000), settings=NOTHING)
        self.assertEqual(stats.stride, 2)
        self.assertEqual(stats.processed, 30000)

    def test_stride_small_mesh(self):
        s = RecordingSurface()
        stats = render(s, make_camera(), triangle_mesh(5000), settings=NOTHING)
        self.assertEqual(stats.stride, 1)
        self.assertEqual(stats.processed, 5000)

    def test_invalid_polygons_skipped(self):
        mesh = triangle_mesh(1)
        mesh.polygons += [Polygon((0, 1)), Polygon((0, 1, 7)), Polygon((0, -1, 2))]
        s = RecordingSurface()
        stats = render(s, make_camera(), mesh, settings=WIREFRAME_ONLY)
        self.assertEqual(stats.polygon_count, 4)
        self.assertEqual(stats.processed, 1)
        self.assertEqual(stats.skipped, 3)
        self.assertEqual(len(s.strokes), 3)

    def test_invalid_arguments(self):
        mesh = triangle_mesh(1)
        with self.assertRaises(InvalidParameterError):
            render(None, make_camera(), mesh)
        with self.assertRaises(InvalidParameterError):
            render(RecordingSurface(), None, mesh)
        with self.assertRaises(InvalidParameterError):
            render(RecordingSurface(), make_camera(), None)
        with self.assertRaises(InvalidParameterError):
            render(RecordingSurface(), make_camera(), mesh, width=0)

    def test_backface_culling(self):
        mesh = triangle_mesh(1)
        mesh.polygons.append(Polygon((0, 2, 1)))
        s = RecordingSurface()
        stats = render(s, make_camera(), mesh, settings=CULLED_WIREFRAME)
        self.assertEqual(stats.processed, 1)
        self.assertEqual(stats.culled, 1)
        self.assertEqual(len(s.strokes), 3)
        self.assert_point(s.strokes[1][:2], (75, 50))

    def test_cube_shows_only_the_near_face(self):
        s = RecordingSurface()
        stats = render(s, make_camera(), Mesh.cube(), settings=CULLED_WIREFRAME)
        self.assertEqual((stats.processed, stats.culled), (1, 5))
        self.assertEqual(len(s.strokes), 4)

        s = RecordingSurface()
        stats = render(s, make_camera(), Mesh.cube(), settings=WIREFRAME_ONLY)
        self.assertEqual((stats.processed, stats.culled), (6, 0))
        self.assertEqual(len(s.strokes), 24)

    def test_culled_polygons_are_not_filled(self):
        mesh = Mesh(triangle_mesh(1).vertices, [Polygon((0, 2, 1))])
        fb = FrameBuffer(100, 100)
        render(fb, make_camera(), mesh, settings=RenderSettings(backface_culling=True))
        self.assertFalse(fb.pixels.any())
        render(fb, make_camera(), mesh)
        self.assertEqual(fb.get_pixel(55, 45), (211, 211, 211))

    def test_wireframe_vertex_next_to_camera(self):
        # w of the middle vertex is ~2e-6, so it projects ~1e8 pixels away
        mesh = Mesh([Vec3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 4.99999), Vec3(0.0, 1.0, 0.0)],
                    [Polygon((0, 1, 2))])
        camera = Camera(Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, 0.0), 60.0, 1.0, 0.1, 100.0)
        fb = FrameBuffer(200, 200)
        start = time.perf_counter()
        render(fb, camera, mesh, settings=WIREFRAME_ONLY)
        self.assertLess(time.perf_counter() - start, 1.0)
        self.assertEqual(fb.get_pixel(100, 100), (169, 169, 169))

    def test_logs_stats(self):
        with self.assertLogs("viewer3d.pipeline", level="DEBUG") as cm:
            render(RecordingSurface(), make_camera(), triangle_mesh(2), settings=NOTHING)
        self.assertIn("2/2", cm.output[0])

if __name__ == '__main__':
    unittest.main()
