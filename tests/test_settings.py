import unittest
from viewer3d.color import DARK_GRAY, LIGHT_GRAY
from viewer3d.errors import InvalidParameterError
from viewer3d.settings import RenderSettings

class TestRenderSettings(unittest.TestCase):
    def test_defaults(self):
        s = RenderSettings()
        self.assertEqual(s.fill_color, LIGHT_GRAY)
        self.assertEqual(s.wireframe_color, DARK_GRAY)
        self.assertTrue(s.show_filled)
        self.assertFalse(s.show_wireframe)
        self.assertTrue(s.barycentric_shading)
        self.assertFalse(s.backface_culling)

    def test_from_mapping(self):
        s = RenderSettings.from_mapping({"fill_color": "#FF0000", "wireframe_color": [0, 0, 1],
                                         "show_wireframe": True, "backface_culling": True})
        self.assertEqual(s.fill_color, (1.0, 0.0, 0.0))
        self.assertEqual(s.wireframe_color, (0.0, 0.0, 1.0))
        self.assertTrue(s.show_wireframe)
        self.assertTrue(s.show_filled)
        self.assertTrue(s.backface_culling)

    def test_unknown_keys_warn(self):
        with self.assertLogs("viewer3d.settings", level="WARNING") as cm:
            s = RenderSettings.from_mapping({"glow": True})
        self.assertEqual(s, RenderSettings())
        self.assertIn("glow", cm.output[0])

    def test_bad_color(self):
        with self.assertRaises(InvalidParameterError):
            RenderSettings.from_mapping({"fill_color": "nope"})

if __name__ == '__main__':
    unittest.main()
