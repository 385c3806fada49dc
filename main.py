"""
viewer3d entry point.

Usage:
  python main.py [model.obj] [options]

Without a model the demo cube is shown. With --output the frame is
rendered headless to a PNG and no window is opened.

Controls (window):
  Left drag : orbit around the target
  Wheel     : zoom
  WASD/QE   : move camera
  R         : reset camera
  1 / 2 / 3 : toggle fill / wireframe / barycentric shading
  4         : toggle back-face culling
  F2        : screenshot
  ESC       : exit
"""
import argparse
import logging
import sys

from viewer3d.color import parse_hex_color
from viewer3d.config import ViewerConfig
from viewer3d.errors import ViewerError
from viewer3d.log import setup_logging
from viewer3d.mesh import Mesh, load_obj
from viewer3d.settings import RenderSettings
from viewer3d.snapshot import render_snapshot

logger = logging.getLogger("viewer3d.main")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="viewer3d", description="Software-rendered OBJ viewer")
    p.add_argument("model", nargs="?", help="OBJ file to display (default: demo cube)")
    p.add_argument("--width", type=int, default=900)
    p.add_argument("--height", type=int, default=900)
    p.add_argument("--fov", type=float, default=60.0, help="field of view in degrees")
    p.add_argument("--fill-color", default="#D3D3D3")
    p.add_argument("--wire-color", default="#A9A9A9")
    p.add_argument("--bg-color", default="#000000")
    p.add_argument("--no-fill", action="store_true", help="do not fill polygons")
    p.add_argument("--wireframe", action="store_true", help="stroke polygon outlines")
    p.add_argument("--fast-shading", action="store_true",
                   help="interpolate colors along spans instead of per-pixel barycentrics")
    p.add_argument("--cull", action="store_true", help="skip polygons facing away from the camera")
    p.add_argument("--triangulate", action="store_true",
                   help="split n-gons into triangles on load")
    p.add_argument("--output", metavar="PATH", help="render one frame to PATH and exit")
    p.add_argument("--log-level", default="INFO",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file")
    return p


def config_from_args(args) -> ViewerConfig:
    settings = RenderSettings(
        fill_color=parse_hex_color(args.fill_color),
        wireframe_color=parse_hex_color(args.wire_color),
        show_filled=not args.no_fill,
        show_wireframe=args.wireframe,
        barycentric_shading=not args.fast_shading,
        backface_culling=args.cull,
    )
    return ViewerConfig(width=args.width, height=args.height, fov=args.fov,
                        background=parse_hex_color(args.bg_color), render=settings)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    try:
        config = config_from_args(args)
        mesh = load_obj(args.model) if args.model else Mesh.cube()
        if args.triangulate:
            mesh = mesh.triangulated()

        if args.output:
            render_snapshot(mesh, config, args.output)
            return 0

        # pygame is only needed for the window
        from viewer3d.app import Viewer
        Viewer(mesh, config, title=args.model or "demo cube").run()
    except (ViewerError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
