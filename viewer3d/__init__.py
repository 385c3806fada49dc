"""Software 3D rendering pipeline for a simple model viewer."""
from .camera import Camera, look_at, perspective
from .config import ViewerConfig
from .errors import InvalidParameterError, ObjReaderError, ViewerError
from .mesh import Mesh, Polygon, load_obj, parse_obj
from .orbit import OrbitController
from .pipeline import RenderStats, lod_stride, project_vertex, render, to_screen
from .rasterizer import clip_line, draw_line, fill_triangle
from .settings import RenderSettings
from .surface import FrameBuffer, Surface
from .transforms import (AxisRotation, CompositeTransform, ModelTransform, SavedTransform,
                         Scale, Transform, Translation)
from .vecmath import Mat4, Vec3, Vec4

__all__ = [
    "Camera", "look_at", "perspective",
    "ViewerConfig",
    "InvalidParameterError", "ObjReaderError", "ViewerError",
    "Mesh", "Polygon", "load_obj", "parse_obj",
    "OrbitController",
    "RenderStats", "lod_stride", "project_vertex", "render", "to_screen",
    "clip_line", "draw_line", "fill_triangle",
    "RenderSettings",
    "FrameBuffer", "Surface",
    "AxisRotation", "CompositeTransform", "ModelTransform", "SavedTransform",
    "Scale", "Transform", "Translation",
    "Mat4", "Vec3", "Vec4",
]
