"""
SphereGlow - A small Monte Carlo path tracer

Renders a fixed scene of spheres under global illumination:
- Unbiased path tracing with a fixed bounce budget
- Probabilistic diffuse/specular BRDF with roughness
- Optional Russian roulette termination
- ACES filmic tone mapping and sRGB encoding
- Seedable, reproducible sampling
- PPM and PNG output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color
from .ray import Ray
from .sampling import RandomSource
from .materials import MaterialInfo, ScatterResult
from .shapes import Sphere, HitInfo, InvalidGeometry, intersect_sphere, MISS, MIN_RAY_DIST, MAX_RAY_DIST
from .scene import Scene, build_default_scene
from .integrator import PathTracer, TraceSettings
from .tonemapping import (
    aces_film, linear_to_srgb, srgb_to_linear, apply_color_pipeline, to_byte, quantize
)
from .camera import Camera
from .renderer import Renderer, RenderSettings, write_ppm
from .config import ConfigError, load_settings, parse_settings
