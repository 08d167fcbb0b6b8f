"""
Luma - A Python Monte Carlo Path Tracer

A small CPU path tracer with support for:
- Global illumination from a sky gradient (recursive path tracing)
- Cosine-weighted importance sampling of a diffuse BRDF
- Pseudo-random and Sobol quasi-random sampling
- Multi-threaded scanline rendering with reproducible output
- YAML/JSON scene descriptions and PNG output
"""

__version__ = "0.1.0"
__author__ = "Luma Team"

from .vec3 import Vec3, Point3, Color, dot, lerp, clamp
from .ray import Ray
from .sampling import (
    Sampler, RandomSampler, SobolSampler, create_sampler,
    cosine_sample_hemisphere, uniform_sample_hemisphere, wang_hash, sobol_2d
)
from .shapes import HitRecord, Hittable, Sphere, Scene
from .camera import Camera
from .environment import GradientBackground
from .integrator import RadianceEstimator, ShadingMode, estimate_radiance
from .image import Image
from .renderer import Renderer, RenderSettings, RenderCancelled, get_platform_info
from .scene_parser import (
    SceneParser, SceneParseError, OutputSettings,
    default_scene, load_scene, parse_scene
)
