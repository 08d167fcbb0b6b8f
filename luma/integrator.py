"""
Radiance estimation by recursive Monte Carlo path tracing.

Implements the one-sample estimator of the rendering equation for a single
diffuse (Lambertian) material lit only by the sky gradient:

    L_o = f_r * L_i * cos(theta) / pdf

plus two diagnostic shading modes (ambient occlusion and surface normals).
"""

from __future__ import annotations
from enum import Enum
from typing import Callable, Optional, Tuple
import math

from .vec3 import Vec3, Color
from .ray import Ray
from .shapes import Hittable
from .sampling import Sampler, HEMISPHERE_SAMPLERS
from .environment import GradientBackground

# Minimum distance for bounce rays, suppresses self-intersection
RAY_OFFSET = 1e-4

DEFAULT_ALBEDO = Color(0.75, 0.75, 0.75)

BLACK = Color(0.0, 0.0, 0.0)


class ShadingMode(Enum):
    """What the estimator computes at a hit point."""

    RADIANCE = "radiance"  # Global illumination
    AMBIENT_OCCLUSION = "ambient_occlusion"  # Visibility of the sky
    NORMALS = "normals"  # World-space normals as colors


HemisphereSampler = Callable[[float, float, Vec3], Tuple[Vec3, float]]


class RadianceEstimator:
    """Recursive radiance estimator for a single diffuse material."""

    def __init__(
        self,
        albedo: Color = DEFAULT_ALBEDO,
        background: Optional[GradientBackground] = None,
        hemisphere: str = 'cosine',
        ray_offset: float = RAY_OFFSET,
        mode: ShadingMode = ShadingMode.RADIANCE
    ):
        """Create an estimator.

        Args:
            albedo: sRGB material color (linearized here)
            background: Color source for escaping rays (sky gradient if None)
            hemisphere: Bounce direction sampler, 'cosine' or 'uniform'
            ray_offset: t_min for bounce rays
            mode: Shading mode
        """
        if hemisphere not in HEMISPHERE_SAMPLERS:
            raise ValueError(f"Unknown hemisphere sampler: {hemisphere}")

        self.albedo = albedo.linearize()
        self.brdf = self.albedo / math.pi
        self.background = background if background is not None else GradientBackground()
        self.sample_hemisphere: HemisphereSampler = HEMISPHERE_SAMPLERS[hemisphere]
        self.ray_offset = ray_offset
        self.mode = ShadingMode(mode)

    def estimate(
        self,
        ray: Ray,
        scene: Hittable,
        depth: int,
        sampler: Sampler,
        index: int = 0
    ) -> Color:
        """Estimate the radiance arriving along a ray.

        Args:
            ray: The ray to trace
            scene: The scene to trace against
            depth: Remaining bounces; zero returns black
            sampler: Source of bounce samples
            index: Sequence index of the current pixel sample

        Returns:
            Linear radiance along the ray
        """
        if depth == 0:
            return BLACK

        hit = scene.hit(ray)
        if hit is None:
            return self.background.sample(ray.direction)

        if self.mode is ShadingMode.NORMALS:
            return ((hit.normal + 1.0) * 0.5).linearize()

        u1, u2 = sampler.sample_2d(index, depth)
        direction, pdf = self.sample_hemisphere(u1, u2, hit.normal)
        cos_theta = hit.normal.dot(direction)
        assert cos_theta > 0.0, "bounce direction below the surface"

        bounce = Ray(hit.point, direction, self.ray_offset)

        if self.mode is ShadingMode.AMBIENT_OCCLUSION:
            visibility = 0.0 if scene.hit(bounce) is not None else 1.0
            value = visibility * cos_theta / math.pi / pdf
            return Color(value, value, value)

        incoming = self.estimate(bounce, scene, depth - 1, sampler, index)
        return self.brdf * incoming * (cos_theta / pdf)


DEFAULT_ESTIMATOR = RadianceEstimator()


def estimate_radiance(
    ray: Ray,
    scene: Hittable,
    depth: int,
    sampler: Sampler,
    index: int = 0
) -> Color:
    """Estimate radiance along a ray with the default diffuse material and sky."""
    return DEFAULT_ESTIMATOR.estimate(ray, scene, depth, sampler, index)
