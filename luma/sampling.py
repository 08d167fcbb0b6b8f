"""
Sampling and random number utilities.

Implements:
- Cosine-weighted and uniform hemisphere direction sampling
- Wang hash for decorrelating per-pixel sequence indices
- Sobol (0,2)-sequence for low-discrepancy 2D samples
- Sampler objects owned by the caller (one per unit of work)

Samplers are interchangeable: the radiance estimator only asks for a
random scalar or a 2D sample at an index.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Tuple
import math

import numpy as np

from .vec3 import Vec3

_MASK32 = 0xFFFFFFFF
_INV_2_32 = 1.0 / 4294967296.0


def _unit_sphere_point(u1: float, u2: float) -> Vec3:
    """Map two uniforms to a point on the unit sphere."""
    z = 1.0 - 2.0 * u1
    r = math.sqrt(max(0.0, 1.0 - z * z))
    phi = 2.0 * math.pi * u2
    return Vec3(r * math.cos(phi), r * math.sin(phi), z)


def cosine_sample_hemisphere(u1: float, u2: float, normal: Vec3) -> Tuple[Vec3, float]:
    """Sample a direction about the normal with density cos(theta) / pi.

    Uses the "sphere tangent to the surface" construction: a point on the
    unit sphere offset by the normal, then renormalized. No orthonormal
    basis is needed.

    Args:
        u1, u2: Independent uniforms in [0, 1)
        normal: Unit surface normal

    Returns:
        Tuple of (unit direction, pdf)
    """
    offset = normal + _unit_sphere_point(u1, u2)

    # Catch degenerate direction (sphere point opposite the normal)
    if offset.near_zero():
        return normal, 1.0 / math.pi

    direction = offset.normalize()
    return direction, normal.dot(direction) / math.pi


def uniform_sample_hemisphere(u1: float, u2: float, normal: Vec3) -> Tuple[Vec3, float]:
    """Sample a direction uniformly over the hemisphere about the normal.

    Returns:
        Tuple of (unit direction, pdf) with pdf = 1 / (2 pi)
    """
    direction = _unit_sphere_point(u1, u2)
    cos_theta = direction.dot(normal)
    if cos_theta < 0.0:
        direction = -direction
    elif cos_theta == 0.0:
        # Tangent to the surface
        direction = normal
    return direction, 1.0 / (2.0 * math.pi)


HEMISPHERE_SAMPLERS = {
    'cosine': cosine_sample_hemisphere,
    'uniform': uniform_sample_hemisphere,
}


def wang_hash(seed: int) -> int:
    """Thomas Wang's 32-bit integer hash."""
    seed &= _MASK32
    seed = (seed ^ 61) ^ (seed >> 16)
    seed = (seed * 9) & _MASK32
    seed ^= seed >> 4
    seed = (seed * 0x27d4eb2d) & _MASK32
    seed ^= seed >> 15
    return seed


def sobol_2d(index: int) -> Tuple[float, float]:
    """Return the first two dimensions of the Sobol sequence at index.

    The first dimension is the base-2 radical inverse (van der Corput);
    the second uses the direction numbers of the polynomial x + 1.
    Both values lie in [0, 1).
    """
    a = index & _MASK32
    x = 0
    y = 0
    v0 = 1 << 31
    v1 = 1 << 31
    while a:
        if a & 1:
            x ^= v0
            y ^= v1
        a >>= 1
        v0 >>= 1
        v1 ^= v1 >> 1
    return x * _INV_2_32, y * _INV_2_32


class Sampler(ABC):
    """Source of uniform samples in [0, 1).

    A sampler holds mutable generator state and must not be shared
    between threads; the renderer creates one per image row.
    """

    @abstractmethod
    def random(self) -> float:
        """Return one uniform sample in [0, 1)."""
        pass

    @abstractmethod
    def sample_2d(self, index: int, dimension: int = 0) -> Tuple[float, float]:
        """Return a pair of uniform samples in [0, 1).

        Args:
            index: Sequence index of the current pixel sample
            dimension: Which decorrelated 2D stream to draw from (e.g. bounce)
        """
        pass


class RandomSampler(Sampler):
    """Pseudo-random sampler backed by a numpy Generator."""

    def __init__(self, seed=None):
        """Create a sampler.

        Args:
            seed: Anything np.random.default_rng accepts (int, sequence, None)
        """
        self.rng = np.random.default_rng(seed)

    def random(self) -> float:
        return float(self.rng.random())

    def sample_2d(self, index: int, dimension: int = 0) -> Tuple[float, float]:
        u1, u2 = self.rng.random(2)
        return float(u1), float(u2)


class SobolSampler(Sampler):
    """Quasi-random sampler over the 2D Sobol sequence.

    Each dimension gets its own Cranley-Patterson rotation so that
    successive bounces of one path do not reuse the same point.
    Pixel jitter (random()) stays pseudo-random.
    """

    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)
        self._seed = int(np.random.SeedSequence(seed).generate_state(1)[0])
        self._shifts: dict[int, Tuple[float, float]] = {}

    def _shift(self, dimension: int) -> Tuple[float, float]:
        shift = self._shifts.get(dimension)
        if shift is None:
            h1 = wang_hash(self._seed ^ wang_hash(2 * dimension + 1))
            h2 = wang_hash(h1 ^ 0x9e3779b9)
            shift = (h1 * _INV_2_32, h2 * _INV_2_32)
            self._shifts[dimension] = shift
        return shift

    def random(self) -> float:
        return float(self.rng.random())

    def sample_2d(self, index: int, dimension: int = 0) -> Tuple[float, float]:
        x, y = sobol_2d(index)
        sx, sy = self._shift(dimension)
        return (x + sx) % 1.0, (y + sy) % 1.0


SAMPLERS = {
    'random': RandomSampler,
    'sobol': SobolSampler,
}


def create_sampler(kind: str = 'random', seed=None) -> Sampler:
    """Create a sampler by name.

    Args:
        kind: 'random' or 'sobol'
        seed: Seed passed to the sampler

    Returns:
        Configured Sampler instance
    """
    kind = kind.lower()
    if kind not in SAMPLERS:
        raise ValueError(f"Unknown sampler: {kind}")
    return SAMPLERS[kind](seed)
