"""
Geometric shapes for the path tracer.

Each shape implements the Hittable interface with a `hit` method. The ray
carries its own [t_min, t_max] interval, so hit tests take only the ray.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, Optional
import math

from .vec3 import Vec3, Point3
from .ray import Ray


@dataclass
class HitRecord:
    """Stores information about a ray-object intersection.

    Attributes:
        t: The ray parameter at intersection
        point: The intersection point in world space
        normal: The unit outward surface normal at the intersection
    """
    t: float
    point: Point3
    normal: Vec3


class Hittable(ABC):
    """Abstract base class for all objects that can be hit by rays."""

    @abstractmethod
    def hit(self, ray: Ray) -> Optional[HitRecord]:
        """Test if ray intersects this object within [ray.t_min, ray.t_max].

        Args:
            ray: The ray to test

        Returns:
            HitRecord if intersection found, None otherwise
        """
        pass


class Sphere(Hittable):
    """A sphere defined by center and radius."""

    def __init__(self, center: Point3, radius: float):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (must be positive)
        """
        if radius <= 0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)

    def hit(self, ray: Ray) -> Optional[HitRecord]:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0
        which is the quadratic at² + bt + c = 0.

        The near root is tried first. If it lies beyond t_max the sphere is
        out of range; if it lies before t_min (e.g. the origin is inside the
        sphere) the far root is tried instead.
        """
        delta = ray.origin - self.center
        a = ray.direction.dot(ray.direction)
        b = 2.0 * ray.direction.dot(delta)
        c = delta.dot(delta) - self.radius * self.radius

        discriminant = b * b - 4.0 * a * c
        if discriminant < 0:
            return None

        sqrtd = math.sqrt(discriminant)

        t = (-b - sqrtd) / (2.0 * a)
        if t > ray.t_max:
            return None
        if t < ray.t_min:
            t = (-b + sqrtd) / (2.0 * a)
            if t < ray.t_min or t > ray.t_max:
                return None

        point = ray.at(t)
        return HitRecord(t=t, point=point, normal=(point - self.center) / self.radius)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


class Scene(Hittable):
    """An ordered collection of spheres.

    The scene owns its elements and is read-only while rendering, so it can
    be shared between render threads.
    """

    def __init__(self, objects: Optional[list[Hittable]] = None):
        self.objects: list[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable) -> None:
        """Add an object to the scene."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all objects."""
        self.objects.clear()

    def hit(self, ray: Ray) -> Optional[HitRecord]:
        """Find the closest intersection among all objects.

        Every object is tested with the same ray; a hit replaces the current
        one only when it is strictly closer.
        """
        closest_hit: Optional[HitRecord] = None
        closest_t = ray.t_max

        for obj in self.objects:
            hit_record = obj.hit(ray)
            if hit_record is not None and hit_record.t < closest_t:
                closest_hit = hit_record
                closest_t = hit_record.t

        return closest_hit

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def __repr__(self) -> str:
        return f"Scene({len(self.objects)} objects)"
