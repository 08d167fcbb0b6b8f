"""
Ray class for representing rays in 3D space.

A ray is defined by an origin point, a direction vector, and the interval
[t_min, t_max] in which intersections are accepted.
Ray(t) = origin + t * direction
"""

from __future__ import annotations
import math
from .vec3 import Vec3, Point3


class Ray:
    """A ray with origin, direction and a valid parameter range.

    The parametric form is: P(t) = origin + t * direction.
    Distances are multiples of the direction length, so they only equal
    world distances when the direction is normalized.
    """

    __slots__ = ('origin', 'direction', 't_min', 't_max')

    def __init__(
        self,
        origin: Point3,
        direction: Vec3,
        t_min: float = 0.0,
        t_max: float = math.inf
    ):
        """Create a ray.

        Args:
            origin: The starting point of the ray
            direction: The direction vector (normalized in practice)
            t_min: Smallest accepted intersection distance
            t_max: Largest accepted intersection distance

        The interval is not checked here; intersection tests enforce it.
        """
        self.origin = origin
        self.direction = direction
        self.t_min = t_min
        self.t_max = t_max

    def at(self, t: float) -> Point3:
        """Get the point along the ray at parameter t.

        Args:
            t: The parameter value (distance if direction is normalized)

        Returns:
            The point at origin + t * direction
        """
        return self.origin + self.direction * t

    def __repr__(self) -> str:
        return (
            f"Ray(origin={self.origin}, direction={self.direction}, "
            f"t_min={self.t_min}, t_max={self.t_max})"
        )
