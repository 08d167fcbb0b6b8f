"""
Camera module for generating primary rays.

The camera is a fixed pinhole at the world origin looking down -Z, with
the view plane at z = -1 spanning x in [-aspect, aspect] and y in [-1, 1].
"""

from __future__ import annotations
from .vec3 import Vec3, Point3
from .ray import Ray


class Camera:
    """A pinhole camera with a fixed, axis-aligned frustum."""

    def __init__(self, aspect_ratio: float = 16.0 / 9.0):
        """Create a camera.

        Args:
            aspect_ratio: Width / Height ratio
        """
        if aspect_ratio <= 0:
            raise ValueError(f"Aspect ratio must be positive, got {aspect_ratio}")

        self.aspect_ratio = float(aspect_ratio)
        self.origin = Point3(0.0, 0.0, 0.0)
        self.lower_left_corner = Point3(-self.aspect_ratio, -1.0, -1.0)
        self.horizontal = Vec3(2.0 * self.aspect_ratio, 0.0, 0.0)
        self.vertical = Vec3(0.0, 2.0, 0.0)

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate a ray for the given UV coordinates on the image plane.

        Args:
            u: Horizontal coordinate [0, 1] (0 = left, 1 = right)
            v: Vertical coordinate [0, 1] (0 = bottom, 1 = top)

        Returns:
            A ray from the camera through the specified point
        """
        direction = (
            self.lower_left_corner
            + self.horizontal * u
            + self.vertical * v
            - self.origin
        )
        return Ray(self.origin, direction.normalize())

    def __repr__(self) -> str:
        return f"Camera(aspect_ratio={self.aspect_ratio:.4f})"
