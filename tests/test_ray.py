"""Tests for Ray class."""

import pytest
import math
from luma.vec3 import Vec3, Point3
from luma.ray import Ray


class TestRayCreation:
    """Test Ray construction."""

    def test_default_interval(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        assert ray.t_min == 0.0
        assert ray.t_max == math.inf

    def test_with_interval(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0), 0.5, 10.0)
        assert ray.t_min == 0.5
        assert ray.t_max == 10.0

    def test_interval_not_validated(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0), 5.0, 1.0)
        assert ray.t_min > ray.t_max

    def test_stores_origin(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.origin == origin

    def test_stores_direction(self):
        direction = Vec3(1, 2, 3)
        ray = Ray(Point3(0, 0, 0), direction)
        assert ray.direction == direction


class TestRayAt:
    """Test Ray.at() method."""

    def test_at_zero(self):
        origin = Point3(1, 2, 3)
        ray = Ray(origin, Vec3(1, 0, 0))
        assert ray.at(0) == origin

    def test_at_positive(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 0, 0))
        point = ray.at(5)
        assert point.x == 5
        assert point.y == 0
        assert point.z == 0

    def test_at_scales_with_direction_length(self):
        ray = Ray(Point3(0, 0, 0), Vec3(2, 0, 0))
        assert ray.at(3).x == 6

    def test_at_with_diagonal(self):
        ray = Ray(Point3(0, 0, 0), Vec3(1, 1, 1))
        point = ray.at(2)
        assert point.x == 2
        assert point.y == 2
        assert point.z == 2


class TestRayRepr:
    """Test Ray string representation."""

    def test_repr(self):
        s = repr(Ray(Point3(1, 2, 3), Vec3(0, 1, 0)))
        assert "Ray" in s
        assert "origin" in s
        assert "direction" in s
