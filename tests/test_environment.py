"""Tests for the sky gradient background."""

import pytest

from luma.vec3 import Vec3, Color
from luma.environment import GradientBackground


class TestGradientBackground:
    """Test GradientBackground sampling."""

    def test_colors_are_linearized(self):
        bg = GradientBackground()
        assert abs(bg.zenith_color.x - 0.5 ** 2.2) < 1e-12
        assert abs(bg.zenith_color.y - 0.7 ** 2.2) < 1e-12
        assert bg.zenith_color.z == 1.0
        assert bg.horizon_color == Color(1, 1, 1)

    def test_zenith(self):
        c = GradientBackground().sample(Vec3(0, 1, 0))
        assert abs(c.x - 0.5 ** 2.2) < 1e-12
        assert abs(c.y - 0.7 ** 2.2) < 1e-12
        assert abs(c.z - 1.0) < 1e-12

    def test_straight_down_is_horizon_color(self):
        c = GradientBackground().sample(Vec3(0, -1, 0))
        assert c.x == 1.0
        assert c.y == 1.0
        assert c.z == 1.0

    def test_midpoint(self):
        bg = GradientBackground(Color(0, 0, 0), Color(1, 1, 1), linearize=False)
        c = bg.sample(Vec3(1, 0, 0))
        assert abs(c.x - 0.5) < 1e-12

    def test_monotonic_in_height(self):
        bg = GradientBackground()
        low = bg.sample(Vec3(0, -0.5, -1).normalize())
        high = bg.sample(Vec3(0, 0.5, -1).normalize())
        # Red fades toward the zenith
        assert high.x < low.x
