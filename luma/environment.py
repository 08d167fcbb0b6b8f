"""
Background lighting for rays that escape the scene.

The only light source is a vertical sky gradient; colors are authored in
sRGB and linearized once at construction.
"""

from __future__ import annotations

from .vec3 import Vec3, Color, lerp


class GradientBackground:
    """A vertical gradient from horizon (straight down) to zenith (straight up)."""

    def __init__(
        self,
        horizon_color: Color = Color(1.0, 1.0, 1.0),
        zenith_color: Color = Color(0.5, 0.7, 1.0),
        linearize: bool = True
    ):
        """Create a gradient background.

        Args:
            horizon_color: Color at direction.y == -1
            zenith_color: Color at direction.y == +1
            linearize: Treat the colors as sRGB and convert them to linear
        """
        if linearize:
            horizon_color = horizon_color.linearize()
            zenith_color = zenith_color.linearize()
        self.horizon_color = horizon_color
        self.zenith_color = zenith_color

    def sample(self, direction: Vec3) -> Color:
        """Get the background color for a (unit) direction."""
        t = 0.5 * (direction.y + 1.0)
        return lerp(self.horizon_color, self.zenith_color, t)

    def __repr__(self) -> str:
        return f"GradientBackground(horizon={self.horizon_color}, zenith={self.zenith_color})"
