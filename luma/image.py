"""
8-bit RGB image buffer and PNG output.

The renderer writes rows of this buffer directly; saving and scaling are
only done once the render has finished.
"""

from __future__ import annotations
from pathlib import Path
from typing import Union

import numpy as np

NUM_COMPONENTS = 3


class Image:
    """A row-major RGB byte image, top row first."""

    def __init__(self, width: int, height: int):
        """Create a black image.

        Args:
            width: Width in pixels
            height: Height in pixels
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, NUM_COMPONENTS), dtype=np.uint8)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> Image:
        """Wrap an existing (height, width, 3) uint8 array."""
        if pixels.ndim != 3 or pixels.shape[2] != NUM_COMPONENTS:
            raise ValueError(f"Expected (height, width, 3) array, got {pixels.shape}")
        image = cls.__new__(cls)
        image.height, image.width = pixels.shape[:2]
        image.pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
        return image

    @property
    def data(self) -> bytes:
        """Raw RGB bytes, width * height * 3 long."""
        return self.pixels.tobytes()

    def scaled(self, scale: int) -> Image:
        """Return an enlarged copy using nearest-neighbour replication.

        Rendering at low resolution and scaling up keeps individual pixels
        visible, e.g. 240x135 at scale 16 becomes 3840x2160.
        """
        if scale < 1:
            raise ValueError(f"Scale must be at least 1, got {scale}")
        if scale == 1:
            return Image.from_array(self.pixels.copy())
        return Image.from_array(self.pixels.repeat(scale, axis=0).repeat(scale, axis=1))

    def save(self, filename: Union[str, Path], scale: int = 1) -> None:
        """Save the image to file.

        Args:
            filename: Output filename (extension determines format)
            scale: Integer upscale factor
        """
        from PIL import Image as PILImage

        image = self.scaled(scale) if scale > 1 else self
        PILImage.fromarray(image.pixels).save(str(filename))

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height})"
