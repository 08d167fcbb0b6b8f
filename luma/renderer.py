"""
Renderer module - drives the path tracer over the image.

Implements:
- Parallel scanline rendering on a thread pool
- Per-pixel sample accumulation with jittered sample positions
- Gamma correction and 8-bit quantization
- Throttled progress reporting and cooperative cancellation

Every scanline is an independent unit of work that owns its sampler and
writes only its own row of the image, so the output does not depend on
thread count or scheduling order.
"""

from __future__ import annotations
import logging
import os
import platform
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .vec3 import Color
from .camera import Camera
from .shapes import Hittable
from .image import Image
from .integrator import RadianceEstimator, ShadingMode
from .sampling import SAMPLERS, HEMISPHERE_SAMPLERS, create_sampler, wang_hash

logger = logging.getLogger(__name__)

# Scale that maps 1.0 to 255 after truncation
COMPONENT_SCALE = 255.99

_MASK32 = 0xFFFFFFFF


class RenderCancelled(InterruptedError):
    """Raised when a render is cancelled before completion."""
    pass


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 240
    height: int = 135
    samples_per_pixel: int = 16
    max_depth: int = 10
    num_threads: int = 0  # 0 = auto-detect
    seed: Optional[int] = 0  # None = nondeterministic
    sampler: str = 'random'
    hemisphere: str = 'cosine'
    mode: str = 'radiance'
    progress_interval: float = 1.0  # seconds between progress reports

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"Samples per pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"Max depth must not be negative, got {self.max_depth}")
        if self.num_threads < 0:
            raise ValueError(f"Thread count must not be negative, got {self.num_threads}")
        if self.sampler not in SAMPLERS:
            raise ValueError(f"Unknown sampler: {self.sampler}")
        if self.hemisphere not in HEMISPHERE_SAMPLERS:
            raise ValueError(f"Unknown hemisphere sampler: {self.hemisphere}")
        # Raises ValueError for unknown modes
        ShadingMode(self.mode)
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Path tracing renderer with multi-threading support."""

    def __init__(self, settings: RenderSettings = None, estimator: RadianceEstimator = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
            estimator: Radiance estimator (built from settings if None)
        """
        self.settings = settings if settings else RenderSettings()
        self.estimator = estimator if estimator else RadianceEstimator(
            hemisphere=self.settings.hemisphere,
            mode=ShadingMode(self.settings.mode)
        )
        self.last_render_time: Optional[float] = None

        self._progress_callback: Optional[Callable[[float], None]] = None
        self._progress_lock = threading.Lock()
        self._completed_lines = 0
        self._last_report = 0.0
        self._cancel_event = threading.Event()

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def cancel(self) -> None:
        """Request that the current render stop; pending rows are skipped."""
        self._cancel_event.set()

    def render(self, scene: Hittable, camera: Camera) -> Image:
        """Render the scene and return the 8-bit image.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            Gamma-corrected RGB image, top row first

        Raises:
            RenderCancelled: If cancel() was called during the render
        """
        settings = self.settings
        image = Image(settings.width, settings.height)

        self._cancel_event.clear()
        self._completed_lines = 0
        start_time = time.perf_counter()
        self._last_report = start_time

        logger.info(
            "Rendering %dx%d at %d samples per pixel on %d threads...",
            settings.width, settings.height, settings.samples_per_pixel, settings.num_threads
        )

        def render_line(line: int) -> None:
            self._render_line(line, scene, camera, image)

        lines = range(settings.height)
        if settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=settings.num_threads) as executor:
                # Draining the iterator joins the workers and re-raises errors
                list(executor.map(render_line, lines))
        else:
            for line in lines:
                render_line(line)

        if self._progress_callback:
            self._progress_callback(1.0)

        self.last_render_time = time.perf_counter() - start_time
        logger.info("Completed in %.3f seconds.", self.last_render_time)

        return image

    def _render_line(self, line: int, scene: Hittable, camera: Camera, image: Image) -> None:
        """Render one scanline into its row of the image.

        Args:
            line: Image row, 0 is the top of the image
        """
        if self._cancel_event.is_set():
            raise RenderCancelled("Render cancelled")

        settings = self.settings
        width = settings.width
        height = settings.height
        samples = settings.samples_per_pixel
        max_depth = settings.max_depth

        seed = None if settings.seed is None else [settings.seed, line]
        sampler = create_sampler(settings.sampler, seed)

        y = height - line - 1
        row = np.empty((width, 3), dtype=np.uint8)

        for x in range(width):
            # Unique hashed start index per pixel, advanced once per sample
            index = wang_hash(samples * (line * width + x))

            radiance = Color(0.0, 0.0, 0.0)
            for _ in range(samples):
                if samples == 1:
                    jitter_x = jitter_y = 0.5
                else:
                    jitter_x = sampler.random()
                    jitter_y = sampler.random()
                u = (x + jitter_x) / width
                v = (y - jitter_y) / height

                ray = camera.get_ray(u, v)
                radiance = radiance + self.estimator.estimate(ray, scene, max_depth, sampler, index)
                index = (index + 1) & _MASK32

            row[x] = self.to_bytes(radiance / samples)

        image.pixels[line] = row
        self._line_completed()

    def _line_completed(self) -> None:
        """Count a finished line and report progress at most once per interval."""
        with self._progress_lock:
            self._completed_lines += 1
            now = time.perf_counter()
            if self._progress_callback and now - self._last_report >= self.settings.progress_interval:
                self._progress_callback(self._completed_lines / self.settings.height)
                self._last_report = now

    @staticmethod
    def to_bytes(radiance: Color) -> np.ndarray:
        """Convert linear radiance to gamma-corrected 8-bit RGB.

        Args:
            radiance: Linear color

        Returns:
            uint8 array of 3 components
        """
        corrected = radiance.gamma_correct().clamp(0.0, 1.0)
        return (corrected.to_array() * COMPONENT_SCALE).astype(np.uint8)


def get_platform_info() -> dict:
    """Get information about the current platform for reporting.

    Returns:
        Dictionary with platform details
    """
    info = {
        'system': platform.system(),
        'machine': platform.machine(),
        'processor': platform.processor(),
        'python_version': platform.python_version(),
        'cpu_count': os.cpu_count(),
        'is_arm': platform.machine().lower() in ('arm64', 'aarch64'),
        'is_x86': platform.machine().lower() in ('x86_64', 'amd64', 'x86'),
    }

    # Check for Apple Silicon
    if info['system'] == 'Darwin' and info['is_arm']:
        info['is_apple_silicon'] = True
    else:
        info['is_apple_silicon'] = False

    return info
