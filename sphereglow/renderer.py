"""
Renderer module - drives the path tracer over the pixel grid.

Implements:
- Tile-based rendering with optional thread pool
- Per-tile independent random streams (results do not depend on threading)
- Progress reporting
- LDR conversion through the color pipeline
- PPM (plain text) and Pillow-backed image output
"""

from __future__ import annotations
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Callable, Tuple
import numpy as np

from .vec3 import Color
from .camera import Camera
from .scene import Scene
from .sampling import RandomSource
from .integrator import PathTracer, TraceSettings
from .tonemapping import apply_color_pipeline, quantize

logger = logging.getLogger(__name__)


@dataclass
class RenderSettings:
    """Configuration for the pixel-grid driver."""
    width: int = 300
    height: int = 120
    samples_per_pixel: int = 8
    enable_aa: bool = True
    tile_size: int = 32
    num_threads: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel', 'tile_size', 'num_threads'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not isinstance(self.enable_aa, bool):
            raise ValueError(f"enable_aa must be a boolean, got {self.enable_aa!r}")
        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, int) or self.seed < 0
        ):
            raise ValueError(f"seed must be a non-negative integer or None, got {self.seed!r}")


class Renderer:
    """Averages path traced samples over every pixel of the image."""

    def __init__(self, settings: RenderSettings = None, trace_settings: TraceSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Image and sampling configuration (uses defaults if None)
            trace_settings: Integrator and exposure configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self.trace_settings = trace_settings if trace_settings else TraceSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: Camera) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Args:
            scene: The scene to render
            camera: The camera to render from

        Returns:
            Linear radiance image of shape (height, width, 3). Row 0 is the
            top of the image.
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        jitter = self.settings.enable_aa
        tracer = PathTracer(scene, self.trace_settings)

        logger.debug(
            f"Rendering {width}x{height}, {samples} spp, "
            f"{self.trace_settings.n_bounces} bounces, seed={self.settings.seed}"
        )

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        streams = RandomSource(self.settings.seed).spawn(len(tiles))
        total_tiles = len(tiles)
        completed_tiles = [0]

        def render_tile(task: Tuple[Tuple[int, int, int, int], RandomSource]) -> Tuple[Tuple, np.ndarray]:
            """Render a single tile."""
            tile, rng = task
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for j in range(y1 - y0):
                # Camera rows count up from the bottom of the image
                y = height - 1 - (y0 + j)
                for i in range(x1 - x0):
                    pixel_color = Color(0, 0, 0)

                    for _ in range(samples):
                        ray = camera.get_ray(x0 + i, y, width, height, rng if jitter else None)
                        pixel_color = pixel_color + tracer.trace(ray.origin, ray.direction, rng)

                    tile_image[j, i] = pixel_color.to_array() / samples

            completed_tiles[0] += 1
            if self._progress_callback:
                self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        tasks = list(zip(tiles, streams))
        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tasks))
        else:
            results = [render_tile(task) for task in tasks]

        # Combine tiles into final image
        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        logger.debug(f"Rendered image: range=[{image.min():.3f}, {image.max():.3f}]")
        return image

    def _generate_tiles(self, width: int, height: int) -> list[Tuple[int, int, int, int]]:
        """Generate tiles for rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    def to_ldr(self, hdr_image: np.ndarray) -> np.ndarray:
        """Convert a radiance image to 8-bit display values.

        Applies exposure, ACES tone mapping and the sRGB curve, then
        rounds to the nearest byte.

        Args:
            hdr_image: Linear radiance image (float64)

        Returns:
            LDR image as uint8 array
        """
        return quantize(apply_color_pipeline(hdr_image, self.trace_settings.exposure))

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save image to file.

        Args:
            image: Image array (radiance or uint8)
            filename: Output filename (extension determines format)
        """
        if image.dtype != np.uint8:
            image = self.to_ldr(image)

        path = Path(filename)
        if path.suffix.lower() == '.ppm':
            write_ppm(image, path)
        else:
            from PIL import Image as PILImage

            PILImage.fromarray(image).save(path)
        logger.info(f"Saved image: {path}")


def write_ppm(image: np.ndarray, filename) -> None:
    """Write an 8-bit RGB image as plain-text PPM (P3).

    The header is ``P3\\n<width> <height>\\n255\\n`` followed by one
    ``r g b`` line per pixel, row-major from the top row down.

    Args:
        image: uint8 array of shape (height, width, 3)
        filename: Destination path
    """
    height, width = image.shape[:2]
    with open(filename, 'w') as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for r, g, b in image.reshape(-1, 3):
            f.write(f"{int(r)} {int(g)} {int(b)}\n")
