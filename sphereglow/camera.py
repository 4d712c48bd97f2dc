"""
Camera module for generating primary rays.

A pinhole camera looking down +z. Pixel rows are counted from the bottom
of the image, and both axes are scaled by the image width so pixels stay
square for any aspect ratio.
"""

from __future__ import annotations
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .sampling import RandomSource


class Camera:
    """A pinhole camera with optional sub-pixel jitter for anti-aliasing."""

    def __init__(self, origin: Point3 = None, vfov: float = 90.0):
        """Create a camera.

        Args:
            origin: Camera position in world space (defaults to the origin)
            vfov: Field of view in degrees
        """
        if not 0.0 < vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {vfov}")
        self.origin = origin if origin is not None else Point3(0, 0, 0)
        self.vfov = vfov
        self.focal_distance = 1.0 / math.tan(math.radians(vfov) * 0.5)

    def get_ray(
        self,
        x: int,
        y: int,
        width: int,
        height: int,
        rng: RandomSource = None,
    ) -> Ray:
        """Generate a ray through pixel (x, y).

        Args:
            x: Pixel column, 0 = left
            y: Pixel row, 0 = bottom
            width: Image width in pixels
            height: Image height in pixels
            rng: When given, the sample position inside the pixel is
                jittered (x offset drawn first); otherwise the pixel center
                is used

        Returns:
            A ray from the camera with a unit direction
        """
        if rng is not None:
            jx = rng.uniform()
            jy = rng.uniform()
        else:
            jx = jy = 0.5

        u = (x + jx - 0.5 * width) / width
        v = (y + jy - 0.5 * height) / width
        direction = Vec3(u, v, self.focal_distance).normalize()
        return Ray(self.origin, direction)

    def __repr__(self) -> str:
        return f"Camera(origin={self.origin}, vfov={self.vfov})"
