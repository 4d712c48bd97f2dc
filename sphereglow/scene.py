"""
Scene container and the built-in sphere scene.

The scene is an immutable, exactly-sized sequence of spheres plus the sky
color returned for rays that escape. It is built once and shared by every
trace call.
"""

from __future__ import annotations
import logging
from typing import Iterable, Iterator

from .vec3 import Color, Point3
from .ray import Ray
from .materials import MaterialInfo
from .shapes import Sphere, HitInfo, MISS, MIN_RAY_DIST, MAX_RAY_DIST

logger = logging.getLogger(__name__)

DEFAULT_SKY_COLOR = Color(0.5, 0.8, 0.9)


class Scene:
    """An ordered, read-only collection of spheres."""

    __slots__ = ('_spheres', 'sky_color')

    def __init__(self, spheres: Iterable[Sphere], sky_color: Color = DEFAULT_SKY_COLOR):
        """Create a scene.

        Args:
            spheres: Spheres in intersection order (earlier wins exact ties)
            sky_color: Radiance returned for rays that hit nothing
        """
        self._spheres = tuple(spheres)
        self.sky_color = sky_color

    @property
    def spheres(self) -> tuple[Sphere, ...]:
        return self._spheres

    def closest_hit(self, ray: Ray, t_min: float = MIN_RAY_DIST, t_max: float = MAX_RAY_DIST) -> HitInfo:
        """Find the closest intersection among all spheres.

        A hit is accepted when its distance from the ray origin is strictly
        between t_min and the closest distance found so far (starting at
        t_max). Returns MISS when nothing qualifies.
        """
        closest = MISS
        closest_dist = t_max

        for sphere in self._spheres:
            hit = sphere.intersect(ray, t_min, t_max)
            if not hit.did_hit:
                continue
            dist = (ray.origin - hit.hit_point).length()
            if t_min < dist < closest_dist:
                closest = hit
                closest_dist = dist

        return closest

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[Sphere]:
        return iter(self._spheres)

    def __getitem__(self, index: int) -> Sphere:
        return self._spheres[index]

    def __repr__(self) -> str:
        return f"Scene({len(self)} spheres, sky={self.sky_color})"


# Base materials of the built-in scene. Variants are derived by overriding
# fields of a base material.
METAL_YELLOW = MaterialInfo(
    diffuse=Color(0.9, 0.9, 0.5),
    specular=Color(0.9, 0.9, 0.9),
    percent_specular=0.1,
    roughness=0.2,
)
METAL_MAGENTA = METAL_YELLOW.with_overrides(
    diffuse=Color(0.9, 0.5, 0.9),
    percent_specular=0.3,
    roughness=0.2,
)
METAL_CYAN = METAL_YELLOW.with_overrides(diffuse=Color(0.5, 0.9, 0.9))

MATTE_WHITE = MaterialInfo(diffuse=Color(0.9, 0.9, 0.9))
MATTE_RED = MATTE_WHITE.with_overrides(diffuse=Color(1.0, 0.2, 0.2))
MATTE_GREEN = MATTE_WHITE.with_overrides(diffuse=Color(0.2, 1.0, 0.2))

LIGHT_SOURCE = MaterialInfo(emissive=Color(1.0, 0.9, 0.7))


def build_default_scene(sky_color: Color = DEFAULT_SKY_COLOR) -> Scene:
    """Create the built-in scene: two lights, five walls and three subjects.

    The room is made of huge spheres; the ceiling sphere is emissive too.
    """
    spheres = [
        # Light sources
        Sphere(Point3(0, 18, 24), 10.0, LIGHT_SOURCE),
        Sphere(Point3(0, 16, 6), 10.0, LIGHT_SOURCE),

        # Walls
        Sphere(Point3(-108, 0, 30), 100.0, MATTE_RED),
        Sphere(Point3(108, 0, 30), 100.0, MATTE_GREEN),
        Sphere(Point3(0, 0, 136), 100.0, MATTE_WHITE),
        Sphere(Point3(0, -103, 30), 100.0, MATTE_WHITE),
        Sphere(Point3(0, 125, 30), 100.0, LIGHT_SOURCE),

        # Subjects
        Sphere(Point3(-6.0, -1.6, 24.0), 2.0, METAL_CYAN),
        Sphere(Point3(0.0, -1.6, 20.0), 2.0, METAL_MAGENTA),
        Sphere(Point3(6.0, -1.6, 24.0), 2.0, METAL_YELLOW),
    ]
    scene = Scene(spheres, sky_color)
    logger.debug(f"Built default scene with {len(scene)} spheres")
    return scene
