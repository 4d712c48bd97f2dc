"""
Path tracing integrator - the heart of the renderer.

Implements:
- Iterative path tracing with a fixed bounce budget
- Probabilistic diffuse/specular lobe selection per bounce
- Optional Russian roulette termination
"""

from __future__ import annotations
from dataclasses import dataclass

from .vec3 import Vec3, Color, Point3
from .ray import Ray
from .scene import Scene
from .sampling import RandomSource
from .shapes import MIN_RAY_DIST, MAX_RAY_DIST


@dataclass(frozen=True)
class TraceSettings:
    """Configuration for the integrator and the color pipeline."""
    n_bounces: int = 8
    exposure: float = 0.5
    enable_russian_roulette: bool = False
    min_ray_dist: float = MIN_RAY_DIST
    max_ray_dist: float = MAX_RAY_DIST

    def __post_init__(self):
        if isinstance(self.n_bounces, bool) or not isinstance(self.n_bounces, int) or self.n_bounces < 0:
            raise ValueError(f"n_bounces must be a non-negative integer, got {self.n_bounces!r}")
        if not isinstance(self.enable_russian_roulette, bool):
            raise ValueError(
                f"enable_russian_roulette must be a boolean, got {self.enable_russian_roulette!r}"
            )
        if not self.exposure > 0:
            raise ValueError(f"exposure must be positive, got {self.exposure}")
        if not 0 < self.min_ray_dist < self.max_ray_dist:
            raise ValueError(
                f"ray distance bounds must satisfy 0 < min < max, "
                f"got min={self.min_ray_dist}, max={self.max_ray_dist}"
            )


class PathTracer:
    """Estimates incoming radiance along camera rays through a fixed scene."""

    def __init__(self, scene: Scene, settings: TraceSettings = None):
        """Create a path tracer.

        Args:
            scene: The scene to trace against (shared, read-only)
            settings: Integrator configuration (uses defaults if None)
        """
        self.scene = scene
        self.settings = settings if settings else TraceSettings()

    def trace(self, origin: Point3, direction: Vec3, rng: RandomSource) -> Color:
        """Trace one path and return the radiance it carries.

        At most ``n_bounces + 1`` segments are followed. Emission is added
        at every hit before the hit's albedo is folded into the throughput.
        Throughput left over when the bounce budget runs out is dropped.

        Args:
            origin: Ray origin
            direction: Unit ray direction
            rng: Random source for this path

        Returns:
            Linear radiance estimate (unclamped)
        """
        settings = self.settings
        col = Color(0, 0, 0)
        throughput = Color(1, 1, 1)
        ray = Ray(origin, direction)

        for _ in range(settings.n_bounces + 1):
            hit = self.scene.closest_hit(ray, settings.min_ray_dist, settings.max_ray_dist)

            # Escaped the scene
            if not hit.did_hit:
                return col + self.scene.sky_color * throughput

            scattered = hit.material.scatter(ray.direction, hit.normal, rng)
            ray = Ray(hit.hit_point, scattered.direction)

            col = col + hit.material.emissive * throughput
            throughput = throughput * scattered.attenuation

            if settings.enable_russian_roulette:
                # Survivors are boosted to make up for the terminated paths
                p = throughput.max_component()
                if rng.uniform() >= p:
                    break
                throughput = throughput / p

        return col
