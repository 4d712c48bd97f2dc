"""
Material model: a probabilistic mix of a diffuse and a specular lobe.

Each bounce picks one lobe at random (specular with probability
``percent_specular``) instead of evaluating a continuous BRDF:
- Diffuse: normal plus a random unit vector (Lambertian approximation)
- Specular: mirror reflection blurred towards the diffuse direction by
  roughness squared
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace

from .vec3 import Vec3, Color
from .sampling import RandomSource


@dataclass(frozen=True)
class ScatterResult:
    """Result of a material scatter operation."""
    direction: Vec3
    attenuation: Color
    is_specular: bool = False


@dataclass(frozen=True)
class MaterialInfo:
    """Surface description shared by every sphere.

    Attributes:
        diffuse: Diffuse albedo (RGB, each component 0-1)
        emissive: Emitted radiance (unbounded)
        specular: Specular albedo (RGB, each component 0-1)
        percent_specular: Probability of taking the specular lobe
        roughness: 0 = perfect mirror, 1 = specular lobe equals the diffuse one
    """
    diffuse: Color = field(default_factory=lambda: Color(0, 0, 0))
    emissive: Color = field(default_factory=lambda: Color(0, 0, 0))
    specular: Color = field(default_factory=lambda: Color(0, 0, 0))
    percent_specular: float = 0.0
    roughness: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.percent_specular <= 1.0:
            raise ValueError(f"percent_specular must be in [0, 1], got {self.percent_specular}")
        if not 0.0 <= self.roughness <= 1.0:
            raise ValueError(f"roughness must be in [0, 1], got {self.roughness}")

    def with_overrides(self, **changes) -> MaterialInfo:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @property
    def is_emissive(self) -> bool:
        return self.emissive.max_component() > 0.0

    def scatter(self, ray_dir: Vec3, normal: Vec3, rng: RandomSource) -> ScatterResult:
        """Choose a lobe and compute the outgoing direction.

        Draws one number for the lobe choice, then two for the diffuse
        direction. The diffuse direction is always computed because the
        specular lobe is blurred towards it.

        Args:
            ray_dir: Incoming ray direction (unit length)
            normal: Outward surface normal at the hit point
            rng: Random source for this path

        Returns:
            ScatterResult with the new unit direction and the albedo to
            multiply into the path throughput
        """
        is_specular = rng.uniform() < self.percent_specular

        diffuse_dir = normal + rng.random_unit_vector()
        # Catch degenerate scatter direction
        if diffuse_dir.near_zero():
            diffuse_dir = normal
        diffuse_dir = diffuse_dir.normalize()

        if is_specular:
            blur = self.roughness * self.roughness
            direction = ray_dir.reflect(normal).mix(diffuse_dir, blur).normalize()
            return ScatterResult(direction=direction, attenuation=self.specular, is_specular=True)

        return ScatterResult(direction=diffuse_dir, attenuation=self.diffuse, is_specular=False)
