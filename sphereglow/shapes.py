"""
Sphere primitive and the analytic ray-sphere intersector.
"""

from __future__ import annotations
from dataclasses import dataclass
import math

from .vec3 import Vec3, Point3
from .ray import Ray
from .materials import MaterialInfo

MIN_RAY_DIST = 0.001
MAX_RAY_DIST = 10000.0


class InvalidGeometry(ValueError):
    """A shape was constructed with degenerate parameters."""
    pass


@dataclass(frozen=True)
class HitInfo:
    """Stores information about a ray-sphere intersection.

    Attributes:
        did_hit: Whether the ray hit; the other fields are meaningless if not
        normal: Unit normal pointing outward from the sphere center. It is
            not flipped for rays that start inside the sphere.
        hit_point: The intersection point in world space
        material: The material of the sphere that was hit
        distance: The ray parameter at the intersection
    """
    did_hit: bool
    normal: Vec3
    hit_point: Point3
    material: MaterialInfo
    distance: float


MISS = HitInfo(
    did_hit=False,
    normal=Vec3(0, 0, 0),
    hit_point=Point3(0, 0, 0),
    material=MaterialInfo(),
    distance=math.inf,
)


class Sphere:
    """A sphere defined by center and radius."""

    __slots__ = ('center', 'radius', 'material')

    def __init__(self, center: Point3, radius: float, material: MaterialInfo):
        """Create a sphere.

        Args:
            center: Center point of the sphere
            radius: Radius of the sphere (must be positive)
            material: Material for shading

        Raises:
            InvalidGeometry: If the center is not finite or the radius is
                not a finite positive number
        """
        if not center.is_finite():
            raise InvalidGeometry(f"Sphere center must be finite, got {center}")
        if not math.isfinite(radius) or radius <= 0:
            raise InvalidGeometry(f"Sphere radius must be positive, got {radius}")
        self.center = center
        self.radius = float(radius)
        self.material = material

    def intersect(self, ray: Ray, t_min: float = MIN_RAY_DIST, t_max: float = MAX_RAY_DIST) -> HitInfo:
        """Test ray-sphere intersection using the quadratic formula.

        The equation (P-C)·(P-C) = r² where P = ray.at(t)
        expands to: t²(d·d) + 2t(d·(O-C)) + (O-C)·(O-C) - r² = 0.

        A zero discriminant (tangent ray) counts as a miss. The near root
        is preferred; the far root is used when the near one falls outside
        [t_min, t_max], which is what happens for rays starting inside.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant <= 0:
            return MISS

        sqrtd = math.sqrt(discriminant)

        # Find the nearest root in the acceptable range
        root = (-half_b - sqrtd) / a
        if root < t_min or root > t_max:
            root = (-half_b + sqrtd) / a
            if root < t_min or root > t_max:
                return MISS

        point = ray.at(root)
        return HitInfo(
            did_hit=True,
            normal=(point - self.center) / self.radius,
            hit_point=point,
            material=self.material,
            distance=root,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sphere):
            return NotImplemented
        return (
            self.center == other.center
            and self.radius == other.radius
            and self.material == other.material
        )

    def __hash__(self) -> int:
        return hash((self.center, self.radius))

    def __repr__(self) -> str:
        return f"Sphere(center={self.center}, radius={self.radius})"


def intersect_sphere(
    origin: Point3,
    direction: Vec3,
    sphere: Sphere,
    t_min: float = MIN_RAY_DIST,
    t_max: float = MAX_RAY_DIST,
) -> HitInfo:
    """Intersect a ray given as origin and direction with one sphere."""
    return sphere.intersect(Ray(origin, direction), t_min, t_max)
