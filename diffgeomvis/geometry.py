"""Three-dimensional vectors and ray intersection queries."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Optional

_PARALLEL_EPSILON = 1e-6


@dataclass(frozen=True)
class Vec3:
    """An immutable 3D vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: float) -> Vec3:
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalized(self) -> Vec3:
        """Return the unit vector pointing the same way; a zero vector has no direction."""
        length = self.length()
        if length == 0.0:
            raise ValueError("cannot normalize a zero-length vector")
        return self / length

    def distance_squared_to(self, other: Vec3) -> float:
        return (self - other).length_squared()

    def distance_to(self, other: Vec3) -> float:
        return (self - other).length()


def ray_at(t: float, ray_origin: Vec3, ray_direction: Vec3) -> Vec3:
    """Point reached after travelling ``t`` along the ray."""
    return ray_origin + ray_direction * t


def ray_plane_intersection(
    ray_origin: Vec3, ray_direction: Vec3, point_on_plane: Vec3, plane_normal: Vec3
) -> Optional[float]:
    """Ray parameter of the plane hit, or None if parallel or behind the origin."""
    d = plane_normal.dot(ray_direction)
    if abs(d) < _PARALLEL_EPSILON:
        return None
    t = (point_on_plane - ray_origin).dot(plane_normal) / d
    if t < 0.0:
        return None
    return t


def ray_sphere_intersection(
    ray_origin: Vec3, ray_direction: Vec3, sphere_center: Vec3, sphere_radius: float
) -> Optional[float]:
    """Ray parameter of the nearer sphere hit, or None if missed or behind the origin."""
    oc = ray_origin - sphere_center
    a = ray_direction.dot(ray_direction)
    half_b = oc.dot(ray_direction)
    c = oc.dot(oc) - sphere_radius * sphere_radius
    discriminant = half_b * half_b - a * c
    if discriminant < 0.0:
        return None
    root = (-half_b - math.sqrt(discriminant)) / a
    if root < 0.0:
        return None
    return root


@dataclass(frozen=True)
class Ray:
    """A half-line given by an origin and a direction."""

    origin: Vec3
    direction: Vec3

    def at(self, t: float) -> Vec3:
        return ray_at(t, self.origin, self.direction)

    def intersect_plane(self, point_on_plane: Vec3, plane_normal: Vec3) -> Optional[float]:
        return ray_plane_intersection(self.origin, self.direction, point_on_plane, plane_normal)

    def intersect_sphere(self, sphere_center: Vec3, sphere_radius: float) -> Optional[float]:
        return ray_sphere_intersection(self.origin, self.direction, sphere_center, sphere_radius)