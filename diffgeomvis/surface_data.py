"""Triangulated surface meshes built from rectangular parametrizations."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import List, Protocol, Tuple

from diffgeomvis.geometry import Vec3
from diffgeomvis.mesh import indices_add_quad

DEFAULT_GRID_SIZE = 50

Vec2 = Tuple[float, float]


class RectParametrization(Protocol):
    """A surface given over the rectangle [u_min, u_max] x [v_min, v_max]."""

    u_min: float
    u_max: float
    v_min: float
    v_max: float

    def position(self, u: float, v: float) -> Vec3: ...

    def normal(self, u: float, v: float) -> Vec3: ...

    def curvature(self, u: float, v: float) -> float: ...


class SurfaceType(enum.Enum):
    TORUS = enum.auto()
    TREFOIL = enum.auto()
    HELICOID = enum.auto()
    MOBIUS_STRIP = enum.auto()
    PSEUDOSPHERE = enum.auto()
    CONE = enum.auto()
    SPHERE = enum.auto()
    PROJECTIVE_PLANE = enum.auto()
    KLEIN_BOTTLE = enum.auto()
    HYPERBOLIC_PARABOLOID = enum.auto()
    MONKEY_SADDLE = enum.auto()
    CATENOID = enum.auto()
    ENNEPER_SURFACE = enum.auto()


_SURFACE_NAMES = {
    SurfaceType.TORUS: "torus",
    SurfaceType.TREFOIL: "trefoil",
    SurfaceType.HELICOID: "helicoid",
    SurfaceType.MOBIUS_STRIP: "mobius strip",
    SurfaceType.PSEUDOSPHERE: "pseudosphere",
    SurfaceType.CONE: "cone",
    SurfaceType.SPHERE: "sphere",
    SurfaceType.PROJECTIVE_PLANE: "projective plane",
    SurfaceType.KLEIN_BOTTLE: "klein bottle",
    SurfaceType.HYPERBOLIC_PARABOLOID: "hyperbolic paraboloid",
    SurfaceType.MONKEY_SADDLE: "monkey saddle",
    SurfaceType.CATENOID: "catenoid",
    SurfaceType.ENNEPER_SURFACE: "enneper surface",
}


def surface_name(surface: SurfaceType) -> str:
    """Human-readable name of a surface type."""
    return _SURFACE_NAMES[surface]


def _lerp(a: float, b: float, t: float) -> float:
    return a * (1.0 - t) + b * t


@dataclass
class SurfaceData:
    """Vertex attributes, triangles and per-triangle data of a surface mesh."""

    positions: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    uvs: List[Vec2] = field(default_factory=list)
    # Normalized grid coordinates, always running from 0 to 1.
    uvts: List[Vec2] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    curvatures: List[float] = field(default_factory=list)
    min_curvature: float = 0.0
    max_curvature: float = 0.0
    triangle_centers: List[Vec3] = field(default_factory=list)
    triangle_areas: List[float] = field(default_factory=list)
    total_area: float = 0.0
    sorted_triangles: List[int] = field(default_factory=list)

    def sort_triangles(self, camera_position: Vec3) -> None:
        """Order triangles from the farthest to the nearest to the camera."""
        distances = [c.distance_squared_to(camera_position) for c in self.triangle_centers]
        self.sorted_triangles.sort(key=lambda i: distances[i], reverse=True)

    def vertex_count(self) -> int:
        return len(self.positions)

    def triangle_count(self) -> int:
        return len(self.indices) // 3

    def add_vertex(self, p: Vec3, n: Vec3, uv: Vec2, uvt: Vec2) -> None:
        self.positions.append(p)
        self.normals.append(n)
        self.uvs.append(uv)
        self.uvts.append(uvt)

    def triangle(self, index: int) -> Tuple[Vec3, Vec3, Vec3]:
        """Corner positions of the triangle with the given index."""
        if not 0 <= index < self.triangle_count():
            raise IndexError(f"triangle index {index} out of range")
        i0, i1, i2 = self.indices[3 * index : 3 * index + 3]
        return self.positions[i0], self.positions[i1], self.positions[i2]

    def curvature_color_t(self, index: int) -> float:
        """Curvature of a vertex mapped onto [0, 1], with zero curvature at 0.5."""
        biggest = max(abs(self.min_curvature), abs(self.max_curvature))
        if biggest == 0.0:
            return 0.5
        return (self.curvatures[index] / biggest + 1.0) / 2.0


def _triangle_center(a: Vec3, b: Vec3, c: Vec3) -> Vec3:
    return (a + b + c) / 3.0


def _triangle_area(a: Vec3, b: Vec3, c: Vec3) -> float:
    return (b - a).cross(c - a).length() / 2.0


def initialize_surface(
    parametrization: RectParametrization,
    surface: SurfaceData,
    size: int = DEFAULT_GRID_SIZE,
) -> SurfaceData:
    """Fill ``surface`` with a grid of 4*size by size quads sampled from the parametrization."""
    if size < 1:
        raise ValueError("grid size must be positive")
    size_u = 4 * size
    size_v = size

    surface.indices.clear()
    surface.positions.clear()
    surface.uvs.clear()
    surface.uvts.clear()
    surface.normals.clear()
    surface.curvatures.clear()

    for vi in range(size_v + 1):
        vt = vi / size_v
        v = _lerp(parametrization.v_min, parametrization.v_max, vt)
        for ui in range(size_u + 1):
            ut = ui / size_u
            u = _lerp(parametrization.u_min, parametrization.u_max, ut)
            surface.curvatures.append(parametrization.curvature(u, v))
            surface.add_vertex(
                parametrization.position(u, v),
                parametrization.normal(u, v),
                (u, v),
                (ut, vt),
            )

    surface.min_curvature = min(surface.curvatures)
    surface.max_curvature = max(surface.curvatures)

    def index(ui: int, vi: int) -> int:
        return vi * (size_u + 1) + ui

    for vi in range(size_v):
        for ui in range(size_u):
            indices_add_quad(
                surface.indices,
                index(ui, vi),
                index(ui + 1, vi),
                index(ui + 1, vi + 1),
                index(ui, vi + 1),
            )

    triangles = [surface.triangle(i) for i in range(surface.triangle_count())]
    surface.triangle_centers = [_triangle_center(*tri) for tri in triangles]
    surface.sorted_triangles = list(range(len(triangles)))
    surface.triangle_areas = [_triangle_area(*tri) for tri in triangles]
    surface.total_area = math.fsum(surface.triangle_areas)
    return surface