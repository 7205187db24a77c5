"""Unit meshes for instanced shapes, triangle batches and a draw list of shape instances."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, List, MutableSequence, Tuple, TypeVar

import numpy as np

from diffgeomvis.geometry import Vec3

TAU = 2.0 * math.pi
DEFAULT_CIRCLE_VERTEX_COUNT = 50
CIRCLE_ARC_SEGMENTS = 100
CIRCLE_ARC_LINE_RADIUS = 0.01

VertexT = TypeVar("VertexT")


def indices_add_tri(indices: MutableSequence[int], i0: int, i1: int, i2: int) -> None:
    """Append one triangle to an index list."""
    indices.extend((i0, i1, i2))


def indices_add_quad(
    indices: MutableSequence[int], i00: int, i01: int, i11: int, i10: int
) -> None:
    """Append a quad as two triangles sharing the i00-i11 diagonal.

    i01-i11
    |  /  |
    i00-i10
    """
    indices.extend((i00, i10, i11, i00, i11, i01))


def any_perpendicular_vector(v: Vec3) -> Vec3:
    """Return some unit vector perpendicular to ``v``."""
    v = v.normalized()
    attempt = v.cross(Vec3(1.0, 0.0, 0.0))
    if attempt.length_squared() == 0.0:
        return v.cross(Vec3(0.0, 1.0, 0.0)).normalized()
    return attempt.normalized()


def _translation(v: Vec3) -> np.ndarray:
    m = np.identity(4)
    m[:3, 3] = (v.x, v.y, v.z)
    return m


def _scale(x: float, y: float, z: float) -> np.ndarray:
    return np.diag((x, y, z, 1.0))


def _basis(c0: Vec3, c1: Vec3, c2: Vec3) -> np.ndarray:
    m = np.identity(4)
    m[:3, 0] = tuple(c0)
    m[:3, 1] = tuple(c1)
    m[:3, 2] = tuple(c2)
    return m


def transform_mesh(a: Vec3, b: Vec3) -> np.ndarray:
    """Rigid transform taking the origin to ``a`` and the z axis along ``b - a``.

    Meant for radially symmetric meshes built around the z axis.
    """
    v0 = (b - a).normalized()
    v1 = any_perpendicular_vector(v0)
    v2 = v0.cross(v1).normalized()
    return _translation(a) @ _basis(v1, v2, v0)


@dataclass
class Mesh:
    """Indexed geometry with per-vertex positions, normals and optional uvs."""

    positions: List[Vec3] = field(default_factory=list)
    normals: List[Vec3] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)
    uvs: List[Tuple[float, float]] = field(default_factory=list)
    triangle_fan: bool = False

    def vertex_count(self) -> int:
        return len(self.positions)

    def triangle_count(self) -> int:
        if self.triangle_fan:
            return max(len(self.indices) - 2, 0)
        return len(self.indices) // 3

    def _add(self, position: Vec3, normal: Vec3) -> None:
        self.positions.append(position)
        self.normals.append(normal)


def rect_mesh() -> Mesh:
    """Unit square in the xy plane, drawn as a triangle fan."""
    mesh = Mesh(triangle_fan=True)
    for x, y in ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)):
        mesh._add(Vec3(x, y, 0.0), Vec3(0.0, 0.0, 1.0))
        mesh.uvs.append((x, y))
    mesh.indices.extend((0, 1, 2, 3))
    return mesh


def cylinder_mesh(circle_vertex_count: int = DEFAULT_CIRCLE_VERTEX_COUNT) -> Mesh:
    """Open unit-radius cylinder from z = 0 to z = 1."""
    n = circle_vertex_count
    mesh = Mesh()
    for i in range(n):
        a = TAU * (i / n)
        bottom = Vec3(math.cos(a), math.sin(a), 0.0)
        mesh._add(bottom, bottom)
        mesh._add(Vec3(bottom.x, bottom.y, 1.0), bottom)
    previous = n - 1
    for i in range(n):
        indices_add_quad(mesh.indices, previous * 2, i * 2, i * 2 + 1, previous * 2 + 1)
        previous = i
    return mesh


def hemisphere_mesh(circle_vertex_count: int = DEFAULT_CIRCLE_VERTEX_COUNT) -> Mesh:
    """Unit upper hemisphere (z >= 0) as a latitude-longitude grid."""
    n = circle_vertex_count
    mesh = Mesh()
    for ui in range(n):
        u = ui / n * TAU
        for vi in range(n):
            v = vi / (n - 1) * (math.pi / 2.0)
            pos = Vec3(math.cos(u) * math.cos(v), math.sin(u) * math.cos(v), math.sin(v)).normalized()
            mesh._add(pos, pos)

    def to_index(ui: int, vi: int) -> int:
        return ui * n + vi

    previous_ui = n - 1
    for ui in range(n):
        previous_vi = n - 1
        for vi in range(n):
            indices_add_quad(
                mesh.indices,
                to_index(previous_ui, previous_vi),
                to_index(previous_ui, vi),
                to_index(ui, vi),
                to_index(ui, previous_vi),
            )
            previous_vi = vi
        previous_ui = ui
    return mesh


def cone_mesh(circle_vertex_count: int = DEFAULT_CIRCLE_VERTEX_COUNT) -> Mesh:
    """Cone with a unit-radius base at z = 0 and its apex at (0, 0, 1), without a base cap."""
    n = circle_vertex_count
    mesh = Mesh()
    inv_sqrt2 = 1.0 / math.sqrt(2.0)
    for i in range(n):
        a = i / n * TAU
        position = Vec3(math.cos(a), math.sin(a), 0.0)
        mesh._add(position, Vec3(position.x, position.y, 1.0) * inv_sqrt2)
    top_offset = mesh.vertex_count()
    center_angle_offset = TAU / n / 2.0
    for i in range(n):
        a = i / n * TAU + center_angle_offset
        mesh._add(Vec3(0.0, 0.0, 1.0), Vec3(math.cos(a), math.sin(a), 1.0) * inv_sqrt2)
    previous = n - 1
    for i in range(n):
        indices_add_tri(mesh.indices, previous, i, top_offset + i)
        previous = i
    return mesh


def circle_mesh(circle_vertex_count: int = DEFAULT_CIRCLE_VERTEX_COUNT) -> Mesh:
    """Unit disk in the xy plane with its center as the last vertex."""
    n = circle_vertex_count
    mesh = Mesh()
    normal = Vec3(0.0, 0.0, 1.0)
    for i in range(n):
        a = i / n * TAU
        mesh._add(Vec3(math.cos(a), math.sin(a), 0.0), normal)
    center_index = mesh.vertex_count()
    mesh._add(Vec3(0.0, 0.0, 0.0), normal)
    previous = n
    for i in range(n):
        indices_add_tri(mesh.indices, previous, i, center_index)
        previous = i
    return mesh


@dataclass
class TriangleBatch(Generic[VertexT]):
    """Vertices and triangle indices collected for one draw."""

    vertices: List[VertexT] = field(default_factory=list)
    indices: List[int] = field(default_factory=list)

    def current_index(self) -> int:
        return len(self.indices)

    def add_vertex(self, vertex: VertexT) -> int:
        """Append a vertex and return its index."""
        self.vertices.append(vertex)
        return len(self.vertices) - 1

    def add_tri(self, i0: int, i1: int, i2: int) -> None:
        indices_add_tri(self.indices, i0, i1, i2)

    def add_quad(self, i00: int, i01: int, i11: int, i10: int) -> None:
        indices_add_quad(self.indices, i00, i01, i11, i10)

    def clear(self) -> None:
        self.vertices.clear()
        self.indices.clear()


@dataclass
class Instance:
    """One placed copy of a unit mesh: a color and a 4x4 model matrix."""

    color: Vec3
    model: np.ndarray


@dataclass
class DrawList:
    """Shape instances queued for drawing, grouped by the unit mesh they use."""

    cylinders: List[Instance] = field(default_factory=list)
    hemispheres: List[Instance] = field(default_factory=list)
    cones: List[Instance] = field(default_factory=list)
    circles: List[Instance] = field(default_factory=list)
    flow_particles: List[Tuple[Vec3, float, Any]] = field(default_factory=list)

    def line(self, a: Vec3, b: Vec3, radius: float, color: Vec3, caps: bool = True) -> None:
        """A cylinder from ``a`` to ``b``, optionally with hemispherical caps."""
        length = (b - a).length()
        rotate_translate = transform_mesh(a, b)
        self.cylinders.append(
            Instance(color, rotate_translate @ _scale(radius, radius, length))
        )
        if caps:
            self.hemispheres.append(
                Instance(
                    color,
                    rotate_translate
                    @ _translation(Vec3(0.0, 0.0, length))
                    @ _scale(radius, radius, radius),
                )
            )
            self.hemispheres.append(
                Instance(color, rotate_translate @ _scale(radius, radius, -radius))
            )

    def cylinder(self, a: Vec3, b: Vec3, radius: float, color: Vec3) -> None:
        self.line(a, b, radius, color, False)

    def sphere(self, center: Vec3, radius: float, color: Vec3) -> None:
        translate_scale = _translation(center) @ _scale(radius, radius, -radius)
        self.hemispheres.append(Instance(color, translate_scale))
        self.hemispheres.append(Instance(color, translate_scale @ _scale(1.0, 1.0, -1.0)))

    def cone(self, bottom: Vec3, top: Vec3, radius: float, color: Vec3) -> None:
        """A unit-radius cone from ``bottom`` to ``top``; ``radius`` does not scale it."""
        rotate_translate = transform_mesh(bottom, top)
        self.cones.append(
            Instance(color, rotate_translate @ _scale(1.0, 1.0, (bottom - top).length()))
        )

    def arrow_start_end(
        self,
        start: Vec3,
        end: Vec3,
        radius: float,
        cone_radius: float,
        cone_length: float,
        line_color: Vec3,
        cone_color: Vec3,
    ) -> None:
        """An arrow whose cone tip lies at ``end``; short arrows are only a cone."""
        direction = end - start
        length = direction.length()
        direction = direction / length

        rotate_translate = transform_mesh(start, end)
        cone_scale = _scale(cone_radius, cone_radius, cone_length)

        def add_cone(transform: np.ndarray) -> None:
            self.cones.append(Instance(cone_color, transform))
            self.circles.append(Instance(cone_color, transform))

        if cone_length < length:
            self.circles.append(
                Instance(line_color, rotate_translate @ _scale(radius, radius, 1.0))
            )
            self.line(start, end - direction * cone_length, radius, line_color, False)
            add_cone(
                rotate_translate
                @ _translation(Vec3(0.0, 0.0, length - cone_length))
                @ cone_scale
            )
        else:
            add_cone(rotate_translate @ cone_scale)

    def arrow_start_direction(
        self,
        start: Vec3,
        direction: Vec3,
        radius: float,
        cone_radius: float,
        cone_length: float,
        line_color: Vec3,
        cone_color: Vec3,
    ) -> None:
        self.arrow_start_end(
            start, start + direction, radius, cone_radius, cone_length, line_color, cone_color
        )

    def circle_arc(self, center: Vec3, d0: Vec3, d1: Vec3, radius: float, color: Vec3) -> None:
        """A full circle in the plane spanned by ``d0`` and ``d1``, drawn as line segments."""
        for i in range(CIRCLE_ARC_SEGMENTS):
            a0 = i / CIRCLE_ARC_SEGMENTS * TAU
            a1 = (i + 1) / CIRCLE_ARC_SEGMENTS * TAU
            self.line(
                center + (d0 * math.cos(a0) + d1 * math.sin(a0)) * radius,
                center + (d0 * math.cos(a1) + d1 * math.sin(a1)) * radius,
                CIRCLE_ARC_LINE_RADIUS,
                color,
            )

    def flow_particle(self, size: float, position: Vec3, color: Any) -> None:
        self.flow_particles.append((position, size, color))

    def clear(self) -> None:
        self.cylinders.clear()
        self.hemispheres.clear()
        self.cones.clear()
        self.circles.clear()
        self.flow_particles.clear()