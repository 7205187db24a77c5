import pytest

from diffgeomvis.geometry import Vec3
from diffgeomvis.surface_data import (
    SurfaceData,
    SurfaceType,
    initialize_surface,
    surface_name,
)


class Plane:
    u_min = 0.0
    u_max = 2.0
    v_min = 0.0
    v_max = 1.0

    def position(self, u, v):
        return Vec3(u, v, 0.0)

    def normal(self, u, v):
        return Vec3(0.0, 0.0, 1.0)

    def curvature(self, u, v):
        return u - 0.5


class FlatPlane(Plane):
    def curvature(self, u, v):
        return 0.0


@pytest.fixture
def surface():
    return initialize_surface(Plane(), SurfaceData(), 2)


def test_surface_names_from_source():
    assert surface_name(SurfaceType.TORUS) == "torus"
    assert surface_name(SurfaceType.MOBIUS_STRIP) == "mobius strip"
    assert surface_name(SurfaceType.ENNEPER_SURFACE) == "enneper surface"


def test_every_surface_type_has_a_distinct_name():
    names = {surface_name(t) for t in SurfaceType}
    assert len(names) == len(SurfaceType)
    assert "" not in names


def test_grid_counts(surface):
    size = 2
    assert surface.vertex_count() == (4 * size + 1) * (size + 1)
    assert surface.triangle_count() == 2 * (4 * size) * size
    assert len(surface.triangle_centers) == surface.triangle_count()
    assert len(surface.triangle_areas) == surface.triangle_count()
    assert len(surface.curvatures) == surface.vertex_count()


def test_uv_and_uvt_corners(surface):
    assert surface.uvts[0] == (0.0, 0.0)
    assert surface.uvts[-1] == (1.0, 1.0)
    assert surface.uvs[0] == (Plane.u_min, Plane.v_min)
    assert surface.uvs[-1] == (Plane.u_max, Plane.v_max)
    assert surface.positions[-1] == Vec3(Plane.u_max, Plane.v_max, 0.0)


def test_total_area_matches_parameter_rectangle(surface):
    expected = (Plane.u_max - Plane.u_min) * (Plane.v_max - Plane.v_min)
    assert surface.total_area == pytest.approx(expected)
    assert all(a > 0.0 for a in surface.triangle_areas)


def test_curvature_range(surface):
    assert surface.min_curvature == pytest.approx(Plane().curvature(Plane.u_min, 0.0))
    assert surface.max_curvature == pytest.approx(Plane().curvature(Plane.u_max, 0.0))


def test_curvature_color_t_in_unit_interval(surface):
    values = [surface.curvature_color_t(i) for i in range(surface.vertex_count())]
    assert all(0.0 <= t <= 1.0 for t in values)
    assert max(values) == pytest.approx(1.0)


def test_curvature_color_t_flat_surface_is_middle():
    flat = initialize_surface(FlatPlane(), SurfaceData(), 1)
    assert flat.curvature_color_t(0) == 0.5


def test_sorted_triangles_initially_identity(surface):
    assert surface.sorted_triangles == list(range(surface.triangle_count()))


def test_sort_triangles_back_to_front(surface):
    camera = Vec3(0.0, 0.0, 1.0)
    surface.sort_triangles(camera)
    distances = [
        surface.triangle_centers[i].distance_squared_to(camera)
        for i in surface.sorted_triangles
    ]
    assert distances == sorted(distances, reverse=True)
    assert sorted(surface.sorted_triangles) == list(range(surface.triangle_count()))


def test_triangle_returns_indexed_positions(surface):
    corners = surface.triangle(0)
    expected = tuple(surface.positions[i] for i in surface.indices[0:3])
    assert corners == expected


def test_triangle_out_of_range(surface):
    with pytest.raises(IndexError):
        surface.triangle(surface.triangle_count())


def test_triangle_centers_are_centroids(surface):
    a, b, c = surface.triangle(3)
    center = surface.triangle_centers[3]
    assert center.x == pytest.approx((a.x + b.x + c.x) / 3.0)
    assert center.y == pytest.approx((a.y + b.y + c.y) / 3.0)


def test_add_vertex_appends_to_all_attributes():
    data = SurfaceData()
    data.add_vertex(Vec3(1.0, 2.0, 3.0), Vec3(0.0, 1.0, 0.0), (0.5, 0.25), (0.0, 1.0))
    assert data.vertex_count() == 1
    assert data.positions == [Vec3(1.0, 2.0, 3.0)]
    assert data.normals == [Vec3(0.0, 1.0, 0.0)]
    assert data.uvs == [(0.5, 0.25)]
    assert data.uvts == [(0.0, 1.0)]


def test_reinitialization_replaces_previous_mesh(surface):
    initialize_surface(Plane(), surface, 1)
    assert surface.vertex_count() == (4 + 1) * (1 + 1)
    assert surface.triangle_count() == 8
    assert surface.sorted_triangles == list(range(8))


def test_indices_stay_within_vertices(surface):
    assert min(surface.indices) == 0
    assert max(surface.indices) == surface.vertex_count() - 1


def test_invalid_grid_size():
    with pytest.raises(ValueError):
        initialize_surface(Plane(), SurfaceData(), 0)