import math

import numpy as np
import pytest

from diffgeomvis.geodesics import geodesic_rhs, integrate_geodesic, rk4_step
from diffgeomvis.geometry import Vec3


class Plane:
    """The plane z = 0 with position (sx * u, v, 0)."""

    def __init__(self, sx=1.0):
        self.sx = sx

    def position(self, u, v):
        return Vec3(self.sx * u, v, 0.0)

    def tangent_u(self, u, v):
        return Vec3(self.sx, 0.0, 0.0)

    def tangent_v(self, u, v):
        return Vec3(0.0, 1.0, 0.0)

    def christoffel_symbols(self, u, v):
        zero = [[0.0, 0.0], [0.0, 0.0]]
        return zero, zero


class PolarPlane:
    """The plane z = 0 in polar coordinates (radius u, angle v)."""

    def position(self, u, v):
        return Vec3(u * math.cos(v), u * math.sin(v), 0.0)

    def tangent_u(self, u, v):
        return Vec3(math.cos(v), math.sin(v), 0.0)

    def tangent_v(self, u, v):
        return Vec3(-u * math.sin(v), u * math.cos(v), 0.0)

    def christoffel_symbols(self, u, v):
        return [[0.0, 0.0], [0.0, -u]], [[0.0, 1.0 / u], [1.0 / u, 0.0]]


class Degenerate(Plane):
    def tangent_u(self, u, v):
        return Vec3(0.0, 0.0, 0.0)

    def tangent_v(self, u, v):
        return Vec3(0.0, 0.0, 0.0)


def test_rk4_exponential_one_step():
    result = rk4_step(lambda x, t: x, 1.0, 0.0, 0.1)
    assert result == pytest.approx(math.exp(0.1), abs=1e-6)


def test_rk4_constant_rhs_is_exact():
    result = rk4_step(lambda x, t: 3.0, 2.0, 0.0, 0.5)
    assert result == pytest.approx(3.5)


def test_rk4_exact_for_cubic_in_time():
    result = rk4_step(lambda x, t: t**3, 0.0, 0.0, 1.0)
    assert result == pytest.approx(0.25)


def test_rk4_array_state_harmonic_oscillator():
    def rhs(state, t):
        return np.array((state[1], -state[0]))

    state = np.array((1.0, 0.0))
    n = 100
    for _ in range(n):
        state = rk4_step(rhs, state, 0.0, math.pi / n)
    assert state[0] == pytest.approx(-1.0, abs=1e-6)
    assert state[1] == pytest.approx(0.0, abs=1e-6)


def test_rk4_accepts_tuple_state():
    result = rk4_step(lambda x, t: x * 0.0, (1.0, 2.0), 0.0, 0.1)
    assert list(result) == [1.0, 2.0]


def test_geodesic_rhs_flat_plane_has_no_acceleration():
    rhs = geodesic_rhs(Plane())
    result = rhs(np.array((0.3, 0.4, 1.5, -2.0)), 0.0)
    assert list(result) == pytest.approx([1.5, -2.0, 0.0, 0.0])


def test_geodesic_rhs_polar_plane():
    rhs = geodesic_rhs(PolarPlane())
    result = rhs(np.array((2.0, 0.0, 0.0, 1.0)), 0.0)
    # u'' = u v'^2 and v'' = -2 u' v' / u.
    assert list(result) == pytest.approx([0.0, 1.0, 2.0, 0.0])


def test_plane_geodesic_is_straight_line():
    points = integrate_geodesic(Plane(), (0.0, 0.0), (1.0, 0.0), 15.0, 200, 5)
    assert len(points) == 201
    assert points[-1][0] == pytest.approx(15.0)
    assert all(v == pytest.approx(0.0) for _, v in points)


def test_velocity_magnitude_is_ignored():
    short = integrate_geodesic(Plane(), (0.0, 0.0), (0.0, 0.1), 2.0, 10, 2)
    long = integrate_geodesic(Plane(), (0.0, 0.0), (0.0, 50.0), 2.0, 10, 2)
    assert short == pytest.approx(long)


def test_unit_speed_on_stretched_plane():
    surface = Plane(sx=2.0)
    points = integrate_geodesic(surface, (0.0, 0.0), (1.0, 0.0), 4.0, 20, 5)
    start = surface.position(*points[0])
    end = surface.position(*points[-1])
    assert start.distance_to(end) == pytest.approx(4.0)


def test_polar_geodesic_is_straight_in_space():
    surface = PolarPlane()
    length = 2.0
    points = integrate_geodesic(surface, (1.0, 0.0), (0.0, 1.0), length, 50, 5)
    positions = [surface.position(u, v) for u, v in points]
    assert all(p.x == pytest.approx(1.0, abs=1e-6) for p in positions)
    assert positions[-1].distance_to(positions[0]) == pytest.approx(length, abs=1e-5)
    ys = [p.y for p in positions]
    assert ys == sorted(ys)


def test_zero_velocity_defaults_to_u_direction():
    points = integrate_geodesic(Plane(), (0.0, 0.0), (0.0, 0.0), 1.0, 4, 1)
    assert points[-1] == pytest.approx((1.0, 0.0))


@pytest.mark.parametrize("steps, substeps", [(0, 5), (-1, 5), (10, 0)])
def test_invalid_step_counts(steps, substeps):
    with pytest.raises(ValueError):
        integrate_geodesic(Plane(), (0.0, 0.0), (1.0, 0.0), 1.0, steps, substeps)


def test_degenerate_surface_raises():
    with pytest.raises(ValueError):
        integrate_geodesic(Degenerate(), (0.0, 0.0), (1.0, 0.0), 1.0, 5, 1)