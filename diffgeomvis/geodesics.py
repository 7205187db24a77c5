"""Geodesics on parametrized surfaces, integrated with the classical Runge-Kutta method."""

from __future__ import annotations

import math
from typing import Callable, List, Protocol, Sequence, Tuple, TypeVar, Union

import numpy as np

from diffgeomvis.geometry import Vec3

DEFAULT_GEODESIC_LENGTH = 15.0
DEFAULT_STEPS = 200
DEFAULT_SUBSTEPS = 5

Vec2 = Tuple[float, float]
State = TypeVar("State", float, np.ndarray)
Matrix2 = Sequence[Sequence[float]]


class GeodesicSurface(Protocol):
    """A surface exposing its tangents and Christoffel symbols in (u, v) coordinates."""

    def position(self, u: float, v: float) -> Vec3: ...

    def tangent_u(self, u: float, v: float) -> Vec3: ...

    def tangent_v(self, u: float, v: float) -> Vec3: ...

    def christoffel_symbols(self, u: float, v: float) -> Tuple[Matrix2, Matrix2]:
        """The matrices (Gamma^u_ij, Gamma^v_ij)."""
        ...


def rk4_step(
    rhs: Callable[[State, float], State],
    state: Union[State, Sequence[float]],
    t: float,
    dt: float,
) -> State:
    """Advance ``state`` by one classical fourth-order Runge-Kutta step of size ``dt``."""
    x = state if isinstance(state, (int, float)) else np.asarray(state, dtype=float)
    half = dt / 2.0
    k1 = rhs(x, t)
    k2 = rhs(x + k1 * half, t + half)
    k3 = rhs(x + k2 * half, t + half)
    k4 = rhs(x + k3 * dt, t + dt)
    return x + (k1 + k2 * 2.0 + k3 * 2.0 + k4) * (dt / 6.0)


def geodesic_rhs(surface: GeodesicSurface) -> Callable[[np.ndarray, float], np.ndarray]:
    """Right-hand side of the geodesic equation for the state (u, v, u', v')."""

    def rhs(state: np.ndarray, _t: float) -> np.ndarray:
        u, v, du, dv = state
        gamma_u, gamma_v = surface.christoffel_symbols(float(u), float(v))
        velocity = np.array((du, dv), dtype=float)
        return np.array(
            (
                du,
                dv,
                -velocity @ (np.asarray(gamma_u, dtype=float) @ velocity),
                -velocity @ (np.asarray(gamma_v, dtype=float) @ velocity),
            )
        )

    return rhs


def integrate_geodesic(
    surface: GeodesicSurface,
    initial_position_uv: Vec2,
    initial_velocity_uv: Vec2,
    length: float = DEFAULT_GEODESIC_LENGTH,
    steps: int = DEFAULT_STEPS,
    substeps: int = DEFAULT_SUBSTEPS,
) -> List[Vec2]:
    """Trace a unit-speed geodesic and return its ``steps + 1`` points in (u, v) coordinates.

    Only the direction of ``initial_velocity_uv`` is used. The velocity is rescaled to unit
    speed on the surface before each step, and each step is split into ``substeps``
    Runge-Kutta steps.
    """
    if steps < 1:
        raise ValueError("steps must be positive")
    if substeps < 1:
        raise ValueError("substeps must be positive")

    rhs = geodesic_rhs(surface)
    dl = length / steps
    u, v = (float(c) for c in initial_position_uv)
    angle = math.atan2(initial_velocity_uv[1], initial_velocity_uv[0])
    du, dv = math.cos(angle), math.sin(angle)

    points: List[Vec2] = [(u, v)]
    for _ in range(steps):
        speed = (surface.tangent_u(u, v) * du + surface.tangent_v(u, v) * dv).length()
        if speed == 0.0 or not math.isfinite(speed):
            raise ValueError(f"degenerate parametrization at ({u}, {v})")
        state = np.array((u, v, du / speed, dv / speed))
        for _ in range(substeps):
            state = rk4_step(rhs, state, 0.0, dl / substeps)
        u, v, du, dv = (float(c) for c in state)
        points.append((u, v))
    return points