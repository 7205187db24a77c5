"""Seeded three-dimensional gradient (Perlin) noise."""

from __future__ import annotations

import math
import random
from typing import Sequence

from diffgeomvis.geometry import Vec3

_TABLE_SIZE = 256
_TABLE_MASK = _TABLE_SIZE - 1


def smoothstep(t: float) -> float:
    """Degree-seven fade curve mapping [0, 1] onto [0, 1] with flat ends."""
    x = t
    return x * x * x * x * (x * (x * (-20.0 * x + 70.0) - 84.0) + 35.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class PerlinNoise:
    """Gradient noise over a repeating 256-cell lattice."""

    def __init__(self, seed: int) -> None:
        rng = random.Random(seed)
        permutations = [i for _ in range(2) for i in range(_TABLE_SIZE)]
        rng.shuffle(permutations)
        self._permutations = permutations

        gradients = []
        for _ in range(_TABLE_SIZE):
            # Uniformly distributed directions on the unit sphere.
            a = math.acos(2.0 * rng.random() - 1.0)
            b = 2.0 * rng.random() * math.pi
            gradients.append(
                (math.cos(b) * math.sin(a), math.sin(b) * math.sin(a), math.cos(a))
            )
        self._gradients = gradients

    def _hash(self, x: int, y: int, z: int) -> int:
        p = self._permutations
        return p[p[p[x] + y] + z]

    def _gradient_dot(self, xi: int, yi: int, zi: int, dx: float, dy: float, dz: float) -> float:
        gx, gy, gz = self._gradients[self._hash(xi, yi, zi)]
        return gx * dx + gy * dy + gz * dz

    def _at(self, x: float, y: float, z: float) -> float:
        fx, fy, fz = math.floor(x), math.floor(y), math.floor(z)
        xi0, yi0, zi0 = fx & _TABLE_MASK, fy & _TABLE_MASK, fz & _TABLE_MASK
        xi1, yi1, zi1 = (xi0 + 1) & _TABLE_MASK, (yi0 + 1) & _TABLE_MASK, (zi0 + 1) & _TABLE_MASK

        tx, ty, tz = x - fx, y - fy, z - fz
        u, v, w = smoothstep(tx), smoothstep(ty), smoothstep(tz)
        x0, x1 = tx, tx - 1.0
        y0, y1 = ty, ty - 1.0
        z0, z1 = tz, tz - 1.0

        g = self._gradient_dot
        a = _lerp(g(xi0, yi0, zi0, x0, y0, z0), g(xi1, yi0, zi0, x1, y0, z0), u)
        b = _lerp(g(xi0, yi1, zi0, x0, y1, z0), g(xi1, yi1, zi0, x1, y1, z0), u)
        c = _lerp(g(xi0, yi0, zi1, x0, y0, z1), g(xi1, yi0, zi1, x1, y0, z1), u)
        d = _lerp(g(xi0, yi1, zi1, x0, y1, z1), g(xi1, yi1, zi1, x1, y1, z1), u)
        return _lerp(_lerp(a, b, v), _lerp(c, d, v), w)

    def value3d(self, p: Vec3 | Sequence[float]) -> float:
        x, y, z = p
        return self._at(x, y, z)

    def value2d(self, p: Sequence[float]) -> float:
        x, y = p
        return self._at(x, y, 0.5)

    def accumulated_value3d(
        self, p: Vec3 | Sequence[float], octaves: int, lacunarity: float, persistence: float
    ) -> float:
        """Sum of octaves; each scales the input by lacunarity and the output by persistence."""
        x, y, z = p
        value = 0.0
        scale = 1.0
        amplitude = 1.0
        for _ in range(octaves):
            scale *= lacunarity
            amplitude *= persistence
            value += self._at(x * scale, y * scale, z * scale) * amplitude
        return value

    def accumulated_value2d(
        self, p: Sequence[float], octaves: int, lacunarity: float, persistence: float
    ) -> float:
        x, y = p
        return self.accumulated_value3d((x, y, 0.5), octaves, lacunarity, persistence)

    def value3d01(self, p: Vec3 | Sequence[float]) -> float:
        return self.value3d(p) / 1.0 / 2.0

    def value2d01(self, p: Sequence[float]) -> float:
        return self.value2d(p) / 1.0 / 2.0

    @staticmethod
    def accumulated_value_max(octaves: int, persistence: float) -> float:
        """Geometric series sum of the octave amplitudes."""
        return persistence * ((1.0 - math.pow(persistence, octaves)) / (1.0 - persistence))