"""Fractal Perlin noise used for terrain height."""

from __future__ import annotations

import math
import random
from functools import lru_cache

_B = 0x100
_N = 0x1000
_BM = 0xFF


def _s_curve(t):
    return t * t * (3.0 - 2.0 * t)


def _lerp(t, a, b):
    return a + t * (b - a)


def _normalize(*components):
    length = math.sqrt(sum(c * c for c in components))
    if length == 0:
        return tuple(math.nan for _ in components)
    return tuple(c / length for c in components)


class Perlin:
    """Sum of ``n`` octaves of gradient noise.

    Each octave is weighted by ``1 / alpha**k`` and sampled at coordinates
    scaled by ``beta**k``.
    """

    def __init__(self, alpha, beta, n, seed):
        self.alpha = alpha
        self.beta = beta
        self.n = n
        rng = random.Random(seed)

        def rand_int():
            return rng.getrandbits(63)

        def gradient_component():
            return ((rand_int() % (_B + _B)) - _B) / _B

        size = _B + _B + 2
        perm = [0] * size
        g2 = [(0.0, 0.0)] * size
        for i in range(_B):
            perm[i] = i
            gradient_component()  # 1D gradient, unused for 2D noise
            g2[i] = _normalize(gradient_component(), gradient_component())
            # 3D gradient: drawn so the permutation below stays the same
            for _ in range(3):
                gradient_component()

        for i in range(_B, 0, -1):
            j = rand_int() % _B
            perm[i], perm[j] = perm[j], perm[i]

        perm[_B:2 * _B] = perm[:_B]
        perm[2 * _B:] = perm[_B:_B + 2]
        g2[_B:2 * _B] = g2[:_B]
        g2[2 * _B:] = g2[_B:_B + 2]

        self._perm = tuple(perm)
        self._g2 = tuple(g2)

    def _noise2(self, x, y):
        t = x + _N
        bx0 = int(t) & _BM
        bx1 = (bx0 + 1) & _BM
        rx0 = t - int(t)
        rx1 = rx0 - 1.0

        t = y + _N
        by0 = int(t) & _BM
        by1 = (by0 + 1) & _BM
        ry0 = t - int(t)
        ry1 = ry0 - 1.0

        perm = self._perm
        i = perm[bx0]
        j = perm[bx1]
        b00 = perm[i + by0]
        b10 = perm[j + by0]
        b01 = perm[i + by1]
        b11 = perm[j + by1]

        sx = _s_curve(rx0)
        sy = _s_curve(ry0)

        def at(rx, ry, q):
            return rx * q[0] + ry * q[1]

        g2 = self._g2
        a = _lerp(sx, at(rx0, ry0, g2[b00]), at(rx1, ry0, g2[b10]))
        b = _lerp(sx, at(rx0, ry1, g2[b01]), at(rx1, ry1, g2[b11]))
        return _lerp(sy, a, b)

    def noise2d(self, x, y):
        """Fractal noise value at (x, y)."""
        total = 0.0
        scale = 1.0
        for _ in range(self.n):
            total += self._noise2(x, y) / scale
            scale *= self.alpha
            x *= self.beta
            y *= self.beta
        return total


@lru_cache(maxsize=None)
def _instance():
    return Perlin(2, 2, 4, 12345)


def noise2d(x, z):
    """Terrain height offset at block column (x, z)."""
    return _instance().noise2d(x * 0.02, z * 0.02) * 20