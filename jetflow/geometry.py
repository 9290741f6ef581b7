"""Cell lengths, face areas and cell volumes for the supported coordinate systems.

Positions are given as triples ``(r, theta, phi)`` of the upper (``xp``) and
lower (``xm``) corners of a cell; in Cartesian coordinates the three entries
are simply the three axes.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

__all__ = ["CartesianGeometry", "SphericalGeometry"]


def _deltas(xp: Sequence[float], xm: Sequence[float]) -> tuple[float, float, float]:
    return xp[0] - xm[0], xp[1] - xm[1], xp[2] - xm[2]


def _sinc(x: float) -> float:
    """sin(x)/x with its limit of 1 at zero."""
    return 1.0 if x == 0.0 else math.sin(x) / x


class CartesianGeometry:
    """Rectangular coordinates: lengths, areas and volumes are plain products."""

    def dL(self, xp: Sequence[float], xm: Sequence[float], dim: int) -> float:
        """Length of the cell along axis ``dim``."""
        return xp[dim] - xm[dim]

    def dA(self, xp: Sequence[float], xm: Sequence[float], dim: int) -> float:
        """Area of the cell face normal to axis ``dim``."""
        dx, dy, dz = _deltas(xp, xm)
        if dim == 0:
            return dy * dz
        if dim == 1:
            return dx * dz
        return dx * dy

    def dV(self, xp: Sequence[float], xm: Sequence[float]) -> float:
        """Volume of the cell."""
        dx, dy, dz = _deltas(xp, xm)
        return dx * dy * dz


class SphericalGeometry:
    """Spherical coordinates (r, theta, phi) with exact volume integrals."""

    def dL(self, xp: Sequence[float], xm: Sequence[float], dim: int) -> float:
        """Arc length of the cell along coordinate ``dim`` at its centre."""
        r = 0.5 * (xp[0] + xm[0])
        th = 0.5 * (xp[1] + xm[1])
        if dim == 0:
            return xp[0] - xm[0]
        if dim == 1:
            return r * (xp[1] - xm[1])
        return r * math.sin(th) * (xp[2] - xm[2])

    def dA(self, xp: Sequence[float], xm: Sequence[float], dim: int) -> float:
        """Area of the cell face normal to coordinate ``dim``."""
        r = 0.5 * (xp[0] + xm[0])
        th = 0.5 * (xp[1] + xm[1])
        dr, dth, dph = _deltas(xp, xm)
        if dim == 0:
            sinth = math.sin(th) * _sinc(0.5 * dth)
            return r * r * sinth * dth * dph
        if dim == 1:
            return r * math.sin(th) * dr * dph
        return r * dr * dth

    def dV(self, xp: Sequence[float], xm: Sequence[float]) -> float:
        """Exact volume of the spherical cell."""
        th = 0.5 * (xp[1] + xm[1])
        dr, dth, dph = _deltas(xp, xm)
        r2 = (xp[0] * xp[0] + xm[0] * xm[0] + xp[0] * xm[0]) / 3.0
        sinth = math.sin(th) * _sinc(0.5 * dth)
        return r2 * sinth * dr * dth * dph