"""Initial conditions for test problems, stellar models, galaxies and winds.

These follow the conventions of :mod:`jetflow.initial_explosions`: each
``initial`` method takes ``(r, theta, phi)`` and returns the primitive
variables ``(rho, P, u1, u2[, u3], passives...)``.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from .initial_explosions import InitialCondition

__all__ = [
    "Circle",
    "Dust",
    "Entropy",
    "Galaxy",
    "NSModel",
    "Polytrope",
    "PowerLaw",
    "ShockTube",
    "STModel",
    "STModel2",
    "STModel3",
    "mass_appx",
    "STModel4",
    "STModel4Explode",
    "Uniform",
    "Wind",
]


def _cartesian_offset(x: Sequence[float], centre: tuple[float, float, float]) -> float:
    """Distance between the spherical point ``x`` and a Cartesian ``centre``."""
    r, th, ph = x[0], x[1], x[2]
    dx = r * math.sin(th) * math.cos(ph) - centre[0]
    dy = r * math.sin(th) * math.sin(ph) - centre[1]
    dz = r * math.cos(th) - centre[2]
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def _spherical_point(radius: float, th: float, ph: float) -> tuple[float, float, float]:
    return (
        radius * math.sin(th) * math.cos(ph),
        radius * math.sin(th) * math.sin(ph),
        radius * math.cos(th),
    )


@dataclass(kw_only=True)
class Circle(InitialCondition):
    """Overdense, overpressured ball of radius 0.25 centred on the axis at z = 0.6."""

    def initial(self, x: Sequence[float]) -> list[float]:
        rr = _cartesian_offset(x, (0.0, 0.0, 0.6))
        if rr < 0.25:
            return self._state(1.0, 1.0, 0.0)
        return self._state(0.1, 0.1, 0.0)


@dataclass(kw_only=True)
class Dust(InitialCondition):
    """Cold uniform sphere of unit radius in a tenuous background."""

    def initial(self, x: Sequence[float]) -> list[float]:
        rho = 1.0 if x[0] < 1.0 else 1e-3
        return self._state(rho, 1e-9, 0.0)


@dataclass(kw_only=True)
class Entropy(InitialCondition):
    """Gaussian density bump on the axis at r = 5, on the adiabat P = rho**(4/3)."""

    def initial(self, x: Sequence[float]) -> list[float]:
        rr = _cartesian_offset(x, _spherical_point(5.0, 0.0, 0.0))
        amplitude = 30.0
        rho = 1.0 + amplitude * math.exp(-3.0 * rr * rr)
        return self._state(rho, rho ** (4.0 / 3.0), 0.0)


@dataclass(kw_only=True)
class Galaxy(InitialCondition):
    """Stratified galactic disk with a central energy injection of width ``rmin``."""

    rmin: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        z = r * math.cos(th)
        h = 0.189
        a = 0.299
        b = 0.001
        z0 = 1.0
        kz = 2.0
        rho = a * math.exp(-0.5 * z * z / h / h) + b * (z0 / (abs(z) + z0)) ** kz
        rin = self.rmin
        pmax = 1.0 / rin ** 3
        pp = 1e-8 * rho + pmax * math.exp(-0.5 * (r * r / rin / rin))
        return self._state(rho, pp, 0.0)


@dataclass(kw_only=True)
class NSModel(InitialCondition):
    """Homologous merger ejecta at time ``t_min`` over an exponential atmosphere.

    The first passive scalar marks the interstellar medium.
    """

    t_min: float

    def initial(self, x: Sequence[float]) -> list[float]:
        w = 1.0
        v_max = 0.3
        m0 = 1.0
        t = self.t_min
        r0 = v_max * t
        th = x[1]
        r = x[0] * w ** (2.0 / 3.0) * math.sqrt(
            math.cos(th) ** 2 + math.sin(th) ** 2 / w / w
        )

        r1 = 0.06 * r0
        rhoc = m0 / r0 ** 3 / 0.0102913
        if r > r0:
            rhostar = 0.0
        else:
            rhostar = rhoc / (1.0 + (r / r1) ** 2.5) * (1.0 - r / r0) ** 0.75

        rho_trans = 1e-8
        rho_ism = 1e-20
        rho_ext = rho_trans * math.exp(-x[0] / r0) + rho_ism
        rho = rhostar + rho_ext

        v = v_max * (x[0] / r0) * rhostar / rho
        u = v / math.sqrt(1.0 - v * v)
        marker = 0.0 if rho_ism / rho < 0.5 else 1.0
        return self._state(rho, 1e-6 * rho, u, 0.0, (marker,))


@dataclass(kw_only=True)
class Polytrope(InitialCondition):
    """Analytic polytrope of unit mass and scale radius, index 1 or 5.

    The pressure is raised by 6.5 per cent above hydrostatic balance.
    """

    index: int = 5

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.index not in (1, 5):
            raise ValueError(f"only polytropic indices 1 and 5 are analytic, not {self.index}")

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        big_r = 1.0
        g = 1.0
        mass = 1.0
        rho_min = 1e-8
        if self.index == 1:
            rhoc = mass / big_r ** 3 / 4.0 / math.pi / math.pi
            rho = rhoc * math.sin(r / big_r) / (r / big_r) + rho_min
            if r > math.pi * big_r:
                rho = rho_min
            pp = 2.0 * math.pi * g * rho * rho * big_r * big_r
        else:
            rhoc = mass / big_r ** 3 / 4.0 / math.pi / math.sqrt(3.0)
            base = 1.0 + r * r / big_r / big_r / 3.0
            rho = rhoc / base ** 2.5
            pp = 2.0 / 3.0 * math.pi * g * rhoc * rhoc * big_r * big_r / base ** 3
        return self._state(rho, 1.065 * pp, 0.0)


@dataclass(kw_only=True)
class PowerLaw(InitialCondition):
    """Central bomb in an r**-4 cloud, with an angular velocity ripple at r = 0.1."""

    gamma_law: float = 5.0 / 3.0

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        eta = 10.0
        w0 = 0.1
        n = 20.0
        rm = 0.0003
        r0 = 0.1
        rho0 = 1.0
        mass = rho0 * (4.0 * math.pi / 3.0) * r0 ** 4 / rm
        energy = eta * mass
        rho = rho0 * ((r0 / (r + rm)) ** 4 + 1.0)
        e0 = energy / (math.sqrt(math.pi) * rm) ** 3
        p0 = (self.gamma_law - 1.0) * e0
        pp = p0 * math.exp(-r * r / rm / rm) + 1e-5 * rho
        xx = 4.0 * (r - r0) / r0
        vr = w0 * math.exp(-(xx ** 4)) * math.sin(n * th)
        return self._state(rho, pp, vr)


@dataclass(kw_only=True)
class ShockTube(InitialCondition):
    """Overdense ball of radius 0.25 placed off the axis at r = 5."""

    def initial(self, x: Sequence[float]) -> list[float]:
        rr = _cartesian_offset(x, _spherical_point(5.0, 1.45, 0.15))
        if rr < 0.25:
            return self._state(1.0, 1.0, 0.0)
        return self._state(0.1, 0.1, 0.0)


def _core_envelope(r: float, rhoc: float, k: float, n: float, a: float) -> float:
    return (1.0 + (a / rhoc * r ** (-k)) ** (-n)) ** (1.0 / n)


@dataclass(kw_only=True)
class STModel(InitialCondition):
    """Fitted stellar density profile of unit radius inside a weak wind."""

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rhoc = 25.95
        rmax = 1.0
        rho_wind = 1e-9
        edge = max(1.0 - r / rmax, 0.0)
        rho = (
            rhoc * edge ** 1.5 / _core_envelope(r, rhoc, 6.0, 0.5, 0.00583)
            + rho_wind * (rmax / r) ** 2
        )
        return self._state(rho, 1e-4 * rho, 0.0, 0.0, (0.0,))


@dataclass(kw_only=True)
class STModel2(InitialCondition):
    """Three-zone fitted stellar profile of radius 0.65 inside a weak wind."""

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rhoc = 3e7
        r1 = 0.0017
        r2 = 0.0125
        r3 = 0.65
        k1 = 3.24
        k2 = 2.57
        n = 16.7
        rho_wind = 1e-9
        edge = max(1.0 - r / r3, 0.0)
        rho = (
            rhoc * edge ** n / (1.0 + (r / r1) ** k1 / (1.0 + (r / r2) ** k2))
            + rho_wind * (r3 / r) ** 2
        )
        return self._state(rho, 1e-6 * rho, 0.0, 0.0, (0.0,))


@dataclass(kw_only=True)
class STModel3(InitialCondition):
    """Centrally steepened stellar profile with capped density and pressure.

    The second passive scalar marks the core inside r = 0.03.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rhoc = 0.085
        rmax = 1.0
        rho_wind = 1e-9
        edge = max(1.0 - r / rmax, 0.0)
        rho = (
            rhoc * r ** -2.5 * edge ** 1.5 / _core_envelope(r, rhoc, 6.0, 0.5, 0.00583)
            + rho_wind * (rmax / r) ** 2
        )
        rho = min(rho, 1e6)
        pp = min(1e-4 * rho, 10.0)
        core = 0.0 if r > 0.03 else 1.0
        return self._state(rho, pp, 0.0, 0.0, (0.0, core))


def mass_appx(r: float, rin: float) -> float:
    """Approximate enclosed mass fraction at radius ``r`` for a star of unit radius."""
    if r > 1.0:
        return 1.0
    if r < rin:
        return 0.0
    f1 = 2.0 * (r ** 0.35 - rin ** 0.35)
    if f1 == 0.0:
        return 0.0
    n = 6.0
    return (f1 ** (-n) + 1.0) ** (-1.0 / n)


_R_CAVITY = 1.5e-3 / 1.6


def _stmodel4_density(r: float) -> float:
    rho0 = 0.0615
    rho_wind = 1e-9
    if r <= 1.0:
        rho = rho0 * (1.0 / r) ** 2.65 * (1.0 - r) ** 3.5 + rho_wind
        if r < _R_CAVITY:
            rho *= 1e-3
        return rho
    return rho_wind * (1.0 / r) ** 2


def _stmodel4_scalars(r: float) -> tuple[float, float, float, float]:
    """Peak pressure, initial mass coordinate, nickel and wind fractions."""
    return (0.0, mass_appx(r, 0.0), 0.0, 0.0)


@dataclass(kw_only=True)
class STModel4(InitialCondition):
    """Stellar model with a central cavity; tracks the mass coordinate.

    Passive scalars: peak pressure, initial mass coordinate, nickel fraction
    and wind fraction.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rho = _stmodel4_density(r)
        pp = min(1e-6 * rho, 1.0)
        return self._state(rho, pp, 0.0, 0.0, _stmodel4_scalars(r))


@dataclass(kw_only=True)
class STModel4Explode(InitialCondition):
    """:class:`STModel4` with a Gaussian thermal bomb of ``explosion_energy``.

    The pressure cap only applies when there is no explosion.
    """

    gamma_law: float = 5.0 / 3.0
    explosion_energy: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rho = _stmodel4_density(r)
        pp = 1e-6 * rho
        r0 = 2.0 * _R_CAVITY
        px = (self.gamma_law - 1.0) * self.explosion_energy * math.exp(-r * r / r0 / r0)
        px /= (math.sqrt(math.pi) * r0) ** 3
        if self.explosion_energy < 1e-8:
            pp = min(pp, 1.0)
        return self._state(rho, pp + px, 0.0, 0.0, _stmodel4_scalars(r))


@dataclass(kw_only=True)
class Uniform(InitialCondition):
    """Uniform, cold, static medium."""

    def initial(self, x: Sequence[float]) -> list[float]:
        rho = 1.0e-7
        return self._state(rho, rho * 1e-5, 0.0, 0.0, (0.0,))


@dataclass(kw_only=True)
class Wind(InitialCondition):
    """Adiabatic Bernoulli wind of unit speed and density at unit radius.

    The wind speed is found by four Newton steps from the launch speed.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        big_r = 1.0
        rho0 = 1.0
        vw = 1.0
        gam = 5.0 / 3.0
        p0 = rho0 * vw * vw / gam
        mdot = rho0 * vw * big_r * big_r
        s = p0 / rho0 ** gam
        k = 0.5 * vw * vw + p0 / rho0 / (gam - 1.0)

        v = vw
        for _ in range(4):
            compression = (mdot / v / r / r) ** (gam - 1.0)
            f = -v * v + 2.0 * k - 2.0 * s / (gam - 1.0) * compression
            dfdv = -2.0 * v + 2.0 * s * compression / v
            v -= f / dfdv

        rho = mdot / v / r / r
        return self._state(rho, s * rho ** gam, v)