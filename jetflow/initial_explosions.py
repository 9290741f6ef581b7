"""Initial conditions for explosions, shells, ejecta and jets.

Every initial condition is a dataclass whose ``initial`` method takes a
position ``(r, theta, phi)`` and returns the list of primitive variables
``(rho, P, u1, u2[, u3], passives...)``.  ``num_c`` is the number of
non-passive variables (4 for axisymmetric runs, 5 when the azimuthal
velocity is evolved) and ``num_n`` the number of passive scalars.  Passive
scalars an initial condition does not set are zero.
"""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field

__all__ = [
    "InitialCondition",
    "Blandford",
    "Breakout",
    "Breakout2",
    "Breakout3",
    "Chevalier",
    "Disk",
    "Ejecta",
    "SNEjecta",
    "Explosion",
    "Fallback",
    "Impulse",
    "jet_shell",
    "boost",
    "ModelJet",
    "Shell",
    "Structure",
    "Mush",
    "RayleighTaylor",
    "Smooth",
    "Messy",
]


@dataclass(kw_only=True)
class InitialCondition(ABC):
    """Base of all initial conditions: fixes the layout of the primitive array."""

    num_n: int = 0
    num_c: int = 4

    def __post_init__(self) -> None:
        if self.num_c < 4:
            raise ValueError(f"num_c must be at least 4, not {self.num_c}")
        if self.num_n < 0:
            raise ValueError(f"num_n cannot be negative, not {self.num_n}")

    @property
    def num_q(self) -> int:
        """Total number of primitive variables."""
        return self.num_c + self.num_n

    def _state(
        self, rho: float, pp: float, u1: float, u2: float = 0.0,
        scalars: Sequence[float] = (),
    ) -> list[float]:
        prim = [0.0] * self.num_q
        prim[0] = rho
        prim[1] = pp
        prim[2] = u1
        prim[3] = u2
        used = list(scalars)[: self.num_n]
        prim[self.num_c:self.num_c + len(used)] = used
        return prim

    @abstractmethod
    def initial(self, x: Sequence[float]) -> list[float]:
        """Primitive variables at position ``x = (r, theta, phi)``."""


def _wind_density(mass: float, r: float) -> float:
    """Density of the stellar wind around a star of the given code mass."""
    msol = mass / 4.77
    msol_per_year = 1.49e-8 * msol / 1.0
    mdot = 1e-5 * msol_per_year
    vwind = 0.012
    return mdot / 4.0 / math.pi / vwind / r / r


def _gaussian_energy(energy: float, width: float, r: float) -> float:
    """Energy density of a Gaussian deposit of total ``energy``."""
    return energy * math.exp(-r * r / width / width) / (math.sqrt(math.pi) * width) ** 3


@dataclass(kw_only=True)
class Blandford(InitialCondition):
    """Blandford-McKee blast wave into a wind-like r**-2 medium at time ``t_min``."""

    t_min: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        rho0 = 1.0
        pmin = 1e-5
        k = 2.0
        energy = 1.0
        t = self.t_min
        length = (energy / rho0) ** (1.0 / 3.0)
        rho_out = rho0 * (t / length) ** (-k)
        g = math.sqrt((17.0 - 4.0 * k) / 8.0 / math.pi) * (energy / rho_out / t ** 3) ** 0.5
        m = 3.0 - k
        chi = (1.0 + 2.0 * (m + 1.0) * g * g) * (1.0 - r / t)

        if chi < 1.0:
            return self._state(rho0 * (r / length) ** (-k), pmin, 0.0)

        f = chi ** (-(17.0 - 4.0 * k) / (12.0 - 3.0 * k))
        gg = 1.0 / chi
        h = chi ** (-(7.0 - 2.0 * k) / (4.0 - k))
        pp = (2.0 / 3.0) * rho_out * g * g * f
        gam = g * math.sqrt(0.5 * gg)
        rho = 2.0 * rho_out * g * g * h / gam
        return self._state(rho, pp, gam)


@dataclass(kw_only=True)
class Breakout(InitialCondition):
    """Broken power-law star with a central thermal bomb, inside a wind."""

    rmin: float
    gamma_law: float = 5.0 / 3.0
    explosion_energy: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        aspect = 1.0
        stretch = math.sqrt(1.0 + (1.0 / aspect / aspect - 1.0) * math.sin(th) ** 2)
        stretch *= aspect ** (2.0 / 3.0)
        r *= stretch

        big_r = 1.0
        n = 3.85
        k = 1.9
        rc = 0.5 * big_r
        rexp = 5.0 * self.rmin
        rho0 = 1.0
        mass = 1.17 * rho0 * (4.0 * math.pi / (3.0 - k)) * (0.5 * big_r) ** 3
        pexp = (self.gamma_law - 1.0) * _gaussian_energy(self.explosion_energy * mass, rexp, r)
        wind = _wind_density(mass, r)

        if r < rc:
            rho = rho0 * (rc / r) ** k
        elif r < big_r:
            rho = rho0 * (((big_r / r - 1.0) / (big_r / rc - 1.0)) ** n + wind)
        else:
            rho = rho0 * wind
        return self._state(rho, pexp + 1e-6 * rho, 0.0)


@dataclass(kw_only=True)
class Breakout2(InitialCondition):
    """Parabolic star with a steepened edge and a central thermal bomb."""

    rmin: float
    gamma_law: float = 5.0 / 3.0

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        big_r = 1.0
        rho0 = 1.0
        rhoc = 0.5 * rho0
        pmin = 1e-6

        rho = max(rho0 * (1.0 - r * r / big_r / big_r), 0.0)
        mass = 0.115 * (4.0 * math.pi * big_r ** 3 * rho0)
        rexp = 5.0 * self.rmin
        pexp = (self.gamma_law - 1.0) * _gaussian_energy(0.0033 * mass, rexp, r)
        wind = _wind_density(mass, r)

        if rho < rhoc:
            xx = max(rho / rhoc - 0.5, 0.0)
            rho = rhoc * math.sqrt(2.0 * xx)
        rho += wind
        return self._state(rho, pexp + pmin * rho, 0.0)


@dataclass(kw_only=True)
class Breakout3(InitialCondition):
    """Stellar model with a central cavity, an atmosphere and a wind.

    ``rho_wind`` sets the wind density at the stellar radius.
    """

    gamma_law: float = 5.0 / 3.0
    explosion_energy: float
    rho_wind: float

    def initial(self, x: Sequence[float]) -> list[float]:
        m0 = 1.0
        r0 = 1.0
        r = x[0]
        rho0 = 0.0615 * m0 / r0 ** 3
        rho_wind = self.rho_wind * m0 / r0 ** 3
        n = 3.5
        r_cav = 1.5e-3 / 1.6
        r_atm = 0.02 * r0
        r_cut = 0.98 * r0

        if r > r_cut:
            rho_cut = rho0 * (r0 / r_cut) ** 2.65 * (1.0 - r_cut / r0) ** n
            rho = rho_wind * (r0 / r) ** 2 + rho_cut * math.exp(-(r - r_cut) / r_atm)
        else:
            rho = rho0 * (r0 / r) ** 2.65 * (1.0 - r / r0) ** n
            if r < r_cav:
                rho *= 1.0e-3

        pp = min(1e-6 * rho, m0 / r0 ** 3)
        rexp = 1e-2 * r0
        pp += (self.gamma_law - 1.0) * _gaussian_energy(self.explosion_energy, rexp, r)
        return self._state(rho, pp, 0.0)


@dataclass(kw_only=True)
class Chevalier(InitialCondition):
    """Self-similar ejecta running into a wind, with an optional density ripple.

    ``delta`` is the amplitude of the log-density perturbation.  The first
    passive scalar marks ejecta (1) and wind (0).
    """

    t_min: float
    delta: float = 0.0

    def initial(self, x: Sequence[float]) -> list[float]:
        n = 7.0
        s = 2.0
        r, th = x[0], x[1]
        t = self.t_min
        g = 1.0
        q = 1.0

        rho1 = (r / t / g) ** (-n) * t ** (-3.0)
        rho2 = q * r ** (-s)
        r0 = (t ** (n - 3.0) * g ** n / q) ** (1.0 / (n - s))

        rho = rho1 + rho2
        mix = rho1 * rho1 / (rho1 * rho1 + rho2 * rho2)
        v = (r / t) * mix

        r1 = 0.015 * r0
        if r < r1:
            rho = (r1 / t / g) ** (-n) * t ** (-3.0) * (r / r1) ** (-n * r / r1)

        marker = 0.0 if mix < 0.5 else 1.0

        k = 50.0
        ptb = self.delta * math.sin(k * math.log(r)) * math.sin(k * th)

        v0 = min(r ** ((s - 3.0) / (n - 3.0)), r / t)
        mach = 30.0
        cs = v0 / mach
        pmin = rho * cs * cs
        return self._state(rho * math.exp(ptb), pmin, v, 0.0, (marker,))


@dataclass(kw_only=True)
class Disk(InitialCondition):
    """Homologous ejecta expanding into a thick disk and a wind.

    ``scale_height`` is the angular thickness of the disk.
    """

    t_min: float
    scale_height: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        t = self.t_min
        hr = self.scale_height
        e_ej = 100.0
        m_ej = 100.0
        m_disk = 1.0
        a_wind = 1e-8
        r_disk = 1.0

        rho_wind = a_wind / r / r

        d = 1.0
        n = 10.0
        vt2 = e_ej / m_ej * 2.0 * (5.0 - d) * (n - 5.0) / ((3.0 - d) * (n - 3.0))
        vt = math.sqrt(vt2)
        zeta = ((n - 3.0) * (3.0 - d) / (n - d)) / 4.0 / math.pi
        rho_t = zeta * m_ej / (vt * t) ** 3
        if r > 10.0 * vt * t:
            rho_ej = 0.0
        elif r > vt * t:
            rho_ej = rho_t * (r / vt / t) ** (-n)
        else:
            rho_ej = rho_t * (r / vt / t) ** (-d)

        rho_disk = (
            math.sqrt(1.0 / hr / hr + 0.25 * math.pi)
            * (m_disk / r_disk ** 3 * (r / r_disk) ** (-2.0))
            * math.exp(2.0 / hr / hr * (math.sin(th) - 1.0))
        )
        rho_disk *= math.exp(-((r / r_disk) ** 4)) / 10.2

        rho = rho_disk + rho_wind + rho_ej
        v = r / t * (rho_ej / rho)
        return self._state(rho, 1e-3 * rho, v)


def _broken_power_ejecta(
    ic: InitialCondition, r: float, t: float, e_ej: float, d: float, pressure_ratio: float
) -> list[float]:
    """Relativistic homologous ejecta with a broken power-law density."""
    m_ej = 1.0
    n = 10.0
    vt2 = e_ej / m_ej * 2.0 * (5.0 - d) * (n - 5.0) / ((3.0 - d) * (n - 3.0))
    vt = math.sqrt(vt2)
    big_r = vt * t
    zeta = ((n - 3.0) * (3.0 - d) / (n - d)) / 4.0 / math.pi
    rho_t = zeta * m_ej / big_r ** 3
    if r > big_r:
        rho = rho_t * (r / big_r) ** (-n)
    else:
        rho = rho_t * (r / big_r) ** (-d)
    pp = pressure_ratio * rho * vt2
    v = r / t
    if v > 0.5:
        v = 0.0
    u = v / math.sqrt(1.0 - v * v)
    marker = 1.0 if r < big_r else 0.0
    return ic._state(rho, pp, u, 0.0, (marker,))


@dataclass(kw_only=True)
class Ejecta(InitialCondition):
    """Broken power-law ejecta; the first passive scalar marks the inner core."""

    t_min: float

    def initial(self, x: Sequence[float]) -> list[float]:
        return _broken_power_ejecta(self, x[0], self.t_min, 0.01, 2.0, 1e-5)


@dataclass(kw_only=True)
class SNEjecta(InitialCondition):
    """Supernova ejecta of energy ``explosion_energy`` with a shallow core."""

    t_min: float
    explosion_energy: float

    def initial(self, x: Sequence[float]) -> list[float]:
        return _broken_power_ejecta(
            self, x[0], self.t_min, self.explosion_energy, 1.0, 1e-10
        )


@dataclass(kw_only=True)
class Explosion(InitialCondition):
    """Point explosion of unit energy in a uniform medium."""

    gamma_law: float = 5.0 / 3.0

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        r0 = 0.02
        pmin = 1e-6
        px = (self.gamma_law - 1.0) * _gaussian_energy(1.0, r0, r)
        return self._state(1.0, pmin + px, 0.0)


@dataclass(kw_only=True)
class Fallback(InitialCondition):
    """Collapsing envelope with a log-Lorentzian density and a central bomb.

    The first passive scalar marks material outside the unit radius.
    """

    k: float = 1.0

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        mass = 1.0
        energy = 1.0
        big_r = 1.0
        klog = self.k * math.log(r / big_r)
        rho = (self.k / math.pi) * mass / (4.0 * math.pi * r ** 3) / (1.0 + klog * klog)
        p0 = 1e-3 * rho
        rexp = 1e-4 * big_r
        pexp = energy / rexp ** 3 * (2.0 * math.pi) ** (-1.5) / 1.5
        pp = p0 + pexp * math.exp(-0.5 * r * r / (rexp * rexp))
        marker = 1.0 if r > big_r else 0.0
        return self._state(rho, pp, 0.0, 0.0, (marker,))


@dataclass(kw_only=True)
class Impulse(InitialCondition):
    """Gaussian deposit of energy and mass; ``eta`` is the energy per unit mass."""

    rmin: float
    gamma_law: float = 5.0 / 3.0
    eta: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        r0 = 100.0 * self.rmin
        rho0 = 1.0
        pmin = 1e-5
        ex = _gaussian_energy(1.0, r0, r)
        px = (self.gamma_law - 1.0) * ex
        rhox = ex / self.eta
        return self._state(rhox + rho0, px + pmin, 0.0)


def jet_shell(x: float, z: float, t: float, gam: float, g_boost: float) -> tuple[float, bool]:
    """Density of a relativistic shell at ``(x, z)`` and whether the point lies in it."""
    r = math.sqrt(x * x + z * z)
    energy = 2.0 / gam / g_boost
    rho0 = 1.0
    big_r = t * gam / math.sqrt(1.0 + gam * gam)
    if r > big_r:
        return rho0, False
    rhomax = 1.0 / 2.0 / math.pi * energy / t ** 3
    return rhomax * (1.0 - big_r / t) / (1.0 - r / t), True


def boost(gam: float, z: float, t: float) -> tuple[float, float]:
    """Lorentz boost of the event ``(z, t)`` along z with Lorentz factor ``gam``."""
    v = math.sqrt(1.0 - 1.0 / gam / gam)
    return gam * (z - v * t), gam * (t - v * z)


@dataclass(kw_only=True)
class ModelJet(InitialCondition):
    """A boosted relativistic shell standing in for a jet, in an r**-2 medium.

    The first passive scalar marks jet material.
    """

    t_min: float
    gam_exp: float = 4.5
    gam_boost: float = 6.0

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        t = self.t_min
        zz, tt = boost(self.gam_boost, r * math.cos(th), t)
        rho, inside = jet_shell(r * math.sin(th), zz, tt, self.gam_exp, self.gam_boost)
        if not inside:
            return self._state(r ** -2.0, 1e-5 * r ** -2.0, 0.0, 0.0, (0.0,))
        vr = r / t
        ur = vr / math.sqrt(1.0 - vr * vr)
        return self._state(rho, 1e-5 * rho, ur, 0.0, (1.0,))


@dataclass(kw_only=True)
class Shell(InitialCondition):
    """Relativistic shell of Lorentz factor 30 coasting into a uniform medium."""

    t_min: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        k = 0.0
        t = self.t_min
        th_j = math.pi
        gam = 30.0
        delta = 1.0
        energy = 1.0
        rho0 = 1.0
        r_sedov = (energy / rho0) ** (1.0 / 3.0)
        kk = 1e-8
        gmax = gam * delta / (delta - 0.5)
        big_r = t * math.sqrt(1.0 - 1.0 / gmax / gmax)

        if r > big_r or th > th_j:
            rho = rho0 * (r_sedov / r) ** k
            return self._state(rho, kk * rho ** (4.0 / 3.0), 0.0, 0.0, (0.0,))

        rhomax = delta / 2.0 / math.pi * energy / t ** 3
        rho = rhomax * ((1.0 - big_r / t) / (1.0 - r / t)) ** delta
        w = math.exp(-((2.0 * (r - big_r) / big_r) ** 4))
        v = w * r / t
        u = v / math.sqrt(1.0 - v * v)
        return self._state(rho, kk * rho ** (4.0 / 3.0), u, 0.0, (1.0,))


@dataclass(kw_only=True)
class Structure(InitialCondition):
    """Blandford-McKee blast wave with energy falling off away from the axis."""

    t_min: float

    def initial(self, x: Sequence[float]) -> list[float]:
        r, th = x[0], x[1]
        rho0 = 1.0
        pmin = 1e-5
        dth = 0.1
        energy = 1.0 / (1.0 + th * th / dth / dth) ** 3
        t = self.t_min
        length = (energy / rho0) ** (1.0 / 3.0)
        g = math.sqrt(17.0 / 8.0 / math.pi) * (t / length) ** (-1.5)
        big_r = (1.0 - 1.0 / 8.0 / g / g) * t

        if r > big_r:
            return self._state(rho0, pmin, 0.0)

        chi = (1.0 + 8.0 * g * g) * (1.0 - r / t)
        pp = (2.0 / 3.0) * rho0 * g * g * chi ** (-17.0 / 12.0)
        gam = g / math.sqrt(2.0 * chi)
        rho = 2.0 * rho0 * g * g * chi ** (-7.0 / 4.0) / gam
        return self._state(rho, pp, gam)


@dataclass(kw_only=True)
class Mush(InitialCondition):
    """Light core inside a dense medium, with a smooth cosine pressure bump.

    The first passive scalar marks the core.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        r0 = 0.5
        pmin = 1e-5
        rho, marker = (0.5, 1.0) if r < r0 else (1.0, 0.0)
        r_max = 1.0
        p0 = 1.0
        pp = pmin + (p0 - pmin) * 0.5 * (math.cos(math.pi * r / r_max) + 1.0)
        return self._state(rho, pp, 0.0, 0.0, (marker,))


@dataclass(kw_only=True)
class RayleighTaylor(InitialCondition):
    """Homologous ejecta ball with a small random velocity perturbation.

    The perturbation is drawn from a generator seeded with ``seed``; the first
    passive scalar marks the ejecta.
    """

    seed: int = 666
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self._rng = random.Random(self.seed)
        self._rng.random()

    def initial(self, x: Sequence[float]) -> list[float]:
        energy = 1.0
        mass = 1.0
        r = x[0]
        r0 = 0.01
        rho0 = 1.0
        pmin = 1e-5

        volume = 4.0 / 3.0 * math.pi * r0 ** 3
        vmax = math.sqrt(10.0 / 3.0 * energy / mass)
        if r < r0:
            rho, v, marker = mass / volume, vmax * r / r0, 1.0
        else:
            rho, v, marker = rho0, 0.0, 0.0
        vpert = 1e-3 * v * (self._rng.random() - 0.5)
        return self._state(rho, pmin, v + vpert, 0.0, (marker,))


@dataclass(kw_only=True)
class Smooth(InitialCondition):
    """Gaussian ejecta blob on a uniform background at constant temperature.

    The first passive scalar is the ejecta mass fraction.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        r0 = 0.1
        t0 = 2.5
        rho_ej = r0 ** -3.0 * math.exp(-((r / r0) ** 2))
        rho = rho_ej + 1.0
        fraction = rho_ej / rho
        v = r / r0 * fraction
        return self._state(rho, rho * t0, v, 0.0, (fraction,))


@dataclass(kw_only=True)
class Messy(InitialCondition):
    """Steep ejecta core inside a circumstellar shell, at constant temperature.

    The first passive scalar marks the ejecta.
    """

    def initial(self, x: Sequence[float]) -> list[float]:
        r = x[0]
        r0 = 1.0
        rc = 0.1 * r0
        t0 = 1.0
        day = t0 / 45.0
        rho_csm = 1.0
        t_ej = 5 * day
        rt = 0.31654 * rc
        rho_ej = 3.0307 * rho_csm
        v0 = r0 / t0
        p_over_rho = 1e-5 * v0 * v0

        v = 0.0
        marker = 0.0
        rho = rho_csm
        if r < rc:
            rho = rho_ej * (rc / r) ** 10.0
            v = r / t_ej
            marker = 1.0
            if r < rt:
                rho = rho_ej * (rc / rt) ** 10.0 * rt / r
        elif r > 2.0 * rc:
            rho *= 1e-4
        return self._state(rho, rho * p_over_rho, v, 0.0, (marker,))