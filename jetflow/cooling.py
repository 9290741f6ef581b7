"""Optically thin radiative cooling applied as an energy sink."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence

from .cell import PPP, RHO, TAU

__all__ = ["cool_src", "add_cooling"]

# Reference temperature (P / rho) of about 1e5 K, and the floor below which
# no cooling happens.
T_REF = 3e-3
T_FLOOR = 0.05 * T_REF


def cool_src(prim: Sequence[float], cons: MutableSequence[float], dVdt: float) -> float:
    """Remove the energy radiated over ``dVdt`` from ``cons``; return the change."""
    rho = prim[RHO]
    temperature = prim[PPP] / rho
    if temperature <= T_FLOOR:
        return 0.0
    rate = -5.0 * rho * rho * (temperature - T_FLOOR) / T_REF * (temperature / T_REF) ** -1.7
    change = rate * dVdt
    cons[TAU] += change
    return change


def add_cooling(domain, geometry, dt: float) -> float:
    """Apply cooling over ``dt`` to every cell; return the total energy change."""
    total = 0.0
    for j in range(domain.n_theta):
        thm, thp = domain.theta_edges(j)
        for k in range(domain.n_phi):
            phm, php = domain.phi_edges(k)
            for c in domain.track(j, k):
                rp = c.riph
                rm = rp - c.dr
                dV = geometry.dV((rp, thp, php), (rm, thm, phm))
                total += cool_src(c.prim, c.cons, dV * dt)
    return total