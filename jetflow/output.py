"""Plain-text snapshots of the grid and of its radially binned average.

``output`` writes two files.  ``<filestart>.dat`` holds one line per cell:
the cell centre ``r theta phi``, its widths ``dr dtheta dphi`` and its
primitive variables.  The first cell of every radial track is prefixed with
``# ``.  ``<filestart>_1d.dat`` holds ``num_r`` uniform radial bins.  Each
line gives the bin radius, then for each variable two values: the primitive
recovered from the binned conserved variables, and the volume-weighted
average primitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from os import PathLike
from pathlib import Path

__all__ = ["RadialProfile", "radial_average", "output"]


@dataclass
class RadialProfile:
    """Conserved variables and volume-weighted primitives summed into radial bins.

    ``cons[i][q]`` is the amount of conserved variable ``q`` in bin ``i``;
    ``prim_volume[i][q]`` is the integral of primitive ``q`` over the bin.
    Bins are uniform in radius between ``rmin`` and ``rmax``.
    """

    rmin: float
    rmax: float
    cons: list[list[float]]
    prim_volume: list[list[float]]

    @property
    def num_r(self) -> int:
        """Number of radial bins."""
        return len(self.cons)

    def bin_edges(self, i: int) -> tuple[float, float]:
        """Inner and outer radius of bin ``i``."""
        if not 0 <= i < self.num_r:
            raise IndexError(f"bin {i} outside 0..{self.num_r - 1}")
        width = self.rmax - self.rmin
        return (
            self.rmin + width * i / self.num_r,
            self.rmin + width * (i + 1) / self.num_r,
        )


def _active_ranges(domain) -> tuple[range, range]:
    """Theta and phi columns owned by this rank, without ghost columns."""
    ng = domain.num_ghost
    j_min, j_max = 0, domain.n_theta
    k_min, k_max = 0, domain.n_phi
    if domain.dim_rank[0] != 0:
        j_min = ng
    if domain.dim_rank[0] != domain.dim_size[0] - 1:
        j_max = domain.n_theta - ng
    if domain.dim_rank[1] != 0:
        k_min = ng
    if domain.dim_rank[1] != domain.dim_size[1] - 1:
        k_max = domain.n_phi - ng
    return range(j_min, j_max), range(k_min, k_max)


def radial_average(domain, geometry, num_r: int) -> RadialProfile:
    """Deposit every cell (except the innermost of each track) into radial bins.

    The bins span from the outer edge of the first cell to the outer edge of
    the last cell of the first track.  A cell is shared between the bins it
    overlaps in proportion to the overlap in radius.
    """
    if num_r < 1:
        raise ValueError(f"num_r must be positive, not {num_r}")
    first = domain.cells[0] if domain.cells else []
    if not first:
        raise ValueError("the first radial track holds no cells")
    rmin = first[0].riph
    rmax = first[-1].riph
    if rmax == rmin:
        raise ValueError("the first radial track has no radial extent")

    num_q = domain.num_q
    cons = [[0.0] * num_q for _ in range(num_r)]
    prim_volume = [[0.0] * num_q for _ in range(num_r)]
    scale = num_r / (rmax - rmin)

    j_range, k_range = _active_ranges(domain)
    for j in j_range:
        thm, thp = domain.theta_edges(j)
        for k in k_range:
            phm, php = domain.phi_edges(k)
            for c in domain.track(j, k)[1:]:
                rp = c.riph
                rm = rp - c.dr
                ip = scale * (rp - rmin)
                im = scale * (rm - rmin)
                delta = ip - im
                if delta == 0.0:
                    continue
                dV = geometry.dV((rp, thp, php), (rm, thm, phm))
                iip = int(ip)
                iim = int(im)
                dip = delta if iip == iim else ip - iip
                dim = (iim + 1) - im
                for b in range(iim, iip + 1):
                    if b == iip:
                        frac = dip / delta
                    elif b == iim:
                        frac = dim / delta
                    else:
                        frac = 1.0 / delta
                    target = min(max(b, 0), num_r - 1)
                    cons_bin = cons[target]
                    prim_bin = prim_volume[target]
                    for q in range(num_q):
                        cons_bin[q] += frac * c.cons[q]
                        prim_bin[q] += frac * c.prim[q] * dV
    return RadialProfile(rmin, rmax, cons, prim_volume)


def _fmt(value: float) -> str:
    return f"{value:e} "


def output(domain, geometry, hydro, filestart: str | PathLike) -> tuple[Path, Path | None]:
    """Write the cell dump and the radial profile; return the paths written.

    Only the first rank writes the radial profile; other ranks get ``None``
    in its place.
    """
    filestart = str(filestart)
    cell_path = Path(f"{filestart}.dat")
    profile_path = Path(f"{filestart}_1d.dat")

    j_range, k_range = _active_ranges(domain)
    mode = "w" if domain.rank == 0 else "a"
    with open(cell_path, mode, encoding="utf-8") as handle:
        for j in j_range:
            thm, thp = domain.theta_edges(j)
            th = 0.5 * (thp + thm)
            dth = thp - thm
            for k in k_range:
                phm, php = domain.phi_edges(k)
                phi = 0.5 * (php + phm)
                dph = php - phm
                for i, c in enumerate(domain.track(j, k)):
                    r = c.riph - 0.5 * c.dr
                    parts = ["# "] if i == 0 else []
                    parts.extend(_fmt(v) for v in (r, th, phi, c.dr, dth, dph))
                    parts.extend(_fmt(v) for v in c.prim)
                    parts.append("\n")
                    handle.write("".join(parts))

    params = domain.params
    profile = radial_average(domain, geometry, params.num_r)
    if domain.rank != 0:
        return cell_path, None

    th_mid = 0.5 * (params.thmax + params.thmin)
    with open(profile_path, "w", encoding="utf-8") as handle:
        for i in range(profile.num_r):
            rm, rp = profile.bin_edges(i)
            dV = geometry.dV((rp, params.thmax, params.phimax), (rm, params.thmin, 0.0))
            r = (2.0 / 3.0) * (rp ** 3 - rm ** 3) / (rp ** 2 - rm ** 2)
            averaged = [v / dV for v in profile.prim_volume[i]]
            guess = list(averaged)
            result = hydro.cons2prim(list(profile.cons[i]), r, th_mid, dV, guess)
            recovered = guess if result is None else list(result)
            parts = [_fmt(r)]
            for q in range(domain.num_q):
                parts.append(_fmt(recovered[q]))
                parts.append(_fmt(averaged[q]))
            parts.append("\n")
            handle.write("".join(parts))
    return cell_path, profile_path