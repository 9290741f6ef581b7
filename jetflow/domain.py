"""The computational domain: radial tracks of cells on a theta-phi grid.

The grid is ``n_theta`` by ``n_phi`` columns.  Each column ``(j, k)`` holds a
radial track of ``nr[j + n_theta * k]`` cells whose outer radii are laid out
by :meth:`Domain.setup`.  ``t_edges`` and ``p_edges`` hold the theta and phi
cell edges, one more than the number of columns in each direction.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .cell import DEFAULT_NUM_Q, Cell

__all__ = [
    "cart_r",
    "log_r",
    "hybrid_r",
    "target_x",
    "Parameters",
    "Domain",
]

SOLAR_MASS_CGS = 2.0e33


def cart_r(x: float, rmin: float, rmax: float) -> float:
    """Radius at fraction ``x`` of a uniformly spaced grid."""
    return rmin + x * (rmax - rmin)


def log_r(x: float, rmin: float, rmax: float) -> float:
    """Radius at fraction ``x`` of a logarithmically spaced grid."""
    return rmin * (rmax / rmin) ** x


def hybrid_r(x: float, rmin: float, rmax: float, R: float) -> float:
    """Radius at fraction ``x`` of a grid uniform inside ``R`` and logarithmic outside."""
    return R * (rmax / R) ** x + rmin - R + (R - rmin) * x


def target_x(x: float, x0: float, weight: float) -> float:
    """Remap ``x`` in [0, 1] to concentrate zones near ``x0``.

    ``weight`` blends between the cubic remapping (1) and the identity (0);
    the end points 0 and 1 are always kept.
    """
    x0 = 2.0 * x0 - 1.0
    x = 2.0 * x - 1.0
    y = (x - 3.0 * x0) * (x * x - 1.0) / (3.0 * x0 * x0 + 1.0) + x
    y = 0.5 * (y + 1.0)
    x = 0.5 * (x + 1.0)
    return weight * y + (1.0 - weight) * x


@dataclass
class Parameters:
    """Run parameters read by the domain, the boundaries and the output."""

    rmin: float = 1.0
    rmax: float = 10.0
    log_zoning: float = 0.0
    target_x: float = 0.5
    target_w: float = 0.0
    point_mass: float = 0.0
    t_min: float = 0.0
    t_max: float = 1.0
    num_repts: int = 0
    num_snaps: int = 0
    num_checks: int = 0
    out_log_time: bool = False
    num_r: int = 100
    thmin: float = 0.0
    thmax: float = math.pi
    phimax: float = 1.0
    explosion_energy: float = 0.0
    gam_0: float = 1.0
    absorb_bc: bool = False

    def __post_init__(self) -> None:
        if self.rmax <= self.rmin:
            raise ValueError(f"rmax ({self.rmax}) must exceed rmin ({self.rmin})")
        if self.log_zoning > 0.5 and self.rmin <= 0.0:
            raise ValueError("logarithmic zoning needs a positive rmin")


@dataclass
class Domain:
    """Grid, cells and clock of one simulation."""

    params: Parameters
    nr: list[int]
    t_edges: list[float]
    p_edges: list[float]
    num_q: int = DEFAULT_NUM_Q
    rank: int = 0
    dim_rank: tuple[int, int] = (0, 0)
    dim_size: tuple[int, int] = (1, 1)
    num_ghost: int = 1
    abort_path: str | PathLike = "abort"
    cells: list[list[Cell]] = field(default_factory=list, repr=False)
    t: float = 0.0
    t_init: float = 0.0
    t_fin: float = 0.0
    n_rpt: int = 0
    n_snp: int = 0
    n_chk: int = 0
    nrpt: int = -1
    nsnp: int = -1
    nchk: int = -1
    final_step: bool = False
    count_steps: int = 0
    g_point_mass: float = 0.0

    def __post_init__(self) -> None:
        self.nr = [int(n) for n in self.nr]
        self.t_edges = [float(v) for v in self.t_edges]
        self.p_edges = [float(v) for v in self.p_edges]
        self.dim_rank = tuple(self.dim_rank)
        self.dim_size = tuple(self.dim_size)
        if len(self.t_edges) < 2 or len(self.p_edges) < 2:
            raise ValueError("theta and phi need at least two edges each")
        if len(self.nr) != self.n_theta * self.n_phi:
            raise ValueError(
                f"nr has {len(self.nr)} entries, expected {self.n_theta * self.n_phi}"
            )
        if any(n < 0 for n in self.nr):
            raise ValueError("track lengths cannot be negative")
        if len(self.dim_rank) != 2 or len(self.dim_size) != 2:
            raise ValueError("dim_rank and dim_size need two entries")

    @property
    def n_theta(self) -> int:
        """Number of columns in theta."""
        return len(self.t_edges) - 1

    @property
    def n_phi(self) -> int:
        """Number of columns in phi."""
        return len(self.p_edges) - 1

    def setup(self) -> None:
        """Lay out the cells of every track and reset the clock and counters."""
        p = self.params
        self.cells = []
        for k in range(self.n_phi):
            for j in range(self.n_theta):
                offset = -1.0 if j % 2 == 0 else 1.0
                n = self.nr[j + self.n_theta * k]
                track = []
                for i in range(n):
                    x = (i + 1) / n
                    if i != 0 and i != n - 1:
                        x += 0.5 * 0.125 * offset / n
                    x = target_x(x, p.target_x, p.target_w)
                    if p.log_zoning > 0.5:
                        rp = log_r(x, p.rmin, p.rmax)
                    else:
                        rp = cart_r(x, p.rmin, p.rmax)
                    track.append(Cell(riph=rp, wiph=0.0, num_q=self.num_q))
                self.cells.append(track)
        # cells are stored in jk order: j runs fastest
        self.cells = [
            self.cells[k * self.n_theta + j]
            for k in range(self.n_phi)
            for j in range(self.n_theta)
        ]

        self.g_point_mass = p.point_mass * SOLAR_MASS_CGS
        self.t = p.t_min
        self.t_init = p.t_min
        self.t_fin = p.t_max
        self.n_rpt = p.num_repts
        self.n_snp = p.num_snaps
        self.n_chk = p.num_checks
        self.final_step = False
        self.nrpt = -1
        self.nsnp = -1
        self.nchk = -1
        self.count_steps = 0

    def _check_column(self, j: int, k: int) -> None:
        if not 0 <= j < self.n_theta:
            raise IndexError(f"theta index {j} outside 0..{self.n_theta - 1}")
        if not 0 <= k < self.n_phi:
            raise IndexError(f"phi index {k} outside 0..{self.n_phi - 1}")

    def track(self, j: int, k: int) -> list[Cell]:
        """The radial track of cells in column ``(j, k)``."""
        self._check_column(j, k)
        return self.cells[j + self.n_theta * k]

    def theta_edges(self, j: int) -> tuple[float, float]:
        """Lower and upper theta edges of column ``j``."""
        if not 0 <= j < self.n_theta:
            raise IndexError(f"theta index {j} outside 0..{self.n_theta - 1}")
        return self.t_edges[j], self.t_edges[j + 1]

    def phi_edges(self, k: int) -> tuple[float, float]:
        """Lower and upper phi edges of column ``k``."""
        if not 0 <= k < self.n_phi:
            raise IndexError(f"phi index {k} outside 0..{self.n_phi - 1}")
        return self.p_edges[k], self.p_edges[k + 1]

    def check_dt(self, dt: float) -> float:
        """Shorten ``dt`` so the run ends at ``t_fin``; return the step to take.

        The step becomes the final one when it reaches ``t_fin`` or when the
        first rank finds the abort file.
        """
        final = False
        if self.t + dt > self.t_fin:
            dt = self.t_fin - self.t
            final = True
        if self.rank == 0 and Path(self.abort_path).exists():
            final = True
        if final:
            self.final_step = True
        return dt