"""Initial conditions interpolated from tabulated stellar models.

A radial table holds one row per radius with seven columns: radius,
density, pressure, radial velocity and three abundances.  A two-dimensional
table starts with a header line ``Nx mass xmax`` followed by ``Nx * Nx``
lines ``i j rho`` giving the density on a cylindrical (s, |z|) grid.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path

from .initial_explosions import InitialCondition

__all__ = [
    "RadialTable",
    "count_lines",
    "read_radial_table",
    "ReadTable",
    "Table2D",
    "read_2d_table",
    "ReadTable2D",
]

StrPath = str | PathLike


def count_lines(path: StrPath) -> int:
    """Number of newline characters in the file."""
    with open(path, encoding="utf-8") as handle:
        return sum(chunk.count("\n") for chunk in handle)


@dataclass(frozen=True)
class RadialTable:
    """Columns of a radial model, ordered by radius."""

    r: tuple[float, ...]
    rho: tuple[float, ...]
    pressure: tuple[float, ...]
    vr: tuple[float, ...]
    abundance: tuple[float, ...]
    helium: tuple[float, ...]
    nickel: tuple[float, ...]

    def __post_init__(self) -> None:
        lengths = {len(column) for column in self._columns()}
        if len(lengths) != 1:
            raise ValueError("all columns of a radial table must have the same length")
        if len(self.r) < 2:
            raise ValueError("a radial table needs at least two rows")

    def _columns(self) -> tuple[tuple[float, ...], ...]:
        return (self.r, self.rho, self.pressure, self.vr, self.abundance, self.helium, self.nickel)

    def __len__(self) -> int:
        return len(self.r)


def read_radial_table(path: StrPath) -> RadialTable:
    """Read a seven-column radial model; blank lines are ignored."""
    rows: list[tuple[float, ...]] = []
    text = Path(path).read_text(encoding="utf-8")
    for number, line in enumerate(text.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 7:
            raise ValueError(f"line {number} has {len(fields)} columns, expected 7")
        try:
            rows.append(tuple(float(v) for v in fields[:7]))
        except ValueError as exc:
            raise ValueError(f"line {number} is not numeric: {line!r}") from exc
    if not rows:
        raise ValueError(f"{path} holds no rows")
    columns = tuple(zip(*rows))
    return RadialTable(*columns)


@dataclass(kw_only=True)
class ReadTable(InitialCondition):
    """Linear interpolation in a radial model, with a wind beyond its edge.

    The radial velocity receives a random relative perturbation of at most
    5e-4, drawn from a generator seeded with ``seed``.  Passive scalars are
    the three abundances of the table.
    """

    table: RadialTable
    seed: int | None = None
    _rng: random.Random = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        self._rng = random.Random(self.seed)

    @classmethod
    def from_file(cls, path: StrPath = "Initial/initial.dat", **kwargs) -> ReadTable:
        """Build the initial condition from a table file."""
        return cls(table=read_radial_table(path), **kwargs)

    def initial(self, x: Sequence[float]) -> list[float]:
        tab = self.table
        last = len(tab) - 2
        r = x[0]
        l = 0
        while tab.r[l] < r and l < last:
            l += 1
        if l == 0:
            l = 1

        drm = abs(r - tab.r[l - 1])
        drp = abs(tab.r[l] - r)

        def interp(column: tuple[float, ...]) -> float:
            return (column[l - 1] * drp + column[l] * drm) / (drp + drm)

        pp = interp(tab.pressure)
        rho = interp(tab.rho)
        v = max(interp(tab.vr), 0.0)
        abundances = (interp(tab.abundance), interp(tab.helium), interp(tab.nickel))
        if l == 1:
            v = 0.0
        if l == last:
            v = 0.0
            rho = 1e18 / r / r
            pp = rho * tab.pressure[last] / tab.rho[last]
            abundances = (tab.abundance[last], tab.helium[last], tab.nickel[last])

        delta = (self._rng.random() - 0.5) * 1e-3
        return self._state(rho, pp, v * (1.0 + delta), 0.0, abundances)


@dataclass(frozen=True)
class Table2D:
    """Density on an ``nx`` by ``nx`` grid in (s, |z|) out to ``xmax``."""

    nx: int
    mass: float
    xmax: float
    rho: tuple[tuple[float, ...], ...]

    def __post_init__(self) -> None:
        if self.nx < 2:
            raise ValueError("a two-dimensional table needs at least two points per side")
        if len(self.rho) != self.nx or any(len(row) != self.nx for row in self.rho):
            raise ValueError("density grid does not match the table size")


def read_2d_table(path: StrPath) -> Table2D:
    """Read a two-dimensional density table."""
    lines = [line.split() for line in Path(path).read_text(encoding="utf-8").splitlines()]
    lines = [fields for fields in lines if fields]
    if not lines or len(lines[0]) < 3:
        raise ValueError(f"{path} lacks the header 'Nx mass xmax'")
    try:
        nx = int(lines[0][0])
        mass = float(lines[0][1])
        xmax = float(lines[0][2])
    except ValueError as exc:
        raise ValueError(f"bad header in {path}") from exc
    if nx < 2:
        raise ValueError("a two-dimensional table needs at least two points per side")
    body = lines[1:]
    if len(body) < nx * nx:
        raise ValueError(f"{path} has {len(body)} entries, expected {nx * nx}")
    grid = [[0.0] * nx for _ in range(nx)]
    for fields in body[: nx * nx]:
        if len(fields) < 3:
            raise ValueError(f"entry {' '.join(fields)!r} is incomplete")
        i, j = int(fields[0]), int(fields[1])
        if not (0 <= i < nx and 0 <= j < nx):
            raise ValueError(f"entry ({i}, {j}) lies outside the table")
        grid[i][j] = float(fields[2])
    return Table2D(nx, mass, xmax, tuple(tuple(row) for row in grid))


@dataclass(kw_only=True)
class ReadTable2D(InitialCondition):
    """Bilinear interpolation in a 2D stellar model, with a bomb of width ``rmin``."""

    table: Table2D
    rmin: float
    gamma_law: float = 5.0 / 3.0

    @classmethod
    def from_file(cls, path: StrPath = "Initial/table.dat", **kwargs) -> ReadTable2D:
        """Build the initial condition from a table file."""
        return cls(table=read_2d_table(path), **kwargs)

    def initial(self, x: Sequence[float]) -> list[float]:
        tab = self.table
        nx = tab.nx
        e_in = 28.0
        m_star = 4.77
        rexp = self.rmin
        msol_c2 = 1790.0
        e_over_m = e_in / m_star / msol_c2
        rhoc = 0.003
        p_min = 1e-8

        r, th = x[0], x[1]
        energy = e_over_m * tab.mass
        e0 = energy / (math.sqrt(math.pi) * rexp) ** 3
        pexp = (self.gamma_law - 1.0) * e0 * math.exp(-r * r / rexp / rexp)

        ix = nx / tab.xmax * r * math.sin(th)
        jy = nx / tab.xmax * abs(r * math.cos(th))
        i0 = min(max(int(ix), 0), nx - 2)
        j0 = min(max(int(jy), 0), nx - 2)
        xx = min(max(ix - i0, 0.0), 1.0)
        yy = min(max(jy - j0, 0.0), 1.0)

        fa = tab.rho[i0][j0]
        fb = tab.rho[i0][j0 + 1]
        fc = tab.rho[i0 + 1][j0 + 1]
        fd = tab.rho[i0 + 1][j0]
        rho = xx * yy * ((fa + fc) - (fb + fd)) + xx * (fd - fa) + yy * (fb - fa) + fa

        if rho < rhoc:
            steep = max(rho / rhoc - 0.5, 0.0)
            rho = rhoc * math.sqrt(2.0 * steep)

        msol = tab.mass / m_star
        mdot = 1e-5 * 1.49e-8 * msol
        vwind = 0.012
        rho += mdot / 4.0 / math.pi / vwind / r / r

        return self._state(rho, pexp + rho * p_min, 0.0)