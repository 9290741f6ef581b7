"""Grid cells, the faces between them, and the layout of the variable arrays."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field

__all__ = [
    "RHO",
    "PPP",
    "UU1",
    "UU2",
    "UU3",
    "DEN",
    "TAU",
    "SS1",
    "SS2",
    "SS3",
    "DEFAULT_NUM_Q",
    "Cell",
    "Face",
]

# Positions of the primitive variables.
RHO = 0
PPP = 1
UU1 = 2
UU2 = 3
UU3 = 4

# Positions of the conserved variables.
DEN = 0
TAU = 1
SS1 = 2
SS2 = 3
SS3 = 4

DEFAULT_NUM_Q = 4

_ARRAYS = ("prim", "cons", "rk_cons", "grad", "gradr")


@dataclass
class Cell:
    """One cell of a radial track.

    ``riph`` is the radius of the cell's outer edge, ``dr`` its width and
    ``wiph`` the velocity of its outer edge.  The arrays all have ``num_q``
    entries; when ``num_q`` is not given it is taken from ``prim``.
    """

    prim: list[float] = field(default_factory=list)
    cons: list[float] = field(default_factory=list)
    rk_cons: list[float] = field(default_factory=list)
    grad: list[float] = field(default_factory=list)
    gradr: list[float] = field(default_factory=list)
    riph: float = 0.0
    rk_riph: float = 0.0
    dr: float = 0.0
    wiph: float = 0.0
    num_q: InitVar[int | None] = None

    def __post_init__(self, num_q: int | None) -> None:
        size = num_q if num_q is not None else (len(self.prim) or DEFAULT_NUM_Q)
        if size <= 0:
            raise ValueError("a cell needs at least one variable")
        for name in _ARRAYS:
            values = getattr(self, name)
            if not values:
                setattr(self, name, [0.0] * size)
            elif len(values) != size:
                raise ValueError(f"{name} has {len(values)} entries, expected {size}")
            else:
                setattr(self, name, [float(v) for v in values])

    @property
    def size(self) -> int:
        """Number of variables held per array."""
        return len(self.prim)

    def clear(self) -> None:
        """Zero every variable, gradient and edge quantity of the cell."""
        for name in _ARRAYS:
            values = getattr(self, name)
            values[:] = [0.0] * len(values)
        self.riph = 0.0
        self.rk_riph = 0.0
        self.dr = 0.0
        self.wiph = 0.0

    def copy(self) -> Cell:
        """An independent copy of the cell."""
        return Cell(
            prim=list(self.prim),
            cons=list(self.cons),
            rk_cons=list(self.rk_cons),
            grad=list(self.grad),
            gradr=list(self.gradr),
            riph=self.riph,
            rk_riph=self.rk_riph,
            dr=self.dr,
            wiph=self.wiph,
        )


@dataclass
class Face:
    """A transverse face between two cells of neighbouring tracks.

    ``area`` is the face area, ``dx_left``/``dx_right`` the distances from the
    cell centres to the face and ``centroid`` the face centre ``(r, th, ph)``.
    """

    left: Cell
    right: Cell
    area: float = 0.0
    dx_left: float = 0.0
    dx_right: float = 0.0
    centroid: tuple[float, float, float] = (0.0, 0.0, 0.0)