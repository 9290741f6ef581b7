# jetflow

jetflow provides the building blocks for finite-volume simulations of explosions,
relativistic jets and stellar ejecta on a spherical grid. The grid is made of radial
tracks of cells. Each track sits at a fixed (theta, phi) column, and its cells are
described by their outer radius `riph`, width `dr` and edge velocity `wiph`.

## Modules

- `jetflow.geometry`: `CartesianGeometry` and `SphericalGeometry`. Each gives cell
  lengths (`dL`), face areas (`dA`) and volumes (`dV`) from the upper and lower corners
  `xp` and `xm` of a cell, written as `(r, theta, phi)`.
- `jetflow.cell`: `Cell` holds the primitive (`prim`), conserved (`cons`, `rk_cons`) and
  gradient (`grad`, `gradr`) arrays of one cell, and has `clear()` and `copy()`. `Face`
  describes a transverse interface between two cells. The array positions are named by
  the constants `RHO`, `PPP`, `UU1`, `UU2`, `UU3` for primitives and `DEN`, `TAU`, `SS1`,
  `SS2`, `SS3` for conserved variables.
- `jetflow.initial_explosions`: the `InitialCondition` base class and initial conditions
  for blast waves, ejecta and jets. They are `Blandford`, `Breakout`, `Breakout2`,
  `Breakout3`, `Chevalier`, `Disk`, `Ejecta`, `SNEjecta`, `Explosion`, `Fallback`,
  `Impulse`, `ModelJet`, `Shell`, `Structure`, `Mush`, `RayleighTaylor`, `Smooth` and
  `Messy`. The module also has the helpers `jet_shell` and `boost`.
- `jetflow.initial_profiles`: test problems, stellar models and winds. They are `Circle`,
  `Dust`, `Entropy`, `Galaxy`, `NSModel`, `Polytrope`, `PowerLaw`, `ShockTube`,
  `STModel`, `STModel2`, `STModel3`, `STModel4`, `STModel4Explode`, `Uniform` and `Wind`,
  plus `mass_appx`.
- `jetflow.initial_tables`: initial conditions read from files.
  - `read_radial_table` reads a seven-column radial model: radius, density, pressure,
    radial velocity and three abundances.
  - `ReadTable` interpolates that model linearly in radius.
  - `read_2d_table` reads a `Nx mass xmax` header followed by `i j rho` lines.
  - `ReadTable2D` interpolates that table bilinearly.
  - Both initial conditions have a `from_file` constructor. `count_lines` counts the
    newlines in a file.
- `jetflow.domain`: `Parameters` (run settings) and `Domain`, which holds the grid, cells
  and clock.
  - `Domain.setup()` lays out the radii of every track and resets the clock and the
    output counters.
  - `track(j, k)`, `theta_edges(j)` and `phi_edges(k)` give access to the grid.
  - `check_dt(dt)` shortens the last step so the run ends at `t_max`. It also marks the
    final step when a file named `abort` (set by `abort_path`) exists.
  - The zoning helpers are `cart_r`, `log_r`, `hybrid_r` and `target_x`.
- `jetflow.cooling`: optically thin cooling that acts as an energy sink.
  - `cool_src` applies it to one cell.
  - `add_cooling` applies it to the whole domain and returns the total energy change.
- `jetflow.output`:
  - `radial_average` bins the cells into uniform radial shells and returns a
    `RadialProfile`.
  - `output` writes `<name>.dat`, with one line per cell, and `<name>_1d.dat`, with the
    radial profile. It needs a `hydro` object that provides
    `cons2prim(cons, r, th, dV, prim)`. That method either returns the primitives or
    fills `prim` in place.

Every initial condition's `initial(x)` takes `x = (r, theta, phi)` and returns the list of
primitive variables `(rho, P, u1, u2[, u3], passives...)`. `num_c` (default 4) is the
number of non-passive variables and `num_n` (default 0) is the number of passive
scalars.

## Example

```python
import math

from jetflow.cooling import add_cooling
from jetflow.domain import Domain, Parameters
from jetflow.geometry import SphericalGeometry
from jetflow.initial_profiles import Polytrope

params = Parameters(rmin=0.01, rmax=5.0, t_min=0.0, t_max=1.0)
domain = Domain(params, nr=[64, 64], t_edges=[0.0, math.pi / 2, math.pi],
                p_edges=[0.0, 2 * math.pi])
domain.setup()

ic = Polytrope()
geom = SphericalGeometry()
for j in range(domain.n_theta):
    thm, thp = domain.theta_edges(j)
    phm, php = domain.phi_edges(0)
    inner = params.rmin
    for c in domain.track(j, 0):
        c.dr = c.riph - inner
        inner = c.riph
        c.prim[:] = ic.initial((c.riph - 0.5 * c.dr, 0.5 * (thm + thp), 0.5 * (phm + php)))

dt = domain.check_dt(0.1)
energy_lost = add_cooling(domain, geom, dt)
```

## What the package does not do

jetflow does not contain the equations of motion. It has no conversion between
primitive and conserved variables, no flux functions or Riemann solvers, no boundary
conditions and no time integrator. It cannot advance a simulation by itself. `output`
expects the caller to supply the object that recovers primitive variables. No command
is installed.

## Installation

```
pip install .
pip install ".[test]"   # adds pytest for running the test suite
```

## Running the tests

```
pytest
```