"""Grid, geometry, initial conditions, cooling and output for radial-track hydrodynamics."""

__version__ = "0.1.0"