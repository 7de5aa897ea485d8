"""Convergence tables and plots.

Tables need only pandas; plotting imports matplotlib lazily.
"""

from .convergence import lattice_convergence_table, richardson_table
from .plots import plot_grid_sample, plot_lattice_convergence

__all__ = [
    "lattice_convergence_table",
    "richardson_table",
    "plot_lattice_convergence",
    "plot_grid_sample",
]
