"""Finite-difference solver for 1D backward parabolic PDEs.

Supported PDE form::

    v_t = a(t,S) v_SS + b(t,S) v_S + c(t,S) v + d(t,S)

on ``[0, T] x [s_min, s_max]`` with a terminal condition and Dirichlet
boundaries, stepped with Crank-Nicolson on a uniform grid.
"""

from .crank_nicolson import CNCoefficients, CrankNicolsonSolver
from .grid import FDGrid
from .problem import ParabolicPDE, diffusion_pde

__all__ = [
    # Problems
    "ParabolicPDE",
    "diffusion_pde",
    # Grid / solver
    "FDGrid",
    "CNCoefficients",
    "CrankNicolsonSolver",
]
