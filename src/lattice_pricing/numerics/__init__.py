"""
Numerical building blocks (advanced API).

Top-level package `lattice_pricing` exposes the everyday pricing API.
This subpackage exposes reusable numerical primitives.
"""

from .richardson import richardson_extrapolate, richardson_tableau
from .tridiag import (
    Tridiag,
    solve_tridiag_scipy,
    solve_tridiag_thomas,
    tridiag_mv,
    tridiag_to_dense,
)

__all__ = [
    # Extrapolation
    "richardson_tableau",
    "richardson_extrapolate",
    # Tridiagonal
    "Tridiag",
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "tridiag_mv",
    "tridiag_to_dense",
]
