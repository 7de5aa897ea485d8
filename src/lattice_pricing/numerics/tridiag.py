# src/lattice_pricing/numerics/tridiag.py
from __future__ import annotations

from dataclasses import dataclass
from typing import cast

import numpy as np
from numpy.typing import NDArray

from ..exceptions import NumericalInstabilityError

__all__ = [
    "Tridiag",
    "tridiag_mv",
    "solve_tridiag_thomas",
    "solve_tridiag_scipy",
    "tridiag_to_dense",
]


@dataclass(frozen=True, slots=True)
class Tridiag:
    """Tridiagonal matrix stored as its three diagonals.

    For a system of size M: ``diag`` has shape (M,), ``lower`` and ``upper``
    have shape (M-1,). ``lower[k]`` sits in row k+1, ``upper[k]`` in row k.
    """

    lower: NDArray[np.floating]
    diag: NDArray[np.floating]
    upper: NDArray[np.floating]

    def check(self) -> int:
        """Validate shapes and return M (system size)."""
        diag = np.asarray(self.diag)
        if diag.ndim != 1:
            raise ValueError("diag must be 1D")

        M = int(diag.shape[0])
        if M == 0:
            raise ValueError("Need at least one unknown")

        expected = (M - 1,)
        if np.shape(self.lower) != expected or np.shape(self.upper) != expected:
            raise ValueError(f"lower/upper must have shape {expected}")
        return M

    def mv(self, u: NDArray[np.floating]) -> NDArray[np.floating]:
        self.check()
        return tridiag_mv(self, u)


def tridiag_mv(T: Tridiag, u: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Compute y = T u.

      y[0]   = d[0]*u[0] + up[0]*u[1]
      y[j]   = lo[j-1]*u[j-1] + d[j]*u[j] + up[j]*u[j+1]
      y[M-1] = lo[M-2]*u[M-2] + d[M-1]*u[M-1]
    """
    u = np.asarray(u, dtype=float)
    diag = np.asarray(T.diag, dtype=float)
    if u.shape != diag.shape:
        raise ValueError(f"u must have shape {diag.shape} got {u.shape}")

    y = diag * u
    y[1:] += np.asarray(T.lower) * u[:-1]
    y[:-1] += np.asarray(T.upper) * u[1:]
    return cast(NDArray[np.floating], y)


def solve_tridiag_thomas(
    A: Tridiag,
    rhs: NDArray[np.floating],
    *,
    pivot_tol: float | None = None,
) -> NDArray[np.floating]:
    """
    Solve A x = rhs with the Thomas algorithm.

    A single forward elimination pass builds the modified diagonal ``r`` and
    right-hand side ``y``:

      r[0] = d[0],                       y[0] = rhs[0]
      r[j] = d[j] - lo[j-1]*up[j-1]/r[j-1]
      y[j] = rhs[j] - lo[j-1]*y[j-1]/r[j-1]

    followed by back-substitution ``x[j] = (y[j] - up[j]*x[j+1]) / r[j]``.
    Cost is O(M). No pivoting is done, so the method is meant for
    diagonally-dominant systems.

    Raises
    ------
    NumericalInstabilityError
        If a modified pivot ``r[j]`` is (near-)zero. The pivot is never
        clamped or perturbed.

    Notes
    -----
    Inputs are not modified.
    """
    M = A.check()

    rhs = np.asarray(rhs, dtype=float)
    if rhs.shape != (M,):
        raise ValueError(f"rhs must have shape {(M,)} got {rhs.shape}")

    lower = np.asarray(A.lower, dtype=float)
    diag = np.asarray(A.diag, dtype=float)
    upper = np.asarray(A.upper, dtype=float)

    if pivot_tol is None:
        scale = max(float(np.max(np.abs(diag))), 1.0)
        pivot_tol = 100.0 * np.finfo(float).eps * scale

    r = np.empty(M, dtype=float)
    y = np.empty(M, dtype=float)

    r[0] = diag[0]
    y[0] = rhs[0]
    if abs(r[0]) < pivot_tol:
        raise NumericalInstabilityError("Near-zero pivot at row 0")

    for j in range(1, M):
        m = lower[j - 1] / r[j - 1]
        r[j] = diag[j] - m * upper[j - 1]
        y[j] = rhs[j] - m * y[j - 1]
        if abs(r[j]) < pivot_tol:
            raise NumericalInstabilityError(f"Near-zero pivot at row {j}")

    x = np.empty(M, dtype=float)
    x[M - 1] = y[M - 1] / r[M - 1]
    for j in range(M - 2, -1, -1):
        x[j] = (y[j] - upper[j] * x[j + 1]) / r[j]
    return x


def solve_tridiag_scipy(A: Tridiag, rhs: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Solve using SciPy's banded LU solver. SciPy is imported lazily.

    Used as an independent reference for :func:`solve_tridiag_thomas`.
    """
    from scipy.linalg import (
        solve_banded,  # local import to avoid import-time dependency
    )

    M = A.check()
    rhs = np.asarray(rhs, dtype=float)
    if rhs.shape != (M,):
        raise ValueError(f"rhs must have shape {(M,)} got {rhs.shape}")

    ab = np.zeros((3, M), dtype=float)
    ab[0, 1:] = np.asarray(A.upper)
    ab[1, :] = np.asarray(A.diag)
    ab[2, :-1] = np.asarray(A.lower)

    res = solve_banded((1, 1), ab, rhs)
    return cast(NDArray[np.floating], np.asarray(res))


def tridiag_to_dense(A: Tridiag) -> NDArray[np.floating]:
    M = A.check()
    out = np.zeros((M, M), dtype=float)
    out[np.arange(M), np.arange(M)] = A.diag
    out[np.arange(1, M), np.arange(M - 1)] = A.lower
    out[np.arange(M - 1), np.arange(1, M)] = A.upper
    return out
