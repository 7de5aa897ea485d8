"""Crank-Nicolson time stepping for :class:`ParabolicPDE`.

Each step moves backward from time row ``i`` to ``i - 1`` by solving, on the
interior nodes ``j = 1..jmax-1``::

    E_j V[i-1, j-1] + F_j V[i-1, j] + G_j V[i-1, j+1]
        = A_j V[i, j-1] + B_j V[i, j] + C_j V[i, j+1] + D_j

with all coefficients evaluated at the half step ``t_{i-1/2}``. The terms
that touch the boundary columns are moved into a forcing vector, so the
left-hand side is a tridiagonal system in the interior unknowns only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ..tridiag import Tridiag, solve_tridiag_thomas, tridiag_mv
from .grid import FDGrid
from .problem import ParabolicPDE

logger = logging.getLogger(__name__)

TridiagSolver = Callable[[Tridiag, NDArray[np.floating]], NDArray[np.floating]]


@dataclass(frozen=True, slots=True)
class CNCoefficients:
    """Scheme coefficients on the interior nodes of one time step.

    Every field has shape ``(jmax - 1,)``; entry ``k`` belongs to ``j = k + 1``.
    """

    A: NDArray[np.floating]
    B: NDArray[np.floating]
    C: NDArray[np.floating]
    D: NDArray[np.floating]

    @property
    def E(self) -> NDArray[np.floating]:
        return -self.A

    @property
    def F(self) -> NDArray[np.floating]:
        return 2.0 - self.B

    @property
    def G(self) -> NDArray[np.floating]:
        return -self.C

    def explicit(self) -> Tridiag:
        return Tridiag(lower=self.A[1:], diag=self.B, upper=self.C[:-1])

    def implicit(self) -> Tridiag:
        return Tridiag(lower=self.E[1:], diag=self.F, upper=self.G[:-1])


class CrankNicolsonSolver(FDGrid):
    """Backward Crank-Nicolson solver on a uniform grid.

    Usage::

        solver = CrankNicolsonSolver(pde, imax=200, jmax=300)
        solver.solve()
        solver.v(0.0, 100.0), solver.delta(0.0, 100.0)

    Notes
    -----
    The tridiagonal systems are solved with the Thomas algorithm, which does
    not pivot. A (near-)zero pivot raises
    :class:`~lattice_pricing.exceptions.NumericalInstabilityError`.
    """

    def __init__(
        self,
        pde: ParabolicPDE,
        imax: int,
        jmax: int,
        *,
        solve_tridiag: TridiagSolver = solve_tridiag_thomas,
    ) -> None:
        super().__init__(pde, imax, jmax)
        self._solve_tridiag = solve_tridiag

    def coefficients(self, i: int) -> CNCoefficients:
        """Coefficients of the step from row ``i`` to row ``i - 1``."""
        if not (1 <= i <= self.imax):
            raise ValueError(f"step index must be in [1, {self.imax}], got {i}")

        dt = self.dt
        dS = self.dS
        S_int = self.S_nodes[1:-1]
        a, b, c, d = self.pde.coeffs(self.t(i - 0.5), S_int)

        A = 0.5 * dt * (b / 2.0 - a / dS) / dS
        B = 1.0 + 0.5 * dt * (2.0 * a / (dS * dS) - c)
        C = -0.5 * dt * (b / 2.0 + a / dS) / dS
        D = -dt * d
        return CNCoefficients(
            A=np.array(A, dtype=float),
            B=np.array(B, dtype=float),
            C=np.array(C, dtype=float),
            D=np.array(D, dtype=float),
        )

    def forcing(self, i: int, coef: CNCoefficients | None = None) -> NDArray[np.floating]:
        """Source term plus the boundary values moved to the right-hand side."""
        if coef is None:
            coef = self.coefficients(i)
        fl_i, fl_prev = self.pde.lower(self.t(i)), self.pde.lower(self.t(i - 1))
        fu_i, fu_prev = self.pde.upper(self.t(i)), self.pde.upper(self.t(i - 1))

        w = coef.D.copy()
        w[0] += coef.A[0] * fl_i - coef.E[0] * fl_prev
        w[-1] += coef.C[-1] * fu_i - coef.G[-1] * fu_prev
        return w

    def step(self, i: int) -> NDArray[np.floating]:
        """Compute row ``i - 1`` from row ``i`` and return it."""
        coef = self.coefficients(i)
        rhs = tridiag_mv(coef.explicit(), self.V[i, 1:-1]) + self.forcing(i, coef)

        row = np.empty(self.jmax + 1, dtype=float)
        row[1:-1] = self._solve_tridiag(coef.implicit(), rhs)
        row[0] = self.pde.lower(self.t(i - 1))
        row[-1] = self.pde.upper(self.t(i - 1))
        return row

    def solve(self) -> NDArray[np.floating]:
        """Fill the whole grid backward from maturity and return it."""
        S = self.S_nodes
        self.V[self.imax] = np.broadcast_to(
            np.asarray(self.pde.terminal(S), dtype=float), S.shape
        )

        for i in range(self.imax, 0, -1):
            self.V[i - 1] = self.step(i)

        self._solved = True
        logger.debug(
            "solved PDE on %dx%d grid, V(0, s_min)=%.6g",
            self.imax + 1,
            self.jmax + 1,
            self.V[0, 0],
        )
        return self.V
