from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from ...exceptions import InvalidParameterError, OutOfDomainError
from ...types import GridSample
from .problem import ParabolicPDE

logger = logging.getLogger(__name__)

N_SAMPLE = 10  # grid() samples N_SAMPLE + 1 points per axis


class FDGrid:
    """Uniform (time, price) grid holding the finite-difference solution.

    ``V[i, j]`` is the value at ``t_i = i * dt`` and ``S_j = s_min + j * dS``
    with ``i = 0..imax`` (``imax`` is maturity) and ``j = 0..jmax``.

    The grid only stores and queries values; filling it is the job of a
    time-stepping scheme such as
    :class:`~lattice_pricing.numerics.pde.crank_nicolson.CrankNicolsonSolver`.
    """

    def __init__(self, pde: ParabolicPDE, imax: int, jmax: int) -> None:
        if imax < 1:
            raise InvalidParameterError("imax must be >= 1")
        if jmax < 2:
            raise InvalidParameterError("jmax must be >= 2")

        self.pde = pde
        self.imax = int(imax)
        self.jmax = int(jmax)
        self.dt = pde.maturity / self.imax
        self.dS = (pde.s_max - pde.s_min) / self.jmax
        self.V: NDArray[np.floating] = np.zeros(
            (self.imax + 1, self.jmax + 1), dtype=float
        )
        self._solved = False
        logger.debug(
            "allocated FD grid imax=%d jmax=%d dt=%.6g dS=%.6g",
            self.imax,
            self.jmax,
            self.dt,
            self.dS,
        )

    # --- coordinates

    def t(self, i: float) -> float:
        return self.dt * i

    def S(self, j: float) -> float:
        return self.pde.s_min + self.dS * j

    @property
    def t_nodes(self) -> NDArray[np.floating]:
        return self.dt * np.arange(self.imax + 1, dtype=float)

    @property
    def S_nodes(self) -> NDArray[np.floating]:
        return self.pde.s_min + self.dS * np.arange(self.jmax + 1, dtype=float)

    @property
    def values(self) -> NDArray[np.floating]:
        self._require_solved()
        return self.V

    # --- point queries

    def _require_solved(self) -> None:
        if not self._solved:
            raise RuntimeError("Grid has not been solved yet; call solve() first.")

    def _check_domain(self, t: float, S: float) -> None:
        if not (0.0 <= t <= self.pde.maturity):
            raise OutOfDomainError(f"t={t} outside [0, {self.pde.maturity}]")
        if not (self.pde.s_min <= S <= self.pde.s_max):
            raise OutOfDomainError(
                f"S={S} outside [{self.pde.s_min}, {self.pde.s_max}]"
            )

    def v(self, t: float, S: float) -> float:
        """Value at ``(t, S)`` by bilinear interpolation in the enclosing cell."""
        self._require_solved()
        t = float(t)
        S = float(S)
        self._check_domain(t, S)

        if S == self.pde.s_max:
            return float(self.pde.upper(t))
        if t == self.pde.maturity:
            return float(self.pde.terminal(S))

        # rounding can land exactly on the last node; stay in the last cell
        i = min(int(t / self.dt), self.imax - 1)
        j = min(int((S - self.pde.s_min) / self.dS), self.jmax - 1)

        l1 = (t - self.t(i)) / self.dt
        l0 = 1.0 - l1
        w1 = (S - self.S(j)) / self.dS
        w0 = 1.0 - w1

        V = self.V
        return float(
            l1 * w1 * V[i + 1, j + 1]
            + l1 * w0 * V[i + 1, j]
            + l0 * w1 * V[i, j + 1]
            + l0 * w0 * V[i, j]
        )

    def delta(self, t: float, S: float) -> float:
        """Finite-difference delta on the time row below ``t``, clamped to [-1, 1]."""
        self._require_solved()
        t = float(t)
        S = float(S)
        self._check_domain(t, S)

        i = min(int(t / self.dt), self.imax)
        j = min(int((S - self.pde.s_min) / self.dS), self.jmax)
        row = self.V[i]

        if j == 0:
            dlt = (row[1] - row[0]) / self.dS
        elif j == self.jmax:
            dlt = (row[self.jmax] - row[self.jmax - 1]) / self.dS
        else:
            dlt = (row[j + 1] - row[j - 1]) / (2.0 * self.dS)
        return float(min(1.0, max(-1.0, dlt)))

    def grid(self) -> GridSample:
        """Sample price and delta on a fixed 11x11 lattice spanning the domain."""
        self._require_solved()
        t_vals = np.linspace(0.0, self.pde.maturity, N_SAMPLE + 1)
        S_vals = np.linspace(self.pde.s_min, self.pde.s_max, N_SAMPLE + 1)

        price = np.empty((N_SAMPLE + 1, N_SAMPLE + 1), dtype=float)
        delta = np.empty_like(price)
        for i, tt in enumerate(t_vals):
            for j, ss in enumerate(S_vals):
                price[i, j] = self.v(float(tt), float(ss))
                delta[i, j] = self.delta(float(tt), float(ss))
        return GridSample(t=t_vals, S=S_vals, price=price, delta=delta)
