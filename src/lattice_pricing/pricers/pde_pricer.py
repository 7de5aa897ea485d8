from __future__ import annotations

from ..instruments.base import Payoff, Volatility
from ..models.volatility import ConstantVol
from ..numerics.pde import CrankNicolsonSolver, diffusion_pde


def solve_diffusion_pde(
    payoff: Payoff,
    volatility: Volatility | float,
    *,
    rate: float,
    maturity: float,
    s_min: float,
    s_max: float,
    imax: int = 200,
    jmax: int = 200,
) -> CrankNicolsonSolver:
    """
    Build and solve the diffusion PDE of a European payoff.

    Parameters
    ----------
    payoff
        Terminal payoff ``h(S)``; it also fixes the Dirichlet boundaries.
    volatility
        ``sigma(t, S)`` functor, or a plain number for constant volatility.
    rate
        Risk-free rate.
    maturity, s_min, s_max
        Domain ``[0, maturity] x [s_min, s_max]``.
    imax, jmax
        Number of time and price steps.

    Returns
    -------
    CrankNicolsonSolver
        The solved grid, ready for ``v``, ``delta`` and ``grid`` queries.
    """
    if not callable(volatility):
        volatility = ConstantVol(float(volatility))

    pde = diffusion_pde(
        maturity=maturity,
        s_min=s_min,
        s_max=s_max,
        rate=rate,
        payoff=payoff,
        volatility=volatility,
    )
    solver = CrankNicolsonSolver(pde, imax=imax, jmax=jmax)
    solver.solve()
    return solver


def pde_price(
    payoff: Payoff,
    volatility: Volatility | float,
    *,
    spot: float,
    rate: float,
    maturity: float,
    s_min: float = 0.0,
    s_max: float | None = None,
    imax: int = 200,
    jmax: int = 200,
    t: float = 0.0,
) -> float:
    """Value at ``(t, spot)``; ``s_max`` defaults to ``3 * spot``."""
    solver = solve_diffusion_pde(
        payoff,
        volatility,
        rate=rate,
        maturity=maturity,
        s_min=s_min,
        s_max=3.0 * spot if s_max is None else s_max,
        imax=imax,
        jmax=jmax,
    )
    return solver.v(t, spot)


def pde_delta(
    payoff: Payoff,
    volatility: Volatility | float,
    *,
    spot: float,
    rate: float,
    maturity: float,
    s_min: float = 0.0,
    s_max: float | None = None,
    imax: int = 200,
    jmax: int = 200,
    t: float = 0.0,
) -> float:
    solver = solve_diffusion_pde(
        payoff,
        volatility,
        rate=rate,
        maturity=maturity,
        s_min=s_min,
        s_max=3.0 * spot if s_max is None else s_max,
        imax=imax,
        jmax=jmax,
    )
    return solver.delta(t, spot)
