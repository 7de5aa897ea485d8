from __future__ import annotations

import math

from ..models.lattice import LatticeModel


def lattice_forward_discounted(model: LatticeModel, strike: float) -> float:
    """S - K * discount**N: the right-hand side of put-call parity on the lattice."""
    return model.spot - strike * model.discount**model.n_steps


def lattice_parity_residual(
    *, call: float, put: float, model: LatticeModel, strike: float
) -> float:
    """
    Residual = (C - P) - (S - K * discount**N).
    Exact (up to rounding) for European lattice prices on the same model.
    """
    return (call - put) - lattice_forward_discounted(model, strike)


def forward_discounted(*, spot: float, strike: float, rate: float, tau: float) -> float:
    """S - K e^{-r tau}."""
    return spot - strike * math.exp(-rate * tau)


def put_call_parity_residual(
    *, call: float, put: float, spot: float, strike: float, rate: float, tau: float
) -> float:
    """
    Residual = (C - P) - (S - K e^{-r tau}).
    Should be ~0 for European prices from a continuous-time model (PDE, BS).
    """
    return (call - put) - forward_discounted(
        spot=spot, strike=strike, rate=rate, tau=tau
    )
