"""Helpers shared by the recombining and non-recombining tree engines."""

from __future__ import annotations

import numpy as np

from ..exceptions import NumericalInstabilityError
from ..instruments.base import Payoff
from ..typing import FloatArray


def eval_payoff(payoff: Payoff, S: FloatArray) -> FloatArray:
    """Evaluate ``payoff`` on a price array, always returning a fresh float array."""
    S = np.asarray(S, dtype=float)
    return np.array(np.broadcast_to(np.asarray(payoff(S), dtype=float), S.shape))


def replicate(
    V: FloatArray,
    S: FloatArray,
    V_up: FloatArray,
    V_down: FloatArray,
    S_up: FloatArray,
    S_down: FloatArray,
) -> tuple[FloatArray, FloatArray]:
    """One-period replicating portfolio ``(delta, bond)`` for a whole level.

    ``delta = (V_up - V_down) / (S_up - S_down)`` and ``bond = V - delta * S``.

    Raises
    ------
    NumericalInstabilityError
        If the two successor prices of some node coincide.
    """
    spread = S_up - S_down
    if np.any(spread == 0.0):
        raise NumericalInstabilityError(
            "Successor prices coincide (S_up == S_down); the lattice is degenerate."
        )
    delta = (V_up - V_down) / spread
    bond = V - delta * S
    return delta, bond
