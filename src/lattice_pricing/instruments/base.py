"""Pluggable scalar functors consumed by the pricing engines.

Each collaborator is a single-method callable. Engines never inspect them
beyond calling them, so any object (or plain function) with a matching
signature can be injected.

All three must accept NumPy arrays as well as floats: the lattice engines
evaluate a whole tree level per call.
"""

from __future__ import annotations

from typing import Protocol, overload, runtime_checkable

import numpy as np
from numpy.typing import NDArray

from lattice_pricing.typing import FloatArray


@runtime_checkable
class Payoff(Protocol):
    """Terminal payoff ``S -> payoff(S)``."""

    @overload
    def __call__(self, S: float) -> float:  # pragma: no cover
        ...

    @overload
    def __call__(self, S: FloatArray) -> FloatArray:  # pragma: no cover
        ...

    def __call__(
        self, S: NDArray[np.floating] | float
    ) -> FloatArray | float:  # pragma: no cover
        ...


@runtime_checkable
class Aggregator(Protocol):
    """Running path statistic.

    ``aggregator(agg, S_n, n)`` folds the price observed at step ``n`` (``n >= 1``)
    into the aggregate of observations ``0..n-1``. Observation 0 is the spot.
    """

    def __call__(
        self, agg: FloatArray | float, S: FloatArray | float, n: int
    ) -> FloatArray | float:  # pragma: no cover
        ...


@runtime_checkable
class Volatility(Protocol):
    """Volatility surface ``(t, S) -> sigma``."""

    def __call__(
        self, t: float, S: FloatArray | float
    ) -> FloatArray | float:  # pragma: no cover
        ...
