from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)

__all__ = ["richardson_tableau", "richardson_extrapolate"]


def richardson_tableau(
    step_counts: Sequence[int], values: Sequence[float]
) -> NDArray[np.floating]:
    """
    Repeated Richardson extrapolation table.

    Column 0 holds the raw values ``V(N_i)``. Column k refines column k-1
    using the ratio of step counts k rows apart::

        T[i, k] = T[i+1, k-1] + (T[i+1, k-1] - T[i, k-1]) / (N[i+k]/N[i] - 1)

    With a doubling sequence the ratio is ``2**k``, so column k removes the
    ``1/N**k`` error term. Entries that do not exist (``i + k >= n``) are NaN.
    The most refined value is ``T[0, n-1]``.
    """
    Ns = np.asarray(list(step_counts), dtype=float)
    V = np.asarray(list(values), dtype=float)
    n = int(Ns.shape[0])
    if n < 2:
        raise ValueError("Need at least two step counts")
    if V.shape != (n,):
        raise ValueError(f"values must have shape {(n,)} got {V.shape}")
    if np.any(np.diff(Ns) <= 0):
        raise ValueError("step_counts must be strictly increasing")

    T = np.full((n, n), np.nan, dtype=float)
    T[:, 0] = V
    for k in range(1, n):
        for i in range(n - k):
            ratio = Ns[i + k] / Ns[i]
            T[i, k] = T[i + 1, k - 1] + (T[i + 1, k - 1] - T[i, k - 1]) / (ratio - 1.0)
    return T


def richardson_extrapolate(
    price_fn: Callable[[int], float], step_counts: Sequence[int]
) -> float:
    """Evaluate ``price_fn`` at each step count and return the most refined corner."""
    values = [float(price_fn(int(n))) for n in step_counts]
    T = richardson_tableau(step_counts, values)
    logger.debug("richardson raw=%s extrapolated=%.10g", values, T[0, -1])
    return float(T[0, -1])
