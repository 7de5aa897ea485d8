"""Path aggregators for Asian and lookback payoffs."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..typing import FloatArray


def _out(x: FloatArray | float) -> FloatArray | float:
    return float(x) if np.ndim(x) == 0 else x


@dataclass(frozen=True, slots=True)
class ArithmeticMean:
    """Running arithmetic mean of observations ``0..n``."""

    def __call__(
        self, agg: FloatArray | float, S: FloatArray | float, n: int
    ) -> FloatArray | float:
        return _out((np.asarray(agg) * n + np.asarray(S)) / (n + 1))


@dataclass(frozen=True, slots=True)
class GeometricMean:
    """Running geometric mean of observations ``0..n``."""

    def __call__(
        self, agg: FloatArray | float, S: FloatArray | float, n: int
    ) -> FloatArray | float:
        agg_arr = np.asarray(agg, dtype=float)
        S_arr = np.asarray(S, dtype=float)
        # agg^(n/(n+1)) * S^(1/(n+1)), written with powers so zero prices stay zero
        return _out(np.power(agg_arr, n / (n + 1)) * np.power(S_arr, 1.0 / (n + 1)))


@dataclass(frozen=True, slots=True)
class RunningMax:
    def __call__(
        self, agg: FloatArray | float, S: FloatArray | float, n: int
    ) -> FloatArray | float:
        return _out(np.maximum(agg, S))


@dataclass(frozen=True, slots=True)
class RunningMin:
    def __call__(
        self, agg: FloatArray | float, S: FloatArray | float, n: int
    ) -> FloatArray | float:
        return _out(np.minimum(agg, S))
