from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..exceptions import InvalidParameterError
from ..typing import FloatArray


@dataclass(frozen=True, slots=True)
class ConstantVol:
    """Black-Scholes volatility: the same ``sigma`` everywhere."""

    sigma: float

    def __post_init__(self) -> None:
        if self.sigma < 0.0:
            raise InvalidParameterError("sigma must be >= 0")

    def __call__(self, t: float, S: FloatArray | float) -> FloatArray | float:
        if np.ndim(S) == 0:
            return float(self.sigma)
        return np.full(np.shape(S), float(self.sigma))


@dataclass(frozen=True, slots=True)
class LocalVol:
    """Local volatility ``alpha / (t + 1) + beta / (S + 1)``."""

    alpha: float
    beta: float

    def __post_init__(self) -> None:
        if self.alpha < 0.0 or self.beta < 0.0:
            raise InvalidParameterError("alpha and beta must be >= 0")

    def __call__(self, t: float, S: FloatArray | float) -> FloatArray | float:
        out = self.alpha / (t + 1.0) + self.beta / (np.asarray(S, dtype=float) + 1.0)
        return float(out) if np.ndim(out) == 0 else out
