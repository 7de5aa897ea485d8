"""Vectorized terminal payoffs.

Every payoff is a frozen dataclass that is callable on a float (returning a
Python float) or on an array (returning an array of the same shape). Strikes
are validated at construction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import overload

import numpy as np

from ..exceptions import InvalidParameterError
from ..typing import FloatArray


def _check_strike(K: float) -> None:
    if K < 0.0:
        raise InvalidParameterError("Strike K must be non-negative")


def _check_strikes(K1: float, K2: float) -> None:
    if K1 < 0.0 or K2 < 0.0 or K1 > K2:
        raise InvalidParameterError(f"Need 0 <= K1 <= K2, got {K1=}, {K2=}")


def _finish(out: np.ndarray) -> float | FloatArray:
    # Scalar input returns a Python float
    if np.ndim(out) == 0:
        return float(out)
    return out


@overload
def call_payoff(S: float, K: float) -> float: ...
@overload
def call_payoff(S: FloatArray, K: float) -> FloatArray: ...
def call_payoff(S: float | FloatArray, K: float) -> float | FloatArray:
    return np.maximum(S - K, 0.0)


@overload
def put_payoff(S: float, K: float) -> float: ...
@overload
def put_payoff(S: FloatArray, K: float) -> FloatArray: ...
def put_payoff(S: float | FloatArray, K: float) -> float | FloatArray:
    return np.maximum(K - S, 0.0)


@dataclass(frozen=True, slots=True)
class Call:
    strike: float

    def __post_init__(self) -> None:
        _check_strike(self.strike)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        return _finish(call_payoff(np.asarray(S, dtype=float), K=self.strike))


@dataclass(frozen=True, slots=True)
class Put:
    strike: float

    def __post_init__(self) -> None:
        _check_strike(self.strike)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        return _finish(put_payoff(np.asarray(S, dtype=float), K=self.strike))


@dataclass(frozen=True, slots=True)
class DigitalCall:
    """Pays 1 when ``S > K`` (strict)."""

    strike: float

    def __post_init__(self) -> None:
        _check_strike(self.strike)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        return _finish(np.where(np.asarray(S, dtype=float) > self.strike, 1.0, 0.0))


@dataclass(frozen=True, slots=True)
class DigitalPut:
    """Pays 1 when ``S < K`` (strict)."""

    strike: float

    def __post_init__(self) -> None:
        _check_strike(self.strike)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        return _finish(np.where(np.asarray(S, dtype=float) < self.strike, 1.0, 0.0))


@dataclass(frozen=True, slots=True)
class DoubleDigital:
    """Pays 1 when ``K1 < S < K2``."""

    K1: float
    K2: float

    def __post_init__(self) -> None:
        _check_strikes(self.K1, self.K2)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        S_arr = np.asarray(S, dtype=float)
        return _finish(np.where((S_arr > self.K1) & (S_arr < self.K2), 1.0, 0.0))


@dataclass(frozen=True, slots=True)
class BullSpread:
    """Long call at ``K1``, short call at ``K2``."""

    K1: float
    K2: float

    def __post_init__(self) -> None:
        _check_strikes(self.K1, self.K2)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        S_arr = np.asarray(S, dtype=float)
        return _finish(np.clip(S_arr - self.K1, 0.0, self.K2 - self.K1))


@dataclass(frozen=True, slots=True)
class BearSpread:
    """Long put at ``K2``, short put at ``K1``."""

    K1: float
    K2: float

    def __post_init__(self) -> None:
        _check_strikes(self.K1, self.K2)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        S_arr = np.asarray(S, dtype=float)
        return _finish(np.clip(self.K2 - S_arr, 0.0, self.K2 - self.K1))


@dataclass(frozen=True, slots=True)
class Strangle:
    """Long put at ``K1`` plus long call at ``K2``."""

    K1: float
    K2: float

    def __post_init__(self) -> None:
        _check_strikes(self.K1, self.K2)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        S_arr = np.asarray(S, dtype=float)
        return _finish(put_payoff(S_arr, K=self.K1) + call_payoff(S_arr, K=self.K2))


@dataclass(frozen=True, slots=True)
class Butterfly:
    """Tent payoff peaking at ``(K1 + K2) / 2`` and zero outside ``(K1, K2)``."""

    K1: float
    K2: float

    def __post_init__(self) -> None:
        _check_strikes(self.K1, self.K2)

    def __call__(self, S: float | FloatArray) -> float | FloatArray:
        S_arr = np.asarray(S, dtype=float)
        mid = 0.5 * (self.K1 + self.K2)
        rising = (S_arr > self.K1) & (S_arr <= mid)
        falling = (S_arr > mid) & (S_arr < self.K2)
        out = np.where(rising, S_arr - self.K1, np.where(falling, self.K2 - S_arr, 0.0))
        return _finish(out)
