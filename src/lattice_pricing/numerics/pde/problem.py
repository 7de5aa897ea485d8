from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from ...exceptions import InvalidParameterError
from ...instruments.base import Payoff, Volatility
from ...typing import FloatArray

SInput = float | NDArray[np.floating]
SOutput = float | NDArray[np.floating]

# Coefficient/source functions a(t,S), b(t,S), c(t,S), d(t,S).
# They may be scalar-only or NumPy-vectorized in S.
CoeffTS = Callable[[float, SInput], SOutput]


@dataclass(frozen=True, slots=True)
class ParabolicPDE:
    """Backward parabolic PDE on ``[0, T] x [s_min, s_max]``.

    PDE form::

        v_t = a(t,S) v_SS + b(t,S) v_S + c(t,S) v + d(t,S)

    solved backward from the terminal condition ``v(T, S) = terminal(S)``
    with Dirichlet boundaries ``v(t, s_min) = lower(t)`` and
    ``v(t, s_max) = upper(t)``.
    """

    maturity: float
    s_min: float
    s_max: float
    a: CoeffTS
    b: CoeffTS
    c: CoeffTS
    d: CoeffTS
    terminal: Callable[[SInput], SOutput]
    lower: Callable[[float], float]
    upper: Callable[[float], float]

    def __post_init__(self) -> None:
        if self.maturity <= 0.0:
            raise InvalidParameterError("maturity must be > 0")
        if self.s_min < 0.0:
            raise InvalidParameterError("s_min must be >= 0")
        if not (self.s_min < self.s_max):
            raise InvalidParameterError("Need s_min < s_max")

    def coeffs(
        self, t: float, S: FloatArray
    ) -> tuple[FloatArray, FloatArray, FloatArray, FloatArray]:
        """Evaluate ``a, b, c, d`` at time ``t`` on the price array ``S``."""
        S = np.asarray(S, dtype=float)

        def _ev(fn: CoeffTS) -> FloatArray:
            return np.broadcast_to(np.asarray(fn(t, S), dtype=float), S.shape)

        return _ev(self.a), _ev(self.b), _ev(self.c), _ev(self.d)


def diffusion_pde(
    *,
    maturity: float,
    s_min: float,
    s_max: float,
    rate: float,
    payoff: Payoff,
    volatility: Volatility,
) -> ParabolicPDE:
    """Black-Scholes type diffusion PDE for a European payoff.

    Coefficients::

        a = -0.5 * (sigma(t,S) * S)**2,   b = -r S,   c = r,   d = 0

    The boundaries are the payoff at the domain edge discounted back from
    maturity.
    """
    r = float(rate)
    T = float(maturity)
    lo = float(s_min)
    hi = float(s_max)

    def a(t: float, S: SInput) -> SOutput:
        return -0.5 * (volatility(t, S) * np.asarray(S, dtype=float)) ** 2

    def b(t: float, S: SInput) -> SOutput:
        return -r * np.asarray(S, dtype=float)

    def c(t: float, S: SInput) -> SOutput:
        return r

    def d(t: float, S: SInput) -> SOutput:
        return 0.0

    def lower(t: float) -> float:
        return float(payoff(lo)) * math.exp(-r * (T - t))

    def upper(t: float) -> float:
        return float(payoff(hi)) * math.exp(-r * (T - t))

    return ParabolicPDE(
        maturity=T,
        s_min=lo,
        s_max=hi,
        a=a,
        b=b,
        c=c,
        d=d,
        terminal=payoff,
        lower=lower,
        upper=upper,
    )
