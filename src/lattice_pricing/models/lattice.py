from __future__ import annotations

from dataclasses import dataclass, replace
from math import sqrt
from numbers import Integral

from ..exceptions import InvalidParameterError


@dataclass(frozen=True, slots=True)
class LatticeModel:
    """One-period CRR parametrization shared by every lattice engine.

    Per step of length ``dt = maturity / n_steps`` the underlying moves by a
    return of ``up = r dt + sigma sqrt(dt)`` or ``down = r dt - sigma sqrt(dt)``,
    and values are discounted by ``1 / (1 + r dt)``. With this choice the
    risk-neutral probability of either move is exactly 1/2, so no probability
    is stored and backward induction averages the two successors.
    """

    spot: float
    rate: float  # simple rate per unit time, any sign
    volatility: float
    maturity: float
    n_steps: int

    def __post_init__(self) -> None:
        if self.spot < 0.0:
            raise InvalidParameterError("spot must be >= 0")
        if self.volatility < 0.0:
            raise InvalidParameterError("volatility must be >= 0")
        if self.maturity < 0.0:
            raise InvalidParameterError("maturity must be >= 0")
        if not isinstance(self.n_steps, Integral) or isinstance(self.n_steps, bool):
            raise InvalidParameterError(
                f"n_steps must be an integer, got {type(self.n_steps).__name__}"
            )
        if self.n_steps <= 0:
            raise InvalidParameterError("n_steps must be > 0")
        if 1.0 + self.rate * self.dt <= 0.0:
            raise InvalidParameterError("1 + rate*dt must be > 0")
        if 1.0 + self.down <= 0.0:
            raise InvalidParameterError(
                f"Down move gives non-positive prices: 1+down={1.0 + self.down:.6g}. "
                "Try increasing n_steps."
            )

    @property
    def dt(self) -> float:
        return self.maturity / self.n_steps

    @property
    def up(self) -> float:
        return self.rate * self.dt + self.volatility * sqrt(self.dt)

    @property
    def down(self) -> float:
        return self.rate * self.dt - self.volatility * sqrt(self.dt)

    @property
    def discount(self) -> float:
        return 1.0 / (1.0 + self.rate * self.dt)

    @property
    def is_degenerate(self) -> bool:
        """True when both branches coincide (zero volatility or zero maturity)."""
        return not (self.up > self.down)

    def with_spot(self, spot: float) -> LatticeModel:
        return replace(self, spot=float(spot))

    def with_steps(self, n_steps: int) -> LatticeModel:
        return replace(self, n_steps=int(n_steps))
