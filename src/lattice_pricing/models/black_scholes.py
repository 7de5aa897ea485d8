"""Closed-form Black-Scholes prices used as convergence benchmarks."""

from __future__ import annotations

import math

from scipy.stats import norm


def _validate_scalar_inputs(
    *, spot: float, strike: float, sigma: float, tau: float
) -> None:
    if spot <= 0.0:
        raise ValueError("spot must be positive")
    if strike <= 0.0:
        raise ValueError("strike must be positive")
    if sigma <= 0.0:
        raise ValueError("sigma must be positive")
    if tau <= 0.0:
        raise ValueError("tau must be positive")


def d1_d2(
    *, spot: float, strike: float, r: float, sigma: float, tau: float
) -> tuple[float, float]:
    _validate_scalar_inputs(spot=spot, strike=strike, sigma=sigma, tau=tau)
    vol_sqrt_t = sigma * math.sqrt(tau)
    d1 = (math.log(spot / strike) + (r + 0.5 * sigma * sigma) * tau) / vol_sqrt_t
    return float(d1), float(d1 - vol_sqrt_t)


def call_price(*, spot: float, strike: float, r: float, sigma: float, tau: float) -> float:
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return float(spot * norm.cdf(d1) - strike * math.exp(-r * tau) * norm.cdf(d2))


def put_price(*, spot: float, strike: float, r: float, sigma: float, tau: float) -> float:
    d1, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return float(strike * math.exp(-r * tau) * norm.cdf(-d2) - spot * norm.cdf(-d1))


def call_delta(*, spot: float, strike: float, r: float, sigma: float, tau: float) -> float:
    d1, _ = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return float(norm.cdf(d1))


def put_delta(*, spot: float, strike: float, r: float, sigma: float, tau: float) -> float:
    d1, _ = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return float(norm.cdf(d1) - 1.0)


def digital_call_price(
    *, spot: float, strike: float, r: float, sigma: float, tau: float
) -> float:
    """Cash-or-nothing call paying 1."""
    _, d2 = d1_d2(spot=spot, strike=strike, r=r, sigma=sigma, tau=tau)
    return float(math.exp(-r * tau) * norm.cdf(d2))
