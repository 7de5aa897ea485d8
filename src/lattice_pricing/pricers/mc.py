from __future__ import annotations

import logging
from dataclasses import dataclass, field
from math import exp

import numpy as np

from ..config import MCConfig, RandomConfig
from ..exceptions import InvalidParameterError
from ..instruments.base import Aggregator, Payoff
from ..models.lattice import LatticeModel
from ..models.stochastic_processes import sim_gbm_paths

logger = logging.getLogger(__name__)


def make_rng(cfg: RandomConfig) -> np.random.Generator:
    """Seeded generator for the configured bit generator."""
    if cfg.rng_type == "mt19937":
        return np.random.Generator(np.random.MT19937(cfg.seed))
    return np.random.Generator(np.random.PCG64(cfg.seed))


@dataclass(frozen=True, slots=True)
class McGBMPathModel:
    """
    Monte Carlo pricer for path-dependent payoffs under risk-neutral GBM.

    The underlying follows::

        S_{k+1} = S_k * exp((r - sigma^2 / 2) dt + sigma sqrt(dt) Z_k)

    on ``n_steps`` equal steps. Each path folds its monitored prices into an
    aggregate (starting from ``S0``) and the payoff is applied to the final
    aggregate, discounted with ``exp(-r tau)``.

    Parameters
    ----------
    S0
        Spot price at time 0. Must be non-negative.
    r
        Risk-free rate.
    sigma
        Volatility. Must be non-negative.
    tau
        Time to maturity. Must be non-negative; at ``tau = 0`` every path
        stays at ``S0``.
    n_paths, n_steps
        Simulation size.
    rng
        NumPy random number generator used for sampling.
    """

    S0: float
    r: float
    sigma: float
    tau: float
    n_paths: int
    n_steps: int
    rng: np.random.Generator = field(
        default_factory=np.random.default_rng,
        repr=False,
    )

    def __post_init__(self) -> None:
        if self.S0 < 0.0:
            raise InvalidParameterError("S0 must be non-negative")
        if self.sigma < 0.0:
            raise InvalidParameterError("sigma must be non-negative")
        if self.tau < 0.0:
            raise InvalidParameterError("tau must be non-negative")
        if self.n_paths <= 0:
            raise InvalidParameterError("n_paths must be positive")
        if self.n_steps <= 0:
            raise InvalidParameterError("n_steps must be positive")

    def simulate_paths(self) -> np.ndarray:
        """Simulated prices, shape ``(n_paths, n_steps + 1)``; column 0 is ``S0``."""
        _, S = sim_gbm_paths(
            n_paths=self.n_paths,
            T=self.tau,
            n_steps=self.n_steps,
            mu=self.r,
            sigma=self.sigma,
            S0=self.S0,
            rng=self.rng,
        )
        return S

    def price_path_payoff(
        self, payoff: Payoff, aggregator: Aggregator
    ) -> tuple[float, float]:
        """Discounted mean payoff and its standard error."""
        S = self.simulate_paths()

        agg = S[:, 0].copy()
        for k in range(1, self.n_steps + 1):
            agg = np.asarray(aggregator(agg, S[:, k], k), dtype=float)

        payoffs = np.asarray(payoff(agg), dtype=float)
        df = exp(-self.r * self.tau)
        disc = df * payoffs

        price = float(np.mean(disc))
        std_err = float(np.std(disc, ddof=1) / np.sqrt(self.n_paths)) if self.n_paths > 1 else 0.0
        return price, std_err


def mc_path_price(
    model: LatticeModel,
    payoff: Payoff,
    aggregator: Aggregator,
    *,
    cfg: MCConfig | None = None,
) -> tuple[float, float]:
    """Monte Carlo price of a path-dependent payoff on the lattice's market.

    A fresh generator is seeded from ``cfg.random`` on every call, so repeated
    calls (and bumped-spot calls) reuse the same random numbers.
    """
    cfg = cfg or MCConfig()
    mc = McGBMPathModel(
        S0=model.spot,
        r=model.rate,
        sigma=model.volatility,
        tau=model.maturity,
        n_paths=cfg.n_paths,
        n_steps=cfg.n_steps,
        rng=make_rng(cfg.random),
    )
    price, std_err = mc.price_path_payoff(payoff, aggregator)
    logger.debug(
        "mc path price=%.6g se=%.3g (paths=%d steps=%d seed=%d)",
        price,
        std_err,
        cfg.n_paths,
        cfg.n_steps,
        cfg.random.seed,
    )
    return price, std_err
