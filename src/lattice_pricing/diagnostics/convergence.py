from __future__ import annotations

from collections.abc import Sequence

import numpy as np
import pandas as pd

from ..config import RichardsonConfig
from ..instruments.payoffs import Call, Put
from ..models import black_scholes as bs
from ..models.lattice import LatticeModel
from ..numerics.richardson import richardson_tableau
from ..pricers.tree import AmericanTree, EuropeanTree, smoothed_american_price


def _check_steps(n_steps: Sequence[int]) -> np.ndarray:
    vals = np.asarray(list(n_steps), dtype=int)
    if vals.size == 0:
        raise ValueError("n_steps must be non-empty")
    if np.any(vals <= 0):
        raise ValueError("n_steps must be positive integers")
    return np.unique(vals)


def lattice_convergence_table(
    *,
    spot: float,
    strike: float,
    rate: float,
    volatility: float,
    maturity: float,
    n_steps: Sequence[int],
    kind: str = "call",
) -> pd.DataFrame:
    """European and American lattice prices against Black-Scholes over step counts.

    Columns: ``n_steps, european, american, bs, abs_error`` where
    ``abs_error = |european - bs|``.
    """
    if kind not in ("call", "put"):
        raise ValueError("kind must be 'call' or 'put'")
    steps = _check_steps(n_steps)
    payoff = Call(strike) if kind == "call" else Put(strike)
    bs_fn = bs.call_price if kind == "call" else bs.put_price
    bs_val = bs_fn(spot=spot, strike=strike, r=rate, sigma=volatility, tau=maturity)

    rows = []
    for n in steps:
        model = LatticeModel(
            spot=spot,
            rate=rate,
            volatility=volatility,
            maturity=maturity,
            n_steps=int(n),
        )
        eu = EuropeanTree(model, payoff).price()
        am = AmericanTree(model, payoff).price()
        rows.append(
            {
                "n_steps": int(n),
                "european": eu,
                "american": am,
                "bs": bs_val,
                "abs_error": abs(eu - bs_val),
            }
        )
    return pd.DataFrame(rows)


def richardson_table(
    tree: AmericanTree, config: RichardsonConfig | None = None
) -> pd.DataFrame:
    """Extrapolation tableau of ``tree.price_rr``, one row per step count.

    Column ``T0`` holds the even/odd averaged lattice prices and ``T{k}`` the
    k-th refinement; the top-right entry is the value returned by
    :meth:`AmericanTree.price_rr`.
    """
    cfg = config or RichardsonConfig()
    values = [
        smoothed_american_price(tree.model, tree.payoff, n) for n in cfg.step_counts
    ]
    T = richardson_tableau(cfg.step_counts, values)
    df = pd.DataFrame(T, columns=[f"T{k}" for k in range(T.shape[1])])
    df.insert(0, "n_steps", list(cfg.step_counts))
    return df
