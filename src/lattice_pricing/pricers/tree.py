from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from ..config import RichardsonConfig
from ..exceptions import InvalidParameterError
from ..instruments.base import Payoff
from ..models.lattice import LatticeModel
from ..numerics.richardson import richardson_extrapolate
from ..types import DoobDecomposition, ExerciseStyle, HedgingStrategy
from ..typing import FloatArray
from ._lattice import eval_payoff, replicate
from .path_tree import NonRecombiningTree, doob_decomposition

logger = logging.getLogger(__name__)

# ----------------------------
# Tree structures
# ----------------------------


def _stock_level(model: LatticeModel, n: int) -> FloatArray:
    i = np.arange(n + 1, dtype=float)
    return model.spot * np.power(1.0 + model.up, i) * np.power(1.0 + model.down, n - i)


def build_stock_tree(model: LatticeModel) -> list[FloatArray]:
    """Recombining price tree: ``S[n][i] = spot (1+up)^i (1+down)^(n-i)``."""
    levels = [_stock_level(model, n) for n in range(model.n_steps + 1)]
    logger.debug(
        "built recombining tree: N=%d nodes=%d",
        model.n_steps,
        (model.n_steps + 1) * (model.n_steps + 2) // 2,
    )
    return levels


def lattice_value(
    model: LatticeModel, payoff: Payoff, *, american: bool = False
) -> float:
    """Root value only, holding a single level in memory at a time."""
    disc = model.discount
    V = eval_payoff(payoff, _stock_level(model, model.n_steps))
    for n in range(model.n_steps - 1, -1, -1):
        V = disc * 0.5 * (V[1:] + V[:-1])
        if american:
            V = np.maximum(eval_payoff(payoff, _stock_level(model, n)), V)
    return float(V[0])


def smoothed_american_price(model: LatticeModel, payoff: Payoff, n_steps: int) -> float:
    """Mean of the American lattice prices at ``n_steps`` and ``n_steps + 1``.

    CRR prices oscillate between even and odd step counts; averaging the two
    neighbours removes the oscillation and leaves a sequence that is smooth
    in ``1/N``, which is what Richardson extrapolation needs.
    """
    a = lattice_value(model.with_steps(n_steps), payoff, american=True)
    b = lattice_value(model.with_steps(n_steps + 1), payoff, american=True)
    return 0.5 * (a + b)


def backward_induction(
    model: LatticeModel,
    payoff: Payoff,
    stock: list[FloatArray],
    *,
    american: bool = False,
) -> list[FloatArray]:
    """Value tree by discounted 1/2-1/2 averaging of the two successors.

    With ``american=True`` every node takes ``max(payoff, continuation)``.
    """
    N = model.n_steps
    disc = model.discount
    values: list[FloatArray] = [np.empty(0)] * (N + 1)
    values[N] = eval_payoff(payoff, stock[N])
    for n in range(N - 1, -1, -1):
        nxt = values[n + 1]
        cont = disc * 0.5 * (nxt[1:] + nxt[:-1])
        if american:
            cont = np.maximum(eval_payoff(payoff, stock[n]), cont)
        values[n] = cont
    return values


def replicating_portfolio(
    stock: list[FloatArray], values: list[FloatArray]
) -> HedgingStrategy:
    """Delta/bond holdings replicating ``values`` one step ahead at every node."""
    deltas: list[FloatArray] = []
    bonds: list[FloatArray] = []
    for n in range(len(stock) - 1):
        S_next = stock[n + 1]
        V_next = values[n + 1]
        delta, bond = replicate(
            values[n], stock[n], V_next[1:], V_next[:-1], S_next[1:], S_next[:-1]
        )
        deltas.append(delta)
        bonds.append(bond)
    return HedgingStrategy(delta=deltas, bond=bonds)


# ----------------------------
# Pricing engines
# ----------------------------


class _RecombiningOption(ABC):
    __slots__ = ()

    model: LatticeModel
    payoff: Payoff
    _stock: list[FloatArray]

    @classmethod
    def from_params(
        cls,
        spot: float,
        rate: float,
        volatility: float,
        maturity: float,
        n_steps: int,
        payoff: Payoff,
    ):
        model = LatticeModel(
            spot=spot,
            rate=rate,
            volatility=volatility,
            maturity=maturity,
            n_steps=n_steps,
        )
        return cls(model=model, payoff=payoff)

    def stock_tree(self) -> list[FloatArray]:
        return [lvl.copy() for lvl in self._stock]

    @abstractmethod
    def tree_price(self) -> list[FloatArray]: ...

    @abstractmethod
    def hedging_strategy(self) -> HedgingStrategy: ...

    def price(self) -> float:
        return float(self.tree_price()[0][0])

    def delta_zero(self) -> float:
        return self.hedging_strategy().delta_zero


@dataclass(frozen=True, slots=True)
class EuropeanTree(_RecombiningOption):
    """European option on the recombining CRR tree."""

    exercise: ClassVar[ExerciseStyle] = ExerciseStyle.EUROPEAN

    model: LatticeModel
    payoff: Payoff
    _stock: list[FloatArray] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_stock", build_stock_tree(self.model))

    def tree_price(self) -> list[FloatArray]:
        return backward_induction(self.model, self.payoff, self._stock)

    def hedging_strategy(self) -> HedgingStrategy:
        return replicating_portfolio(self._stock, self.tree_price())


@dataclass(frozen=True, slots=True)
class AmericanTree(_RecombiningOption):
    """
    American option on the recombining CRR tree.

    Prices use early exercise at every node. The hedge is built on the
    non-recombining tree from the martingale part of the Doob decomposition
    (see :func:`~lattice_pricing.pricers.path_tree.doob_decomposition`), so it
    needs ``2**(N+1) - 1`` nodes and is meant for small step counts.

    :meth:`price_rr` and :meth:`delta_rr` ignore ``model.n_steps`` and use the
    step counts of a :class:`~lattice_pricing.config.RichardsonConfig`.
    """

    exercise: ClassVar[ExerciseStyle] = ExerciseStyle.AMERICAN

    model: LatticeModel
    payoff: Payoff
    _stock: list[FloatArray] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_stock", build_stock_tree(self.model))

    def tree_price(self) -> list[FloatArray]:
        return backward_induction(self.model, self.payoff, self._stock, american=True)

    def doob_decomposition(self) -> DoobDecomposition:
        return doob_decomposition(NonRecombiningTree.from_model(self.model), self.payoff)

    def hedging_strategy(self) -> HedgingStrategy:
        doob = self.doob_decomposition()
        return doob.tree.hedge(doob.martingale)

    def price_rr(self, config: RichardsonConfig | None = None) -> float:
        cfg = config or RichardsonConfig()
        return _american_rr(self.model, self.payoff, cfg)

    def delta_rr(self, config: RichardsonConfig | None = None) -> float:
        """Central bump of :meth:`price_rr` with ``eps = bump_rel * spot``."""
        cfg = config or RichardsonConfig()
        spot = self.model.spot
        if spot <= 0.0:
            raise InvalidParameterError("delta_rr requires spot > 0")
        eps = cfg.bump_rel * spot

        up = _american_rr(self.model.with_spot(spot + eps), self.payoff, cfg)
        dn = _american_rr(self.model.with_spot(spot - eps), self.payoff, cfg)
        return (up - dn) / (2.0 * eps)


def _american_rr(model: LatticeModel, payoff: Payoff, cfg: RichardsonConfig) -> float:
    def price_at(n_steps: int) -> float:
        return smoothed_american_price(model, payoff, n_steps)

    return richardson_extrapolate(price_at, cfg.step_counts)


# ----------------------------
# Convenience functions
# ----------------------------


def price_european_tree(
    payoff: Payoff,
    *,
    spot: float,
    rate: float,
    volatility: float,
    maturity: float,
    n_steps: int,
) -> float:
    return EuropeanTree.from_params(
        spot, rate, volatility, maturity, n_steps, payoff
    ).price()


def price_american_tree(
    payoff: Payoff,
    *,
    spot: float,
    rate: float,
    volatility: float,
    maturity: float,
    n_steps: int,
) -> float:
    return AmericanTree.from_params(
        spot, rate, volatility, maturity, n_steps, payoff
    ).price()
