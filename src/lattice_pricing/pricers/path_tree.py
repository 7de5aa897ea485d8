"""Non-recombining binomial trees.

A non-recombining tree keeps one node per distinct path, which is needed
when the payoff depends on the realized path (Asian, lookback) and for the
exact replication of American options through the Doob decomposition.

Storage is a single flat array in heap order::

    node (n, j)  ->  index 2**n - 1 + j,   0 <= j < 2**n
    children     ->  (n+1, 2j) after a down move, (n+1, 2j+1) after an up move

so the low bit of ``j`` is the move taken into level ``n`` and the ancestor of
leaf ``j`` at level ``n`` is ``j >> (N - n)``.

The tree holds ``2**(N+1) - 1`` nodes. Memory and time grow exponentially in
the step count; step counts above :data:`MAX_DENSE_STEPS` trigger a
``RuntimeWarning`` but are not refused.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, field
from typing import ClassVar

import numpy as np

from ..config import MCConfig
from ..exceptions import InvalidParameterError
from ..instruments.base import Aggregator, Payoff
from ..models.lattice import LatticeModel
from ..types import DoobDecomposition, ExerciseStyle, HedgingStrategy
from ..typing import FloatArray
from ._lattice import eval_payoff, replicate
from .mc import mc_path_price

logger = logging.getLogger(__name__)

MAX_DENSE_STEPS = 24


def _offset(n: int) -> int:
    return (1 << n) - 1


@dataclass(frozen=True, slots=True)
class NonRecombiningTree:
    """Flat heap-ordered price tree with ``2**n`` nodes on level ``n``."""

    model: LatticeModel
    prices: FloatArray

    @classmethod
    def from_model(cls, model: LatticeModel) -> NonRecombiningTree:
        N = model.n_steps
        if N > MAX_DENSE_STEPS:
            warnings.warn(
                f"Non-recombining tree with {N} steps holds {2 ** (N + 1) - 1} nodes; "
                f"consider n_steps <= {MAX_DENSE_STEPS}.",
                RuntimeWarning,
                stacklevel=2,
            )

        prices = np.empty(_offset(N + 1), dtype=float)
        prices[0] = model.spot
        factors = np.array([1.0 + model.down, 1.0 + model.up], dtype=float)
        for n in range(1, N + 1):
            parent = prices[_offset(n - 1) : _offset(n)]
            prices[_offset(n) : _offset(n + 1)] = np.repeat(parent, 2) * np.tile(
                factors, 1 << (n - 1)
            )

        logger.debug("built non-recombining tree: N=%d nodes=%d", N, prices.size)
        return cls(model=model, prices=prices)

    @property
    def n_steps(self) -> int:
        return self.model.n_steps

    @property
    def size(self) -> int:
        return int(self.prices.shape[0])

    @staticmethod
    def index(n: int, j: int) -> int:
        """Flat index of node ``(n, j)``."""
        return _offset(n) + j

    def level_of(self, arr: FloatArray, n: int) -> FloatArray:
        """View of level ``n`` inside any flat array laid out like this tree."""
        if not (0 <= n <= self.n_steps):
            raise IndexError(f"level must be in [0, {self.n_steps}], got {n}")
        return arr[_offset(n) : _offset(n + 1)]

    def level(self, n: int) -> FloatArray:
        return self.level_of(self.prices, n)

    def to_levels(self, arr: FloatArray) -> list[FloatArray]:
        return [self.level_of(arr, n).copy() for n in range(self.n_steps + 1)]

    def backward(
        self, terminal: FloatArray, *, exercise: FloatArray | None = None
    ) -> FloatArray:
        """Discounted 1/2-1/2 backward induction from the leaf values.

        If ``exercise`` (a flat array of immediate-exercise values) is given,
        every node takes ``max(exercise, continuation)``.
        """
        N = self.n_steps
        disc = self.model.discount
        V = np.empty(self.size, dtype=float)
        self.level_of(V, N)[:] = terminal
        for n in range(N - 1, -1, -1):
            child = self.level_of(V, n + 1)
            cont = disc * 0.5 * (child[0::2] + child[1::2])
            if exercise is not None:
                cont = np.maximum(self.level_of(exercise, n), cont)
            self.level_of(V, n)[:] = cont
        return V

    def hedge(self, values: FloatArray) -> HedgingStrategy:
        """Replicating portfolio of a flat value process at every non-terminal node."""
        deltas: list[FloatArray] = []
        bonds: list[FloatArray] = []
        for n in range(self.n_steps):
            V_next = self.level_of(values, n + 1)
            S_next = self.level(n + 1)
            delta, bond = replicate(
                self.level_of(values, n),
                self.level(n),
                V_next[1::2],
                V_next[0::2],
                S_next[1::2],
                S_next[0::2],
            )
            deltas.append(delta)
            bonds.append(bond)
        return HedgingStrategy(delta=deltas, bond=bonds)


def doob_decomposition(tree: NonRecombiningTree, payoff: Payoff) -> DoobDecomposition:
    """Split the American value process into martingale and compensator.

    With ``VNR`` the optimal-stopping values on the non-recombining tree:

    - ``incr[n] = VNR[n] - disc * E[VNR[n+1]]`` (non-negative),
    - ``A[0] = 0`` and ``A[n] = (A[n-1] + incr[n-1]) / disc`` on both children,
      so ``A[n]`` is known at step ``n - 1``,
    - ``M = VNR + A`` is a discounted martingale and can be replicated exactly.
    """
    N = tree.n_steps
    disc = tree.model.discount

    exercise = eval_payoff(payoff, tree.prices)
    values = tree.backward(tree.level_of(exercise, N), exercise=exercise)

    compensator = np.zeros(tree.size, dtype=float)
    for n in range(1, N + 1):
        child = tree.level_of(values, n)
        cont = disc * 0.5 * (child[0::2] + child[1::2])
        incr = tree.level_of(values, n - 1) - cont
        prev = tree.level_of(compensator, n - 1)
        tree.level_of(compensator, n)[:] = np.repeat((prev + incr) / disc, 2)

    return DoobDecomposition(
        tree=tree,
        values=values,
        compensator=compensator,
        martingale=values + compensator,
    )


@dataclass(frozen=True, slots=True)
class PathDependentTree:
    """European-exercise path-dependent option on a non-recombining tree.

    The aggregate starts at the spot and folds in each later price along the
    path with ``aggregator(agg, S_n, n)``; the payoff is applied to the final
    aggregate.
    """

    exercise: ClassVar[ExerciseStyle] = ExerciseStyle.EUROPEAN

    model: LatticeModel
    payoff: Payoff
    aggregator: Aggregator
    _tree: NonRecombiningTree = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_tree", NonRecombiningTree.from_model(self.model))

    @classmethod
    def from_params(
        cls,
        spot: float,
        rate: float,
        volatility: float,
        maturity: float,
        n_steps: int,
        payoff: Payoff,
        aggregator: Aggregator,
    ) -> PathDependentTree:
        model = LatticeModel(
            spot=spot,
            rate=rate,
            volatility=volatility,
            maturity=maturity,
            n_steps=n_steps,
        )
        return cls(model=model, payoff=payoff, aggregator=aggregator)

    @property
    def tree(self) -> NonRecombiningTree:
        return self._tree

    def stock_tree(self) -> list[FloatArray]:
        return self._tree.to_levels(self._tree.prices)

    def aggregates(self) -> FloatArray:
        """Path aggregate at every leaf (length ``2**N``)."""
        tree = self._tree
        agg = np.array([self.model.spot], dtype=float)
        for n in range(1, tree.n_steps + 1):
            agg = np.asarray(
                self.aggregator(np.repeat(agg, 2), tree.level(n), n), dtype=float
            )
        return agg

    def terminal_values(self) -> FloatArray:
        return eval_payoff(self.payoff, self.aggregates())

    def _values(self) -> FloatArray:
        return self._tree.backward(self.terminal_values())

    def tree_price(self) -> list[FloatArray]:
        return self._tree.to_levels(self._values())

    def price(self) -> float:
        return float(self._values()[0])

    def hedging_strategy(self) -> HedgingStrategy:
        return self._tree.hedge(self._values())

    def delta_zero(self) -> float:
        return self.hedging_strategy().delta_zero

    # --- Monte Carlo cross-check

    def price_mc(self, config: MCConfig | None = None) -> float:
        price, _ = mc_path_price(
            self.model, self.payoff, self.aggregator, cfg=config or MCConfig()
        )
        return price

    def delta_mc(self, config: MCConfig | None = None) -> float:
        """Central bump-and-reprice of :meth:`price_mc` with common random numbers."""
        cfg = config or MCConfig()
        spot = self.model.spot
        if spot <= 0.0:
            raise InvalidParameterError("delta_mc requires spot > 0")
        eps = cfg.bump_rel * spot

        up, _ = mc_path_price(
            self.model.with_spot(spot + eps), self.payoff, self.aggregator, cfg=cfg
        )
        dn, _ = mc_path_price(
            self.model.with_spot(spot - eps), self.payoff, self.aggregator, cfg=cfg
        )
        return (up - dn) / (2.0 * eps)
