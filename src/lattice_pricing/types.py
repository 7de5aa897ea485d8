from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd

from .typing import FloatArray

if TYPE_CHECKING:
    from .pricers.path_tree import NonRecombiningTree


class ExerciseStyle(str, Enum):
    """Exercise style of a lattice option."""

    EUROPEAN = "european"
    AMERICAN = "american"


@dataclass(frozen=True, slots=True)
class HedgingStrategy:
    """Replicating portfolio at every non-terminal node of a tree.

    Parameters
    ----------
    delta : list of ndarray
        ``delta[n][i]`` is the number of units of the underlying held at node
        ``(n, i)``.
    bond : list of ndarray
        ``bond[n][i]`` is the amount invested in the riskless asset at node
        ``(n, i)``.

    Notes
    -----
    Level ``n`` has ``n + 1`` entries on a recombining tree and ``2**n``
    entries on a non-recombining tree. At each node ``bond + delta * S``
    equals the replicated value there, and ``delta * S_child + bond / discount``
    equals it at both successors.
    """

    delta: list[FloatArray]
    bond: list[FloatArray]

    @property
    def n_levels(self) -> int:
        return len(self.delta)

    @property
    def delta_zero(self) -> float:
        return float(self.delta[0][0])


@dataclass(frozen=True, slots=True)
class DoobDecomposition:
    """Snell-envelope split of an American value process on a non-recombining tree.

    ``martingale = values + compensator`` at every node. All three arrays are
    flat and use the heap layout of :class:`~lattice_pricing.pricers.path_tree.NonRecombiningTree`.
    """

    tree: NonRecombiningTree
    values: FloatArray
    compensator: FloatArray
    martingale: FloatArray

    def level(self, name: str, n: int) -> FloatArray:
        arr = getattr(self, name)
        return self.tree.level_of(arr, n)


@dataclass(frozen=True, slots=True)
class GridSample:
    """Fixed 11x11 sample of price and delta over a PDE domain.

    ``price[i, j]`` and ``delta[i, j]`` are evaluated at ``(t[i], S[j])``.
    """

    t: FloatArray
    S: FloatArray
    price: FloatArray
    delta: FloatArray

    def to_frame(self) -> pd.DataFrame:
        """Long-format table with columns ``t, S, price, delta``."""
        tt, ss = np.meshgrid(self.t, self.S, indexing="ij")
        return pd.DataFrame(
            {
                "t": tt.ravel(),
                "S": ss.ravel(),
                "price": np.asarray(self.price).ravel(),
                "delta": np.asarray(self.delta).ravel(),
            }
        )
