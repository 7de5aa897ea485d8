"""Model layer: lattice parametrization, volatility functors and GBM paths."""

from .lattice import LatticeModel
from .volatility import ConstantVol, LocalVol

__all__ = ["LatticeModel", "ConstantVol", "LocalVol"]
