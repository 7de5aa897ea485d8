"""
lattice_pricing

Option pricing on binomial lattices and with a Crank-Nicolson PDE solver.

The main entry points are re-exported at the top level, so you can write,
for example:

    from lattice_pricing import AmericanTree, Put

    AmericanTree.from_params(100.0, 0.05, 0.2, 1.0, 200, Put(100.0)).price_rr()
"""

from .config import MCConfig, RandomConfig, RichardsonConfig
from .exceptions import InvalidParameterError, NumericalInstabilityError, OutOfDomainError
from .instruments import (
    ArithmeticMean,
    BearSpread,
    BullSpread,
    Butterfly,
    Call,
    DigitalCall,
    DigitalPut,
    DoubleDigital,
    GeometricMean,
    Put,
    RunningMax,
    RunningMin,
    Strangle,
)
from .models import ConstantVol, LatticeModel, LocalVol
from .numerics.pde import CrankNicolsonSolver, ParabolicPDE, diffusion_pde
from .pricers import (
    AmericanTree,
    EuropeanTree,
    NonRecombiningTree,
    PathDependentTree,
    pde_delta,
    pde_price,
    solve_diffusion_pde,
)
from .types import DoobDecomposition, ExerciseStyle, GridSample, HedgingStrategy

__all__ = [
    # Config
    "MCConfig",
    "RandomConfig",
    "RichardsonConfig",
    # Errors
    "InvalidParameterError",
    "OutOfDomainError",
    "NumericalInstabilityError",
    # Types
    "ExerciseStyle",
    "HedgingStrategy",
    "DoobDecomposition",
    "GridSample",
    # Models
    "LatticeModel",
    "ConstantVol",
    "LocalVol",
    # Payoffs / aggregators
    "Call",
    "Put",
    "DigitalCall",
    "DigitalPut",
    "DoubleDigital",
    "BullSpread",
    "BearSpread",
    "Strangle",
    "Butterfly",
    "ArithmeticMean",
    "GeometricMean",
    "RunningMax",
    "RunningMin",
    # Lattice pricers
    "EuropeanTree",
    "AmericanTree",
    "NonRecombiningTree",
    "PathDependentTree",
    # PDE
    "ParabolicPDE",
    "diffusion_pde",
    "CrankNicolsonSolver",
    "solve_diffusion_pde",
    "pde_price",
    "pde_delta",
]
