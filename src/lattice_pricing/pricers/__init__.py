"""Pricing engines.

- ``tree``: recombining CRR trees (European, American with Richardson)
- ``path_tree``: non-recombining trees (path-dependent payoffs, American hedge)
- ``mc``: Monte Carlo cross-check for path-dependent payoffs
- ``pde_pricer``: Crank-Nicolson diffusion PDE
"""

from .mc import McGBMPathModel, make_rng, mc_path_price
from .path_tree import (
    MAX_DENSE_STEPS,
    NonRecombiningTree,
    PathDependentTree,
    doob_decomposition,
)
from .pde_pricer import pde_delta, pde_price, solve_diffusion_pde
from .tree import (
    AmericanTree,
    EuropeanTree,
    backward_induction,
    build_stock_tree,
    lattice_value,
    price_american_tree,
    price_european_tree,
    replicating_portfolio,
    smoothed_american_price,
)

__all__ = [
    # Recombining trees
    "EuropeanTree",
    "AmericanTree",
    "build_stock_tree",
    "backward_induction",
    "replicating_portfolio",
    "lattice_value",
    "smoothed_american_price",
    "price_european_tree",
    "price_american_tree",
    # Non-recombining trees
    "NonRecombiningTree",
    "PathDependentTree",
    "doob_decomposition",
    "MAX_DENSE_STEPS",
    # Monte Carlo
    "McGBMPathModel",
    "mc_path_price",
    "make_rng",
    # PDE
    "solve_diffusion_pde",
    "pde_price",
    "pde_delta",
]
