from .parity import (
    forward_discounted,
    lattice_forward_discounted,
    lattice_parity_residual,
    put_call_parity_residual,
)

__all__ = [
    "forward_discounted",
    "put_call_parity_residual",
    "lattice_forward_discounted",
    "lattice_parity_residual",
]
