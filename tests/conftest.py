"""Pytest helpers for the lattice_pricing library."""

from __future__ import annotations

import numpy as np
import pytest

from lattice_pricing.models import LatticeModel


@pytest.fixture
def base_params() -> dict:
    """A small set of canonical parameters used across tests."""
    return {
        "S": 100.0,
        "K": 100.0,
        "r": 0.05,
        "sigma": 0.2,
        "T": 1.0,
    }


@pytest.fixture
def make_model(base_params):
    """Factory fixture for LatticeModel, defaulting to the canonical parameters."""

    def _make(
        *,
        n_steps: int,
        S: float | None = None,
        r: float | None = None,
        sigma: float | None = None,
        T: float | None = None,
    ) -> LatticeModel:
        return LatticeModel(
            spot=base_params["S"] if S is None else S,
            rate=base_params["r"] if r is None else r,
            volatility=base_params["sigma"] if sigma is None else sigma,
            maturity=base_params["T"] if T is None else T,
            n_steps=n_steps,
        )

    return _make


@pytest.fixture
def rng():
    """Seeded RNG factory."""

    def _rng(seed: int) -> np.random.Generator:
        return np.random.default_rng(seed)

    return _rng
