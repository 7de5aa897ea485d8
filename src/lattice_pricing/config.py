from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

RngType = Literal["pcg64", "mt19937"]


@dataclass(frozen=True, slots=True)
class RandomConfig:
    seed: int = 42
    rng_type: RngType = "pcg64"

    def __post_init__(self) -> None:
        if self.rng_type not in ("pcg64", "mt19937"):
            raise ValueError(f"Unsupported rng_type: {self.rng_type!r}")


@dataclass(frozen=True, slots=True)
class MCConfig:
    """Settings for the Monte Carlo path estimator.

    The defaults give a reproducible cross-check: a fixed seed, 10,000 paths
    and 100 monitoring steps regardless of the lattice step count.
    """

    n_paths: int = 10_000
    n_steps: int = 100
    bump_rel: float = 1e-4
    random: RandomConfig = field(default_factory=RandomConfig)

    def __post_init__(self) -> None:
        if self.n_paths <= 0:
            raise ValueError("n_paths must be > 0")
        if self.n_steps <= 0:
            raise ValueError("n_steps must be > 0")
        if self.bump_rel <= 0:
            raise ValueError("bump_rel must be > 0")


@dataclass(frozen=True, slots=True)
class RichardsonConfig:
    """Step-count sequence and spot bump for extrapolated lattice prices."""

    step_counts: tuple[int, ...] = (100, 200, 400)
    bump_rel: float = 1e-4

    def __post_init__(self) -> None:
        if len(self.step_counts) < 2:
            raise ValueError("step_counts needs at least two entries")
        if any(n <= 0 for n in self.step_counts):
            raise ValueError("step_counts must be positive")
        if any(b <= a for a, b in zip(self.step_counts, self.step_counts[1:])):
            raise ValueError("step_counts must be strictly increasing")
        if self.bump_rel <= 0:
            raise ValueError("bump_rel must be > 0")
