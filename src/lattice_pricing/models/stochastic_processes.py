from __future__ import annotations

import numpy as np


def sim_brownian(
    n_paths: int,
    T: float,
    n_steps: int,
    rng: np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Simulate n_paths of Brownian motion on [0, T] with n_steps equal steps.

    Parameters
    ----------
    n_paths : int
        Number of independent Brownian paths.
    T : float
        Time horizon.
    n_steps : int
        Number of time steps.
    rng : np.random.Generator, optional
        Random number generator. If None, a new default_rng() is created.

    Returns
    -------
    t : ndarray, shape (n_steps + 1,)
        Time grid.
    W : ndarray, shape (n_paths, n_steps + 1)
        Simulated Brownian paths, starting at 0.
    """
    if rng is None:
        rng = np.random.default_rng()

    dt = T / n_steps
    Z = rng.standard_normal((n_paths, n_steps))
    W_incr = np.cumsum(np.sqrt(dt) * Z, axis=1)

    # prepend W0 = 0
    W = np.hstack([np.zeros((n_paths, 1)), W_incr])

    t = np.arange(n_steps + 1) * dt
    return t, W


def sim_gbm_paths(
    n_paths: int,
    T: float,
    n_steps: int,
    mu: float = 0.0,
    sigma: float = 1.0,
    S0: float = 1.0,
    rng: np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Simulate n_paths of geometric Brownian motion on [0, T].

    Returns
    -------
    t : ndarray, shape (n_steps + 1,)
        Time grid.
    S : ndarray, shape (n_paths, n_steps + 1)
        Simulated paths; column 0 equals S0.
    """
    t, B = sim_brownian(n_paths, T, n_steps, rng=rng)
    S = S0 * np.exp((mu - 0.5 * sigma**2) * t[None, :] + sigma * B)
    return t, S
