from __future__ import annotations

from typing import Literal

import numpy as np
import pandas as pd

from ..types import GridSample
from ._mpl import get_plt, pretty_ax, require_columns


def plot_lattice_convergence(
    df: pd.DataFrame,
    *,
    err_scale: Literal["linear", "log"] = "log",
    figsize=(12, 5),
):
    """Plot lattice prices vs N and the European error vs N.

    ``df`` is the output of
    :func:`~lattice_pricing.diagnostics.convergence.lattice_convergence_table`.
    """
    require_columns(df, ("n_steps", "european", "american", "bs", "abs_error"))

    plt = get_plt()
    fig, (ax_price, ax_err) = plt.subplots(
        1, 2, figsize=figsize, constrained_layout=True
    )

    n = df["n_steps"].to_numpy()
    ax_price.plot(n, df["european"], marker="o", label="European lattice")
    ax_price.plot(n, df["american"], marker="s", label="American lattice")
    ax_price.axhline(float(df["bs"].iloc[0]), ls="--", label="BS benchmark")
    ax_price.set_xlabel("Number of steps N")
    ax_price.set_ylabel("Price")
    ax_price.set_title("Price convergence")
    ax_price.legend()
    pretty_ax(ax_price)

    # log axes cannot show exact zeros
    err = np.maximum(df["abs_error"].to_numpy(dtype=float), np.finfo(float).tiny)
    ax_err.plot(n, err, marker="o", label="|BS - European|")
    ax_err.set_xlabel("Number of steps N")
    ax_err.set_ylabel("Absolute error")
    ax_err.set_yscale(err_scale)
    ax_err.set_title("Error decay")
    ax_err.legend()
    pretty_ax(ax_err)

    return fig, (ax_price, ax_err)


def plot_grid_sample(sample: GridSample, *, figsize=(12, 5)):
    """Price and delta slices of a PDE grid sample, one line per sampled time."""
    plt = get_plt()
    fig, (ax_v, ax_d) = plt.subplots(1, 2, figsize=figsize, constrained_layout=True)

    for i, t in enumerate(sample.t):
        ax_v.plot(sample.S, sample.price[i], label=f"t={t:.3g}")
        ax_d.plot(sample.S, sample.delta[i], label=f"t={t:.3g}")

    ax_v.set_xlabel("S")
    ax_v.set_ylabel("Value")
    ax_v.set_title("PDE value")
    ax_v.legend(fontsize="small")
    pretty_ax(ax_v)

    ax_d.set_xlabel("S")
    ax_d.set_ylabel("Delta")
    ax_d.set_title("PDE delta")
    ax_d.set_ylim(-1.05, 1.05)
    pretty_ax(ax_d)

    return fig, (ax_v, ax_d)
