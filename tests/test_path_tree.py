import numpy as np
import pytest

from lattice_pricing.config import MCConfig
from lattice_pricing.exceptions import InvalidParameterError, NumericalInstabilityError
from lattice_pricing.instruments import (
    ArithmeticMean,
    Call,
    GeometricMean,
    Put,
    RunningMax,
    RunningMin,
)
from lattice_pricing.pricers import (
    EuropeanTree,
    NonRecombiningTree,
    PathDependentTree,
    mc_path_price,
)
from lattice_pricing.pricers import path_tree


def last_value(agg, S, n):
    return S


def test_heap_layout(make_model):
    N = 5
    m = make_model(n_steps=N)
    tree = NonRecombiningTree.from_model(m)
    U, D = 1 + m.up, 1 + m.down

    assert tree.size == 2 ** (N + 1) - 1
    assert tree.index(0, 0) == 0
    assert tree.index(3, 2) == 2**3 - 1 + 2
    for n in range(N + 1):
        assert tree.level(n).shape == (2**n,)

    for n in range(N):
        parent = tree.level(n)
        child = tree.level(n + 1)
        np.testing.assert_allclose(child[0::2], parent * D)
        np.testing.assert_allclose(child[1::2], parent * U)

    leaves = tree.level(N)
    for j in range(2**N):
        k = bin(j).count("1")
        assert leaves[j] == pytest.approx(m.spot * U**k * D ** (N - k))


def test_level_out_of_range(make_model):
    tree = NonRecombiningTree.from_model(make_model(n_steps=3))
    with pytest.raises(IndexError):
        tree.level(4)


def test_capacity_warning(make_model, monkeypatch):
    monkeypatch.setattr(path_tree, "MAX_DENSE_STEPS", 3)
    with pytest.warns(RuntimeWarning):
        NonRecombiningTree.from_model(make_model(n_steps=4))


def test_last_value_aggregator_matches_recombining_tree(make_model):
    m = make_model(n_steps=10)
    nr = PathDependentTree(m, Call(100.0), last_value)
    eu = EuropeanTree(m, Call(100.0))
    assert nr.price() == pytest.approx(eu.price(), rel=1e-12)
    assert nr.delta_zero() == pytest.approx(eu.delta_zero(), rel=1e-10)


def test_aggregates_match_explicit_paths(make_model):
    N = 4
    m = make_model(n_steps=N)
    opt = PathDependentTree(m, Call(100.0), ArithmeticMean())
    tree = opt.tree
    aggs = opt.aggregates()
    assert aggs.shape == (2**N,)

    for j in range(2**N):
        path = [tree.level(n)[j >> (N - n)] for n in range(N + 1)]
        assert aggs[j] == pytest.approx(np.mean(path))

    np.testing.assert_allclose(opt.terminal_values(), np.maximum(aggs - 100.0, 0.0))


def test_tree_price_levels(make_model):
    opt = PathDependentTree(make_model(n_steps=5), Put(100.0), ArithmeticMean())
    levels = opt.tree_price()
    assert [lvl.shape for lvl in levels] == [(2**n,) for n in range(6)]
    assert levels[0][0] == opt.price()


def test_geometric_asian_below_arithmetic(make_model):
    m = make_model(n_steps=10)
    arith = PathDependentTree(m, Call(100.0), ArithmeticMean()).price()
    geo = PathDependentTree(m, Call(100.0), GeometricMean()).price()
    euro = EuropeanTree(m, Call(100.0)).price()
    assert 0.0 < geo <= arith < euro


def test_lookbacks_dominate_vanillas(make_model):
    m = make_model(n_steps=10)
    assert (
        PathDependentTree(m, Call(100.0), RunningMax()).price()
        >= EuropeanTree(m, Call(100.0)).price()
    )
    assert (
        PathDependentTree(m, Put(100.0), RunningMin()).price()
        >= EuropeanTree(m, Put(100.0)).price()
    )


def test_path_hedge_is_self_financing(make_model):
    N = 8
    m = make_model(n_steps=N)
    opt = PathDependentTree(m, Call(100.0), ArithmeticMean())
    tree = opt.tree
    V = opt.tree_price()
    h = opt.hedging_strategy()

    for n in range(N):
        d, b = h.delta[n], h.bond[n]
        S_next = tree.level(n + 1)
        np.testing.assert_allclose(d * S_next[1::2] + b / m.discount, V[n + 1][1::2], atol=1e-9)
        np.testing.assert_allclose(d * S_next[0::2] + b / m.discount, V[n + 1][0::2], atol=1e-9)


def test_degenerate_path_tree_cannot_hedge(make_model):
    opt = PathDependentTree(make_model(n_steps=4, sigma=0.0), Call(90.0), ArithmeticMean())
    assert opt.price() > 0.0
    with pytest.raises(NumericalInstabilityError):
        opt.delta_zero()


def test_asian_tree_agrees_with_mc(make_model):
    N = 12
    m = make_model(n_steps=N)
    opt = PathDependentTree(m, Call(100.0), ArithmeticMean())

    cfg = MCConfig(n_paths=20_000, n_steps=N)
    mc, se = mc_path_price(m, opt.payoff, opt.aggregator, cfg=cfg)
    assert opt.price_mc(cfg) == mc
    assert abs(opt.price() - mc) <= 4.0 * se + 0.2


def test_price_mc_is_reproducible(make_model):
    opt = PathDependentTree(make_model(n_steps=6), Call(100.0), RunningMax())
    cfg = MCConfig(n_paths=2_000, n_steps=20)
    assert opt.price_mc(cfg) == opt.price_mc(cfg)


def test_delta_mc_is_call_like(make_model):
    opt = PathDependentTree(make_model(n_steps=6), Call(100.0), ArithmeticMean())
    d = opt.delta_mc(MCConfig(n_paths=5_000, n_steps=20))
    assert 0.2 < d < 1.0


def test_delta_mc_needs_positive_spot(make_model):
    opt = PathDependentTree(make_model(n_steps=3, S=0.0), Call(100.0), ArithmeticMean())
    with pytest.raises(InvalidParameterError):
        opt.delta_mc()


def test_from_params():
    opt = PathDependentTree.from_params(100.0, 0.05, 0.2, 1.0, 4, Call(100.0), RunningMax())
    assert opt.model.n_steps == 4
    assert opt.stock_tree()[4].shape == (16,)
