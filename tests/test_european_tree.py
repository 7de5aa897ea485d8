import logging

import numpy as np
import pytest

from lattice_pricing.exceptions import NumericalInstabilityError
from lattice_pricing.instruments import Call, DigitalCall, Put
from lattice_pricing.market import lattice_parity_residual, put_call_parity_residual
from lattice_pricing.models import black_scholes as bs
from lattice_pricing.pricers import EuropeanTree, price_european_tree


def test_stock_tree_shape_and_recombination(make_model):
    m = make_model(n_steps=6)
    tree = EuropeanTree(m, Call(100.0)).stock_tree()

    assert len(tree) == 7
    for n, level in enumerate(tree):
        assert level.shape == (n + 1,)

    U, D = 1 + m.up, 1 + m.down
    assert tree[0][0] == pytest.approx(m.spot)
    assert tree[2][1] == pytest.approx(m.spot * U * D)
    assert tree[6][4] == pytest.approx(m.spot * U**4 * D**2)
    # up-then-down lands on the same node as down-then-up
    np.testing.assert_allclose(tree[1][1] * D, tree[1][0] * U)


def test_value_tree_levels(make_model):
    m = make_model(n_steps=5)
    values = EuropeanTree(m, Put(100.0)).tree_price()
    assert [v.shape for v in values] == [(n + 1,) for n in range(6)]

    # terminal level is the payoff; earlier levels are discounted averages
    stock = EuropeanTree(m, Put(100.0)).stock_tree()
    np.testing.assert_allclose(values[5], np.maximum(100.0 - stock[5], 0.0))
    np.testing.assert_allclose(
        values[3], m.discount * 0.5 * (values[4][1:] + values[4][:-1])
    )


def test_lattice_call_converges_to_bs(base_params, make_model):
    p = base_params
    ref = bs.call_price(spot=p["S"], strike=p["K"], r=p["r"], sigma=p["sigma"], tau=p["T"])

    steps = [25, 100, 400]
    errs = [abs(EuropeanTree(make_model(n_steps=n), Call(p["K"])).price() - ref) for n in steps]

    assert errs[-1] <= errs[0]
    assert errs[-1] <= 2e-2


def test_lattice_put_call_parity_is_exact(make_model):
    m = make_model(n_steps=200)
    C = EuropeanTree(m, Call(100.0)).price()
    P = EuropeanTree(m, Put(100.0)).price()
    assert abs(lattice_parity_residual(call=C, put=P, model=m, strike=100.0)) <= 1e-8


def test_lattice_parity_approximately_continuous(base_params, make_model):
    p = base_params
    m = make_model(n_steps=400)
    C = EuropeanTree(m, Call(p["K"])).price()
    P = EuropeanTree(m, Put(p["K"])).price()
    res = put_call_parity_residual(
        call=C, put=P, spot=p["S"], strike=p["K"], rate=p["r"], tau=p["T"]
    )
    assert abs(res) <= 1e-3


def test_hedge_is_self_financing(make_model):
    m = make_model(n_steps=12)
    opt = EuropeanTree(m, Call(95.0))
    S = opt.stock_tree()
    V = opt.tree_price()
    h = opt.hedging_strategy()

    assert h.n_levels == 12
    for n in range(12):
        d, b = h.delta[n], h.bond[n]
        np.testing.assert_allclose(b + d * S[n], V[n], atol=1e-10)
        np.testing.assert_allclose(d * S[n + 1][1:] + b / m.discount, V[n + 1][1:], atol=1e-9)
        np.testing.assert_allclose(d * S[n + 1][:-1] + b / m.discount, V[n + 1][:-1], atol=1e-9)


def test_call_delta_in_unit_interval_and_near_bs(base_params, make_model):
    p = base_params
    opt = EuropeanTree(make_model(n_steps=400), Call(p["K"]))
    ref = bs.call_delta(spot=p["S"], strike=p["K"], r=p["r"], sigma=p["sigma"], tau=p["T"])

    d0 = opt.delta_zero()
    assert 0.0 <= d0 <= 1.0
    assert d0 == pytest.approx(ref, abs=2e-2)
    for level in opt.hedging_strategy().delta:
        assert np.all((level >= -1e-12) & (level <= 1.0 + 1e-12))


def test_constant_payoff_prices_zero_coupon_bond(make_model):
    m = make_model(n_steps=50)
    price = EuropeanTree(m, lambda S: 1.0).price()
    assert price == pytest.approx(m.discount**50, rel=1e-12)


def test_zero_volatility_prices_but_cannot_hedge(make_model):
    m = make_model(n_steps=10, sigma=0.0)
    opt = EuropeanTree(m, Call(100.0))

    expected = max(100.0 - 100.0 * m.discount**10, 0.0)
    assert opt.price() == pytest.approx(expected, rel=1e-12)

    with pytest.raises(NumericalInstabilityError):
        opt.hedging_strategy()
    with pytest.raises(NumericalInstabilityError):
        opt.delta_zero()


def test_digital_call_price_near_bs(base_params, make_model):
    p = base_params
    price = EuropeanTree(make_model(n_steps=401), DigitalCall(p["K"])).price()
    ref = bs.digital_call_price(
        spot=p["S"], strike=p["K"], r=p["r"], sigma=p["sigma"], tau=p["T"]
    )
    assert price == pytest.approx(ref, abs=5e-2)


def test_from_params_matches_constructor(make_model):
    a = EuropeanTree.from_params(100.0, 0.05, 0.2, 1.0, 30, Call(100.0))
    b = EuropeanTree(make_model(n_steps=30), Call(100.0))
    assert a.price() == b.price()
    assert price_european_tree(
        Call(100.0), spot=100.0, rate=0.05, volatility=0.2, maturity=1.0, n_steps=30
    ) == b.price()


def test_instances_are_immutable(make_model):
    opt = EuropeanTree(make_model(n_steps=3), Call(100.0))
    with pytest.raises(AttributeError):
        opt.model = make_model(n_steps=4)

    tree = opt.stock_tree()
    tree[0][0] = -1.0
    assert opt.stock_tree()[0][0] == 100.0


def test_stock_tree_build_is_logged(make_model, caplog):
    with caplog.at_level(logging.DEBUG, logger="lattice_pricing.pricers.tree"):
        EuropeanTree(make_model(n_steps=4), Call(100.0))
    assert "built recombining tree: N=4 nodes=15" in caplog.text
