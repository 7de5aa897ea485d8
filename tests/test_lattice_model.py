import math

import numpy as np
import pytest

from lattice_pricing.exceptions import InvalidParameterError
from lattice_pricing.models import LatticeModel


def test_step_parameters(make_model):
    m = make_model(n_steps=4)
    dt = 0.25
    assert m.dt == pytest.approx(dt)
    assert m.up == pytest.approx(0.05 * dt + 0.2 * math.sqrt(dt))
    assert m.down == pytest.approx(0.05 * dt - 0.2 * math.sqrt(dt))
    assert m.discount == pytest.approx(1.0 / (1.0 + 0.05 * dt))
    assert m.up > m.down
    assert not m.is_degenerate


def test_half_weights_are_risk_neutral(make_model):
    """disc * E[S_next] == S with 1/2-1/2 weights."""
    m = make_model(n_steps=7)
    nxt = 0.5 * (m.spot * (1 + m.up) + m.spot * (1 + m.down))
    assert m.discount * nxt == pytest.approx(m.spot, rel=1e-14)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(spot=-1.0, rate=0.05, volatility=0.2, maturity=1.0, n_steps=10),
        dict(spot=100.0, rate=0.05, volatility=-0.2, maturity=1.0, n_steps=10),
        dict(spot=100.0, rate=0.05, volatility=0.2, maturity=-1.0, n_steps=10),
        dict(spot=100.0, rate=0.05, volatility=0.2, maturity=1.0, n_steps=0),
        # 1 + down <= 0
        dict(spot=100.0, rate=0.0, volatility=2.0, maturity=1.0, n_steps=1),
        # 1 + r dt <= 0
        dict(spot=100.0, rate=-2.0, volatility=0.0, maturity=1.0, n_steps=1),
    ],
)
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(InvalidParameterError):
        LatticeModel(**kwargs)


def test_invalid_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        LatticeModel(spot=-1.0, rate=0.0, volatility=0.2, maturity=1.0, n_steps=1)


@pytest.mark.parametrize("n_steps", [2.5, 10.0, "10", True])
def test_non_integer_step_count_raises(n_steps):
    with pytest.raises(InvalidParameterError, match="integer"):
        LatticeModel(spot=100.0, rate=0.05, volatility=0.2, maturity=1.0, n_steps=n_steps)


def test_numpy_integer_step_count_is_accepted():
    m = LatticeModel(spot=100.0, rate=0.05, volatility=0.2, maturity=1.0, n_steps=np.int64(8))
    assert m.dt == pytest.approx(0.125)


@pytest.mark.parametrize("kw", [dict(sigma=0.0), dict(T=0.0)])
def test_degenerate_lattice_is_allowed(make_model, kw):
    m = make_model(n_steps=5, **kw)
    assert m.is_degenerate


def test_negative_rate_is_allowed(make_model):
    m = make_model(n_steps=10, r=-0.01)
    assert m.discount > 1.0


def test_with_spot_and_steps_return_new_instances(make_model):
    m = make_model(n_steps=10)
    m2 = m.with_spot(110.0)
    m3 = m.with_steps(20)
    assert m2.spot == 110.0 and m2.n_steps == 10
    assert m3.n_steps == 20 and m3.spot == m.spot
    assert m.spot == 100.0 and m.n_steps == 10
