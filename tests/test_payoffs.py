import numpy as np
import pytest

from lattice_pricing.exceptions import InvalidParameterError
from lattice_pricing.instruments import (
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

S = np.array([80.0, 90.0, 100.0, 110.0, 120.0])


@pytest.mark.parametrize(
    "payoff, expected",
    [
        (Call(100.0), [0.0, 0.0, 0.0, 10.0, 20.0]),
        (Put(100.0), [20.0, 10.0, 0.0, 0.0, 0.0]),
        (DigitalCall(100.0), [0.0, 0.0, 0.0, 1.0, 1.0]),
        (DigitalPut(100.0), [1.0, 1.0, 0.0, 0.0, 0.0]),
        (DoubleDigital(90.0, 110.0), [0.0, 0.0, 1.0, 0.0, 0.0]),
        (BullSpread(90.0, 110.0), [0.0, 0.0, 10.0, 20.0, 20.0]),
        (BearSpread(90.0, 110.0), [20.0, 20.0, 10.0, 0.0, 0.0]),
        (Strangle(90.0, 110.0), [10.0, 0.0, 0.0, 0.0, 10.0]),
        (Butterfly(80.0, 120.0), [0.0, 10.0, 20.0, 10.0, 0.0]),
    ],
)
def test_payoff_values(payoff, expected):
    np.testing.assert_allclose(payoff(S), expected)


def test_scalar_input_returns_float():
    out = Call(100.0)(110.0)
    assert isinstance(out, float)
    assert out == 10.0


def test_vector_input_keeps_shape():
    grid = np.linspace(50.0, 150.0, 12).reshape(3, 4)
    assert Put(100.0)(grid).shape == (3, 4)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: Call(-1.0),
        lambda: Put(-1.0),
        lambda: DigitalCall(-0.5),
        lambda: BullSpread(110.0, 90.0),
        lambda: Butterfly(-1.0, 10.0),
        lambda: Strangle(120.0, 80.0),
    ],
)
def test_invalid_strikes_raise(factory):
    with pytest.raises(InvalidParameterError):
        factory()


def _fold(agg_fn, prices):
    agg = prices[0]
    for n, s in enumerate(prices[1:], start=1):
        agg = agg_fn(agg, s, n)
    return agg


def test_arithmetic_mean_fold():
    assert _fold(ArithmeticMean(), [1.0, 2.0, 3.0]) == pytest.approx(2.0)


def test_geometric_mean_fold():
    assert _fold(GeometricMean(), [1.0, 2.0, 4.0]) == pytest.approx(2.0)


def test_running_extrema_fold():
    prices = [100.0, 120.0, 90.0, 110.0]
    assert _fold(RunningMax(), prices) == 120.0
    assert _fold(RunningMin(), prices) == 90.0


def test_aggregators_are_vectorized():
    agg = np.array([1.0, 2.0])
    S = np.array([3.0, 0.0])
    np.testing.assert_allclose(ArithmeticMean()(agg, S, 1), [2.0, 1.0])
    np.testing.assert_allclose(RunningMax()(agg, S, 1), [3.0, 2.0])
    np.testing.assert_allclose(GeometricMean()(agg, S, 1), [np.sqrt(3.0), 0.0])
