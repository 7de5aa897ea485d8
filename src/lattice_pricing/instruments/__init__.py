"""lattice_pricing.instruments

Payoff and path-aggregator functors ("what is being priced").

The engines only call these objects; they never subclass or inspect them.
Any callable with the matching signature can be injected instead.
"""

from .aggregators import ArithmeticMean, GeometricMean, RunningMax, RunningMin
from .base import Aggregator, Payoff, Volatility
from .payoffs import (
    BearSpread,
    BullSpread,
    Butterfly,
    Call,
    DigitalCall,
    DigitalPut,
    DoubleDigital,
    Put,
    Strangle,
    call_payoff,
    put_payoff,
)

__all__ = [
    # Protocols
    "Payoff",
    "Aggregator",
    "Volatility",
    # Payoffs
    "Call",
    "Put",
    "DigitalCall",
    "DigitalPut",
    "DoubleDigital",
    "BullSpread",
    "BearSpread",
    "Strangle",
    "Butterfly",
    "call_payoff",
    "put_payoff",
    # Aggregators
    "ArithmeticMean",
    "GeometricMean",
    "RunningMax",
    "RunningMin",
]
