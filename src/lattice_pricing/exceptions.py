class InvalidParameterError(ValueError):
    """Raised when a model, payoff or grid is constructed from malformed inputs.

    Examples are a negative spot or volatility, a non-positive step count, an
    inverted strike pair ``K1 > K2`` or a degenerate PDE domain
    ``s_min >= s_max``.
    """


class OutOfDomainError(ValueError):
    """Raised when a PDE point query falls outside ``[0, T] x [s_min, s_max]``.

    Queries are never clamped back into the domain.
    """


class NumericalInstabilityError(ArithmeticError):
    """Raised when a computation hits a singular step.

    Notes
    -----
    Two situations are detected:

    - a (near-)zero pivot during Thomas elimination of a tridiagonal system;
    - coinciding successor prices ``S_up == S_down`` when computing a hedge
      ratio, which happens on a degenerate lattice (zero volatility or zero
      maturity).
    """
