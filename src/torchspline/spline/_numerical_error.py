from ._spline_error import SplineError


class NumericalError(SplineError):
    """Raised for zero knot spacing or a singular linear system during construction."""

    pass
