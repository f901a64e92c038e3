from ._spline_error import SplineError


class InvalidInputError(SplineError):
    """Raised for malformed construction input (too few points, bad parameters)."""

    pass
