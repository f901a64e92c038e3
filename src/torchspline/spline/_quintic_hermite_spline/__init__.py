from ._quintic_hermite_spline import QuinticHermiteSpline, quintic_hermite_spline
from ._quintic_hermite_spline_fit import quintic_hermite_spline_fit

__all__ = [
    "QuinticHermiteSpline",
    "quintic_hermite_spline",
    "quintic_hermite_spline_fit",
]
