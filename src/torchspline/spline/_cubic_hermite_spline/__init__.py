from ._cubic_hermite_spline import CubicHermiteSpline, cubic_hermite_spline
from ._cubic_hermite_spline_fit import cubic_hermite_spline_fit

__all__ = [
    "CubicHermiteSpline",
    "cubic_hermite_spline",
    "cubic_hermite_spline_fit",
]
