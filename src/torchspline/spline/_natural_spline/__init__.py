from ._natural_spline import NaturalSpline, natural_spline
from ._natural_spline_fit import natural_spline_fit

__all__ = [
    "NaturalSpline",
    "natural_spline",
    "natural_spline_fit",
]
