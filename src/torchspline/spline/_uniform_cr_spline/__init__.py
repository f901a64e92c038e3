from ._uniform_cr_spline import UniformCRSpline, uniform_cr_spline
from ._uniform_cr_spline_fit import uniform_cr_spline_fit

__all__ = [
    "UniformCRSpline",
    "uniform_cr_spline",
    "uniform_cr_spline_fit",
]
