from ._uniform_cubic_b_spline import UniformCubicBSpline, uniform_cubic_b_spline
from ._uniform_cubic_b_spline_fit import uniform_cubic_b_spline_fit

__all__ = [
    "UniformCubicBSpline",
    "uniform_cubic_b_spline",
    "uniform_cubic_b_spline_fit",
]
