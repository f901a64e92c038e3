from ._b_spline_basis import b_spline_basis
from ._generic_b_spline import GenericBSpline, generic_b_spline
from ._generic_b_spline_fit import generic_b_spline_fit

__all__ = [
    "GenericBSpline",
    "b_spline_basis",
    "generic_b_spline",
    "generic_b_spline_fit",
]
