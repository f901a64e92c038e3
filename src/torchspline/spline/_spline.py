from typing import Union

from ._cubic_hermite_spline import CubicHermiteSpline
from ._generic_b_spline import GenericBSpline
from ._natural_spline import NaturalSpline
from ._quintic_hermite_spline import QuinticHermiteSpline
from ._uniform_cr_spline import UniformCRSpline
from ._uniform_cubic_b_spline import UniformCubicBSpline

Spline = Union[
    CubicHermiteSpline,
    GenericBSpline,
    NaturalSpline,
    QuinticHermiteSpline,
    UniformCRSpline,
    UniformCubicBSpline,
]
