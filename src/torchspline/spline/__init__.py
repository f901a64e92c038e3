"""Curve splines through control points with arc-length parameterization.

Every variant builds a table of power-basis polynomial segments over a
parameter T. The functions below work on any variant, and every operation
is differentiable with respect to the control points.

Convenience Functions
---------------------
uniform_cubic_b_spline
    Create a uniform cubic B-spline (fit + callable).
generic_b_spline
    Create a uniform B-spline of any degree (fit + callable).
natural_spline
    Create an interpolating C2 cubic spline (fit + callable).
cubic_hermite_spline
    Create a Catmull-Rom style cubic Hermite spline (fit + callable).
quintic_hermite_spline
    Create a C2 quintic Hermite spline (fit + callable).
uniform_cr_spline
    Create a uniform Catmull-Rom spline (fit + callable).

Fitting
-------
uniform_cubic_b_spline_fit
generic_b_spline_fit
natural_spline_fit
cubic_hermite_spline_fit
quintic_hermite_spline_fit
uniform_cr_spline_fit
b_spline_basis
    Evaluate B-spline basis functions.

Evaluation
----------
spline_position
    Position at T.
spline_tangent
    Position and first derivative.
spline_curvature
    Position, first and second derivatives.
spline_wiggle
    Position and the first three derivatives.
spline_derivative
    A single derivative of any order.
spline_t
    T value of a control point.
spline_max_t
    End of the domain [0, max_t].
spline_breakpoints
    T values bounding the segments.
spline_segment_count
    Number of segments.
spline_segment_for_t
    Segment containing T.

Arc Length
----------
spline_speed
    Magnitude of the tangent.
spline_arc_length
    Signed arc length between two T values.
spline_total_length
    Arc length of the whole curve.
spline_cumulative_length
    Arc length from T = 0.
spline_inverter
    Build an arc length to T lookup.
spline_invert
    T value at a given arc length.
spline_invert_uniform
    T values evenly spaced in arc length.

Data Types
----------
UniformCubicBSpline, GenericBSpline, NaturalSpline, CubicHermiteSpline,
QuinticHermiteSpline, UniformCRSpline
    Spline variants.
Spline
    Union of the variants.
SplineDerivatives
    Position with optional tangent, curvature and wiggle.
SplineInverter
    Spline with a (T, arc length) sample table.

Exceptions
----------
SplineError
    Base exception for spline operations.
InvalidInputError
    Invalid control points or parameters.
DegreeError
    Invalid B-spline degree.
NumericalError
    Degenerate knot spacing or singular system.
InversionWarning
    Arc length inversion hit the iteration cap.
"""

from ._evaluation import (
    SplineDerivatives,
    spline_arc_length,
    spline_breakpoints,
    spline_cumulative_length,
    spline_curvature,
    spline_derivative,
    spline_max_t,
    spline_position,
    spline_segment_count,
    spline_segment_for_t,
    spline_speed,
    spline_t,
    spline_tangent,
    spline_total_length,
    spline_wiggle,
)
from ._cubic_hermite_spline import (
    CubicHermiteSpline,
    cubic_hermite_spline,
    cubic_hermite_spline_fit,
)
from ._generic_b_spline import (
    GenericBSpline,
    b_spline_basis,
    generic_b_spline,
    generic_b_spline_fit,
)
from ._natural_spline import NaturalSpline, natural_spline, natural_spline_fit
from ._quintic_hermite_spline import (
    QuinticHermiteSpline,
    quintic_hermite_spline,
    quintic_hermite_spline_fit,
)
from ._uniform_cr_spline import (
    UniformCRSpline,
    uniform_cr_spline,
    uniform_cr_spline_fit,
)
from ._uniform_cubic_b_spline import (
    UniformCubicBSpline,
    uniform_cubic_b_spline,
    uniform_cubic_b_spline_fit,
)
from ._spline import Spline
from ._inversion import (
    SplineInverter,
    spline_invert,
    spline_invert_uniform,
    spline_inverter,
)

# Import exception subclasses
from ._degree_error import DegreeError
from ._invalid_input_error import InvalidInputError
from ._inversion_warning import InversionWarning
from ._numerical_error import NumericalError
from ._spline_error import SplineError

__all__ = [
    "CubicHermiteSpline",
    "DegreeError",
    "GenericBSpline",
    "InvalidInputError",
    "InversionWarning",
    "NaturalSpline",
    "NumericalError",
    "QuinticHermiteSpline",
    "Spline",
    "SplineDerivatives",
    "SplineError",
    "SplineInverter",
    "UniformCRSpline",
    "UniformCubicBSpline",
    "b_spline_basis",
    "cubic_hermite_spline",
    "cubic_hermite_spline_fit",
    "generic_b_spline",
    "generic_b_spline_fit",
    "natural_spline",
    "natural_spline_fit",
    "quintic_hermite_spline",
    "quintic_hermite_spline_fit",
    "spline_arc_length",
    "spline_breakpoints",
    "spline_cumulative_length",
    "spline_curvature",
    "spline_derivative",
    "spline_invert",
    "spline_invert_uniform",
    "spline_inverter",
    "spline_max_t",
    "spline_position",
    "spline_segment_count",
    "spline_segment_for_t",
    "spline_speed",
    "spline_t",
    "spline_tangent",
    "spline_total_length",
    "spline_wiggle",
    "uniform_cr_spline",
    "uniform_cr_spline_fit",
    "uniform_cubic_b_spline",
    "uniform_cubic_b_spline_fit",
]
