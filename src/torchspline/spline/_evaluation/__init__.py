from ._spline_arc_length import (
    spline_arc_length,
    spline_cumulative_length,
    spline_speed,
    spline_total_length,
)
from ._spline_evaluate import (
    SplineDerivatives,
    spline_curvature,
    spline_derivative,
    spline_position,
    spline_tangent,
    spline_wiggle,
)
from ._spline_knots import (
    spline_breakpoints,
    spline_max_t,
    spline_segment_count,
    spline_segment_for_t,
    spline_t,
)

__all__ = [
    "SplineDerivatives",
    "spline_arc_length",
    "spline_breakpoints",
    "spline_cumulative_length",
    "spline_curvature",
    "spline_derivative",
    "spline_max_t",
    "spline_position",
    "spline_segment_count",
    "spline_segment_for_t",
    "spline_speed",
    "spline_t",
    "spline_tangent",
    "spline_total_length",
    "spline_wiggle",
]
