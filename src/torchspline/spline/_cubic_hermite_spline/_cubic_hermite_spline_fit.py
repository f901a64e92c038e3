from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional

from torch import Tensor

from .._control_points import (
    as_control_points,
    cumulative_knots,
    knot_spacing,
    match_derivatives,
    validate_alpha,
    wrap_points,
)
from .._hermite_basis import catmull_rom_derivatives, cubic_hermite_coefficients
from .._invalid_input_error import InvalidInputError
from .._piecewise import segment_lengths

if TYPE_CHECKING:
    from ._cubic_hermite_spline import CubicHermiteSpline


def cubic_hermite_spline_fit(
    points: Tensor,
    tangents: Optional[Tensor] = None,
    alpha: float = 0.0,
    tension: float = 0.0,
    looping: bool = False,
) -> CubicHermiteSpline:
    """
    Build a cubic Hermite spline, Catmull-Rom style unless tangents are given.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    tangents : Tensor, optional
        Tangent (derivative with respect to T) at every control point, same
        shape as ``points``. When given, the curve interpolates every point
        and ``tension`` is not applied.
    alpha : float
        Knot parameterization exponent in [0, 1]: 0 uniform (default),
        0.5 centripetal, 1 chordal.
    tension : float
        Scales computed tangents by ``1 - tension``. 0 (default) is
        Catmull-Rom, 1 gives zero tangents at every point.
    looping : bool
        Close the curve using wrapped-around neighbours.

    Returns
    -------
    CubicHermiteSpline
        Spline with n - 3 segments: the first and last points only shape
        the end tangents. With explicit tangents it has n - 1 segments;
        looping splines have n.

    Raises
    ------
    InvalidInputError
        If there are too few points (4, or 2 with tangents, or 3 looping),
        alpha is out of range, tension is not finite, or the tangents do not
        match the points.
    NumericalError
        If consecutive points coincide while alpha > 0.

    Notes
    -----
    The curve is only C1: curvature generally jumps at every breakpoint.
    """
    alpha = validate_alpha(alpha)
    tension = float(tension)
    if not math.isfinite(tension):
        raise InvalidInputError(f"tension must be finite, got {tension}")

    if tangents is not None:
        points = as_control_points(
            points, 3 if looping else 2, "Cubic Hermite spline"
        )
        tangents = match_derivatives(tangents, points, "tangents")

        if looping:
            values = wrap_points(points, 0, 1)
            tangents = wrap_points(tangents, 0, 1)
        else:
            values = points

        knots = cumulative_knots(knot_spacing(values, alpha), 0)
        segment_knots = knots
        padding = 0
    else:
        points = as_control_points(
            points, 3 if looping else 4, "Cubic Hermite spline"
        )

        extended = wrap_points(points, 1, 2) if looping else points
        extended_knots = cumulative_knots(knot_spacing(extended, alpha), 1)

        tangents = (1 - tension) * catmull_rom_derivatives(
            extended, extended_knots
        )
        values = extended[1:-1]
        segment_knots = extended_knots[1:-1]

        if looping:
            knots = segment_knots
            padding = 0
        else:
            knots = extended_knots
            padding = 1

    h = segment_knots[1:] - segment_knots[:-1]
    coefficients = cubic_hermite_coefficients(
        values[:-1], values[1:], tangents[:-1], tangents[1:], h
    )

    lengths = segment_lengths(segment_knots, coefficients)

    from ._cubic_hermite_spline import CubicHermiteSpline

    return CubicHermiteSpline(
        control_points=points,
        tangents=tangents,
        knots=knots,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=padding,
        alpha=alpha,
        tension=tension,
        looping=looping,
        batch_size=[],
    )
