from __future__ import annotations

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
from .._hermite_basis import catmull_rom_derivatives, quintic_hermite_coefficients
from .._invalid_input_error import InvalidInputError
from .._piecewise import segment_lengths

if TYPE_CHECKING:
    from ._quintic_hermite_spline import QuinticHermiteSpline


def quintic_hermite_spline_fit(
    points: Tensor,
    tangents: Optional[Tensor] = None,
    curvatures: Optional[Tensor] = None,
    alpha: float = 0.0,
    looping: bool = False,
) -> QuinticHermiteSpline:
    """
    Build a quintic Hermite spline with continuous curvature.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    tangents : Tensor, optional
        First derivative at every control point. Must be given together
        with ``curvatures``.
    curvatures : Tensor, optional
        Second derivative at every control point.
    alpha : float
        Knot parameterization exponent in [0, 1].
    looping : bool
        Close the curve using wrapped-around neighbours.

    Returns
    -------
    QuinticHermiteSpline
        Spline with n - 5 segments when derivatives are estimated (the two
        points at each end only shape the end derivatives), n - 1 with
        explicit derivatives, n when looping.

    Raises
    ------
    InvalidInputError
        If there are too few points (6, 2 with derivatives, 3 looping),
        only one of ``tangents`` and ``curvatures`` is given, or the
        derivatives do not match the points.
    NumericalError
        If consecutive points coincide while alpha > 0.

    Notes
    -----
    Estimated tangents are Catmull-Rom derivatives of the points, and
    curvatures are Catmull-Rom derivatives of those tangents, so the
    curve is C2 across every breakpoint.
    """
    alpha = validate_alpha(alpha)

    if (tangents is None) != (curvatures is None):
        raise InvalidInputError(
            "tangents and curvatures must be given together"
        )

    if tangents is not None:
        points = as_control_points(
            points, 3 if looping else 2, "Quintic Hermite spline"
        )
        tangents = match_derivatives(tangents, points, "tangents")
        curvatures = match_derivatives(curvatures, points, "curvatures")

        if looping:
            values = wrap_points(points, 0, 1)
            tangents = wrap_points(tangents, 0, 1)
            curvatures = wrap_points(curvatures, 0, 1)
        else:
            values = points

        knots = cumulative_knots(knot_spacing(values, alpha), 0)
        segment_knots = knots
        padding = 0
    else:
        points = as_control_points(
            points, 3 if looping else 6, "Quintic Hermite spline"
        )

        extended = wrap_points(points, 2, 3) if looping else points
        extended_knots = cumulative_knots(knot_spacing(extended, alpha), 2)

        first = catmull_rom_derivatives(extended, extended_knots)
        curvatures = catmull_rom_derivatives(first, extended_knots[1:-1])
        tangents = first[1:-1]

        values = extended[2:-2]
        segment_knots = extended_knots[2:-2]

        if looping:
            knots = segment_knots
            padding = 0
        else:
            knots = extended_knots
            padding = 2

    h = segment_knots[1:] - segment_knots[:-1]
    coefficients = quintic_hermite_coefficients(
        values[:-1],
        values[1:],
        tangents[:-1],
        tangents[1:],
        curvatures[:-1],
        curvatures[1:],
        h,
    )

    lengths = segment_lengths(segment_knots, coefficients)

    from ._quintic_hermite_spline import QuinticHermiteSpline

    return QuinticHermiteSpline(
        control_points=points,
        tangents=tangents,
        curvatures=curvatures,
        knots=knots,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=padding,
        alpha=alpha,
        looping=looping,
        batch_size=[],
    )
