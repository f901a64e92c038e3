from typing import Callable, Optional

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._quintic_hermite_spline_fit import quintic_hermite_spline_fit


@tensorclass
class QuinticHermiteSpline:
    """Quintic Hermite spline matching position, tangent and curvature.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape).
    tangents : Tensor
        First derivative at every segment end point.
    curvatures : Tensor
        Second derivative at every segment end point.
    knots : Tensor
        T value of every control point.
    coefficients : Tensor
        Segment table, shape (n_segments, 6, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment.
    total_length : Tensor
        Total arc length, scalar.
    padding : int
        Index of the knot with T value 0.
    alpha : float
        Knot parameterization exponent.
    looping : bool
        Whether the curve is closed.
    """

    control_points: Tensor
    tangents: Tensor
    curvatures: Tensor
    knots: Tensor
    coefficients: Tensor
    segment_lengths: Tensor
    total_length: Tensor
    padding: int
    alpha: float
    looping: bool


def quintic_hermite_spline(
    points: torch.Tensor,
    tangents: Optional[torch.Tensor] = None,
    curvatures: Optional[torch.Tensor] = None,
    alpha: float = 0.0,
    looping: bool = False,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a quintic Hermite spline from control points.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.
    """
    spline = quintic_hermite_spline_fit(
        points,
        tangents=tangents,
        curvatures=curvatures,
        alpha=alpha,
        looping=looping,
    )
    return lambda t: spline_position(spline, t)
