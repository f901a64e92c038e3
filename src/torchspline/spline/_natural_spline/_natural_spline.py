"""Natural (C2 interpolating) cubic spline."""

from typing import Callable

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._natural_spline_fit import natural_spline_fit


@tensorclass
class NaturalSpline:
    """Interpolating cubic spline with continuous curvature.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape) with n >= 3.
    knots : Tensor
        T value of every control point; looping splines carry one more
        entry for the closing point.
    coefficients : Tensor
        Segment table, shape (n_segments, 4, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment.
    total_length : Tensor
        Total arc length, scalar.
    padding : int
        Index of the knot with T value 0 (always 0).
    alpha : float
        Knot parameterization exponent.
    looping : bool
        Whether the curve is closed.
    """

    control_points: Tensor
    knots: Tensor
    coefficients: Tensor
    segment_lengths: Tensor
    total_length: Tensor
    padding: int
    alpha: float
    looping: bool


def natural_spline(
    points: torch.Tensor,
    looping: bool = False,
    alpha: float = 0.0,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a natural spline through control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    looping : bool, optional
        Close the curve. Default is False.
    alpha : float, optional
        Knot parameterization exponent. Default is 0.0 (uniform).

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.

    Examples
    --------
    >>> points = torch.tensor([[0., 0.], [1., 2.], [3., 1.], [4., 4.]])
    >>> curve = natural_spline(points, alpha=0.5)
    >>> curve(torch.tensor(0.0))
    tensor([0., 0.])
    """
    spline = natural_spline_fit(points, looping=looping, alpha=alpha)
    return lambda t: spline_position(spline, t)
