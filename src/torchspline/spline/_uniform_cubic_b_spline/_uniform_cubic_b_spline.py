"""Uniform cubic B-spline representation and convenience function."""

from typing import Callable

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._uniform_cubic_b_spline_fit import uniform_cubic_b_spline_fit


@tensorclass
class UniformCubicBSpline:
    """Uniform cubic B-spline defined by control points.

    The curve approximates rather than interpolates its control points and
    has continuous curvature (C2) everywhere.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape) with n >= 4 (3 if looping).
    knots : Tensor
        T value of every control point, ``T(i) = i - 1``. Looping splines
        have ``T(i) = i`` and one extra entry for the closing point.
    coefficients : Tensor
        Segment table, shape (n_segments, 4, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment, shape (n_segments,).
    total_length : Tensor
        Total arc length, scalar.
    padding : int
        Index of the knot with T value 0.
    looping : bool
        Whether the curve is closed.
    """

    control_points: Tensor
    knots: Tensor
    coefficients: Tensor
    segment_lengths: Tensor
    total_length: Tensor
    padding: int
    looping: bool


def uniform_cubic_b_spline(
    points: torch.Tensor,
    looping: bool = False,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a uniform cubic B-spline from control points.

    This is a convenience function that fits a UniformCubicBSpline and
    returns a callable that evaluates its position.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    looping : bool, optional
        Close the curve. Default is False.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.

    Examples
    --------
    >>> points = torch.tensor([[0., 0.], [1., 1.], [2., 0.], [3., 1.]])
    >>> curve = uniform_cubic_b_spline(points)
    >>> curve(torch.tensor(0.0))
    tensor([1.0000, 0.6667])
    """
    spline = uniform_cubic_b_spline_fit(points, looping=looping)
    return lambda t: spline_position(spline, t)
