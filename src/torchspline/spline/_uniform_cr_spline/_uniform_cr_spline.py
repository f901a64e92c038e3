from typing import Callable

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._uniform_cr_spline_fit import uniform_cr_spline_fit


@tensorclass
class UniformCRSpline:
    """Catmull-Rom spline with unit knot spacing.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape).
    knots : Tensor
        T value of every control point, ``T(i) = i - 1`` (``T(i) = i`` with
        one extra entry if looping).
    coefficients : Tensor
        Segment table, shape (n_segments, 4, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment.
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


def uniform_cr_spline(
    points: torch.Tensor,
    looping: bool = False,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a uniform Catmull-Rom spline from control points.

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
    >>> points = torch.tensor([0.0, 1.0, 4.0, 9.0, 16.0])
    >>> curve = uniform_cr_spline(points)
    >>> curve(torch.tensor([0.0, 1.0, 2.0]))
    tensor([1., 4., 9.])
    """
    spline = uniform_cr_spline_fit(points, looping=looping)
    return lambda t: spline_position(spline, t)
