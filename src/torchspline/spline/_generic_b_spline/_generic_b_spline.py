from typing import Callable

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._generic_b_spline_fit import generic_b_spline_fit


@tensorclass
class GenericBSpline:
    """Uniform B-spline of arbitrary degree.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape) where n >= degree + 1.
    knots : Tensor
        T value of every control point, ``T(i) = i - (degree - 1) // 2``.
    knot_vector : Tensor
        Uniform B-spline knot vector, shape (n + degree + 1,).
    coefficients : Tensor
        Segment table, shape (n - degree, degree + 1, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment.
    total_length : Tensor
        Total arc length, scalar.
    padding : int
        Index of the knot with T value 0.
    degree : int
        Polynomial degree. Degree d gives C(d-1) continuity.
    """

    control_points: Tensor
    knots: Tensor
    knot_vector: Tensor
    coefficients: Tensor
    segment_lengths: Tensor
    total_length: Tensor
    padding: int
    degree: int


def generic_b_spline(
    points: torch.Tensor,
    degree: int = 3,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a B-spline of the given degree from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    degree : int, optional
        Polynomial degree. Default is 3.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.
    """
    spline = generic_b_spline_fit(points, degree=degree)
    return lambda t: spline_position(spline, t)
