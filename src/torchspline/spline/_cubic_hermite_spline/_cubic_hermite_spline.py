"""Cubic Hermite / Catmull-Rom spline representation and convenience function."""

from typing import Callable, Optional

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_position
from ._cubic_hermite_spline_fit import cubic_hermite_spline_fit


@tensorclass
class CubicHermiteSpline:
    """Cubic Hermite spline through control points.

    Each segment blends two end positions and two end tangents. Unless
    tangents are supplied they follow the non-uniform Catmull-Rom rule, so
    the curve passes through ``control_points[1:-1]``.

    Attributes
    ----------
    control_points : Tensor
        Control points, shape (n, *value_shape).
    tangents : Tensor
        Tangent at every segment end point, shape (n_segments + 1, *value_shape).
    knots : Tensor
        T value of every control point (negative / beyond max T for the
        padding points). Looping splines carry n + 1 entries.
    coefficients : Tensor
        Segment table, shape (n_segments, 4, *value_shape).
    segment_lengths : Tensor
        Arc length of every segment.
    total_length : Tensor
        Total arc length, scalar.
    padding : int
        Index of the knot with T value 0.
    alpha : float
        Parameterization type:
        - 0.0: Uniform (standard Catmull-Rom)
        - 0.5: Centripetal (avoids cusps and self-intersections)
        - 1.0: Chordal (proportional to distance between points)
    tension : float
        Tangent scale ``1 - tension``.
    looping : bool
        Whether the curve is closed.
    """

    control_points: Tensor
    tangents: Tensor
    knots: Tensor
    coefficients: Tensor
    segment_lengths: Tensor
    total_length: Tensor
    padding: int
    alpha: float
    tension: float
    looping: bool


def cubic_hermite_spline(
    points: torch.Tensor,
    tangents: Optional[torch.Tensor] = None,
    alpha: float = 0.0,
    tension: float = 0.0,
    looping: bool = False,
) -> Callable[[torch.Tensor], torch.Tensor]:
    """Create a cubic Hermite spline from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d).
    tangents : Tensor, optional
        Explicit tangents at every point.
    alpha : float, optional
        Parameterization type. Default is 0.0 (uniform).
    tension : float, optional
        Tangent tension. Default is 0.0.
    looping : bool, optional
        Close the curve. Default is False.

    Returns
    -------
    spline : Callable[[Tensor], Tensor]
        Function that evaluates the spline at given parameter values.

    Examples
    --------
    >>> points = torch.tensor([
    ...     [0., 0.], [1., 1.], [2., 0.], [3., 1.]
    ... ])
    >>> curve = cubic_hermite_spline(points, alpha=0.5)
    >>> curve(torch.tensor(0.0))
    tensor([1., 1.])
    """
    spline = cubic_hermite_spline_fit(
        points, tangents=tangents, alpha=alpha, tension=tension, looping=looping
    )
    return lambda t: spline_position(spline, t)
