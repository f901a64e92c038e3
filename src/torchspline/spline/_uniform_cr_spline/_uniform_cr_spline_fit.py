from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._control_points import as_control_points, wrap_points
from .._hermite_basis import cubic_hermite_coefficients
from .._piecewise import segment_lengths

if TYPE_CHECKING:
    from ._uniform_cr_spline import UniformCRSpline


def uniform_cr_spline_fit(
    points: Tensor,
    looping: bool = False,
) -> UniformCRSpline:
    """
    Build a uniform Catmull-Rom spline.

    Every control point sits at an integer T value and the tangent at point
    i is ``(P[i+1] - P[i-1]) / 2``.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d). n >= 4, or n >= 3 if looping.
    looping : bool
        Close the curve using wrapped-around neighbours.

    Returns
    -------
    UniformCRSpline
        Spline with n - 3 segments on [0, n - 3], or n segments on [0, n]
        if looping.

    Raises
    ------
    InvalidInputError
        If there are too few points.
    """
    points = as_control_points(
        points, 3 if looping else 4, "Uniform Catmull-Rom spline"
    )
    n = points.shape[0]

    if looping:
        extended = wrap_points(points, 1, 2)
        knots = torch.arange(n + 1, dtype=points.dtype, device=points.device)
        padding = 0
    else:
        extended = points
        knots = (
            torch.arange(n, dtype=points.dtype, device=points.device) - 1
        )
        padding = 1

    tangents = (extended[2:] - extended[:-2]) / 2
    values = extended[1:-1]
    n_segments = values.shape[0] - 1

    h = torch.ones(n_segments, dtype=points.dtype, device=points.device)
    coefficients = cubic_hermite_coefficients(
        values[:-1], values[1:], tangents[:-1], tangents[1:], h
    )

    lengths = segment_lengths(
        knots[padding : padding + n_segments + 1], coefficients
    )

    from ._uniform_cr_spline import UniformCRSpline

    return UniformCRSpline(
        control_points=points,
        knots=knots,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=padding,
        looping=looping,
        batch_size=[],
    )
