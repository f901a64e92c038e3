from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._control_points import as_control_points, wrap_points
from .._piecewise import segment_lengths

if TYPE_CHECKING:
    from ._uniform_cubic_b_spline import UniformCubicBSpline

# Row k gives the weights of the 4 window points in the s**k coefficient
_BASIS_MATRIX = (
    torch.tensor(
        [
            [1.0, 4.0, 1.0, 0.0],
            [-3.0, 0.0, 3.0, 0.0],
            [3.0, -6.0, 3.0, 0.0],
            [-1.0, 3.0, -3.0, 1.0],
        ],
        dtype=torch.float64,
    )
    / 6
)


def uniform_cubic_b_spline_fit(
    points: Tensor,
    looping: bool = False,
) -> UniformCubicBSpline:
    """
    Build a uniform cubic B-spline from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d). n >= 4, or n >= 3 if looping.
    looping : bool
        Treat the points as a closed polygon. The looping spline has n
        segments and returns to its start at ``T = n``.

    Returns
    -------
    UniformCubicBSpline
        Spline with n - 3 segments (n if looping) on the domain [0, n - 3].

    Raises
    ------
    InvalidInputError
        If there are too few points.

    Notes
    -----
    Segment j blends the window ``P[j], ..., P[j + 3]`` with the fixed
    uniform B-spline basis matrix, so the local polynomial in
    ``s = t - j`` is ``[1, s, s^2, s^3] @ M @ window``.
    """
    points = as_control_points(
        points, 3 if looping else 4, "Uniform cubic B-spline"
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

    n_segments = extended.shape[0] - 3

    # (n_segments, 4, *value_shape)
    windows = torch.stack(
        [extended[j : j + n_segments] for j in range(4)], dim=1
    )
    basis = _BASIS_MATRIX.to(dtype=points.dtype, device=points.device)
    coefficients = torch.einsum("kj,sj...->sk...", basis, windows)

    lengths = segment_lengths(
        knots[padding : padding + n_segments + 1], coefficients
    )

    from ._uniform_cubic_b_spline import UniformCubicBSpline

    return UniformCubicBSpline(
        control_points=points,
        knots=knots,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=padding,
        looping=looping,
        batch_size=[],
    )
