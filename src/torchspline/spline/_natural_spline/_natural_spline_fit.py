from __future__ import annotations

from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._control_points import (
    as_control_points,
    cumulative_knots,
    knot_spacing,
    validate_alpha,
)
from .._piecewise import segment_lengths
from .._solve_tridiagonal import solve_cyclic_tridiagonal, solve_tridiagonal

if TYPE_CHECKING:
    from ._natural_spline import NaturalSpline


def natural_spline_fit(
    points: Tensor,
    looping: bool = False,
    alpha: float = 0.0,
) -> NaturalSpline:
    """
    Fit an interpolating C2 cubic spline through every control point.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d) with n >= 3.
    looping : bool
        Close the curve back to the first point with curvature continuity
        across the seam. Default is False (natural end conditions).
    alpha : float
        Knot parameterization exponent in [0, 1]: 0 uniform (default),
        0.5 centripetal, 1 chordal.

    Returns
    -------
    NaturalSpline
        Spline with n - 1 segments (n if looping).

    Raises
    ------
    InvalidInputError
        If there are fewer than 3 points or alpha is out of range.
    NumericalError
        If consecutive points coincide with alpha > 0, or the tridiagonal
        system is singular.

    Notes
    -----
    With knot spacing ``h[i]`` and chord slopes ``delta[i]``, the second
    derivatives ``m`` satisfy

        h[i-1]*m[i-1] + 2*(h[i-1]+h[i])*m[i] + h[i]*m[i+1] = 6*(delta[i] - delta[i-1])

    with ``m[0] = m[n-1] = 0`` (natural) or cyclic indices (looping).
    """
    alpha = validate_alpha(alpha)
    points = as_control_points(points, 3, "Natural spline")
    n = points.shape[0]
    value_shape = points.shape[1:]

    if looping:
        y = torch.cat([points, points[:1]], dim=0)
    else:
        y = points

    h = knot_spacing(y, alpha)  # (n_seg,)
    knots = cumulative_knots(h, 0)
    n_seg = h.shape[0]

    y_flat = y.reshape(y.shape[0], -1)  # (n_seg + 1, n_values)
    n_values = y_flat.shape[1]

    delta = (y_flat[1:] - y_flat[:-1]) / h.unsqueeze(-1)  # (n_seg, n_values)

    if looping:
        h_prev = torch.roll(h, 1)
        diag = 2 * (h_prev + h)
        rhs = 6 * (delta - torch.roll(delta, 1, dims=0))

        m_cyclic = solve_cyclic_tridiagonal(diag, h, h_prev, rhs.T).T
        m = torch.cat([m_cyclic, m_cyclic[:1]], dim=0)
    else:
        diag = 2 * (h[:-1] + h[1:])
        off_diag = h[1:-1]
        rhs = 6 * (delta[1:] - delta[:-1])

        m_interior = solve_tridiagonal(diag, off_diag, off_diag, rhs.T).T

        zero = torch.zeros(1, n_values, dtype=y.dtype, device=y.device)
        m = torch.cat([zero, m_interior, zero], dim=0)

    # p_i(s) = a_i + b_i*s + c_i*s^2 + d_i*s^3 with s = t - knots[i]
    h_col = h.unsqueeze(-1)
    a = y_flat[:-1]
    b = delta - h_col * (2 * m[:-1] + m[1:]) / 6
    c = m[:-1] / 2
    d = (m[1:] - m[:-1]) / (6 * h_col)

    coefficients = torch.stack([a, b, c, d], dim=1).reshape(
        n_seg, 4, *value_shape
    )

    lengths = segment_lengths(knots, coefficients)

    from ._natural_spline import NaturalSpline

    return NaturalSpline(
        control_points=points,
        knots=knots,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=0,
        alpha=alpha,
        looping=looping,
        batch_size=[],
    )
