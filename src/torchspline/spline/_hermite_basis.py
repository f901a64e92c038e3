"""Hermite blends expressed as power-basis segment coefficients."""

import torch
from torch import Tensor

from ._control_points import expand_to_values


def catmull_rom_derivatives(values: Tensor, knots: Tensor) -> Tensor:
    """
    Non-uniform Catmull-Rom derivative estimate at every interior point.

    Parameters
    ----------
    values : Tensor
        Values at the knots, shape (m, *value_shape).
    knots : Tensor
        Strictly increasing T values, shape (m,).

    Returns
    -------
    Tensor
        Derivative estimates at ``knots[1:-1]``, shape (m - 2, *value_shape).

    Notes
    -----
    This is the derivative at ``t_i`` of the Barry-Goldman pyramid:

        (P_i - P_{i-1}) / (t_i - t_{i-1})
        - (P_{i+1} - P_{i-1}) / (t_{i+1} - t_{i-1})
        + (P_{i+1} - P_i) / (t_{i+1} - t_i)

    which reduces to ``(P_{i+1} - P_{i-1}) / 2`` for unit spacing.
    """
    value_ndim = values.dim() - 1
    h_prev = expand_to_values(knots[1:-1] - knots[:-2], value_ndim)
    h_next = expand_to_values(knots[2:] - knots[1:-1], value_ndim)

    return (
        (values[1:-1] - values[:-2]) / h_prev
        - (values[2:] - values[:-2]) / (h_prev + h_next)
        + (values[2:] - values[1:-1]) / h_next
    )


def cubic_hermite_coefficients(
    p0: Tensor, p1: Tensor, m0: Tensor, m1: Tensor, h: Tensor
) -> Tensor:
    """
    Power-basis coefficients of cubic Hermite segments.

    Parameters
    ----------
    p0, p1 : Tensor
        Segment end positions, shape (n_segments, *value_shape).
    m0, m1 : Tensor
        Segment end tangents (derivatives with respect to t).
    h : Tensor
        Segment widths, shape (n_segments,).

    Returns
    -------
    Tensor
        Shape (n_segments, 4, *value_shape).
    """
    h = expand_to_values(h, p0.dim() - 1)
    delta = (p1 - p0) / h

    c2 = (3 * delta - 2 * m0 - m1) / h
    c3 = (m0 + m1 - 2 * delta) / (h * h)

    return torch.stack([p0, m0, c2, c3], dim=1)


def quintic_hermite_coefficients(
    p0: Tensor,
    p1: Tensor,
    m0: Tensor,
    m1: Tensor,
    a0: Tensor,
    a1: Tensor,
    h: Tensor,
) -> Tensor:
    """
    Power-basis coefficients of quintic Hermite segments.

    Matches position ``p``, tangent ``m`` and curvature (second derivative)
    ``a`` at both ends of each segment.

    Returns
    -------
    Tensor
        Shape (n_segments, 6, *value_shape).
    """
    h = expand_to_values(h, p0.dim() - 1)

    # Residuals left after the Taylor part fixed by the left end
    d0 = p1 - p0 - m0 * h - a0 * h * h / 2
    d1 = (m1 - m0 - a0 * h) * h
    d2 = (a1 - a0) * h * h

    c3 = (10 * d0 - 4 * d1 + d2 / 2) / h**3
    c4 = (-15 * d0 + 7 * d1 - d2) / h**4
    c5 = (6 * d0 - 3 * d1 + d2 / 2) / h**5

    return torch.stack([p0, m0, a0 / 2, c3, c4, c5], dim=1)
