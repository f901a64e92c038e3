"""Piecewise power-basis polynomials: the segment table every variant builds.

Segment ``j`` of a spline is stored as coefficients ``c[j, 0..m]`` of

    p_j(s) = c[j, 0] + c[j, 1] * s + ... + c[j, m] * s**m,    s = t - T_j

so all derivatives are exact and analytic.
"""

import math

import torch
from torch import Tensor

from torchspline.quadrature import fixed_quad

from ._control_points import expand_to_values


def polynomial_derivative(
    coefficients: Tensor,
    segment_index: Tensor,
    s: Tensor,
    order: int = 0,
) -> Tensor:
    """
    Evaluate the ``order``-th derivative of the given segments.

    Parameters
    ----------
    coefficients : Tensor
        Segment table, shape (n_segments, m + 1, *value_shape).
    segment_index : Tensor
        Segment of every query, broadcastable against ``s``.
    s : Tensor
        Local offsets from the start of each segment.
    order : int
        Derivative order, >= 0.

    Returns
    -------
    Tensor
        Shape (*broadcast_shape, *value_shape). Orders above the polynomial
        degree give zeros.
    """
    if order < 0:
        raise ValueError(f"Derivative order must be non-negative, got {order}")

    segment_index, s = torch.broadcast_tensors(segment_index, s)

    c = coefficients[segment_index]
    axis = segment_index.dim()
    degree = coefficients.shape[1] - 1
    s = expand_to_values(s, coefficients.dim() - 2)

    # Horner on the differentiated polynomial
    result = torch.zeros_like(c.select(axis, 0))
    for k in range(degree, order - 1, -1):
        result = result * s + math.perm(k, order) * c.select(axis, k)

    return result


def vector_length(v: Tensor, value_ndim: int) -> Tensor:
    if value_ndim == 0:
        return v.abs()
    return torch.linalg.vector_norm(v, dim=tuple(range(-value_ndim, 0)))


def segment_speed(
    coefficients: Tensor, segment_index: Tensor, s: Tensor
) -> Tensor:
    """Curve speed ``|p_j'(s)|``."""
    tangent = polynomial_derivative(coefficients, segment_index, s, order=1)
    return vector_length(tangent, coefficients.dim() - 2)


def integrate_segment_speed(
    coefficients: Tensor,
    segment_index: Tensor,
    s_start: Tensor,
    s_end: Tensor,
    n: int = 5,
) -> Tensor:
    """Gauss-Legendre arc length of each segment between two local offsets."""
    index = segment_index.unsqueeze(-1)
    return fixed_quad(
        lambda s: segment_speed(coefficients, index, s),
        s_start,
        s_end,
        n=n,
    )


def segment_lengths(breakpoints: Tensor, coefficients: Tensor) -> Tensor:
    """Arc length of every full segment, shape (n_segments,)."""
    widths = breakpoints[1:] - breakpoints[:-1]
    index = torch.arange(coefficients.shape[0], device=coefficients.device)
    return integrate_segment_speed(
        coefficients, index, torch.zeros_like(widths), widths
    )
