from __future__ import annotations

import math
from typing import TYPE_CHECKING

import torch
from torch import Tensor

from .._control_points import as_control_points
from .._degree_error import DegreeError
from .._piecewise import segment_lengths
from ._b_spline_basis import b_spline_basis

if TYPE_CHECKING:
    from ._generic_b_spline import GenericBSpline


def generic_b_spline_fit(
    points: Tensor,
    degree: int = 3,
) -> GenericBSpline:
    """
    Build a uniform B-spline of arbitrary degree from control points.

    Parameters
    ----------
    points : Tensor
        Control points, shape (n,) or (n, d) with n >= degree + 1.
    degree : int
        Polynomial degree, >= 1. Default is 3 (cubic).

    Returns
    -------
    GenericBSpline
        Spline with n - degree segments on the domain [0, n - degree].

    Raises
    ------
    DegreeError
        If degree < 1.
    InvalidInputError
        If there are fewer than degree + 1 points.

    Notes
    -----
    The knot vector has n + degree + 1 uniformly spaced entries
    ``u_k = k - degree``, so the valid domain ``[u_degree, u_n]`` starts at 0.

    The k-th derivative of a B-spline is a B-spline of degree
    ``degree - k`` over the knot vector with k knots removed at each end,
    whose control points are (for unit knot spacing) the k-th forward
    differences of the original ones. Evaluating those derivatives with
    Cox-de Boor at every segment start gives the Taylor (power-basis)
    coefficients of the segment.
    """
    if isinstance(degree, bool) or int(degree) != degree:
        raise DegreeError(f"Degree must be an integer, got {degree!r}")
    degree = int(degree)
    if degree < 1:
        raise DegreeError(f"Degree must be at least 1, got {degree}")

    points = as_control_points(
        points, degree + 1, f"Degree {degree} B-spline"
    )
    n = points.shape[0]
    n_segments = n - degree

    knot_vector = (
        torch.arange(n + degree + 1, dtype=points.dtype, device=points.device)
        - degree
    )
    padding = (degree - 1) // 2
    knots = torch.arange(n, dtype=points.dtype, device=points.device) - padding

    segment_starts = torch.arange(
        n_segments, dtype=points.dtype, device=points.device
    )

    coefficient_list = []
    differences = points
    for k in range(degree + 1):
        basis = b_spline_basis(
            segment_starts,
            knot_vector[k : knot_vector.shape[0] - k],
            degree - k,
        )
        derivative = torch.tensordot(basis, differences, dims=1)
        coefficient_list.append(derivative / math.factorial(k))
        differences = differences[1:] - differences[:-1]

    coefficients = torch.stack(coefficient_list, dim=1)

    lengths = segment_lengths(
        knots[padding : padding + n_segments + 1], coefficients
    )

    from ._generic_b_spline import GenericBSpline

    return GenericBSpline(
        control_points=points,
        knots=knots,
        knot_vector=knot_vector,
        coefficients=coefficients,
        segment_lengths=lengths,
        total_length=lengths.sum(),
        padding=padding,
        degree=degree,
        batch_size=[],
    )
