from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

from .._piecewise import integrate_segment_speed, vector_length
from ._spline_evaluate import spline_derivative
from ._spline_knots import as_query, locate, spline_breakpoints

if TYPE_CHECKING:
    from .._spline import Spline


def spline_speed(spline: Spline, t: Union[float, Tensor]) -> Tensor:
    """Magnitude of the tangent, shape ``t.shape``."""
    tangent = spline_derivative(spline, t, order=1)
    return vector_length(tangent, spline.coefficients.dim() - 2)


def spline_total_length(spline: Spline) -> Tensor:
    """Arc length of the whole curve, computed when the spline was built."""
    return spline.total_length


def spline_arc_length(
    spline: Spline,
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    n: int = 5,
) -> Tensor:
    """
    Signed arc length of a spline between two T values.

    Parameters
    ----------
    spline : Spline
        Any spline variant.
    a, b : float or Tensor
        Interval ends, broadcast together. Both are clamped to the domain.
    n : int
        Gauss-Legendre points per partial segment. Default is 5.

    Returns
    -------
    Tensor
        Arc length, negative when ``b < a``.

    Notes
    -----
    When both ends fall in one segment the speed is integrated directly.
    Otherwise the result is the partial first segment, the cached lengths
    of the full segments in between, and the partial last segment, so
    ``arc_length(a, b) + arc_length(b, c) == arc_length(a, c)``.
    """
    a, b = torch.broadcast_tensors(as_query(spline, a), as_query(spline, b))

    one = torch.ones_like(a)
    sign = torch.where(b < a, -one, one)
    lo = torch.minimum(a, b)
    hi = torch.maximum(a, b)

    breakpoints = spline_breakpoints(spline)
    widths = breakpoints[1:] - breakpoints[:-1]
    coefficients = spline.coefficients

    lo_index, lo_s = locate(spline, lo)
    hi_index, hi_s = locate(spline, hi)

    same = lo_index == hi_index

    direct = integrate_segment_speed(coefficients, lo_index, lo_s, hi_s, n=n)

    head = integrate_segment_speed(
        coefficients, lo_index, lo_s, widths[lo_index], n=n
    )
    tail = integrate_segment_speed(
        coefficients, hi_index, torch.zeros_like(hi_s), hi_s, n=n
    )

    # cumulative[j] is the length of segments 0..j-1
    cumulative = torch.cat(
        [
            spline.segment_lengths.new_zeros(1),
            torch.cumsum(spline.segment_lengths, dim=0),
        ]
    )
    interior = cumulative[hi_index] - cumulative[lo_index + 1]

    length = torch.where(same, direct, head + interior + tail)

    return sign * length


def spline_cumulative_length(
    spline: Spline,
    t: Union[float, Tensor],
    *,
    n: int = 5,
) -> Tensor:
    """Arc length from the start of the curve to ``t``."""
    t = as_query(spline, t)
    return spline_arc_length(spline, torch.zeros_like(t), t, n=n)
