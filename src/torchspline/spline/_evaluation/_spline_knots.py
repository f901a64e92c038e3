from __future__ import annotations

from typing import TYPE_CHECKING, Union

import torch
from torch import Tensor

if TYPE_CHECKING:
    from .._spline import Spline


def spline_segment_count(spline: Spline) -> int:
    """Number of polynomial segments of ``spline``."""
    return int(spline.coefficients.shape[0])


def spline_breakpoints(spline: Spline) -> Tensor:
    """
    T values bounding the segments, shape (n_segments + 1,).

    The first entry is 0 and the last is ``spline_max_t(spline)``.
    """
    padding = int(spline.padding)
    return spline.knots[padding : padding + spline_segment_count(spline) + 1]


def spline_t(spline: Spline, index: int) -> Tensor:
    """
    T value of control point ``index``.

    Padding points that only shape the end derivatives have T values
    outside the domain (negative before the first segment).

    Raises
    ------
    IndexError
        If ``index`` is negative or past the last knot.
    """
    index = int(index)
    size = spline.knots.shape[0]
    if index < 0 or index >= size:
        raise IndexError(
            f"Knot index {index} out of range for spline with {size} knots"
        )
    return spline.knots[index]


def spline_max_t(spline: Spline) -> Tensor:
    """Largest T value of the domain ``[0, max_t]``."""
    return spline_breakpoints(spline)[-1]


def as_query(spline: Spline, t: Union[float, Tensor]) -> Tensor:
    knots = spline.knots
    return torch.as_tensor(t, dtype=knots.dtype, device=knots.device)


def spline_segment_for_t(spline: Spline, t: Union[float, Tensor]) -> Tensor:
    """
    Segment containing each query, found by binary search.

    Parameters
    ----------
    spline : Spline
        Any spline variant.
    t : float or Tensor
        Query T values, any shape.

    Returns
    -------
    Tensor
        Integer segment indices, same shape as ``t``, in
        ``[0, n_segments - 1]``. Queries outside the domain map to the
        first or last segment; a query exactly on a breakpoint belongs to
        the segment that starts there, except ``max_t`` which belongs to
        the last segment.
    """
    t = as_query(spline, t)
    breakpoints = spline_breakpoints(spline)
    n_segments = breakpoints.shape[0] - 1

    index = torch.searchsorted(breakpoints, t.reshape(-1).contiguous(), right=True)
    index = torch.clamp(index - 1, 0, n_segments - 1)

    return index.reshape(t.shape)


def locate(spline: Spline, t: Union[float, Tensor]) -> tuple[Tensor, Tensor]:
    """Clamp ``t`` to the domain; return (segment index, local offset)."""
    t = as_query(spline, t)
    breakpoints = spline_breakpoints(spline)

    t = torch.clamp(t, breakpoints[0], breakpoints[-1])
    index = spline_segment_for_t(spline, t)

    return index, t - breakpoints[index]
