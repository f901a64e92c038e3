"""Arc length to T lookup table."""

import torch
from tensordict.tensorclass import tensorclass
from torch import Tensor

from .._evaluation import spline_breakpoints, spline_cumulative_length
from .._invalid_input_error import InvalidInputError
from .._spline import Spline


@tensorclass
class SplineInverter:
    """Spline paired with a monotonic table of (T, arc length) samples.

    Attributes
    ----------
    spline : Spline
        The spline being inverted.
    sample_t : Tensor
        Sample T values: every breakpoint plus ``samples_per_segment - 1``
        evenly spaced values inside each segment, increasing, shape
        (n_segments * samples_per_segment + 1,).
    sample_length : Tensor
        Arc length from T = 0 to every sample, non-decreasing.
    samples_per_segment : int
        Number of table intervals per segment.
    """

    spline: Spline
    sample_t: Tensor
    sample_length: Tensor
    samples_per_segment: int


def spline_inverter(
    spline: Spline,
    samples_per_segment: int = 10,
) -> SplineInverter:
    """
    Build an arc-length inverter for a spline.

    Parameters
    ----------
    spline : Spline
        Any spline variant.
    samples_per_segment : int
        Table intervals per segment. More samples give tighter brackets for
        the Newton iteration in ``spline_invert``. Default is 10.

    Returns
    -------
    SplineInverter

    Raises
    ------
    InvalidInputError
        If ``samples_per_segment < 1``.
    """
    samples_per_segment = int(samples_per_segment)
    if samples_per_segment < 1:
        raise InvalidInputError(
            f"samples_per_segment must be at least 1, got {samples_per_segment}"
        )

    breakpoints = spline_breakpoints(spline)
    widths = breakpoints[1:] - breakpoints[:-1]

    fractions = (
        torch.arange(
            samples_per_segment, dtype=breakpoints.dtype, device=breakpoints.device
        )
        / samples_per_segment
    )
    inner = breakpoints[:-1].unsqueeze(-1) + widths.unsqueeze(-1) * fractions
    sample_t = torch.cat([inner.reshape(-1), breakpoints[-1:]])

    sample_length = spline_cumulative_length(spline, sample_t)
    # Quadrature rounding must not break the ordering searchsorted relies on
    sample_length = torch.cummax(sample_length, dim=0).values

    return SplineInverter(
        spline=spline,
        sample_t=sample_t,
        sample_length=sample_length,
        samples_per_segment=samples_per_segment,
        batch_size=[],
    )
