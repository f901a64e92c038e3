from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Optional, Union

import torch
from torch import Tensor

from torchspline.root_finding import newton_bisection

from .._evaluation import spline_arc_length, spline_speed
from .._invalid_input_error import InvalidInputError
from .._inversion_warning import InversionWarning

if TYPE_CHECKING:
    from ._spline_inverter import SplineInverter


def spline_invert(
    inverter: SplineInverter,
    length: Union[float, Tensor],
    *,
    xtol: Optional[float] = None,
    rtol: Optional[float] = None,
    maxiter: int = 30,
) -> Tensor:
    """
    Find the T value at which the arc length from T = 0 equals ``length``.

    Parameters
    ----------
    inverter : SplineInverter
        Inverter built by ``spline_inverter``.
    length : float or Tensor
        Target arc lengths, any shape. Clamped to ``[0, total_length]``.
    xtol, rtol : float, optional
        Tolerances on T. Default: dtype-aware.
    maxiter : int
        Newton iteration cap. Default is 30.

    Returns
    -------
    Tensor
        T values, same shape as ``length``.

    Warns
    -----
    InversionWarning
        If some elements did not converge within ``maxiter`` iterations.
        Those elements hold the midpoint of their final bracket.

    Notes
    -----
    The sample table brackets every target, and the bracket is refined by
    Newton steps on ``arc_length(t_lo, t) + L(t_lo) - length`` with the
    curve speed as derivative, falling back to bisection.
    """
    spline = inverter.spline
    sample_t = inverter.sample_t
    sample_length = inverter.sample_length

    length = torch.as_tensor(
        length, dtype=sample_length.dtype, device=sample_length.device
    )
    shape = length.shape

    target = torch.clamp(length.reshape(-1), sample_length[0], sample_length[-1])

    n_intervals = sample_t.shape[0] - 1
    index = torch.searchsorted(sample_length, target.contiguous(), right=True) - 1
    index = torch.clamp(index, 0, n_intervals - 1)

    t_lo = sample_t[index]
    t_hi = sample_t[index + 1]
    length_lo = sample_length[index]
    length_hi = sample_length[index + 1]

    def residual(t: Tensor) -> Tensor:
        value = spline_arc_length(spline, t_lo, t) + length_lo - target
        # Bracket ends read the table so their signs agree with the search
        value = torch.where(t <= t_lo, length_lo - target, value)
        return torch.where(t >= t_hi, length_hi - target, value)

    def speed(t: Tensor) -> Tensor:
        return spline_speed(spline, t)

    t, converged = newton_bisection(
        residual,
        speed,
        t_lo,
        t_hi,
        xtol=xtol,
        rtol=rtol,
        maxiter=maxiter,
    )

    if not torch.all(converged):
        count = int((~converged).sum())
        warnings.warn(
            f"Arc length inversion did not converge for {count} of "
            f"{converged.numel()} values within {maxiter} iterations; "
            f"returning bracket midpoints",
            InversionWarning,
            stacklevel=2,
        )

    return t.reshape(shape)


def spline_invert_uniform(
    inverter: SplineInverter,
    count: int,
    **kwargs,
) -> Tensor:
    """
    T values evenly spaced in arc length along the whole curve.

    Parameters
    ----------
    inverter : SplineInverter
        Inverter built by ``spline_inverter``.
    count : int
        Number of values. The first is 0 and, for ``count >= 2``, the last
        is ``max_t``.
    **kwargs
        Forwarded to ``spline_invert``.

    Returns
    -------
    Tensor
        Shape (count,).

    Raises
    ------
    InvalidInputError
        If ``count < 1``.
    """
    count = int(count)
    if count < 1:
        raise InvalidInputError(f"count must be at least 1, got {count}")

    sample_length = inverter.sample_length
    lengths = torch.linspace(
        0.0,
        float(sample_length[-1]),
        count,
        dtype=sample_length.dtype,
        device=sample_length.device,
    )
    return spline_invert(inverter, lengths, **kwargs)
