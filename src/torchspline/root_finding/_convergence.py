"""Stopping rules for the bracketed solvers."""

import torch
from torch import Tensor

# (xtol, rtol, ftol) by floating point width
_TOLERANCES = {
    32: (1e-6, 1e-5, 1e-6),
    64: (1e-12, 1e-9, 1e-12),
}


def default_tolerances(dtype: torch.dtype) -> dict[str, float]:
    """
    Default ``xtol``, ``rtol`` and ``ftol`` for iterates of ``dtype``.

    Half precision types share the float32 row.
    """
    bits = 64 if torch.finfo(dtype).bits > 32 else 32
    xtol, rtol, ftol = _TOLERANCES[bits]
    return {"xtol": xtol, "rtol": rtol, "ftol": ftol}


def check_convergence(
    x_old: Tensor,
    x_new: Tensor,
    f_old: Tensor,
    xtol: float,
    rtol: float,
    ftol: float,
) -> Tensor:
    """
    Elementwise stopping mask.

    An element stops once its step is below ``xtol + rtol * |x_old|`` or
    the residual at ``x_old`` is below ``ftol``.
    """
    step = torch.abs(x_new - x_old)
    return (step < xtol + rtol * torch.abs(x_old)) | (torch.abs(f_old) < ftol)
