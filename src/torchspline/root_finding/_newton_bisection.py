"""Bracketed Newton-Raphson root finding with bisection fallback."""

from typing import Callable

import torch
from torch import Tensor

from ._convergence import check_convergence, default_tolerances
from ._exceptions import BracketError


def newton_bisection(
    f: Callable[[Tensor], Tensor],
    df: Callable[[Tensor], Tensor],
    lower: Tensor,
    upper: Tensor,
    *,
    xtol: float | None = None,
    rtol: float | None = None,
    ftol: float | None = None,
    maxiter: int = 50,
) -> tuple[Tensor, Tensor]:
    """
    Find roots of f(x) = 0 inside a bracket using safeguarded Newton steps.

    Every iteration proposes the Newton step ``x - f(x) / f'(x)``. When the
    step is not finite or lands outside the current bracket, the midpoint of
    the bracket is used instead. The bracket shrinks after each function
    evaluation, so the iteration can never leave ``[lower, upper]``.

    Parameters
    ----------
    f : Callable[[Tensor], Tensor]
        Vectorized function. Takes tensor of shape ``(N,)``, returns ``(N,)``.
    df : Callable[[Tensor], Tensor]
        Derivative of ``f``, same calling convention.
    lower, upper : Tensor
        Bracket endpoints. Broadcast against each other. ``f(lower)`` and
        ``f(upper)`` must not have the same strict sign.
    xtol : float, optional
        Absolute tolerance on x change. Default: dtype-aware.
    rtol : float, optional
        Relative tolerance on x change. Default: dtype-aware.
    ftol : float, optional
        Tolerance on residual. Default: dtype-aware.
    maxiter : int, default=50
        Maximum iterations. The loop is bounded; there is no recursion.

    Returns
    -------
    tuple[Tensor, Tensor]
        - **root** -- Roots with the broadcast shape of the bracket.
          Non-converged elements hold the midpoint of their final bracket.
        - **converged** -- Boolean tensor with the same shape indicating
          which elements converged within maxiter iterations.

    Raises
    ------
    BracketError
        If ``lower > upper`` or the bracket does not contain a sign change.

    Examples
    --------
    >>> f = lambda x: x**3 - 2
    >>> df = lambda x: 3 * x**2
    >>> root, converged = newton_bisection(
    ...     f, df, torch.tensor([0.0]), torch.tensor([2.0])
    ... )
    >>> float(root)  # doctest: +ELLIPSIS
    1.2599...
    """
    lower, upper = torch.broadcast_tensors(lower, upper)
    orig_shape = lower.shape

    lo = lower.flatten().clone()
    hi = upper.flatten().clone()

    if lo.numel() == 0:
        return lo.reshape(orig_shape), torch.ones(
            orig_shape, dtype=torch.bool, device=lo.device
        )

    if torch.any(lo > hi):
        raise BracketError("Bracket lower bound exceeds upper bound")

    defaults = default_tolerances(lo.dtype)
    if xtol is None:
        xtol = defaults["xtol"]
    if rtol is None:
        rtol = defaults["rtol"]
    if ftol is None:
        ftol = defaults["ftol"]

    f_lo = f(lo)
    f_hi = f(hi)
    if torch.any(f_lo * f_hi > 0):
        raise BracketError("Bracket does not contain a sign change")

    # Orient every element so that g(lo) <= 0 <= g(hi)
    orientation = torch.where(f_hi >= f_lo, 1.0, -1.0).to(lo.dtype)
    g_lo = orientation * f_lo
    g_hi = orientation * f_hi

    # Start from the secant through the bracket ends
    span = g_hi - g_lo
    x = torch.where(
        span > 0,
        lo - g_lo * (hi - lo) / torch.where(span > 0, span, 1.0),
        (lo + hi) / 2,
    )

    converged = torch.zeros(x.shape, dtype=torch.bool, device=x.device)
    result = x.clone()

    for _ in range(maxiter):
        gx = orientation * f(x)
        dgx = orientation * df(x)

        lo = torch.where(gx <= 0, x, lo)
        hi = torch.where(gx > 0, x, hi)

        newton_step = x - gx / dgx
        use_newton = (
            torch.isfinite(newton_step) & (newton_step > lo) & (newton_step < hi)
        )
        x_new = torch.where(use_newton, newton_step, (lo + hi) / 2)

        newly_converged = check_convergence(x, x_new, gx, xtol, rtol, ftol)
        newly_converged = newly_converged | (hi - lo <= xtol)
        newly_converged = newly_converged & ~converged

        # A vanishing residual means x itself is the root
        best = torch.where(torch.abs(gx) < ftol, x, x_new)
        result = torch.where(newly_converged, best, result)
        converged = converged | newly_converged

        if torch.all(converged):
            return result.reshape(orig_shape), converged.reshape(orig_shape)

        x = torch.where(converged, x, x_new)

    result = torch.where(converged, result, (lo + hi) / 2)
    return result.reshape(orig_shape), converged.reshape(orig_shape)
