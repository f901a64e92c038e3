import torch
from torch import Tensor

from ._numerical_error import NumericalError


def _check_pivot(pivot: Tensor, scale: Tensor) -> None:
    if not torch.isfinite(pivot) or pivot.abs() <= (
        torch.finfo(pivot.dtype).eps * scale
    ):
        raise NumericalError(
            f"Singular tridiagonal system (pivot {pivot.item():.3e})"
        )


def solve_tridiagonal(
    diag: Tensor,
    upper: Tensor,
    lower: Tensor,
    rhs: Tensor,
) -> Tensor:
    """
    Solve a tridiagonal system Ax = b using the Thomas algorithm.

    The matrix A has the form:
        [d0  u0   0   0  ...  0   0 ]
        [l0  d1  u1   0  ...  0   0 ]
        [ 0  l1  d2  u2  ...  0   0 ]
        [        ...                ]
        [ 0   0   0   0  ... ln-2 dn-1]

    Parameters
    ----------
    diag : Tensor
        Main diagonal, shape (n,)
    upper : Tensor
        Upper diagonal, shape (n-1,)
    lower : Tensor
        Lower diagonal, shape (n-1,)
    rhs : Tensor
        Right-hand side, shape (*batch, n)

    Returns
    -------
    Tensor
        Solution x, shape (*batch, n)

    Raises
    ------
    NumericalError
        If elimination meets a zero (or non-finite) pivot.

    Notes
    -----
    This implementation is fully differentiable. The elimination is written
    with Python lists to avoid in-place updates of autograd tensors.
    """
    n = diag.shape[0]
    scale = diag.abs().max()

    # rhs: (*batch, n) -> (n, *batch)
    rhs_t = rhs.movedim(-1, 0)

    if n == 1:
        _check_pivot(diag[0], scale)
        return (rhs_t / diag[0]).movedim(0, -1)

    c_prime_list = []
    d_prime_list = []

    _check_pivot(diag[0], scale)
    c_prime_list.append(upper[0] / diag[0])
    d_prime_list.append(rhs_t[0] / diag[0])

    for i in range(1, n - 1):
        denom = diag[i] - lower[i - 1] * c_prime_list[i - 1]
        _check_pivot(denom, scale)
        c_prime_list.append(upper[i] / denom)
        d_prime_list.append(
            (rhs_t[i] - lower[i - 1] * d_prime_list[i - 1]) / denom
        )

    # Last row (no upper diagonal)
    denom = diag[n - 1] - lower[n - 2] * c_prime_list[n - 2]
    _check_pivot(denom, scale)
    d_prime_list.append(
        (rhs_t[n - 1] - lower[n - 2] * d_prime_list[n - 2]) / denom
    )

    x_list = [None] * n
    x_list[n - 1] = d_prime_list[n - 1]

    for i in range(n - 2, -1, -1):
        x_list[i] = d_prime_list[i] - c_prime_list[i] * x_list[i + 1]

    x = torch.stack(x_list, dim=0)

    return x.movedim(0, -1)


def solve_cyclic_tridiagonal(
    diag: Tensor,
    upper: Tensor,
    lower: Tensor,
    rhs: Tensor,
) -> Tensor:
    """
    Solve a cyclic (periodic) tridiagonal system with Sherman-Morrison.

    Row ``i`` of the system reads::

        lower[i] * x[i-1] + diag[i] * x[i] + upper[i] * x[i+1] = rhs[i]

    with indices taken modulo n, so ``lower[0]`` couples the first row to
    the last unknown and ``upper[n-1]`` couples the last row to the first.

    Parameters
    ----------
    diag : Tensor
        Main diagonal, shape (n,) with n >= 3.
    upper : Tensor
        Upper band including the bottom-left corner, shape (n,).
    lower : Tensor
        Lower band including the top-right corner, shape (n,).
    rhs : Tensor
        Right-hand side, shape (*batch, n).

    Returns
    -------
    Tensor
        Solution x, shape (*batch, n).

    Raises
    ------
    NumericalError
        If the system is singular.

    References
    ----------
    Press, W. H. et al. Numerical Recipes, section 2.7 "Cyclic Tridiagonal
    Systems".
    """
    n = diag.shape[0]
    if n < 3:
        raise ValueError(f"Cyclic system needs at least 3 unknowns, got {n}")

    corner_bottom = upper[n - 1]
    corner_top = lower[0]

    gamma = -diag[0]
    _check_pivot(gamma, diag.abs().max())

    modified_diag = torch.cat(
        [
            (diag[0] - gamma).unsqueeze(0),
            diag[1:-1],
            (diag[n - 1] - corner_bottom * corner_top / gamma).unsqueeze(0),
        ]
    )

    x = solve_tridiagonal(modified_diag, upper[:-1], lower[1:], rhs)

    u = torch.zeros(n, dtype=diag.dtype, device=diag.device)
    u[0] = gamma
    u[n - 1] = corner_bottom
    z = solve_tridiagonal(modified_diag, upper[:-1], lower[1:], u)

    denominator = 1 + z[0] + corner_top * z[n - 1] / gamma
    _check_pivot(denominator, torch.ones((), dtype=diag.dtype))

    factor = (x[..., 0] + corner_top * x[..., n - 1] / gamma) / denominator

    return x - factor.unsqueeze(-1) * z
