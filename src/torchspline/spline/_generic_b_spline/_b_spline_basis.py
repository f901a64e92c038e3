import torch
from torch import Tensor

from .._degree_error import DegreeError
from .._invalid_input_error import InvalidInputError


def b_spline_basis(
    t: Tensor,
    knots: Tensor,
    degree: int,
) -> Tensor:
    """
    Evaluate all B-spline basis functions using Cox-de Boor recursion.

    Parameters
    ----------
    t : Tensor
        Evaluation points, shape (*query_shape)
    knots : Tensor
        Knot vector, shape (n_knots,). Must be non-decreasing.
    degree : int
        Polynomial degree (0=constant, 1=linear, 2=quadratic, 3=cubic)

    Returns
    -------
    basis : Tensor
        Shape (*query_shape, n_basis) where n_basis = n_knots - degree - 1

    Raises
    ------
    DegreeError
        If degree is negative or too high for the given knot count.
    InvalidInputError
        If knots are not non-decreasing.

    Notes
    -----
    For degree 0:
        B_{i,0}(t) = 1 if t_i <= t < t_{i+1}, else 0

    For degree k > 0:
        B_{i,k}(t) = ((t - t_i) / (t_{i+k} - t_i)) * B_{i,k-1}(t)
                   + ((t_{i+k+1} - t) / (t_{i+k+1} - t_{i+1})) * B_{i+1,k-1}(t)

    Division by zero (0/0) is handled as 0 (when knot intervals are zero).
    Each recursion level is evaluated for all basis indices at once.
    """
    n_knots = knots.shape[0]

    if degree < 0:
        raise DegreeError(f"Degree must be non-negative, got {degree}")
    if n_knots < degree + 2:
        raise DegreeError(
            f"Need at least {degree + 2} knots for degree {degree}, got {n_knots}"
        )

    if not torch.all(knots[1:] >= knots[:-1]):
        raise InvalidInputError("Knots must be non-decreasing")

    n_basis = n_knots - degree - 1

    query_shape = t.shape
    t_flat = t.reshape(-1, 1).to(knots.dtype)  # (n_points, 1)

    basis = ((t_flat >= knots[:-1]) & (t_flat < knots[1:])).to(knots.dtype)

    # t == knots[-1] belongs to the last interval with positive span
    at_right_boundary = t_flat[:, 0] == knots[-1]
    if at_right_boundary.any():
        last_valid_interval = n_knots - 2
        for j in range(n_knots - 2, -1, -1):
            if knots[j] < knots[j + 1]:
                last_valid_interval = j
                break
        basis[at_right_boundary, last_valid_interval] = 1.0

    for k in range(1, degree + 1):
        # Knots t_j, t_{j+1}, t_{j+k}, t_{j+k+1} for j = 0 .. n_knots - k - 2
        t_j = knots[: -k - 1]
        t_j1 = knots[1:-k]
        t_jk = knots[k:-1]
        t_jk1 = knots[k + 1 :]

        denom_left = t_jk - t_j
        denom_right = t_jk1 - t_j1

        left = torch.where(
            denom_left > 0,
            (t_flat - t_j) / torch.where(denom_left > 0, denom_left, 1.0),
            0.0,
        )
        right = torch.where(
            denom_right > 0,
            (t_jk1 - t_flat) / torch.where(denom_right > 0, denom_right, 1.0),
            0.0,
        )

        basis = left * basis[:, :-1] + right * basis[:, 1:]

    return basis.view(*query_shape, n_basis)
