"""Control point validation and knot (T-value) construction shared by all variants."""

import torch
from torch import Tensor

from ._invalid_input_error import InvalidInputError
from ._numerical_error import NumericalError


def as_control_points(points, minimum: int, name: str) -> Tensor:
    """
    Validate and convert a control point set.

    Parameters
    ----------
    points : Tensor or array_like
        Control points, shape (n,) for a scalar curve or (n, d) for a curve
        in d-dimensional space.
    minimum : int
        Minimum number of points the variant needs.
    name : str
        Variant name used in error messages.

    Returns
    -------
    Tensor
        Floating point control points.

    Raises
    ------
    InvalidInputError
        If the shape is wrong, there are too few points, or a point is not
        finite.
    """
    points = torch.as_tensor(points)
    if not torch.is_floating_point(points):
        points = points.to(torch.get_default_dtype())

    if points.dim() not in (1, 2):
        raise InvalidInputError(
            f"{name} control points must have shape (n,) or (n, d), "
            f"got {tuple(points.shape)}"
        )

    n = points.shape[0]
    if n < minimum:
        raise InvalidInputError(
            f"{name} requires at least {minimum} control points, got {n}"
        )

    if not torch.all(torch.isfinite(points)):
        raise InvalidInputError(f"{name} control points must be finite")

    return points


def validate_alpha(alpha: float) -> float:
    alpha = float(alpha)
    if not 0.0 <= alpha <= 1.0:
        raise InvalidInputError(f"alpha must be in [0, 1], got {alpha}")
    return alpha


def match_derivatives(values, points: Tensor, name: str) -> Tensor:
    """Convert user supplied per-point derivatives to the dtype/shape of ``points``."""
    values = torch.as_tensor(values, dtype=points.dtype, device=points.device)
    if values.shape != points.shape:
        raise InvalidInputError(
            f"{name} must have shape {tuple(points.shape)}, "
            f"got {tuple(values.shape)}"
        )
    if not torch.all(torch.isfinite(values)):
        raise InvalidInputError(f"{name} must be finite")
    return values


def wrap_points(points: Tensor, before: int, after: int) -> Tensor:
    """
    Pad a closed polygon with wrapped-around neighbours.

    Returns ``points[-before:] + points + points[:after]`` with indices
    taken modulo n, so padding wider than the polygon repeats it.
    """
    n = points.shape[0]
    index = torch.arange(-before, n + after, device=points.device) % n
    return points[index]


def point_distances(points: Tensor) -> Tensor:
    diff = points[1:] - points[:-1]
    if points.dim() == 1:
        return diff.abs()
    return torch.linalg.vector_norm(diff, dim=-1)


def knot_spacing(points: Tensor, alpha: float) -> Tensor:
    """
    T-spacing between consecutive points: ``|P[i+1] - P[i]| ** alpha``.

    alpha = 0 gives uniform spacing, 0.5 centripetal and 1 chordal.

    Raises
    ------
    NumericalError
        If two consecutive points coincide while alpha > 0.
    """
    if alpha == 0.0:
        return torch.ones(
            points.shape[0] - 1, dtype=points.dtype, device=points.device
        )

    spacing = point_distances(points).pow(alpha)
    if torch.any(spacing <= 0):
        index = int(torch.nonzero(spacing <= 0)[0, 0])
        raise NumericalError(
            f"Control points {index} and {index + 1} coincide; "
            f"alpha={alpha} gives zero knot spacing"
        )
    return spacing


def cumulative_knots(spacing: Tensor, origin: int) -> Tensor:
    """Accumulate spacing into a T table whose entry ``origin`` is zero."""
    knots = torch.cat([spacing.new_zeros(1), torch.cumsum(spacing, dim=0)])
    return knots - knots[origin]


def expand_to_values(x: Tensor, value_ndim: int) -> Tensor:
    """Append singleton dimensions so ``x`` broadcasts against point values."""
    return x.reshape(x.shape + (1,) * value_ndim)
