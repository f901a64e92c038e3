from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Optional, Union

from torch import Tensor

from .._piecewise import polynomial_derivative
from ._spline_knots import locate

if TYPE_CHECKING:
    from .._spline import Spline


class SplineDerivatives(NamedTuple):
    """Position and leading derivatives with respect to T.

    Attributes
    ----------
    position : Tensor
    tangent : Tensor, optional
        First derivative.
    curvature : Tensor, optional
        Second derivative.
    wiggle : Tensor, optional
        Third derivative.
    """

    position: Tensor
    tangent: Optional[Tensor] = None
    curvature: Optional[Tensor] = None
    wiggle: Optional[Tensor] = None


def spline_derivative(
    spline: Spline,
    t: Union[float, Tensor],
    order: int = 1,
) -> Tensor:
    """
    Evaluate the ``order``-th derivative of a spline.

    Parameters
    ----------
    spline : Spline
        Any spline variant.
    t : float or Tensor
        Query T values, any shape. Values outside ``[0, max_t]`` are clamped.
    order : int
        Derivative order. 0 is the position; orders above the segment degree
        are zero.

    Returns
    -------
    Tensor
        Shape (*t.shape, *value_shape).
    """
    index, s = locate(spline, t)
    return polynomial_derivative(spline.coefficients, index, s, order=order)


def _derivatives(spline: Spline, t: Union[float, Tensor], count: int):
    index, s = locate(spline, t)
    return [
        polynomial_derivative(spline.coefficients, index, s, order=order)
        for order in range(count)
    ]


def spline_position(spline: Spline, t: Union[float, Tensor]) -> Tensor:
    """
    Evaluate a spline at query points.

    Parameters
    ----------
    spline : Spline
        Any spline variant.
    t : float or Tensor
        Query T values, any shape. Values outside ``[0, max_t]`` are clamped
        to the nearest end, for every variant including looping ones.

    Returns
    -------
    Tensor
        Positions, shape (*t.shape, *value_shape).
    """
    return spline_derivative(spline, t, order=0)


def spline_tangent(spline: Spline, t: Union[float, Tensor]) -> SplineDerivatives:
    """Position and first derivative."""
    return SplineDerivatives(*_derivatives(spline, t, 2))


def spline_curvature(
    spline: Spline, t: Union[float, Tensor]
) -> SplineDerivatives:
    """Position, first and second derivatives."""
    return SplineDerivatives(*_derivatives(spline, t, 3))


def spline_wiggle(spline: Spline, t: Union[float, Tensor]) -> SplineDerivatives:
    """Position and the first three derivatives."""
    return SplineDerivatives(*_derivatives(spline, t, 4))
