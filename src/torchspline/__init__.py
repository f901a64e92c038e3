"""torchspline: differentiable curve splines with arc-length parameterization."""

from . import (
    quadrature,
    root_finding,
    spline,
)

__all__ = [
    "quadrature",
    "root_finding",
    "spline",
]

__version__ = "0.1.0"
