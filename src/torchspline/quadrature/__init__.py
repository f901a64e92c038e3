"""
Numerical integration (quadrature) module.

Function-based integration (evaluates callable):
    fixed_quad

Quadrature rules:
    gauss_legendre_nodes_weights
"""

from torchspline.quadrature._fixed_quad import fixed_quad
from torchspline.quadrature._nodes import gauss_legendre_nodes_weights

__all__ = [
    "fixed_quad",
    "gauss_legendre_nodes_weights",
]
