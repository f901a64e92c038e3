from ._spline_invert import spline_invert, spline_invert_uniform
from ._spline_inverter import SplineInverter, spline_inverter

__all__ = [
    "SplineInverter",
    "spline_invert",
    "spline_invert_uniform",
    "spline_inverter",
]
