"""Domain models for stencilstation.

This module contains the value types shared across the generator. All
models are immutable (frozen dataclasses) and independent of the geometry
kernel.

Key classes:
- Point: A 2D point in virtual, scene or graph space
- Axis: Bounds of a 1D coordinate axis
- PenProfile: Groove cross-section parameters for one pen
- CurveSample: Result of evaluating a parametric curve at one parameter
"""

from stencilstation.domain.curve import (
    CurveSample,
    ParametricCurve,
    curve_name,
    evaluate_curve,
    is_within,
    sample_parameters,
)
from stencilstation.domain.geometry import VIRTUAL_AXIS, Axis, Point
from stencilstation.domain.pen import PEN_CATALOG, PenProfile, get_pen_profile

__all__: list[str] = [
    # Coordinates
    "Point",
    "Axis",
    "VIRTUAL_AXIS",
    # Pens
    "PenProfile",
    "PEN_CATALOG",
    "get_pen_profile",
    # Curves
    "ParametricCurve",
    "CurveSample",
    "evaluate_curve",
    "curve_name",
    "sample_parameters",
    "is_within",
]
