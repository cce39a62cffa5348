"""Parametric curves and fallible curve evaluation.

A parametric curve maps ``t`` in [-1, 1] to a point in virtual space. Curves
are arbitrary user functions and may divide by zero or diverge, so every
evaluation yields a ``CurveSample`` whose point is None when the function
did not produce a finite real value.
"""

from collections.abc import Callable
from dataclasses import dataclass

from stencilstation.domain.geometry import Point

ParametricCurve = Callable[[float], tuple[float, float]]


@dataclass(frozen=True, slots=True)
class CurveSample:
    """One evaluated parameter value.

    Attributes:
        t: Curve parameter
        point: Virtual-space point, or None if evaluation failed
        reason: Why evaluation failed (empty on success)
    """

    t: float
    point: Point | None
    reason: str = ""

    @property
    def ok(self) -> bool:
        """Whether the sample produced a finite point."""
        return self.point is not None


def evaluate_curve(curve: ParametricCurve, t: float) -> CurveSample:
    """Evaluate a curve at t, converting numeric failures into empty samples.

    Args:
        curve: Function of t returning an (x, y) pair
        t: Parameter value

    Returns:
        A sample holding the point, or None and the failure reason
    """
    try:
        x, y = curve(t)
    except (ArithmeticError, ValueError) as e:
        return CurveSample(t=t, point=None, reason=f"{type(e).__name__}: {e}")

    try:
        point = Point(float(x), float(y))
    except (TypeError, ValueError):
        # e.g. a complex result from a fractional power of a negative number
        return CurveSample(t=t, point=None, reason=f"not a real value: ({x!r}, {y!r})")

    if not point.is_finite():
        return CurveSample(t=t, point=None, reason="non-finite value")
    return CurveSample(t=t, point=point)


def curve_name(curve: ParametricCurve) -> str:
    """Readable name for a curve function (used in logs and errors)."""
    return getattr(curve, "__name__", type(curve).__name__)


def sample_parameters(steps: int) -> list[float]:
    """Evenly spaced parameters covering [-1, 1] in ``steps`` intervals.

    Computed from integer indices so the final value is exactly 1.0.
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")
    return [-1.0 + 2.0 * i / steps for i in range(steps + 1)]


def is_within(point: Point, bound: float) -> bool:
    """Check that a virtual-space point lies inside the +/-bound square."""
    return abs(point.x) <= bound and abs(point.y) <= bound
