"""Curve sampling and chord planning for swept grooves.

A parametric curve is sampled at ``steps + 1`` evenly spaced values of t in
[-1, 1]. Each consecutive pair of good samples becomes one straight chord
segment, and every good sample gets a round cap so the joints have no gaps.

Samples are dropped when the curve function fails or returns a non-finite
value, and culled when they leave the +/-``cull_bound`` virtual square.
Any chord touching a dropped or culled sample is not placed; the rest of
the sweep continues.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from stencilstation.domain import (
    CurveSample,
    ParametricCurve,
    Point,
    curve_name,
    evaluate_curve,
    is_within,
    sample_parameters,
)
from stencilstation.exceptions import CurveEvaluationError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ChordSegment:
    """Straight piece of a swept groove.

    Attributes:
        start: Chord start point
        end: Chord end point
    """

    start: Point
    end: Point

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def bearing(self) -> float:
        """Direction of the chord in degrees, counter-clockwise from +x."""
        return math.degrees(math.atan2(self.end.y - self.start.y, self.end.x - self.start.x))


@dataclass
class SweepPlan:
    """Placement plan for one swept curve.

    Attributes:
        samples: Every evaluated sample, in parameter order
        segments: Chords to extrude, in parameter order
        caps: Points that receive a round cap
        culled_count: Samples outside the cull bound
        failed_count: Samples whose evaluation failed
    """

    samples: list[CurveSample]
    segments: list[ChordSegment] = field(default_factory=list)
    caps: list[Point] = field(default_factory=list)
    culled_count: int = 0
    failed_count: int = 0

    @property
    def total_length(self) -> float:
        return sum(s.length for s in self.segments)


def sample_curve(curve: ParametricCurve, steps: int) -> list[CurveSample]:
    """Evaluate a curve at ``steps + 1`` evenly spaced parameters.

    Args:
        curve: Function of t in [-1, 1] returning a virtual-space (x, y)
        steps: Number of intervals

    Returns:
        One sample per parameter, failed evaluations included
    """
    return [evaluate_curve(curve, t) for t in sample_parameters(steps)]


def plan_sweep(
    curve: ParametricCurve,
    steps: int,
    cull_bound: float = 1.9,
    project: Callable[[Point], Point] | None = None,
) -> SweepPlan:
    """Plan the chord segments and caps for a curve.

    Args:
        curve: Function of t in [-1, 1] returning a virtual-space (x, y)
        steps: Number of sample intervals
        cull_bound: Virtual-space bound for culling
        project: Optional mapping applied to kept points (e.g. to scene space)

    Returns:
        Sweep plan with projected segment and cap points

    Raises:
        CurveEvaluationError: If no sample could be evaluated at all
    """
    samples = sample_curve(curve, steps)
    plan = SweepPlan(samples=samples)
    name = curve_name(curve)

    kept: list[Point | None] = []
    for sample in samples:
        if sample.point is None:
            plan.failed_count += 1
            logger.debug("Curve sample skipped", curve=name, t=sample.t, reason=sample.reason)
            kept.append(None)
        elif not is_within(sample.point, cull_bound):
            plan.culled_count += 1
            logger.debug(
                "Curve sample culled",
                curve=name,
                t=sample.t,
                x=sample.point.x,
                y=sample.point.y,
            )
            kept.append(None)
        else:
            kept.append(project(sample.point) if project else sample.point)

    if plan.failed_count == len(samples):
        raise CurveEvaluationError(name, steps)

    plan.caps = [p for p in kept if p is not None]
    for start, end in zip(kept, kept[1:]):
        if start is not None and end is not None:
            plan.segments.append(ChordSegment(start, end))

    return plan
