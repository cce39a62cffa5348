"""Core value types for coordinates.

This module defines the small immutable types shared by the mapping engine
and the track generators:
- Point: A 2D point in any of the coordinate spaces
- Axis: A 1D linear range used as the source or target of a mapping
"""

import math
from dataclasses import dataclass

from stencilstation.exceptions import DegenerateAxisError


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable. The coordinate space (virtual, scene or graph)
    is implied by where the point came from.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def is_finite(self) -> bool:
        """Check that both coordinates are finite numbers."""
        return math.isfinite(self.x) and math.isfinite(self.y)


@dataclass(frozen=True, slots=True)
class Axis:
    """Bounds of a 1D linear coordinate axis.

    Bounds may be given in descending order (a flipped axis), but never
    equal: a zero-width axis cannot be mapped from.

    Attributes:
        min: Value at the start of the axis
        max: Value at the end of the axis

    Raises:
        DegenerateAxisError: If min == max
    """

    min: float
    max: float

    def __post_init__(self) -> None:
        if self.min == self.max:
            raise DegenerateAxisError(self.min, self.max)

    @property
    def span(self) -> float:
        """Signed width of the axis."""
        return self.max - self.min

    def contains(self, value: float) -> bool:
        """Check whether value lies between the bounds (inclusive)."""
        low, high = sorted((self.min, self.max))
        return low <= value <= high


VIRTUAL_AXIS = Axis(-1.0, 1.0)
