"""Pen-track groove profiles.

A groove is cut straight through a stencil plate. From the paper upwards it
is a narrow shaft of the pen's ``min_width``, then a bevel that opens at the
pen cone angle until it reaches ``max_width`` or the top of the plate,
whichever comes first. Profiles are expressed in a 2D frame where x is the
lateral offset from the groove centreline and y is height above the paper.
"""

import math
from dataclasses import dataclass

from shapely.geometry import LinearRing, Polygon

from stencilstation.domain import PenProfile
from stencilstation.exceptions import ConstructionError, PenProfileError

Vertex = tuple[float, float]


def bevel_height(pen: PenProfile, plate_thickness: float) -> float:
    """Height of the bevel wall above the shaft.

    With ``theta = 90 - bevel_angle / 2``, the wall would reach ``max_width``
    at ``adj / cos(theta)`` and the plate top at ``opp / sin(theta)``, where
    ``adj`` is the half-width excess and ``opp`` the material above the
    shaft. The bevel ends at the lower of the two and never rises past the
    plate top. Equal candidates give a straight-walled groove.

    Args:
        pen: Pen profile
        plate_thickness: Thickness of the plate being cut

    Returns:
        Bevel height in mm; 0.0 for a straight-walled groove

    Raises:
        PenProfileError: If the shaft is deeper than the plate
    """
    opp = plate_thickness - pen.shaft_depth
    if opp < 0:
        raise PenProfileError(
            pen.name,
            f"shaft depth {pen.shaft_depth} exceeds plate thickness {plate_thickness}",
        )

    theta = math.radians(90.0 - pen.bevel_angle / 2)
    adj = (pen.max_width - pen.min_width) / 2
    width_limited = adj / math.cos(theta)
    top_limited = opp / math.sin(theta)

    if math.isclose(width_limited, top_limited, rel_tol=1e-9, abs_tol=1e-12):
        return 0.0
    height = min(width_limited, top_limited, opp)
    return height if height > 0 else 0.0


@dataclass(frozen=True)
class TrackProfile:
    """Half cross section of a pen groove.

    ``half`` runs from the floor on the centreline, out along the floor, up
    the outer wall and back to the centreline at the top. The floor and top
    sit ``tolerance`` outside the plate so cuts pierce both faces.

    Attributes:
        pen: Pen the groove is shaped for
        plate_thickness: Thickness of the plate being cut
        tolerance: Outward offset at floor and top
        bevel: Bevel height (0.0 for straight walls)
        half: Half-profile vertices (x >= 0), not closed
    """

    pen: PenProfile
    plate_thickness: float
    tolerance: float
    bevel: float
    half: tuple[Vertex, ...]

    @property
    def outer_edge(self) -> tuple[Vertex, ...]:
        """Vertices of the outer wall, bottom to top."""
        return self.half[1:-1]

    @property
    def half_width(self) -> float:
        """Widest lateral extent of the groove."""
        return max(x for x, _ in self.half)

    @property
    def bottom(self) -> float:
        return self.half[0][1]

    @property
    def top(self) -> float:
        return self.half[-1][1]

    def half_polygon(self) -> Polygon:
        """Half profile as a polygon (for revolving into a socket)."""
        return Polygon(self.half)

    def cross_section(self, offset: float = 0.0) -> Polygon:
        """Full cross section, mirrored about the centreline.

        Args:
            offset: Lateral shift of the centreline (used for ring grooves)

        Returns:
            Counter-clockwise polygon in the (lateral, height) plane
        """
        right = [(x + offset, y) for x, y in self.outer_edge]
        left = [(offset - x, y) for x, y in reversed(self.outer_edge)]
        return Polygon(right + left)


def _dedupe(vertices: list[Vertex]) -> list[Vertex]:
    result: list[Vertex] = []
    for v in vertices:
        if not result or not (
            math.isclose(v[0], result[-1][0], abs_tol=1e-9)
            and math.isclose(v[1], result[-1][1], abs_tol=1e-9)
        ):
            result.append(v)
    return result


def validate_polygon(vertices: list[Vertex] | tuple[Vertex, ...], part: str) -> None:
    """Check that vertices form a simple polygon with positive area.

    Raises:
        ConstructionError: If the ring self-intersects or has no area
    """
    if len(vertices) < 3:
        raise ConstructionError(part, f"only {len(vertices)} distinct vertices")
    ring = LinearRing(vertices)
    if not ring.is_simple:
        raise ConstructionError(part, "profile self-intersects")
    if Polygon(ring).area <= 0:
        raise ConstructionError(part, "profile has zero area")


def track_profile(
    pen: PenProfile, plate_thickness: float, tolerance: float = 0.01
) -> TrackProfile:
    """Build the half profile of the groove for a pen.

    Args:
        pen: Pen profile
        plate_thickness: Thickness of the plate being cut
        tolerance: Outward offset at floor and top

    Returns:
        Validated track profile

    Raises:
        PenProfileError: If the shaft is deeper than the plate
        ConstructionError: If the resulting polygon is not simple
    """
    bevel = bevel_height(pen, plate_thickness)
    floor = -tolerance
    top = plate_thickness + tolerance
    shaft_x = pen.min_width / 2

    if bevel == 0.0:
        # no bevel: straight channel at shaft width
        vertices = [(0.0, floor), (shaft_x, floor), (shaft_x, top), (0.0, top)]
    else:
        bevel_x = pen.max_width / 2
        vertices = [
            (0.0, floor),
            (shaft_x, floor),
            (shaft_x, pen.shaft_depth),
            (bevel_x, pen.shaft_depth + bevel),
            (bevel_x, top),
            (0.0, top),
        ]

    vertices = _dedupe(vertices)
    validate_polygon(vertices, f"track profile '{pen.name}'")

    return TrackProfile(
        pen=pen,
        plate_thickness=plate_thickness,
        tolerance=tolerance,
        bevel=bevel,
        half=tuple(vertices),
    )
