"""Pen profiles and the built-in pen catalog.

A pen profile describes the groove cross section that guides one kind of
pen tip: a narrow shaft of ``min_width`` at the paper, opening through a
bevel of ``bevel_angle`` degrees to ``max_width``.
"""

from dataclasses import dataclass

from stencilstation.exceptions import PenProfileError


@dataclass(frozen=True, slots=True)
class PenProfile:
    """Groove geometry for one pen.

    Attributes:
        name: Human-readable pen name
        min_width: Shaft width at the paper in mm
        max_width: Widest groove opening in mm
        bevel_angle: Included angle of the pen cone in degrees
        shaft_depth: Height of the straight shaft above the paper in mm

    Raises:
        PenProfileError: If the widths or angle are out of range
    """

    name: str
    min_width: float
    max_width: float
    bevel_angle: float
    shaft_depth: float

    def __post_init__(self) -> None:
        if self.min_width <= 0:
            raise PenProfileError(self.name, "min_width must be positive")
        if self.max_width < self.min_width:
            raise PenProfileError(self.name, "max_width must be >= min_width")
        if not 0 < self.bevel_angle < 180:
            raise PenProfileError(self.name, "bevel_angle must be within (0, 180)")
        if self.shaft_depth < 0:
            raise PenProfileError(self.name, "shaft_depth must not be negative")

    @property
    def has_bevel(self) -> bool:
        """Whether the groove widens above the shaft."""
        return self.max_width > self.min_width


PEN_CATALOG: tuple[PenProfile, ...] = (
    PenProfile("fineliner-0.3", min_width=0.6, max_width=1.6, bevel_angle=60.0, shaft_depth=0.8),
    PenProfile("fineliner-0.5", min_width=0.8, max_width=2.0, bevel_angle=60.0, shaft_depth=0.8),
    PenProfile("ballpoint", min_width=1.0, max_width=3.0, bevel_angle=70.0, shaft_depth=1.0),
    PenProfile("gel-pen", min_width=1.2, max_width=3.2, bevel_angle=70.0, shaft_depth=1.0),
    PenProfile("mechanical-pencil", min_width=0.9, max_width=2.4, bevel_angle=40.0, shaft_depth=1.2),
    PenProfile("technical-pen", min_width=0.7, max_width=1.8, bevel_angle=50.0, shaft_depth=0.6),
    PenProfile("marker", min_width=2.5, max_width=6.0, bevel_angle=80.0, shaft_depth=1.5),
)


def get_pen_profile(index: int) -> PenProfile:
    """Look up a catalog profile by index.

    Args:
        index: Catalog position (0-6)

    Returns:
        The selected pen profile

    Raises:
        PenProfileError: If index is outside the catalog
    """
    if not 0 <= index < len(PEN_CATALOG):
        raise PenProfileError(
            f"#{index}", f"catalog index must be within 0..{len(PEN_CATALOG) - 1}"
        )
    return PEN_CATALOG[index]
