"""Pen-track groove cutters.

TrackBuilder turns a pen's groove profile into cutter meshes placed in
scene space (millimeters): straight lines, circles, sockets and swept
parametric curves. Cutters extend slightly past both plate faces, so
subtracting them from a stencil blank cuts clean through.
"""

import trimesh

from stencilstation.config import StationSettings
from stencilstation.core.mapping import CoordinateMapper
from stencilstation.core.profile import TrackProfile, track_profile
from stencilstation.core.solids import revolve, sweep_straight
from stencilstation.core.sweep import ChordSegment, SweepPlan, plan_sweep
from stencilstation.domain import ParametricCurve, PenProfile, Point


class TrackBuilder:
    """Builds groove cutters for one pen.

    Example:
        tracks = TrackBuilder(settings)
        cutters = tracks.line(Point(-40, 0), Point(40, 0))
    """

    def __init__(self, settings: StationSettings, pen: PenProfile | None = None) -> None:
        """Initialize the builder.

        Args:
            settings: Station settings (plate thickness, tolerance, facets)
            pen: Pen to cut for (default: the configured catalog pen)
        """
        self.settings = settings
        self.pen = pen or settings.render.pen
        self.sections = settings.render.facets
        self.profile: TrackProfile = track_profile(
            self.pen,
            settings.plate.plate_thickness,
            settings.plate.cut_tolerance,
        )

    def socket(self, center: Point) -> trimesh.Trimesh:
        """Round socket: the groove profile revolved about a point."""
        return revolve(self.profile.half_polygon(), self.sections, center.to_tuple())

    def segment(self, chord: ChordSegment) -> trimesh.Trimesh | None:
        """Straight groove along a chord, or None for a zero-length chord."""
        if chord.length <= 0:
            return None
        return sweep_straight(
            self.profile.cross_section(),
            chord.start.to_tuple(),
            chord.length,
            chord.bearing,
        )

    def line(self, start: Point, end: Point) -> list[trimesh.Trimesh]:
        """Straight groove with round ends.

        Args:
            start: Scene-space start point
            end: Scene-space end point

        Returns:
            Segment and cap cutters
        """
        cutters = [self.socket(start)]
        body = self.segment(ChordSegment(start, end))
        if body is not None:
            cutters.append(body)
            cutters.append(self.socket(end))
        return cutters

    def circle(self, center: Point, radius: float) -> trimesh.Trimesh:
        """Ring groove of the given centreline radius.

        Radii no larger than the groove half width collapse to a socket.
        """
        if radius <= self.profile.half_width:
            return self.socket(center)
        return revolve(
            self.profile.cross_section(offset=radius),
            self.sections,
            center.to_tuple(),
        )

    def curve(
        self,
        curve: ParametricCurve,
        mapper: CoordinateMapper,
        steps: int | None = None,
    ) -> tuple[list[trimesh.Trimesh], SweepPlan]:
        """Sweep the groove along a virtual-space parametric curve.

        Args:
            curve: Function of t in [-1, 1] returning a virtual-space point
            mapper: Mapper converting kept samples to scene space
            steps: Sample intervals (default: configured curve_steps)

        Returns:
            Cutters (one segment per chord, one cap per kept sample) and the
            sweep plan they were built from
        """
        plan = plan_sweep(
            curve,
            steps if steps is not None else self.settings.render.curve_steps,
            cull_bound=self.settings.render.cull_bound,
            project=mapper.virtual_to_scene,
        )
        cutters: list[trimesh.Trimesh] = [self.socket(p) for p in plan.caps]
        for chord in plan.segments:
            body = self.segment(chord)
            if body is not None:
                cutters.append(body)
        return cutters, plan
