"""Stencil inserts.

Each stencil is a set of cutters subtracted from the stencil blank. Cutters
are first merged and clipped to the window prism, so grooves that run past
the window (curves are kept out to the cull bound) never cut into the
margin that holds the insert in its frame.
"""

import math
from collections.abc import Callable

import structlog
import trimesh
from shapely.geometry import MultiPolygon, Polygon

from stencilstation.config import StationSettings
from stencilstation.core.mapping import CoordinateMapper
from stencilstation.core.plates import PlateBuilder
from stencilstation.core.solids import difference, extrude, intersection, mirror_quadrants, union
from stencilstation.core.tracks import TrackBuilder
from stencilstation.domain import PEN_CATALOG, ParametricCurve, Point
from stencilstation.exceptions import ConstructionError, PenProfileError

logger = structlog.get_logger(__name__)

# Spacing of radial guide lines on the polar stencil, in degrees
POLAR_ANGLE_STEP = 15.0

# Crosshair arm length in mm
CROSSHAIR_ARM = 5.0


def graph_function(func: Callable[[float], float], mapper: CoordinateMapper) -> ParametricCurve:
    """Turn a graph-space function y = f(x) into a virtual-space curve.

    The parameter t sweeps the window from left to right; x is converted to
    graph units, f is applied, and y is converted back to virtual units.
    """

    def curve(t: float) -> tuple[float, float]:
        y = func(mapper.virtual_to_graph_x(t))
        return t, mapper.graph_to_virtual_y(y)

    curve.__name__ = getattr(func, "__name__", "graph_function")
    return curve


def _sine(x: float) -> float:
    return 5.0 * math.sin(x)


def _parabola(x: float) -> float:
    return x * x / 5.0 - 5.0


def _hyperbola(x: float) -> float:
    return 10.0 / x


def _lissajous(t: float) -> tuple[float, float]:
    return 0.8 * math.sin(3 * math.pi * t), 0.8 * math.sin(2 * math.pi * t)


def _circle(t: float) -> tuple[float, float]:
    return 0.5 * math.cos(math.pi * t), 0.5 * math.sin(math.pi * t)


# Graph-space demo functions, swept across the full window
GRAPH_DEMOS: dict[str, Callable[[float], float]] = {
    "sine": _sine,
    "parabola": _parabola,
    "hyperbola": _hyperbola,
}

# Virtual-space demo curves
CURVE_DEMOS: dict[str, ParametricCurve] = {
    "lissajous": _lissajous,
    "circle": _circle,
}


class StencilBuilder:
    """Builds the cutters for each stencil insert and cuts the blank.

    Example:
        stencils = StencilBuilder(settings)
        grid = stencils.cut(stencils.graph_grid())
    """

    def __init__(self, settings: StationSettings) -> None:
        self.settings = settings
        self.mapper = CoordinateMapper.from_settings(settings)
        self.plates = PlateBuilder(settings)
        self.tracks = TrackBuilder(settings)
        self.skipped_samples = 0

    @property
    def half_width(self) -> float:
        return self.settings.plate.window_width / 2

    @property
    def half_height(self) -> float:
        return self.settings.plate.window_height / 2

    def cut(self, cutters: list[trimesh.Trimesh]) -> trimesh.Trimesh:
        """Subtract window-clipped cutters from a fresh stencil blank.

        Raises:
            ConstructionError: If there is nothing to cut
        """
        if not cutters:
            raise ConstructionError("stencil", "no cutters to apply")
        merged = union(cutters)
        logger.debug("Cutters merged", cutters=len(cutters), faces=len(merged.faces))
        clipped = intersection([merged, self.plates.window_prism()])
        if clipped.is_empty:
            raise ConstructionError("stencil", "all cutters lie outside the window")
        logger.debug("Cutters clipped to window", faces=len(clipped.faces))
        return difference(self.plates.stencil_blank(), [clipped])

    def graph_grid(self) -> list[trimesh.Trimesh]:
        """Grid lines at every graph-space multiple of grid_step, axes included."""
        graph = self.settings.graph
        step = graph.grid_step
        cutters: list[trimesh.Trimesh] = []

        for k in range(math.ceil(graph.x_min / step), math.floor(graph.x_max / step) + 1):
            x = self.mapper.graph_to_scene_x(k * step)
            cutters += self.tracks.line(Point(x, -self.half_height), Point(x, self.half_height))

        for k in range(math.ceil(graph.y_min / step), math.floor(graph.y_max / step) + 1):
            y = self.mapper.graph_to_scene_y(k * step)
            cutters += self.tracks.line(Point(-self.half_width, y), Point(self.half_width, y))

        if graph.x_min <= 0 <= graph.x_max and graph.y_min <= 0 <= graph.y_max:
            cutters.append(self.tracks.socket(self.mapper.graph_to_scene(Point(0.0, 0.0))))

        logger.debug("Graph grid planned", cutters=len(cutters), step=step)
        return cutters

    def polar_guide(self) -> list[trimesh.Trimesh]:
        """Radial angle lines and concentric rings around the window centre."""
        outer = min(self.half_width, self.half_height)
        inner = outer * 0.1
        origin = Point(0.0, 0.0)
        cutters: list[trimesh.Trimesh] = [self.tracks.socket(origin)]

        count = int(round(360.0 / POLAR_ANGLE_STEP))
        for i in range(count):
            angle = math.radians(i * POLAR_ANGLE_STEP)
            direction = (math.cos(angle), math.sin(angle))
            cutters += self.tracks.line(
                Point(inner * direction[0], inner * direction[1]),
                Point(outer * direction[0], outer * direction[1]),
            )

        for k in range(1, 5):
            cutters.append(self.tracks.circle(origin, outer * 0.9 * k / 4))
        return cutters

    def _crosshair(self, center: Point) -> list[trimesh.Trimesh]:
        cutters = self.tracks.line(
            Point(center.x - CROSSHAIR_ARM, center.y), Point(center.x + CROSSHAIR_ARM, center.y)
        )
        cutters += self.tracks.line(
            Point(center.x, center.y - CROSSHAIR_ARM), Point(center.x, center.y + CROSSHAIR_ARM)
        )
        return cutters

    def _corner_marker(self) -> list[trimesh.Trimesh]:
        return self._crosshair(self.mapper.virtual_to_scene(Point(0.8, 0.8)))

    def alignment_markers(self) -> list[trimesh.Trimesh]:
        """Centre crosshair plus a crosshair in each window corner."""
        return self._crosshair(Point(0.0, 0.0)) + mirror_quadrants(self._corner_marker)()

    def curve(self, curve: ParametricCurve, steps: int | None = None) -> list[trimesh.Trimesh]:
        """Cutters for a virtual-space parametric curve."""
        cutters, plan = self.tracks.curve(curve, self.mapper, steps)
        self.skipped_samples += plan.failed_count + plan.culled_count
        logger.debug(
            "Curve planned",
            segments=len(plan.segments),
            culled=plan.culled_count,
            failed=plan.failed_count,
        )
        return cutters

    def graph_demo(self, name: str) -> list[trimesh.Trimesh]:
        """Cutters for one of the graph-space demo functions."""
        return self.curve(graph_function(GRAPH_DEMOS[name], self.mapper))

    def curve_demo(self, name: str) -> list[trimesh.Trimesh]:
        """Cutters for one of the virtual-space demo curves."""
        return self.curve(CURVE_DEMOS[name])

    def _petal(self) -> list[trimesh.Trimesh]:
        def petal(t: float) -> tuple[float, float]:
            theta = (t + 1) / 2 * (math.pi / 2)
            r = 0.9 * math.sin(2 * theta)
            return r * math.cos(theta), r * math.sin(theta)

        return self.curve(petal)

    def rose(self) -> list[trimesh.Trimesh]:
        """Four-petal rose with a centre ring, mirrored from one petal."""
        outer = min(self.half_width, self.half_height)
        return mirror_quadrants(self._petal)() + [
            self.tracks.circle(Point(0.0, 0.0), outer * 0.2)
        ]

    def pen_calibration(self) -> list[trimesh.Trimesh]:
        """One short line per catalog pen that fits the plate, bottom to top."""
        cutters: list[trimesh.Trimesh] = []
        rows = len(PEN_CATALOG)
        for i, pen in enumerate(PEN_CATALOG):
            try:
                tracks = TrackBuilder(self.settings, pen)
            except PenProfileError as e:
                logger.warning("Pen skipped in calibration strip", pen=pen.name, reason=e.reason)
                continue
            y = self.mapper.virtual_to_scene_y(-0.8 + 1.6 * i / (rows - 1))
            x = self.half_width * 0.7
            cutters += tracks.line(Point(-x, y), Point(x, y))
        return cutters

    def circle_sizes(self) -> list[trimesh.Trimesh]:
        """Rings of increasing radius in a row across the window."""
        cutters: list[trimesh.Trimesh] = []
        count = 5
        pitch = self.settings.plate.window_width / count
        for i in range(count):
            center = Point(-self.half_width + pitch * (i + 0.5), 0.0)
            cutters.append(self.tracks.circle(center, pitch * 0.4 * (i + 1) / count))
        return cutters

    def outline(self, geometry: Polygon | MultiPolygon) -> list[trimesh.Trimesh]:
        """Through-cutters for scene-space 2D outlines (e.g. imported SVG shapes)."""
        p = self.settings.plate
        polygons = list(geometry.geoms) if isinstance(geometry, MultiPolygon) else [geometry]
        return [
            extrude(poly, p.plate_thickness + 2 * p.cut_tolerance, z=-p.cut_tolerance)
            for poly in polygons
            if not poly.is_empty and poly.area > 0
        ]
