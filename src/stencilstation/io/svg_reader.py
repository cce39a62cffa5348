"""SVG outline import.

Reads the filled shapes of an SVG file into shapely geometry. Every path is
flattened to polylines; closed subpaths are combined with the even-odd rule,
so nested subpaths become holes. Text and images are ignored.
"""

import math
from functools import reduce
from pathlib import Path

import shapely
from shapely import affinity
from shapely.geometry import MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from svgelements import SVG, Close, Line, Move, Shape
from svgelements import Path as SvgPath

from stencilstation.exceptions import SvgImportError

Ring = list[tuple[float, float]]

# Upper bound on points per flattened curve segment
MAX_SEGMENT_POINTS = 64

# Points closer than this (SVG units) are merged when flattening
MERGE_DISTANCE = 1e-6

# Coordinate grid (mm) that fitted outlines are snapped to
FIT_GRID = 1e-6


def _flatten(path: SvgPath, tolerance: float) -> list[Ring]:
    rings: list[Ring] = []
    current: Ring = []

    def add(x: float, y: float) -> None:
        if current and math.dist(current[-1], (x, y)) <= MERGE_DISTANCE:
            return
        current.append((x, y))

    def flush() -> None:
        # arcs end a hair away from where the subpath started
        while len(current) > 1 and math.dist(current[0], current[-1]) <= MERGE_DISTANCE:
            current.pop()
        if len(current) >= 3:
            rings.append(list(current))
        current.clear()

    for segment in path:
        if isinstance(segment, Move):
            flush()
            add(segment.end.x, segment.end.y)
        elif isinstance(segment, Close):
            flush()
        else:
            if not current:
                add(segment.start.x, segment.start.y)
            if isinstance(segment, Line):
                add(segment.end.x, segment.end.y)
                continue
            count = min(
                MAX_SEGMENT_POINTS, max(2, math.ceil(segment.length() / tolerance))
            )
            for i in range(1, count + 1):
                point = segment.point(i / count)
                add(point.x, point.y)
    flush()
    return rings


def _even_odd(polygons: list[Polygon]) -> BaseGeometry:
    return reduce(lambda acc, poly: acc.symmetric_difference(poly), polygons[1:], polygons[0])


def read_svg_outlines(path: Path, tolerance: float = 0.5) -> Polygon | MultiPolygon:
    """Read the outlines of every shape in an SVG file.

    Args:
        path: SVG file
        tolerance: Target chord length (SVG units) when flattening curves

    Returns:
        Outline geometry in SVG user units (y pointing down)

    Raises:
        SvgImportError: If the file cannot be parsed or contains no outlines
    """
    if not path.exists():
        raise SvgImportError(str(path), "file not found")

    try:
        svg = SVG.parse(str(path))
    except Exception as e:
        raise SvgImportError(str(path), str(e)) from e

    polygons: list[Polygon] = []
    for element in svg.elements():
        if not isinstance(element, Shape):
            continue
        for ring in _flatten(abs(SvgPath(element)), tolerance):
            poly = Polygon(ring).buffer(0)
            if not poly.is_empty and poly.area > 0:
                polygons.append(poly)

    if not polygons:
        raise SvgImportError(str(path), "no closed outlines found")

    geometry = _even_odd(polygons)
    if geometry.is_empty:
        raise SvgImportError(str(path), "outlines cancel out")
    return geometry


def fit_outline(
    geometry: BaseGeometry, width: float, height: float, fill: float = 0.9
) -> Polygon | MultiPolygon:
    """Scale and centre SVG outlines into a width x height window.

    The y axis is flipped from SVG's downward convention and the aspect
    ratio is kept. Coordinates are snapped to FIT_GRID, which merges
    near-coincident vertices.

    Args:
        geometry: Outlines in SVG user units
        width: Window width in mm
        height: Window height in mm
        fill: Fraction of the window the outlines may occupy

    Returns:
        Outlines in scene space, centred on the origin
    """
    min_x, min_y, max_x, max_y = geometry.bounds
    span_x = max_x - min_x
    span_y = max_y - min_y
    if span_x <= 0 or span_y <= 0:
        raise SvgImportError("<geometry>", "outline has no extent")

    scale = fill * min(width / span_x, height / span_y)
    centre_x = (min_x + max_x) / 2
    centre_y = (min_y + max_y) / 2
    moved = affinity.translate(geometry, -centre_x, -centre_y)
    scaled = affinity.scale(moved, xfact=scale, yfact=-scale, origin=(0.0, 0.0))
    return shapely.set_precision(scaled, FIT_GRID)
