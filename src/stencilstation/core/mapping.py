"""Coordinate mapping between virtual, scene and graph spaces.

Three linear coordinate spaces describe every point on a stencil:

- Virtual (T): normalized [-1, 1] on both axes, independent of plate size
- Scene (S): physical millimeters, centred on the window
- Graph (G): user-chosen graphing-calculator bounds spanning the window

All conversions are affine, so chaining through the virtual space and the
direct graph-to-scene shortcut agree up to floating-point error.
"""

from stencilstation.config import StationSettings
from stencilstation.domain import VIRTUAL_AXIS, Axis, Point
from stencilstation.exceptions import DegenerateAxisError


def coord_map(
    value: float, a_min: float, a_max: float, b_min: float, b_max: float
) -> float:
    """Map a value from the linear space [a_min, a_max] into [b_min, b_max].

    Args:
        value: Value in the source space
        a_min: Source value mapped to b_min
        a_max: Source value mapped to b_max
        b_min: Target value for a_min
        b_max: Target value for a_max

    Returns:
        The corresponding value in the target space

    Raises:
        DegenerateAxisError: If a_min == a_max

    Examples:
        >>> coord_map(0.0, -1.0, 1.0, 0.0, 100.0)
        50.0
        >>> coord_map(5.0, 0.0, 10.0, 10.0, 0.0)
        5.0
    """
    if a_max == a_min:
        raise DegenerateAxisError(a_min, a_max)
    return (value - a_min) * (b_max - b_min) / (a_max - a_min) + b_min


def map_axis(value: float, source: Axis, target: Axis) -> float:
    """Map a value between two axes."""
    return coord_map(value, source.min, source.max, target.min, target.max)


class CoordinateMapper:
    """Converts points between the virtual, scene and graph spaces.

    The axis bounds are fixed from the settings at construction; the mapper
    holds no other state.

    Example:
        mapper = CoordinateMapper.from_settings(settings)
        scene = mapper.graph_to_scene(Point(3.0, -2.0))
    """

    def __init__(
        self,
        scene_x: Axis,
        scene_y: Axis,
        graph_x: Axis,
        graph_y: Axis,
    ) -> None:
        self.scene_x = scene_x
        self.scene_y = scene_y
        self.graph_x = graph_x
        self.graph_y = graph_y

    @classmethod
    def from_settings(cls, settings: StationSettings) -> "CoordinateMapper":
        """Build a mapper for the configured window and graph bounds.

        Raises:
            DegenerateAxisError: If any configured axis has zero width
        """
        half_w = settings.plate.window_width / 2
        half_h = settings.plate.window_height / 2
        graph = settings.graph
        return cls(
            scene_x=Axis(-half_w, half_w),
            scene_y=Axis(-half_h, half_h),
            graph_x=Axis(graph.x_min, graph.x_max),
            graph_y=Axis(graph.y_min, graph.y_max),
        )

    # Per-axis conversions

    def graph_to_virtual_x(self, x: float) -> float:
        return map_axis(x, self.graph_x, VIRTUAL_AXIS)

    def graph_to_virtual_y(self, y: float) -> float:
        return map_axis(y, self.graph_y, VIRTUAL_AXIS)

    def virtual_to_graph_x(self, x: float) -> float:
        return map_axis(x, VIRTUAL_AXIS, self.graph_x)

    def virtual_to_graph_y(self, y: float) -> float:
        return map_axis(y, VIRTUAL_AXIS, self.graph_y)

    def virtual_to_scene_x(self, x: float) -> float:
        return map_axis(x, VIRTUAL_AXIS, self.scene_x)

    def virtual_to_scene_y(self, y: float) -> float:
        return map_axis(y, VIRTUAL_AXIS, self.scene_y)

    def scene_to_virtual_x(self, x: float) -> float:
        return map_axis(x, self.scene_x, VIRTUAL_AXIS)

    def scene_to_virtual_y(self, y: float) -> float:
        return map_axis(y, self.scene_y, VIRTUAL_AXIS)

    def graph_to_scene_x(self, x: float) -> float:
        return map_axis(x, self.graph_x, self.scene_x)

    def graph_to_scene_y(self, y: float) -> float:
        return map_axis(y, self.graph_y, self.scene_y)

    def scene_to_graph_x(self, x: float) -> float:
        return map_axis(x, self.scene_x, self.graph_x)

    def scene_to_graph_y(self, y: float) -> float:
        return map_axis(y, self.scene_y, self.graph_y)

    # Point conversions

    def graph_to_virtual(self, point: Point) -> Point:
        return Point(self.graph_to_virtual_x(point.x), self.graph_to_virtual_y(point.y))

    def virtual_to_graph(self, point: Point) -> Point:
        return Point(self.virtual_to_graph_x(point.x), self.virtual_to_graph_y(point.y))

    def virtual_to_scene(self, point: Point) -> Point:
        return Point(self.virtual_to_scene_x(point.x), self.virtual_to_scene_y(point.y))

    def scene_to_virtual(self, point: Point) -> Point:
        return Point(self.scene_to_virtual_x(point.x), self.scene_to_virtual_y(point.y))

    def graph_to_scene(self, point: Point) -> Point:
        """Direct graph-to-scene conversion (skips the virtual space)."""
        return Point(self.graph_to_scene_x(point.x), self.graph_to_scene_y(point.y))

    def scene_to_graph(self, point: Point) -> Point:
        return Point(self.scene_to_graph_x(point.x), self.scene_to_graph_y(point.y))

    def convert(self, point: Point, source: str, target: str) -> Point:
        """Convert a point between named spaces.

        Args:
            point: Point in the source space
            source: One of "graph", "virtual", "scene"
            target: One of "graph", "virtual", "scene"

        Returns:
            The point in the target space

        Raises:
            ValueError: If a space name is unknown
        """
        axes = {
            "graph": (self.graph_x, self.graph_y),
            "virtual": (VIRTUAL_AXIS, VIRTUAL_AXIS),
            "scene": (self.scene_x, self.scene_y),
        }
        if source not in axes or target not in axes:
            raise ValueError(f"Unknown coordinate space: {source!r} -> {target!r}")
        (sx, sy), (tx, ty) = axes[source], axes[target]
        return Point(map_axis(point.x, sx, tx), map_axis(point.y, sy, ty))
