"""Solid geometry operations on trimesh meshes.

Every part is built from a handful of primitives:
- extrusions of shapely polygons
- revolutions of 2D profiles around the z axis
- transforms (translate, rotate about z, reflect)
- boolean union, difference and intersection through the manifold engine

Shape builders are plain functions returning a list of meshes. The mirror
combinators wrap a builder and return a builder that also emits its
reflections.
"""

import math
from collections.abc import Callable, Sequence

import numpy as np
import trimesh
from shapely.geometry import Polygon

from stencilstation.exceptions import ConstructionError

BOOLEAN_ENGINE = "manifold"

ShapeBuilder = Callable[..., list[trimesh.Trimesh]]


def extrude(polygon: Polygon, height: float, z: float = 0.0) -> trimesh.Trimesh:
    """Extrude a polygon along +z.

    Args:
        polygon: Outline in the XY plane
        height: Extrusion height
        z: Height of the bottom face

    Returns:
        Mesh spanning z..z+height
    """
    if polygon.is_empty or polygon.area <= 0:
        raise ConstructionError("extrusion", "polygon is empty")
    mesh = trimesh.creation.extrude_polygon(polygon, height=height)
    if not mesh.is_volume:
        raise ConstructionError("extrusion", "extruded mesh is not a closed volume")
    if z:
        mesh.apply_translation((0.0, 0.0, z))
    return mesh


def slab(
    width: float,
    depth: float,
    thickness: float,
    z: float = 0.0,
    center: tuple[float, float] = (0.0, 0.0),
) -> trimesh.Trimesh:
    """Axis-aligned box centred on ``center`` with its bottom face at z."""
    mesh = trimesh.creation.box(extents=(width, depth, thickness))
    mesh.apply_translation((center[0], center[1], z + thickness / 2))
    return mesh


def cylinder(
    radius: float,
    height: float,
    center: tuple[float, float] = (0.0, 0.0),
    z: float = 0.0,
    sections: int = 32,
) -> trimesh.Trimesh:
    """Vertical cylinder with its bottom face at z."""
    mesh = trimesh.creation.cylinder(radius=radius, height=height, sections=sections)
    mesh.apply_translation((center[0], center[1], z + height / 2))
    return mesh


def revolve(
    profile: Polygon,
    sections: int = 32,
    center: tuple[float, float] = (0.0, 0.0),
) -> trimesh.Trimesh:
    """Revolve a (radius, height) profile a full turn around the z axis.

    Args:
        profile: Closed profile with x >= 0 as radius and y as height
        sections: Segments around the full turn
        center: XY position of the revolution axis

    Returns:
        Solid of revolution
    """
    coords = np.asarray(profile.exterior.coords, dtype=np.float64)
    if coords[:, 0].min() < 0:
        raise ConstructionError("revolution", "profile crosses the axis")
    mesh = trimesh.creation.revolve(coords, sections=sections)
    if mesh.volume < 0:
        mesh.invert()
    mesh.apply_translation((center[0], center[1], 0.0))
    return mesh


def sweep_straight(
    cross_section: Polygon,
    start: tuple[float, float],
    length: float,
    bearing: float,
) -> trimesh.Trimesh:
    """Extrude a vertical cross section along a straight horizontal path.

    The cross section's x is the lateral offset from the path and its y is
    the height. The result starts at ``start`` and runs ``length`` along
    ``bearing`` degrees.
    """
    if length <= 0:
        raise ConstructionError("sweep", "path length must be positive")
    mesh = trimesh.creation.extrude_polygon(cross_section, height=length)

    angle = math.radians(bearing)
    direction = (math.cos(angle), math.sin(angle))
    lateral = (-direction[1], direction[0])
    matrix = np.array(
        [
            [lateral[0], 0.0, direction[0], start[0]],
            [lateral[1], 0.0, direction[1], start[1]],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
    mesh.apply_transform(matrix)
    return mesh


def translated(mesh: trimesh.Trimesh, x: float, y: float, z: float = 0.0) -> trimesh.Trimesh:
    """Translated copy of a mesh."""
    result = mesh.copy()
    result.apply_translation((x, y, z))
    return result


def rotated(mesh: trimesh.Trimesh, degrees: float) -> trimesh.Trimesh:
    """Copy of a mesh rotated about the z axis through the origin."""
    result = mesh.copy()
    result.apply_transform(
        trimesh.transformations.rotation_matrix(math.radians(degrees), (0.0, 0.0, 1.0))
    )
    return result


def reflected(mesh: trimesh.Trimesh, axis: str) -> trimesh.Trimesh:
    """Copy of a mesh mirrored across the plane normal to ``axis``.

    Args:
        mesh: Mesh to mirror
        axis: "x" mirrors x -> -x, "y" mirrors y -> -y
    """
    index = {"x": 0, "y": 1}.get(axis)
    if index is None:
        raise ValueError(f"Unknown mirror axis: {axis!r}")
    matrix = np.eye(4)
    matrix[index, index] = -1.0
    result = mesh.copy()
    result.apply_transform(matrix)
    return result


def mirror_copy(build: ShapeBuilder, axis: str = "x") -> ShapeBuilder:
    """Wrap a builder so it also emits the mirror image of its shapes.

    Example:
        both_sides = mirror_copy(right_side_holes, "x")
        meshes = both_sides(settings)
    """

    def _build(*args, **kwargs) -> list[trimesh.Trimesh]:
        shapes = build(*args, **kwargs)
        return shapes + [reflected(s, axis) for s in shapes]

    _build.__name__ = f"mirror_{axis}_{getattr(build, '__name__', 'shape')}"
    return _build


def mirror_quadrants(build: ShapeBuilder) -> ShapeBuilder:
    """Wrap a first-quadrant builder so it fills all four quadrants."""
    return mirror_copy(mirror_copy(build, "x"), "y")


def _boolean(
    operation: str,
    run: Callable[..., trimesh.Trimesh],
    meshes: Sequence[trimesh.Trimesh],
) -> trimesh.Trimesh:
    try:
        return run(list(meshes), engine=BOOLEAN_ENGINE)
    except ValueError as e:
        # trimesh rejects open meshes before handing them to the engine
        raise ConstructionError(operation, str(e)) from e


def _check_result(mesh: trimesh.Trimesh, operation: str) -> trimesh.Trimesh:
    if mesh.is_empty:
        raise ConstructionError(operation, "boolean result is empty")
    return mesh


def union(meshes: Sequence[trimesh.Trimesh]) -> trimesh.Trimesh:
    """Boolean union of meshes."""
    if not meshes:
        raise ConstructionError("union", "nothing to combine")
    if len(meshes) == 1:
        return meshes[0].copy()
    return _check_result(_boolean("union", trimesh.boolean.union, meshes), "union")


def difference(
    base: trimesh.Trimesh, cutters: Sequence[trimesh.Trimesh]
) -> trimesh.Trimesh:
    """Subtract cutters from a base mesh."""
    if not cutters:
        return base.copy()
    return _check_result(
        _boolean("difference", trimesh.boolean.difference, [base, *cutters]),
        "difference",
    )


def intersection(meshes: Sequence[trimesh.Trimesh]) -> trimesh.Trimesh:
    """Boolean intersection of meshes."""
    if len(meshes) < 2:
        raise ConstructionError("intersection", "need at least two meshes")
    return _boolean("intersection", trimesh.boolean.intersection, meshes)
