"""Unit tests for mesh primitives, transforms and mirror combinators."""

import math

import numpy as np
import pytest
import trimesh
from shapely.geometry import Polygon, box

from stencilstation.core.solids import (
    cylinder,
    difference,
    extrude,
    intersection,
    mirror_copy,
    mirror_quadrants,
    reflected,
    revolve,
    rotated,
    slab,
    sweep_straight,
    translated,
    union,
)
from stencilstation.exceptions import ConstructionError


def centre(mesh: trimesh.Trimesh) -> tuple[float, float]:
    """XY centre of a mesh's bounding box, rounded for set comparisons."""
    lo, hi = mesh.bounds
    return (round((lo[0] + hi[0]) / 2, 6), round((lo[1] + hi[1]) / 2, 6))


class TestPrimitives:
    """Tests for extrusion and primitive solids."""

    def test_extrude_bounds_and_volume(self) -> None:
        mesh = extrude(box(0.0, 0.0, 2.0, 1.0), 3.0)
        assert np.allclose(mesh.bounds, [[0, 0, 0], [2, 1, 3]])
        assert mesh.volume == pytest.approx(6.0)

    def test_extrude_offset(self) -> None:
        mesh = extrude(box(0.0, 0.0, 1.0, 1.0), 3.0, z=1.0)
        assert mesh.bounds[0][2] == pytest.approx(1.0)
        assert mesh.bounds[1][2] == pytest.approx(4.0)

    def test_extrude_empty_rejected(self) -> None:
        with pytest.raises(ConstructionError):
            extrude(Polygon(), 1.0)

    def test_slab(self) -> None:
        mesh = slab(10.0, 20.0, 3.0, z=1.0, center=(5.0, 5.0))
        assert np.allclose(mesh.bounds, [[0, -5, 1], [10, 15, 4]])

    def test_cylinder(self) -> None:
        mesh = cylinder(2.0, 5.0, center=(1.0, -1.0), z=0.5, sections=64)
        assert mesh.bounds[0][2] == pytest.approx(0.5)
        assert mesh.bounds[1][2] == pytest.approx(5.5)
        assert mesh.bounds[1][0] == pytest.approx(3.0, abs=1e-6)
        assert mesh.volume == pytest.approx(math.pi * 4 * 5, rel=0.01)


class TestRevolve:
    """Tests for revolve."""

    def test_rectangle_revolves_to_cylinder(self) -> None:
        profile = Polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 2.0), (0.0, 2.0)])
        mesh = revolve(profile, sections=64)
        assert mesh.volume == pytest.approx(2 * math.pi, rel=0.02)
        assert mesh.bounds[0][2] == pytest.approx(0.0)
        assert mesh.bounds[1][2] == pytest.approx(2.0)

    def test_revolve_at_center(self) -> None:
        profile = Polygon([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])
        mesh = revolve(profile, sections=32, center=(10.0, -4.0))
        assert centre(mesh) == pytest.approx((10.0, -4.0), abs=1e-6)

    def test_ring_profile(self) -> None:
        """A profile away from the axis revolves into a ring."""
        profile = box(4.0, 0.0, 5.0, 1.0)
        mesh = revolve(profile, sections=64)
        expected = math.pi * (5.0**2 - 4.0**2)
        assert mesh.volume == pytest.approx(expected, rel=0.02)

    def test_profile_across_axis_rejected(self) -> None:
        with pytest.raises(ConstructionError, match="axis"):
            revolve(box(-1.0, 0.0, 1.0, 1.0))


class TestSweepStraight:
    """Tests for sweep_straight placement."""

    @pytest.fixture
    def section(self) -> Polygon:
        """1 mm wide, 2 mm tall cross section centred on the path."""
        return box(-0.5, 0.0, 0.5, 2.0)

    def test_along_x(self, section: Polygon) -> None:
        mesh = sweep_straight(section, (0.0, 0.0), 10.0, 0.0)
        assert np.allclose(mesh.bounds, [[0, -0.5, 0], [10, 0.5, 2]], atol=1e-9)
        assert mesh.volume == pytest.approx(20.0)

    def test_along_y_from_offset_start(self, section: Polygon) -> None:
        mesh = sweep_straight(section, (1.0, 2.0), 10.0, 90.0)
        assert np.allclose(mesh.bounds, [[0.5, 2, 0], [1.5, 12, 2]], atol=1e-9)
        assert mesh.volume == pytest.approx(20.0)

    def test_diagonal_extent(self, section: Polygon) -> None:
        mesh = sweep_straight(section, (0.0, 0.0), math.sqrt(2) * 10, 45.0)
        lo, hi = mesh.bounds
        assert hi[0] == pytest.approx(10.0 + 0.5 / math.sqrt(2))
        assert hi[1] == pytest.approx(10.0 + 0.5 / math.sqrt(2))

    def test_zero_length_rejected(self, section: Polygon) -> None:
        with pytest.raises(ConstructionError):
            sweep_straight(section, (0.0, 0.0), 0.0, 0.0)


class TestTransforms:
    """Tests for transforms and mirror combinators."""

    @pytest.fixture
    def block(self) -> trimesh.Trimesh:
        return slab(2.0, 2.0, 1.0, center=(5.0, 3.0))

    def test_translated_is_copy(self, block: trimesh.Trimesh) -> None:
        moved = translated(block, 1.0, 1.0, 1.0)
        assert centre(moved) == (6.0, 4.0)
        assert centre(block) == (5.0, 3.0)

    def test_rotated(self, block: trimesh.Trimesh) -> None:
        assert centre(rotated(block, 90.0)) == pytest.approx((-3.0, 5.0), abs=1e-6)

    def test_reflected_keeps_positive_volume(self, block: trimesh.Trimesh) -> None:
        mirrored = reflected(block, "x")
        assert centre(mirrored) == (-5.0, 3.0)
        assert mirrored.volume == pytest.approx(block.volume)

    def test_reflected_unknown_axis(self, block: trimesh.Trimesh) -> None:
        with pytest.raises(ValueError):
            reflected(block, "z")

    def test_mirror_copy(self, block: trimesh.Trimesh) -> None:
        build = mirror_copy(lambda: [block], "y")
        shapes = build()
        assert [centre(s) for s in shapes] == [(5.0, 3.0), (5.0, -3.0)]

    def test_mirror_copy_passes_arguments(self) -> None:
        build = mirror_copy(lambda x: [slab(1.0, 1.0, 1.0, center=(x, 0.0))], "x")
        assert sorted(centre(s)[0] for s in build(7.0)) == [-7.0, 7.0]

    def test_mirror_quadrants(self, block: trimesh.Trimesh) -> None:
        shapes = mirror_quadrants(lambda: [block])()
        assert len(shapes) == 4
        assert {centre(s) for s in shapes} == {(5.0, 3.0), (-5.0, 3.0), (5.0, -3.0), (-5.0, -3.0)}


class TestBooleanGuards:
    """Tests for boolean wrappers that do not reach the engine."""

    def test_union_single_is_copy(self) -> None:
        mesh = slab(1.0, 1.0, 1.0)
        result = union([mesh])
        assert result is not mesh
        assert result.volume == pytest.approx(1.0)

    def test_union_empty_rejected(self) -> None:
        with pytest.raises(ConstructionError):
            union([])

    def test_difference_without_cutters(self) -> None:
        mesh = slab(1.0, 2.0, 1.0)
        assert difference(mesh, []).volume == pytest.approx(2.0)

    def test_intersection_needs_two(self) -> None:
        with pytest.raises(ConstructionError):
            intersection([slab(1.0, 1.0, 1.0)])


def open_box() -> trimesh.Trimesh:
    """Unit cube with two faces removed."""
    cube = trimesh.creation.box(extents=(1.0, 1.0, 1.0))
    return trimesh.Trimesh(vertices=cube.vertices, faces=cube.faces[:-2], process=False)


class TestOpenMeshes:
    """Tests for meshes that do not enclose a volume."""

    def test_open_extrusion_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(trimesh.creation, "extrude_polygon", lambda polygon, height: open_box())
        with pytest.raises(ConstructionError, match="not a closed volume"):
            extrude(box(0.0, 0.0, 1.0, 1.0), 1.0)

    def test_open_cutter_is_a_construction_error(self) -> None:
        pytest.importorskip("manifold3d")
        with pytest.raises(ConstructionError) as exc_info:
            difference(slab(4.0, 4.0, 1.0), [open_box()])
        assert exc_info.value.part == "difference"
