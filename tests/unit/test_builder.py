"""Unit tests for generator recipes, the build loop and plate outlines."""

import pytest
import trimesh
from shapely.geometry import box

from stencilstation.config import Generator, StationSettings
from stencilstation.core import PlateBuilder, StationBuilder
from stencilstation.core.solids import slab
from stencilstation.exceptions import ConstructionError, CurveEvaluationError


@pytest.fixture
def settings() -> StationSettings:
    return StationSettings.model_validate({"render": {"facets": 12, "curve_steps": 8}})


@pytest.fixture
def builder(settings: StationSettings) -> StationBuilder:
    return StationBuilder(settings)


class TestRecipes:
    """Tests for generator recipe selection."""

    @pytest.mark.parametrize(
        ("generator", "names"),
        [
            (Generator.BASE, ["base-plate", "top-frame", "stencil-blank"]),
            (Generator.GRAPHING, ["graph-grid", "polar-guide", "alignment-markers"]),
            (Generator.DECORATIVE, ["rose"]),
            (
                Generator.PARAMETRIC,
                [
                    "graph-sine",
                    "graph-parabola",
                    "graph-hyperbola",
                    "curve-lissajous",
                    "curve-circle",
                ],
            ),
            (Generator.MISC, ["pen-calibration", "circle-sizes"]),
        ],
    )
    def test_part_names(
        self, builder: StationBuilder, generator: Generator, names: list[str]
    ) -> None:
        assert list(builder.recipes(generator)) == names

    def test_outline_recipes(self, builder: StationBuilder) -> None:
        recipes = builder.outline_recipes({"layer-1": box(0, 0, 1, 1), "layer-2": box(1, 1, 2, 2)})
        assert list(recipes) == ["layer-1", "layer-2"]


class TestRun:
    """Tests for the build loop."""

    def test_failed_part_is_skipped(self, builder: StationBuilder) -> None:
        def good() -> tuple[trimesh.Trimesh, int]:
            return slab(1.0, 1.0, 1.0), 2

        def bad() -> tuple[trimesh.Trimesh, int]:
            raise ConstructionError("bad", "nothing to cut")

        def bad_curve() -> tuple[trimesh.Trimesh, int]:
            raise CurveEvaluationError("nan", 8)

        progress: list[tuple[int, int]] = []
        parts = builder.run(
            {"good": good, "bad": bad, "also-bad": bad_curve},
            progress_callback=lambda done, total: progress.append((done, total)),
        )

        assert list(parts) == ["good"]
        assert progress == [(1, 3), (2, 3), (3, 3)]
        stats = builder.stats
        assert stats.parts_built == 1
        assert stats.cutters_placed == 2
        assert stats.error_count == 2
        assert [name for name, _ in stats.errors] == ["bad", "also-bad"]
        assert stats.duration_seconds >= 0.0

    def test_other_errors_propagate(self, builder: StationBuilder) -> None:
        def broken() -> tuple[trimesh.Trimesh, int]:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            builder.run({"broken": broken})

    def test_skipped_samples_are_counted(self, builder: StationBuilder) -> None:
        def curve_part() -> tuple[trimesh.Trimesh, int]:
            cutters = builder.stencils.graph_demo("hyperbola")
            return slab(1.0, 1.0, 1.0), len(cutters)

        builder.run({"hyperbola": curve_part})
        assert builder.stats.samples_skipped == 1


class TestPlateOutlines:
    """Tests for the 2D plate outlines."""

    @pytest.fixture
    def plates(self, settings: StationSettings) -> PlateBuilder:
        return PlateBuilder(settings)

    def test_stencil_outline_has_notches(self, plates: PlateBuilder) -> None:
        outline = plates.stencil_outline()
        p = plates.plate
        notch_area = (p.tab_width + 2 * p.fit_clearance) * (p.tab_depth + p.fit_clearance)
        assert outline.bounds == pytest.approx((-58.0, -58.0, 58.0, 58.0))
        assert outline.area == pytest.approx(116.0 * 116.0 - 4 * notch_area)

    def test_frame_outline(self, plates: PlateBuilder) -> None:
        outline = plates.frame_outline()
        p = plates.plate
        opening = 2 * (58.0 + p.fit_clearance)
        ring = 140.0 * 140.0 - opening * opening
        assert outline.bounds == pytest.approx((-70.0, -70.0, 70.0, 70.0))
        assert outline.area == pytest.approx(ring + 4 * p.tab_width * p.tab_depth)
        assert len(outline.interiors) == 1

    def test_tabs_fit_notches(self, plates: PlateBuilder) -> None:
        """Tabs sit inside the notches with clearance on every side."""
        p = plates.plate
        tabs = plates.frame_outline().intersection(
            plates.stencil_outline().envelope.buffer(-0.001, join_style="mitre")
        )
        assert tabs.intersection(plates.stencil_outline()).area == pytest.approx(0.0, abs=1e-6)
        assert tabs.area == pytest.approx(4 * p.tab_width * (p.tab_depth - p.fit_clearance), rel=1e-3)

    def test_magnet_sockets(self, plates: PlateBuilder) -> None:
        sockets = plates.magnet_sockets(z=1.0)
        assert len(sockets) == 4
        for mesh in sockets:
            assert mesh.bounds[0][2] == pytest.approx(1.0)
            centre_x = (mesh.bounds[0][0] + mesh.bounds[1][0]) / 2
            assert abs(centre_x) == pytest.approx(64.0)
