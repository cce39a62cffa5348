"""Generator selection and part assembly.

StationBuilder maps each generator choice to an ordered set of named part
recipes, builds them in a single pass and records statistics. A part whose
geometry cannot be constructed is logged and left out; the remaining parts
are still built.
"""

import time
import traceback
from collections.abc import Callable

import structlog
import trimesh
from shapely.geometry import MultiPolygon, Polygon

from stencilstation.config import Generator, StationSettings
from stencilstation.core.plates import PlateBuilder
from stencilstation.core.stencils import CURVE_DEMOS, GRAPH_DEMOS, StencilBuilder
from stencilstation.exceptions import GeometryError
from stencilstation.utils import BuildLogger, BuildStats

# A recipe builds one part and reports how many cutters it used
Recipe = Callable[[], tuple[trimesh.Trimesh, int]]
ProgressCallback = Callable[[int, int], None]


class StationBuilder:
    """Builds the parts selected by a generator.

    Example:
        builder = StationBuilder(settings)
        parts = builder.build(Generator.BASE)
        parts["base-plate"].export("base-plate.stl")
    """

    def __init__(
        self,
        settings: StationSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            settings: Validated station settings
            logger: Structured logger (default: the stencilstation logger)
        """
        self.settings = settings
        self.logger = logger or structlog.get_logger("stencilstation")
        self.build_logger = BuildLogger(self.logger)
        self.plates = PlateBuilder(settings)
        self.stencils = StencilBuilder(settings)

    @property
    def stats(self) -> BuildStats:
        return self.build_logger.stats

    def _plate(self, make: Callable[[], trimesh.Trimesh], cutters: int = 0) -> Recipe:
        return lambda: (make(), cutters)

    def _stencil(self, make_cutters: Callable[[], list[trimesh.Trimesh]]) -> Recipe:
        def recipe() -> tuple[trimesh.Trimesh, int]:
            cutters = make_cutters()
            return self.stencils.cut(cutters), len(cutters)

        return recipe

    def recipes(self, generator: Generator) -> dict[str, Recipe]:
        """Named part recipes for a generator, in output order."""
        s = self.stencils
        if generator is Generator.BASE:
            return {
                "base-plate": self._plate(self.plates.base_plate, cutters=4),
                "top-frame": self._plate(self.plates.top_frame, cutters=4),
                "stencil-blank": self._plate(self.plates.stencil_blank),
            }
        if generator is Generator.GRAPHING:
            return {
                "graph-grid": self._stencil(s.graph_grid),
                "polar-guide": self._stencil(s.polar_guide),
                "alignment-markers": self._stencil(s.alignment_markers),
            }
        if generator is Generator.DECORATIVE:
            return {"rose": self._stencil(s.rose)}
        if generator is Generator.PARAMETRIC:
            recipes = {
                f"graph-{name}": self._stencil(lambda name=name: s.graph_demo(name))
                for name in GRAPH_DEMOS
            }
            recipes.update(
                {
                    f"curve-{name}": self._stencil(lambda name=name: s.curve_demo(name))
                    for name in CURVE_DEMOS
                }
            )
            return recipes
        if generator is Generator.MISC:
            return {
                "pen-calibration": self._stencil(s.pen_calibration),
                "circle-sizes": self._stencil(s.circle_sizes),
            }
        raise ValueError(f"Unknown generator: {generator}")

    def outline_recipes(self, outlines: dict[str, Polygon | MultiPolygon]) -> dict[str, Recipe]:
        """Recipes cutting one stencil per scene-space outline."""
        return {
            name: self._stencil(lambda geometry=geometry: self.stencils.outline(geometry))
            for name, geometry in outlines.items()
        }

    def run(
        self,
        recipes: dict[str, Recipe],
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, trimesh.Trimesh]:
        """Build every recipe, collecting the parts that succeed.

        Args:
            recipes: Named part recipes
            progress_callback: Called with (completed, total) after each part

        Returns:
            Built parts keyed by name, in recipe order
        """
        stats = self.stats
        stats.start_time = time.time()
        parts: dict[str, trimesh.Trimesh] = {}

        for completed, (name, recipe) in enumerate(recipes.items(), start=1):
            self.build_logger.log_part_start(name)
            skipped_before = self.stencils.skipped_samples
            start = time.time()
            try:
                mesh, cutters = recipe()
            except GeometryError as e:
                self.build_logger.log_part_error(name, e, traceback.format_exc())
            else:
                parts[name] = mesh
                self.build_logger.log_part_complete(
                    name, cutters, (time.time() - start) * 1000
                )
            self.build_logger.log_samples_skipped(
                name, self.stencils.skipped_samples - skipped_before
            )
            if progress_callback:
                progress_callback(completed, len(recipes))

        stats.end_time = time.time()
        return parts

    def build(
        self,
        generator: Generator | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> dict[str, trimesh.Trimesh]:
        """Build the parts of a generator (default: the configured one)."""
        generator = generator or self.settings.render.generator
        self.logger.info("Build started", generator=generator.value)
        return self.run(self.recipes(generator), progress_callback)
