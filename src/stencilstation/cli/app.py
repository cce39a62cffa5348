"""CLI application entry point for stencilstation.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated, Any

import typer

from stencilstation import __version__
from stencilstation.cli.output import (
    console,
    create_progress,
    print_error,
    print_header,
    print_pen_table,
    print_station_info,
    print_step,
    print_success,
)
from stencilstation.config import (
    Generator,
    StationSettings,
    get_default_settings,
    load_settings,
    validate_settings,
)
from stencilstation.core import CoordinateMapper, StationBuilder, bevel_height
from stencilstation.core.builder import Recipe
from stencilstation.domain import PEN_CATALOG, Point
from stencilstation.exceptions import PenProfileError, StencilStationError
from stencilstation.io import MeshWriter, fit_outline, read_svg_outlines
from stencilstation.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="stencilstation",
    help="Generate 3D-printable stencil station plates, frames and stencil inserts.",
    add_completion=False,
    no_args_is_help=True,
)

SPACES = ("graph", "virtual", "scene")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Stencil Station[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Stencil Station command group."""


def _resolve_settings(config: Path | None, overrides: dict[str, dict[str, Any]]) -> StationSettings:
    """Merge CLI overrides over the config file (or defaults) and validate."""
    base = load_settings(config) if config else get_default_settings()
    data = base.model_dump()
    for section, values in overrides.items():
        data[section].update({k: v for k, v in values.items() if v is not None})
    return validate_settings(data)


def _build_and_write(
    recipes_for: str,
    builder: StationBuilder,
    recipes: dict[str, Recipe],
    output_dir: Path,
    prefix: str,
    quiet: bool,
) -> None:
    if not quiet:
        print_step(f"Building {len(recipes)} parts")
        with create_progress() as progress:
            task_id = progress.add_task(recipes_for, total=len(recipes))

            def update_progress(completed: int, *_: object) -> None:
                progress.update(task_id, completed=completed)

            parts = builder.run(recipes, progress_callback=update_progress)
    else:
        parts = builder.run(recipes)

    paths = MeshWriter(output_dir).write(parts, prefix=prefix)
    stats = builder.stats

    if not quiet:
        for part, error in stats.errors:
            print_error(f"Part '{part}' failed", details=error)
        print_success(
            paths=paths,
            total_time_s=stats.duration_seconds,
            cutters=stats.cutters_placed,
            skipped_samples=stats.samples_skipped,
            errors=stats.error_count,
        )

    if stats.error_count and not parts:
        raise typer.Exit(code=1)


@app.command()
def build(
    generator: Annotated[
        Generator | None,
        typer.Option(
            "--generator",
            "-g",
            help="Assembly to emit [default: from config, else graphing]",
            case_sensitive=False,
            show_default=False,
        ),
    ] = None,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the STL files"),
    ] = Path("."),
    prefix: Annotated[
        str,
        typer.Option("--prefix", help="File name prefix"),
    ] = "station",
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="JSON settings file"),
    ] = None,
    window_width: Annotated[
        float | None,
        typer.Option("--window-width", help="Drawable window width in mm"),
    ] = None,
    window_height: Annotated[
        float | None,
        typer.Option("--window-height", help="Drawable window height in mm"),
    ] = None,
    plate_thickness: Annotated[
        float | None,
        typer.Option("--plate-thickness", help="Stencil and frame thickness in mm"),
    ] = None,
    pen: Annotated[
        int | None,
        typer.Option("--pen", "-p", help="Pen catalog index (see 'pens')"),
    ] = None,
    steps: Annotated[
        int | None,
        typer.Option("--steps", "-s", help="Sample intervals per parametric curve"),
    ] = None,
    facets: Annotated[
        int | None,
        typer.Option("--facets", help="Segments per full circle"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Build the parts of one generator and write them as STL files.

    Example:
        stencilstation build --generator base -o parts/
    """
    try:
        settings = _resolve_settings(
            config,
            {
                "plate": {
                    "window_width": window_width,
                    "window_height": window_height,
                    "plate_thickness": plate_thickness,
                },
                "render": {
                    "generator": generator,
                    "pen_index": pen,
                    "curve_steps": steps,
                    "facets": facets,
                },
                "logging": {"log_file": log_file, "log_level": log_level},
            },
        )
        selected = settings.render.generator

        if not quiet:
            print_header(__version__)
            print_station_info(
                generator=selected.value,
                window=(settings.plate.window_width, settings.plate.window_height),
                thickness=settings.plate.plate_thickness,
                pen=settings.render.pen,
            )

        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        builder = StationBuilder(settings, logger=logger)
        _build_and_write(
            selected.value,
            builder,
            builder.recipes(selected),
            output_dir,
            prefix,
            quiet,
        )
    except StencilStationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def svg(
    svg_files: Annotated[
        list[Path],
        typer.Argument(help="SVG files, one stencil per file", show_default=False),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the STL files"),
    ] = Path("."),
    prefix: Annotated[
        str,
        typer.Option("--prefix", help="File name prefix"),
    ] = "svg",
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="JSON settings file"),
    ] = None,
    fill: Annotated[
        float,
        typer.Option("--fill", help="Fraction of the window the outline may fill", min=0.1, max=1.0),
    ] = 0.9,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Cut one stencil insert per SVG file (multi-part stencils).

    Every file is scaled into the same window so the layers stay registered.
    """
    try:
        settings = _resolve_settings(config, {"logging": {"log_file": log_file}})
        plate = settings.plate

        if not quiet:
            print_header(__version__)
            print_step(f"Importing {len(svg_files)} SVG files")

        outlines = {
            path.stem: fit_outline(
                read_svg_outlines(path), plate.window_width, plate.window_height, fill
            )
            for path in svg_files
        }

        logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            quiet=quiet,
        )
        builder = StationBuilder(settings, logger=logger)
        _build_and_write(
            "svg",
            builder,
            builder.outline_recipes(outlines),
            output_dir,
            prefix,
            quiet,
        )
    except StencilStationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def pens(
    plate_thickness: Annotated[
        float,
        typer.Option("--plate-thickness", help="Plate thickness in mm", min=0.1),
    ] = 3.0,
) -> None:
    """List the pen catalog with bevel heights for a plate thickness."""
    rows = []
    for index, pen in enumerate(PEN_CATALOG):
        try:
            bevel = bevel_height(pen, plate_thickness)
        except PenProfileError:
            bevel = None
        rows.append((index, pen, bevel))
    print_pen_table(rows, plate_thickness)


@app.command(name="map")
def map_point(
    x: Annotated[float, typer.Argument(help="X coordinate")],
    y: Annotated[float, typer.Argument(help="Y coordinate")],
    source: Annotated[
        str,
        typer.Option("--from", "-f", help="Source space (graph|virtual|scene)"),
    ] = "graph",
    target: Annotated[
        str,
        typer.Option("--to", "-t", help="Target space (graph|virtual|scene)"),
    ] = "scene",
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="JSON settings file"),
    ] = None,
) -> None:
    """Convert a point between graph, virtual and scene coordinates.

    Use -- before negative coordinates, e.g. 'map -- -3 2'.
    """
    source, target = source.lower(), target.lower()
    if source not in SPACES or target not in SPACES:
        print_error(
            f"Invalid space: {source} -> {target}",
            details=f"Valid values: {', '.join(SPACES)}",
        )
        raise typer.Exit(code=1)

    try:
        settings = load_settings(config) if config else get_default_settings()
        mapper = CoordinateMapper.from_settings(settings)
        result = mapper.convert(Point(x, y), source, target)
    except StencilStationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    console.print(f"{result.x:.6g} {result.y:.6g}")


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
