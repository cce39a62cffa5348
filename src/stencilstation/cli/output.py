"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from stencilstation.domain import PenProfile

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for part construction.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]Stencil Station[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_station_info(
    generator: str, window: tuple[float, float], thickness: float, pen: PenProfile
) -> None:
    """Print the configuration a build will use.

    Args:
        generator: Selected generator name
        window: Window (width, height) in mm
        thickness: Plate thickness in mm
        pen: Selected pen profile
    """
    console.print(f"  Generator {generator} {SYM_DOT} window {window[0]:g} x {window[1]:g} mm")
    console.print(f"  Plate {thickness:g} mm {SYM_DOT} pen {pen.name}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_success(
    paths: list[Path],
    total_time_s: float,
    cutters: int,
    skipped_samples: int,
    errors: int,
) -> None:
    """Print success message with summary.

    Args:
        paths: Files written
        total_time_s: Total build time in seconds
        cutters: Total cutters placed
        skipped_samples: Curve samples culled or failed
        errors: Number of parts that failed
    """
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")

    for path in paths:
        line = Text("  ")
        line.append(str(path), style="bold")
        console.print(line)

    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {len(paths)} parts {SYM_DOT} {cutters} cutters {SYM_DOT} "
        f"{skipped_samples} samples skipped {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )


def print_pen_table(pens: list[tuple[int, PenProfile, float | None]], thickness: float) -> None:
    """Print the pen catalog.

    Args:
        pens: (index, profile, bevel height or None if the pen does not fit)
        thickness: Plate thickness the bevel heights were computed for
    """
    table = Table(title=f"Pen catalog ({thickness:g} mm plate)")
    table.add_column("#", justify="right")
    table.add_column("Pen")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Angle", justify="right")
    table.add_column("Shaft", justify="right")
    table.add_column("Bevel", justify="right")
    for index, pen, bevel in pens:
        table.add_row(
            str(index),
            pen.name,
            f"{pen.min_width:g}",
            f"{pen.max_width:g}",
            f"{pen.bevel_angle:g}°",
            f"{pen.shaft_depth:g}",
            f"{bevel:.2f}" if bevel is not None else f"[red]{SYM_ERR} too deep[/red]",
        )
    console.print(table)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
