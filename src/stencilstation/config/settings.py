"""Configuration settings for Stencil Station."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, model_validator

from stencilstation.domain import PEN_CATALOG, PenProfile, get_pen_profile
from stencilstation.exceptions import ConfigurationError


class Generator(str, Enum):
    """Which assembly of parts to emit."""

    BASE = "base"
    GRAPHING = "graphing"
    DECORATIVE = "decorative"
    PARAMETRIC = "parametric"
    MISC = "misc"


class PlateConfig(BaseModel):
    """Physical dimensions of the plates, in millimeters.

    The window is the drawable area of a stencil insert. The insert adds
    ``margin`` on each side, and the frame and base add ``border_width`` on
    top of that for the magnets.
    """

    window_width: float = Field(
        default=100.0,
        gt=0.0,
        le=1000.0,
        description="Width of the drawable window",
    )
    window_height: float = Field(
        default=100.0,
        gt=0.0,
        le=1000.0,
        description="Height of the drawable window",
    )
    margin: float = Field(
        default=8.0,
        ge=1.0,
        le=100.0,
        description="Solid stencil margin around the window",
    )
    border_width: float = Field(
        default=12.0,
        ge=2.0,
        le=100.0,
        description="Frame border around the stencil insert (holds the magnets)",
    )
    plate_thickness: float = Field(
        default=3.0,
        gt=0.0,
        le=20.0,
        description="Thickness of stencil inserts and the top frame",
    )
    base_thickness: float = Field(
        default=4.0,
        gt=0.0,
        le=30.0,
        description="Thickness of the base plate",
    )
    magnet_diameter: float = Field(
        default=6.0,
        gt=0.0,
        le=50.0,
        description="Magnet diameter",
    )
    magnet_thickness: float = Field(
        default=2.0,
        gt=0.0,
        le=20.0,
        description="Magnet thickness",
    )
    fit_clearance: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Clearance added to sockets and the frame opening",
    )
    tab_width: float = Field(
        default=10.0,
        gt=0.0,
        le=100.0,
        description="Width of the alignment tabs",
    )
    tab_depth: float = Field(
        default=2.0,
        gt=0.0,
        le=50.0,
        description="How far alignment tabs protrude into the frame opening",
    )
    cut_tolerance: float = Field(
        default=0.01,
        gt=0.0,
        le=1.0,
        description="Outward offset making cutters pierce the faces they cut",
    )

    @property
    def stencil_width(self) -> float:
        """Outer width of a stencil insert."""
        return self.window_width + 2 * self.margin

    @property
    def stencil_height(self) -> float:
        """Outer height of a stencil insert."""
        return self.window_height + 2 * self.margin

    @property
    def frame_width(self) -> float:
        """Outer width of the top frame and base plate."""
        return self.stencil_width + 2 * self.border_width

    @property
    def frame_height(self) -> float:
        """Outer height of the top frame and base plate."""
        return self.stencil_height + 2 * self.border_width


class GraphConfig(BaseModel):
    """Graphing-calculator axis bounds mapped onto the window."""

    x_min: float = Field(default=-10.0, description="Graph x at the left window edge")
    x_max: float = Field(default=10.0, description="Graph x at the right window edge")
    y_min: float = Field(default=-10.0, description="Graph y at the bottom window edge")
    y_max: float = Field(default=10.0, description="Graph y at the top window edge")
    grid_step: float = Field(
        default=1.0,
        gt=0.0,
        description="Spacing of graph grid lines in graph units",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "GraphConfig":
        if self.x_min >= self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be less than x_max ({self.x_max})")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must be less than y_max ({self.y_max})")
        return self


class RenderConfig(BaseModel):
    """Configuration for a render pass."""

    generator: Generator = Field(
        default=Generator.GRAPHING,
        description="Assembly of parts to emit",
    )
    pen_index: int = Field(
        default=2,
        ge=0,
        le=len(PEN_CATALOG) - 1,
        description="Index into the pen catalog",
    )
    facets: int = Field(
        default=32,
        ge=8,
        le=256,
        description="Segments per full circle",
    )
    curve_steps: int = Field(
        default=60,
        ge=1,
        le=2000,
        description="Sample intervals per parametric curve",
    )
    cull_bound: float = Field(
        default=1.9,
        gt=1.0,
        le=10.0,
        description="Virtual-space bound beyond which curve samples are culled",
    )

    @property
    def pen(self) -> PenProfile:
        """The selected catalog pen."""
        return get_pen_profile(self.pen_index)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class StationSettings(BaseModel):
    """Main application settings."""

    plate: PlateConfig = Field(default_factory=PlateConfig)
    graph: GraphConfig = Field(default_factory=GraphConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _check_fit(self) -> "StationSettings":
        plate = self.plate
        pen = self.render.pen
        if pen.shaft_depth > plate.plate_thickness:
            raise ValueError(
                f"pen '{pen.name}' shaft depth {pen.shaft_depth} exceeds "
                f"plate thickness {plate.plate_thickness}"
            )
        if plate.magnet_diameter + plate.fit_clearance >= plate.border_width:
            raise ValueError(
                f"magnet diameter {plate.magnet_diameter} does not fit in "
                f"border width {plate.border_width}"
            )
        if plate.magnet_thickness + plate.fit_clearance >= plate.base_thickness:
            raise ValueError(
                f"magnet thickness {plate.magnet_thickness} does not fit in "
                f"base thickness {plate.base_thickness}"
            )
        if plate.magnet_thickness + plate.fit_clearance >= plate.plate_thickness:
            raise ValueError(
                f"magnet thickness {plate.magnet_thickness} does not fit in "
                f"frame thickness {plate.plate_thickness}"
            )
        if plate.tab_depth >= plate.margin:
            raise ValueError(
                f"tab depth {plate.tab_depth} must be less than margin {plate.margin}"
            )
        return self


def get_default_settings() -> StationSettings:
    """Get default application settings."""
    return StationSettings()


def load_settings(path: Path) -> StationSettings:
    """Load settings from a JSON file.

    Args:
        path: Path to a JSON document shaped like StationSettings

    Returns:
        Validated settings

    Raises:
        ConfigurationError: If the file is missing or fails validation
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file '{path}': {e}") from e

    try:
        return StationSettings.model_validate_json(text)
    except ValidationError as e:
        raise ConfigurationError(f"Rejected settings file '{path}': {e}") from e


def validate_settings(data: dict) -> StationSettings:
    """Validate a settings mapping, reporting failures as ConfigurationError."""
    try:
        return StationSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Rejected configuration: {e}") from e
