"""Configuration management for stencilstation.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments, a JSON file, or defaults.
All values are read once at the start of a render.

Key classes:
- PlateConfig: Physical plate, magnet and tab dimensions
- GraphConfig: Graphing-calculator axis bounds
- RenderConfig: Generator selection, pen, resolution and curve sampling
- LoggingConfig: Logging settings
- StationSettings: Main application settings
"""

from stencilstation.config.settings import (
    GraphConfig,
    Generator,
    LoggingConfig,
    PlateConfig,
    RenderConfig,
    StationSettings,
    get_default_settings,
    load_settings,
    validate_settings,
)

__all__ = [
    "Generator",
    "GraphConfig",
    "LoggingConfig",
    "PlateConfig",
    "RenderConfig",
    "StationSettings",
    "get_default_settings",
    "load_settings",
    "validate_settings",
]
