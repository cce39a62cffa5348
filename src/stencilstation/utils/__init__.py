"""Utility functions for stencilstation.

This module provides:

- Logging setup and configuration
- Build statistics tracking
"""

from stencilstation.utils.logging import (
    BuildLogger,
    BuildStats,
    configure_logging,
)

__all__ = [
    "BuildLogger",
    "BuildStats",
    "configure_logging",
]
