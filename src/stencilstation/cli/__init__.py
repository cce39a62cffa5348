"""Command-line interface for stencilstation.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for part construction
- One command per workflow (build, svg, pens, map)
- Detailed error reporting
"""

from stencilstation.cli.app import app, cli, main

__all__ = ["app", "cli", "main"]
