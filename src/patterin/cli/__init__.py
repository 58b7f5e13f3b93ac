"""Command-line interface for patterin.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- union, difference and offset over JSON shape documents
- Shape inspection (winding, area, bounds, violations)
- Progress bars for parallel offsetting
- Detailed error reporting
"""

from patterin.cli.app import cli, main

__all__ = ["cli", "main"]
