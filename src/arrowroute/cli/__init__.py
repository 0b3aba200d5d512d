"""Command-line interface for arrowroute.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Scene rendering to SVG with routing overrides
- Route inspection as a table
- Verbose/quiet output modes
- Detailed error reporting
"""

from arrowroute.cli.app import cli, main

__all__ = ["cli", "main"]
