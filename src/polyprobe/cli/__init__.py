"""Command-line interface for polyprobe.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Path classification reports (table, text, JSON, CSV)
- Zone simplification with preview and progress bar
- One-off snapping and straightening of points
- Verbose/quiet output modes
"""

from polyprobe.cli.app import cli, main

__all__ = ["cli", "main"]
