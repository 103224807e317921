"""Command-line interface for curveforge.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Batch fitting of every curve in a point file
- Summary table with length, bounds and crossings
- JSON output with samples, ribbons and self-intersections
- Verbose/quiet output modes
"""

from curveforge.cli.app import cli, main

__all__ = ["cli", "main"]
