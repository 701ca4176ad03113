"""Command-line interface for isoliner.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for level extraction
- Verbose/quiet output modes
- Info mode for inspecting field range and levels
- Detailed error reporting
"""

from isoliner.cli.app import cli, main

__all__ = ["cli", "main"]
