"""Command-line interface for conscript.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Text layout preview as a tree or JSON
- Glyph listing per project
- Direction and spacing configuration
"""

from conscript.cli.app import cli, main

__all__ = ["cli", "main"]
