"""
CLI package for gno_converter.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from gno_converter.cli.app import app, main

__all__ = [
    "app",
    "main",
]
