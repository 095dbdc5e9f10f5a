"""
CLI command modules for gno_converter.

Each command module defines Typer-compatible command functions.
"""

from gno_converter.cli.commands.convert import ged_to_gno_command, gno_to_ged_command
from gno_converter.cli.commands.stats import stats_command

__all__ = [
    "ged_to_gno_command",
    "gno_to_ged_command",
    "stats_command",
]
