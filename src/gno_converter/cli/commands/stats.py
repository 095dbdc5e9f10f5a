from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from gno_converter.cli.utils import enable_verbose, load_model, report_failure
from gno_converter.core.exceptions import ConversionError

console = Console()


def stats_command(
    path: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Show summary statistics for a GEDCOM or GNO file.
    """
    enable_verbose(verbose)

    try:
        kind, model = load_model(path, verbose=verbose)
    except ConversionError as exc:
        report_failure(exc)
        raise typer.Exit(code=1)

    counts = model.counts()

    table = Table(title=f"{'GNO' if kind == 'gno' else 'GEDCOM'} Statistics")
    table.add_column("Entity", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Persons", str(counts["persons"]))
    table.add_row("Families", str(counts["families"]))
    table.add_row("Places", str(counts["places"]))
    table.add_row("Sources", str(counts["sources"]))

    console.print(table)
