from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from gno_converter.cli.utils import console, enable_verbose, report_failure, write_bytes, write_text
from gno_converter.core.exceptions import ConversionError
from gno_converter.core.pipeline import ged_to_gno, gno_to_ged


def ged_to_gno_command(
    gedcom: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Path = typer.Option(
        ...,
        "--out",
        "-o",
        help="Destination .gno file",
    ),
    dialect: Optional[str] = typer.Option(
        None,
        "--dialect",
        "-d",
        help="genopro | generic | gramps | legacy | myheritage (default from config)",
    ),
    gzip: bool = typer.Option(
        False,
        "--gzip",
        help="gzip-compress the output",
    ),
    zip: bool = typer.Option(
        False,
        "--zip",
        help="zip-compress the output (not supported yet)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Convert a GEDCOM file to GNO XML.
    """
    enable_verbose(verbose)

    try:
        ged_text = gedcom.read_text(encoding="utf-8-sig")
        payload = ged_to_gno(ged_text, dialect=dialect, gzip=gzip, zip=zip)
    except (ConversionError, UnicodeDecodeError) as exc:
        report_failure(exc)
        raise typer.Exit(code=1)

    write_bytes(payload, out)

    if verbose:
        console.log(f"Wrote {len(payload)} bytes to {out}")


def gno_to_ged_command(
    gno: Path = typer.Argument(..., exists=True, readable=True, dir_okay=False),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write GEDCOM to file instead of stdout",
    ),
    tree_name: Optional[str] = typer.Option(
        None,
        "--tree-name",
        "-t",
        help="Tree name for the HEAD block (defaults to the input file stem)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
):
    """
    Convert a GNO file (raw, gzip, zlib or zip) to GEDCOM.
    """
    enable_verbose(verbose)

    try:
        ged_text = gno_to_ged(gno, tree_name=tree_name or gno.stem)
    except ConversionError as exc:
        report_failure(exc)
        raise typer.Exit(code=1)

    write_text(ged_text, out)

    if verbose and out:
        console.log(f"Wrote GEDCOM to {out}")
