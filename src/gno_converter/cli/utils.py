from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape

from gno_converter.gedcom import parse_gedcom
from gno_converter.gno import parse_gno
from gno_converter.logging import set_debug
from gno_converter.model import GenealogyModel
from gno_converter.transport import decompress_to_text, is_gzip, is_zip, is_zlib, read_gno_xml

# Diagnostics go to stderr so GEDCOM written to stdout stays clean.
console = Console(stderr=True)


def enable_verbose(verbose: bool) -> None:
    if verbose:
        set_debug(True)


def sniff_format(data: bytes) -> str:
    """
    "gno" for a compressed container or XML text, otherwise "gedcom".
    """
    if is_gzip(data) or is_zlib(data) or is_zip(data):
        return "gno"
    if data.lstrip(b"\xef\xbb\xbf \t\r\n").startswith(b"<"):
        return "gno"
    return "gedcom"


def load_model(path: Path, *, verbose: bool = False) -> Tuple[str, GenealogyModel]:
    """
    Read a GEDCOM or GNO file into the canonical model.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()
    data = path.read_bytes()
    kind = sniff_format(data)

    if kind == "gno":
        model = parse_gno(read_gno_xml(data))
    else:
        model = parse_gedcom(decompress_to_text(data))

    if verbose:
        console.log(f"Loaded {kind} file in {time.perf_counter() - t0:.2f}s")

    return kind, model


def write_bytes(payload: bytes, out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(payload)


def write_text(payload: str, out: Optional[Path]) -> None:
    """Write text to a file, or to stdout when ``out`` is None."""
    if out:
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(payload, encoding="utf-8")
    else:
        sys.stdout.write(payload)


def report_failure(exc: Exception) -> None:
    console.print(f"[bold red]Conversion failed:[/bold red] {escape(str(exc))}")
