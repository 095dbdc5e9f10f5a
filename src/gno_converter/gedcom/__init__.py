"""
GEDCOM adapters: text <-> canonical model.
"""

from gno_converter.gedcom.reader import GedcomReader, parse_gedcom
from gno_converter.gedcom.writer import GedcomWriter, render_gedcom

__all__ = [
    "GedcomReader",
    "GedcomWriter",
    "parse_gedcom",
    "render_gedcom",
]
