"""
GEDCOM 5.5.1 <-> GNO XML conversion.

    from gno_converter import ged_to_gno, gno_to_ged

    payload = ged_to_gno(ged_text, dialect="gramps", gzip=True)
    ged_text = gno_to_ged(payload, tree_name="smith")
"""

from gno_converter.core.exceptions import (
    ConversionError,
    FormatValidationError,
    TransportError,
    UnsupportedOptionError,
)
from gno_converter.core.pipeline import ged_to_gno, gno_to_ged
from gno_converter.gedcom import parse_gedcom, render_gedcom
from gno_converter.gno import Dialect, parse_gno, render_gno

__version__ = "0.3.0"

__all__ = [
    "ConversionError",
    "Dialect",
    "FormatValidationError",
    "TransportError",
    "UnsupportedOptionError",
    "ged_to_gno",
    "gno_to_ged",
    "parse_gedcom",
    "parse_gno",
    "render_gedcom",
    "render_gno",
]
