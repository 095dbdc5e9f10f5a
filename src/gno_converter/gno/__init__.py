"""
GNO adapters: XML text <-> canonical model, across several vendor dialects.
"""

from gno_converter.gno.dialects import RENDERERS, renderer_for
from gno_converter.gno.reader import GnoReader, parse_gno
from gno_converter.gno.renderer import Dialect, GnoRenderer
from gno_converter.gno.writer import render_gno

__all__ = [
    "Dialect",
    "GnoReader",
    "GnoRenderer",
    "RENDERERS",
    "parse_gno",
    "render_gno",
    "renderer_for",
]
