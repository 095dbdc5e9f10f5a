# src/gno_converter/loader/__init__.py

"""
Public interface for the GEDCOM line loader.

    from gno_converter.loader import (
        Token,
        GedcomSyntaxError,
        tokenize_line,
        tokenize_text,
        merge_continuations,
    )
"""

from __future__ import annotations

from .tokenizer import GedcomSyntaxError, Token, normalize_newlines, tokenize_line, tokenize_text
from .reconstruct import merge_continuations

__all__ = [
    "Token",
    "GedcomSyntaxError",
    "normalize_newlines",
    "tokenize_line",
    "tokenize_text",
    "merge_continuations",
]
