# src/gno_converter/loader/reconstruct.py

"""
Reconstruct multi-line GEDCOM values from CONC / CONT records.

``merge_continuations`` takes a flat list of Tokens (as produced by
``tokenize_text``) and folds every CONC/CONT line into the value of the
nearest preceding non-continuation token.

- CONC -> concatenates directly (no separator)
- CONT -> concatenates with a newline between lines

The function is pure: it returns a new list and does not touch the input
tokens.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List

from .tokenizer import Token

CONTINUATION_TAGS = ("CONC", "CONT")


def merge_continuations(tokens: Iterable[Token]) -> List[Token]:
    """
    Example:
        1 TITL Parish registers of
        2 CONC  St Mary
        2 CONT 1701-1750

    becomes:
        1 TITL "Parish registers of St Mary\\n1701-1750"
    """
    out: List[Token] = []

    for tok in tokens:
        if tok.tag in CONTINUATION_TAGS and out:
            base = out[-1]
            if tok.tag == "CONC":
                merged = base.value + tok.value
            elif base.value:
                merged = base.value + "\n" + tok.value
            else:
                merged = tok.value
            out[-1] = replace(base, value=merged)
        elif tok.tag in CONTINUATION_TAGS:
            # Orphan continuation with nothing before it; nothing to attach to.
            continue
        else:
            out.append(tok)

    return out
