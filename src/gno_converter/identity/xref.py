# src/gno_converter/identity/xref.py
from __future__ import annotations

import re
from typing import Optional

_POINTER = re.compile(r"^@([^@\s]+)@$")
_XREF_UNSAFE = re.compile(r"[\s@]+")


# -----------------------------
# GEDCOM pointer helpers
# -----------------------------

def strip_pointer(pointer: Optional[str]) -> Optional[str]:
    """
    Turn a GEDCOM cross-reference token into a bare record id:

        "@I1@"   -> "I1"
        " @F2@ " -> "F2"
        "I1"     -> None   (not a pointer)
    """
    if pointer is None:
        return None
    match = _POINTER.match(pointer.strip())
    if match is None:
        return None
    return match.group(1)


def format_pointer(record_id: str) -> str:
    """
    Wrap a bare record id in @...@ for GEDCOM output.

    Whitespace and inner "@" cannot appear in a GEDCOM xref, so each run of
    them becomes "_": ``"ind 1" -> "@ind_1@"``.
    """
    bare = _XREF_UNSAFE.sub("_", record_id.strip().strip("@"))
    if not bare:
        raise ValueError(f"Invalid record id: {record_id!r}")
    return f"@{bare}@"


# -----------------------------
# Generated identity
# -----------------------------

def fallback_id(prefix: str, position: int) -> str:
    """
    Id for a record that arrived without one, keyed by 1-based position:
    ``fallback_id("I", 3) -> "I3"``.
    """
    return f"{prefix}{position}"
