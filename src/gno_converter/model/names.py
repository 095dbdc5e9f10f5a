"""
Best-effort personal-name heuristics shared by the readers and writers.

These are guesses about the input's structure, not a contract: a name such
as "Mary Ann Smith" splits as given="Mary Ann", surname="Smith", which is
right for most Western exports and wrong for plenty of others. Keep every
such guess in this module so it can be swapped out in one place.
"""

from __future__ import annotations

import re
from typing import Optional

from gno_converter.model.entities import NameParts

_WS = re.compile(r"\s+")
_SURNAME_DELIM = re.compile(r"/([^/]*)/")


def collapse_ws(value: str) -> str:
    return _WS.sub(" ", value).strip()


def compose_display(given: Optional[str], surname: Optional[str]) -> Optional[str]:
    joined = " ".join(p for p in (given, surname) if p)
    return collapse_ws(joined) or None


def split_display_name(name: Optional[str]) -> NameParts:
    """
    Split a display name on its last whitespace token.

        "John Doe"        -> given="John",     surname="Doe"
        "Mary Ann Smith"  -> given="Mary Ann", surname="Smith"
        "Cher"            -> given="Cher",     surname=None
    """
    display = collapse_ws(name or "")
    if not display:
        return NameParts()

    tokens = display.split(" ")
    if len(tokens) == 1:
        return NameParts(given=display, surname=None, display=display)

    return NameParts(
        given=" ".join(tokens[:-1]),
        surname=tokens[-1],
        display=display,
    )


def parse_gedcom_name(value: Optional[str]) -> Optional[NameParts]:
    """
    Extract the ``/surname/`` delimiter from a GEDCOM NAME value.

    Returns None when the value carries no delimiter.

        "John /Doe/"      -> given="John", surname="Doe", display="John Doe"
        "/Doe/"           -> given=None,   surname="Doe", display="Doe"
        "John /Doe/ Jr."  -> given="John", surname="Doe", display="John Doe Jr."
    """
    if not value:
        return None

    match = _SURNAME_DELIM.search(value)
    if match is None:
        return None

    given = collapse_ws(value[: match.start()]) or None
    surname = collapse_ws(match.group(1)) or None
    display = collapse_ws(value.replace("/", " ")) or None

    return NameParts(given=given, surname=surname, display=display)
