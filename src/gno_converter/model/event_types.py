# src/gno_converter/model/event_types.py

from __future__ import annotations

from typing import Dict, Optional

# ---------------------------------------------------------------------------
# Event vocabulary
# ---------------------------------------------------------------------------

# GEDCOM person-level event tags the converter models.
EVENT_TAGS: tuple[str, ...] = (
    "BIRT", "DEAT", "EVEN", "CHR", "BAPM", "BURI", "MARR", "DIV",
)

# Canonical tag -> element name used by the XML dialects.
EVENT_NAMES: Dict[str, str] = {
    "BIRT": "Birth",
    "DEAT": "Death",
    "CHR": "Christening",
    "BAPM": "Baptism",
    "BURI": "Burial",
    "MARR": "Marriage",
    "DIV": "Divorce",
    "EVEN": "Event",
}

_TAG_BY_NAME: Dict[str, str] = {name.lower(): tag for tag, name in EVENT_NAMES.items()}
_TAG_BY_NAME.update({tag.lower(): tag for tag in EVENT_TAGS})


def is_event_tag(tag: str) -> bool:
    """Return True for a GEDCOM event tag the converter models."""
    if not tag:
        return False
    return tag.upper() in EVENT_TAGS


def event_name(tag: str) -> Optional[str]:
    """``"BIRT" -> "Birth"``; None for pass-through types."""
    return EVENT_NAMES.get(tag)


def tag_for_element(name: str) -> Optional[str]:
    """
    Map an XML element name back to a canonical tag, case-insensitively.

        "Birth" / "birth" / "BIRT" -> "BIRT"
    """
    if not name:
        return None
    return _TAG_BY_NAME.get(name.lower())
