"""
Canonical model -> GEDCOM 5.5.1 text.

Supports: HEAD (with optional tree name), INDI (NAME + GIVN/SURN, SEX,
events with DATE/PLAC/MAP/_PLAC_REF, citations, FAMC/FAMS), FAM (HUSB/WIFE/CHIL),
SOUR (TITL/AUTH/PUBL), TRLR.
"""

from __future__ import annotations

import re
from typing import List, Optional

from gno_converter.config import get_config
from gno_converter.identity import format_pointer
from gno_converter.logging import get_logger
from gno_converter.model import Event, GenealogyModel, Person, SourceCitation
from gno_converter.model.event_types import is_event_tag
from gno_converter.model.names import collapse_ws, split_display_name

log = get_logger(__name__)

GEDCOM_VERSION = "5.5.1"

# Pass-through event types shaped like a tag ("OCCU", "_MILT") are written as
# that tag; anything else becomes EVEN + TYPE.
GEDCOM_TAG = re.compile(r"^_?[A-Z0-9]{3,5}$")
STRUCTURAL_TAGS = frozenset({
    "NAME", "SEX", "FAMC", "FAMS", "SOUR", "NOTE", "OBJE", "TYPE", "DATE", "PLAC",
    "HUSB", "WIFE", "CHIL", "CONC", "CONT", "HEAD", "TRLR", "GIVN", "SURN",
})


def event_line_tag(event_type: str) -> Optional[str]:
    """Tag to open an event line with, or None when it needs EVEN + TYPE."""
    if is_event_tag(event_type):
        return event_type.upper()
    if GEDCOM_TAG.match(event_type or "") and event_type not in STRUCTURAL_TAGS:
        return event_type
    return None


class GedcomWriter:
    """Accumulates GEDCOM lines for one model; never mutates the model."""

    def __init__(self, model: GenealogyModel, tree_name: Optional[str] = None, config=None):
        self.model = model
        self.tree_name = (tree_name or "").strip() or None
        self.cfg = config if config is not None else get_config()
        self.lines: List[str] = []

    def _emit(self, level: int, tag: str, value: Optional[str] = None) -> None:
        if value:
            # Embedded newlines become CONT lines.
            first, *rest = str(value).split("\n")
            self.lines.append(f"{level} {tag} {first}".rstrip())
            for cont in rest:
                self.lines.append(f"{level + 1} CONT {cont}".rstrip())
        else:
            self.lines.append(f"{level} {tag}")

    # ---------------------------------------------------------
    # HEAD
    # ---------------------------------------------------------
    def _write_head(self) -> None:
        gedcom_cfg = self.cfg.gedcom
        self._emit(0, "HEAD")
        self._emit(1, "SOUR", gedcom_cfg.get("source_tag", "GNO2GED"))
        if gedcom_cfg.get("source_version"):
            self._emit(2, "VERS", str(gedcom_cfg["source_version"]))
        if gedcom_cfg.get("source_name"):
            self._emit(2, "NAME", gedcom_cfg["source_name"])
        if self.tree_name:
            self._emit(1, "_TREE", self.tree_name)
            self._emit(2, "RIN", "1")
        self._emit(1, "GEDC")
        self._emit(2, "VERS", GEDCOM_VERSION)
        self._emit(2, "FORM", "LINEAGE-LINKED")
        self._emit(1, "CHAR", "UTF-8")
        if self.tree_name:
            self._emit(1, "FILE", f"{self.tree_name}.gno")

    # ---------------------------------------------------------
    # INDI
    # ---------------------------------------------------------
    def _write_name(self, person: Person) -> None:
        parts = person.name_parts
        if parts is not None and parts.is_structured():
            given, surname = parts.given, parts.surname
        else:
            display = person.name or (parts.display if parts else None)
            if not display:
                return
            if "/" in display:
                self._emit(1, "NAME", collapse_ws(display))
                return
            split = split_display_name(display)
            if not split.surname:
                self._emit(1, "NAME", split.display)
                return
            given, surname = split.given, split.surname

        self._emit(1, "NAME", collapse_ws(f"{given or ''} /{surname or ''}/"))
        if given:
            self._emit(2, "GIVN", given)
        if surname:
            self._emit(2, "SURN", surname)

    def _write_citations(self, level: int, citations: List[SourceCitation]) -> None:
        for cit in citations:
            self._emit(level, "SOUR", format_pointer(cit.source_id))
            if cit.page:
                self._emit(level + 1, "PAGE", cit.page)
            if cit.data:
                self._emit(level + 1, "DATA")
                self._emit(level + 2, "TEXT", cit.data)

    def _write_event(self, event: Event) -> None:
        tag = event_line_tag(event.type)
        if tag:
            self._emit(1, tag)
        else:
            self._emit(1, "EVEN")
            self._emit(2, "TYPE", event.type)

        if event.date:
            self._emit(2, "DATE", event.date)

        place = self.model.get_place(event.place_id) if event.place_id else None
        if place is not None and place.name:
            self._emit(2, "PLAC", place.name)
            if place.has_coordinates():
                self._emit(3, "MAP")
                if place.latitude:
                    self._emit(4, "LATI", place.latitude)
                if place.longitude:
                    self._emit(4, "LONG", place.longitude)
        elif event.place:
            self._emit(2, "PLAC", event.place)
        elif event.place_ref:
            self._emit(2, "PLAC", event.place_ref)
        if event.place_ref:
            self._emit(2, "_PLAC_REF", format_pointer(event.place_ref))

        self._write_citations(2, event.sources)

    def _write_person(self, person: Person) -> None:
        self._emit(0, f"{format_pointer(person.id)} INDI")
        self._write_name(person)
        if person.sex and person.sex != "U":
            self._emit(1, "SEX", person.sex)
        for event in person.events:
            self._write_event(event)
        self._write_citations(1, person.sources)
        for fam_id in person.famc:
            self._emit(1, "FAMC", format_pointer(fam_id))
        for fam_id in person.fams:
            self._emit(1, "FAMS", format_pointer(fam_id))

    # ---------------------------------------------------------
    # FAM / SOUR
    # ---------------------------------------------------------
    def _write_family(self, family) -> None:
        self._emit(0, f"{format_pointer(family.id)} FAM")
        if family.husb:
            self._emit(1, "HUSB", format_pointer(family.husb))
        if family.wife:
            self._emit(1, "WIFE", format_pointer(family.wife))
        for child_id in family.chil:
            self._emit(1, "CHIL", format_pointer(child_id))
        self._write_citations(1, family.sources)

    def _write_source(self, source) -> None:
        self._emit(0, f"{format_pointer(source.id)} SOUR")
        if source.title:
            self._emit(1, "TITL", source.title)
        if source.author:
            self._emit(1, "AUTH", source.author)
        if source.publication:
            self._emit(1, "PUBL", source.publication)

    # ---------------------------------------------------------
    # Entry
    # ---------------------------------------------------------
    def render(self) -> str:
        self.lines = []
        self._write_head()
        for person in self.model.persons.values():
            self._write_person(person)
        for family in self.model.families.values():
            self._write_family(family)
        for source in self.model.sources.values():
            self._write_source(source)
        self._emit(0, "TRLR")

        log.info("Rendered GEDCOM: %d lines", len(self.lines))
        return "\n".join(self.lines) + "\n"


def render_gedcom(model: GenealogyModel, tree_name: Optional[str] = None) -> str:
    """Render ``model`` as GEDCOM 5.5.1 text ending in ``0 TRLR\\n``."""
    return GedcomWriter(model, tree_name=tree_name).render()
