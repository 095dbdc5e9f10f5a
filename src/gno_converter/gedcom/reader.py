"""
GEDCOM -> canonical model.

A best-effort subset parser, not a validator: it walks the token stream once,
keeps just enough state to know which record, event, name, place, or citation
a line belongs to, and ignores everything it does not model.
"""

from __future__ import annotations

from typing import List, Optional

from gno_converter.identity import fallback_id, strip_pointer
from gno_converter.loader import Token, merge_continuations, tokenize_text
from gno_converter.logging import get_logger
from gno_converter.model import (
    Event,
    Family,
    GenealogyModel,
    NameParts,
    Person,
    Place,
    Source,
    SourceCitation,
    backfill_relationships,
)
from gno_converter.model.entities import SEX_VALUES
from gno_converter.model.event_types import is_event_tag
from gno_converter.model.names import collapse_ws, parse_gedcom_name

log = get_logger(__name__)

RECORD_TAGS = ("INDI", "FAM", "SOUR")


def _clean(value: str) -> Optional[str]:
    value = value.strip()
    return value or None


class GedcomReader:
    """
    Line-driven state machine over level-tagged GEDCOM records.

    State:
      - the open record (type + entity being built)
      - ``_path``: tag at each level of the current line's ancestry
      - the open event, citation, and event place (for DATE/PLAC/MAP/PAGE)
    Records are emitted when the next level-0 line arrives or input ends.
    """

    def __init__(self) -> None:
        self.model = GenealogyModel()
        self._reset()

    # ---------------------------------------------------------
    # Record lifecycle
    # ---------------------------------------------------------
    def _reset(self) -> None:
        self._record_type: Optional[str] = None
        self._person: Optional[Person] = None
        self._family: Optional[Family] = None
        self._source: Optional[Source] = None
        self._path: List[str] = []
        self._event: Optional[Event] = None
        self._event_place: Optional[Place] = None
        self._citation: Optional[SourceCitation] = None
        self._name_open = False

    def _flush(self) -> None:
        if self._record_type == "INDI" and self._person is not None:
            self.model.register_person(self._person)
        elif self._record_type == "FAM" and self._family is not None:
            self.model.register_family(self._family)
        elif self._record_type == "SOUR" and self._source is not None:
            self.model.register_source(self._source)
        self._reset()

    def _open_record(self, tok: Token) -> None:
        record_id = strip_pointer(tok.pointer)
        if record_id is None or tok.tag not in RECORD_TAGS:
            # HEAD, TRLR, NOTE, OBJE, REPO, SUBM, or garbage: stay idle.
            return

        self._record_type = tok.tag
        self._path = [tok.tag]
        if tok.tag == "INDI":
            self._person = Person(id=record_id)
        elif tok.tag == "FAM":
            self._family = Family(id=record_id)
        else:
            self._source = Source(id=record_id)

    # ---------------------------------------------------------
    # Driver
    # ---------------------------------------------------------
    def feed(self, tok: Token) -> None:
        if tok.level == 0:
            self._flush()
            self._open_record(tok)
            return

        if self._record_type is None:
            return

        if tok.level > len(self._path):
            log.debug("Line %d: level %d skips a level; ignored", tok.lineno, tok.level)
            return

        del self._path[tok.level:]
        self._path.append(tok.tag)

        if self._record_type == "INDI":
            self._on_person_line(tok)
        elif self._record_type == "FAM":
            self._on_family_line(tok)
        else:
            self._on_source_line(tok)

    def parse(self, text: str) -> GenealogyModel:
        tokens = merge_continuations(tokenize_text(text))
        for tok in tokens:
            self.feed(tok)
        self._flush()

        backfill_relationships(self.model)

        counts = self.model.counts()
        log.info(
            "Parsed GEDCOM: INDI=%d FAM=%d SOUR=%d places=%d",
            counts["persons"],
            counts["families"],
            counts["sources"],
            counts["places"],
        )
        return self.model

    # ---------------------------------------------------------
    # INDI
    # ---------------------------------------------------------
    def _on_person_line(self, tok: Token) -> None:
        person = self._person
        value = tok.value.strip()

        if tok.level == 1:
            self._event = None
            self._event_place = None
            self._citation = None
            self._name_open = False

            if tok.tag == "NAME":
                self._on_name(person, value)
            elif tok.tag == "SEX":
                sex = value[:1].upper()
                if sex in SEX_VALUES:
                    person.sex = sex
            elif tok.tag in ("FAMC", "FAMS"):
                fam_id = strip_pointer(value)
                links = person.famc if tok.tag == "FAMC" else person.fams
                if fam_id and fam_id not in links:
                    links.append(fam_id)
            elif is_event_tag(tok.tag):
                self._event = Event(type=tok.tag)
                person.events.append(self._event)
            elif tok.tag == "SOUR":
                self._citation = self._open_citation(value, person.sources)
            return

        branch = self._path[1]
        if branch == "NAME" and self._name_open:
            if tok.level == 2 and tok.tag in ("GIVN", "SURN"):
                self._on_name_part(person, tok.tag, value)
        elif self._event is not None and is_event_tag(branch):
            self._on_event_detail(tok, value)
        elif branch == "SOUR" and self._citation is not None:
            self._on_citation_detail(tok, value, base_level=1)

    def _on_name(self, person: Person, value: str) -> None:
        if person.name is not None or person.name_parts is not None:
            # Only the first NAME is modeled.
            return

        parts = parse_gedcom_name(value)
        if parts is not None:
            person.name_parts = parts
            person.name = parts.display
        else:
            person.name = collapse_ws(value) or None
        self._name_open = True

    def _on_name_part(self, person: Person, tag: str, value: str) -> None:
        if not value:
            return
        if person.name_parts is None:
            person.name_parts = NameParts(display=person.name)
        if tag == "GIVN":
            person.name_parts.given = value
        else:
            person.name_parts.surname = value

    # ---------------------------------------------------------
    # Events
    # ---------------------------------------------------------
    def _on_event_detail(self, tok: Token, value: str) -> None:
        event = self._event

        if tok.level == 2:
            self._citation = None
            if tok.tag == "DATE":
                event.date = value or None
            elif tok.tag == "PLAC":
                self._event_place = self._attach_place(event, value)
            elif tok.tag == "_PLAC_REF" and value:
                event.place_ref = strip_pointer(value) or value
            elif tok.tag == "TYPE" and event.type == "EVEN" and value:
                event.type = value
            elif tok.tag == "SOUR":
                self._citation = self._open_citation(value, event.sources)
            return

        sub = self._path[2]
        if sub == "PLAC" and self._event_place is not None:
            if tok.level == 4 and self._path[3] == "MAP" and tok.tag in ("LATI", "LONG"):
                self._set_coordinate(self._event_place, tok.tag, value)
        elif sub == "SOUR" and self._citation is not None:
            self._on_citation_detail(tok, value, base_level=2)

    def _attach_place(self, event: Event, text: str) -> Optional[Place]:
        if not text:
            return None

        place = self.model.place_by_name(text)
        if place is None:
            place = Place(id=fallback_id("P", len(self.model.places) + 1), name=text)
            self.model.register_place(place)

        event.place = text
        event.place_id = place.id
        return place

    @staticmethod
    def _set_coordinate(place: Place, tag: str, value: str) -> None:
        if not value:
            return
        if tag == "LATI" and place.latitude is None:
            place.latitude = value
        elif tag == "LONG" and place.longitude is None:
            place.longitude = value

    # ---------------------------------------------------------
    # Citations
    # ---------------------------------------------------------
    @staticmethod
    def _open_citation(value: str, target: List[SourceCitation]) -> Optional[SourceCitation]:
        source_id = strip_pointer(value)
        if source_id is None:
            # Inline source text (no record); not modeled.
            return None
        citation = SourceCitation(source_id=source_id)
        target.append(citation)
        return citation

    def _on_citation_detail(self, tok: Token, value: str, base_level: int) -> None:
        citation = self._citation
        depth = tok.level - base_level

        if depth == 1:
            if tok.tag == "PAGE":
                citation.page = value or None
            elif tok.tag == "DATA" and value:
                citation.data = value
        elif depth == 2 and self._path[base_level + 1] == "DATA" and tok.tag == "TEXT":
            citation.data = value or None

    # ---------------------------------------------------------
    # FAM
    # ---------------------------------------------------------
    def _on_family_line(self, tok: Token) -> None:
        family = self._family
        value = tok.value.strip()

        if tok.level == 1:
            self._citation = None
            if tok.tag == "HUSB":
                family.husb = strip_pointer(value)
            elif tok.tag == "WIFE":
                family.wife = strip_pointer(value)
            elif tok.tag == "CHIL":
                child_id = strip_pointer(value)
                if child_id:
                    family.chil.append(child_id)
            elif tok.tag == "SOUR":
                self._citation = self._open_citation(value, family.sources)
            return

        if self._path[1] == "SOUR" and self._citation is not None:
            self._on_citation_detail(tok, value, base_level=1)

    # ---------------------------------------------------------
    # SOUR
    # ---------------------------------------------------------
    def _on_source_line(self, tok: Token) -> None:
        if tok.level != 1:
            return

        source = self._source
        if tok.tag == "TITL":
            source.title = _clean(tok.value)
        elif tok.tag == "AUTH":
            source.author = _clean(tok.value)
        elif tok.tag == "PUBL":
            source.publication = _clean(tok.value)


def parse_gedcom(text: str) -> GenealogyModel:
    """Parse GEDCOM text into a fresh, backfilled GenealogyModel."""
    return GedcomReader().parse(text)
