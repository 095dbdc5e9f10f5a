"""
GNO XML -> canonical model.

The source shape is not fixed. GenoPro exports, Gramps-style databases and
looser vendor dumps all name their containers, ids, names and events
differently, so every lookup below is an ordered candidate list handed to
``first_match``. Nothing here is an error: a field that no candidate finds
is simply absent from the model.
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple
from xml.etree import ElementTree as ET

from gno_converter.core.exceptions import FormatValidationError
from gno_converter.gno.xmltools import (
    as_list,
    attr,
    child,
    child_attr,
    child_ref,
    child_text,
    first_match,
    items,
    ref_value,
    self_text,
    strip_namespaces,
)
from gno_converter.identity import fallback_id
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
    add_child,
    assign_spouse,
    backfill_relationships,
)
from gno_converter.model.event_types import tag_for_element
from gno_converter.model.names import compose_display, parse_gedcom_name

log = get_logger(__name__)

# ---------------------------------------------------------------------------
# Candidate tables
# ---------------------------------------------------------------------------

ROOT = (child("GenoPro/Genealogy"), child("GenoPro"), child("Genealogy"), child("genealogy"))

INDIVIDUALS = (child("Individuals"), child("Persons"), child("individuals"), child("persons"), child("people"))
INDIVIDUAL_ITEMS = items("Individual", "Person", "individual", "person")

FAMILIES = (child("Families"), child("Unions"), child("families"), child("unions"))
FAMILY_ITEMS = items("Family", "Union", "family", "union")

PLACES = (child("Places"), child("Locations"), child("places"), child("locations"))
PLACE_ITEMS = items("Place", "Location", "placeobj", "place", "location")

SOURCES = (child("Sources"), child("SourcesAndCitations"), child("sources"))
SOURCE_ITEMS = items("Source", "source")

PEDIGREE_LINKS = (child("PedigreeLinks"), child("pedigreelinks"), child("pedigreeLinks"))
PEDIGREE_ITEMS = items("PedigreeLink", "pedigreelink", "pedigreeLink")

RECORD_ID = (attr("ID"), attr("Id"), attr("id"))

NAME = (
    attr("Name"), child("Name"), child("name"),
    child("DisplayName"), child("FullName"),
    attr("name"), attr("DisplayName"), attr("FullName"),
)
NAME_GIVEN = (
    child_text("First"), child_text("Given"), child_text("GivenName"),
    child_text("first"), child_text("given"), attr("First"), attr("Given"),
)
NAME_SURNAME = (
    child_text("Last"), child_text("Surname"), child_text("LastName"),
    child_text("surname"), child_text("last"), attr("Last"), attr("Surname"),
)
NAME_DISPLAY = (child_text("Display"), child_text("display"), child_text("DisplayName"), self_text())
PERSON_GIVEN = (attr("GivenName"), attr("Given"), attr("givenname"), attr("given"))
PERSON_SURNAME = (attr("Surname"), attr("LastName"), attr("surname"), attr("lastname"))

SEX = (
    attr("Sex"), child_text("Sex"), attr("Gender"), child_text("Gender"),
    attr("sex"), child_text("sex"), attr("gender"), child_text("gender"),
)

EVENT_TYPE = (attr("Type"), attr("type"), child_text("Type"), child_text("type"))
EVENT_DATE = (
    attr("Date"), child_text("Date"), attr("date"), child_text("date"),
    child_attr("dateval", "val"), child_attr("datestr", "val"),
)
EVENT_PLACE_LINK = (
    child_attr("place", "hlink"), child_attr("Place", "hlink"),
    child_attr("Place", "Ref"), child_attr("place", "ref"),
    attr("PlaceID"), attr("PlaceRef"), attr("placeref"),
)
EVENT_PLACE = (attr("Place"), child_text("Place"), attr("place"), child_text("place"))

CITATION_ITEMS = items("SourceRef", "sourceref", "SourceCitation", "Citation", "citationref")
CITATION_SOURCE = (
    attr("Ref"), attr("ref"), attr("hlink"),
    attr("Source"), attr("source"), attr("SourceID"), self_text(),
)
CITATION_PAGE = (attr("Page"), attr("page"), child_text("Page"), child_text("page"))
CITATION_DATA = (attr("Data"), attr("data"), child_text("Data"), child_text("data"))

FAMILY_HUSBAND = (
    attr("Husband"), attr("Husb"), attr("husband"),
    child_ref("Husband"), child_ref("husband"), child_ref("Father"), child_ref("father"),
)
FAMILY_WIFE = (
    attr("Wife"), attr("wife"),
    child_ref("Wife"), child_ref("wife"), child_ref("Mother"), child_ref("mother"),
)
FAMILY_CHILDREN = items("Child", "child", "childref", "Children/Child", "children/child")

PLACE_NAME = (
    attr("Name"), child_text("Name"), attr("name"), child_text("name"),
    child_attr("pname", "value"), attr("Title"), child_text("Title"), child_text("ptitle"),
    self_text(),
)
PLACE_LAT = (
    attr("Latitude"), child_text("Latitude"), attr("Lat"), attr("lat"),
    child_attr("coord", "lat"), child_text("lat"),
)
PLACE_LONG = (
    attr("Longitude"), child_text("Longitude"), attr("Long"), attr("long"), attr("Lon"),
    child_attr("coord", "long"), child_text("long"),
)

SOURCE_TITLE = (attr("Title"), child_text("Title"), child_text("title"), child_text("stitle"), attr("title"))
SOURCE_AUTHOR = (attr("Author"), child_text("Author"), child_text("author"), child_text("sauthor"), attr("author"))
SOURCE_PUBLICATION = (
    attr("Publication"), child_text("Publication"), child_text("publication"),
    child_text("spubinfo"), attr("publication"),
)

LINK_ROLE = (attr("PedigreeLink"), attr("Type"), attr("Role"), attr("type"), attr("role"))
LINK_FAMILY = (attr("Family"), attr("family"), child_ref("Family"), child_ref("family"))
LINK_INDIVIDUAL = (
    attr("Individual"), attr("individual"), attr("Person"), attr("person"),
    child_ref("Individual"), child_ref("individual"),
)

SPOUSE_ROLES = {"parent", "spouse", "husband", "wife"}
CHILD_ROLES = {"biological", "adopted", "foster", "child"}

# Best-effort: "place12", "P3", "ind00001", "tree__place__7". A place
# literally named "place12" will be misread as a reference.
REF_TOKEN = re.compile(r"^(?:[A-Za-z]+\d+|[A-Za-z0-9]+(?:__[A-Za-z0-9]+)+)$")


def looks_like_ref(value: Optional[str]) -> bool:
    return bool(value) and REF_TOKEN.match(value.strip()) is not None


def _normalize_sex(value: Optional[str]) -> str:
    v = (value or "").strip().upper()
    if v in ("M", "MALE"):
        return "M"
    if v in ("F", "FEMALE"):
        return "F"
    return "U"


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class GnoReader:
    """One-shot reader: construct, call ``parse(xml_text)``, get a model."""

    def __init__(self) -> None:
        self.model = GenealogyModel()

    # ---------------------------------------------------------
    # Shape resolution
    # ---------------------------------------------------------
    @staticmethod
    def _load(xml_text: str) -> ET.Element:
        try:
            root = ET.fromstring(xml_text)
        except ET.ParseError as exc:
            raise FormatValidationError(f"GNO payload is not well-formed XML: {exc}") from exc
        return strip_namespaces(root)

    @staticmethod
    def _resolve_root(root: ET.Element) -> ET.Element:
        document = ET.Element("document")
        document.append(root)
        return first_match(document, ROOT, default=root)

    @staticmethod
    def _records(root: ET.Element, containers, item_accessor) -> List[ET.Element]:
        container = first_match(root, containers)
        if container is None:
            return []
        return as_list(item_accessor(container))

    # ---------------------------------------------------------
    # Shared field readers
    # ---------------------------------------------------------
    @staticmethod
    def _citations(node: ET.Element) -> List[SourceCitation]:
        out: List[SourceCitation] = []
        for el in CITATION_ITEMS(node):
            source_id = first_match(el, CITATION_SOURCE)
            if not source_id:
                continue
            out.append(
                SourceCitation(
                    source_id=source_id,
                    page=first_match(el, CITATION_PAGE),
                    data=first_match(el, CITATION_DATA),
                )
            )
        return out

    @staticmethod
    def _read_name(node: ET.Element) -> Tuple[Optional[str], Optional[NameParts]]:
        raw = first_match(node, NAME)
        given = surname = display = None

        if isinstance(raw, str):
            display = raw
        elif raw is not None:
            given = first_match(raw, NAME_GIVEN)
            surname = first_match(raw, NAME_SURNAME)
            display = first_match(raw, NAME_DISPLAY)

        if not given and not surname:
            given = first_match(node, PERSON_GIVEN)
            surname = first_match(node, PERSON_SURNAME)

        if given or surname:
            composed = compose_display(given, surname)
            return composed, NameParts(given=given, surname=surname, display=display or composed)

        if display and "/" in display:
            parts = parse_gedcom_name(display)
            if parts is not None:
                return parts.display, parts

        return display, None

    def _resolve_place(self, event: Event, value: Optional[str], explicit: bool) -> None:
        if not value:
            return

        place = self.model.get_place(value)
        if place is not None:
            event.place = place.name or value
            event.place_id = place.id
            return

        event.place = value
        if explicit or looks_like_ref(value):
            event.place_ref = value

    def _read_event(self, el: ET.Element) -> Optional[Event]:
        if el.tag in ("Event", "event"):
            declared = first_match(el, EVENT_TYPE, default="EVEN")
            event_type = tag_for_element(declared) or declared
        else:
            event_type = tag_for_element(el.tag)
            if event_type is None:
                return None

        event = Event(type=event_type, date=first_match(el, EVENT_DATE))

        link = first_match(el, EVENT_PLACE_LINK)
        if link:
            self._resolve_place(event, link, explicit=True)
        else:
            self._resolve_place(event, first_match(el, EVENT_PLACE), explicit=False)

        event.sources = self._citations(el)
        return event

    # ---------------------------------------------------------
    # Records
    # ---------------------------------------------------------
    def _read_places(self, root: ET.Element) -> None:
        for idx, el in enumerate(self._records(root, PLACES, PLACE_ITEMS), start=1):
            place_id = first_match(el, RECORD_ID) or fallback_id("P", idx)
            self.model.register_place(
                Place(
                    id=place_id,
                    name=first_match(el, PLACE_NAME, default=""),
                    latitude=first_match(el, PLACE_LAT),
                    longitude=first_match(el, PLACE_LONG),
                )
            )

    def _read_sources(self, root: ET.Element) -> None:
        for idx, el in enumerate(self._records(root, SOURCES, SOURCE_ITEMS), start=1):
            self.model.register_source(
                Source(
                    id=first_match(el, RECORD_ID) or fallback_id("S", idx),
                    title=first_match(el, SOURCE_TITLE),
                    author=first_match(el, SOURCE_AUTHOR),
                    publication=first_match(el, SOURCE_PUBLICATION),
                )
            )

    def _read_person(self, el: ET.Element, idx: int) -> Person:
        name, parts = self._read_name(el)
        person = Person(
            id=first_match(el, RECORD_ID) or fallback_id("I", idx),
            name=name,
            name_parts=parts,
            sex=_normalize_sex(first_match(el, SEX)),
        )

        for sub in el:
            event = self._read_event(sub)
            if event is not None:
                person.events.append(event)

        person.sources = self._citations(el)
        return person

    def _read_family(self, el: ET.Element, idx: int) -> Family:
        family = Family(
            id=first_match(el, RECORD_ID) or fallback_id("F", idx),
            husb=first_match(el, FAMILY_HUSBAND),
            wife=first_match(el, FAMILY_WIFE),
        )
        for child_el in FAMILY_CHILDREN(el):
            child_id = ref_value(child_el)
            if child_id:
                add_child(family, child_id)

        family.sources = self._citations(el)
        return family

    def _apply_pedigree_links(self, root: ET.Element) -> None:
        for link in self._records(root, PEDIGREE_LINKS, PEDIGREE_ITEMS):
            role = (first_match(link, LINK_ROLE) or "").lower()
            family = self.model.get_family(first_match(link, LINK_FAMILY) or "")
            person = self.model.get_person(first_match(link, LINK_INDIVIDUAL) or "")

            if family is None or person is None:
                log.debug("Pedigree link names unknown family/individual; skipped")
                continue

            if role in SPOUSE_ROLES:
                if not assign_spouse(family, person):
                    log.debug("Family %s already has two spouses; %s not added", family.id, person.id)
            elif role in CHILD_ROLES:
                add_child(family, person.id)
            else:
                log.debug("Unknown pedigree role %r; skipped", role)

    # ---------------------------------------------------------
    # Entry
    # ---------------------------------------------------------
    def parse(self, xml_text: str) -> GenealogyModel:
        root = self._resolve_root(self._load(xml_text))

        # Places first so event place tokens can be resolved inline.
        self._read_places(root)
        self._read_sources(root)

        for idx, el in enumerate(self._records(root, INDIVIDUALS, INDIVIDUAL_ITEMS), start=1):
            self.model.register_person(self._read_person(el, idx))

        for idx, el in enumerate(self._records(root, FAMILIES, FAMILY_ITEMS), start=1):
            self.model.register_family(self._read_family(el, idx))

        self._apply_pedigree_links(root)
        backfill_relationships(self.model)

        counts = self.model.counts()
        log.info(
            "Parsed GNO <%s>: persons=%d families=%d places=%d sources=%d",
            root.tag,
            counts["persons"],
            counts["families"],
            counts["places"],
            counts["sources"],
        )
        return self.model


def parse_gno(xml_text: str) -> GenealogyModel:
    """Parse GNO XML text into a fresh, backfilled GenealogyModel."""
    return GnoReader().parse(xml_text)
