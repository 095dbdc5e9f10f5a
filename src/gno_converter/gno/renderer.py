"""
Base GNO renderer.

A renderer walks the canonical model once and builds an ElementTree. The
walk order and the shared decisions (name splitting, event element naming,
place resolution) live here; subclasses in ``gno.dialects`` only decide how
each record is spelled.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional
from xml.etree import ElementTree as ET

from gno_converter.core.exceptions import UnsupportedOptionError
from gno_converter.model import Event, Family, GenealogyModel, NameParts, Person, Place, Source, SourceCitation
from gno_converter.model.event_types import event_name
from gno_converter.model.names import split_display_name

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class Dialect(str, Enum):
    GENOPRO = "genopro"
    GENERIC = "generic"
    GRAMPS = "gramps"
    LEGACY = "legacy"
    MYHERITAGE = "myheritage"

    @classmethod
    def parse(cls, value) -> "Dialect":
        """Accept a Dialect or its case-insensitive name."""
        if isinstance(value, Dialect):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise UnsupportedOptionError(f"Unknown GNO dialect {value!r}; expected one of: {names}") from None


def _set(node: ET.Element, name: str, value: Optional[str]) -> None:
    if value:
        node.set(name, value)


def _text(parent: ET.Element, tag: str, value: Optional[str]) -> Optional[ET.Element]:
    if not value:
        return None
    el = ET.SubElement(parent, tag)
    el.text = value
    return el


class GnoRenderer:
    dialect: Dialect = Dialect.GENOPRO

    root_tag = "GenoPro"
    root_attrs: Dict[str, str] = {}

    persons_container = "Individuals"
    families_container = "Families"
    places_container: Optional[str] = "Places"
    sources_container = "Sources"

    # Event element names are the title-case vocabulary ("Birth"); some
    # dialects spell them lower-case.
    lowercase_events = False

    def __init__(self, model: GenealogyModel):
        self.model = model

    # ---------------------------------------------------------
    # Shared decisions
    # ---------------------------------------------------------
    @staticmethod
    def name_parts(person: Person) -> NameParts:
        """Structured parts when the model has them, else split the display name."""
        parts = person.name_parts
        if parts is not None and parts.is_structured():
            return NameParts(
                given=parts.given,
                surname=parts.surname,
                display=parts.display or person.display_name,
            )
        return split_display_name(person.display_name)

    def event_tag(self, event: Event) -> str:
        name = event_name(event.type) or "Event"
        return name.lower() if self.lowercase_events else name

    @staticmethod
    def is_custom_event(event: Event) -> bool:
        return event_name(event.type) is None

    def resolved_place(self, event: Event) -> Optional[Place]:
        if event.place_id:
            return self.model.get_place(event.place_id)
        return None

    def place_token(self, event: Event) -> Optional[str]:
        """
        The value written for an event's place.

        With a places container, a resolved place is written as its id so
        the reader can link it back; otherwise the literal text is used.
        """
        place = self.resolved_place(event)
        if place is not None:
            if self.places_container:
                return place.id
            return place.name or event.place
        return event.place or event.place_ref

    # ---------------------------------------------------------
    # Walk
    # ---------------------------------------------------------
    def render(self) -> str:
        root = ET.Element(self.root_tag, dict(self.root_attrs))
        self.write_header(root)

        persons = ET.SubElement(root, self.persons_container)
        for person in self.model.persons.values():
            self.write_person(persons, person)

        families = ET.SubElement(root, self.families_container)
        for family in self.model.families.values():
            self.write_family(families, family)

        self.write_links(root)

        if self.places_container and self.model.places:
            places = ET.SubElement(root, self.places_container)
            for place in self.model.places.values():
                self.write_place(places, place)

        if self.model.sources:
            sources = ET.SubElement(root, self.sources_container)
            for source in self.model.sources.values():
                self.write_source(sources, source)

        ET.indent(root)
        return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"

    # ---------------------------------------------------------
    # Hooks
    # ---------------------------------------------------------
    def write_header(self, root: ET.Element) -> None:
        pass

    def write_links(self, root: ET.Element) -> None:
        pass

    def write_person(self, parent: ET.Element, person: Person) -> None:
        raise NotImplementedError

    def write_family(self, parent: ET.Element, family: Family) -> None:
        raise NotImplementedError

    def write_place(self, parent: ET.Element, place: Place) -> None:
        raise NotImplementedError

    def write_source(self, parent: ET.Element, source: Source) -> None:
        raise NotImplementedError

    def write_citations(self, parent: ET.Element, citations: Iterable[SourceCitation]) -> None:
        raise NotImplementedError
