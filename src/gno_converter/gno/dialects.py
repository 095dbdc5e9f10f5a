"""
Per-dialect GNO shapes.

    genopro / generic  container elements, child-element fields, PedigreeLinks
    gramps             namespaced lower-case database, hlink references
    legacy             attribute-heavy Persons/Locations
    myheritage         plain-string names, literal place text, no places container
"""

from __future__ import annotations

from typing import Dict, Iterable, Type
from xml.etree import ElementTree as ET

from gno_converter.gno.renderer import Dialect, GnoRenderer, _set, _text
from gno_converter.model import Event, Family, GenealogyModel, Person, Place, Source, SourceCitation

GRAMPS_NAMESPACE = "http://gramps-project.org/xml/1.7.1/"


# -----------------------------------------------------------------------------
# GenoPro
# -----------------------------------------------------------------------------

class GenoProRenderer(GnoRenderer):
    dialect = Dialect.GENOPRO
    root_tag = "GenoPro"
    root_attrs = {"Version": "2.0"}

    def write_person(self, parent: ET.Element, person: Person) -> None:
        node = ET.SubElement(parent, "Individual", {"ID": person.id})

        parts = self.name_parts(person)
        if parts.given or parts.surname or parts.display:
            name = ET.SubElement(node, "Name")
            _text(name, "First", parts.given)
            _text(name, "Last", parts.surname)
            _text(name, "Display", parts.display)

        if person.sex != "U":
            _text(node, "Gender", person.sex)

        for event in person.events:
            self.write_event(node, event)
        self.write_citations(node, person.sources)

    def write_event(self, parent: ET.Element, event: Event) -> None:
        node = ET.SubElement(parent, self.event_tag(event))
        if self.is_custom_event(event):
            node.set("Type", event.type)
        _text(node, "Date", event.date)
        _text(node, "Place", self.place_token(event))
        self.write_citations(node, event.sources)

    def write_family(self, parent: ET.Element, family: Family) -> None:
        node = ET.SubElement(parent, "Family", {"ID": family.id})
        # Inline spouse ids carry the slot; PedigreeLinks alone only say "Parent".
        _set(node, "Husband", family.husb)
        _set(node, "Wife", family.wife)
        self.write_citations(node, family.sources)

    def write_links(self, root: ET.Element) -> None:
        links = ET.SubElement(root, "PedigreeLinks")
        for family in self.model.families.values():
            for spouse in (family.husb, family.wife):
                if spouse:
                    ET.SubElement(
                        links, "PedigreeLink",
                        {"PedigreeLink": "Parent", "Family": family.id, "Individual": spouse},
                    )
            for child_id in family.chil:
                ET.SubElement(
                    links, "PedigreeLink",
                    {"PedigreeLink": "Biological", "Family": family.id, "Individual": child_id},
                )

    def write_place(self, parent: ET.Element, place: Place) -> None:
        node = ET.SubElement(parent, "Place", {"ID": place.id})
        _text(node, "Name", place.name)
        _text(node, "Latitude", place.latitude)
        _text(node, "Longitude", place.longitude)

    def write_source(self, parent: ET.Element, source: Source) -> None:
        node = ET.SubElement(parent, "Source", {"ID": source.id})
        _text(node, "Title", source.title)
        _text(node, "Author", source.author)
        _text(node, "Publication", source.publication)

    def write_citations(self, parent: ET.Element, citations: Iterable[SourceCitation]) -> None:
        for citation in citations:
            node = ET.SubElement(parent, "SourceRef", {"Ref": citation.source_id})
            _set(node, "Page", citation.page)
            _set(node, "Data", citation.data)


class GenericRenderer(GenoProRenderer):
    dialect = Dialect.GENERIC


# -----------------------------------------------------------------------------
# Gramps
# -----------------------------------------------------------------------------

class GrampsRenderer(GnoRenderer):
    dialect = Dialect.GRAMPS
    root_tag = "database"
    root_attrs = {"xmlns": GRAMPS_NAMESPACE}

    persons_container = "people"
    families_container = "families"
    places_container = "places"
    sources_container = "sources"
    lowercase_events = True

    def write_header(self, root: ET.Element) -> None:
        header = ET.SubElement(root, "header")
        ET.SubElement(header, "created", {"version": "1.7.1"})

    def write_person(self, parent: ET.Element, person: Person) -> None:
        node = ET.SubElement(parent, "person", {"id": person.id})
        _text(node, "gender", person.sex)

        parts = self.name_parts(person)
        if parts.given or parts.surname:
            name = ET.SubElement(node, "name", {"type": "Birth Name"})
            _text(name, "first", parts.given)
            _text(name, "surname", parts.surname)

        for event in person.events:
            self.write_event(node, event)
        self.write_citations(node, person.sources)

    def write_event(self, parent: ET.Element, event: Event) -> None:
        if self.is_custom_event(event):
            node = ET.SubElement(parent, "event", {"type": event.type})
        else:
            node = ET.SubElement(parent, self.event_tag(event))

        if event.date:
            ET.SubElement(node, "dateval", {"val": event.date})

        place = self.resolved_place(event)
        if place is not None:
            ET.SubElement(node, "place", {"hlink": place.id})
        else:
            _text(node, "place", event.place or event.place_ref)

        self.write_citations(node, event.sources)

    def write_family(self, parent: ET.Element, family: Family) -> None:
        node = ET.SubElement(parent, "family", {"id": family.id})
        if family.husb:
            ET.SubElement(node, "father", {"hlink": family.husb})
        if family.wife:
            ET.SubElement(node, "mother", {"hlink": family.wife})
        for child_id in family.chil:
            ET.SubElement(node, "childref", {"hlink": child_id})
        self.write_citations(node, family.sources)

    def write_place(self, parent: ET.Element, place: Place) -> None:
        node = ET.SubElement(parent, "placeobj", {"id": place.id, "type": "Unknown"})
        if place.name:
            ET.SubElement(node, "pname", {"value": place.name})
        if place.has_coordinates():
            coord = ET.SubElement(node, "coord")
            _set(coord, "lat", place.latitude)
            _set(coord, "long", place.longitude)

    def write_source(self, parent: ET.Element, source: Source) -> None:
        node = ET.SubElement(parent, "source", {"id": source.id})
        _text(node, "stitle", source.title)
        _text(node, "sauthor", source.author)
        _text(node, "spubinfo", source.publication)

    def write_citations(self, parent: ET.Element, citations: Iterable[SourceCitation]) -> None:
        for citation in citations:
            node = ET.SubElement(parent, "sourceref", {"hlink": citation.source_id})
            _set(node, "page", citation.page)
            _set(node, "data", citation.data)


# -----------------------------------------------------------------------------
# Legacy
# -----------------------------------------------------------------------------

class LegacyRenderer(GnoRenderer):
    dialect = Dialect.LEGACY
    root_tag = "LegacyFamilyTree"
    root_attrs = {"Version": "9.0"}

    persons_container = "Persons"
    places_container = "Locations"

    def write_person(self, parent: ET.Element, person: Person) -> None:
        node = ET.SubElement(parent, "Person", {"ID": person.id})
        parts = self.name_parts(person)
        _set(node, "GivenName", parts.given)
        _set(node, "Surname", parts.surname)
        if person.sex != "U":
            node.set("Sex", person.sex)

        for event in person.events:
            self.write_event(node, event)
        self.write_citations(node, person.sources)

    def write_event(self, parent: ET.Element, event: Event) -> None:
        node = ET.SubElement(parent, self.event_tag(event))
        if self.is_custom_event(event):
            node.set("Type", event.type)
        _set(node, "Date", event.date)
        _set(node, "Place", self.place_token(event))
        self.write_citations(node, event.sources)

    def write_family(self, parent: ET.Element, family: Family) -> None:
        node = ET.SubElement(parent, "Family", {"ID": family.id})
        _set(node, "Husband", family.husb)
        _set(node, "Wife", family.wife)
        for child_id in family.chil:
            ET.SubElement(node, "Child", {"Ref": child_id})
        self.write_citations(node, family.sources)

    def write_place(self, parent: ET.Element, place: Place) -> None:
        node = ET.SubElement(parent, "Location", {"ID": place.id})
        _set(node, "Name", place.name)
        _set(node, "Latitude", place.latitude)
        _set(node, "Longitude", place.longitude)

    def write_source(self, parent: ET.Element, source: Source) -> None:
        node = ET.SubElement(parent, "Source", {"ID": source.id})
        _set(node, "Title", source.title)
        _set(node, "Author", source.author)
        _set(node, "Publication", source.publication)

    def write_citations(self, parent: ET.Element, citations: Iterable[SourceCitation]) -> None:
        for citation in citations:
            node = ET.SubElement(parent, "SourceRef", {"Ref": citation.source_id})
            _set(node, "Page", citation.page)
            _set(node, "Data", citation.data)


# -----------------------------------------------------------------------------
# MyHeritage
# -----------------------------------------------------------------------------

class MyHeritageRenderer(GnoRenderer):
    dialect = Dialect.MYHERITAGE
    root_tag = "MyHeritage"
    root_attrs = {"version": "1.0"}

    persons_container = "individuals"
    families_container = "families"
    places_container = None
    sources_container = "sources"
    lowercase_events = True

    def write_person(self, parent: ET.Element, person: Person) -> None:
        node = ET.SubElement(parent, "individual", {"id": person.id})
        _text(node, "name", person.display_name)
        if person.sex != "U":
            _text(node, "gender", person.sex)

        for event in person.events:
            self.write_event(node, event)
        self.write_citations(node, person.sources)

    def write_event(self, parent: ET.Element, event: Event) -> None:
        if self.is_custom_event(event):
            node = ET.SubElement(parent, "event", {"type": event.type})
        else:
            node = ET.SubElement(parent, self.event_tag(event))
        _set(node, "date", event.date)
        _set(node, "place", self.place_token(event))
        self.write_citations(node, event.sources)

    def write_family(self, parent: ET.Element, family: Family) -> None:
        node = ET.SubElement(parent, "family", {"id": family.id})
        if family.husb:
            ET.SubElement(node, "husband", {"ref": family.husb})
        if family.wife:
            ET.SubElement(node, "wife", {"ref": family.wife})
        for child_id in family.chil:
            ET.SubElement(node, "child", {"ref": child_id})
        self.write_citations(node, family.sources)

    def write_source(self, parent: ET.Element, source: Source) -> None:
        node = ET.SubElement(parent, "source", {"id": source.id})
        _text(node, "title", source.title)
        _text(node, "author", source.author)
        _text(node, "publication", source.publication)

    def write_citations(self, parent: ET.Element, citations: Iterable[SourceCitation]) -> None:
        for citation in citations:
            node = ET.SubElement(parent, "sourceref", {"ref": citation.source_id})
            _set(node, "page", citation.page)
            _set(node, "data", citation.data)


# -----------------------------------------------------------------------------
# Dispatch
# -----------------------------------------------------------------------------

RENDERERS: Dict[Dialect, Type[GnoRenderer]] = {
    Dialect.GENOPRO: GenoProRenderer,
    Dialect.GENERIC: GenericRenderer,
    Dialect.GRAMPS: GrampsRenderer,
    Dialect.LEGACY: LegacyRenderer,
    Dialect.MYHERITAGE: MyHeritageRenderer,
}


def renderer_for(dialect, model: GenealogyModel) -> GnoRenderer:
    """The single dispatch point from a dialect name to its renderer."""
    return RENDERERS[Dialect.parse(dialect)](model)
