from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from gno_converter.logging import get_logger

log = get_logger(__name__)

SEX_VALUES = ("M", "F", "U")


# -----------------------------
# Small atoms
# -----------------------------

@dataclass(slots=True)
class NameParts:
    """
    Structured personal name.

    ``display`` is the full human-readable form; ``given``/``surname`` are
    the decomposed parts when the source supplied (or we derived) them.
    """
    given: Optional[str] = None
    surname: Optional[str] = None
    display: Optional[str] = None

    def is_structured(self) -> bool:
        return bool(self.given or self.surname)


@dataclass(slots=True)
class SourceCitation:
    """Link from a person, family, or event to a Source record."""
    source_id: str
    page: Optional[str] = None
    data: Optional[str] = None


@dataclass(slots=True)
class Event:
    """
    A vital or generic event.

    ``date`` is kept verbatim. ``place`` is free text (or an unresolved
    reference token); ``place_id`` links to a Place record and
    ``place_ref`` keeps a reference token we could not resolve.
    """
    type: str
    date: Optional[str] = None
    place: Optional[str] = None
    place_ref: Optional[str] = None
    place_id: Optional[str] = None
    sources: List[SourceCitation] = field(default_factory=list)


# -----------------------------
# Entities
# -----------------------------

@dataclass(slots=True)
class Person:
    id: str
    name: Optional[str] = None
    name_parts: Optional[NameParts] = None
    sex: str = "U"
    events: List[Event] = field(default_factory=list)

    # Family membership, reconciled by the backfill pass
    famc: List[str] = field(default_factory=list)
    fams: List[str] = field(default_factory=list)

    sources: List[SourceCitation] = field(default_factory=list)

    @property
    def display_name(self) -> Optional[str]:
        """Structured parts win over the plain ``name`` string."""
        parts = self.name_parts
        if parts is not None:
            if parts.is_structured():
                joined = " ".join(p for p in (parts.given, parts.surname) if p)
                return joined or parts.display
            if parts.display:
                return parts.display
        return self.name


@dataclass(slots=True)
class Family:
    id: str
    husb: Optional[str] = None
    wife: Optional[str] = None
    chil: List[str] = field(default_factory=list)
    sources: List[SourceCitation] = field(default_factory=list)


@dataclass(slots=True)
class Place:
    id: str
    name: str = ""
    # Raw strings; never parsed to float.
    latitude: Optional[str] = None
    longitude: Optional[str] = None

    def has_coordinates(self) -> bool:
        return bool(self.latitude or self.longitude)


@dataclass(slots=True)
class Source:
    id: str
    title: Optional[str] = None
    author: Optional[str] = None
    publication: Optional[str] = None


# -----------------------------
# Model
# -----------------------------

@dataclass(slots=True)
class GenealogyModel:
    """
    In-memory entity store for one conversion, indexed by record id.

    Dicts preserve insertion order, so writers emit records in the order the
    reader found them.
    """
    persons: Dict[str, Person] = field(default_factory=dict)
    families: Dict[str, Family] = field(default_factory=dict)
    places: Dict[str, Place] = field(default_factory=dict)
    sources: Dict[str, Source] = field(default_factory=dict)

    def _register(self, store: Dict, entity, kind: str) -> None:
        if entity.id in store:
            log.warning("Duplicate %s id %s; later record replaces earlier", kind, entity.id)
        store[entity.id] = entity

    def register_person(self, person: Person) -> None:
        self._register(self.persons, person, "person")

    def register_family(self, family: Family) -> None:
        self._register(self.families, family, "family")

    def register_place(self, place: Place) -> None:
        self._register(self.places, place, "place")

    def register_source(self, source: Source) -> None:
        self._register(self.sources, source, "source")

    def get_person(self, person_id: str) -> Optional[Person]:
        return self.persons.get(person_id)

    def get_family(self, family_id: str) -> Optional[Family]:
        return self.families.get(family_id)

    def get_place(self, place_id: str) -> Optional[Place]:
        return self.places.get(place_id)

    def place_by_name(self, name: str) -> Optional[Place]:
        """First Place whose name matches exactly, or None."""
        for place in self.places.values():
            if place.name == name:
                return place
        return None

    def counts(self) -> Dict[str, int]:
        return {
            "persons": len(self.persons),
            "families": len(self.families),
            "places": len(self.places),
            "sources": len(self.sources),
        }
