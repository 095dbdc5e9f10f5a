from __future__ import annotations

from typing import List

from gno_converter.logging import get_logger
from gno_converter.model.entities import Family, GenealogyModel, Person

log = get_logger(__name__)


def _append_unique(items: List[str], value: str) -> None:
    if value not in items:
        items.append(value)


def add_child(family: Family, person_id: str) -> bool:
    """Append a child id unless the family already lists it."""
    if person_id in family.chil:
        return False
    family.chil.append(person_id)
    return True


def assign_spouse(family: Family, person: Person) -> bool:
    """
    Place ``person`` in the husb or wife slot of ``family``.

    Sex decides the slot (M -> husb, F -> wife); when sex is unknown or the
    preferred slot is taken, the first empty slot is used. Returns False when
    both slots already hold someone else.
    """
    if person.id in (family.husb, family.wife):
        return True

    if person.sex == "M" and not family.husb:
        family.husb = person.id
        return True
    if person.sex == "F" and not family.wife:
        family.wife = person.id
        return True

    if not family.husb:
        family.husb = person.id
        return True
    if not family.wife:
        family.wife = person.id
        return True

    return False


def backfill_relationships(model: GenealogyModel) -> GenealogyModel:
    """
    Make every family link bidirectional.

    Design:
      - readers only record what the source states
      - this pass derives the missing side, whichever side the source gave
      - references to records that do not exist are dropped

    Idempotent: running it twice leaves the model unchanged.
    """
    persons = model.persons
    families = model.families

    # Dangling family-side refs go first so they cannot hold a slot that a
    # real person claims below.
    for fam in families.values():
        for slot in ("husb", "wife"):
            spouse_id = getattr(fam, slot)
            if spouse_id and spouse_id not in persons:
                log.debug("Dropping %s %s on family %s: no such person", slot, spouse_id, fam.id)
                setattr(fam, slot, None)

        kept: List[str] = []
        for child_id in fam.chil:
            if child_id not in persons:
                log.debug("Dropping child %s on family %s: no such person", child_id, fam.id)
                continue
            if child_id not in kept:
                kept.append(child_id)
        fam.chil = kept

    # Person-side claims, so a FAMS/FAMC-only source still populates the family.
    for person in persons.values():
        for fam_id in list(person.fams):
            fam = families.get(fam_id)
            if fam is None:
                log.debug("Dropping FAMS %s on %s: no such family", fam_id, person.id)
                person.fams.remove(fam_id)
                continue
            if not assign_spouse(fam, person):
                log.debug("Dropping FAMS %s on %s: both spouse slots taken", fam_id, person.id)
                person.fams.remove(fam_id)

        for fam_id in list(person.famc):
            fam = families.get(fam_id)
            if fam is None:
                log.debug("Dropping FAMC %s on %s: no such family", fam_id, person.id)
                person.famc.remove(fam_id)
                continue
            add_child(fam, person.id)

    # Mirror the family side back onto the persons.
    for fam in families.values():
        for spouse_id in (fam.husb, fam.wife):
            if spouse_id:
                _append_unique(persons[spouse_id].fams, fam.id)
        for child_id in fam.chil:
            _append_unique(persons[child_id].famc, fam.id)

    return model
