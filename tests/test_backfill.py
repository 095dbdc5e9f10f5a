from gno_converter.model import (
    Family,
    GenealogyModel,
    Person,
    assign_spouse,
    backfill_relationships,
)


def _model(persons, families):
    model = GenealogyModel()
    for p in persons:
        model.register_person(p)
    for f in families:
        model.register_family(f)
    return model


def test_family_side_links_are_mirrored_onto_persons():
    model = _model(
        [Person(id="I1", sex="M"), Person(id="I2", sex="F"), Person(id="I3")],
        [Family(id="F1", husb="I1", wife="I2", chil=["I3"])],
    )

    backfill_relationships(model)

    assert model.persons["I1"].fams == ["F1"]
    assert model.persons["I2"].fams == ["F1"]
    assert model.persons["I3"].famc == ["F1"]


def test_person_side_links_are_mirrored_onto_families():
    model = _model(
        [
            Person(id="I1", sex="F", fams=["F1"]),
            Person(id="I2", sex="M", fams=["F1"]),
            Person(id="I3", famc=["F1"]),
        ],
        [Family(id="F1")],
    )

    backfill_relationships(model)

    fam = model.families["F1"]
    assert fam.husb == "I2"
    assert fam.wife == "I1"
    assert fam.chil == ["I3"]


def test_dangling_references_are_dropped():
    model = _model(
        [Person(id="I1", fams=["F9"], famc=["F8"])],
        [Family(id="F1", husb="I7", chil=["I8", "I1", "I1"])],
    )

    backfill_relationships(model)

    assert model.persons["I1"].fams == []
    assert model.persons["I1"].famc == ["F1"]
    assert model.families["F1"].husb is None
    assert model.families["F1"].chil == ["I1"]


def test_backfill_is_idempotent():
    model = _model(
        [Person(id="I1", sex="M", fams=["F1"]), Person(id="I2", famc=["F1"])],
        [Family(id="F1", wife=None)],
    )

    backfill_relationships(model)
    first = (
        [(p.id, list(p.fams), list(p.famc)) for p in model.persons.values()],
        [(f.id, f.husb, f.wife, list(f.chil)) for f in model.families.values()],
    )
    backfill_relationships(model)
    second = (
        [(p.id, list(p.fams), list(p.famc)) for p in model.persons.values()],
        [(f.id, f.husb, f.wife, list(f.chil)) for f in model.families.values()],
    )

    assert first == second


def test_third_spouse_claim_is_dropped():
    model = _model(
        [
            Person(id="I1", sex="M", fams=["F1"]),
            Person(id="I2", sex="F", fams=["F1"]),
            Person(id="I3", sex="M", fams=["F1"]),
        ],
        [Family(id="F1")],
    )

    backfill_relationships(model)

    assert model.persons["I3"].fams == []
    assert (model.families["F1"].husb, model.families["F1"].wife) == ("I1", "I2")


def test_assign_spouse_unknown_sex_takes_first_free_slot():
    fam = Family(id="F1", husb="I1")
    assert assign_spouse(fam, Person(id="I2"))
    assert fam.wife == "I2"
    assert not assign_spouse(fam, Person(id="I3"))


def test_dangling_husband_does_not_block_a_real_claim():
    model = _model(
        [Person(id="I1", sex="M", fams=["F1"])],
        [Family(id="F1", husb="I9")],
    )

    backfill_relationships(model)

    fam = model.families["F1"]
    assert (fam.husb, fam.wife) == ("I1", None)
    assert model.persons["I1"].fams == ["F1"]


def test_dangling_children_are_dropped_before_claims():
    model = _model(
        [Person(id="I1", famc=["F1"])],
        [Family(id="F1", chil=["I9", "I1", "I1"])],
    )

    backfill_relationships(model)

    assert model.families["F1"].chil == ["I1"]
    assert model.persons["I1"].famc == ["F1"]
