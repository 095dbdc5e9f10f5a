import pytest

from gno_converter.gedcom import parse_gedcom, render_gedcom
from gno_converter.model import Event, Family, GenealogyModel, NameParts, Person, Place, SourceCitation
from gno_converter.utils import mock_file_path


def _model_with(*persons, places=()):
    model = GenealogyModel()
    for p in persons:
        model.register_person(p)
    for place in places:
        model.register_place(place)
    return model


def test_head_and_trailer():
    out = render_gedcom(GenealogyModel())
    lines = out.splitlines()

    assert lines[0] == "0 HEAD"
    assert "1 SOUR GNO2GED" in lines
    assert "2 VERS 5.5.1" in lines
    assert "1 CHAR UTF-8" in lines
    assert out.endswith("0 TRLR\n")
    assert not out.endswith("\n\n")


def test_tree_name_adds_tree_and_file_tags():
    lines = render_gedcom(GenealogyModel(), tree_name="smith").splitlines()
    assert "1 _TREE smith" in lines
    assert "2 RIN 1" in lines
    assert "1 FILE smith.gno" in lines


def test_no_tree_name_omits_file_tag():
    out = render_gedcom(GenealogyModel())
    assert "FILE" not in out
    assert "_TREE" not in out


def test_structured_name_writes_givn_surn():
    person = Person(id="I1", name_parts=NameParts(given="John", surname="Doe"))
    lines = render_gedcom(_model_with(person)).splitlines()

    assert "1 NAME John /Doe/" in lines
    assert "2 GIVN John" in lines
    assert "2 SURN Doe" in lines


def test_display_name_is_split_on_last_token():
    lines = render_gedcom(_model_with(Person(id="I1", name="Mary Ann Smith"))).splitlines()
    assert "1 NAME Mary Ann /Smith/" in lines
    assert "2 GIVN Mary Ann" in lines
    assert "2 SURN Smith" in lines


def test_single_token_name_is_bare():
    lines = render_gedcom(_model_with(Person(id="I1", name="Cher"))).splitlines()
    assert "1 NAME Cher" in lines
    assert not any(line.startswith("2 SURN") for line in lines)


def test_unknown_sex_is_omitted():
    out = render_gedcom(_model_with(Person(id="I1", name="A B"), Person(id="I2", name="C D", sex="F")))
    assert "1 SEX U" not in out
    assert "1 SEX F" in out


def test_event_place_resolves_to_place_record_with_coordinates():
    person = Person(
        id="I1",
        events=[Event(type="BIRT", date="1900", place="P1", place_id="P1")],
    )
    place = Place(id="P1", name="York", latitude="N53.96", longitude="W1.08")
    lines = render_gedcom(_model_with(person, places=[place])).splitlines()

    i = lines.index("1 BIRT")
    assert lines[i + 1 : i + 6] == [
        "2 DATE 1900",
        "2 PLAC York",
        "3 MAP",
        "4 LATI N53.96",
        "4 LONG W1.08",
    ]


def test_event_place_falls_back_to_reference_token():
    person = Person(id="I1", events=[Event(type="DEAT", place_ref="place00099")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index("2 PLAC place00099")
    assert lines[i + 1] == "2 _PLAC_REF @place00099@"


def test_place_ref_is_kept_next_to_literal_place():
    person = Person(id="I1", events=[Event(type="BIRT", place="Old Mill", place_ref="place77")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index("1 BIRT")
    assert lines[i + 1 : i + 3] == ["2 PLAC Old Mill", "2 _PLAC_REF @place77@"]


def test_resolved_place_without_ref_writes_no_place_ref_line():
    person = Person(id="I1", events=[Event(type="BIRT", place="York", place_id="P1")])
    out = render_gedcom(_model_with(person, places=[Place(id="P1", name="York")]))
    assert "_PLAC_REF" not in out


def test_custom_event_becomes_even_with_type():
    person = Person(id="I1", events=[Event(type="Emigration", date="1925")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index("1 EVEN")
    assert lines[i + 1] == "2 TYPE Emigration"
    assert lines[i + 2] == "2 DATE 1925"


@pytest.mark.parametrize("event_type", ["OCCU", "_MILT", "RESI"])
def test_tag_shaped_custom_event_is_written_as_its_tag(event_type):
    person = Person(id="I1", events=[Event(type=event_type, date="1930")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index(f"1 {event_type}")
    assert lines[i + 1] == "2 DATE 1930"
    assert "1 EVEN" not in lines


def test_structural_tag_as_event_type_stays_even_with_type():
    person = Person(id="I1", events=[Event(type="NAME")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index("1 EVEN")
    assert lines[i + 1] == "2 TYPE NAME"


def test_ids_with_spaces_become_valid_pointers():
    model = _model_with(Person(id="ind 1", sex="M", fams=["fam 1"]))
    model.register_family(Family(id="fam 1", husb="ind 1"))
    lines = render_gedcom(model).splitlines()

    assert "0 @ind_1@ INDI" in lines
    assert "1 FAMS @fam_1@" in lines
    assert "0 @fam_1@ FAM" in lines
    assert "1 HUSB @ind_1@" in lines


def test_citation_with_page_and_data():
    person = Person(id="I1", sources=[SourceCitation(source_id="S1", page="p. 4", data="entry")])
    lines = render_gedcom(_model_with(person)).splitlines()

    i = lines.index("1 SOUR @S1@")
    assert lines[i + 1 : i + 4] == ["2 PAGE p. 4", "2 DATA", "3 TEXT entry"]


def test_multiline_value_uses_cont():
    model = parse_gedcom("0 @S1@ SOUR\n1 TITL First\n2 CONT Second\n0 TRLR\n")
    lines = render_gedcom(model).splitlines()

    i = lines.index("1 TITL First")
    assert lines[i + 1] == "2 CONT Second"


def test_gedcom_round_trip_preserves_records():
    original = parse_gedcom(mock_file_path("sample.ged").read_text(encoding="utf-8"))
    again = parse_gedcom(render_gedcom(original))

    assert list(again.persons) == list(original.persons)
    assert list(again.families) == list(original.families)

    for pid, person in original.persons.items():
        other = again.persons[pid]
        assert other.display_name == person.display_name
        assert other.sex == person.sex
        assert other.famc == person.famc
        assert other.fams == person.fams
        assert [(e.type, e.date, e.place) for e in other.events] == [
            (e.type, e.date, e.place) for e in person.events
        ]

    fam = again.families["F1"]
    assert (fam.husb, fam.wife, fam.chil) == ("I1", "I2", ["I3"])
    assert again.sources["S1"].title == original.sources["S1"].title
