import gzip
from dataclasses import fields
from xml.etree import ElementTree as ET

import pytest

from gno_converter import (
    ConversionError,
    FormatValidationError,
    UnsupportedOptionError,
    ged_to_gno,
    gno_to_ged,
)
from gno_converter.core import ConversionContext
from gno_converter.core.pipeline import Pipeline
from gno_converter.config import get_config
from gno_converter.logging import get_logger
from gno_converter.utils import mock_file_path

MINIMAL = "0 HEAD\n1 CHAR UTF-8\n0 TRLR\n"
JOHN_DOE = "0 HEAD\n1 CHAR UTF-8\n0 @I1@ INDI\n1 NAME John /Doe/\n0 TRLR\n"


def test_minimal_document_converts_to_non_empty_xml():
    payload = ged_to_gno(MINIMAL)
    assert isinstance(payload, bytes)
    assert payload.startswith(b'<?xml version="1.0" encoding="UTF-8"?>')
    root = ET.fromstring(payload)
    assert root.findall(".//Individual") == []


def test_john_doe_example():
    root = ET.fromstring(ged_to_gno(JOHN_DOE))
    individuals = root.findall("Individuals/Individual")

    assert len(individuals) == 1
    john = individuals[0]
    assert john.get("ID") == "I1"
    assert john.findtext("Name/First") == "John"
    assert john.findtext("Name/Last") == "Doe"
    assert john.find("Gender") is None
    assert john.find("Birth") is None


def test_gzip_output_is_transparent():
    plain = ged_to_gno(JOHN_DOE)
    packed = ged_to_gno(JOHN_DOE, gzip=True)
    assert gzip.decompress(packed) == plain
    assert gno_to_ged(packed) == gno_to_ged(plain)


def test_zip_output_is_rejected():
    with pytest.raises(UnsupportedOptionError):
        ged_to_gno(MINIMAL, zip=True)


def test_unknown_dialect_is_rejected():
    with pytest.raises(UnsupportedOptionError):
        ged_to_gno(MINIMAL, dialect="paf")


@pytest.mark.parametrize("dialect", ["genopro", "generic", "gramps", "legacy", "myheritage"])
def test_round_trip_through_each_dialect(dialect):
    ged_text = mock_file_path("sample.ged").read_text(encoding="utf-8")
    back = gno_to_ged(ged_to_gno(ged_text, dialect=dialect), tree_name="sample")
    lines = back.splitlines()

    assert "1 NAME John /Smith/" in lines
    assert "1 NAME Mary /Jones/" in lines
    assert "1 CHIL @I3@" in lines
    assert "1 FILE sample.gno" in lines
    assert back.endswith("0 TRLR\n")


def test_gno_file_to_gedcom():
    ged = gno_to_ged(mock_file_path("sample_genopro.gno"))
    lines = ged.splitlines()

    assert "0 @ind00001@ INDI" in lines
    assert "1 NAME Henry /Walker/" in lines
    assert "2 PLAC York, England" in lines
    assert "2 PLAC place00099" in lines
    assert "1 HUSB @ind00001@" in lines


@pytest.mark.parametrize("payload", [b"invalid xml data", bytes([1, 2, 3])])
def test_invalid_buffers_are_rejected(payload):
    with pytest.raises(FormatValidationError):
        gno_to_ged(payload)


def test_missing_path_is_wrapped_in_conversion_error(tmp_path):
    with pytest.raises(ConversionError) as excinfo:
        gno_to_ged(tmp_path / "dummy.gno")
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_pipeline_records_stats_and_errors():
    ctx = ConversionContext(config=get_config(), logger=get_logger("pipeline"))
    Pipeline(ctx).ged_to_gno(JOHN_DOE)
    assert ctx.stats["persons"] == 1

    failing = ConversionContext(config=get_config(), logger=get_logger("pipeline"))
    with pytest.raises(FormatValidationError):
        Pipeline(failing).gno_to_ged(b"not xml")
    assert failing.errors


def test_context_carries_only_call_options():
    names = {f.name for f in fields(ConversionContext)}
    assert names == {"config", "logger", "dialect", "gzip", "zip", "tree_name", "stats", "errors"}


def test_gno_to_ged_keeps_place_reference_and_spaced_ids():
    xml = (
        b'<?xml version="1.0" encoding="UTF-8"?>'
        b"<GenoPro><Individuals>"
        b'<Individual ID="ind 1"><Name>Ann Hale</Name><Birth Place="place77"/></Individual>'
        b'</Individuals><Families><Family ID="fam 1" Husband="ind 1"/></Families></GenoPro>'
    )
    lines = gno_to_ged(xml).splitlines()

    i = lines.index("1 BIRT")
    assert lines[i + 1 : i + 3] == ["2 PLAC place77", "2 _PLAC_REF @place77@"]
    assert "0 @ind_1@ INDI" in lines
    assert "1 HUSB @ind_1@" in lines
    assert "1 FAMS @fam_1@" in lines
