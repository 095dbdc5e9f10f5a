import gzip

from typer.testing import CliRunner

from gno_converter.cli import app
from gno_converter.utils import mock_file_path

runner = CliRunner()


def test_ged_to_gno_writes_file(tmp_path):
    out = tmp_path / "tree.gno"
    result = runner.invoke(app, ["ged-to-gno", str(mock_file_path("sample.ged")), "-o", str(out)])

    assert result.exit_code == 0, result.output
    assert out.read_bytes().startswith(b"<?xml")


def test_ged_to_gno_gzip_and_dialect(tmp_path):
    out = tmp_path / "tree.gno"
    result = runner.invoke(
        app,
        ["ged-to-gno", str(mock_file_path("sample.ged")), "-o", str(out), "--dialect", "gramps", "--gzip"],
    )

    assert result.exit_code == 0, result.output
    assert b"gramps-project.org" in gzip.decompress(out.read_bytes())


def test_ged_to_gno_zip_fails_cleanly(tmp_path):
    out = tmp_path / "tree.gno"
    result = runner.invoke(app, ["ged-to-gno", str(mock_file_path("sample.ged")), "-o", str(out), "--zip"])

    assert result.exit_code == 1
    assert "Conversion failed" in result.output
    assert not out.exists()


def test_gno_to_ged_defaults_tree_name_to_file_stem(tmp_path):
    out = tmp_path / "walker.ged"
    result = runner.invoke(app, ["gno-to-ged", str(mock_file_path("sample_genopro.gno")), "-o", str(out)])

    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert "1 FILE sample_genopro.gno" in text.splitlines()
    assert text.endswith("0 TRLR\n")


def test_gno_to_ged_rejects_non_xml(tmp_path):
    bad = tmp_path / "bad.gno"
    bad.write_bytes(b"invalid xml data")
    result = runner.invoke(app, ["gno-to-ged", str(bad), "-o", str(tmp_path / "out.ged")])

    assert result.exit_code == 1


def test_stats_on_gedcom_and_gno():
    for path in (mock_file_path("sample.ged"), mock_file_path("sample_genopro.gno")):
        result = runner.invoke(app, ["stats", str(path)])
        assert result.exit_code == 0, result.output
        assert "Persons" in result.output
        assert "3" in result.output
