import pytest

from gno_converter.config import CONFIG_ENV_VAR, GCConfig, load_config


def test_project_config_is_loaded(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    cfg = load_config()
    assert cfg.default_dialect == "genopro"
    assert cfg.gedcom["source_tag"] == "GNO2GED"


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "custom.yml"
    path.write_text("conversion:\n  default_dialect: gramps\ndebug: true\n", encoding="utf-8")
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    cfg = load_config()
    assert cfg.default_dialect == "gramps"
    assert cfg.debug is True
    assert cfg.gedcom == {}


def test_missing_override_raises(tmp_path, monkeypatch):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yml"))
    with pytest.raises(FileNotFoundError):
        load_config()


def test_empty_config_defaults():
    assert GCConfig({}).default_dialect == "genopro"
