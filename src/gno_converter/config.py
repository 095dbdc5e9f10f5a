import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gno_converter.yml"
CONFIG_ENV_VAR = "GNO_CONVERTER_CONFIG"


class GCConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.conversion = data.get("conversion", {}) or {}
        self.gedcom = data.get("gedcom", {}) or {}
        self.debug = data.get("debug", False)

    @property
    def default_dialect(self) -> str:
        return str(self.conversion.get("default_dialect", "genopro"))


def _config_path() -> tuple[Path, bool]:
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override), True
    return CONFIG_PATH, False


def load_config() -> 'GCConfig':
    path, explicit = _config_path()
    if not path.exists():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {path}")
        # Installed without the project tree; run on built-in defaults.
        return GCConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GCConfig(data)


_config_cache = None


def get_config() -> 'GCConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache
