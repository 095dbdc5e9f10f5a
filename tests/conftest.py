import sys
from pathlib import Path

import pytest

# Make src/ importable without installing the package
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture(scope="session")
def sample_ged_text() -> str:
    from gno_converter.utils import mock_file_path

    return mock_file_path("sample.ged").read_text(encoding="utf-8")
