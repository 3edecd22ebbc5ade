import json
import sys
from pathlib import Path

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
FIXTURES = Path(__file__).resolve().parent / "fixtures"

# Prefer repo sources over any installed package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    from quebec_property_lookup.settings import reset_settings_cache

    for name in ("QPL_PROVINCE", "QPL_DEFAULT_MUNICIPALITY", "QPL_STRICT", "QPL_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


def load_fixture(name):
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture
def kirkland_record():
    return load_fixture("kirkland_record.json")


@pytest.fixture
def co_owners_record():
    return load_fixture("co_owners_record.json")
