import os
import sys

import pytest

# Ensure the `src/` directory is on sys.path so we can import `nkp_search` package
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

FIXTURE_CSV = os.path.join(os.path.dirname(__file__), "fixtures", "nkp_sample.csv")

# The API reads its configuration at import time
os.environ.setdefault("DATASET_SOURCE", FIXTURE_CSV)
os.environ.setdefault("DATASET_CACHE_TTL", "0")
os.environ.setdefault("APP_ENV", "test")


@pytest.fixture
def sample_rows():
    from nkp_search.data.loader import load_rows
    return load_rows(FIXTURE_CSV)


@pytest.fixture
def taxonomy():
    from nkp_search.taxonomy import as_taxonomy
    return as_taxonomy([
        {"label": "दुनियाबादी देवानी", "value": "1", "names": [
            {"label": "अंश", "value": "101"},
            {"label": "लिखत बदर", "value": "104"},
            {"label": "दर्ता बदर", "value": "109"},
        ]},
        {"label": "सरकारबादी देवानी", "value": "2", "names": [
            {"label": "दर्ता बदर", "value": "203"},
        ]},
        {"label": "दुनियावादी फौजदारी", "value": "3", "names": [
            {"label": "घरेलु हिंसा", "value": "303"},
        ]},
        {"label": "सरकारवादी फौजदारी", "value": "4", "names": [
            {"label": "कर्तव्य ज्यान", "value": "401"},
        ]},
        {"label": "रिट", "value": 5, "names": [
            {"label": "उत्प्रेषण", "value": 501},
        ]},
    ])
