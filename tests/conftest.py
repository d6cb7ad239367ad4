"""
Shared test fixtures and utilities for facetsearch tests.

This module provides common fixtures, test records and helper functions
to reduce code duplication and improve test consistency across the test suite.
"""

from pathlib import Path

import orjson
import pytest

from facetsearch import FacetSearch, Record, RecordStore, SearchConfig
from facetsearch.utils import logging_config

SPANISH = Record(
    id="es",
    name="Spanish",
    native_name="Español",
    tier=1,
    family="Indo-European",
    subfamily="Romance",
    places=("Spain", "Mexico"),
    overall_score=3,
    population_count=500_000_000,
    study_hours=600,
)

MANDARIN = Record(
    id="zh",
    name="Mandarin Chinese",
    native_name="中文",
    tier=5,
    family="Sino-Tibetan",
    subfamily="Sinitic",
    places=("China", "Taiwan", "Singapore"),
    overall_score=9,
    population_count=918_000_000,
    study_hours=2200,
)

PORTUGUESE = Record(
    id="pt",
    name="Portuguese",
    native_name="Português",
    tier=1,
    family="Indo-European",
    subfamily="Romance",
    places=("Brazil", "Portugal"),
    overall_score=3,
    population_count=260_000_000,
    study_hours=600,
)

GERMAN = Record(
    id="de",
    name="German",
    native_name="Deutsch",
    tier=2,
    family="Indo-European",
    subfamily="Germanic",
    places=("Germany", "Austria", "Switzerland"),
    overall_score=5,
    population_count=100_000_000,
    study_hours=900,
)

JAPANESE = Record(
    id="ja",
    name="Japanese",
    native_name="日本語",
    tier=5,
    family="Japonic",
    subfamily="Japanese",
    places=("Japan",),
    overall_score=9,
    population_count=125_000_000,
    study_hours=2200,
)

SWAHILI = Record(
    id="sw",
    name="Swahili",
    native_name="Kiswahili",
    tier=2,
    family="Niger-Congo",
    subfamily="Bantu",
    places=("Tanzania", "Kenya"),
    overall_score=4,
    population_count=200_000_000,
    study_hours=900,
)

SAMPLE_RECORDS = (SPANISH, PORTUGUESE, GERMAN, SWAHILI, MANDARIN, JAPANESE)

# Raw catalogue entries using the camelCase / nested aliases of older exports
LEGACY_RAW_RECORD = {
    "id": "it",
    "name": "Italian",
    "localName": "Italiano",
    "countries": ["Italy", "San Marino"],
    "fsi": {"category": 1, "hours": 600},
    "difficulty": {"overall": 3},
    "family": "Indo-European",
    "subfamily": "Romance",
    "writingSystem": "Latin",
    "speakers": 65_000_000,
    "flagEmoji": "🇮🇹",
    "color": "#28a745",
}


def raw_record(record: Record) -> dict:
    """Canonical raw mapping for a record, as stored in catalogue files."""
    return {
        "id": record.id,
        "name": record.name,
        "native_name": record.native_name,
        "tier": record.tier,
        "family": record.family,
        "subfamily": record.subfamily,
        "places": list(record.places),
        "overall_score": record.overall_score,
        "population_count": record.population_count,
        "study_hours": record.study_hours,
    }


@pytest.fixture(autouse=True)
def reset_global_logger(monkeypatch):
    """Give every test a fresh global logger."""
    monkeypatch.setattr(logging_config, "_global_logger", None)
    yield


@pytest.fixture
def two_record_store():
    """Store with Spanish and Mandarin Chinese only."""
    return RecordStore([SPANISH, MANDARIN])


@pytest.fixture
def sample_store():
    """Store with six records across four tiers and four families."""
    return RecordStore(SAMPLE_RECORDS)


@pytest.fixture
def default_config():
    return SearchConfig()


@pytest.fixture
def two_record_engine(two_record_store):
    engine = FacetSearch(store=two_record_store)
    yield engine
    engine.close()


@pytest.fixture
def sample_engine(sample_store):
    engine = FacetSearch(store=sample_store)
    yield engine
    engine.close()


@pytest.fixture
def catalogue_file(tmp_path: Path) -> Path:
    """Catalogue JSON file holding the sample records."""
    path = tmp_path / "catalogue.json"
    path.write_bytes(orjson.dumps({"records": [raw_record(r) for r in SAMPLE_RECORDS]}))
    return path


# Markers for different test categories
pytest_plugins = []


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take longer to run")
    config.addinivalue_line("markers", "api: API-related tests")
    config.addinivalue_line("markers", "cli: CLI-related tests")
    config.addinivalue_line("markers", "search: Scoring and search tests")
    config.addinivalue_line("markers", "state: Filter state tests")
