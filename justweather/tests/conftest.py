"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from justweather.config.schema import AppConfig
from justweather.storage.database import connect, run_migrations
from justweather.storage.location_store import SavedLocationStore

FIXTURE_DIR = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    with open(FIXTURE_DIR / name) as f:
        return json.load(f)


@pytest.fixture
def tmp_db(tmp_path: Path) -> sqlite3.Connection:
    """A migrated temporary SQLite database."""
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    yield conn
    conn.close()


@pytest.fixture
def store(tmp_db: sqlite3.Connection) -> SavedLocationStore:
    return SavedLocationStore(tmp_db)


@pytest.fixture
def default_config(tmp_path: Path) -> AppConfig:
    """Default config pointed at test hosts and a temporary database."""
    return AppConfig(
        api={
            "open_meteo_base_url": "https://test-meteo.example.com",
            "geocoding_base_url": "https://test-geo.example.com",
            "max_retries": 0,
            "retry_base_delay": 0.0,
        },
        storage={"db_path": str(tmp_path / "app.db")},
    )


@pytest.fixture
def config_yaml_path(tmp_path: Path, default_config: AppConfig) -> Path:
    """Write the default test config as YAML and return its path."""
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(json.loads(default_config.model_dump_json()), f)
    return path


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURE_DIR


@pytest.fixture
def current_nyc() -> dict:
    return load_fixture("open_meteo_current_nyc.json")


@pytest.fixture
def hourly_nyc() -> dict:
    return load_fixture("open_meteo_hourly_nyc.json")


@pytest.fixture
def precipitation_nyc() -> dict:
    return load_fixture("open_meteo_precipitation_nyc.json")


@pytest.fixture
def reverse_nyc() -> dict:
    return load_fixture("nominatim_reverse_nyc.json")
