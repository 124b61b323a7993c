"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest
import yaml

from widget.ingest.owm_client import OpenWeatherClient
from widget.ingest.weather_fetcher import WeatherFetcher
from widget.storage.database import connect, run_migrations
from widget.storage.preferences import MemoryBackend, Preferences

TEST_BASE_URL = "https://test-owm.example.com/data/2.5/weather"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def paris_metric(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_paris_metric.json") as f:
        return json.load(f)


@pytest.fixture
def paris_imperial(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_paris_imperial.json") as f:
        return json.load(f)


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    return conn


@pytest.fixture
def owm_client() -> OpenWeatherClient:
    return OpenWeatherClient(api_key="test-key", base_url=TEST_BASE_URL)


@pytest.fixture
def fetcher(owm_client: OpenWeatherClient) -> WeatherFetcher:
    return WeatherFetcher(owm_client)


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def preferences(backend: MemoryBackend) -> Preferences:
    return Preferences(backend)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "api": {"base_url": TEST_BASE_URL, "api_key": "yaml-key"},
        "geolocation": {"enabled": False},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
