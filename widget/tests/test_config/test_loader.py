"""Tests for config loading, environment fallback, and get/set."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from widget.config.loader import get_config_value, load_config, set_config_value
from widget.config.schema import WidgetConfig
from widget.models.common import Unit


class TestLoadConfig:
    def test_load_from_yaml(self, config_yaml_path: Path):
        config = load_config(config_yaml_path)
        assert config.api.api_key == "yaml-key"
        assert config.geolocation.enabled is False

    def test_no_path_uses_defaults(self, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        config = load_config()
        assert config.api.base_url == "https://api.openweathermap.org/data/2.5/weather"
        assert config.api.api_key == ""
        assert config.default_unit == Unit.METRIC

    def test_empty_yaml_uses_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = load_config(path)
        assert config.geolocation.timeout_seconds == 10.0
        assert config.api.timeout_seconds is None

    def test_api_key_from_env(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).api.api_key == "env-key"

    def test_yaml_key_wins_over_env(self, config_yaml_path: Path, monkeypatch):
        monkeypatch.setenv("OPENWEATHER_API_KEY", "env-key")
        assert load_config(config_yaml_path).api.api_key == "yaml-key"

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "bad.yaml"
        with open(path, "w") as f:
            yaml.dump({"api": {"endpoint": "x"}}, f)
        with pytest.raises(ValidationError):
            load_config(path)

    def test_imperial_default_unit(self, tmp_path: Path):
        path = tmp_path / "imperial.yaml"
        path.write_text("default_unit: imperial\n")
        assert load_config(path).default_unit == Unit.IMPERIAL


class TestGetConfigValue:
    def test_dotted_key(self):
        assert get_config_value(WidgetConfig(), "dashboard.port") == 8777

    def test_invalid_key(self):
        with pytest.raises(KeyError):
            get_config_value(WidgetConfig(), "api.nonexistent")


class TestSetConfigValue:
    def test_set_and_revalidate(self):
        new_config = set_config_value(WidgetConfig(), "geolocation.timeout_seconds", "5")
        assert new_config.geolocation.timeout_seconds == 5.0

    def test_bool_coercion(self):
        new_config = set_config_value(WidgetConfig(), "geolocation.enabled", "false")
        assert new_config.geolocation.enabled is False

    def test_optional_timeout(self):
        new_config = set_config_value(WidgetConfig(), "api.timeout_seconds", "12.5")
        assert new_config.api.timeout_seconds == 12.5

    def test_invalid_value_raises(self):
        with pytest.raises(ValidationError):
            set_config_value(WidgetConfig(), "dashboard.port", "0")

    def test_unknown_key_raises(self):
        with pytest.raises(KeyError):
            set_config_value(WidgetConfig(), "api.endpoint", "x")
