"""YAML config loader with environment fallback and runtime get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from widget.config.defaults import API_KEY_ENV
from widget.config.schema import WidgetConfig


def load_config(path: str | Path | None = None) -> WidgetConfig:
    """Load and validate config from a YAML file.

    With no path, the built-in defaults are used. If no API key is set in
    the YAML, it is taken from the OPENWEATHER_API_KEY environment variable.
    """
    raw: dict[str, Any] = {}
    if path is not None:
        with open(Path(path)) as f:
            raw = yaml.safe_load(f) or {}

    api = raw.setdefault("api", {}) or {}
    raw["api"] = api
    if not api.get("api_key"):
        env_key = os.environ.get(API_KEY_ENV, "")
        if env_key:
            api["api_key"] = env_key

    return WidgetConfig(**raw)


def get_config_value(config: WidgetConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: WidgetConfig, dotted_key: str, value: Any) -> WidgetConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new WidgetConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return WidgetConfig(**data)
