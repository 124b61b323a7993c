"""Preference store: unit, favorites and last city over a key-value backend."""

import json
import logging
import sqlite3
from typing import Protocol

from widget.config.defaults import FAVORITES_KEY, LAST_CITY_KEY, UNIT_KEY
from widget.models.common import Unit
from widget.storage import preference_repo

logger = logging.getLogger(__name__)


class KeyValueBackend(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class SqliteBackend:
    """Durable backend stored in the preferences table."""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get(self, key: str) -> str | None:
        return preference_repo.get_preference(self.conn, key)

    def set(self, key: str, value: str) -> None:
        preference_repo.set_preference(self.conn, key, value)


class MemoryBackend:
    """Process-local backend, used as a substitute in tests."""

    def __init__(self, initial: dict[str, str] | None = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class Preferences:
    """Typed reads and writes for the three stored preferences.

    Reads never raise: missing or unparsable values fall back to metric,
    an empty favorites list, or no last city. Writes store the full value.
    """

    def __init__(self, backend: KeyValueBackend, default_unit: Unit = Unit.METRIC):
        self.backend = backend
        self.default_unit = default_unit

    # --- Unit ---

    def get_unit(self) -> Unit:
        raw = self.backend.get(UNIT_KEY)
        if raw is None:
            return self.default_unit
        try:
            return Unit(raw)
        except ValueError:
            logger.warning("Ignoring unknown stored unit %r", raw)
            return self.default_unit

    def set_unit(self, unit: Unit) -> None:
        self.backend.set(UNIT_KEY, Unit(unit).value)

    # --- Favorites ---

    def get_favorites(self) -> list[str]:
        raw = self.backend.get(FAVORITES_KEY)
        if raw is None:
            return []
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Stored favorites are not valid JSON, ignoring")
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            logger.warning("Stored favorites are not a list of names, ignoring")
            return []
        return value

    def add_favorite(self, name: str) -> list[str]:
        """Append a city name unless it is already saved. Returns the list."""
        favorites = self.get_favorites()
        if name not in favorites:
            favorites.append(name)
            self._save_favorites(favorites)
        return favorites

    def remove_favorite(self, index: int) -> list[str]:
        """Remove the favorite at a position. Raises IndexError when out of range."""
        favorites = self.get_favorites()
        if not 0 <= index < len(favorites):
            raise IndexError(f"No favorite at position {index}")
        del favorites[index]
        self._save_favorites(favorites)
        return favorites

    def _save_favorites(self, favorites: list[str]) -> None:
        self.backend.set(FAVORITES_KEY, json.dumps(favorites, ensure_ascii=False))

    # --- Last city ---

    def get_last_city(self) -> str | None:
        return self.backend.get(LAST_CITY_KEY) or None

    def set_last_city(self, name: str) -> None:
        self.backend.set(LAST_CITY_KEY, name)
