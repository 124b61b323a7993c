"""Widget orchestration: UI triggers, state transitions and persistence."""

import logging
import sqlite3
import threading

from widget.config.defaults import (
    CITY_LOOKUP_ERROR,
    COORDS_LOOKUP_ERROR,
    EMPTY_SEARCH_ERROR,
    GEOLOCATION_FAILED_ERROR,
    GEOLOCATION_UNAVAILABLE_ERROR,
)
from widget.config.schema import WidgetConfig
from widget.ingest.geolocation import GeolocationError, Geolocator, IpGeolocator
from widget.ingest.owm_client import FetchError, OpenWeatherClient
from widget.ingest.weather_fetcher import WeatherFetcher
from widget.models.common import Status, Unit
from widget.models.render import RenderModel, WidgetState
from widget.models.weather import CityQuery, CoordinateQuery, WeatherQuery
from widget.render.renderer import ICON_URL_TEMPLATE, render_card
from widget.storage.preferences import Preferences, SqliteBackend

logger = logging.getLogger(__name__)


class WeatherWidget:
    """Owns the widget state and handles every user trigger.

    Each fetch takes a new generation number. A result is applied only if
    no newer fetch has started since, so a slow stale response can never
    overwrite a fresher card or error. The lock guards state only and is
    never held across the network call.
    """

    def __init__(
        self,
        fetcher: WeatherFetcher,
        preferences: Preferences,
        geolocator: Geolocator | None = None,
        icon_url_template: str = ICON_URL_TEMPLATE,
    ):
        self.fetcher = fetcher
        self.preferences = preferences
        self.geolocator = geolocator
        self.icon_url_template = icon_url_template
        self._lock = threading.Lock()
        self.state = WidgetState(
            unit=preferences.get_unit(),
            favorites=preferences.get_favorites(),
        )

    # --- Lookups ---

    def on_load(self) -> RenderModel | None:
        """Show the last successfully displayed city, if there is one."""
        last = self.preferences.get_last_city()
        if not last:
            return None
        logger.info("Restoring last city %s", last)
        return self.fetch_by_city(last)

    def search(self, text: str) -> RenderModel | None:
        query = text.strip()
        if not query:
            self._show_error(EMPTY_SEARCH_ERROR)
            return None
        return self.fetch_by_city(query)

    def fetch_by_city(self, city: str) -> RenderModel | None:
        if not city:
            return None
        return self._lookup(CityQuery(city), CITY_LOOKUP_ERROR)

    def fetch_by_coords(self, latitude: float, longitude: float) -> RenderModel | None:
        return self._lookup(CoordinateQuery(latitude, longitude), COORDS_LOOKUP_ERROR)

    def locate(self) -> RenderModel | None:
        """Look up weather at the current position."""
        if self.geolocator is None:
            self._show_error(GEOLOCATION_UNAVAILABLE_ERROR)
            return None
        try:
            position = self.geolocator.locate()
        except GeolocationError as e:
            logger.warning("Geolocation failed: %s", e)
            self._show_error(GEOLOCATION_FAILED_ERROR)
            return None
        return self.fetch_by_coords(position.latitude, position.longitude)

    def select_favorite(self, index: int) -> RenderModel | None:
        """Look up the favorite at a position. Raises IndexError when out of range."""
        with self._lock:
            if not 0 <= index < len(self.state.favorites):
                raise IndexError(f"No favorite at position {index}")
            city = self.state.favorites[index]
        return self.fetch_by_city(city)

    # --- Preferences ---

    def change_unit(self, unit: Unit) -> RenderModel | None:
        """Persist a new unit and re-fetch the displayed city in that unit."""
        unit = Unit(unit)
        with self._lock:
            self.state.unit = unit
            self.preferences.set_unit(unit)
            current = self.state.current_city
        logger.info("Unit changed to %s", unit.value)
        if current:
            return self.fetch_by_city(current)
        return None

    def add_favorite(self, name: str) -> list[str]:
        """Save a city name. Blank names and duplicates are ignored."""
        name = name.strip()
        with self._lock:
            if name:
                self.state.favorites = self.preferences.add_favorite(name)
            return list(self.state.favorites)

    def remove_favorite(self, index: int) -> list[str]:
        with self._lock:
            self.state.favorites = self.preferences.remove_favorite(index)
            return list(self.state.favorites)

    # --- Internals ---

    def _lookup(self, query: WeatherQuery, failure_message: str) -> RenderModel | None:
        with self._lock:
            self.state.generation += 1
            generation = self.state.generation
            self.state.status = Status.LOADING
            self.state.error = None
            unit = self.state.unit

        try:
            reading = self.fetcher.fetch(query, unit)
        except FetchError as e:
            logger.error("Lookup failed for %s: %s", query, e.message)
            self._fail(generation, failure_message)
            return None

        try:
            card = render_card(reading, unit, self.icon_url_template)
        except (KeyError, IndexError, ValueError):
            logger.exception("Failed to render card for %s", query)
            self._fail(generation, failure_message)
            return None

        with self._lock:
            if self._is_stale(generation):
                return None
            if reading.name:
                try:
                    self.preferences.set_last_city(reading.name)
                except sqlite3.Error:
                    logger.exception("Failed to save last city %s", reading.name)
                    self.state.status = Status.ERROR
                    self.state.error = failure_message
                    return None
            self.state.card = card
            self.state.status = Status.DISPLAYING
            self.state.error = None
            self.state.current_city = reading.name or None
        return card

    def _fail(self, generation: int, message: str) -> None:
        with self._lock:
            if self._is_stale(generation):
                return
            self.state.status = Status.ERROR
            self.state.error = message

    def _is_stale(self, generation: int) -> bool:
        if generation != self.state.generation:
            logger.info(
                "Discarding result of request %d, newer request %d started",
                generation, self.state.generation,
            )
            return True
        return False

    def _show_error(self, message: str) -> None:
        """Show an error from an action that never fetched.

        Takes a generation so any lookup still in flight is dropped.
        """
        with self._lock:
            self.state.generation += 1
            self.state.status = Status.ERROR
            self.state.error = message


def build_widget(config: WidgetConfig, conn: sqlite3.Connection) -> WeatherWidget:
    """Wire a widget from config onto an already-migrated database."""
    client = OpenWeatherClient(
        api_key=config.api.api_key,
        base_url=config.api.base_url,
        timeout=config.api.timeout_seconds,
    )
    geolocator = None
    if config.geolocation.enabled:
        geolocator = IpGeolocator(
            url=config.geolocation.url,
            timeout=config.geolocation.timeout_seconds,
        )
    preferences = Preferences(SqliteBackend(conn), default_unit=config.default_unit)
    return WeatherWidget(
        WeatherFetcher(client),
        preferences,
        geolocator=geolocator,
        icon_url_template=config.api.icon_url_template,
    )
