"""Weather fetcher: turns a query into a parsed WeatherReading."""

import logging
import math

from widget.ingest.owm_client import OpenWeatherClient
from widget.models.common import Unit
from widget.models.weather import WeatherQuery, WeatherReading

logger = logging.getLogger(__name__)


class WeatherFetcher:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    def fetch(self, query: WeatherQuery, unit: Unit) -> WeatherReading:
        """Fetch and parse current conditions. FetchError propagates."""
        raw = self.client.get_current(query.to_params(), unit)
        reading = extract_reading(raw)
        logger.info("Fetched %s (%s)", reading.name or query, unit.value)
        return reading


def extract_reading(raw: dict) -> WeatherReading:
    """Map an OpenWeatherMap response onto a WeatherReading.

    Missing blocks degrade field by field: text becomes "" and numbers None.
    """
    conditions = raw.get("weather")
    first = conditions[0] if isinstance(conditions, list) and conditions else {}
    if not isinstance(first, dict):
        first = {}
    main = _block(raw, "main")
    sys_block = _block(raw, "sys")

    return WeatherReading(
        name=_text(raw.get("name")),
        country=_text(sys_block.get("country")),
        description=_text(first.get("description")),
        icon=_text(first.get("icon")),
        temperature=_number(main.get("temp")),
        feels_like=_number(main.get("feels_like")),
        humidity=_number(main.get("humidity")),
        wind_speed=_number(_block(raw, "wind").get("speed")),
        clouds=_number(_block(raw, "clouds").get("all")),
        pressure=_number(main.get("pressure")),
    )


def _block(raw: dict, key: str) -> dict:
    value = raw.get(key)
    return value if isinstance(value, dict) else {}


def _text(value: object) -> str:
    return value if isinstance(value, str) else ""


def _number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    return number if math.isfinite(number) else None
