"""Pure mapping from a WeatherReading to display-ready card values."""

import math

from widget.models.common import Unit
from widget.models.render import RenderModel
from widget.models.weather import WeatherReading

ICON_URL_TEMPLATE = "https://openweathermap.org/img/wn/{icon}@2x.png"

TEMP_SUFFIX = {Unit.METRIC: "°C", Unit.IMPERIAL: "°F"}
WIND_SUFFIX = {Unit.METRIC: "m/s", Unit.IMPERIAL: "mph"}


def render_card(
    reading: WeatherReading,
    unit: Unit,
    icon_url_template: str = ICON_URL_TEMPLATE,
) -> RenderModel:
    """Format every visible field of the card for the given unit.

    Missing values render as empty strings rather than failing the card.
    """
    temp_suffix = TEMP_SUFFIX[unit]
    if reading.icon:
        icon_url = icon_url_template.format(icon=reading.icon)
        icon_alt = reading.description or "weather icon"
    else:
        icon_url = ""
        icon_alt = ""

    temperature = _degrees(reading.temperature, temp_suffix)
    feels = _degrees(reading.feels_like, temp_suffix)

    return RenderModel(
        title=_title(reading),
        city=reading.name,
        description=reading.description,
        icon_url=icon_url,
        icon_alt=icon_alt,
        temperature=temperature,
        feels_like=f"Feels like {feels}" if feels else "",
        humidity=_percent(reading.humidity),
        wind=_measure(reading.wind_speed, WIND_SUFFIX[unit]),
        clouds=_percent(reading.clouds),
        pressure=_measure(reading.pressure, "hPa"),
        unit=unit,
    )


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def _title(reading: WeatherReading) -> str:
    if reading.name and reading.country:
        return f"{reading.name}, {reading.country}"
    return reading.name or reading.country


def _degrees(value: float | None, suffix: str) -> str:
    if value is None:
        return ""
    return f"{round_half_up(value)}{suffix}"


def _percent(value: float | None) -> str:
    if value is None:
        return ""
    return f"{round_half_up(value)}%"


def _measure(value: float | None, suffix: str) -> str:
    if value is None:
        return ""
    return f"{_plain_number(value)} {suffix}"


def _plain_number(value: float) -> str:
    # 4.0 -> "4", 3.6 -> "3.6"
    if value == int(value):
        return str(int(value))
    return repr(value)
