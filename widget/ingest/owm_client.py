"""OpenWeatherMap current-conditions client. One request per call, no retry."""

import logging

import httpx

from widget.config.defaults import GENERIC_FETCH_ERROR
from widget.models.common import Unit

logger = logging.getLogger(__name__)

OWM_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"


class FetchError(Exception):
    """Raised when a weather lookup fails at the HTTP, JSON or network level."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OWM_BASE_URL,
        timeout: float | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        if not api_key:
            logger.warning("No OpenWeatherMap API key configured; lookups will be rejected")

    def weather_url(self, params: dict, unit: Unit) -> str:
        """Build the request URL: query params first, then appid and units."""
        query = [(k, str(v)) for k, v in params.items()]
        query.append(("appid", self.api_key))
        query.append(("units", unit.value))
        return str(httpx.URL(self.base_url, params=query))

    def get_current(self, params: dict, unit: Unit) -> dict:
        """Fetch current conditions and return the decoded JSON object.

        Raises FetchError on non-2xx responses, undecodable bodies and
        transport failures. The API's own error message is preferred when
        the error body carries one.
        """
        url = self.weather_url(params, unit)
        try:
            resp = httpx.get(url, timeout=self.timeout)
        except httpx.RequestError as e:
            logger.error("Weather request failed for %s: %s", params, e)
            raise FetchError(GENERIC_FETCH_ERROR) from e

        if not resp.is_success:
            message = _error_message(resp)
            logger.error(
                "Weather API %d for %s: %s", resp.status_code, params, message
            )
            raise FetchError(message, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error("Weather API returned malformed JSON for %s", params)
            raise FetchError(GENERIC_FETCH_ERROR, resp.status_code) from e
        if not isinstance(data, dict):
            logger.error("Weather API returned non-object JSON for %s", params)
            raise FetchError(GENERIC_FETCH_ERROR, resp.status_code)
        return data


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return GENERIC_FETCH_ERROR
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return GENERIC_FETCH_ERROR
