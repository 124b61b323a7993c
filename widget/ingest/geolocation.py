"""Position providers used by the "use my location" trigger."""

import logging
from typing import Protocol

import httpx

from widget.models.weather import CoordinateQuery

logger = logging.getLogger(__name__)

IP_API_URL = "http://ip-api.com/json"


class GeolocationError(Exception):
    """Raised when a position cannot be acquired (denied, unavailable, timeout)."""


class Geolocator(Protocol):
    def locate(self) -> CoordinateQuery: ...


class IpGeolocator:
    """Resolves the caller's approximate position from its public IP address."""

    def __init__(self, url: str = IP_API_URL, timeout: float = 10.0):
        self.url = url
        self.timeout = timeout

    def locate(self) -> CoordinateQuery:
        try:
            resp = httpx.get(self.url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except httpx.TimeoutException as e:
            raise GeolocationError("Timed out acquiring position") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("IP geolocation failed: %s", e)
            raise GeolocationError(f"Position unavailable: {e}") from e

        if not isinstance(data, dict) or data.get("status") != "success":
            reason = data.get("message", "unknown") if isinstance(data, dict) else "bad body"
            raise GeolocationError(f"Position unavailable: {reason}")
        try:
            return CoordinateQuery(float(data["lat"]), float(data["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            raise GeolocationError("Position missing from geolocation response") from e

