"""Weather query and reading models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CityQuery:
    city: str

    def to_params(self) -> dict[str, str]:
        return {"q": self.city}


@dataclass(frozen=True)
class CoordinateQuery:
    latitude: float
    longitude: float

    def to_params(self) -> dict[str, float]:
        return {"lat": self.latitude, "lon": self.longitude}


WeatherQuery = CityQuery | CoordinateQuery


@dataclass(frozen=True)
class WeatherReading:
    name: str
    country: str
    description: str
    icon: str
    temperature: float | None
    feels_like: float | None
    humidity: float | None
    wind_speed: float | None
    clouds: float | None
    pressure: float | None
