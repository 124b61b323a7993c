"""Tests for the weather fetcher and response parsing."""

from unittest.mock import MagicMock

import pytest

from widget.ingest.owm_client import FetchError, OpenWeatherClient
from widget.ingest.weather_fetcher import WeatherFetcher, extract_reading
from widget.models.common import Unit
from widget.models.weather import CityQuery, CoordinateQuery


class TestExtractReading:
    def test_full_response(self, paris_metric: dict):
        reading = extract_reading(paris_metric)
        assert reading.name == "Paris"
        assert reading.country == "FR"
        assert reading.description == "scattered clouds"
        assert reading.icon == "03d"
        assert reading.temperature == 18.5
        assert reading.feels_like == 17.96
        assert reading.humidity == 63
        assert reading.wind_speed == 3.6
        assert reading.clouds == 40
        assert reading.pressure == 1016

    def test_empty_condition_list(self, paris_metric: dict):
        paris_metric["weather"] = []
        reading = extract_reading(paris_metric)
        assert reading.description == ""
        assert reading.icon == ""
        assert reading.temperature == 18.5

    def test_missing_blocks(self):
        reading = extract_reading({"name": "Nowhere"})
        assert reading.name == "Nowhere"
        assert reading.country == ""
        assert reading.temperature is None
        assert reading.wind_speed is None
        assert reading.clouds is None

    def test_wrong_types_ignored(self):
        reading = extract_reading(
            {"name": 5, "weather": "sunny", "main": {"temp": "hot", "humidity": True}}
        )
        assert reading.name == ""
        assert reading.description == ""
        assert reading.temperature is None
        assert reading.humidity is None


class TestWeatherFetcher:
    def test_city_query(self, paris_metric: dict):
        client = MagicMock(spec=OpenWeatherClient)
        client.get_current.return_value = paris_metric

        reading = WeatherFetcher(client).fetch(CityQuery("Paris"), Unit.METRIC)

        assert reading.name == "Paris"
        client.get_current.assert_called_once_with({"q": "Paris"}, Unit.METRIC)

    def test_coordinate_query(self, paris_metric: dict):
        client = MagicMock(spec=OpenWeatherClient)
        client.get_current.return_value = paris_metric

        WeatherFetcher(client).fetch(CoordinateQuery(48.85, 2.35), Unit.IMPERIAL)

        client.get_current.assert_called_once_with(
            {"lat": 48.85, "lon": 2.35}, Unit.IMPERIAL
        )

    def test_fetch_error_propagates(self):
        client = MagicMock(spec=OpenWeatherClient)
        client.get_current.side_effect = FetchError("city not found", 404)

        with pytest.raises(FetchError):
            WeatherFetcher(client).fetch(CityQuery("Atlantis"), Unit.METRIC)
