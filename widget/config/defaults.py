"""User-facing messages and storage keys shared by the widget."""

API_KEY_ENV = "OPENWEATHER_API_KEY"

UNIT_KEY = "weather_unit"
FAVORITES_KEY = "weather_favs"
LAST_CITY_KEY = "weather_last"

GENERIC_FETCH_ERROR = "Unable to fetch weather"
CITY_LOOKUP_ERROR = (
    "City not found or API error. Make sure your API key is valid "
    "and you have network access."
)
COORDS_LOOKUP_ERROR = "Unable to fetch weather for your location."
EMPTY_SEARCH_ERROR = "Enter a city name to search."
GEOLOCATION_UNAVAILABLE_ERROR = "Geolocation is not available."
GEOLOCATION_FAILED_ERROR = "Permission denied or unable to get location."
