"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from widget.models.common import Unit


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = "https://api.openweathermap.org/data/2.5/weather"
    api_key: str = ""
    icon_url_template: str = "https://openweathermap.org/img/wn/{icon}@2x.png"
    # None disables the client-side timeout entirely
    timeout_seconds: float | None = Field(default=None, gt=0.0)


class GeolocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    enabled: bool = True
    url: str = "http://ip-api.com/json"
    timeout_seconds: float = Field(default=10.0, gt=0.0)


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "127.0.0.1"
    port: int = Field(default=8777, ge=1, le=65535)


class WidgetConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    geolocation: GeolocationConfig = GeolocationConfig()
    dashboard: DashboardConfig = DashboardConfig()
    default_unit: Unit = Unit.METRIC
