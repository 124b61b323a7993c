"""Display models: the rendered card and the widget's application state."""

from dataclasses import dataclass, field

from widget.models.common import Status, Unit


@dataclass(frozen=True)
class RenderModel:
    title: str  # "Paris, FR"
    city: str  # name used for re-fetching
    description: str
    icon_url: str
    icon_alt: str
    temperature: str
    feels_like: str
    humidity: str
    wind: str
    clouds: str
    pressure: str
    unit: Unit


@dataclass
class WidgetState:
    unit: Unit = Unit.METRIC
    favorites: list[str] = field(default_factory=list)
    status: Status = Status.IDLE
    error: str | None = None
    card: RenderModel | None = None
    current_city: str | None = None
    generation: int = 0
