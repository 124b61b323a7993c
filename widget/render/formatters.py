"""Output formatters for cards and widget state."""

import json

from widget.models.render import RenderModel, WidgetState


def format_card_text(card: RenderModel) -> str:
    """Plain text card for the terminal."""
    lines = [f"=== {card.title} ==="]
    if card.description:
        lines.append(card.description.capitalize())
    lines.append(f"{card.temperature} ({card.feels_like})" if card.feels_like else card.temperature)
    lines.append(
        f"Humidity: {card.humidity} | Wind: {card.wind} | "
        f"Clouds: {card.clouds} | Pressure: {card.pressure}"
    )
    if card.icon_url:
        lines.append(f"Icon: {card.icon_url}")
    return "\n".join(lines)


def card_to_dict(card: RenderModel) -> dict:
    return {
        "title": card.title,
        "city": card.city,
        "description": card.description,
        "icon_url": card.icon_url,
        "icon_alt": card.icon_alt,
        "temperature": card.temperature,
        "feels_like": card.feels_like,
        "humidity": card.humidity,
        "wind": card.wind,
        "clouds": card.clouds,
        "pressure": card.pressure,
        "unit": card.unit.value,
    }


def state_to_dict(state: WidgetState) -> dict:
    """Snapshot of the widget state for programmatic consumption."""
    return {
        "unit": state.unit.value,
        "favorites": list(state.favorites),
        "status": state.status.value,
        "error": state.error,
        "card": card_to_dict(state.card) if state.card is not None else None,
        "current_city": state.current_city,
        "generation": state.generation,
    }


def format_state_json(state: WidgetState) -> str:
    return json.dumps(state_to_dict(state), indent=2, ensure_ascii=False)


def format_favorites_text(favorites: list[str]) -> str:
    if not favorites:
        return "No favorites saved"
    return "\n".join(f"  {i}. {name}" for i, name in enumerate(favorites))
