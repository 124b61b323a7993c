"""Weather widget JSON API — FastAPI front end over a WeatherWidget."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from widget.models.common import Unit, utc_now_iso
from widget.pipeline.widget import WeatherWidget
from widget.render.formatters import state_to_dict


class SearchRequest(BaseModel):
    query: str


class CoordsRequest(BaseModel):
    latitude: float = Field(ge=-90.0, le=90.0)
    longitude: float = Field(ge=-180.0, le=180.0)


class UnitRequest(BaseModel):
    unit: Unit


class FavoriteRequest(BaseModel):
    name: str


def create_app(widget: WeatherWidget) -> FastAPI:
    """Build the API app. Every mutating endpoint returns the state snapshot."""
    app = FastAPI(title="Weather Widget", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Lookups ─────────────────────────────────────────────────

    @app.get("/api/state")
    def get_state():
        return state_to_dict(widget.state)

    @app.post("/api/search")
    def search(req: SearchRequest):
        widget.search(req.query)
        return state_to_dict(widget.state)

    @app.post("/api/coords")
    def coords(req: CoordsRequest):
        widget.fetch_by_coords(req.latitude, req.longitude)
        return state_to_dict(widget.state)

    @app.post("/api/locate")
    def locate():
        widget.locate()
        return state_to_dict(widget.state)

    @app.post("/api/load")
    def load():
        """Page-load behaviour: show the last viewed city if one is stored."""
        widget.on_load()
        return state_to_dict(widget.state)

    # ── Preferences ─────────────────────────────────────────────

    @app.put("/api/unit")
    def change_unit(req: UnitRequest):
        widget.change_unit(req.unit)
        return state_to_dict(widget.state)

    @app.post("/api/favorites")
    def add_favorite(req: FavoriteRequest):
        widget.add_favorite(req.name)
        return state_to_dict(widget.state)

    @app.delete("/api/favorites/{index}")
    def remove_favorite(index: int):
        try:
            widget.remove_favorite(index)
        except IndexError as e:
            raise HTTPException(404, str(e)) from e
        return state_to_dict(widget.state)

    @app.post("/api/favorites/{index}/open")
    def open_favorite(index: int):
        try:
            widget.select_favorite(index)
        except IndexError as e:
            raise HTTPException(404, str(e)) from e
        return state_to_dict(widget.state)

    @app.get("/api/health")
    def get_health():
        return {
            "status": widget.state.status.value,
            "api_key_configured": bool(widget.fetcher.client.api_key),
            "geolocation_available": widget.geolocator is not None,
            "timestamp": utc_now_iso(),
        }

    return app
