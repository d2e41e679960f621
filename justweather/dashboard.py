"""Weather dashboard: FastAPI backend serving weather JSON and saved-location controls."""

import sqlite3
from dataclasses import asdict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from justweather.config.schema import AppConfig
from justweather.repository.weather_repository import (
    WeatherRepository,
    create_weather_repository,
)
from justweather.storage.database import open_database


class SaveLocationRequest(BaseModel):
    name_of_location: str
    latitude: str
    longitude: str


def create_app(config: AppConfig | None = None) -> FastAPI:
    config = config or AppConfig()
    app = FastAPI(title="JustWeather Dashboard", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _conn() -> sqlite3.Connection:
        return open_database(config.storage.db_path)

    def _repo(conn: sqlite3.Connection) -> WeatherRepository:
        return create_weather_repository(config, conn)

    # ── Weather endpoints ──────────────────────────────────────────

    @app.get("/api/weather")
    def get_weather(latitude: str, longitude: str):
        """Current weather for a coordinate pair."""
        conn = _conn()
        try:
            result = _repo(conn).fetch_weather_for_location(latitude, longitude)
        finally:
            conn.close()
        if not result.ok:
            raise HTTPException(status_code=502, detail=str(result.error))
        return asdict(result.unwrap())

    @app.get("/api/forecast/hourly")
    def get_hourly_forecast(latitude: str, longitude: str):
        conn = _conn()
        try:
            result = _repo(conn).fetch_hourly_forecasts(latitude, longitude)
        finally:
            conn.close()
        if not result.ok:
            raise HTTPException(status_code=502, detail=str(result.error))
        return [asdict(f) for f in result.unwrap()]

    @app.get("/api/forecast/precipitation")
    def get_precipitation(latitude: str, longitude: str):
        conn = _conn()
        try:
            result = _repo(conn).fetch_precipitation_probabilities(latitude, longitude)
        finally:
            conn.close()
        if not result.ok:
            raise HTTPException(status_code=502, detail=str(result.error))
        return [
            {
                "latitude": p.latitude,
                "longitude": p.longitude,
                "date_time": p.date_time.isoformat(),
                "probability_percentage": p.probability_percentage,
            }
            for p in result.unwrap()
        ]

    # ── Saved locations ────────────────────────────────────────────

    @app.get("/api/locations")
    def get_locations():
        conn = _conn()
        try:
            return [asdict(loc) for loc in _repo(conn).get_saved_locations()]
        finally:
            conn.close()

    @app.post("/api/locations", status_code=201)
    def save_location(body: SaveLocationRequest):
        conn = _conn()
        try:
            location = _repo(conn).save_weather_location(
                body.name_of_location, body.latitude, body.longitude
            )
            return asdict(location)
        finally:
            conn.close()

    @app.delete("/api/locations/{location_id}")
    def delete_location(location_id: str):
        conn = _conn()
        try:
            deleted = _repo(conn).delete_weather_location(location_id)
        finally:
            conn.close()
        if not deleted:
            raise HTTPException(status_code=404, detail=f"No saved location {location_id}")
        return {"deleted": location_id}

    return app


app = create_app()
