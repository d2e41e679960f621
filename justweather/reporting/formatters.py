"""Output formatters for weather results and saved locations."""

import json
from dataclasses import asdict

from justweather.models.reporting import HealthStatus
from justweather.models.weather import (
    CurrentWeatherDetails,
    HourlyForecast,
    PrecipitationProbability,
    SavedWeatherLocation,
)

DEGREE = "°"


def format_temperature(temperature: str | int) -> str:
    return f"{temperature}{DEGREE}"


def format_hour(forecast: HourlyForecast) -> str:
    return f"{forecast.hour}{'AM' if forecast.is_am else 'PM'}"


def format_current_weather_text(d: CurrentWeatherDetails) -> str:
    """Plain text block for the terminal."""
    lines = [
        f"=== {d.name_of_location} ({d.latitude}, {d.longitude}) ===",
        f"{format_temperature(d.temperature)} {d.weather_condition}",
        f"{'Day' if d.is_day == 1 else 'Night'} | icon: {d.icon_id} | image: {d.image_id}",
    ]
    return "\n".join(lines)


def format_current_weather_json(d: CurrentWeatherDetails) -> str:
    return json.dumps(asdict(d), indent=2)


def format_hourly_forecasts_text(forecasts: list[HourlyForecast]) -> str:
    if not forecasts:
        return "Hourly Forecast: no data"
    lines = ["Hourly Forecast"]
    for f in forecasts:
        lines.append(
            f"  {format_hour(f):>4}  {f.weather_icon_id:<22} "
            f"{format_temperature(f.temperature)}"
        )
    return "\n".join(lines)


def format_precipitation_text(probabilities: list[PrecipitationProbability]) -> str:
    if not probabilities:
        return "Precipitation: no data"
    lines = ["Precipitation probability"]
    for p in probabilities:
        lines.append(
            f"  {p.date_time:%Y-%m-%d %H:%M}  {p.probability_percentage:>3}%"
        )
    return "\n".join(lines)


def format_saved_locations_text(locations: list[SavedWeatherLocation]) -> str:
    if not locations:
        return "No saved locations"
    return "\n".join(
        f"{loc.id}  {loc.name_of_location} ({loc.latitude}, {loc.longitude})"
        for loc in locations
    )


def format_health_text(status: HealthStatus) -> str:
    lines = [
        f"DB: {'OK' if status.db_connected else 'FAIL'}",
        f"Open-Meteo API: {'OK' if status.open_meteo_reachable else 'FAIL'}",
        f"Geocoding API: {'OK' if status.geocoding_reachable else 'FAIL'}",
        f"Saved locations: {status.saved_location_count}",
        f"Schema: {status.schema_version or 'none'}",
    ]
    return "\n".join(lines)
