"""Weather repository: remote fetch + mapping + saved-location store."""

import logging
import sqlite3
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from justweather.config.schema import AppConfig
from justweather.ingest.geocoding_client import GeocodingClient
from justweather.ingest.open_meteo_client import OpenMeteoClient
from justweather.mapping.response_mapper import (
    to_current_weather_details,
    to_hourly_forecasts,
    to_precipitation_probabilities,
)
from justweather.models.common import Result, location_id_for
from justweather.models.errors import RemoteFetchFailure
from justweather.models.remote import (
    CurrentWeatherResponse,
    HourlyForecastResponse,
    PrecipitationProbabilityResponse,
)
from justweather.models.weather import (
    CurrentWeatherDetails,
    HourlyForecast,
    PrecipitationProbability,
    SavedWeatherLocation,
)
from justweather.observable import Subscription
from justweather.storage.location_store import SavedLocationStore

logger = logging.getLogger(__name__)

# Payload shape problems: non-JSON bodies (JSONDecodeError is a ValueError),
# failed validation, hourly arrays of unequal length.
_MALFORMED_PAYLOAD = (ValidationError, ValueError, TypeError)


class WeatherRepository:
    """Single entry point for the UI layer. Failures come back as Result values."""

    def __init__(
        self,
        weather_client: OpenMeteoClient,
        geocoding_client: GeocodingClient,
        location_store: SavedLocationStore,
    ):
        self.weather = weather_client
        self.geocoding = geocoding_client
        self.store = location_store

    def fetch_weather_for_location(
        self, latitude: str, longitude: str
    ) -> Result[CurrentWeatherDetails]:
        name_of_location = self._resolve_location_name(latitude, longitude)
        try:
            raw = self.weather.get_current_weather(latitude, longitude)
            response = CurrentWeatherResponse.model_validate(raw)
        except httpx.HTTPError as e:
            logger.warning(
                "Failed to fetch weather for %s,%s: %s", latitude, longitude, e
            )
            return Result.failure(
                RemoteFetchFailure(f"Weather request failed: {e}", cause=e)
            )
        except _MALFORMED_PAYLOAD as e:
            logger.warning("Malformed current weather payload: %s", e)
            return Result.failure(
                RemoteFetchFailure("Malformed current weather payload", cause=e)
            )

        result = to_current_weather_details(response, name_of_location)
        if not result.ok:
            logger.warning(
                "Could not map weather for %s,%s: %s", latitude, longitude, result.error
            )
        return result

    def fetch_hourly_forecasts(
        self, latitude: str, longitude: str
    ) -> Result[list[HourlyForecast]]:
        try:
            raw = self.weather.get_hourly_forecast(latitude, longitude)
            response = HourlyForecastResponse.model_validate(raw)
            result = to_hourly_forecasts(response)
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch hourly forecast: %s", e)
            return Result.failure(
                RemoteFetchFailure(f"Hourly forecast request failed: {e}", cause=e)
            )
        except _MALFORMED_PAYLOAD as e:
            logger.warning("Malformed hourly forecast payload: %s", e)
            return Result.failure(
                RemoteFetchFailure("Malformed hourly forecast payload", cause=e)
            )

        if not result.ok:
            logger.warning("Could not map hourly forecast: %s", result.error)
        return result

    def fetch_precipitation_probabilities(
        self, latitude: str, longitude: str
    ) -> Result[list[PrecipitationProbability]]:
        try:
            raw = self.weather.get_precipitation_probabilities(latitude, longitude)
            response = PrecipitationProbabilityResponse.model_validate(raw)
            return Result.success(to_precipitation_probabilities(response))
        except httpx.HTTPError as e:
            logger.warning("Failed to fetch precipitation probabilities: %s", e)
            return Result.failure(
                RemoteFetchFailure(f"Precipitation request failed: {e}", cause=e)
            )
        except _MALFORMED_PAYLOAD as e:
            logger.warning("Malformed precipitation payload: %s", e)
            return Result.failure(
                RemoteFetchFailure("Malformed precipitation payload", cause=e)
            )

    def get_weather_stream_for_previously_saved_locations(
        self, callback: Callable[[list[SavedWeatherLocation]], None]
    ) -> Subscription:
        """Deliver saved locations now and after every change until cancelled."""
        return self.store.observe_all(callback)

    def get_saved_locations(self) -> list[SavedWeatherLocation]:
        return self.store.get_all()

    def save_weather_location(
        self, name_of_location: str, latitude: str, longitude: str
    ) -> SavedWeatherLocation:
        """Save a location. Saving the same coordinates again replaces the record."""
        location = SavedWeatherLocation(
            id=location_id_for(latitude, longitude),
            name_of_location=name_of_location,
            latitude=latitude.strip(),
            longitude=longitude.strip(),
        )
        self.store.insert_or_replace(location)
        logger.info("Saved %s at %s,%s", name_of_location, latitude, longitude)
        return location

    def delete_weather_location(self, location_id: str) -> bool:
        return self.store.delete(location_id)

    def _resolve_location_name(self, latitude: str, longitude: str) -> str:
        """Saved name, then reverse geocoding, then the coordinates themselves."""
        fallback = f"{latitude.strip()}, {longitude.strip()}"
        try:
            saved = self.store.find_by_coordinates(latitude, longitude)
        except sqlite3.Error as e:
            logger.warning("Saved-location lookup failed for %s,%s: %s", latitude, longitude, e)
            saved = None
        if saved is not None:
            return saved.name_of_location

        try:
            name = self.geocoding.get_location_name(latitude, longitude)
        except (httpx.HTTPError, *_MALFORMED_PAYLOAD) as e:
            logger.warning("Reverse geocoding failed for %s,%s: %s", latitude, longitude, e)
            return fallback
        if name is None:
            logger.info("No place name for %s,%s", latitude, longitude)
            return fallback
        return name


def create_weather_repository(
    config: AppConfig, conn: sqlite3.Connection
) -> WeatherRepository:
    """Wire clients and store from config."""
    return WeatherRepository(
        weather_client=OpenMeteoClient.from_config(config.api, config.forecast),
        geocoding_client=GeocodingClient(
            base_url=config.api.geocoding_base_url,
            user_agent=config.api.user_agent,
            timeout=config.api.timeout,
        ),
        location_store=SavedLocationStore(conn),
    )
