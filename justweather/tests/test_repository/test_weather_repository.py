"""Tests for the weather repository with mocked clients and a real store."""

import json
import sqlite3
from unittest.mock import MagicMock

import httpx
import pytest
import respx

from justweather.config.schema import AppConfig
from justweather.ingest.geocoding_client import GeocodingClient
from justweather.ingest.open_meteo_client import OpenMeteoClient
from justweather.models.errors import MappingFailure, RemoteFetchFailure
from justweather.models.weather import SavedWeatherLocation
from justweather.repository.weather_repository import (
    WeatherRepository,
    create_weather_repository,
)
from justweather.storage.location_store import SavedLocationStore


@pytest.fixture
def weather_client(current_nyc: dict) -> MagicMock:
    client = MagicMock(spec=OpenMeteoClient)
    client.get_current_weather.return_value = current_nyc
    return client


@pytest.fixture
def geocoder() -> MagicMock:
    geo = MagicMock(spec=GeocodingClient)
    geo.get_location_name.return_value = "New York"
    return geo


@pytest.fixture
def repo(
    weather_client: MagicMock, geocoder: MagicMock, store: SavedLocationStore
) -> WeatherRepository:
    return WeatherRepository(weather_client, geocoder, store)


def _with_code(payload: dict, code: int, is_day: int) -> dict:
    payload["current_weather"]["weathercode"] = code
    payload["current_weather"]["is_day"] = is_day
    return payload


class TestFetchWeatherForLocation:
    def test_slight_rain_by_day(self, repo: WeatherRepository):
        result = repo.fetch_weather_for_location("40.7128", "-74.0060")
        details = result.unwrap()
        assert details.weather_condition == "Slight rain"
        assert details.icon_id == "ic_day_thunderstorms"
        assert details.name_of_location == "New York"
        assert details.temperature == "17.3"

    def test_slight_rain_by_night(
        self, repo: WeatherRepository, weather_client: MagicMock, current_nyc: dict
    ):
        weather_client.get_current_weather.return_value = _with_code(current_nyc, 61, 0)
        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.weather_condition == "Slight rain"
        assert details.icon_id == "ic_night_thunderstorms"

    def test_clear_sky(
        self, repo: WeatherRepository, weather_client: MagicMock, current_nyc: dict
    ):
        weather_client.get_current_weather.return_value = _with_code(current_nyc, 0, 1)
        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.weather_condition == "Clear sky"
        assert details.icon_id == "ic_day_clear"

    def test_unknown_code_is_failure_result(
        self, repo: WeatherRepository, weather_client: MagicMock, current_nyc: dict
    ):
        weather_client.get_current_weather.return_value = _with_code(current_nyc, 100, 1)
        result = repo.fetch_weather_for_location("40.7128", "-74.0060")
        assert not result.ok
        assert isinstance(result.error, MappingFailure)

    def test_http_error_is_failure_result(
        self, repo: WeatherRepository, weather_client: MagicMock
    ):
        weather_client.get_current_weather.side_effect = httpx.ConnectError("offline")
        result = repo.fetch_weather_for_location("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)
        assert isinstance(result.error.cause, httpx.ConnectError)

    @pytest.mark.parametrize(
        "error",
        [
            httpx.ReadTimeout("slow"),
            httpx.HTTPStatusError(
                "403 Forbidden",
                request=httpx.Request("GET", "https://geo.example.com/reverse"),
                response=httpx.Response(403),
            ),
            ValueError("Expecting value"),
        ],
    )
    def test_geocoding_error_falls_back_to_coordinates(
        self, repo: WeatherRepository, geocoder: MagicMock, error: Exception
    ):
        geocoder.get_location_name.side_effect = error
        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.name_of_location == "40.7128, -74.0060"
        assert details.weather_condition == "Slight rain"

    def test_non_json_body_is_failure_result(
        self, repo: WeatherRepository, weather_client: MagicMock
    ):
        weather_client.get_current_weather.side_effect = json.JSONDecodeError(
            "Expecting value", "<html>maintenance</html>", 0
        )
        result = repo.fetch_weather_for_location("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)

    def test_saved_lookup_error_falls_back_to_geocoding(
        self, weather_client: MagicMock, geocoder: MagicMock
    ):
        broken_store = MagicMock(spec=SavedLocationStore)
        broken_store.find_by_coordinates.side_effect = sqlite3.OperationalError("locked")
        repo = WeatherRepository(weather_client, geocoder, broken_store)

        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.name_of_location == "New York"

    def test_malformed_payload_is_failure_result(
        self, repo: WeatherRepository, weather_client: MagicMock
    ):
        weather_client.get_current_weather.return_value = {"latitude": 1.0}
        result = repo.fetch_weather_for_location("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)

    def test_saved_name_preferred_over_geocoding(
        self, repo: WeatherRepository, geocoder: MagicMock, store: SavedLocationStore
    ):
        store.insert_or_replace(
            SavedWeatherLocation("x", "Home", "40.7128", "-74.0060")
        )
        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.name_of_location == "Home"
        geocoder.get_location_name.assert_not_called()

    def test_coordinates_used_when_no_place_name(
        self, repo: WeatherRepository, geocoder: MagicMock
    ):
        geocoder.get_location_name.return_value = None
        details = repo.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.name_of_location == "40.7128, -74.0060"


class TestForecasts:
    def test_hourly(self, repo: WeatherRepository, weather_client: MagicMock, hourly_nyc: dict):
        weather_client.get_hourly_forecast.return_value = hourly_nyc
        forecasts = repo.fetch_hourly_forecasts("40.7128", "-74.0060").unwrap()
        assert len(forecasts) == 4
        assert forecasts[0].weather_icon_id == "ic_night_clear"

    def test_hourly_mismatched_arrays(
        self, repo: WeatherRepository, weather_client: MagicMock, hourly_nyc: dict
    ):
        hourly_nyc["hourly"]["time"].pop()
        weather_client.get_hourly_forecast.return_value = hourly_nyc
        result = repo.fetch_hourly_forecasts("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)

    def test_hourly_http_error(self, repo: WeatherRepository, weather_client: MagicMock):
        weather_client.get_hourly_forecast.side_effect = httpx.HTTPStatusError(
            "503", request=httpx.Request("GET", "https://x"), response=httpx.Response(503)
        )
        result = repo.fetch_hourly_forecasts("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)

    def test_precipitation(
        self, repo: WeatherRepository, weather_client: MagicMock, precipitation_nyc: dict
    ):
        weather_client.get_precipitation_probabilities.return_value = precipitation_nyc
        probabilities = repo.fetch_precipitation_probabilities("40.7128", "-74.0060").unwrap()
        assert [p.probability_percentage for p in probabilities] == [10, 45, 0]


class TestSavedLocations:
    def test_save_writes_through(self, repo: WeatherRepository, store: SavedLocationStore):
        location = repo.save_weather_location("New York", "40.7128", "-74.0060")
        assert location.id == "40.7128,-74.0060"
        assert store.get_all() == [location]

    def test_save_same_place_twice_replaces(self, repo: WeatherRepository):
        repo.save_weather_location("New York", "40.7128", "-74.0060")
        repo.save_weather_location("NYC", "40.7128", "-74.0060")
        names = [loc.name_of_location for loc in repo.get_saved_locations()]
        assert names == ["NYC"]

    def test_stream_reemits_on_change(self, repo: WeatherRepository):
        emissions: list[list[SavedWeatherLocation]] = []
        subscription = repo.get_weather_stream_for_previously_saved_locations(
            emissions.append
        )
        saved = repo.save_weather_location("New York", "40.7128", "-74.0060")
        repo.delete_weather_location(saved.id)
        subscription.cancel()
        repo.save_weather_location("London", "51.5072", "-0.1276")

        assert emissions == [[], [saved], []]

    def test_delete_unknown(self, repo: WeatherRepository):
        assert repo.delete_weather_location("missing") is False


FORECAST_URL = "https://test-meteo.example.com/v1/forecast"
REVERSE_URL = "https://test-geo.example.com/reverse"
MAINTENANCE_PAGE = httpx.Response(200, text="<html>maintenance</html>")


class TestWithHttpClients:
    @pytest.fixture
    def wired(self, default_config: AppConfig, tmp_db: sqlite3.Connection) -> WeatherRepository:
        return create_weather_repository(default_config, tmp_db)

    @respx.mock
    def test_non_json_weather_body(self, wired: WeatherRepository, reverse_nyc: dict):
        respx.get(REVERSE_URL).mock(return_value=httpx.Response(200, json=reverse_nyc))
        respx.get(FORECAST_URL).mock(return_value=MAINTENANCE_PAGE)

        result = wired.fetch_weather_for_location("40.7128", "-74.0060")
        assert isinstance(result.error, RemoteFetchFailure)
        assert isinstance(result.error.cause, ValueError)

    @respx.mock
    def test_non_json_geocoder_body(self, wired: WeatherRepository, current_nyc: dict):
        respx.get(REVERSE_URL).mock(return_value=MAINTENANCE_PAGE)
        respx.get(FORECAST_URL).mock(return_value=httpx.Response(200, json=current_nyc))

        details = wired.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert details.name_of_location == "40.7128, -74.0060"

    @respx.mock
    def test_geocoder_forbidden_still_fetches_weather(
        self, wired: WeatherRepository, current_nyc: dict
    ):
        respx.get(REVERSE_URL).mock(return_value=httpx.Response(403))
        forecast = respx.get(FORECAST_URL).mock(
            return_value=httpx.Response(200, json=current_nyc)
        )

        details = wired.fetch_weather_for_location("40.7128", "-74.0060").unwrap()
        assert forecast.called
        assert details.name_of_location == "40.7128, -74.0060"
        assert details.temperature == "17.3"
