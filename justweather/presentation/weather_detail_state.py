"""State holder for the weather detail screen.

Sequences IDLE/LOADING/ERROR around repository calls and exposes the
results as observables. One holder lives as long as its screen; close()
ends that scope and any result arriving afterwards is dropped.
"""

import logging
import sqlite3
from enum import StrEnum

from justweather.models.weather import CurrentWeatherDetails, SavedWeatherLocation
from justweather.observable import Observable, Subscription
from justweather.repository.weather_repository import WeatherRepository

logger = logging.getLogger(__name__)


class UiState(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


class WeatherDetailStateHolder:
    def __init__(
        self,
        repository: WeatherRepository,
        latitude: str,
        longitude: str,
        was_location_previously_saved: bool = False,
    ):
        self.repository = repository
        self.latitude = latitude
        self.longitude = longitude

        self.ui_state: Observable[UiState] = Observable(UiState.IDLE)
        self.weather_details: Observable[CurrentWeatherDetails] = Observable(
            CurrentWeatherDetails.EMPTY
        )
        self.is_saved_location: Observable[bool] = Observable(
            was_location_previously_saved
        )

        self._saved_locations: list[SavedWeatherLocation] | None = None
        self._subscription: Subscription | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Begin observing saved locations and fetch the weather once."""
        if self._closed or self._subscription is not None:
            return
        self._subscription = (
            self.repository.get_weather_stream_for_previously_saved_locations(
                self._on_saved_locations
            )
        )
        self.fetch_weather_info()

    def close(self) -> None:
        self._closed = True
        if self._subscription is not None:
            self._subscription.cancel()
            self._subscription = None

    def __enter__(self) -> "WeatherDetailStateHolder":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def fetch_weather_info(self) -> None:
        """Fetch weather for this screen's coordinates, keeping ui_state in step."""
        if self._closed:
            return
        self.ui_state.set(UiState.LOADING)
        result = self.repository.fetch_weather_for_location(
            latitude=self.latitude, longitude=self.longitude
        )
        if self._closed:
            logger.debug("Discarding weather result after close")
            return

        details = result.get_or_none()
        if details is None:
            logger.info("Weather fetch failed: %s", result.error)
            self.ui_state.set(UiState.ERROR)
            return

        self.weather_details.set(details)
        self._refresh_is_saved()
        self.ui_state.set(UiState.IDLE)

    def add_location_to_saved_locations(self) -> None:
        if self._closed:
            return
        details = self.weather_details.value
        if details == CurrentWeatherDetails.EMPTY:
            return

        self.ui_state.set(UiState.LOADING)
        try:
            self.repository.save_weather_location(
                name_of_location=details.name_of_location,
                latitude=self.latitude,
                longitude=self.longitude,
            )
        except sqlite3.Error:
            logger.exception("Failed to save %s", details.name_of_location)
            self.ui_state.set(UiState.ERROR)
            return
        self.ui_state.set(UiState.IDLE)

    def _on_saved_locations(self, locations: list[SavedWeatherLocation]) -> None:
        self._saved_locations = locations
        self._refresh_is_saved()

    def _refresh_is_saved(self) -> None:
        details = self.weather_details.value
        if self._saved_locations is None or details == CurrentWeatherDetails.EMPTY:
            return
        self.is_saved_location.set(
            any(
                loc.name_of_location == details.name_of_location
                for loc in self._saved_locations
            )
        )
