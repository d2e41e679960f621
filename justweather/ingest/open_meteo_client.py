"""Open-Meteo forecast API client with retry and rate limit handling."""

import logging
import time

import httpx

from justweather.config.schema import ApiConfig, ForecastConfig

logger = logging.getLogger(__name__)

OPEN_METEO_BASE_URL = "https://api.open-meteo.com"
DEFAULT_USER_AGENT = "justweather/0.1.0"
RETRYABLE_STATUS = (429, 503)


class OpenMeteoClient:
    def __init__(
        self,
        base_url: str = OPEN_METEO_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
        forecast: ForecastConfig | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_base_delay = retry_base_delay
        self.forecast = forecast or ForecastConfig()

    @classmethod
    def from_config(cls, api: ApiConfig, forecast: ForecastConfig) -> "OpenMeteoClient":
        return cls(
            base_url=api.open_meteo_base_url,
            user_agent=api.user_agent,
            timeout=api.timeout,
            max_retries=api.max_retries,
            retry_base_delay=api.retry_base_delay,
            forecast=forecast,
        )

    def get_current_weather(self, latitude: str, longitude: str) -> dict:
        """Fetch current conditions for a coordinate pair."""
        return self._get_forecast(latitude, longitude, {"current_weather": "true"})

    def get_hourly_forecast(self, latitude: str, longitude: str) -> dict:
        """Fetch hourly temperature, weather code and day flag."""
        return self._get_forecast(
            latitude, longitude, {"hourly": "temperature_2m,weathercode,is_day"}
        )

    def get_precipitation_probabilities(self, latitude: str, longitude: str) -> dict:
        return self._get_forecast(
            latitude, longitude, {"hourly": "precipitation_probability"}
        )

    def _get_forecast(self, latitude: str, longitude: str, extra: dict) -> dict:
        """GET /v1/forecast. Retries on 503/429 and transport errors with exponential backoff."""
        url = f"{self.base_url}/v1/forecast"
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "temperature_unit": str(self.forecast.temperature_unit),
            "timezone": self.forecast.timezone,
            "forecast_days": self.forecast.forecast_days,
            **extra,
        }
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}

        for attempt in range(self.max_retries + 1):
            try:
                resp = httpx.get(
                    url, params=params, headers=headers, timeout=self.timeout
                )
                if resp.status_code in RETRYABLE_STATUS and attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Open-Meteo %s returned %d, retrying in %.1fs (attempt %d/%d)",
                        url, resp.status_code, delay, attempt + 1, self.max_retries,
                    )
                    time.sleep(delay)
                    continue
                resp.raise_for_status()
                return resp.json()
            except httpx.RequestError as e:
                if attempt < self.max_retries:
                    delay = self.retry_base_delay * (2**attempt)
                    logger.warning(
                        "Open-Meteo request error, retrying in %.1fs: %s", delay, e
                    )
                    time.sleep(delay)
                    continue
                raise

        raise AssertionError("unreachable: retry loop always returns or raises")
