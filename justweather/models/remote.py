"""Pydantic models for the Open-Meteo payloads the mappers consume.

Open-Meteo reports coordinates and temperatures as numbers; the domain keeps
them as strings, so numbers are coerced on validation. Unknown fields are
ignored.
"""

from pydantic import BaseModel, ConfigDict, Field

_REMOTE_CONFIG = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class CurrentWeather(BaseModel):
    model_config = _REMOTE_CONFIG

    temperature: str
    is_day: int
    weather_code: int = Field(alias="weathercode")


class CurrentWeatherResponse(BaseModel):
    model_config = _REMOTE_CONFIG

    current_weather: CurrentWeather
    latitude: str
    longitude: str


class HourlyForecastData(BaseModel):
    model_config = _REMOTE_CONFIG

    time: list[str]
    temperature_2m: list[float]
    weather_codes: list[int] = Field(alias="weathercode")
    is_day: list[int]


class HourlyForecastResponse(BaseModel):
    model_config = _REMOTE_CONFIG

    latitude: str
    longitude: str
    hourly: HourlyForecastData


class PrecipitationProbabilityData(BaseModel):
    model_config = _REMOTE_CONFIG

    time: list[str]
    precipitation_probability: list[int | None]


class PrecipitationProbabilityResponse(BaseModel):
    model_config = _REMOTE_CONFIG

    latitude: str
    longitude: str
    hourly: PrecipitationProbabilityData
