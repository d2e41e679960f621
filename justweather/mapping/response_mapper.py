"""Map validated Open-Meteo payloads onto domain models."""

from datetime import datetime

from justweather.mapping.weather_codes import classify_weather_code
from justweather.models.common import Result
from justweather.models.errors import MappingFailure, UnknownWeatherCode
from justweather.models.remote import (
    CurrentWeatherResponse,
    HourlyForecastResponse,
    PrecipitationProbabilityResponse,
)
from justweather.models.weather import (
    CurrentWeatherDetails,
    HourlyForecast,
    PrecipitationProbability,
)


def to_current_weather_details(
    response: CurrentWeatherResponse, name_of_location: str
) -> Result[CurrentWeatherDetails]:
    current = response.current_weather
    classification = classify_weather_code(
        current.weather_code, is_day=current.is_day == 1
    )
    if not classification.ok:
        return Result.failure(_mapping_failure(classification.error))

    resolved = classification.unwrap()
    return Result.success(
        CurrentWeatherDetails(
            temperature=current.temperature,
            name_of_location=name_of_location,
            weather_condition=resolved.description,
            is_day=current.is_day,
            icon_id=resolved.icon_id,
            image_id=resolved.image_id,
            latitude=response.latitude,
            longitude=response.longitude,
        )
    )


def to_hourly_forecasts(
    response: HourlyForecastResponse,
) -> Result[list[HourlyForecast]]:
    """Convert hourly samples to 12-hour clock forecasts.

    A single unknown code fails the whole list.
    """
    hourly = response.hourly
    forecasts: list[HourlyForecast] = []
    for time_str, temperature, code, is_day in zip(
        hourly.time, hourly.temperature_2m, hourly.weather_codes, hourly.is_day,
        strict=True,
    ):
        classification = classify_weather_code(code, is_day=is_day == 1)
        if not classification.ok:
            return Result.failure(_mapping_failure(classification.error))

        hour_of_day = datetime.fromisoformat(time_str).hour
        forecasts.append(
            HourlyForecast(
                hour=hour_of_day % 12 or 12,
                is_am=hour_of_day < 12,
                weather_icon_id=classification.unwrap().icon_id,
                temperature=round(temperature),
            )
        )
    return Result.success(forecasts)


def to_precipitation_probabilities(
    response: PrecipitationProbabilityResponse,
) -> list[PrecipitationProbability]:
    hourly = response.hourly
    return [
        PrecipitationProbability(
            latitude=response.latitude,
            longitude=response.longitude,
            date_time=datetime.fromisoformat(time_str),
            probability_percentage=probability or 0,
        )
        for time_str, probability in zip(
            hourly.time, hourly.precipitation_probability, strict=True
        )
    ]


def _mapping_failure(error: object) -> MappingFailure:
    assert isinstance(error, UnknownWeatherCode)
    return MappingFailure(error)
