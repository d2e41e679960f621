"""Domain weather models handed to the UI collaborator."""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(frozen=True)
class WeatherClassification:
    description: str
    icon_id: str
    image_id: str


@dataclass(frozen=True)
class CurrentWeatherDetails:
    temperature: str
    name_of_location: str
    weather_condition: str
    is_day: int  # 0 or 1, as reported by Open-Meteo
    icon_id: str
    image_id: str
    latitude: str
    longitude: str

    EMPTY: ClassVar["CurrentWeatherDetails"]


CurrentWeatherDetails.EMPTY = CurrentWeatherDetails(
    temperature="",
    name_of_location="",
    weather_condition="",
    is_day=0,
    icon_id="",
    image_id="",
    latitude="",
    longitude="",
)


@dataclass(frozen=True)
class SavedWeatherLocation:
    id: str
    name_of_location: str
    latitude: str
    longitude: str


@dataclass(frozen=True)
class HourlyForecast:
    """One forecast hour. Temperature is whole degrees; formatters add the suffix."""

    hour: int  # 1..12
    is_am: bool
    weather_icon_id: str
    temperature: int


@dataclass(frozen=True)
class PrecipitationProbability:
    latitude: str
    longitude: str
    date_time: datetime
    probability_percentage: int
