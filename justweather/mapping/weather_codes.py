"""WMO weather code classification: description, icon and image ids.

The description comes from the exact code. The category only picks the
day/night icon and image pair.
"""

from collections.abc import Mapping
from enum import StrEnum
from types import MappingProxyType

from justweather.models.common import Result
from justweather.models.errors import UnknownWeatherCode
from justweather.models.weather import WeatherClassification


class WeatherCategory(StrEnum):
    CLEAR = "clear"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    THUNDERSTORM = "thunderstorm"
    SNOW = "snow"
    FOG = "fog"


WEATHER_CODE_DESCRIPTIONS: Mapping[int, str] = MappingProxyType({
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Drizzle",
    53: "Drizzle",
    55: "Drizzle",
    56: "Freezing drizzle",
    57: "Freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorms",
    96: "Thunderstorms with slight hail",
    99: "Thunderstorms with heavy hail",
})

KNOWN_WEATHER_CODES: frozenset[int] = frozenset(WEATHER_CODE_DESCRIPTIONS)

CATEGORY_CODES: Mapping[WeatherCategory, frozenset[int]] = MappingProxyType({
    WeatherCategory.CLEAR: frozenset({0}),
    # mainly clear, partly cloudy, overcast
    WeatherCategory.CLOUDY: frozenset({1, 2, 3}),
    # drizzle, freezing drizzle, rain showers
    WeatherCategory.RAINY: frozenset({51, 53, 55, 56, 57, 80, 81, 82}),
    # rain, freezing rain, thunderstorm with or without hail
    WeatherCategory.THUNDERSTORM: frozenset({61, 63, 65, 66, 67, 95, 96, 99}),
    # snow fall, snow grains, snow showers
    WeatherCategory.SNOW: frozenset({71, 73, 75, 77, 85, 86}),
    WeatherCategory.FOG: frozenset({45, 48}),
})

_CODE_TO_CATEGORY: Mapping[int, WeatherCategory] = MappingProxyType({
    code: category
    for category, codes in CATEGORY_CODES.items()
    for code in codes
})

# (day, night)
CATEGORY_ICONS: Mapping[WeatherCategory, tuple[str, str]] = MappingProxyType({
    WeatherCategory.CLEAR: ("ic_day_clear", "ic_night_clear"),
    WeatherCategory.CLOUDY: ("ic_day_few_clouds", "ic_night_few_clouds"),
    WeatherCategory.RAINY: ("ic_day_rain", "ic_night_rain"),
    WeatherCategory.THUNDERSTORM: ("ic_day_thunderstorms", "ic_night_thunderstorms"),
    WeatherCategory.SNOW: ("ic_day_snow", "ic_night_snow"),
    WeatherCategory.FOG: ("ic_mist", "ic_mist"),
})

# There is no thunderstorm artwork; storms share the rain image.
CATEGORY_IMAGES: Mapping[WeatherCategory, tuple[str, str]] = MappingProxyType({
    WeatherCategory.CLEAR: ("img_day_clear", "img_night_clear"),
    WeatherCategory.CLOUDY: ("img_day_cloudy", "img_night_cloudy"),
    WeatherCategory.RAINY: ("img_day_rain", "img_night_rain"),
    WeatherCategory.THUNDERSTORM: ("img_day_rain", "img_night_rain"),
    WeatherCategory.SNOW: ("img_day_snow", "img_night_snow"),
    WeatherCategory.FOG: ("img_day_fog", "img_night_fog"),
})


def weather_category_for_code(weather_code: int) -> WeatherCategory | None:
    return _CODE_TO_CATEGORY.get(weather_code)


def classify_weather_code(
    weather_code: int, is_day: bool
) -> Result[WeatherClassification]:
    """Classify a WMO code for the given time of day.

    Codes outside the table fail with UnknownWeatherCode rather than
    falling back to a guess.
    """
    category = _CODE_TO_CATEGORY.get(weather_code)
    if category is None:
        return Result.failure(UnknownWeatherCode(weather_code))

    variant = 0 if is_day else 1
    return Result.success(
        WeatherClassification(
            description=WEATHER_CODE_DESCRIPTIONS[weather_code],
            icon_id=CATEGORY_ICONS[category][variant],
            image_id=CATEGORY_IMAGES[category][variant],
        )
    )
