"""Pydantic v2 configuration schema with strict validation."""

from enum import StrEnum

from pydantic import BaseModel, Field


class TemperatureUnit(StrEnum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    open_meteo_base_url: str = "https://api.open-meteo.com"
    geocoding_base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "justweather/0.1.0"
    timeout: float = Field(default=30.0, gt=0.0)
    max_retries: int = Field(default=3, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    timezone: str = "auto"
    forecast_days: int = Field(default=1, ge=1, le=16)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = "data/justweather.db"


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    forecast: ForecastConfig = ForecastConfig()
    storage: StorageConfig = StorageConfig()
