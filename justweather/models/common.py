"""Common types and helpers shared across models."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeAlias, TypeVar

from justweather.models.errors import WeatherError

Coordinate: TypeAlias = str

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the WeatherError that prevented producing one."""

    value: T | None = None
    error: WeatherError | None = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: WeatherError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def get_or_none(self) -> T | None:
        return self.value if self.error is None else None

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure."""
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value


def location_id_for(latitude: Coordinate, longitude: Coordinate) -> str:
    return f"{latitude.strip()},{longitude.strip()}"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
