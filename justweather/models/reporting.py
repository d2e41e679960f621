"""Operational health models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    db_connected: bool
    open_meteo_reachable: bool
    geocoding_reachable: bool
    saved_location_count: int
    schema_version: str | None

    @property
    def healthy(self) -> bool:
        return self.db_connected and self.open_meteo_reachable
