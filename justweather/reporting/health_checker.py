"""Health checker: DB connectivity and API reachability."""

import logging
import sqlite3

import httpx

from justweather.config.schema import AppConfig
from justweather.models.reporting import HealthStatus

logger = logging.getLogger(__name__)


class HealthChecker:
    def __init__(self, conn: sqlite3.Connection, config: AppConfig):
        self.conn = conn
        self.config = config

    def check(self) -> HealthStatus:
        db_ok = self._check_db()
        return HealthStatus(
            db_connected=db_ok,
            open_meteo_reachable=self._check_open_meteo(),
            geocoding_reachable=self._check_geocoding(),
            saved_location_count=self._saved_location_count() if db_ok else 0,
            schema_version=self._schema_version() if db_ok else None,
        )

    def _check_db(self) -> bool:
        try:
            self.conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            logger.exception("Database check failed")
            return False

    def _check_open_meteo(self) -> bool:
        api = self.config.api
        return self._reachable(
            f"{api.open_meteo_base_url.rstrip('/')}/v1/forecast",
            {"latitude": "0", "longitude": "0", "current_weather": "true"},
        )

    def _check_geocoding(self) -> bool:
        api = self.config.api
        return self._reachable(
            f"{api.geocoding_base_url.rstrip('/')}/status", {"format": "json"}
        )

    def _reachable(self, url: str, params: dict) -> bool:
        try:
            resp = httpx.get(
                url,
                params=params,
                headers={"User-Agent": self.config.api.user_agent},
                timeout=10.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError as e:
            logger.warning("Health probe %s failed: %s", url, e)
            return False

    def _saved_location_count(self) -> int:
        try:
            return self.conn.execute("SELECT COUNT(*) FROM saved_locations").fetchone()[0]
        except sqlite3.Error:
            return 0

    def _schema_version(self) -> str | None:
        try:
            row = self.conn.execute(
                "SELECT version FROM schema_versions ORDER BY version DESC LIMIT 1"
            ).fetchone()
        except sqlite3.Error:
            return None
        return None if row is None else row[0]
