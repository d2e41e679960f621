"""Nominatim reverse-geocoding client: coordinates to a place name."""

import logging

import httpx

logger = logging.getLogger(__name__)

NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"

# Most specific first.
_ADDRESS_KEYS = ("city", "town", "village", "hamlet", "municipality")


class GeocodingClient:
    def __init__(
        self,
        base_url: str = NOMINATIM_BASE_URL,
        user_agent: str = "justweather/0.1.0",
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    def get_location_name(self, latitude: str, longitude: str) -> str | None:
        """Reverse-geocode coordinates. Returns None when nothing is found there."""
        url = f"{self.base_url}/reverse"
        params = {"format": "jsonv2", "lat": latitude, "lon": longitude}
        try:
            resp = httpx.get(
                url,
                params=params,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("Geocoding API error for %s,%s: %s", latitude, longitude, e)
            raise
        except httpx.RequestError as e:
            logger.error(
                "Geocoding request failed for %s,%s: %s", latitude, longitude, e
            )
            raise
        return extract_location_name(resp.json())


def extract_location_name(data: dict) -> str | None:
    if not isinstance(data, dict) or "error" in data:
        return None

    address = data.get("address") or {}
    for key in _ADDRESS_KEYS:
        if address.get(key):
            return address[key]
    if data.get("name"):
        return data["name"]

    display_name = data.get("display_name") or ""
    first = display_name.split(",")[0].strip()
    return first or None
