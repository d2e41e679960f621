"""Observable store of saved locations on top of location_repo."""

import logging
import sqlite3
from collections.abc import Callable

from justweather.models.weather import SavedWeatherLocation
from justweather.observable import ListenerRegistry, Subscription, deliver
from justweather.storage import location_repo

logger = logging.getLogger(__name__)

LocationsCallback = Callable[[list[SavedWeatherLocation]], None]


class SavedLocationStore:
    """Saved locations with change notification.

    Subscribers receive the full list on subscribe and again after every
    committed write.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._listeners: ListenerRegistry[list[SavedWeatherLocation]] = (
            ListenerRegistry()
        )

    def insert_or_replace(self, location: SavedWeatherLocation) -> None:
        location_repo.save_location(self.conn, location)
        logger.debug("Saved location %s (%s)", location.id, location.name_of_location)
        self._notify()

    def delete(self, location_id: str) -> bool:
        deleted = location_repo.delete_location(self.conn, location_id)
        if deleted:
            logger.debug("Deleted location %s", location_id)
            self._notify()
        return deleted

    def get_all(self) -> list[SavedWeatherLocation]:
        return location_repo.get_all_locations(self.conn)

    def find_by_coordinates(
        self, latitude: str, longitude: str
    ) -> SavedWeatherLocation | None:
        return location_repo.get_location_by_coordinates(self.conn, latitude, longitude)

    def observe_all(self, callback: LocationsCallback) -> Subscription:
        subscription = self._listeners.add(callback)
        deliver(callback, self.get_all())
        return subscription

    def _notify(self) -> None:
        if len(self._listeners) == 0:
            return
        self._listeners.notify(self.get_all())
