"""Repository functions for the saved_locations table."""

import sqlite3

from justweather.models.weather import SavedWeatherLocation


def save_location(conn: sqlite3.Connection, location: SavedWeatherLocation) -> None:
    """Insert a location, replacing any record with the same id.

    A replaced record keeps its rowid and saved_at, so it keeps its place in
    get_all_locations order.
    """
    conn.execute(
        "INSERT INTO saved_locations (id, name_of_location, latitude, longitude) "
        "VALUES (?, ?, ?, ?) "
        "ON CONFLICT(id) DO UPDATE SET "
        "name_of_location = excluded.name_of_location, "
        "latitude = excluded.latitude, "
        "longitude = excluded.longitude",
        (location.id, location.name_of_location, location.latitude, location.longitude),
    )
    conn.commit()


def delete_location(conn: sqlite3.Connection, location_id: str) -> bool:
    """Delete a location. Returns False if no record had that id."""
    cursor = conn.execute("DELETE FROM saved_locations WHERE id = ?", (location_id,))
    conn.commit()
    return cursor.rowcount > 0


def get_all_locations(conn: sqlite3.Connection) -> list[SavedWeatherLocation]:
    rows = conn.execute(
        "SELECT id, name_of_location, latitude, longitude FROM saved_locations "
        "ORDER BY rowid"
    ).fetchall()
    return [_to_location(r) for r in rows]


def get_location_by_id(
    conn: sqlite3.Connection, location_id: str
) -> SavedWeatherLocation | None:
    row = conn.execute(
        "SELECT id, name_of_location, latitude, longitude FROM saved_locations "
        "WHERE id = ?",
        (location_id,),
    ).fetchone()
    if row is None:
        return None
    return _to_location(row)


def get_location_by_coordinates(
    conn: sqlite3.Connection, latitude: str, longitude: str
) -> SavedWeatherLocation | None:
    """Find a saved location by its exact coordinate strings."""
    row = conn.execute(
        "SELECT id, name_of_location, latitude, longitude FROM saved_locations "
        "WHERE latitude = ? AND longitude = ? ORDER BY rowid DESC LIMIT 1",
        (latitude.strip(), longitude.strip()),
    ).fetchone()
    if row is None:
        return None
    return _to_location(row)


def _to_location(row: sqlite3.Row) -> SavedWeatherLocation:
    return SavedWeatherLocation(
        id=row["id"],
        name_of_location=row["name_of_location"],
        latitude=row["latitude"],
        longitude=row["longitude"],
    )
