"""Initial schema: saved weather locations."""

import sqlite3

DDL = [
    """
    CREATE TABLE IF NOT EXISTS saved_locations (
        id TEXT PRIMARY KEY,
        name_of_location TEXT NOT NULL,
        latitude TEXT NOT NULL,
        longitude TEXT NOT NULL,
        saved_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    (
        "CREATE INDEX IF NOT EXISTS idx_saved_locations_coordinates "
        "ON saved_locations(latitude, longitude)"
    ),
]


def up(conn: sqlite3.Connection) -> None:
    for statement in DDL:
        conn.execute(statement)
    conn.commit()
