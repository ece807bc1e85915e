"""
SQLite key-value store for the persisted calendar state.
"""

import sqlite3
from pathlib import Path

from core.config import DB_PATH
from models.calendar import CalendarState


def get_connection(db_path: Path = DB_PATH) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path)


def create_tables(conn: sqlite3.Connection):
    """Create the state and import log tables if they don't exist."""
    cursor = conn.cursor()

    # Opaque state blobs, one JSON document per storage key
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_state (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT CURRENT_TIMESTAMP
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS import_runs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            run_id TEXT UNIQUE NOT NULL,
            timestamp TEXT NOT NULL,
            source_name TEXT,
            format TEXT NOT NULL,
            success INTEGER NOT NULL,
            message TEXT NOT NULL,
            activities_imported INTEGER NOT NULL,
            processing_time_ms INTEGER NOT NULL
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS import_run_details (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            run_id TEXT NOT NULL,
            detail_type TEXT NOT NULL CHECK(detail_type IN ('warning', 'error')),
            message TEXT NOT NULL,
            FOREIGN KEY (run_id) REFERENCES import_runs(run_id)
        )
    """)

    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_import_runs_timestamp ON import_runs(timestamp)"
    )
    cursor.execute(
        "CREATE INDEX IF NOT EXISTS idx_import_run_details_run ON import_run_details(run_id)"
    )
    conn.commit()


def load_state(conn: sqlite3.Connection, key: str) -> CalendarState | None:
    """Load the state stored under `key`, or None if nothing is stored."""
    cursor = conn.cursor()
    cursor.execute("SELECT value FROM app_state WHERE key = ?", (key,))
    row = cursor.fetchone()
    if row is None:
        return None
    return CalendarState.model_validate_json(row[0])


def save_state(conn: sqlite3.Connection, key: str, state: CalendarState):
    """Write the whole state under `key`, replacing any previous blob."""
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO app_state (key, value, updated_at)
        VALUES (?, ?, CURRENT_TIMESTAMP)
        ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
        """,
        (key, state.model_dump_json(by_alias=True)),
    )
    conn.commit()
