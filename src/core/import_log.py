"""SQLite logging of import runs."""

import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from models.results import ImportResult


@dataclass
class ImportLog:
    """Captured outcome of one import run."""

    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    source_name: str | None = None
    format: str = "unknown"
    success: bool = False
    message: str = ""
    activities_imported: int = 0
    processing_time_ms: int = 0
    details: list[tuple[str, str]] = field(default_factory=list)  # (type, message)

    def record_result(self, result: ImportResult):
        """Copy outcome, counts and per-row notices from an ImportResult."""
        self.success = result.success
        self.message = result.message
        if result.data and result.data.activities:
            self.activities_imported = len(result.data.activities)
        self.details.extend(("warning", w) for w in result.warnings)
        self.details.extend(("error", e) for e in result.errors)


def log_import(conn: sqlite3.Connection, log: ImportLog) -> None:
    """Write an import log and its details."""
    cursor = conn.cursor()

    # Insert main run record
    cursor.execute(
        """
        INSERT INTO import_runs (
            run_id, timestamp, source_name, format, success,
            message, activities_imported, processing_time_ms
        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
    """,
        (
            log.run_id,
            log.timestamp,
            log.source_name,
            log.format,
            int(log.success),
            log.message,
            log.activities_imported,
            log.processing_time_ms,
        ),
    )

    # Insert detail records
    for detail_type, message in log.details:
        cursor.execute(
            """
            INSERT INTO import_run_details (run_id, detail_type, message)
            VALUES (?, ?, ?)
        """,
            (log.run_id, detail_type, message),
        )

    conn.commit()
