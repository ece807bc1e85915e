#!/usr/bin/env python3
"""
Import activities from a JSON backup or CSV sheet into the stored calendar.

Detects the file format, reports warnings and per-row errors, merges whatever
was imported into the stored state and records the run in the import log.

Usage:
    uv run python src/scripts/import_calendar.py <file> [--key KEY] [--dry-run]

Example:
    uv run python src/scripts/import_calendar.py data/season_2026.csv
"""

import argparse
import sys
import time
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, STORAGE_KEY
from core.database import create_tables, get_connection, load_state, save_state
from core.import_log import ImportLog, log_import
from models.calendar import NotificationType
from services.importer import detect_format, import_content
from services.state import add_notification, default_state, merge_import


def print_result(result):
    """Print the import outcome with its warnings and errors."""
    print(result.message)
    if result.warnings:
        print(f"\nWarnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  - {warning}")
    if result.errors:
        print(f"\nErrors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  - {error}")


def main():
    parser = argparse.ArgumentParser(
        description="Import calendar activities from a JSON or CSV file"
    )
    parser.add_argument("input_file", type=Path, help="Path to the JSON or CSV file")
    parser.add_argument("--key", default=STORAGE_KEY, help="Storage key of the calendar state")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Parse and report without saving",
    )

    args = parser.parse_args()
    start_time = time.time()

    try:
        if not args.input_file.exists():
            raise FileNotFoundError(f"Input file not found: {args.input_file}")

        print(f"Reading input file: {args.input_file}")
        content = args.input_file.read_text(encoding="utf-8-sig")

        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        conn = get_connection(DB_PATH)
        try:
            create_tables(conn)
            state = load_state(conn, args.key) or default_state()

            import_log = ImportLog(
                source_name=args.input_file.name,
                format=detect_format(content).value,
            )
            result = import_content(content, state.categories)
            import_log.record_result(result)
            print_result(result)

            if args.dry_run:
                print("\nDry run: nothing saved.")
            elif result.data is not None:
                state = merge_import(state, result)
                state = add_notification(
                    state,
                    result.message,
                    NotificationType.SUCCESS if result.success else NotificationType.WARNING,
                )
                save_state(conn, args.key, state)
                print(f"\nSaved calendar state under key '{args.key}'")

            import_log.processing_time_ms = int((time.time() - start_time) * 1000)
            try:
                log_import(conn, import_log)
            except Exception as e:
                # Don't fail the import if logging fails
                print(f"Failed to write import log: {e}")
        finally:
            conn.close()

        if not result.success:
            sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
