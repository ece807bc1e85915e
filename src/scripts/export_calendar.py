#!/usr/bin/env python3
"""
Export the stored calendar as a JSON backup, CSV sheet or Excel workbook.

Usage:
    uv run python src/scripts/export_calendar.py [--format json|csv|xlsx] [--out PATH]

Example:
    uv run python src/scripts/export_calendar.py --format csv
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, OUTPUT_DIR, STORAGE_KEY
from core.database import create_tables, get_connection, load_state
from services.exporter import generate_filename, to_csv, to_json, to_xlsx


def export_state(state, export_format: str, output_path: Path | None) -> Path:
    """Serialize `state` and write it to disk, returning the path written."""
    if output_path is None:
        output_path = OUTPUT_DIR / "exports" / generate_filename("calendar", export_format)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    if export_format == "json":
        output_path.write_text(to_json(state), encoding="utf-8")
    elif export_format == "csv":
        output_path.write_text(to_csv(state), encoding="utf-8")
    else:
        output_path.write_bytes(to_xlsx(state))
    return output_path


def main():
    parser = argparse.ArgumentParser(description="Export the stored calendar")
    parser.add_argument(
        "--format",
        choices=["json", "csv", "xlsx"],
        default="json",
        help="Output format (default: json)",
    )
    parser.add_argument("--out", type=Path, default=None, help="Output file path")
    parser.add_argument("--key", default=STORAGE_KEY, help="Storage key of the calendar state")

    args = parser.parse_args()

    try:
        conn = get_connection(DB_PATH)
        try:
            create_tables(conn)
            state = load_state(conn, args.key)
        finally:
            conn.close()
        if state is None:
            raise ValueError(f"No calendar stored under key '{args.key}'")

        output_path = export_state(state, args.format, args.out)
        print(f"Exported {len(state.activities)} activities: {output_path}")
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
