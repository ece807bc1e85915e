#!/usr/bin/env python3
"""
Show the day style and activities that govern a calendar day.

Usage:
    uv run python src/scripts/show_day.py <date> [--key KEY]

Example:
    uv run python src/scripts/show_day.py 10/03/2026
"""

import argparse
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH, STORAGE_KEY
from core.database import create_tables, get_connection, load_state
from core.dates import parse_flexible_date
from services.reconciler import activities_on, resolve_color, style_for
from services.state import default_state


def main():
    parser = argparse.ArgumentParser(description="Show what governs a calendar day")
    parser.add_argument("date", help="Date, e.g. 2026-03-10 or 10/03/2026")
    parser.add_argument("--key", default=STORAGE_KEY, help="Storage key of the calendar state")

    args = parser.parse_args()

    day = parse_flexible_date(args.date)
    if day is None:
        print(f"Error: could not parse date '{args.date}'")
        sys.exit(1)

    conn = get_connection(DB_PATH)
    try:
        create_tables(conn)
        state = load_state(conn, args.key) or default_state()
    finally:
        conn.close()

    print(f"Day: {day.isoformat()}")

    style = style_for(day, state.day_styles)
    if style:
        label = style.label or "(no label)"
        holiday = " [holiday]" if style.is_holiday else ""
        print(f"  Style: {label}{holiday} ({style.start_date} - {style.end_date or style.start_date})")
    else:
        print("  Style: None")

    activities = activities_on(day, state.activities)
    if activities:
        print(f"  Activities ({len(activities)}):")
        for activity in activities:
            color = resolve_color(activity, state.categories)
            print(f"    - {activity.title} [{activity.program.value}, {activity.status.value}] {color}")
    else:
        print("  Activities: None")


if __name__ == "__main__":
    main()
