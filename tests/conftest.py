"""
Pytest configuration and shared fixtures.
"""

import sqlite3
import sys
from datetime import date
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.database import create_tables  # noqa: E402
from models.calendar import Activity, CalendarState, Category, DayStyle  # noqa: E402
from services.state import default_state  # noqa: E402


@pytest.fixture
def today():
    """Fixed 'now' for sanitizer defaults."""
    return date(2026, 1, 15)


@pytest.fixture
def sample_categories():
    return [
        Category(id="cat-1", name="Actividades Regulares", color="#fbbf24"),
        Category(id="cat-2", name='Conciertos "Gala"', color="#22c55e"),
    ]


@pytest.fixture
def sample_activity():
    """Sample activity for testing."""
    return Activity(
        id="act-1",
        title="Ensayo General",
        start_date=date(2026, 3, 10),
        end_date=date(2026, 3, 12),
        program="Orchestra",
        category_id="cat-1",
        description="Sala principal",
    )


@pytest.fixture
def sample_state(sample_activity, sample_categories):
    """State with two activities, two categories and one day style."""
    return CalendarState(
        categories=sample_categories,
        activities=[
            sample_activity,
            Activity(
                id="act-2",
                title='Concierto "Gala", Temporada',
                start_date=date(2026, 3, 15),
                end_date=date(2026, 3, 15),
                program="Children's Choir",
                category_id="cat-2",
                status="suspended",
                completed=True,
            ),
        ],
        day_styles=[
            DayStyle(id="ds-1", start_date="2026-04-02", end_date="2026-04-05", label="Semana Santa", is_holiday=True),
        ],
    )


@pytest.fixture
def empty_state():
    return default_state()


@pytest.fixture
def db_conn(tmp_path):
    """Fresh SQLite database with all tables."""
    conn = sqlite3.connect(tmp_path / "calendar.db")
    create_tables(conn)
    yield conn
    conn.close()
