"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DB_PATH = Path(os.environ.get("CALENDAR_DB_PATH", PROJECT_ROOT / "data" / "db" / "calendar.db"))
OUTPUT_DIR = Path(os.environ.get("CALENDAR_OUTPUT_DIR", PROJECT_ROOT / "output"))

# =============================================================================
# STORAGE
# =============================================================================

STORAGE_KEY = os.environ.get("CALENDAR_STORAGE_KEY", "sinfonia_calendar_data")

# =============================================================================
# CALENDAR DEFAULTS
# =============================================================================

DEFAULT_ACTIVITY_COLOR = "#3b82f6"
UNTITLED_ACTIVITY = "Untitled"
RESCHEDULED_SUFFIX = " (Rescheduled)"
MAX_NOTIFICATIONS = 50

DEFAULT_CONFIG = {
    "year": 2026,
    "institutionalLogo": None,
    "institutionName": "El Sistema Punta Cana",
    "subtitle": "Calendario Sinfónico",
}

DEFAULT_CATEGORIES = [
    {"id": "cat-1", "name": "Actividades Regulares", "color": "#fbbf24"},
    {"id": "cat-2", "name": "No Laborables", "color": "#ef4444"},
    {"id": "cat-3", "name": "Actividades Administrativas", "color": "#3b82f6"},
    {"id": "cat-4", "name": "Ensayos Puertas Cerradas", "color": "#111827"},
    {"id": "cat-5", "name": "Temporada de Conciertos", "color": "#22c55e"},
]

# =============================================================================
# FREE-TEXT COERCION (evaluated top to bottom, first hit wins)
# =============================================================================

# "coro inf" / "coro juv" must be checked before the bare "coro"
PROGRAM_KEYWORDS = [
    ("orq", "Orchestra"),
    ("coro inf", "Children's Choir"),
    ("coro juv", "Youth Choir"),
    ("coro", "Choir"),
]

STATUS_KEYWORDS = [
    ("post", "postponed"),
    ("susp", "suspended"),
]

# =============================================================================
# CSV IMPORT
# =============================================================================

# Column role -> header substrings (headers are lower-cased before matching)
CSV_COLUMN_KEYWORDS = {
    "title": ("tit", "evento", "actividad"),
    "start": ("start", "ini", "desde", "fecha"),
    "end": ("end", "fin", "hasta"),
    "program": ("prog",),
    "category": ("cat",),
    "description": ("desc", "notas", "detall"),
}

# =============================================================================
# EXPORT
# =============================================================================

EXPORT_VERSION = "1.5.1"
APPLICATION_NAME = "Sinfonia Calendar Core"

CSV_EXPORT_HEADERS = [
    "id", "title", "startDate", "endDate", "program",
    "categoryId", "categoryName", "status", "completed", "description",
]

XLSX_SHEET_NAME = "Activities"

# =============================================================================
# DATE PARSING
# =============================================================================

# Direct parses yielding a year at or below this are treated as garbage
MIN_PLAUSIBLE_YEAR = 1000
