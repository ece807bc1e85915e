"""
Normalization of raw (JSON or CSV sourced) records into Activity models.
"""

import uuid
from datetime import date

from core.config import DEFAULT_ACTIVITY_COLOR, PROGRAM_KEYWORDS, STATUS_KEYWORDS, UNTITLED_ACTIVITY
from core.dates import parse_flexible_date
from models.calendar import Activity, ActivityStatus, Category, Program


def new_id() -> str:
    """Generate a collision-resistant opaque identifier."""
    return uuid.uuid4().hex


def coerce_program(value) -> Program:
    """
    Map free text to a Program.

    Exact program names (any case) map to themselves; otherwise the keyword
    table is checked top to bottom by substring, defaulting to General.
    """
    text = str(value or "").strip().lower()
    for program in Program:
        if text == program.value.lower():
            return program
    for keyword, program_value in PROGRAM_KEYWORDS:
        if keyword in text:
            return Program(program_value)
    return Program.GENERAL


def coerce_status(value) -> ActivityStatus:
    """Map free text to an ActivityStatus ('post...', 'susp...', else active)."""
    text = str(value or "").lower()
    for keyword, status_value in STATUS_KEYWORDS:
        if keyword in text:
            return ActivityStatus(status_value)
    return ActivityStatus.ACTIVE


def coerce_bool(value) -> bool:
    """Truthiness, except that the strings 'false'/'0'/'no' are False."""
    if isinstance(value, str):
        return value.strip().lower() not in {"", "false", "0", "no"}
    return bool(value)


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def sanitize_activity(
    raw: dict,
    categories: list[Category] | None = None,
    today: date | None = None,
    warnings: list[str] | None = None,
) -> Activity:
    """
    Build a well-typed Activity from an untyped record.

    Missing or unparseable fields are defaulted: a new id, the placeholder
    title, today's date (start) or the start date (end), the category color
    or the default color. An end date before the start date is clamped to
    the start date, and a note is appended to `warnings` when given.
    Never raises.
    """
    today = today or date.today()
    title = _text(raw.get("title")) or UNTITLED_ACTIVITY

    start_date = parse_flexible_date(_text(raw.get("startDate"))) or today
    end_date = parse_flexible_date(_text(raw.get("endDate"))) or start_date
    if end_date < start_date:
        if warnings is not None:
            warnings.append(f'"{title}": end date preceded the start date; set to the start date.')
        end_date = start_date

    category_id = _text(raw.get("categoryId")) or None
    color = _text(raw.get("color"))
    if not color and category_id:
        category = next((c for c in categories or [] if c.id == category_id), None)
        if category:
            color = category.color

    return Activity(
        id=_text(raw.get("id")) or new_id(),
        title=title,
        start_date=start_date,
        end_date=end_date,
        color=color or DEFAULT_ACTIVITY_COLOR,
        program=coerce_program(raw.get("program")),
        category_id=category_id,
        description=_text(raw.get("description")),
        status=coerce_status(raw.get("status")),
        completed=coerce_bool(raw.get("completed")),
        rescheduled_to_id=_text(raw.get("rescheduledToId")) or None,
    )
