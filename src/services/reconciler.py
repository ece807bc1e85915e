"""
Resolution of which day style and activities govern a calendar day.
"""

import calendar
from datetime import date

from core.config import DEFAULT_ACTIVITY_COLOR
from core.dates import parse_flexible_date
from models.calendar import Activity, Category, DayStyle


def style_range(style: DayStyle) -> tuple[date, date] | None:
    """
    Inclusive (start, end) of a style, or None if it can never match.

    A style without an end date covers its start date only. Unparseable
    dates and reversed ranges make the style inert.
    """
    start = parse_flexible_date(style.start_date)
    if start is None:
        return None
    if not style.end_date:
        return start, start
    end = parse_flexible_date(style.end_date)
    if end is None or end < start:
        return None
    return start, end


def style_matches(style: DayStyle, day: date) -> bool:
    span = style_range(style)
    return span is not None and span[0] <= day <= span[1]


def style_for(day: date, styles: list[DayStyle]) -> DayStyle | None:
    """
    The single day style governing `day`.

    Overlaps are settled by the narrowest range; among equally narrow
    styles, the one added last (latest in `styles`) wins.
    """
    best = None
    best_key = None
    for position, style in enumerate(styles):
        span = style_range(style)
        if span is None or not span[0] <= day <= span[1]:
            continue
        key = ((span[1] - span[0]).days, -position)
        if best_key is None or key < best_key:
            best, best_key = style, key
    return best


def activity_for(day: date, activities: list[Activity]) -> Activity | None:
    """The activity starting on `day`; the most recently added wins ties."""
    for activity in reversed(activities):
        if activity.start_date == day:
            return activity
    return None


def activities_on(day: date, activities: list[Activity]) -> list[Activity]:
    """All activities whose inclusive range covers `day`, by start date."""
    covering = [a for a in activities if a.start_date <= day <= a.end_date]
    return sorted(covering, key=lambda a: a.start_date)


def activities_in_month(year: int, month: int, activities: list[Activity]) -> list[Activity]:
    """Activities overlapping the given month (month is 1-12), by start date."""
    month_start = date(year, month, 1)
    month_end = date(year, month, calendar.monthrange(year, month)[1])
    overlapping = [a for a in activities if a.start_date <= month_end and a.end_date >= month_start]
    return sorted(overlapping, key=lambda a: a.start_date)


def resolve_color(activity: Activity, categories: list[Category]) -> str:
    """Category color when the category exists, else the activity's own color."""
    for category in categories:
        if category.id == activity.category_id:
            return category.color
    return activity.color or DEFAULT_ACTIVITY_COLOR
