"""
State transitions for the calendar.

Every function takes the current CalendarState and returns a new one;
the input state is never modified.
"""

import time
from datetime import date

from core.config import DEFAULT_CATEGORIES, MAX_NOTIFICATIONS, RESCHEDULED_SUFFIX
from models.calendar import (
    Activity,
    ActivityStatus,
    CalendarConfig,
    CalendarState,
    Category,
    DayStyle,
    NotificationLog,
    NotificationType,
)
from models.results import ImportResult
from services.sanitizer import new_id


def default_state() -> CalendarState:
    """Fresh state used when nothing has been stored yet."""
    return CalendarState(
        config=CalendarConfig(),
        categories=[Category.model_validate(c) for c in DEFAULT_CATEGORIES],
    )


def _merge_config(config: CalendarConfig, update: dict) -> CalendarConfig:
    merged = {**config.model_dump(by_alias=True), **update}
    return CalendarConfig.model_validate(merged)


def merge_import(state: CalendarState, result: ImportResult) -> CalendarState:
    """
    Apply an import batch as a whole.

    Merges whenever the result carries data, even alongside row errors:
    activities and day styles are appended, categories appended when any
    were imported, and config keys overlaid on the current config.
    """
    data = result.data
    if data is None:
        return state

    update = {}
    if data.activities:
        update["activities"] = [*state.activities, *data.activities]
    if data.categories:
        update["categories"] = [*state.categories, *data.categories]
    if data.day_styles:
        update["day_styles"] = [*state.day_styles, *data.day_styles]
    if data.config:
        update["config"] = _merge_config(state.config, data.config)
    return state.model_copy(update=update)


def update_config(state: CalendarState, **changes) -> CalendarState:
    """Overlay config fields given by attribute name (e.g. institution_name=...)."""
    return state.model_copy(update={"config": state.config.model_copy(update=changes)})


# =============================================================================
# ACTIVITIES
# =============================================================================


def _replace_activity(state: CalendarState, activity_id: str, **changes) -> CalendarState:
    activities = [
        a.model_copy(update=changes) if a.id == activity_id else a for a in state.activities
    ]
    return state.model_copy(update={"activities": activities})


def add_activity(state: CalendarState, activity: Activity) -> CalendarState:
    """Append a new activity; it always starts out active."""
    added = activity.model_copy(update={"status": ActivityStatus.ACTIVE})
    return state.model_copy(update={"activities": [*state.activities, added]})


def update_activity(state: CalendarState, activity: Activity) -> CalendarState:
    """Replace the activity with the same id."""
    activities = [activity if a.id == activity.id else a for a in state.activities]
    return state.model_copy(update={"activities": activities})


def remove_activity(state: CalendarState, activity_id: str) -> CalendarState:
    activities = [a for a in state.activities if a.id != activity_id]
    return state.model_copy(update={"activities": activities})


def toggle_activity_completed(state: CalendarState, activity_id: str) -> CalendarState:
    activities = [
        a.model_copy(update={"completed": not a.completed}) if a.id == activity_id else a
        for a in state.activities
    ]
    return state.model_copy(update={"activities": activities})


def suspend_activity(state: CalendarState, activity_id: str) -> CalendarState:
    return _replace_activity(state, activity_id, status=ActivityStatus.SUSPENDED)


def reactivate_activity(state: CalendarState, activity_id: str) -> CalendarState:
    return _replace_activity(state, activity_id, status=ActivityStatus.ACTIVE)


def postpone_activity(
    state: CalendarState,
    activity_id: str,
    new_start: date,
    new_end: date | None = None,
    replacement_id: str | None = None,
) -> CalendarState:
    """
    Postpone an activity to new dates.

    The original stays in place, marked postponed, with `rescheduled_to_id`
    pointing at a new active copy carrying the new dates. Unknown ids leave
    the state unchanged.

    Raises:
        ValueError: new_end precedes new_start
    """
    new_end = new_end or new_start
    if new_end < new_start:
        raise ValueError(f"New end date {new_end} precedes new start date {new_start}")

    original = next((a for a in state.activities if a.id == activity_id), None)
    if original is None:
        return state

    replacement_id = replacement_id or new_id()
    replacement = original.model_copy(
        update={
            "id": replacement_id,
            "title": f"{original.title}{RESCHEDULED_SUFFIX}",
            "start_date": new_start,
            "end_date": new_end,
            "status": ActivityStatus.ACTIVE,
            "rescheduled_to_id": None,
        }
    )
    postponed = _replace_activity(
        state,
        activity_id,
        status=ActivityStatus.POSTPONED,
        rescheduled_to_id=replacement_id,
    )
    return postponed.model_copy(update={"activities": [*postponed.activities, replacement]})


def clear_month_activities(state: CalendarState, year: int, month: int) -> CalendarState:
    """Remove activities starting in the given month (1-12)."""
    activities = [
        a for a in state.activities
        if (a.start_date.year, a.start_date.month) != (year, month)
    ]
    return state.model_copy(update={"activities": activities})


# =============================================================================
# CATEGORIES
# =============================================================================


def add_category(state: CalendarState, category: Category) -> CalendarState:
    return state.model_copy(update={"categories": [*state.categories, category]})


def update_category(state: CalendarState, category: Category) -> CalendarState:
    categories = [category if c.id == category.id else c for c in state.categories]
    return state.model_copy(update={"categories": categories})


def remove_category(state: CalendarState, category_id: str) -> CalendarState:
    """Remove a category; activities and day styles keep their (now dangling) reference."""
    categories = [c for c in state.categories if c.id != category_id]
    return state.model_copy(update={"categories": categories})


# =============================================================================
# DAY STYLES
# =============================================================================


def upsert_day_style(
    state: CalendarState,
    style_id: str | None,
    day: str,
    changes: dict,
) -> tuple[CalendarState, str]:
    """
    Update the style with `style_id`, or create one starting on `day`.

    `changes` uses attribute names; an empty end_date clears the range back
    to a single day.

    Returns:
        Tuple of (new_state, style_id)
    """
    changes = dict(changes)
    if changes.get("end_date") == "":
        changes["end_date"] = None

    if style_id and any(s.id == style_id for s in state.day_styles):
        styles = [
            s.model_copy(update=changes) if s.id == style_id else s for s in state.day_styles
        ]
        return state.model_copy(update={"day_styles": styles}), style_id

    created = DayStyle(**{"id": new_id(), "start_date": day, **changes})
    return state.model_copy(update={"day_styles": [*state.day_styles, created]}), created.id


def remove_day_style(state: CalendarState, style_id: str) -> CalendarState:
    styles = [s for s in state.day_styles if s.id != style_id]
    return state.model_copy(update={"day_styles": styles})


# =============================================================================
# NOTIFICATIONS
# =============================================================================


def add_notification(
    state: CalendarState,
    message: str,
    notification_type: NotificationType = NotificationType.INFO,
    related_activity_ids: list[str] | None = None,
    timestamp_ms: int | None = None,
) -> CalendarState:
    """Prepend a notification, keeping only the newest MAX_NOTIFICATIONS."""
    notification = NotificationLog(
        id=new_id(),
        timestamp=timestamp_ms if timestamp_ms is not None else int(time.time() * 1000),
        message=message,
        type=notification_type,
        related_activity_ids=related_activity_ids or [],
    )
    notifications = [notification, *state.notifications][:MAX_NOTIFICATIONS]
    return state.model_copy(update={"notifications": notifications})


def remove_notification(state: CalendarState, notification_id: str) -> CalendarState:
    notifications = [n for n in state.notifications if n.id != notification_id]
    return state.model_copy(update={"notifications": notifications})
