"""Tests for state transitions."""

from datetime import date

import pytest

from core.config import DEFAULT_CATEGORIES, MAX_NOTIFICATIONS, RESCHEDULED_SUFFIX
from models.calendar import ActivityStatus, Category, NotificationType
from models.results import ImportResult, StateFragment
from services.importer import import_csv, import_json
from services.reconciler import resolve_color
from services.state import (
    add_activity,
    add_category,
    add_notification,
    clear_month_activities,
    default_state,
    merge_import,
    postpone_activity,
    reactivate_activity,
    remove_activity,
    remove_category,
    remove_day_style,
    remove_notification,
    suspend_activity,
    toggle_activity_completed,
    update_activity,
    update_category,
    update_config,
    upsert_day_style,
)


def test_default_state():
    state = default_state()
    assert [c.id for c in state.categories] == [c["id"] for c in DEFAULT_CATEGORIES]
    assert state.config.year == 2026
    assert state.activities == [] and state.day_styles == [] and state.notifications == []


# =============================================================================
# IMPORT MERGE
# =============================================================================


def test_merge_appends_activities_and_keeps_original(sample_state):
    result = import_csv("title,start\nNuevo,2026-07-01\n")
    merged = merge_import(sample_state, result)

    assert len(merged.activities) == 3
    assert merged.activities[-1].title == "Nuevo"
    assert len(sample_state.activities) == 2


def test_merge_partial_success_with_errors(sample_state):
    result = import_csv("title,start\nBien,2026-07-01\nMal,99/99/2026\n")
    assert result.errors

    merged = merge_import(sample_state, result)
    assert [a.title for a in merged.activities][-1] == "Bien"


def test_merge_after_json_with_invalid_config_keeps_current_config(sample_state):
    result = import_json(
        '{"config": {"year": "abc"}, "activities": [{"title": "Gira", "startDate": "2026-05-02"}]}'
    )

    merged = merge_import(sample_state, result)

    assert merged.config == sample_state.config
    assert merged.activities[-1].title == "Gira"


def test_merge_failed_result_is_a_no_op(sample_state):
    result = ImportResult(success=False, message="nope")
    assert merge_import(sample_state, result) is sample_state


def test_merge_categories_styles_and_config(sample_state):
    fragment = StateFragment(
        categories=[Category(id="cat-9", name="Giras", color="#000")],
        day_styles=[],
        activities=[],
        config={"institutionName": "Conservatorio", "theme": "dark"},
    )
    merged = merge_import(sample_state, ImportResult(success=True, message="ok", data=fragment))

    assert [c.id for c in merged.categories][-1] == "cat-9"
    assert merged.day_styles == sample_state.day_styles
    assert merged.config.institution_name == "Conservatorio"
    assert merged.config.year == sample_state.config.year
    assert merged.config.model_dump(by_alias=True)["theme"] == "dark"


def test_update_config(sample_state):
    updated = update_config(sample_state, subtitle="Temporada 2026")
    assert updated.config.subtitle == "Temporada 2026"
    assert sample_state.config.subtitle != "Temporada 2026"


# =============================================================================
# ACTIVITIES
# =============================================================================


def test_add_activity_forces_active(empty_state, sample_activity):
    added = add_activity(empty_state, sample_activity.model_copy(update={"status": ActivityStatus.SUSPENDED}))
    assert added.activities[0].status == ActivityStatus.ACTIVE


def test_update_and_remove_activity(sample_state, sample_activity):
    renamed = update_activity(sample_state, sample_activity.model_copy(update={"title": "Ensayo Abierto"}))
    assert renamed.activities[0].title == "Ensayo Abierto"

    removed = remove_activity(renamed, "act-1")
    assert [a.id for a in removed.activities] == ["act-2"]


def test_toggle_completed(sample_state):
    toggled = toggle_activity_completed(sample_state, "act-1")
    assert toggled.activities[0].completed is True
    assert toggle_activity_completed(toggled, "act-1").activities[0].completed is False
    assert sample_state.activities[0].completed is False


def test_suspend_and_reactivate(sample_state):
    suspended = suspend_activity(sample_state, "act-1")
    assert suspended.activities[0].status == ActivityStatus.SUSPENDED
    assert reactivate_activity(suspended, "act-1").activities[0].status == ActivityStatus.ACTIVE


def test_postpone_spawns_linked_replacement(sample_state):
    state = postpone_activity(
        sample_state, "act-1", date(2026, 4, 20), date(2026, 4, 22), replacement_id="act-1b"
    )

    original = state.activities[0]
    replacement = state.activities[-1]
    assert original.status == ActivityStatus.POSTPONED
    assert original.rescheduled_to_id == "act-1b"
    assert original.start_date == date(2026, 3, 10)

    assert replacement.id == "act-1b"
    assert replacement.title == "Ensayo General" + RESCHEDULED_SUFFIX
    assert replacement.start_date == date(2026, 4, 20)
    assert replacement.end_date == date(2026, 4, 22)
    assert replacement.status == ActivityStatus.ACTIVE
    assert replacement.rescheduled_to_id is None
    assert replacement.program == original.program

    # input untouched
    assert sample_state.activities[0].status == ActivityStatus.ACTIVE
    assert len(sample_state.activities) == 2


def test_postpone_single_day_default(sample_state):
    state = postpone_activity(sample_state, "act-1", date(2026, 5, 1))
    assert state.activities[-1].end_date == date(2026, 5, 1)
    assert state.activities[0].rescheduled_to_id == state.activities[-1].id


def test_postpone_unknown_id_is_a_no_op(sample_state):
    assert postpone_activity(sample_state, "nope", date(2026, 5, 1)) is sample_state


def test_postpone_rejects_reversed_dates(sample_state):
    with pytest.raises(ValueError):
        postpone_activity(sample_state, "act-1", date(2026, 5, 2), date(2026, 5, 1))


def test_clear_month_activities(sample_state):
    cleared = clear_month_activities(sample_state, 2026, 3)
    assert cleared.activities == []
    assert len(clear_month_activities(sample_state, 2026, 4).activities) == 2


# =============================================================================
# CATEGORIES
# =============================================================================


def test_category_lifecycle_without_cascade(sample_state):
    added = add_category(sample_state, Category(id="cat-3", name="Giras", color="#111111"))
    assert len(added.categories) == 3

    recolored = update_category(added, Category(id="cat-1", name="Regular", color="#abcdef"))
    assert recolored.categories[0].color == "#abcdef"

    removed = remove_category(recolored, "cat-1")
    assert [c.id for c in removed.categories] == ["cat-2", "cat-3"]
    # dangling reference kept, rendered with the activity's own color
    assert removed.activities[0].category_id == "cat-1"
    assert resolve_color(removed.activities[0], removed.categories) == removed.activities[0].color


# =============================================================================
# DAY STYLES
# =============================================================================


def test_upsert_day_style_creates_then_updates(empty_state):
    state, style_id = upsert_day_style(empty_state, None, "2026-03-10", {"label": "Feriado", "is_holiday": True})
    assert state.day_styles[0].id == style_id
    assert state.day_styles[0].start_date == "2026-03-10"

    state, same_id = upsert_day_style(state, style_id, "2026-03-10", {"end_date": "2026-03-12"})
    assert same_id == style_id
    assert state.day_styles[0].end_date == "2026-03-12"
    assert state.day_styles[0].label == "Feriado"

    state, _ = upsert_day_style(state, style_id, "2026-03-10", {"end_date": ""})
    assert state.day_styles[0].end_date is None
    assert len(state.day_styles) == 1


# =============================================================================
# NOTIFICATIONS
# =============================================================================


def test_notifications_newest_first_and_capped(empty_state):
    state = empty_state
    for i in range(MAX_NOTIFICATIONS + 5):
        state = add_notification(state, f"msg {i}", NotificationType.SUCCESS, timestamp_ms=i)

    assert len(state.notifications) == MAX_NOTIFICATIONS
    assert state.notifications[0].message == f"msg {MAX_NOTIFICATIONS + 4}"
    assert state.notifications[-1].message == "msg 5"


def test_remove_notification(empty_state):
    state = add_notification(empty_state, "hola", related_activity_ids=["act-1"])
    notification = state.notifications[0]
    assert notification.type == NotificationType.INFO
    assert notification.related_activity_ids == ["act-1"]
    assert notification.timestamp > 0

    assert remove_notification(state, notification.id).notifications == []


def test_remove_day_style(sample_state):
    assert remove_day_style(sample_state, "ds-1").day_styles == []
    assert remove_day_style(sample_state, "other").day_styles == sample_state.day_styles
