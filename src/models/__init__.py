"""Calendar data models."""

from .calendar import (
    Activity,
    ActivityStatus,
    CalendarConfig,
    CalendarState,
    Category,
    DayStyle,
    MonthOrnament,
    NotificationLog,
    NotificationType,
    Program,
)
from .results import ExportEnvelope, ExportPayload, ImportFormat, ImportResult, StateFragment

__all__ = [
    "Activity",
    "ActivityStatus",
    "CalendarConfig",
    "CalendarState",
    "Category",
    "DayStyle",
    "ExportEnvelope",
    "ExportPayload",
    "ImportFormat",
    "ImportResult",
    "MonthOrnament",
    "NotificationLog",
    "NotificationType",
    "Program",
    "StateFragment",
]
