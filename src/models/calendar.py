"""
Data models for calendar entities.

Attributes are snake_case in Python and camelCase on the wire
(JSON exports, persisted state blobs).
"""

from datetime import date
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from core.config import DEFAULT_ACTIVITY_COLOR, DEFAULT_CONFIG


class CamelModel(BaseModel):
    """Base for immutable models serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Program(str, Enum):
    ORCHESTRA = "Orchestra"
    CHOIR = "Choir"
    CHILDRENS_CHOIR = "Children's Choir"
    YOUTH_CHOIR = "Youth Choir"
    GENERAL = "General"


class ActivityStatus(str, Enum):
    ACTIVE = "active"
    POSTPONED = "postponed"
    SUSPENDED = "suspended"


class NotificationType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"
    AI = "ai"


class Category(CamelModel):
    """Named color tag."""

    id: str
    name: str
    color: str


class Activity(CamelModel):
    """Schedulable event spanning an inclusive date range."""

    id: str
    title: str
    start_date: date
    end_date: date
    color: str = DEFAULT_ACTIVITY_COLOR
    program: Program = Program.GENERAL
    category_id: str | None = None
    description: str = ""
    status: ActivityStatus = ActivityStatus.ACTIVE
    completed: bool = False
    rescheduled_to_id: str | None = None  # set when postponed

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError(f"end_date {self.end_date} precedes start_date {self.start_date}")
        return self


class DayStyle(CamelModel):
    """
    Visual override for one day or a date range.

    Dates are kept as supplied; unparseable values simply never match a day.
    """

    id: str
    start_date: str
    end_date: str | None = None  # None means single-day
    shape: Literal["circle", "square"] | None = None
    bg_color: str | None = None
    icon: str | None = None
    label: str | None = None
    is_holiday: bool = False
    category_id: str | None = None


class MonthOrnament(CamelModel):
    month: int  # 0-11
    icon: str


class CalendarConfig(CamelModel):
    """Calendar-wide settings. Unknown keys are kept and exported as-is."""

    model_config = ConfigDict(extra="allow")

    year: int = DEFAULT_CONFIG["year"]
    institutional_logo: str | None = DEFAULT_CONFIG["institutionalLogo"]
    institution_name: str = DEFAULT_CONFIG["institutionName"]
    subtitle: str = DEFAULT_CONFIG["subtitle"]
    month_ornaments: list[MonthOrnament] = Field(default_factory=list)


class NotificationLog(CamelModel):
    id: str
    timestamp: int  # epoch milliseconds
    message: str
    type: NotificationType = NotificationType.INFO
    related_activity_ids: list[str] = Field(default_factory=list)


class CalendarState(CamelModel):
    """The whole application state tree; replaced wholesale on every change."""

    config: CalendarConfig = Field(default_factory=CalendarConfig)
    categories: list[Category] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    day_styles: list[DayStyle] = Field(default_factory=list)
    notifications: list[NotificationLog] = Field(default_factory=list)
