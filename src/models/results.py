"""Transient result models for import and export."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import Field

from models.calendar import Activity, CalendarConfig, CamelModel, Category, DayStyle


class ImportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"
    UNKNOWN = "unknown"


class StateFragment(CamelModel):
    """Partial state produced by an import, merged by the caller."""

    config: dict[str, Any] | None = None  # camelCase keys, partial update
    categories: list[Category] | None = None
    activities: list[Activity] | None = None
    day_styles: list[DayStyle] | None = None


class ImportResult(CamelModel):
    """Outcome of one import: row-level warnings/errors never abort the batch."""

    success: bool
    message: str
    data: StateFragment | None = None
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class ExportPayload(CamelModel):
    config: CalendarConfig
    categories: list[Category]
    activities: list[Activity]
    day_styles: list[DayStyle]


class ExportEnvelope(CamelModel):
    """Versioned JSON backup document."""

    version: str
    application: str
    export_date: datetime
    data: ExportPayload
