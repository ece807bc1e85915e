"""
Export of calendar state to JSON backups, CSV sheets and Excel workbooks.

Exports never modify the state they are given, and raise ExportError
instead of producing partial output.
"""

from datetime import datetime, timezone
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.exceptions import IllegalCharacterError
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from core.config import APPLICATION_NAME, CSV_EXPORT_HEADERS, EXPORT_VERSION, XLSX_SHEET_NAME
from core.delimited import join_fields, split_lines
from models.calendar import Activity, CalendarState
from models.results import ExportEnvelope, ExportPayload


class ExportError(ValueError):
    """Raised when the state cannot be serialized."""


def to_json(state: CalendarState, now: datetime | None = None) -> str:
    """Serialize config, categories, activities and day styles in a versioned envelope."""
    try:
        envelope = ExportEnvelope(
            version=EXPORT_VERSION,
            application=APPLICATION_NAME,
            export_date=now or datetime.now(timezone.utc),
            data=ExportPayload(
                config=state.config,
                categories=state.categories,
                activities=state.activities,
                day_styles=state.day_styles,
            ),
        )
        return envelope.model_dump_json(by_alias=True, indent=2)
    except (PydanticSerializationError, ValidationError) as e:
        raise ExportError("Failed to generate JSON backup") from e


def activity_rows(state: CalendarState) -> list[list[str]]:
    """One row per activity, in CSV_EXPORT_HEADERS column order."""
    category_names = {c.id: c.name for c in state.categories}
    return [_activity_row(activity, category_names) for activity in state.activities]


def _activity_row(activity: Activity, category_names: dict[str, str]) -> list[str]:
    return [
        activity.id,
        activity.title,
        activity.start_date.isoformat(),
        activity.end_date.isoformat(),
        activity.program.value,
        activity.category_id or "",
        category_names.get(activity.category_id or "", ""),
        activity.status.value,
        "true" if activity.completed else "false",
        activity.description,
    ]


def _single_line(value: str) -> str:
    # Import reads one record per line
    return " ".join(split_lines(value))


def to_csv(state: CalendarState) -> str:
    """
    Serialize activities as comma-separated text with a fixed header.

    Every field is quoted with embedded quotes doubled; line breaks inside
    a field are folded into spaces.
    """
    try:
        lines = [",".join(CSV_EXPORT_HEADERS)]
        for row in activity_rows(state):
            lines.append(join_fields([_single_line(value) for value in row]))
        return "\n".join(lines)
    except (AttributeError, TypeError) as e:
        raise ExportError("Failed to generate CSV data") from e


def to_xlsx(state: CalendarState) -> bytes:
    """Write activities to a single-sheet Excel workbook and return its bytes."""
    try:
        wb = Workbook()
        ws = wb.active
        ws.title = XLSX_SHEET_NAME

        # Write headers (row 1)
        for col_idx, header in enumerate(CSV_EXPORT_HEADERS, start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = Font(bold=True)

        # Write data rows
        for row_idx, row_data in enumerate(activity_rows(state), start=2):
            for col_idx, value in enumerate(row_data, start=1):
                ws.cell(row=row_idx, column=col_idx, value=value)

        # Title and description columns get room to breathe
        ws.column_dimensions[get_column_letter(2)].width = 40
        ws.column_dimensions[get_column_letter(10)].width = 60

        buffer = BytesIO()
        wb.save(buffer)
        buffer.seek(0)
        return buffer.getvalue()
    except (IllegalCharacterError, TypeError, ValueError) as e:
        raise ExportError("Failed to generate Excel workbook") from e


def generate_filename(prefix: str, extension: str, now: datetime | None = None) -> str:
    """Build e.g. 'calendar_2026-03-10_0930.json'."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d_%H%M")
    return f"{prefix}_{stamp}.{extension}"
