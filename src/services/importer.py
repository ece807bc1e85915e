"""
Import of calendar data from JSON backups and delimited-text (CSV) sheets.

Every entry point returns an ImportResult; malformed input never raises.
"""

import json
from dataclasses import dataclass
from datetime import date

from pydantic import ValidationError

from core.config import CSV_COLUMN_KEYWORDS, DEFAULT_ACTIVITY_COLOR
from core.dates import parse_flexible_date
from core.delimited import split_lines, tokenize_line
from models.calendar import Activity, ActivityStatus, CalendarConfig, Category, DayStyle
from models.results import ImportFormat, ImportResult, StateFragment
from services.sanitizer import coerce_program, new_id, sanitize_activity


# =============================================================================
# FORMAT DETECTION
# =============================================================================


def detect_format(content: str) -> ImportFormat:
    """Guess the document format from its first character and delimiters."""
    trimmed = content.strip()
    if trimmed.startswith(("{", "[")):
        return ImportFormat.JSON
    if "," in trimmed or ";" in trimmed:
        return ImportFormat.CSV
    return ImportFormat.UNKNOWN


def import_content(
    content: str,
    existing_categories: list[Category] | None = None,
    today: date | None = None,
) -> ImportResult:
    """Detect the format of `content` and import it."""
    detected = detect_format(content)
    if detected == ImportFormat.JSON:
        return import_json(content, existing_categories, today=today)
    if detected == ImportFormat.CSV:
        return import_csv(content)
    return ImportResult(
        success=False,
        message="Unsupported format",
        errors=["Content must be JSON or CSV"],
    )


# =============================================================================
# JSON
# =============================================================================


def _validate_records(records, model, label: str, errors: list[str]) -> list:
    """Validate trusted-shape records, skipping (and reporting) broken ones."""
    valid = []
    for index, record in enumerate(records or [], start=1):
        try:
            valid.append(model.model_validate(record))
        except ValidationError as e:
            errors.append(f"{label} {index} skipped: {e.error_count()} invalid field(s).")
    return valid


def _validate_config(config, errors: list[str]) -> dict | None:
    """Keep a config fragment only if it would validate once merged."""
    if config is None:
        return None
    if not isinstance(config, dict):
        errors.append("Config skipped: not an object.")
        return None
    try:
        CalendarConfig.model_validate(config)
    except ValidationError as e:
        errors.append(f"Config skipped: {e.error_count()} invalid field(s).")
        return None
    return config


def import_json(
    content: str,
    existing_categories: list[Category] | None = None,
    today: date | None = None,
) -> ImportResult:
    """
    Import a JSON backup, bare or wrapped under a "data" key.

    Activities go through the sanitizer; categories and day styles are taken
    as they are, skipping records that do not fit the model.
    """
    try:
        parsed = json.loads(content)
    except (ValueError, RecursionError) as e:
        # ValueError covers JSONDecodeError and oversized integer literals
        return ImportResult(success=False, message="Could not parse the JSON file.", errors=[str(e)])

    data = parsed
    if isinstance(parsed, dict) and isinstance(parsed.get("data"), dict):
        data = parsed["data"]

    if not isinstance(data, dict) or (
        data.get("activities") is None and data.get("categories") is None
    ):
        return ImportResult(success=False, message="JSON has no valid activities or categories data.")

    warnings: list[str] = []
    errors: list[str] = []

    raw_activities = data.get("activities") or []
    raw_categories = data.get("categories") or []
    raw_day_styles = data.get("dayStyles") or []
    for key, value in (
        ("activities", raw_activities),
        ("categories", raw_categories),
        ("dayStyles", raw_day_styles),
    ):
        if not isinstance(value, list):
            return ImportResult(success=False, message=f'JSON field "{key}" must be a list.')

    categories = _validate_records(raw_categories, Category, "Category", errors)
    day_styles = _validate_records(raw_day_styles, DayStyle, "Day style", errors)

    # Imported categories can color imported activities
    known_categories = [*(existing_categories or []), *categories]
    activities = []
    for index, record in enumerate(raw_activities, start=1):
        if not isinstance(record, dict):
            errors.append(f"Activity {index} skipped: not an object.")
            continue
        activities.append(sanitize_activity(record, known_categories, today=today, warnings=warnings))

    config = _validate_config(data.get("config"), errors)
    return ImportResult(
        success=True,
        message=f"JSON processed: {len(activities)} activities found.",
        data=StateFragment(
            config=config,
            categories=categories,
            activities=activities,
            day_styles=day_styles,
        ),
        warnings=warnings,
        errors=errors,
    )


# =============================================================================
# CSV
# =============================================================================


@dataclass
class ColumnMap:
    """Header index per column role (None when the sheet lacks the column)."""

    title: int | None = None
    start: int | None = None
    end: int | None = None
    program: int | None = None
    category: int | None = None
    description: int | None = None


def resolve_columns(headers: list[str]) -> ColumnMap:
    """Assign each role the first header (in row order) containing one of its keywords."""
    columns = ColumnMap()
    for role, keywords in CSV_COLUMN_KEYWORDS.items():
        for index, header in enumerate(headers):
            if any(keyword in header for keyword in keywords):
                setattr(columns, role, index)
                break
    return columns


def _cell(row: list[str], index: int | None) -> str:
    if index is None or index >= len(row):
        return ""
    return row[index]


def import_csv(content: str) -> ImportResult:
    """
    Import activities from a delimited-text sheet with a header row.

    The delimiter is ';' when the header contains one, else ','. Rows are
    numbered as in a spreadsheet (header is row 1). A missing title skips the
    row with a warning, a bad start date skips it with an error; a bad end
    date falls back to the start date, and an end before the start is clamped
    with a warning.
    """
    lines = [line for line in split_lines(content.strip()) if line.strip()]
    if len(lines) < 2:
        return ImportResult(success=False, message="The CSV does not contain enough data.")

    delimiter = ";" if ";" in lines[0] else ","
    headers = [h.lower() for h in tokenize_line(lines[0], delimiter)]
    columns = resolve_columns(headers)

    if columns.title is None or columns.start is None:
        return ImportResult(
            success=False,
            message="Required columns not found (title and start date).",
        )

    activities: list[Activity] = []
    warnings: list[str] = []
    errors: list[str] = []

    for row_number, line in enumerate(lines[1:], start=2):
        row = tokenize_line(line, delimiter)
        if len(row) < 2:
            warnings.append(f"Row {row_number} skipped: not enough columns.")
            continue

        title = _cell(row, columns.title)
        if not title:
            warnings.append(f"Row {row_number} skipped: missing title.")
            continue

        raw_start = _cell(row, columns.start)
        start_date = parse_flexible_date(raw_start)
        if start_date is None:
            errors.append(
                f'Row {row_number} ("{title}") skipped: invalid start date format ({raw_start}).'
            )
            continue

        end_date = start_date
        if columns.end is not None:
            end_date = parse_flexible_date(_cell(row, columns.end)) or start_date

        if end_date < start_date:
            warnings.append(
                f"Row {row_number}: end date preceded the start date; set to the start date."
            )
            end_date = start_date

        activities.append(
            Activity(
                id=new_id(),
                title=title,
                start_date=start_date,
                end_date=end_date,
                color=DEFAULT_ACTIVITY_COLOR,
                program=coerce_program(_cell(row, columns.program)),
                category_id=None,
                description=_cell(row, columns.description),
                status=ActivityStatus.ACTIVE,
                completed=False,
            )
        )

    if not activities:
        return ImportResult(
            success=False,
            message="No valid activities could be processed from the CSV.",
            warnings=warnings,
            errors=errors,
        )

    return ImportResult(
        success=True,
        message=f"CSV processed: {len(activities)} activities found.",
        data=StateFragment(activities=activities),
        warnings=warnings,
        errors=errors,
    )
