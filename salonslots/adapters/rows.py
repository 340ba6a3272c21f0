"""
Parsing of stored table rows into domain models.

Rows follow the column names of the hosted database tables
(``working_hours``, ``collaborators``, ``collaborator_schedules``,
``appointments``, ``collaborator_blocks``) and are shared by every store.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

import pendulum

from ..domain.exceptions import DataSourceError, SchedulingError
from ..domain.models import (
    Appointment,
    Break,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    MONDAY_FIRST,
    OperatingHoursDay,
    WorkScheduleDay,
)
from ..domain.time_utils import normalize_time

# Defaults applied to incomplete working_hours rows
DEFAULT_OPENING_TIME = "08:00"
DEFAULT_CLOSING_TIME = "18:00"

# Appointment statuses that occupy a slot
BOOKED_STATUSES = ("agendado", "confirmado")


def _optional_time(value: Any) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return normalize_time(str(value))


def parse_date(value: Any) -> date:
    """Parse a stored date (``YYYY-MM-DD`` or a date object)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return pendulum.from_format(str(value), "YYYY-MM-DD").date()
    except ValueError as exc:
        raise DataSourceError(f"Invalid date: {value!r}") from exc


def parse_operating_hours(row: Dict[str, Any]) -> OperatingHoursDay:
    """Parse a ``working_hours`` row, filling in default times and breaks."""
    try:
        breaks = [
            Break(start=normalize_time(b["start"]), end=normalize_time(b["end"]))
            for b in (row.get("breaks") or [])
        ]
        return OperatingHoursDay(
            day_of_week=int(row["day_of_week"]),
            is_open=bool(row.get("is_open", False)),
            start_time=_optional_time(row.get("start_time")) or DEFAULT_OPENING_TIME,
            end_time=_optional_time(row.get("end_time")) or DEFAULT_CLOSING_TIME,
            breaks=breaks,
        )
    except (KeyError, TypeError, ValueError, SchedulingError) as exc:
        raise DataSourceError(f"Invalid working_hours row {row!r}: {exc}") from exc


def parse_collaborator(row: Dict[str, Any]) -> Collaborator:
    try:
        return Collaborator(
            id=str(row["id"]),
            name=row.get("name") or "",
            active=bool(row.get("active", True)),
        )
    except KeyError as exc:
        raise DataSourceError(f"Invalid collaborators row {row!r}: missing {exc}") from exc


def parse_schedule_day(row: Dict[str, Any]) -> CollaboratorScheduleDay:
    """Parse a ``collaborator_schedules`` row."""
    try:
        return CollaboratorScheduleDay(
            day_of_week=row["day_of_week"],
            enabled=bool(row.get("enabled", False)),
            start_time=_optional_time(row.get("start_time")),
            end_time=_optional_time(row.get("end_time")),
        )
    except (KeyError, TypeError, ValueError, SchedulingError) as exc:
        raise DataSourceError(f"Invalid collaborator_schedules row {row!r}: {exc}") from exc


def parse_work_schedule(rows: List[Dict[str, Any]]) -> List[WorkScheduleDay]:
    """
    Parse ``collaborator_schedules`` rows into the seven editable days (Monday first).

    Unlike ``parse_schedule_day`` this does not enforce start before end, so a
    stored week can be checked with ``validate_work_schedule``. Weekdays without
    a row come back disabled with blank times.
    """
    stored: Dict[str, WorkScheduleDay] = {}
    for row in rows:
        try:
            day = WorkScheduleDay(
                day=row["day_of_week"],
                enabled=bool(row.get("enabled", False)),
                start_time=_optional_time(row.get("start_time")) or "",
                end_time=_optional_time(row.get("end_time")) or "",
            )
        except (KeyError, TypeError, ValueError, SchedulingError) as exc:
            raise DataSourceError(f"Invalid collaborator_schedules row {row!r}: {exc}") from exc
        stored[day.day] = day

    return [stored.get(weekday) or WorkScheduleDay(day=weekday, enabled=False) for weekday in MONDAY_FIRST]


def parse_appointment(row: Dict[str, Any]) -> Appointment:
    """Parse an ``appointments`` row; duration may be stored under two names."""
    duration = row.get("duration_minutes", row.get("duration"))
    try:
        return Appointment(
            appointment_time=normalize_time(str(row["appointment_time"])),
            duration_minutes=int(duration) if duration else None,
            collaborator_id=str(row["collaborator_id"]) if row.get("collaborator_id") else None,
        )
    except (KeyError, TypeError, ValueError, SchedulingError) as exc:
        raise DataSourceError(f"Invalid appointments row {row!r}: {exc}") from exc


def parse_block(row: Dict[str, Any]) -> CollaboratorBlock:
    """Parse a ``collaborator_blocks`` row."""
    try:
        return CollaboratorBlock(
            start_date=parse_date(row["start_date"]),
            end_date=parse_date(row["end_date"]),
            reason=row.get("reason") or "",
        )
    except (KeyError, SchedulingError) as exc:
        raise DataSourceError(f"Invalid collaborator_blocks row {row!r}: {exc}") from exc


def is_booked(row: Dict[str, Any]) -> bool:
    """Whether an appointment row still occupies its slot."""
    return str(row.get("status", "agendado")).lower() in BOOKED_STATUSES


def parse_rows(rows: Any, table: str) -> List[Dict[str, Any]]:
    """Ensure a table payload is a list of mappings."""
    if rows is None:
        return []
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise DataSourceError(f"Expected a list of records for '{table}'")
    return rows
