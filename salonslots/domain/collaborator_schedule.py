"""
Collaborator schedule rules.

Checks whether a collaborator can take an appointment at a given date and
time, lists conflict-free start times for a collaborator's day, and validates
an edited working week before it is saved.

Unlike business-hours slot generation, the end of a collaborator's day is
inclusive: a start exactly at ``end_time`` is accepted.
"""

from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    MONDAY_FIRST,
    Appointment,
    AvailabilityResult,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    ScheduleValidationResult,
    TimeWindow,
    Weekday,
    WorkScheduleDay,
)
from .exceptions import ScheduleConfigurationError
from .time_utils import minutes_to_time, time_to_minutes

REASON_INACTIVE = "Collaborator inactive"
REASON_DAY_OFF = "Collaborator does not work this day"
REASON_HOURS_MISSING = "Hours not configured for this day"
ERROR_NO_WORKING_DAY = "Configure at least one working day"
SUMMARY_NOT_CONFIGURED = "Hours not configured"


def find_schedule_day(
    schedules: Iterable[CollaboratorScheduleDay],
    weekday: Weekday
) -> Optional[CollaboratorScheduleDay]:
    """Return the schedule entry for a weekday, if any."""
    for day in schedules:
        if day.day_of_week == weekday:
            return day
    return None


def _resolve_working_day(
    schedules: Iterable[CollaboratorScheduleDay],
    appointment_date: date
) -> Tuple[Optional[CollaboratorScheduleDay], Optional[str]]:
    """
    Find the day's schedule, or the reason the collaborator is unavailable.
    """
    day = find_schedule_day(schedules, Weekday.from_date(appointment_date))

    if day is None or not day.enabled:
        return None, REASON_DAY_OFF

    if not day.has_hours():
        return None, REASON_HOURS_MISSING

    return day, None


def is_collaborator_available(
    collaborator: Collaborator,
    schedules: Iterable[CollaboratorScheduleDay],
    appointment_date: date,
    appointment_time: str
) -> AvailabilityResult:
    """
    Validate whether a collaborator works at a given date and time.

    Checks run in order and the first failure wins:
    1. Collaborator must be active
    2. The weekday must be enabled in the schedule
    3. The weekday must have hours configured
    4. The time must fall within ``[start_time, end_time]`` (end inclusive)

    Args:
        collaborator: Collaborator record carrying the ``active`` flag
        schedules: The collaborator's weekly schedule
        appointment_date: Date of the candidate appointment
        appointment_time: Candidate start as ``HH:MM``

    Returns:
        AvailabilityResult with a human-readable reason when rejected

    Raises:
        InvalidTimeFormat: If a time string is malformed
    """
    if not collaborator.active:
        return AvailabilityResult.rejected(REASON_INACTIVE)

    day, reason = _resolve_working_day(schedules, appointment_date)
    if day is None:
        return AvailabilityResult.rejected(reason)

    candidate = time_to_minutes(appointment_time)
    start = time_to_minutes(day.start_time)
    end = time_to_minutes(day.end_time)

    if candidate < start or candidate > end:
        return AvailabilityResult.rejected(
            f"Collaborator works from {day.start_time} to {day.end_time}"
        )

    return AvailabilityResult.ok()


def get_available_time_slots(
    schedules: Iterable[CollaboratorScheduleDay],
    target_date: date,
    slot_interval: int = 30,
    existing_appointments: Sequence[Appointment] = (),
    service_duration: int = 60
) -> List[str]:
    """
    List start times on a collaborator's day that do not clash with bookings.

    Candidates run from ``start_time`` to ``end_time`` inclusive, every
    ``slot_interval`` minutes. A booking without a known duration is assumed
    to last ``service_duration`` minutes.

    Args:
        schedules: The collaborator's weekly schedule
        target_date: Day to generate slots for
        slot_interval: Minutes between candidate starts
        existing_appointments: Bookings of this collaborator on that day
        service_duration: Length of the service being booked

    Returns:
        Chronological list of ``HH:MM`` start times
    """
    if slot_interval <= 0:
        raise ScheduleConfigurationError(f"Slot interval must be positive, got {slot_interval}")
    if service_duration <= 0:
        raise ScheduleConfigurationError(f"Service duration must be positive, got {service_duration}")

    day, _ = _resolve_working_day(schedules, target_date)
    if day is None:
        return []

    booked = [apt.window(service_duration) for apt in existing_appointments]

    start = time_to_minutes(day.start_time)
    end = time_to_minutes(day.end_time)
    slots: List[str] = []

    for candidate in range(start, end + 1, slot_interval):
        slot = TimeWindow.from_start(candidate, service_duration)
        if any(slot.overlaps(window) for window in booked):
            continue
        slots.append(minutes_to_time(candidate))

    return slots


def validate_work_schedule(days: Iterable[WorkScheduleDay]) -> ScheduleValidationResult:
    """
    Validate an edited working week before saving it.

    Rules, first failure wins:
    1. At least one day must be enabled
    2. Every enabled day needs both times
    3. Every enabled day must start before it ends
    """
    days = list(days)

    if not any(day.enabled for day in days):
        return ScheduleValidationResult.failed(ERROR_NO_WORKING_DAY)

    for day in days:
        if not day.enabled:
            continue

        if not day.start_time or not day.end_time:
            return ScheduleValidationResult.failed(f"Configure the hours for {day.day.value}")

        if time_to_minutes(day.start_time) >= time_to_minutes(day.end_time):
            return ScheduleValidationResult.failed(
                f"Start time must be earlier than end time on {day.day.value}"
            )

    return ScheduleValidationResult.ok()


def format_work_schedule_summary(schedules: Iterable[CollaboratorScheduleDay]) -> str:
    """
    Readable one-line summary, e.g. ``"Mon: 09:00-18:00 | Tue: 09:00-18:00"``.
    """
    enabled_days = [
        f"{day.day_of_week.short_name}: {day.start_time}-{day.end_time}"
        for day in schedules
        if day.enabled and day.has_hours()
    ]

    if not enabled_days:
        return SUMMARY_NOT_CONFIGURED

    return " | ".join(enabled_days)


def schedules_to_work_schedule(schedules: Iterable[CollaboratorScheduleDay]) -> List[WorkScheduleDay]:
    """
    Expand stored schedule rows into the seven editable days (Monday first).

    Weekdays without a stored row come back disabled with blank times.
    """
    schedules = list(schedules)
    work_schedule: List[WorkScheduleDay] = []

    for weekday in MONDAY_FIRST:
        stored = find_schedule_day(schedules, weekday)
        work_schedule.append(
            WorkScheduleDay(
                day=weekday,
                enabled=stored.enabled if stored else False,
                start_time=(stored.start_time or "") if stored else "",
                end_time=(stored.end_time or "") if stored else "",
            )
        )

    return work_schedule


def work_schedule_to_schedules(work_schedule: Iterable[WorkScheduleDay]) -> List[CollaboratorScheduleDay]:
    """
    Convert edited days back into schedule rows.

    Only enabled days with both times filled in are kept.
    """
    schedules: List[CollaboratorScheduleDay] = []

    for day in work_schedule:
        start_time = day.start_time.strip()
        end_time = day.end_time.strip()
        if not day.enabled or not start_time or not end_time:
            continue

        schedules.append(
            CollaboratorScheduleDay(
                day_of_week=day.day,
                enabled=True,
                start_time=start_time,
                end_time=end_time,
            )
        )

    return schedules


def active_block(
    blocks: Iterable[CollaboratorBlock],
    target_date: date
) -> Optional[CollaboratorBlock]:
    """Return the first block covering a date, if any."""
    for block in blocks:
        if block.covers(target_date):
            return block
    return None


def is_blocked(blocks: Iterable[CollaboratorBlock], target_date: date) -> bool:
    return active_block(blocks, target_date) is not None
