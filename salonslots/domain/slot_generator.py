"""
Slot generation from business-wide operating hours.

Pure domain logic: given the weekly operating-hours table, list the start
times a service can be offered at on a given weekday.
"""

from typing import Iterable, List, Optional

from .exceptions import ScheduleConfigurationError
from .models import OperatingHoursDay, TimeWindow
from .time_utils import minutes_to_time

# Business-hours slots are always quantized to this step, whatever the service length.
SLOT_STEP_MINUTES = 30


def find_operating_day(
    operating_hours: Iterable[OperatingHoursDay],
    day_of_week: int
) -> Optional[OperatingHoursDay]:
    """Return the configuration for a Sunday-first weekday index, if any."""
    for day in operating_hours:
        if day.day_of_week == day_of_week:
            return day
    return None


def is_day_open(operating_hours: Iterable[OperatingHoursDay], day_of_week: int) -> bool:
    """Check whether the business opens on a weekday. Missing days count as closed."""
    day = find_operating_day(operating_hours, day_of_week)
    return day.is_open if day is not None else False


def generate_day_slots(
    day: Optional[OperatingHoursDay],
    service_duration_minutes: int = 30
) -> List[str]:
    """
    Generate offerable start times for a single operating day.

    Algorithm:
    1. Closed or missing day yields no slots
    2. Walk candidates from opening (inclusive) to closing (exclusive)
       in fixed 30-minute steps
    3. Drop candidates whose service would run past closing
    4. Drop candidates whose service window touches a break
    5. Return the survivors as ``HH:MM`` in ascending order

    Args:
        day: Operating hours for the day, or None when not configured
        service_duration_minutes: Length of the service to fit

    Returns:
        Chronological list of ``HH:MM`` start times
    """
    if service_duration_minutes <= 0:
        raise ScheduleConfigurationError(
            f"Service duration must be positive, got {service_duration_minutes}"
        )

    if day is None or not day.is_open:
        return []

    hours = day.window()
    breaks = day.break_windows()
    slots: List[str] = []

    for candidate in range(hours.start, hours.end, SLOT_STEP_MINUTES):
        slot = TimeWindow.from_start(candidate, service_duration_minutes)

        if slot.end > hours.end:
            continue

        # Starting inside, ending inside or containing a break are all
        # half-open overlaps when the duration is positive.
        if any(slot.overlaps(pause) for pause in breaks):
            continue

        slots.append(minutes_to_time(candidate))

    return slots


def generate_available_time_slots(
    operating_hours: Iterable[OperatingHoursDay],
    day_of_week: int,
    service_duration_minutes: int = 30
) -> List[str]:
    """
    Generate offerable start times for a weekday of the operating-hours table.

    Args:
        operating_hours: Weekly table, one entry per configured weekday
        day_of_week: Sunday-first weekday index (0-6)
        service_duration_minutes: Length of the service to fit

    Returns:
        Chronological list of ``HH:MM`` start times, empty when closed
    """
    day = find_operating_day(operating_hours, day_of_week)
    return generate_day_slots(day, service_duration_minutes)
