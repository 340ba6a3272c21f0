"""
Domain models for operating hours, collaborator schedules and bookings.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from .exceptions import ScheduleConfigurationError
from .time_utils import time_to_minutes


class Weekday(str, Enum):
    """
    The seven weekdays, named as they are stored for collaborator schedules.

    ``day_index`` gives the Sunday-first integer used by the operating-hours table.
    """
    SUNDAY = "sunday"
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"

    @property
    def day_index(self) -> int:
        """Sunday-first index (Sunday=0 ... Saturday=6)."""
        return _SUNDAY_FIRST.index(self)

    @property
    def short_name(self) -> str:
        return self.value[:3].capitalize()

    @classmethod
    def from_index(cls, index: int) -> "Weekday":
        """Resolve a Sunday-first index (0-6)."""
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index <= 6:
            raise ScheduleConfigurationError(f"Day of week must be between 0 and 6, got {index!r}")
        return _SUNDAY_FIRST[index]

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        """Weekday of a calendar date."""
        return _SUNDAY_FIRST[value.isoweekday() % 7]

    @classmethod
    def parse(cls, value: "Weekday | str | int") -> "Weekday":
        """Accept a Weekday, a weekday name or a Sunday-first index."""
        if isinstance(value, Weekday):
            return value
        if isinstance(value, int):
            return cls.from_index(value)
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ScheduleConfigurationError(f"Unknown weekday: {value!r}") from None


_SUNDAY_FIRST: List[Weekday] = [
    Weekday.SUNDAY,
    Weekday.MONDAY,
    Weekday.TUESDAY,
    Weekday.WEDNESDAY,
    Weekday.THURSDAY,
    Weekday.FRIDAY,
    Weekday.SATURDAY,
]

# Order used by editing forms
MONDAY_FIRST: List[Weekday] = _SUNDAY_FIRST[1:] + _SUNDAY_FIRST[:1]


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    """Half-open interval overlap: ``[start_a, end_a)`` vs ``[start_b, end_b)``."""
    return start_a < end_b and end_a > start_b


@dataclass(frozen=True)
class TimeWindow:
    """
    An immutable ``[start, end)`` window in minutes since midnight.

    Invariant: start must be before end. ``end`` may run past midnight for
    bookings that finish the next day.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ScheduleConfigurationError(f"Window start {self.start} must not be negative")
        if self.start >= self.end:
            raise ScheduleConfigurationError(
                f"Window start {self.start} must be before end {self.end}"
            )

    @classmethod
    def from_times(cls, start: str, end: str) -> "TimeWindow":
        return cls(start=time_to_minutes(start), end=time_to_minutes(end))

    @classmethod
    def from_start(cls, start: int, duration_minutes: int) -> "TimeWindow":
        return cls(start=start, end=start + duration_minutes)

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return self.end - self.start

    def overlaps(self, other: "TimeWindow") -> bool:
        """Check if this window overlaps with another."""
        return intervals_overlap(self.start, self.end, other.start, other.end)

    def contains(self, other: "TimeWindow") -> bool:
        return self.start <= other.start and other.end <= self.end


@dataclass(frozen=True)
class Break:
    """A pause inside an open day during which no slot may be offered."""
    start: str
    end: str

    def window(self) -> TimeWindow:
        return TimeWindow.from_times(self.start, self.end)


@dataclass
class OperatingHoursDay:
    """
    Business-wide opening hours for one weekday.

    When ``is_open`` is false the times and breaks are not considered.
    """
    day_of_week: int  # 0=Sunday, 6=Saturday
    is_open: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    breaks: List[Break] = field(default_factory=list)

    def __post_init__(self):
        Weekday.from_index(self.day_of_week)
        self.breaks = [
            b if isinstance(b, Break) else Break(start=b["start"], end=b["end"])
            for b in self.breaks
        ]
        if self.is_open:
            self._validate_open_day()

    def _validate_open_day(self) -> None:
        if not self.start_time or not self.end_time:
            raise ScheduleConfigurationError(
                f"Open day {self.weekday.value} requires start_time and end_time"
            )

        hours = self.window()
        previous: Optional[TimeWindow] = None
        for pause in sorted((b.window() for b in self.breaks), key=lambda w: w.start):
            if not hours.contains(pause):
                raise ScheduleConfigurationError(
                    f"Break {pause.start}-{pause.end} lies outside opening hours on {self.weekday.value}"
                )
            if previous is not None and previous.overlaps(pause):
                raise ScheduleConfigurationError(f"Breaks overlap on {self.weekday.value}")
            previous = pause

    @property
    def weekday(self) -> Weekday:
        return Weekday.from_index(self.day_of_week)

    def window(self) -> TimeWindow:
        """Opening hours as a minute window."""
        return TimeWindow.from_times(self.start_time, self.end_time)

    def break_windows(self) -> List[TimeWindow]:
        return [b.window() for b in self.breaks]


@dataclass
class CollaboratorScheduleDay:
    """
    One weekday of a collaborator's working week.

    Times may be missing; an enabled day without times is reported as
    "hours not configured" by the availability checks.
    """
    day_of_week: Weekday
    enabled: bool
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def __post_init__(self):
        self.day_of_week = Weekday.parse(self.day_of_week)
        if self.enabled and self.has_hours():
            if time_to_minutes(self.start_time) >= time_to_minutes(self.end_time):
                raise ScheduleConfigurationError(
                    f"Start time must be before end time on {self.day_of_week.value}"
                )

    def has_hours(self) -> bool:
        return bool(self.start_time) and bool(self.end_time)


@dataclass
class WorkScheduleDay:
    """Editable form of a collaborator weekday; times may be blank strings."""
    day: Weekday
    enabled: bool
    start_time: str = ""
    end_time: str = ""

    def __post_init__(self):
        self.day = Weekday.parse(self.day)


@dataclass
class Collaborator:
    """Staff member who can be booked."""
    id: str
    name: str = ""
    active: bool = True


@dataclass
class Appointment:
    """
    An existing booking, used only for conflict detection.

    ``duration_minutes`` may be unknown; callers pass the fallback explicitly.
    """
    appointment_time: str
    duration_minutes: Optional[int] = None
    collaborator_id: Optional[str] = None

    def __post_init__(self):
        if self.duration_minutes is not None and self.duration_minutes <= 0:
            raise ScheduleConfigurationError(
                f"Appointment duration must be positive, got {self.duration_minutes}"
            )

    def window(self, default_duration_minutes: int) -> TimeWindow:
        """Booked ``[start, start + duration)`` window."""
        duration = self.duration_minutes or default_duration_minutes
        return TimeWindow.from_start(time_to_minutes(self.appointment_time), duration)


@dataclass(frozen=True)
class CollaboratorBlock:
    """Date range (both ends inclusive) during which a collaborator is off."""
    start_date: date
    end_date: date
    reason: str = ""

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ScheduleConfigurationError(
                f"Block end date {self.end_date} must not be before start date {self.start_date}"
            )

    def covers(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of an availability check: available, or rejected with a reason."""
    available: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "AvailabilityResult":
        return cls(available=True)

    @classmethod
    def rejected(cls, reason: str) -> "AvailabilityResult":
        return cls(available=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        if self.available:
            return {"available": True}
        return {"available": False, "reason": self.reason}


@dataclass(frozen=True)
class ScheduleValidationResult:
    """Outcome of the pre-save schedule validation."""
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "ScheduleValidationResult":
        return cls(valid=True)

    @classmethod
    def failed(cls, error: str) -> "ScheduleValidationResult":
        return cls(valid=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}
