"""
Domain layer - Pure scheduling logic without external dependencies.
"""

from .collaborator_schedule import (
    format_work_schedule_summary,
    get_available_time_slots,
    is_blocked,
    is_collaborator_available,
    schedules_to_work_schedule,
    validate_work_schedule,
    work_schedule_to_schedules,
)
from .exceptions import (
    CollaboratorNotFoundError,
    DataSourceError,
    InvalidTimeFormat,
    ScheduleConfigurationError,
    SchedulingError,
)
from .models import (
    Appointment,
    AvailabilityResult,
    Break,
    Collaborator,
    CollaboratorBlock,
    CollaboratorScheduleDay,
    OperatingHoursDay,
    ScheduleValidationResult,
    TimeWindow,
    Weekday,
    WorkScheduleDay,
    intervals_overlap,
)
from .slot_generator import generate_available_time_slots, generate_day_slots, is_day_open
from .time_utils import minutes_to_time, normalize_time, time_to_minutes

__all__ = [
    "Appointment",
    "AvailabilityResult",
    "Break",
    "Collaborator",
    "CollaboratorBlock",
    "CollaboratorNotFoundError",
    "CollaboratorScheduleDay",
    "DataSourceError",
    "InvalidTimeFormat",
    "OperatingHoursDay",
    "ScheduleConfigurationError",
    "ScheduleValidationResult",
    "SchedulingError",
    "TimeWindow",
    "Weekday",
    "WorkScheduleDay",
    "format_work_schedule_summary",
    "generate_available_time_slots",
    "generate_day_slots",
    "get_available_time_slots",
    "intervals_overlap",
    "is_blocked",
    "is_collaborator_available",
    "is_day_open",
    "minutes_to_time",
    "normalize_time",
    "schedules_to_work_schedule",
    "time_to_minutes",
    "validate_work_schedule",
    "work_schedule_to_schedules",
]
