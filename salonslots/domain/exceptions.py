"""
Domain-specific exception hierarchy for the scheduling engine.
"""


class SchedulingError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeFormat(SchedulingError, ValueError):
    """Raised when a time-of-day string or minute count is malformed."""


class ScheduleConfigurationError(SchedulingError, ValueError):
    """Raised when a day configuration is structurally invalid."""


class CollaboratorNotFoundError(SchedulingError):
    """Raised when a collaborator cannot be found in the data source."""


class DataSourceError(SchedulingError):
    """Raised when schedule data cannot be fetched or parsed."""
