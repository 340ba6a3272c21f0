"""
Time-of-day arithmetic.

The engine works on integer minutes of the day (0-1439); wall-clock values
travel as zero-padded ``HH:MM`` strings.
"""

import re

from .exceptions import InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})$")
_STORE_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$")


def time_to_minutes(value: str) -> int:
    """
    Convert an ``HH:MM`` string to minutes since midnight.

    Args:
        value: Zero-padded time of day, e.g. ``"08:30"``

    Returns:
        Minute of the day (0-1439)

    Raises:
        InvalidTimeFormat: If the string is not a valid ``HH:MM`` time
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected an HH:MM string, got {value!r}")

    match = _TIME_PATTERN.match(value)
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {value!r} (expected HH:MM)")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """
    Convert minutes since midnight to a zero-padded ``HH:MM`` string.

    Raises:
        InvalidTimeFormat: If ``minutes`` is not within a single day
    """
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidTimeFormat(f"Expected an integer minute count, got {minutes!r}")
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeFormat(f"Minute count out of range: {minutes}")

    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def normalize_time(value: str) -> str:
    """
    Normalize a stored time value (``"8:00"``, ``"08:00:00"``) to ``HH:MM``.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Expected a time string, got {value!r}")

    match = _STORE_TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidTimeFormat(f"Invalid time format: {value!r}")

    normalized = f"{int(match.group(1)):02d}:{match.group(2)}"
    # Range check
    time_to_minutes(normalized)
    return normalized
