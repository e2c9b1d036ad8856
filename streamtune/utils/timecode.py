"""
Conversion between human-readable time strings and whole seconds.

Accepted input shapes:
- "1:30:45" (hours:minutes:seconds)
- "2:30" (hours:minutes)
- "45" (seconds)

Output is "MM:SS" below one hour and "HH:MM:SS" otherwise.
"""

import math
import re
from typing import Union

from .errors import InvalidDurationError, InvalidFormatError

SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

_FIELD_PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")


def _parse_field(field: str, text: str) -> int:
    if not _FIELD_PATTERN.match(field):
        raise InvalidFormatError(
            f"Invalid time format: {text!r} has non-numeric field {field!r}. "
            "Use HH:MM:SS, HH:MM, or SS",
            text=text,
        )
    return int(field)


def parse_time_string(text: str) -> int:
    """
    Parse a time string into seconds.

    Sub-fields are not range checked, so "1:75" is 1 hour 75 minutes.
    Negative fields pass through the arithmetic unchanged.

    Args:
        text: Time string in H:M:S, H:M or S form

    Returns:
        Time in seconds

    Raises:
        InvalidFormatError: If the field count is not 1-3 or a field is not an integer
    """
    parts = [_parse_field(field, text) for field in text.split(":")]

    if len(parts) == 3:
        hours, minutes, seconds = parts
        return hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE + seconds
    elif len(parts) == 2:
        hours, minutes = parts
        return hours * SECONDS_PER_HOUR + minutes * SECONDS_PER_MINUTE
    elif len(parts) == 1:
        return parts[0]

    raise InvalidFormatError(
        f"Invalid time format: {text!r}. Use HH:MM:SS, HH:MM, or SS", text=text
    )


def _as_whole_seconds(seconds: Union[int, float]) -> int:
    # bool is an int subclass but never a meaningful duration
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise InvalidDurationError(f"Duration must be a number, got {seconds!r}", value=seconds)
    if isinstance(seconds, float):
        if not math.isfinite(seconds) or not seconds.is_integer():
            raise InvalidDurationError(
                f"Duration must be a whole number of seconds, got {seconds!r}", value=seconds
            )
        seconds = int(seconds)
    if seconds < 0:
        raise InvalidDurationError(f"Duration cannot be negative: {seconds}", value=seconds)
    return seconds


def format_time_string(seconds: Union[int, float]) -> str:
    """
    Convert seconds to MM:SS or HH:MM:SS format.

    Args:
        seconds: Non-negative whole number of seconds

    Returns:
        Formatted time string (e.g., "01:30" or "01:01:01")

    Raises:
        InvalidDurationError: If seconds is negative, fractional or not finite
    """
    total = _as_whole_seconds(seconds)

    hours = total // SECONDS_PER_HOUR
    minutes = (total % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE
    secs = total % SECONDS_PER_MINUTE

    if hours > 0:
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{minutes:02d}:{secs:02d}"


def is_valid_time_string(text: str) -> bool:
    """Check whether text parses as a time string."""
    try:
        parse_time_string(text)
    except InvalidFormatError:
        return False
    return True
