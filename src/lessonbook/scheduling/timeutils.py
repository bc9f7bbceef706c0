"""Wall-clock time helpers. Times are "HH:MM" strings, intervals are half-open."""

import re
from datetime import date

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60


def time_to_minutes(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight."""
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time out of range: {value!r}")
    return hours * 60 + minutes


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as zero-padded "HH:MM".

    Values outside 0..1439 are not wrapped; keeping them in range is up to the caller.
    """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    # Touching endpoints (10:00-11:00 vs 11:00-12:00) do not overlap
    return start_a < end_b and start_b < end_a


def ranges_overlap(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    return intervals_overlap(
        time_to_minutes(start_a),
        time_to_minutes(end_a),
        time_to_minutes(start_b),
        time_to_minutes(end_b),
    )


def day_of_week(d: date) -> int:
    """Weekday with 0=Sunday .. 6=Saturday (date.weekday() is Monday-based)."""
    return (d.weekday() + 1) % 7


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"
