"""
Time-of-day arithmetic on a 24-hour clock that wraps at midnight.

Every value is handled as minutes since midnight in [0, 1440). Subtracting past
midnight lands on the previous evening and adding past midnight lands on the
next morning, so bedtime/wake-up calculations need no special cases.
"""

import re
from datetime import datetime, timedelta
from typing import Union

from sleepcycle.core.errors import InvalidTimeFormat
from sleepcycle.core.models.data_models import ClockTime
from sleepcycle.utils.constants import MINUTES_PER_DAY, MINUTES_PER_HOUR

TIME_PATTERN = re.compile(r'^([0-9]{1,2}):([0-9]{2})$')


def to_minutes(t: ClockTime) -> int:
    """Minutes since midnight for a clock time"""
    return t.to_minutes()


def from_minutes(m: int) -> ClockTime:
    """Clock time for any minute offset, normalized into a single day"""
    return ClockTime.from_minutes(m)


def add_minutes(t: ClockTime, delta: int) -> ClockTime:
    return from_minutes(to_minutes(t) + delta)


def diff_minutes(a: ClockTime, b: ClockTime) -> int:
    """
    Minutes from a to b moving forward on the clock.

    When b is earlier in the day than a the interval crosses midnight, so a full
    day is added. The result is always in [0, 1440).
    """
    diff = to_minutes(b) - to_minutes(a)
    if diff < 0:
        diff += MINUTES_PER_DAY
    return diff


def circular_distance(a: ClockTime, b: ClockTime) -> int:
    """Shortest distance between two clock times in either direction, in [0, 720]"""
    return min(diff_minutes(a, b), diff_minutes(b, a))


def parse_clock_time(value: Union[str, ClockTime]) -> ClockTime:
    """
    Parse an 'HH:MM' string (24-hour) into a ClockTime.

    Args:
        value: Time string such as '07:00' or '23:45'; ClockTime values pass through

    Returns:
        ClockTime: The parsed clock time

    Raises:
        InvalidTimeFormat: If the string is not a valid 24-hour time
    """
    if isinstance(value, ClockTime):
        return value
    if not isinstance(value, str):
        raise InvalidTimeFormat(value)

    match = TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidTimeFormat(value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (0 <= hours < 24) or not (0 <= minutes < 60):
        raise InvalidTimeFormat(value)

    return ClockTime(hours=hours, minutes=minutes)


def format_clock_time(t: ClockTime, use_24_hour: bool = True) -> str:
    """Format as '22:30' or '10:30 PM'"""
    if use_24_hour:
        return f"{t.hours:02d}:{t.minutes:02d}"
    suffix = 'AM' if t.hours < 12 else 'PM'
    hour = t.hours % 12 or 12
    return f"{hour}:{t.minutes:02d} {suffix}"


def format_duration(minutes: int) -> str:
    """Format a duration as '7h 45m'"""
    hours, mins = divmod(int(minutes), MINUTES_PER_HOUR)
    return f"{hours}h {mins}m"


def clock_time_from_datetime(moment: datetime) -> ClockTime:
    """Wall-clock time of a datetime, seconds dropped"""
    return ClockTime(hours=moment.hour, minutes=moment.minute)


def next_occurrence(t: ClockTime, after: datetime) -> datetime:
    """
    First datetime at or after `after` whose wall-clock time is `t`.

    Seconds and microseconds of `after` are ignored when comparing, so a clock
    time equal to the current minute resolves to today.
    """
    candidate = after.replace(hour=t.hours, minute=t.minutes, second=0, microsecond=0)
    if candidate < after.replace(second=0, microsecond=0):
        candidate += timedelta(days=1)
    return candidate
