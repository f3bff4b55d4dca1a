# services/booking-service/src/apps/core/services/intervals.py
"""
Interval Arithmetic

Time-of-day helpers used by the availability computation. Times are minute
offsets from midnight and intervals are half-open: [start, end).
"""

import re
from dataclasses import dataclass
from datetime import date, time, timedelta
from typing import List, Union

from .exceptions import InvalidTimeFormatError

MINUTES_PER_DAY = 24 * 60

TIME_PATTERN = re.compile(r'^(\d{2}):(\d{2})$')


@dataclass(frozen=True)
class Interval:
    """Half-open range of minutes since midnight."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlaps(self, other: 'Interval') -> bool:
        return self.start < other.end and self.end > other.start

    def to_dict(self) -> dict:
        return {
            'start_time': format_minutes(self.start),
            'end_time': format_minutes(self.end),
        }


def parse_time(value: Union[str, time]) -> int:
    """
    Convert "HH:MM" (or a ``datetime.time`` read from the database) to
    minutes since midnight.
    """
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    match = TIME_PATTERN.match(value) if isinstance(value, str) else None
    if not match:
        raise InvalidTimeFormatError(value, "Time must use the HH:MM format")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormatError(value, f"Time out of range: {value}")

    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Convert minutes since midnight to zero-padded "HH:MM"."""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidTimeFormatError(minutes, "Minutes must be an integer")
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeFormatError(minutes, f"Minutes out of range: {minutes}")

    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def minutes_to_time(minutes: int) -> time:
    """Convert minutes since midnight to ``datetime.time``."""
    format_minutes(minutes)
    return time(hour=minutes // 60, minute=minutes % 60)


def subtract_interval(intervals: List[Interval], to_subtract: Interval) -> List[Interval]:
    """
    Remove ``to_subtract`` from the single interval it overlaps.

    When it overlaps no interval, or more than one, the input list is
    returned unchanged. The affected interval is removed, truncated or split
    in two, and its remnants keep its position in the list.
    """
    overlapping = [
        index for index, interval in enumerate(intervals)
        if interval.overlaps(to_subtract)
    ]

    if len(overlapping) != 1:
        return intervals

    target_index = overlapping[0]
    target = intervals[target_index]

    remnants = []
    if target.start < to_subtract.start:
        remnants.append(Interval(target.start, min(target.end, to_subtract.start)))
    if target.end > to_subtract.end:
        remnants.append(Interval(max(target.start, to_subtract.end), target.end))

    return intervals[:target_index] + remnants + intervals[target_index + 1:]


def generate_time_slots(interval: Interval, duration: int) -> List[Interval]:
    """
    Slice an interval into back-to-back windows of ``duration`` minutes
    starting at its start. A trailing remainder shorter than ``duration``
    is dropped.
    """
    if duration <= 0:
        raise ValueError("duration must be positive")

    slots = []
    current = interval.start
    while current + duration <= interval.end:
        slots.append(Interval(current, current + duration))
        current += duration
    return slots


def dates_between(start_date: date, days: int) -> List[date]:
    """Return ``days`` consecutive dates beginning with ``start_date``."""
    return [start_date + timedelta(days=offset) for offset in range(max(days, 0))]


def day_of_week(value: date) -> int:
    """Weekday number with Sunday as 0, matching stored opening hours."""
    return (value.weekday() + 1) % 7
