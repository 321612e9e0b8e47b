"""Helpers for HHMM clock strings and day codes."""

import re
from typing import Optional

DAY_ORDER = ['MON', 'TUE', 'WED', 'THU', 'FRI', 'SAT', 'SUN']

DAY_FLAGS = {
    'MON': 'monday',
    'TUE': 'tuesday',
    'WED': 'wednesday',
    'THU': 'thursday',
    'FRI': 'friday',
    'SAT': 'saturday',
    'SUN': 'sunday',
}

_TIME_PATTERN = re.compile(r'^(\d{1,2}):?(\d{2})$')


def normalize_day(day) -> str:
    """'Monday', 'mon', 'MON' -> 'MON'."""
    if not day:
        return ''
    return str(day).strip().upper()[:3]


def normalize_time_value(value):
    """
    Normalize 'H:MM', 'HH:MM' or 'HHMM' to zero-padded 'HHMM'.
    Values that do not match are returned unchanged.
    """
    if not isinstance(value, str):
        return value
    trimmed = value.strip()
    if not trimmed:
        return trimmed
    match = _TIME_PATTERN.match(trimmed)
    if not match:
        return trimmed
    return f'{match.group(1).zfill(2)}{match.group(2)}'


def time_to_minutes(value) -> Optional[int]:
    """Minutes since midnight, or None when the value cannot be parsed."""
    normalized = normalize_time_value(value)
    if not isinstance(normalized, str) or len(normalized) != 4 or not normalized.isdigit():
        return None
    hours, minutes = int(normalized[:2]), int(normalized[2:])
    if hours > 24 or minutes > 59 or (hours == 24 and minutes > 0):
        return None
    return hours * 60 + minutes


def minutes_to_hhmm(minutes: int) -> str:
    return f'{minutes // 60:02d}{minutes % 60:02d}'
