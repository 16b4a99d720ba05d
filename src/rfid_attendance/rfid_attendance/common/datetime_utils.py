from __future__ import annotations

from datetime import time

_DAY_NAMES = {
    "MONDAY": 0,
    "TUESDAY": 1,
    "WEDNESDAY": 2,
    "THURSDAY": 3,
    "FRIDAY": 4,
    "SATURDAY": 5,
    "SUNDAY": 6,
}


def parse_weekday(value: str) -> int:
    """Parse 'Monday', 'mon' or '0'..'6' into datetime.weekday() numbering."""

    raw = (value or "").strip().upper()
    if raw.isdigit() and 0 <= int(raw) <= 6:
        return int(raw)
    for name, index in _DAY_NAMES.items():
        if len(raw) >= 3 and name.startswith(raw):
            return index
    raise ValueError(f"Invalid day of week: {value!r}")


def weekday_name(day: int) -> str:
    for name, index in _DAY_NAMES.items():
        if index == day:
            return name.title()
    raise ValueError(f"Invalid weekday index: {day!r}")


def parse_clock_time(value: str) -> time:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time."""

    parts = (value or "").strip().split(":")
    if len(parts) not in (2, 3) or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"Invalid time string: {value!r}")
    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    return time(hour=hours, minute=minutes, second=seconds)
