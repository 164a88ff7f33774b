"""Parsing of wall-clock times ("HH:MM") and UTC offsets ("±HH:MM")."""

import re
from typing import Tuple

# Browser time inputs emit HH:MM:SS when a step is set; seconds are ignored.
_TIME_RE = re.compile(r'^(\d{1,2}):(\d{2})(?::\d{2}(?:\.\d+)?)?$')
_OFFSET_RE = re.compile(r'^([+-]?)(\d{1,2}):(\d{2})$')


def parse_time_of_day(time: str) -> Tuple[int, int]:
    """"HH:MM" or "HH:MM:SS" -> (hours, minutes)."""
    if not isinstance(time, str):
        raise ValueError(f"Invalid time of day {time!r}, expected HH:MM")
    match = _TIME_RE.match(time.strip())
    if not match:
        raise ValueError(f"Invalid time of day {time!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Time of day out of range: {time!r}")
    return hours, minutes


def parse_timezone_offset(offset: str) -> int:
    """"+02:30" -> 150, "-05:00" -> -300 (minutes)."""
    if not isinstance(offset, str):
        raise ValueError(f"Invalid timezone offset {offset!r}, expected ±HH:MM")
    match = _OFFSET_RE.match(offset.strip())
    if not match:
        raise ValueError(f"Invalid timezone offset {offset!r}, expected ±HH:MM")
    sign = -1 if match.group(1) == '-' else 1
    hours, minutes = int(match.group(2)), int(match.group(3))
    if minutes > 59:
        raise ValueError(f"Timezone offset minutes out of range: {offset!r}")
    return sign * (hours * 60 + minutes)
