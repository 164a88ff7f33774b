"""
time_filter.py
==============

Restrict candidate windows to a single time of day.

The user states a local wall-clock time and their UTC offset; candles carry
UTC timestamps, so the local time is shifted into UTC once per search.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional

from ..common import parse_time_of_day, parse_timezone_offset
from ..models import Candle, SearchConfiguration

MINUTES_PER_DAY = 1440


class UtcTime(NamedTuple):
    hours: int
    minutes: int


def convert_time_to_utc(time_of_day: str, timezone_offset: str) -> UtcTime:
    hours, minutes = parse_time_of_day(time_of_day)
    total = hours * 60 + minutes - parse_timezone_offset(timezone_offset)
    total %= MINUTES_PER_DAY
    return UtcTime(total // 60, total % 60)


@dataclass(frozen=True)
class TimeOfDayFilter:
    """Accepts candles whose UTC timestamp falls exactly on ``utc`` hour:minute."""
    utc: UtcTime

    @classmethod
    def from_config(cls, config: SearchConfiguration) -> Optional['TimeOfDayFilter']:
        if not config.time_of_day:
            return None
        return cls(convert_time_to_utc(config.time_of_day, config.timezone_offset))

    def matches(self, candle: Candle) -> bool:
        moment = candle.as_datetime
        if moment is None:
            return False
        return moment.hour == self.utc.hours and moment.minute == self.utc.minutes
