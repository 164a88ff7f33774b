"""
Pattern search
==============

Time-of-day filtering, per-series scan state and the multi-series engine.
"""

from .time_filter import (
    TimeOfDayFilter,
    UtcTime,
    convert_time_to_utc,
    parse_time_of_day,
    parse_timezone_offset,
)
from .dedup import ScanState, flush, offer_candidate, try_accept
from .engine import PatternSearchEngine, filter_by_date, search_similar_patterns

__all__ = [
    'TimeOfDayFilter',
    'UtcTime',
    'convert_time_to_utc',
    'parse_time_of_day',
    'parse_timezone_offset',
    'ScanState',
    'flush',
    'offer_candidate',
    'try_accept',
    'PatternSearchEngine',
    'filter_by_date',
    'search_similar_patterns',
]
