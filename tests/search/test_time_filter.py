"""
test_time_filter.py
===================

Tests for local time-of-day to UTC conversion and window filtering.
"""

import pytest
from datetime import datetime, timezone
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))

from chartmatch.models import Candle, SearchConfiguration
from chartmatch.search.time_filter import (
    TimeOfDayFilter,
    UtcTime,
    convert_time_to_utc,
    parse_time_of_day,
    parse_timezone_offset,
)


def _ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


class TestParsing:
    """String parsing of times and offsets."""

    def test_parse_time_of_day(self):
        assert parse_time_of_day("09:05") == (9, 5)
        assert parse_time_of_day("0:00") == (0, 0)

    @pytest.mark.parametrize("offset,minutes", [
        ("+02:30", 150),
        ("-05:00", -300),
        ("+00:00", 0),
        ("05:30", 330),
        ("-00:45", -45),
    ])
    def test_parse_timezone_offset(self, offset, minutes):
        assert parse_timezone_offset(offset) == minutes

    @pytest.mark.parametrize("text", ["09:05:00", "09:05:59", "09:05:30.250"])
    def test_seconds_ignored(self, text):
        assert parse_time_of_day(text) == (9, 5)

    def test_none_rejected_with_value_error(self):
        with pytest.raises(ValueError):
            parse_time_of_day(None)
        with pytest.raises(ValueError):
            parse_timezone_offset(None)

    @pytest.mark.parametrize("bad", ["9", "25:00", "12:61", "ab:cd", ""])
    def test_invalid_time_rejected(self, bad):
        with pytest.raises(ValueError):
            parse_time_of_day(bad)

    @pytest.mark.parametrize("bad", ["2", "+2", "+02:75", "UTC"])
    def test_invalid_offset_rejected(self, bad):
        with pytest.raises(ValueError):
            parse_timezone_offset(bad)


class TestConvertTimeToUtc:
    """Conversion wraps around midnight in both directions."""

    def test_positive_offset(self):
        assert convert_time_to_utc("09:00", "+02:00") == UtcTime(hours=7, minutes=0)

    def test_seconds_in_time_of_day(self):
        assert convert_time_to_utc("09:00:00", "+02:00") == UtcTime(hours=7, minutes=0)

    def test_wraps_to_previous_day(self):
        assert convert_time_to_utc("01:00", "+03:00") == UtcTime(22, 0)

    def test_wraps_to_next_day(self):
        assert convert_time_to_utc("23:30", "-01:00") == UtcTime(0, 30)

    def test_half_hour_offset(self):
        assert convert_time_to_utc("10:15", "+05:30") == UtcTime(4, 45)


class TestTimeOfDayFilter:
    """Filter construction from configuration and candle matching."""

    def test_no_filter_without_time_of_day(self):
        config = SearchConfiguration(assets=["BTC"], timeframes=["1h"])
        assert TimeOfDayFilter.from_config(config) is None

    def test_matches_exact_utc_minute(self):
        config = SearchConfiguration(assets=["BTC"], timeframes=["1h"],
                                     time_of_day="09:00", timezone_offset="+02:00")
        time_filter = TimeOfDayFilter.from_config(config)

        assert time_filter.matches(Candle(1, 1, 1, 1, _ms(2024, 3, 1, 7, 0)))
        assert not time_filter.matches(Candle(1, 1, 1, 1, _ms(2024, 3, 1, 9, 0)))
        assert not time_filter.matches(Candle(1, 1, 1, 1, _ms(2024, 3, 1, 7, 1)))

    def test_undated_candles_never_match(self):
        time_filter = TimeOfDayFilter(UtcTime(7, 0))
        assert not time_filter.matches(Candle(1, 1, 1, 1))
