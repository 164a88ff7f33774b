"""
models.py
=========

Value types shared by the similarity core and the search engine.

Candles, search configurations and matches are immutable once built; the
engine never mutates a caller's corpus.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from .common import parse_time_of_day, parse_timezone_offset

DEFAULT_SIMILARITY_THRESHOLD = 70.0

DateBound = Union[datetime, date, str, pd.Timestamp]


@dataclass(frozen=True)
class Candle:
    """One OHLC sample. ``timestamp`` is milliseconds since the epoch (UTC)."""
    open: float
    high: float
    low: float
    close: float
    timestamp: Optional[int] = None

    @property
    def as_datetime(self) -> Optional[datetime]:
        """Timestamp as an aware UTC datetime, or None if the candle has none."""
        if self.timestamp is None:
            return None
        return datetime.fromtimestamp(self.timestamp / 1000.0, tz=timezone.utc)


class Outcome(str, Enum):
    """Direction of the price move after a matched pattern."""
    BULLISH = 'bullish'
    BEARISH = 'bearish'
    NEUTRAL = 'neutral'


def to_epoch_ms(value: DateBound) -> int:
    """Convert a date bound to epoch milliseconds.

    Naive datetimes and bare dates are taken as UTC, so ``"2024-01-31"``
    means midnight UTC at the start of that day.
    """
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize('UTC')
    return int(ts.value // 1_000_000)


def _unique(values: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for value in values:
        if value not in seen:
            seen.append(value)
    return tuple(seen)


@dataclass(frozen=True)
class SearchConfiguration:
    """Which series to scan and which windows are eligible.

    ``assets`` and ``timeframes`` behave like sets (duplicates are dropped)
    but keep first-seen order so repeated searches scan in the same order.
    """
    assets: Tuple[str, ...]
    timeframes: Tuple[str, ...]
    time_of_day: str = ''
    timezone_offset: str = '+00:00'
    date_from: Optional[DateBound] = None
    date_to: Optional[DateBound] = None
    similarity_threshold: Optional[float] = DEFAULT_SIMILARITY_THRESHOLD

    def __post_init__(self):
        # Strings are iterable too; a bare "BTC" would otherwise become ("B", "T", "C").
        assets = (self.assets,) if isinstance(self.assets, str) else self.assets
        timeframes = (self.timeframes,) if isinstance(self.timeframes, str) else self.timeframes
        object.__setattr__(self, 'assets', _unique(assets))
        object.__setattr__(self, 'timeframes', _unique(timeframes))

        if self.similarity_threshold is None:
            object.__setattr__(self, 'similarity_threshold', DEFAULT_SIMILARITY_THRESHOLD)
        threshold = float(self.similarity_threshold)
        if not (0 <= threshold <= 100):
            raise ValueError(f"similarity_threshold must be in [0,100], got {threshold}")
        object.__setattr__(self, 'similarity_threshold', threshold)

        if self.time_of_day is None:
            object.__setattr__(self, 'time_of_day', '')
        if self.timezone_offset is None:
            object.__setattr__(self, 'timezone_offset', '+00:00')
        parse_timezone_offset(self.timezone_offset)
        if self.time_of_day:
            parse_time_of_day(self.time_of_day)

        # Parse eagerly so a bad bound fails at construction, not mid-search.
        for bound in (self.date_from, self.date_to):
            if bound is not None:
                try:
                    to_epoch_ms(bound)
                except (ValueError, TypeError) as e:
                    raise ValueError(f"Invalid date bound {bound!r}: {e}") from e

    @property
    def date_from_ms(self) -> Optional[int]:
        return None if self.date_from is None else to_epoch_ms(self.date_from)

    @property
    def date_to_ms(self) -> Optional[int]:
        return None if self.date_to is None else to_epoch_ms(self.date_to)

    @property
    def has_date_filter(self) -> bool:
        return self.date_from is not None or self.date_to is not None

    def series_keys(self) -> Iterable[Tuple[str, str]]:
        """Yield every (asset, timeframe) pair in scan order."""
        for asset in self.assets:
            for timeframe in self.timeframes:
                yield asset, timeframe

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'SearchConfiguration':
        """Build a configuration from plain data, e.g. a parsed YAML mapping.

        Accepts both snake_case keys and the camelCase keys used by the
        front end (``timeOfDay``, ``similarityThreshold``...).
        """
        aliases = {
            'timeOfDay': 'time_of_day',
            'timezoneOffset': 'timezone_offset',
            'dateFrom': 'date_from',
            'dateTo': 'date_to',
            'similarityThreshold': 'similarity_threshold',
        }
        known = {'assets', 'timeframes', 'time_of_day', 'timezone_offset',
                 'date_from', 'date_to', 'similarity_threshold'}

        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown search configuration key: {key}")
            kwargs[name] = value

        missing = {'assets', 'timeframes'} - kwargs.keys()
        if missing:
            raise ValueError(f"Search configuration is missing: {', '.join(sorted(missing))}")

        return cls(**kwargs)


@dataclass(frozen=True)
class SimilarityDiagnostics:
    """How a similarity score was reached: chosen resolution and penalties."""
    n: int
    k: int
    broken: float
    total_broken: int
    total_rules: int
    ratio: float
    similarity: float


@dataclass(frozen=True)
class SearchMatch:
    """A historical window that resembles the reference, plus what followed it.

    ``date`` is the outcome start as ``datetime.isoformat()`` in UTC, e.g.
    ``"2024-01-01T05:00:00+00:00"``, not the ``...000Z`` form some
    JavaScript clients emit; parse it rather than comparing strings.
    """
    id: str
    similarity: float
    asset: str
    timeframe: str
    date: Optional[str]
    outcome: Outcome
    setup_candles: Tuple[Candle, ...] = field(repr=False)
    outcome_candles: Tuple[Candle, ...] = field(repr=False)
    start_index: int = 0
    end_index: int = 0

    def __post_init__(self):
        object.__setattr__(self, 'setup_candles', tuple(self.setup_candles))
        object.__setattr__(self, 'outcome_candles', tuple(self.outcome_candles))
        if self.start_index + len(self.setup_candles) - 1 != self.end_index:
            raise ValueError(
                f"end_index {self.end_index} does not close a window of "
                f"{len(self.setup_candles)} candles starting at {self.start_index}"
            )

    @property
    def price_change_pct(self) -> float:
        """Percent move from the setup's last close to the outcome's last close."""
        return price_change_pct(self.setup_candles, self.outcome_candles)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['outcome'] = self.outcome.value
        data['setup_candles'] = [asdict(c) for c in self.setup_candles]
        data['outcome_candles'] = [asdict(c) for c in self.outcome_candles]
        return data


def price_change_pct(setup: Sequence[Candle], outcome: Sequence[Candle]) -> float:
    setup_last = setup[-1].close
    outcome_last = outcome[-1].close
    if setup_last == 0:
        return float('nan')
    return (outcome_last - setup_last) / setup_last * 100


def classify_outcome(change_pct: float, band_pct: float = 2.0) -> Outcome:
    """Bullish above +band, bearish below -band, neutral in between (inclusive)."""
    if change_pct > band_pct:
        return Outcome.BULLISH
    if change_pct < -band_pct:
        return Outcome.BEARISH
    return Outcome.NEUTRAL
