"""
engine.py
=========

Sliding-window similarity search across a corpus of OHLC series.

For each configured asset/timeframe the reference pattern is slid over the
series one candle at a time. Every window is scored against the reference;
runs of windows above the threshold are collapsed into single matches by
the scan state machine in ``dedup``, and every match records the candles
that followed it so callers can see what happened next.

Cost is O(series length * pattern length^3) per series, since every
window runs the full resolution scan. There is no
timeout; callers that need one must impose it from outside.
"""

import logging
import time
from typing import List, Mapping, Optional, Sequence

from ..config import EngineSettings
from ..corpus import corpus_key
from ..models import (
    Candle,
    SearchConfiguration,
    SearchMatch,
    classify_outcome,
    price_change_pct,
)
from ..similarity.scorer import calculate_similarity
from .dedup import ScanState, flush, offer_candidate, wants_candidate
from .time_filter import TimeOfDayFilter

logger = logging.getLogger(__name__)

Corpus = Mapping[str, Sequence[Candle]]


def filter_by_date(candles: Sequence[Candle], config: SearchConfiguration) -> Sequence[Candle]:
    """Keep candles inside the inclusive date range; undated candles always pass."""
    if not config.has_date_filter:
        return candles

    lo = config.date_from_ms
    hi = config.date_to_ms
    kept = []
    for candle in candles:
        if candle.timestamp is None:
            kept.append(candle)
            continue
        if lo is not None and candle.timestamp < lo:
            continue
        if hi is not None and candle.timestamp > hi:
            continue
        kept.append(candle)
    return kept


class PatternSearchEngine:
    """Finds windows in a corpus whose shape resembles a reference pattern."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    def search(self, reference: Sequence[Candle], corpus: Corpus,
               config: SearchConfiguration) -> List[SearchMatch]:
        """
        Scan every configured series and return the best matches.

        Args:
            reference: Pattern to look for, at least 2 candles
            corpus: Series keyed by ``"{asset}_{timeframe}"``
            config: Which series to scan and which windows qualify

        Returns:
            Matches sorted by similarity, highest first, at most
            ``settings.max_results`` of them.
        """
        if len(reference) < 2:
            raise ValueError(f"Reference pattern needs at least 2 candles, got {len(reference)}")

        start_time = time.time()
        time_filter = TimeOfDayFilter.from_config(config)
        if time_filter is not None:
            logger.debug(f"Restricting outcome starts to {time_filter.utc.hours:02d}:{time_filter.utc.minutes:02d} UTC")

        results: List[SearchMatch] = []
        scanned = 0
        for asset, timeframe in config.series_keys():
            key = corpus_key(asset, timeframe)
            candles = corpus.get(key)
            if candles is None:
                logger.debug(f"No data for {key}, skipping")
                continue
            if len(candles) < len(reference) + self.settings.outcome_length:
                logger.debug(f"Not enough data for {key} ({len(candles)} candles), skipping")
                continue

            matches = self.scan_series(reference, filter_by_date(candles, config),
                                       asset, timeframe, config, time_filter)
            results.extend(matches)
            scanned += 1

        results.sort(key=lambda m: m.similarity, reverse=True)
        results = results[:self.settings.max_results]

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(f"Pattern search over {scanned} series found {len(results)} matches in {elapsed_ms:.1f}ms")
        return results

    def scan_series(self, reference: Sequence[Candle], candles: Sequence[Candle],
                    asset: str, timeframe: str, config: SearchConfiguration,
                    time_filter: Optional[TimeOfDayFilter] = None) -> List[SearchMatch]:
        """Slide the reference over one series and return its deduplicated matches."""
        pattern_length = len(reference)
        outcome_length = self.settings.outcome_length
        threshold = config.similarity_threshold
        state = ScanState()

        for i in range(len(candles) - pattern_length - outcome_length + 1):
            window = candles[i:i + pattern_length]
            outcome = candles[i + pattern_length:i + pattern_length + outcome_length]

            if time_filter is not None and not time_filter.matches(outcome[0]):
                continue

            similarity = calculate_similarity(reference, window, clamp=self.settings.clamp_scores)

            candidate = None
            if wants_candidate(state, similarity, threshold):
                candidate = self._build_match(asset, timeframe, i, similarity, window, outcome)
            state = offer_candidate(state, similarity, threshold, candidate, pattern_length)

        state = flush(state, pattern_length)
        return list(state.accepted)

    def _build_match(self, asset: str, timeframe: str, start: int, similarity: float,
                     window: Sequence[Candle], outcome: Sequence[Candle]) -> SearchMatch:
        change = price_change_pct(window, outcome)
        start_at = outcome[0].as_datetime
        return SearchMatch(
            id=f"{corpus_key(asset, timeframe)}_{start}",
            similarity=similarity,
            asset=asset,
            timeframe=timeframe,
            date=start_at.isoformat() if start_at is not None else None,
            outcome=classify_outcome(change, self.settings.outcome_band_pct),
            setup_candles=tuple(window),
            outcome_candles=tuple(outcome),
            start_index=start,
            end_index=start + len(window) - 1,
        )


def search_similar_patterns(reference_pattern: Sequence[Candle], all_candle_data: Corpus,
                            search_config: SearchConfiguration,
                            settings: Optional[EngineSettings] = None) -> List[SearchMatch]:
    """Module-level shortcut for ``PatternSearchEngine(settings).search(...)``."""
    return PatternSearchEngine(settings).search(reference_pattern, all_candle_data, search_config)
