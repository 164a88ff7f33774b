"""
reporting.py
============

Summaries of search results: what typically happened after patterns like
the reference one.
"""

from dataclasses import dataclass
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from .models import Outcome, SearchMatch

MATCH_COLUMNS = ['id', 'similarity', 'asset', 'timeframe', 'date', 'outcome',
                 'price_change_pct', 'start_index', 'end_index']


@dataclass(frozen=True)
class OutcomeSummary:
    total: int
    counts: Dict[str, int]
    shares: Dict[str, float]
    mean_similarity: float
    mean_change_pct: float
    median_change_pct: float

    @property
    def dominant_outcome(self) -> Outcome:
        """Most frequent outcome; ties resolve bullish, bearish, neutral in that order."""
        return max(Outcome, key=lambda o: self.counts[o.value])


def matches_to_frame(matches: Sequence[SearchMatch]) -> pd.DataFrame:
    """One row per match, without the candle payloads."""
    rows = [{
        'id': m.id,
        'similarity': m.similarity,
        'asset': m.asset,
        'timeframe': m.timeframe,
        'date': pd.Timestamp(m.date) if m.date else pd.NaT,
        'outcome': m.outcome.value,
        'price_change_pct': m.price_change_pct,
        'start_index': m.start_index,
        'end_index': m.end_index,
    } for m in matches]
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def summarize_outcomes(matches: Sequence[SearchMatch]) -> OutcomeSummary:
    """Count outcomes and aggregate the forward price move over ``matches``."""
    counts = {o.value: 0 for o in Outcome}
    for m in matches:
        counts[m.outcome.value] += 1

    total = len(matches)
    if total == 0:
        return OutcomeSummary(0, counts, {k: 0.0 for k in counts}, float('nan'), float('nan'), float('nan'))

    changes = np.array([m.price_change_pct for m in matches], dtype=float)
    similarities = np.array([m.similarity for m in matches], dtype=float)

    return OutcomeSummary(
        total=total,
        counts=counts,
        shares={k: v / total for k, v in counts.items()},
        mean_similarity=float(similarities.mean()),
        mean_change_pct=float(np.nanmean(changes)) if np.isfinite(changes).any() else float('nan'),
        median_change_pct=float(np.nanmedian(changes)) if np.isfinite(changes).any() else float('nan'),
    )
