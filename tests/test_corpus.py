"""
test_corpus.py
==============

Tests for converting pandas OHLC frames into the search corpus.
"""

import pytest
import numpy as np
import pandas as pd
from pathlib import Path
import sys

# Add project root to path for imports
sys.path.append(str(Path(__file__).parent.parent))

from chartmatch.corpus import build_corpus, candles_from_frame, corpus_key


class BaseTestClass:
    """Base test class with helper methods."""

    def _generate_ohlc(self, n_points: int) -> pd.DataFrame:
        np.random.seed(42)
        close = 100 + np.cumsum(np.random.randn(n_points))
        return pd.DataFrame({
            'open': close - 0.1,
            'high': close + 0.5,
            'low': close - 0.5,
            'close': close,
        }, index=pd.date_range('2024-01-01', periods=n_points, freq='1h'))


class TestCandlesFromFrame(BaseTestClass):

    def test_datetime_index(self):
        df = self._generate_ohlc(10)
        candles = candles_from_frame(df)
        assert len(candles) == 10
        assert candles[0].timestamp == 1704067200000
        assert candles[1].timestamp - candles[0].timestamp == 3600 * 1000
        assert [c.close for c in candles] == pytest.approx(df['close'].tolist())

    def test_ctm_column_in_milliseconds(self):
        df = pd.DataFrame({
            'Open': [1.0, 2.0], 'High': [1.5, 2.5], 'Low': [0.5, 1.5], 'Close': [1.2, 2.2],
            'ctm': [1704067200000, 1704070800000],
        })
        candles = candles_from_frame(df)
        assert [c.timestamp for c in candles] == [1704067200000, 1704070800000]
        assert candles[1].high == 2.5

    def test_timestamp_strings(self):
        df = pd.DataFrame({
            'open': [1.0, 2.0], 'high': [1.0, 2.0], 'low': [1.0, 2.0], 'close': [1.0, 2.0],
            'timestamp': ['2024-01-01T00:00:00Z', None],
        })
        candles = candles_from_frame(df)
        assert candles[0].timestamp == 1704067200000
        assert candles[1].timestamp is None

    def test_no_timestamps(self):
        df = pd.DataFrame({'open': [1.0], 'high': [1.0], 'low': [1.0], 'close': [1.0]})
        assert candles_from_frame(df)[0].timestamp is None

    def test_missing_columns(self):
        with pytest.raises(ValueError):
            candles_from_frame(pd.DataFrame({'close': [1.0, 2.0]}))


class TestBuildCorpus(BaseTestClass):

    def test_keys(self):
        assert corpus_key("BTCUSD", "1h") == "BTCUSD_1h"
        corpus = build_corpus({
            ("BTCUSD", "1h"): self._generate_ohlc(5),
            ("ETHUSD", "15m"): self._generate_ohlc(3),
        })
        assert set(corpus) == {"BTCUSD_1h", "ETHUSD_15m"}
        assert len(corpus["ETHUSD_15m"]) == 3
