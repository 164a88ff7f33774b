"""
corpus.py
=========

Adapters from pandas OHLC frames to the candle corpus the engine searches.

Frames need ``open``, ``high``, ``low`` and ``close`` columns. Timestamps
are taken from a ``timestamp`` or ``ctm`` column (epoch milliseconds or
anything pandas can parse as a datetime), or from a DatetimeIndex.
"""

from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

from .models import Candle

OHLC_COLUMNS = ['open', 'high', 'low', 'close']
TIMESTAMP_COLUMNS = ['timestamp', 'ctm']

EPOCH = pd.Timestamp(0, tz='UTC')
ONE_MS = pd.Timedelta(milliseconds=1)


def corpus_key(asset: str, timeframe: str) -> str:
    """Corpus mapping key for one series, e.g. ``"BTCUSD_1h"``."""
    return f"{asset}_{timeframe}"


def _to_epoch_ms(values: pd.Series) -> pd.Series:
    if pd.api.types.is_numeric_dtype(values):
        return values
    parsed = pd.to_datetime(values, utc=True)
    return (parsed - EPOCH) // ONE_MS


def _timestamps(df: pd.DataFrame) -> Optional[pd.Series]:
    for col in TIMESTAMP_COLUMNS:
        if col in df.columns:
            return _to_epoch_ms(df[col])
    if isinstance(df.index, pd.DatetimeIndex):
        index = df.index if df.index.tz is not None else df.index.tz_localize('UTC')
        return pd.Series((index - EPOCH) // ONE_MS, index=df.index)
    return None


def candles_from_frame(df: pd.DataFrame) -> List[Candle]:
    """Convert an OHLC frame to candles, keeping row order."""
    frame = df.rename(columns=str.lower)
    missing = [c for c in OHLC_COLUMNS if c not in frame.columns]
    if missing:
        raise ValueError(f"OHLC frame is missing columns: {missing}")

    ohlc = frame[OHLC_COLUMNS].to_numpy(dtype=float)
    stamps = _timestamps(frame)
    stamp_values = [None] * len(frame) if stamps is None else stamps.tolist()

    candles = []
    for (o, h, l, c), ts in zip(ohlc, stamp_values):
        timestamp = None if ts is None or pd.isna(ts) else int(ts)
        candles.append(Candle(float(o), float(h), float(l), float(c), timestamp))
    return candles


def build_corpus(frames: Mapping[Tuple[str, str], pd.DataFrame]) -> Dict[str, List[Candle]]:
    """``{(asset, timeframe): frame}`` -> ``{"asset_timeframe": [Candle, ...]}``."""
    return {corpus_key(asset, timeframe): candles_from_frame(df)
            for (asset, timeframe), df in frames.items()}
