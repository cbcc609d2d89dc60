"""Candle CSV loading and validation."""

import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from ppst.data.candle import Candle

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ["high", "low", "close"]
EPOCH = pd.Timestamp("1970-01-01", tz="UTC")


def _epoch_seconds(df: pd.DataFrame) -> pd.Series:
    """Integer epoch seconds from `timestamp` (as-is) or `time` (parsed as UTC)."""
    if "timestamp" in df.columns:
        return df["timestamp"].astype("int64")
    times = pd.to_datetime(df["time"], utc=True)
    return ((times - EPOCH) // pd.Timedelta(seconds=1)).astype("int64")


def validate_candles(df: pd.DataFrame) -> None:
    """Check a candle DataFrame.

    Raises:
        ValueError: missing columns, NaN prices or timestamps out of order.
    """
    missing = [col for col in PRICE_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Candle data is missing columns: {missing}")
    if "time" not in df.columns and "timestamp" not in df.columns:
        raise ValueError("Candle data needs a 'time' or 'timestamp' column")

    nan_rows = df[PRICE_COLUMNS].isna().any(axis=1)
    if nan_rows.any():
        first = df.index[nan_rows][0]
        raise ValueError(f"Candle data has NaN prices ({int(nan_rows.sum())} rows, first at {first})")

    if len(df) > 1 and not _epoch_seconds(df).is_monotonic_increasing:
        raise ValueError("Candle timestamps must be in ascending order")


def candles_from_frame(df: pd.DataFrame) -> List[Candle]:
    """Convert a candle DataFrame (high, low, close, time|timestamp) to Candles."""
    validate_candles(df)
    if df.empty:
        return []
    timestamps = _epoch_seconds(df)
    return [
        Candle(high=float(h), low=float(l), close=float(c), timestamp=int(ts))
        for h, l, c, ts in zip(df["high"], df["low"], df["close"], timestamps)
    ]


def load_candles(path: Union[str, Path]) -> pd.DataFrame:
    """Load candles from a CSV file and validate them."""
    df = pd.read_csv(path)
    validate_candles(df)
    logger.info(f"Loaded {len(df)} candles from {path}")
    return df
