"""Candle input record."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candle:
    """One OHLC bar. `timestamp` is epoch seconds."""

    high: float
    low: float
    close: float
    timestamp: int
