"""Average True Range with Wilder's RMA smoothing.

Matches PineScript's ta.atr():
1. True Range: max(high - low, |high - prev_close|, |low - prev_close|)
2. Seed: SMA of the first `period` true ranges
3. Then: atr[i] = (atr[i-1] * (period-1) + tr[i]) / period

While seeding, the raw true range of the current bar is returned.
"""

from typing import Optional


def true_range(high: float, low: float, prev_close: float) -> float:
    """Compute the True Range of a single bar."""
    return max(
        high - low,
        abs(high - prev_close),
        abs(low - prev_close),
    )


class AtrCalculator:
    """Stateful ATR fed one bar at a time."""

    def __init__(self, period: int = 10):
        if period < 1:
            raise ValueError(f"ATR period must be >= 1, got {period}")
        self.period = period
        self.atr: Optional[float] = None
        self.tr_sum = 0.0
        self.count = 0

    @property
    def is_seeded(self) -> bool:
        return self.atr is not None

    @property
    def value(self) -> Optional[float]:
        """Smoothed ATR, or None while still seeding."""
        return self.atr

    def next(self, high: float, low: float, prev_close: float) -> float:
        """Feed one bar and return its ATR value."""
        tr = true_range(high, low, prev_close)

        if self.atr is None:
            # Accumulate the initial SMA
            self.tr_sum += tr
            self.count += 1
            if self.count >= self.period:
                self.atr = self.tr_sum / self.period
                return self.atr
            return tr

        self.atr = (self.atr * (self.period - 1) + tr) / self.period
        return self.atr
