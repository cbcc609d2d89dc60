"""SuperTrend trailing bands and trend state.

Per bar, with TUp the trailing lower band and TDown the trailing upper band:
    TUp   = max(Up, TUp[1])   if close[1] > TUp[1]   else Up
    TDown = min(Dn, TDown[1]) if close[1] < TDown[1] else Dn
    Trend = UP if close > TDown[1] else DOWN if close < TUp[1] else Trend[1]

The trend decision always uses the bands from before this bar's update.
"""

from enum import Enum


class Trend(Enum):
    UP = "UP"
    DOWN = "DOWN"

    def __str__(self) -> str:
        return self.value

    @property
    def direction(self) -> int:
        """1 for UP, -1 for DOWN (PineScript's Trend variable)."""
        return 1 if self is Trend.UP else -1


class SignalType(Enum):
    LONG = "LONG"
    SHORT = "SHORT"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def for_trend(cls, trend: Trend) -> "SignalType":
        return cls.LONG if trend is Trend.UP else cls.SHORT


class SuperTrendState:
    """Trailing bands plus the active trend."""

    def __init__(self, initial_upper: float, initial_lower: float):
        # PineScript: nz(Trend[1], 1) -> starts UP
        self.trend = Trend.UP
        self.upper_band = initial_upper
        self.lower_band = initial_lower

    def update(
        self,
        basic_upper: float,
        basic_lower: float,
        close: float,
        prev_close: float,
    ) -> Trend:
        """Advance one bar and return the new trend."""
        if prev_close > self.lower_band:
            new_lower = max(basic_lower, self.lower_band)
        else:
            new_lower = basic_lower

        if prev_close < self.upper_band:
            new_upper = min(basic_upper, self.upper_band)
        else:
            new_upper = basic_upper

        if close > self.upper_band:
            new_trend = Trend.UP
        elif close < self.lower_band:
            new_trend = Trend.DOWN
        else:
            new_trend = self.trend

        self.trend = new_trend
        self.upper_band = new_upper
        self.lower_band = new_lower
        return new_trend

    @property
    def signal_line(self) -> float:
        """Trailing stop line: TUp in an uptrend, TDown in a downtrend."""
        if self.trend is Trend.UP:
            return self.lower_band
        return self.upper_band
