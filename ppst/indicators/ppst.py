"""Pivot Point SuperTrend (PPST) indicator.

Two passes over the full candle history:
1. ATR: Wilder's RMA over every bar (prev_close of bar 0 is its own close)
2. Per bar i >= 2 * pivot_period:
   - pivothigh(prd, prd) / pivotlow(prd, prd) on the bar at i - prd, each pivot
     used once; a confirmed pivot moves the center line
   - Bands: Up = center - factor * ATR, Dn = center + factor * ATR
   - Trailing bands and trend via SuperTrendState
   - A trend flip emits a LONG (to UP) or SHORT (to DOWN) signal

A run is not incremental. Calling calculate() on a completed run resets all
state and recomputes from the candles given.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from ppst.config import PPSTParams
from ppst.data.candle import Candle
from ppst.indicators.atr import AtrCalculator
from ppst.indicators.center_line import PivotCenterLine
from ppst.indicators.pivot import pivot_high, pivot_low
from ppst.indicators.supertrend import SignalType, SuperTrendState, Trend

logger = logging.getLogger(__name__)


class ComputationState(Enum):
    INITIALIZED = "initialized"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Signal:
    """A trend flip at bar `index`."""

    index: int
    timestamp: int
    price: float
    signal_type: SignalType
    trend: Trend
    signal_line: float

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "timestamp": self.timestamp,
            "price": self.price,
            "signal_type": self.signal_type.value,
            "trend": self.trend.value,
            "signal_line": self.signal_line,
        }


@dataclass
class PPSTResult:
    """Signals in bar order plus the final trend (None if never initialized)."""

    signals: List[Signal] = field(default_factory=list)
    final_trend: Optional[Trend] = None

    def to_dict(self) -> dict:
        return {
            "signals": [s.to_dict() for s in self.signals],
            "final_trend": self.final_trend.value if self.final_trend is not None else None,
        }


class PPST:
    """One PPST computation run."""

    def __init__(
        self,
        pivot_period: int = 2,
        atr_factor: float = 3.0,
        atr_period: int = 10,
    ):
        self.params = PPSTParams(
            pivot_period=pivot_period,
            atr_factor=atr_factor,
            atr_period=atr_period,
        )
        self.reset()

    @classmethod
    def from_params(cls, params: PPSTParams) -> "PPST":
        return cls(params.pivot_period, params.atr_factor, params.atr_period)

    @property
    def pivot_period(self) -> int:
        return self.params.pivot_period

    @property
    def atr_factor(self) -> float:
        return self.params.atr_factor

    @property
    def atr_period(self) -> int:
        return self.params.atr_period

    def reset(self) -> None:
        """Drop all run state."""
        self.computation_state = ComputationState.INITIALIZED
        self.atr_calculator = AtrCalculator(self.atr_period)
        self.center_line = PivotCenterLine()
        self.supertrend_state: Optional[SuperTrendState] = None
        self.signals: List[Signal] = []
        self.last_pivot_high_idx: Optional[int] = None
        self.last_pivot_low_idx: Optional[int] = None
        self.timestamps = np.empty(0, dtype=np.int64)
        self.highs = np.empty(0)
        self.lows = np.empty(0)
        self.closes = np.empty(0)
        self.atrs = np.empty(0)
        # Per-bar trace, NaN / None until the value exists
        self.centers = np.empty(0)
        self.tups = np.empty(0)
        self.tdowns = np.empty(0)
        self.trends: List[Optional[Trend]] = []

    def calculate(self, candles: Sequence[Candle]) -> PPSTResult:
        """Compute signals over the full candle history."""
        if self.computation_state is ComputationState.COMPLETED:
            self.reset()

        n = len(candles)
        self.timestamps = np.array([c.timestamp for c in candles], dtype=np.int64)
        self.highs = np.array([c.high for c in candles], dtype=float)
        self.lows = np.array([c.low for c in candles], dtype=float)
        self.closes = np.array([c.close for c in candles], dtype=float)
        self.atrs = np.empty(n)
        self.centers = np.full(n, np.nan)
        self.tups = np.full(n, np.nan)
        self.tdowns = np.full(n, np.nan)
        self.trends = [None] * n

        # Pass 1: ATR
        for i in range(n):
            prev_close = self.closes[i - 1] if i > 0 else self.closes[i]
            self.atrs[i] = self.atr_calculator.next(self.highs[i], self.lows[i], prev_close)

        # Pass 2: pivots, center line, SuperTrend
        prd = self.pivot_period
        for i in range(n):
            if i >= 2 * prd:
                self._confirm_pivots(i)
                self._update_supertrend(i)
            self._record_trace(i)

        self.computation_state = ComputationState.COMPLETED
        result = self.result()
        logger.info(
            f"PPST(pivot={prd}, factor={self.atr_factor}, atr={self.atr_period}): "
            f"{n} bars, {len(self.signals)} signals, final trend {result.final_trend}"
        )
        return result

    def _confirm_pivots(self, i: int) -> None:
        prd = self.pivot_period
        pivot_idx = i - prd
        window = slice(0, i + 1)

        if self.last_pivot_high_idx is None or pivot_idx > self.last_pivot_high_idx:
            ph = pivot_high(self.highs[window], prd, prd)
            if ph is not None:
                self.center_line.update(ph)
                self.last_pivot_high_idx = pivot_idx
                logger.debug(f"Pivot high {ph} at bar {pivot_idx} (confirmed at {i})")

        if self.last_pivot_low_idx is None or pivot_idx > self.last_pivot_low_idx:
            pl = pivot_low(self.lows[window], prd, prd)
            if pl is not None:
                self.center_line.update(pl)
                self.last_pivot_low_idx = pivot_idx
                logger.debug(f"Pivot low {pl} at bar {pivot_idx} (confirmed at {i})")

    def _update_supertrend(self, i: int) -> None:
        center = self.center_line.get()
        if center is None:
            return
        atr = self.atrs[i]
        if not atr > 0:
            return

        basic_upper = center + self.atr_factor * atr
        basic_lower = center - self.atr_factor * atr

        state = self.supertrend_state
        if state is None:
            self.supertrend_state = SuperTrendState(basic_upper, basic_lower)
            return

        old_trend = state.trend
        prev_close = self.closes[i - 1] if i > 0 else self.closes[i]
        new_trend = state.update(basic_upper, basic_lower, self.closes[i], prev_close)
        if new_trend is old_trend:
            return

        signal = Signal(
            index=i,
            timestamp=int(self.timestamps[i]),
            price=float(self.closes[i]),
            signal_type=SignalType.for_trend(new_trend),
            trend=new_trend,
            signal_line=float(state.signal_line),
        )
        self.signals.append(signal)
        logger.info(f"Signal detected at index {i}: {signal.signal_type} @ {signal.price}")

    def _record_trace(self, i: int) -> None:
        center = self.center_line.get()
        if center is not None:
            self.centers[i] = center
        state = self.supertrend_state
        if state is not None:
            self.tups[i] = state.lower_band
            self.tdowns[i] = state.upper_band
            self.trends[i] = state.trend

    @property
    def final_trend(self) -> Optional[Trend]:
        if self.supertrend_state is None:
            return None
        return self.supertrend_state.trend

    def result(self) -> PPSTResult:
        return PPSTResult(signals=list(self.signals), final_trend=self.final_trend)

    def to_frame(self) -> pd.DataFrame:
        """Per-bar trace of the last run.

        Columns: time, timestamp, high, low, close, atr, center, tup, tdown,
        trend (1 / -1 / 0 if unset), trailing_sl, buy_signal, sell_signal
        """
        n = len(self.closes)
        trend = np.array([t.direction if t is not None else 0 for t in self.trends], dtype=int)
        trailing_sl = np.where(trend == 1, self.tups, self.tdowns)

        buy_signal = np.zeros(n, dtype=bool)
        sell_signal = np.zeros(n, dtype=bool)
        for s in self.signals:
            if s.signal_type is SignalType.LONG:
                buy_signal[s.index] = True
            else:
                sell_signal[s.index] = True

        return pd.DataFrame({
            "time": pd.to_datetime(self.timestamps, unit="s", utc=True),
            "timestamp": self.timestamps,
            "high": self.highs,
            "low": self.lows,
            "close": self.closes,
            "atr": self.atrs,
            "center": self.centers,
            "tup": self.tups,
            "tdown": self.tdowns,
            "trend": trend,
            "trailing_sl": trailing_sl,
            "buy_signal": buy_signal,
            "sell_signal": sell_signal,
        })


def compute_ppst(
    candles: Sequence[Candle],
    pivot_period: int = 2,
    atr_factor: float = 3.0,
    atr_period: int = 10,
) -> PPSTResult:
    """Compute PPST on a fresh run.

    Args:
        candles: Candles in ascending time order
        pivot_period: Pivot detection lookback/forward (default 2)
        atr_factor: ATR multiplier for bands (default 3.0)
        atr_period: ATR smoothing period (default 10)

    Returns:
        PPSTResult with the signal list and final trend
    """
    return PPST(pivot_period, atr_factor, atr_period).calculate(candles)
