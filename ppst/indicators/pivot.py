"""Pivot high/low detection.

pivothigh(left, right) / pivotlow(left, right) evaluated at the end of a
series: the candidate is the bar `right` bars before the last one, so a
pivot is only confirmed `right` bars after it formed.

Ties do not invalidate a pivot. Only a strictly higher neighbour (pivot high)
or strictly lower neighbour (pivot low) rejects the candidate.
"""

import operator
from typing import Callable, Optional, Sequence

import numpy as np


def _find_pivot(
    series: Sequence[float],
    left_bars: int,
    right_bars: int,
    beats: Callable[[np.ndarray, float], np.ndarray],
) -> Optional[float]:
    values = np.asarray(series, dtype=float)
    if len(values) < left_bars + right_bars + 1:
        return None

    pivot_index = len(values) - right_bars - 1
    pivot_value = values[pivot_index]

    left = values[pivot_index - left_bars:pivot_index]
    right = values[pivot_index + 1:pivot_index + right_bars + 1]
    if np.any(beats(left, pivot_value)) or np.any(beats(right, pivot_value)):
        return None

    return float(pivot_value)


def pivot_high(highs: Sequence[float], left_bars: int, right_bars: int) -> Optional[float]:
    """Return the candidate high if it is a pivot high, else None.

    Args:
        highs: High prices, oldest first. The candidate is highs[-right_bars - 1].
        left_bars: Bars before the candidate that must not be higher.
        right_bars: Bars after the candidate that must not be higher.
    """
    return _find_pivot(highs, left_bars, right_bars, operator.gt)


def pivot_low(lows: Sequence[float], left_bars: int, right_bars: int) -> Optional[float]:
    """Return the candidate low if it is a pivot low, else None."""
    return _find_pivot(lows, left_bars, right_bars, operator.lt)
