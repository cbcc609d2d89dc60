#!/usr/bin/env python3
"""PPST Indicator Diagnostics: bar-level trace around warm-up, pivots and signals.

Helps cross-reference the Python values against a PineScript chart.

Usage:
    python -m scripts.ppst_diagnostics --csv data/EUR_USD_M5.csv
    python -m scripts.ppst_diagnostics --csv data/EUR_USD_M5.csv --signals 5 --context 2
"""

import argparse

import numpy as np
import pandas as pd

from ppst.config import DEFAULT_CONFIG_PATH, load_config, params_from_config
from ppst.data.data_manager import candles_from_frame, load_candles
from ppst.indicators.ppst import PPST
from ppst.indicators.supertrend import SignalType

WARMUP_BARS = 20
NUM_PIVOT_EVENTS = 10


def fmt_price(val, decimals=5):
    """Format a price value with fixed decimals, or '-' if NaN."""
    if val is None or (isinstance(val, float) and np.isnan(val)):
        return "-".rjust(decimals + 3)
    return f"{val:.{decimals}f}"


def print_bar_header():
    hdr = (
        f"{'idx':>6}  {'time':>25}  "
        f"{'high':>9}  {'low':>9}  {'close':>9}  "
        f"{'center':>9}  {'atr':>9}  "
        f"{'tup':>9}  {'tdown':>9}  "
        f"{'trend':>5}  {'trail_sl':>9}  "
        f"{'buy':>3}  {'sell':>3}"
    )
    print(hdr)
    print("-" * len(hdr))


def print_bar_row(idx, row):
    print(
        f"{idx:>6}  {str(row['time']):>25}  "
        f"{fmt_price(row['high'])}  {fmt_price(row['low'])}  {fmt_price(row['close'])}  "
        f"{fmt_price(row['center'])}  {fmt_price(row['atr'])}  "
        f"{fmt_price(row['tup'])}  {fmt_price(row['tdown'])}  "
        f"{int(row['trend']):>5}  {fmt_price(row['trailing_sl'])}  "
        f"{'Y' if row['buy_signal'] else '.':>3}  "
        f"{'Y' if row['sell_signal'] else '.':>3}"
    )


def print_section(title):
    print("\n" + "=" * 120)
    print(title)
    print("=" * 120)


def pivot_event_bars(data: pd.DataFrame) -> list:
    """Bars where the center line moved (or first appeared)."""
    center = data["center"]
    changed = center.notna() & (center != center.shift(1))
    return data.index[changed].tolist()


def main(argv=None):
    parser = argparse.ArgumentParser(description="PPST bar-level diagnostics")
    parser.add_argument("--csv", required=True, help="Candle CSV")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file path")
    parser.add_argument("--signals", type=int, default=10, help="Signals with bar context")
    parser.add_argument("--context", type=int, default=3, help="Bars before/after each signal")
    args = parser.parse_args(argv)

    params = params_from_config(load_config(args.config))
    df = load_candles(args.csv)
    print(f"Loaded {len(df)} candles from {args.csv}")

    print(f"\nComputing PPST (pivot={params.pivot_period}, atr_factor={params.atr_factor}, "
          f"atr_period={params.atr_period})...")
    run = PPST.from_params(params)
    result = run.calculate(candles_from_frame(df))
    data = run.to_frame()

    longs = sum(1 for s in result.signals if s.signal_type is SignalType.LONG)
    print(f"\n  LONG signals:  {longs}")
    print(f"  SHORT signals: {len(result.signals) - longs}")
    print(f"  Final trend:   {result.final_trend or 'unset'}")

    # Warm-up: how center / ATR / bands initialize
    print_section(f"WARMUP DIAGNOSTICS: first {WARMUP_BARS} bars")
    print_bar_header()
    for idx in range(min(WARMUP_BARS, len(data))):
        print_bar_row(idx, data.iloc[idx])

    pivots = pivot_event_bars(data)
    print_section(f"FIRST {NUM_PIVOT_EVENTS} PIVOT EVENTS (where center line changes)")
    print(f"  Total pivot events: {len(pivots)}\n")
    print_bar_header()
    for pidx in pivots[:NUM_PIVOT_EVENTS]:
        for idx in range(max(0, pidx - 1), min(len(data), pidx + 2)):
            print_bar_row(idx, data.iloc[idx])
        print()

    print_section(f"DETAILED BAR CONTEXT: first {args.signals} signals (+/- {args.context} bars)")
    for num, sig in enumerate(result.signals[:args.signals]):
        print(f"\n--- Signal #{num + 1}: {sig.signal_type} at bar {sig.index} "
              f"price={fmt_price(sig.price)} line={fmt_price(sig.signal_line)} ---")
        print_bar_header()
        start = max(0, sig.index - args.context)
        end = min(len(data), sig.index + args.context + 1)
        for idx in range(start, end):
            print_bar_row(idx, data.iloc[idx])

    print("\n\nDiagnostics complete.")


if __name__ == "__main__":
    main()
