#!/usr/bin/env python3
"""Compute PPST signals for a candle CSV and write them as JSON.

Usage:
    python -m scripts.run_ppst --csv data/EUR_USD_M5.csv
    python -m scripts.run_ppst --csv data/EUR_USD_M5.csv --config config/default.yaml
    python -m scripts.run_ppst --csv data/EUR_USD_M5.csv --atr-factor 5.0 --output signals.json
"""

import argparse
import json
import logging
import sys

import yaml

from ppst.config import DEFAULT_CONFIG_PATH, config_section, load_config, params_from_config
from ppst.data.data_manager import candles_from_frame, load_candles
from ppst.indicators.ppst import PPST


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging (no-op if the root logger already has handlers)."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compute Pivot Point SuperTrend signals")
    parser.add_argument("--csv", required=True, help="Candle CSV (time|timestamp, high, low, close)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Config file path")
    parser.add_argument("--pivot-period", type=int, default=None, help="Override pivot period")
    parser.add_argument("--atr-factor", type=float, default=None, help="Override ATR factor")
    parser.add_argument("--atr-period", type=int, default=None, help="Override ATR period")
    parser.add_argument("--output", default=None, help="Write JSON here instead of stdout")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
        setup_logging(config_section(config, "logging").get("level", "INFO"))
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Failed to load config {args.config}: {e}", file=sys.stderr)
        return 1

    logger = logging.getLogger(__name__)

    try:
        params = params_from_config(
            config,
            pivot_period=args.pivot_period,
            atr_factor=args.atr_factor,
            atr_period=args.atr_period,
        )
        candles = candles_from_frame(load_candles(args.csv))
    except (OSError, ValueError) as e:
        logger.error(f"Failed to prepare PPST run: {e}")
        return 1

    logger.info(f"PPST params: {params}")
    result = PPST.from_params(params).calculate(candles)

    payload = json.dumps(result.to_dict(), indent=2)
    if args.output:
        with open(args.output, "w") as f:
            f.write(payload + "\n")
        logger.info(f"Wrote {len(result.signals)} signals to {args.output}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
