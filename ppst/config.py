"""PPST parameters and YAML config loading."""

import math
import numbers
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

DEFAULT_CONFIG_PATH = "config/default.yaml"


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class PPSTParams:
    """Pivot Point SuperTrend parameters.

    pivot_period: Pivot lookback/forward bars (pivothigh(prd, prd))
    atr_factor: ATR multiplier for the bands
    atr_period: ATR smoothing period
    """

    pivot_period: int = 2
    atr_factor: float = 3.0
    atr_period: int = 10

    def __post_init__(self):
        for name in ("pivot_period", "atr_period"):
            value = getattr(self, name)
            if not _is_int(value) or value < 1:
                raise ValueError(f"{name} must be an integer >= 1, got {value!r}")
        if not _is_real(self.atr_factor) or not math.isfinite(self.atr_factor) or self.atr_factor <= 0:
            raise ValueError(f"atr_factor must be a positive number, got {self.atr_factor!r}")


def load_config(path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> dict:
    """Load a YAML config file. An empty file gives an empty dict.

    Raises:
        ValueError: the file is not a YAML mapping.
    """
    with open(path) as f:
        config = yaml.safe_load(f)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(config).__name__}")
    return config


def config_section(config: dict, name: str) -> dict:
    """A top-level section; missing or empty (`name:`) gives an empty dict."""
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def params_from_config(
    config: dict,
    pivot_period: Optional[int] = None,
    atr_factor: Optional[float] = None,
    atr_period: Optional[int] = None,
) -> PPSTParams:
    """Build PPSTParams from the `ppst` section; non-None overrides win."""
    ppst_cfg = config_section(config, "ppst")
    defaults = PPSTParams()
    return PPSTParams(
        pivot_period=pivot_period if pivot_period is not None
        else ppst_cfg.get("pivot_period", defaults.pivot_period),
        atr_factor=atr_factor if atr_factor is not None
        else ppst_cfg.get("atr_factor", defaults.atr_factor),
        atr_period=atr_period if atr_period is not None
        else ppst_cfg.get("atr_period", defaults.atr_period),
    )
