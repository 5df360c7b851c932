"""Configuration helpers for the basket backtest core."""

from __future__ import annotations

import os
from functools import lru_cache


DEFAULT_RISK_FREE_RATE_PCT = 2.0
DEFAULT_INITIAL_INVESTMENT = 10_000.0


@lru_cache()
def get_risk_free_rate_pct() -> float:
    """Return the annual risk-free rate (in percent) used for Sharpe ratios."""

    return float(os.getenv("BASKET_RISK_FREE_RATE_PCT", DEFAULT_RISK_FREE_RATE_PCT))


__all__ = [
    "get_risk_free_rate_pct",
    "DEFAULT_RISK_FREE_RATE_PCT",
    "DEFAULT_INITIAL_INVESTMENT",
]
