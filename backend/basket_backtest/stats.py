"""Summary statistics for combined strategy trajectories.

Percentages are returned already multiplied by 100. Statistics that are not
defined for the given data (a single observation, a flat series for the
Sharpe ratio) are reported as ``math.nan``; a zero or negative value used as
a denominator raises :class:`DegenerateInputError`.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Optional, Sequence

import numpy as np

from .config import DEFAULT_RISK_FREE_RATE_PCT
from .errors import DegenerateInputError
from .models import (
    CombinedPoint,
    Resolution,
    StrategyKey,
    StrategyStatistics,
    SummaryStatistics,
)

logger = logging.getLogger(__name__)


def _require_positive(values: np.ndarray, what: str) -> None:
    if values.size and np.any(values <= 0):
        raise DegenerateInputError(f"{what} must be positive to compute returns")


def step_returns(values: Sequence[float]) -> np.ndarray:
    """Simple per-step returns ``v[i] / v[i-1] - 1``."""

    arr = np.asarray(values, dtype=float)
    if arr.size < 2:
        return np.empty(0)
    _require_positive(arr[:-1], "Portfolio values")
    return arr[1:] / arr[:-1] - 1.0


def annualized_volatility_pct(returns: np.ndarray, steps_per_year: int) -> float:
    """Population standard deviation of ``returns`` scaled to a year, in percent."""

    if returns.size == 0:
        return math.nan
    return float(np.std(returns) * math.sqrt(steps_per_year) * 100.0)


def max_drawdown_pct(values: Sequence[float]) -> float:
    """Largest peak-to-trough decline, in percent of the running peak."""

    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return math.nan
    peaks = np.maximum.accumulate(arr)
    _require_positive(peaks, "Running peak")
    drawdowns = (peaks - arr) / peaks
    return float(np.max(drawdowns) * 100.0)


def sharpe_ratio(
    returns: np.ndarray,
    steps_per_year: int,
    risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT,
) -> float:
    """Sharpe ratio using the compounded mean step return.

    Unlike :func:`summary_statistics`' annualized return, the return here is
    compounded: ``(1 + mean) ** steps_per_year - 1``.
    """

    volatility = annualized_volatility_pct(returns, steps_per_year)
    if math.isnan(volatility) or volatility == 0:
        return math.nan
    mean = float(np.mean(returns))
    with np.errstate(over="ignore"):
        growth = float(np.power(1.0 + mean, steps_per_year))
    annualized_return = (growth - 1) * 100.0
    return (annualized_return - risk_free_rate_pct) / volatility


def _strategy_statistics(
    values: Sequence[float],
    initial_value: float,
    resolution: Resolution,
    risk_free_rate_pct: float,
) -> StrategyStatistics:
    steps_per_year = resolution.steps_per_year
    final_value = values[-1]
    total_return = (final_value / initial_value - 1) * 100.0
    duration_years = len(values) / steps_per_year
    returns = step_returns(values)

    drawdown: Optional[float] = None
    sharpe: Optional[float] = None
    if resolution is Resolution.HOURLY:
        drawdown = max_drawdown_pct(values)
        sharpe = sharpe_ratio(returns, steps_per_year, risk_free_rate_pct)

    return StrategyStatistics(
        final_value=final_value,
        total_return_pct=total_return,
        annualized_return_pct=total_return / duration_years,
        volatility_pct=annualized_volatility_pct(returns, steps_per_year),
        max_drawdown_pct=drawdown,
        sharpe_ratio=sharpe,
    )


def summary_statistics(
    combined: Sequence[CombinedPoint],
    resolution: Resolution = Resolution.DAILY,
    risk_free_rate_pct: float = DEFAULT_RISK_FREE_RATE_PCT,
) -> SummaryStatistics | None:
    """Compute returns, volatility and (hourly only) drawdown and Sharpe per strategy.

    All strategies are measured against the first value of ``strategy1``,
    since every strategy starts from the same investment. Returns ``None``
    for an empty trajectory.
    """

    if not combined:
        return None

    initial_value = combined[0].strategy1
    if initial_value <= 0:
        raise DegenerateInputError("Initial portfolio value must be positive")

    strategies: Dict[StrategyKey, StrategyStatistics] = {}
    for key in StrategyKey:
        values = [point.value(key) for point in combined]
        strategies[key] = _strategy_statistics(values, initial_value, resolution, risk_free_rate_pct)

    logger.debug("Computed %s statistics over %d points", resolution.value, len(combined))
    return SummaryStatistics(
        resolution=resolution,
        initial_value=initial_value,
        strategies=strategies,
    )


__all__ = [
    "summary_statistics",
    "step_returns",
    "annualized_volatility_pct",
    "max_drawdown_pct",
    "sharpe_ratio",
]
