"""Pipeline function running the three basket strategies over a price series."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from .combine import combine
from .config import get_risk_free_rate_pct
from .errors import InvalidInputError
from .filters import Bound, filter_by_range
from .models import BacktestResult, PriceObservation, Resolution, StrategyParameters
from .stats import summary_statistics
from .strategies import (
    full_asset_performance,
    rebalanced_split_performance,
    static_split_performance,
)

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data available for the selected date range."


def run_backtest(
    series: Sequence[PriceObservation],
    params: StrategyParameters,
    resolution: Resolution = Resolution.DAILY,
    *,
    start: Bound = None,
    end: Bound = None,
    resample_to_daily: Optional[bool] = None,
    risk_free_rate_pct: Optional[float] = None,
) -> BacktestResult:
    """Filter ``series`` and compute trajectories plus statistics for all strategies.

    Statistics always use the full-resolution trajectory. ``chart`` is
    resampled to one point per day when ``resample_to_daily`` is set, which
    defaults to ``True`` for hourly data.
    """

    if not params.initial_investment or params.initial_investment <= 0:
        raise InvalidInputError("Initial investment must be a positive amount.")

    filtered = filter_by_range(series, start, end)
    if not filtered:
        raise InvalidInputError(NO_DATA_MESSAGE)

    if resample_to_daily is None:
        resample_to_daily = resolution is Resolution.HOURLY
    if risk_free_rate_pct is None:
        risk_free_rate_pct = get_risk_free_rate_pct()

    logger.info(
        "Running %s backtest over %d of %d observations (investment=%s, rebalance=%sx/day)",
        resolution.value,
        len(filtered),
        len(series),
        params.initial_investment,
        params.rebalance_frequency_per_day,
    )

    full_asset = full_asset_performance(filtered, params.initial_investment)
    static_split = static_split_performance(
        filtered,
        params.initial_investment,
        params.asset_yield_pct,
        params.cash_yield_pct,
        resolution=resolution,
    )
    rebalanced = rebalanced_split_performance(
        filtered,
        params.initial_investment,
        params.asset_yield_pct,
        params.cash_yield_pct,
        params.rebalance_frequency_per_day,
        resolution=resolution,
    )

    combined = combine(full_asset, static_split, rebalanced)
    chart = combine(full_asset, static_split, rebalanced, resample_to_daily=resample_to_daily)
    summary = summary_statistics(combined, resolution, risk_free_rate_pct)
    return BacktestResult(combined=combined, chart=chart, summary=summary)


__all__ = ["run_backtest", "NO_DATA_MESSAGE"]
