"""Statistics engine tests."""

from __future__ import annotations

import math
from datetime import datetime, timedelta

import numpy as np
import pytest

from basket_backtest import (
    CombinedPoint,
    DegenerateInputError,
    Resolution,
    StrategyKey,
    ValuePoint,
    combine,
    summary_statistics,
)
from basket_backtest.stats import annualized_volatility_pct, max_drawdown_pct, sharpe_ratio, step_returns


def _combined(values, step=timedelta(days=1), start=datetime(2021, 1, 1)):
    return tuple(
        CombinedPoint(timestamp=start + step * i, strategy1=v, strategy2=v, strategy3=v)
        for i, v in enumerate(values)
    )


def test_daily_summary_matches_manual_calculation():
    stats = summary_statistics(_combined([10_000, 11_000, 9_900]))
    assert stats.initial_value == 10_000
    strategy = stats.for_strategy(StrategyKey.FULL_ASSET)
    assert strategy.final_value == 9_900
    assert strategy.total_return_pct == pytest.approx(-1.0)
    # Linear scaling by elapsed years, not CAGR
    assert strategy.annualized_return_pct == pytest.approx(-1.0 / (3 / 365))
    # Returns +10% and -10%: population std is 0.1
    assert strategy.volatility_pct == pytest.approx(0.1 * math.sqrt(365) * 100)
    assert strategy.volatility_pct > 0


def test_daily_summary_omits_drawdown_and_sharpe():
    strategy = summary_statistics(_combined([100, 90, 95])).for_strategy(StrategyKey.STATIC_SPLIT)
    assert strategy.max_drawdown_pct is None
    assert strategy.sharpe_ratio is None


def test_strategies_are_measured_against_the_first_strategy():
    stamps = [datetime(2021, 1, d) for d in (1, 2)]
    combined = combine(
        (ValuePoint(stamps[0], 1_000), ValuePoint(stamps[1], 1_100)),
        (ValuePoint(stamps[0], 1_000), ValuePoint(stamps[1], 1_050)),
        (ValuePoint(stamps[0], 1_000), ValuePoint(stamps[1], 990)),
    )
    stats = summary_statistics(combined)
    assert stats.for_strategy(StrategyKey.FULL_ASSET).total_return_pct == pytest.approx(10)
    assert stats.for_strategy(StrategyKey.STATIC_SPLIT).total_return_pct == pytest.approx(5)
    assert stats.for_strategy(StrategyKey.REBALANCED_SPLIT).total_return_pct == pytest.approx(-1)


def test_hourly_summary_includes_drawdown_and_sharpe():
    values = [100, 120, 90, 130, 117]
    stats = summary_statistics(_combined(values, step=timedelta(hours=1)), Resolution.HOURLY)
    strategy = stats.for_strategy(StrategyKey.FULL_ASSET)
    assert strategy.max_drawdown_pct == pytest.approx(25.0)

    returns = np.array([120 / 100, 90 / 120, 130 / 90, 117 / 130]) - 1
    steps = 365 * 24
    expected_vol = returns.std() * math.sqrt(steps) * 100
    expected_return = ((1 + returns.mean()) ** steps - 1) * 100
    assert strategy.volatility_pct == pytest.approx(expected_vol)
    assert strategy.sharpe_ratio == pytest.approx((expected_return - 2.0) / expected_vol)
    assert strategy.annualized_return_pct == pytest.approx(17 / (5 / steps))


def test_risk_free_rate_is_configurable():
    returns = step_returns([100, 101, 100.5, 102])
    base = sharpe_ratio(returns, 365, 2.0)
    higher_hurdle = sharpe_ratio(returns, 365, 5.0)
    assert higher_hurdle < base
    assert base - higher_hurdle == pytest.approx(3.0 / annualized_volatility_pct(returns, 365))


def test_flat_series_has_nan_sharpe_and_zero_drawdown():
    stats = summary_statistics(_combined([50, 50, 50], step=timedelta(hours=1)), Resolution.HOURLY)
    strategy = stats.for_strategy(StrategyKey.FULL_ASSET)
    assert strategy.volatility_pct == 0
    assert strategy.max_drawdown_pct == 0
    assert math.isnan(strategy.sharpe_ratio)


def test_single_point_has_undefined_volatility():
    stats = summary_statistics(_combined([1_000], step=timedelta(hours=1)), Resolution.HOURLY)
    strategy = stats.for_strategy(StrategyKey.FULL_ASSET)
    assert strategy.total_return_pct == 0
    assert math.isnan(strategy.volatility_pct)
    assert math.isnan(strategy.sharpe_ratio)


def test_empty_trajectory_has_no_statistics():
    assert summary_statistics(()) is None


def test_zero_filled_values_raise_degenerate_error():
    stamps = [datetime(2021, 1, d) for d in (1, 2, 3)]
    combined = combine(
        tuple(ValuePoint(ts, 100.0) for ts in stamps),
        (ValuePoint(stamps[0], 100.0),),
        tuple(ValuePoint(ts, 100.0) for ts in stamps),
    )
    with pytest.raises(DegenerateInputError):
        summary_statistics(combined)


def test_max_drawdown_requires_positive_peak():
    with pytest.raises(DegenerateInputError):
        max_drawdown_pct([0.0, 0.0])
