from datetime import date

import pytest

from basket_backtest import (
    InvalidInputError,
    Resolution,
    StrategyKey,
    StrategyParameters,
    run_backtest,
)
from basket_backtest.config import get_risk_free_rate_pct
from basket_backtest.loader import to_price_points
from basket_backtest.pipeline import NO_DATA_MESSAGE


def test_daily_backtest_matches_engine_outputs(three_day_series):
    result = run_backtest(three_day_series, StrategyParameters(initial_investment=10_000))
    assert len(result.combined) == 3
    assert result.chart == result.combined
    assert [p.strategy1 for p in result.combined] == pytest.approx([10_000, 11_000, 10_000])
    assert [p.strategy2 for p in result.combined] == pytest.approx([10_000, 10_500, 10_000])
    summary = result.summary
    assert summary.resolution is Resolution.DAILY
    assert summary.initial_value == pytest.approx(10_000)
    assert summary.for_strategy(StrategyKey.FULL_ASSET).total_return_pct == pytest.approx(0)


def test_hourly_backtest_resamples_chart_but_not_statistics(hourly_bars, wavy_prices):
    bars = hourly_bars(wavy_prices(48))
    params = StrategyParameters(
        initial_investment=10_000,
        asset_yield_pct=0.3,
        cash_yield_pct=7,
        rebalance_frequency_per_day=6,
    )
    result = run_backtest(bars, params, Resolution.HOURLY)
    assert len(result.combined) == 48
    assert len(result.chart) == 2
    assert result.chart[-1] == result.combined[-1]
    stats = result.summary.for_strategy(StrategyKey.REBALANCED_SPLIT)
    assert stats.max_drawdown_pct is not None
    assert stats.sharpe_ratio is not None


def test_close_prices_drive_hourly_results(hourly_bars, wavy_prices):
    bars = hourly_bars(wavy_prices(30))
    params = StrategyParameters(initial_investment=1_000, rebalance_frequency_per_day=4)
    from_bars = run_backtest(bars, params, Resolution.HOURLY)
    from_points = run_backtest(to_price_points(bars), params, Resolution.HOURLY)
    assert from_bars.combined == from_points.combined


def test_date_range_is_applied(daily_series):
    series = daily_series([100, 120, 90, 80])
    result = run_backtest(
        series,
        StrategyParameters(initial_investment=500),
        start=date(2021, 1, 2),
        end=date(2021, 1, 3),
    )
    assert len(result.combined) == 2
    assert result.combined[0].strategy1 == pytest.approx(500)
    assert result.combined[1].strategy1 == pytest.approx(375)


def test_empty_range_raises_invalid_input(daily_series):
    with pytest.raises(InvalidInputError, match=NO_DATA_MESSAGE):
        run_backtest(
            daily_series([1, 2]),
            StrategyParameters(initial_investment=100),
            start=date(2030, 1, 1),
        )


@pytest.mark.parametrize("investment", [0, -5])
def test_non_positive_investment_raises_invalid_input(three_day_series, investment):
    with pytest.raises(InvalidInputError):
        run_backtest(three_day_series, StrategyParameters(initial_investment=investment))


def test_risk_free_rate_defaults_from_environment(monkeypatch, hourly_bars, wavy_prices):
    bars = hourly_bars(wavy_prices(24))
    params = StrategyParameters(initial_investment=1_000)
    explicit = run_backtest(bars, params, Resolution.HOURLY, risk_free_rate_pct=4.0)

    monkeypatch.setenv("BASKET_RISK_FREE_RATE_PCT", "4.0")
    get_risk_free_rate_pct.cache_clear()
    try:
        from_env = run_backtest(bars, params, Resolution.HOURLY)
    finally:
        get_risk_free_rate_pct.cache_clear()
    assert from_env.summary == explicit.summary
