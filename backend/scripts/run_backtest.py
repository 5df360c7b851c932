"""Run the basket strategies over a price CSV and print summary statistics."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path

import pandas as pd

from app.core.logging import setup_logging
from app.labels import strategy_labels
from basket_backtest import (
    DegenerateInputError,
    InvalidInputError,
    Resolution,
    StrategyParameters,
    run_backtest,
)
from basket_backtest.config import DEFAULT_INITIAL_INVESTMENT
from basket_backtest.loader import parse_daily_csv, parse_intraday_csv


def summary_frame(result, labels) -> pd.DataFrame:
    rows = []
    for key, stats in result.summary.strategies.items():
        rows.append(
            {
                "strategy": labels[key],
                "final_value": stats.final_value,
                "total_return_pct": stats.total_return_pct,
                "annualized_return_pct": stats.annualized_return_pct,
                "volatility_pct": stats.volatility_pct,
                "max_drawdown_pct": stats.max_drawdown_pct,
                "sharpe_ratio": stats.sharpe_ratio,
            }
        )
    return pd.DataFrame(rows).set_index("strategy")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Backtest basket strategies on a price CSV")
    parser.add_argument("--csv", required=True, type=Path, help="date,price or datetime,OHLCV file")
    parser.add_argument("--resolution", choices=[r.value for r in Resolution], default=Resolution.DAILY.value)
    parser.add_argument("--start", type=date.fromisoformat, default=None)
    parser.add_argument("--end", type=date.fromisoformat, default=None)
    parser.add_argument("--investment", type=float, default=DEFAULT_INITIAL_INVESTMENT)
    parser.add_argument("--asset-yield", type=float, default=0.0, help="Annual asset yield in percent")
    parser.add_argument("--cash-yield", type=float, default=0.0, help="Annual cash yield in percent")
    parser.add_argument("--frequency", type=int, default=1, help="Rebalances per day (hourly data, 1-24)")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    resolution = Resolution(args.resolution)
    if resolution is Resolution.HOURLY:
        series = parse_intraday_csv(args.csv)
    else:
        series = parse_daily_csv(args.csv)

    params = StrategyParameters(
        initial_investment=args.investment,
        asset_yield_pct=args.asset_yield,
        cash_yield_pct=args.cash_yield,
        rebalance_frequency_per_day=args.frequency,
    )
    try:
        result = run_backtest(series, params, resolution, start=args.start, end=args.end)
    except (InvalidInputError, DegenerateInputError) as exc:
        print(exc)
        return 1

    labels = strategy_labels(
        "Asset", "Asset", "Cash", args.asset_yield, args.cash_yield, args.frequency, resolution
    )
    print(f"Initial value: {result.summary.initial_value:,.2f} over {len(result.combined)} observations")
    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 160):
        print(summary_frame(result, labels))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
