"""Display labels for the three basket strategies."""

from __future__ import annotations

from basket_backtest.models import Resolution, StrategyKey

REBALANCE_FREQUENCY_OPTIONS: dict[int, str] = {
    1: "Daily (Default)",
    2: "Every 12 hours",
    4: "Every 6 hours",
    6: "Every 4 hours",
    8: "Every 3 hours",
    12: "Every 2 hours",
    24: "Hourly",
}


def _format_pct(value: float) -> str:
    return f"{value:g}%"


def rebalance_label(frequency: int) -> str:
    return f"{frequency}x Daily" if frequency > 1 else "Daily"


def strategy_labels(
    asset_label: str,
    yield_asset_label: str,
    cash_label: str,
    asset_yield_pct: float,
    cash_yield_pct: float,
    rebalance_frequency: int = 1,
    resolution: Resolution = Resolution.DAILY,
) -> dict[StrategyKey, str]:
    """Build the legend names shown next to each strategy.

    Daily series always rebalance once a day, whatever ``rebalance_frequency`` says.
    """

    split = (
        f"50% {yield_asset_label} ({_format_pct(asset_yield_pct)} APY) / "
        f"50% {cash_label} ({_format_pct(cash_yield_pct)} APY)"
    )
    frequency = rebalance_frequency if resolution is Resolution.HOURLY else 1
    return {
        StrategyKey.FULL_ASSET: f"100% {asset_label}",
        StrategyKey.STATIC_SPLIT: split,
        StrategyKey.REBALANCED_SPLIT: f"{split} + ({rebalance_label(frequency)} Rebalance)",
    }


__all__ = ["REBALANCE_FREQUENCY_OPTIONS", "rebalance_label", "strategy_labels"]
