"""Core package for the basket strategy backtest calculator."""

from .combine import combine
from .errors import DegenerateInputError, InvalidInputError
from .models import (
    BacktestResult,
    CombinedPoint,
    OHLCVBar,
    PricePoint,
    Resolution,
    StrategyKey,
    StrategyParameters,
    StrategyStatistics,
    SummaryStatistics,
    ValuePoint,
)
from .pipeline import run_backtest
from .stats import summary_statistics
from .strategies import (
    full_asset_performance,
    rebalanced_split_performance,
    static_split_performance,
)

__all__ = [
    "BacktestResult",
    "CombinedPoint",
    "DegenerateInputError",
    "InvalidInputError",
    "OHLCVBar",
    "PricePoint",
    "Resolution",
    "StrategyKey",
    "StrategyParameters",
    "StrategyStatistics",
    "SummaryStatistics",
    "ValuePoint",
    "combine",
    "full_asset_performance",
    "rebalanced_split_performance",
    "run_backtest",
    "static_split_performance",
    "summary_statistics",
]
