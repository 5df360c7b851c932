"""Pydantic schema exports."""

from .backtest import (
    BacktestParameters,
    BacktestResponse,
    ChartPointSchema,
    DatasetSchema,
    InlineBacktestRequest,
    PriceObservationSchema,
    StrategyStatisticsSchema,
    SummaryStatisticsSchema,
)

__all__ = [
    "BacktestParameters",
    "BacktestResponse",
    "ChartPointSchema",
    "DatasetSchema",
    "InlineBacktestRequest",
    "PriceObservationSchema",
    "StrategyStatisticsSchema",
    "SummaryStatisticsSchema",
]
