"""Schemas for basket backtest requests and results."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from basket_backtest.models import Resolution


def _finite_or_none(value: float | None) -> float | None:
    if value is None or math.isnan(value) or math.isinf(value):
        return None
    return value


class BacktestParameters(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    initial_investment: Optional[float] = Field(default=None, gt=0)
    asset_yield_pct: Optional[float] = Field(default=None, gt=-100)
    cash_yield_pct: Optional[float] = Field(default=None, gt=-100)
    rebalance_frequency_per_day: int = Field(1, ge=1, le=24)
    resample_to_daily: Optional[bool] = None

    @model_validator(mode="after")
    def _check_range(self) -> "BacktestParameters":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PriceObservationSchema(BaseModel):
    timestamp: datetime
    price: float = Field(..., gt=0)


class InlineBacktestRequest(BacktestParameters):
    resolution: Resolution = Resolution.DAILY
    series: list[PriceObservationSchema] = Field(..., min_length=1)

    @field_validator("series")
    @classmethod
    def _sorted_unique(cls, series: list[PriceObservationSchema]) -> list[PriceObservationSchema]:
        if len({obs.timestamp.tzinfo is None for obs in series}) > 1:
            raise ValueError("series must not mix naive and timezone-aware timestamps")
        for prev, curr in zip(series, series[1:]):
            if curr.timestamp <= prev.timestamp:
                raise ValueError("series must be strictly increasing in timestamp")
        return series


class ChartPointSchema(BaseModel):
    timestamp: datetime
    strategy1: float
    strategy2: float
    strategy3: float


class StrategyStatisticsSchema(BaseModel):
    label: str
    final_value: float
    total_return_pct: Optional[float]
    annualized_return_pct: Optional[float]
    volatility_pct: Optional[float]
    max_drawdown_pct: Optional[float] = None
    sharpe_ratio: Optional[float] = None

    @field_validator(
        "total_return_pct",
        "annualized_return_pct",
        "volatility_pct",
        "max_drawdown_pct",
        "sharpe_ratio",
        mode="before",
    )
    @classmethod
    def _nan_to_none(cls, value: float | None) -> float | None:
        return _finite_or_none(value)


class SummaryStatisticsSchema(BaseModel):
    initial_value: float
    strategies: dict[str, StrategyStatisticsSchema]


class BacktestResponse(BaseModel):
    dataset: Optional[str] = None
    resolution: Resolution
    observations: int
    chart: list[ChartPointSchema]
    summary: SummaryStatisticsSchema


class DatasetSchema(BaseModel):
    name: str
    resolution: Resolution
    asset_label: str
    cash_label: str
    asset_yield_pct: float
    cash_yield_pct: float
    available: bool


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
