"""Domain models used by the basket backtest engines."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Mapping, Optional, Protocol, Tuple


class Resolution(str, Enum):
    """Time step of a price series."""

    DAILY = "daily"
    HOURLY = "hourly"

    @property
    def steps_per_year(self) -> int:
        if self is Resolution.HOURLY:
            return 365 * 24
        return 365


class StrategyKey(str, Enum):
    FULL_ASSET = "strategy1"
    STATIC_SPLIT = "strategy2"
    REBALANCED_SPLIT = "strategy3"


class PriceObservation(Protocol):
    """Anything the engines can price: a timestamp and a price."""

    @property
    def timestamp(self) -> datetime:
        ...

    @property
    def price(self) -> float:
        ...


@dataclass(frozen=True)
class PricePoint:
    """Single daily (or close-derived) price observation."""

    timestamp: datetime
    price: float


@dataclass(frozen=True)
class OHLCVBar:
    """Intraday candle; calculations price it at the close."""

    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float

    @property
    def price(self) -> float:
        return self.close


@dataclass(frozen=True)
class StrategyParameters:
    """Inputs shared by the three strategy engines."""

    initial_investment: float
    asset_yield_pct: float = 0.0
    cash_yield_pct: float = 0.0
    rebalance_frequency_per_day: int = 1


@dataclass(frozen=True)
class ValuePoint:
    timestamp: datetime
    value: float


ValueTrajectory = Tuple[ValuePoint, ...]


@dataclass(frozen=True)
class CombinedPoint:
    """Values of the three strategies at one timestamp."""

    timestamp: datetime
    strategy1: float
    strategy2: float
    strategy3: float

    def value(self, key: StrategyKey) -> float:
        """Return the value for ``key``."""

        return getattr(self, StrategyKey(key).value)


CombinedTrajectory = Tuple[CombinedPoint, ...]


@dataclass(frozen=True)
class StrategyStatistics:
    """Performance summary for a single strategy; percentages are already x100."""

    final_value: float
    total_return_pct: float
    annualized_return_pct: float
    volatility_pct: float
    max_drawdown_pct: Optional[float] = None
    sharpe_ratio: Optional[float] = None


@dataclass(frozen=True)
class SummaryStatistics:
    """Read-only snapshot of statistics for all three strategies."""

    resolution: Resolution
    initial_value: float
    strategies: Mapping[StrategyKey, StrategyStatistics] = field(default_factory=dict)

    def for_strategy(self, key: StrategyKey) -> StrategyStatistics:
        return self.strategies[StrategyKey(key)]


@dataclass(frozen=True)
class BacktestResult:
    """Output of a full backtest run."""

    combined: CombinedTrajectory
    chart: CombinedTrajectory
    summary: Optional[SummaryStatistics]


__all__ = [
    "Resolution",
    "StrategyKey",
    "PriceObservation",
    "PricePoint",
    "OHLCVBar",
    "StrategyParameters",
    "ValuePoint",
    "ValueTrajectory",
    "CombinedPoint",
    "CombinedTrajectory",
    "StrategyStatistics",
    "SummaryStatistics",
    "BacktestResult",
]
