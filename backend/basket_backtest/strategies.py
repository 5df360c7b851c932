"""Strategy engines turning a price series into portfolio value trajectories.

Each engine is a pure function: it reads the series and parameters and
returns a fresh tuple of :class:`ValuePoint`. Empty series and non-positive
investments degrade to an empty trajectory instead of raising, so callers
must check for ``()`` before computing statistics.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Sequence

from .errors import DegenerateInputError, InvalidInputError
from .models import PriceObservation, Resolution, ValuePoint, ValueTrajectory

logger = logging.getLogger(__name__)

MIN_REBALANCE_FREQUENCY = 1
MAX_REBALANCE_FREQUENCY = 24

RebalanceRule = Callable[[int, PriceObservation], bool]


def step_rate(annual_pct: float, steps_per_year: int) -> float:
    """Convert an annual percentage yield into a compounded per-step rate."""

    if annual_pct <= -100:
        raise InvalidInputError(f"Annual yield must be above -100%, got {annual_pct}")
    return (1 + annual_pct / 100) ** (1 / steps_per_year) - 1


def _can_run(series: Sequence[PriceObservation], initial_investment: float | None) -> bool:
    if not series or not initial_investment or initial_investment <= 0:
        return False
    for obs in series:
        if obs.price <= 0:
            raise DegenerateInputError(
                f"Non-positive price {obs.price} at {obs.timestamp.isoformat()}"
            )
    return True


def normalize_rebalance_frequency(frequency: int | None) -> int:
    """Return ``frequency`` if within 1..24, otherwise fall back to once a day."""

    if frequency is None:
        return MIN_REBALANCE_FREQUENCY
    if MIN_REBALANCE_FREQUENCY <= frequency <= MAX_REBALANCE_FREQUENCY:
        return frequency
    return MIN_REBALANCE_FREQUENCY


def rebalance_rule(resolution: Resolution, frequency: int | None = 1) -> RebalanceRule:
    """Build the predicate deciding whether step ``index`` triggers a rebalance.

    Daily series rebalance on every step. Hourly series with one rebalance a
    day count observations (every 24th index); higher frequencies look at the
    hour of day instead and skip an hour that already triggered.
    """

    if resolution is Resolution.DAILY:
        return lambda index, obs: True

    frequency = normalize_rebalance_frequency(frequency)
    if frequency == 1:
        return lambda index, obs: index % 24 == 0

    hours_between = 24 / frequency
    last_rebalance_hour = 0

    def _by_hour_of_day(index: int, obs: PriceObservation) -> bool:
        nonlocal last_rebalance_hour
        hour = obs.timestamp.hour
        if hour % hours_between == 0 and hour != last_rebalance_hour:
            last_rebalance_hour = hour
            return True
        return False

    return _by_hour_of_day


def full_asset_performance(
    series: Sequence[PriceObservation],
    initial_investment: float | None,
) -> ValueTrajectory:
    """Value of the whole investment held in the asset."""

    if not _can_run(series, initial_investment):
        return ()
    units = initial_investment / series[0].price
    return tuple(ValuePoint(timestamp=obs.timestamp, value=units * obs.price) for obs in series)


def static_split_performance(
    series: Sequence[PriceObservation],
    initial_investment: float | None,
    asset_yield_pct: float = 0.0,
    cash_yield_pct: float = 0.0,
    resolution: Resolution = Resolution.DAILY,
) -> ValueTrajectory:
    """50/50 asset/cash split where each leg compounds its own yield and never rebalances."""

    if not _can_run(series, initial_investment):
        return ()

    asset_rate = step_rate(asset_yield_pct, resolution.steps_per_year)
    cash_rate = step_rate(cash_yield_pct, resolution.steps_per_year)

    half = initial_investment / 2
    asset_units = half / series[0].price
    cash_value = half

    points: List[ValuePoint] = []
    for index, obs in enumerate(series):
        if index > 0:
            # Yield accrues in units, so the asset leg still tracks the price.
            asset_units *= 1 + asset_rate
            cash_value *= 1 + cash_rate
        points.append(ValuePoint(timestamp=obs.timestamp, value=asset_units * obs.price + cash_value))
    return tuple(points)


def rebalanced_split_performance(
    series: Sequence[PriceObservation],
    initial_investment: float | None,
    asset_yield_pct: float = 0.0,
    cash_yield_pct: float = 0.0,
    rebalance_frequency_per_day: int | None = 1,
    resolution: Resolution = Resolution.DAILY,
) -> ValueTrajectory:
    """50/50 asset/cash split reset to equal legs whenever the rebalance rule fires."""

    if not _can_run(series, initial_investment):
        return ()

    asset_rate = step_rate(asset_yield_pct, resolution.steps_per_year)
    cash_rate = step_rate(cash_yield_pct, resolution.steps_per_year)
    should_rebalance = rebalance_rule(resolution, rebalance_frequency_per_day)

    total_value = float(initial_investment)
    asset_value = total_value / 2
    cash_value = total_value / 2
    rebalances = 0

    points: List[ValuePoint] = []
    for index, obs in enumerate(series):
        if index > 0:
            asset_units = asset_value / series[index - 1].price
            asset_value = asset_units * obs.price * (1 + asset_rate)
            cash_value *= 1 + cash_rate
            total_value = asset_value + cash_value

            if should_rebalance(index, obs):
                asset_value = cash_value = total_value / 2
                rebalances += 1
        points.append(ValuePoint(timestamp=obs.timestamp, value=total_value))

    logger.debug(
        "Rebalanced split over %d %s steps: %d rebalances",
        len(series),
        resolution.value,
        rebalances,
    )
    return tuple(points)


__all__ = [
    "full_asset_performance",
    "static_split_performance",
    "rebalanced_split_performance",
    "rebalance_rule",
    "normalize_rebalance_frequency",
    "step_rate",
]
