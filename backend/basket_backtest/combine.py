"""Combine per-strategy trajectories into a single aligned series."""
from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Sequence

from .models import CombinedPoint, CombinedTrajectory, ValuePoint

logger = logging.getLogger(__name__)


def _value_at(trajectory: Sequence[ValuePoint], index: int) -> float:
    if index < len(trajectory):
        return trajectory[index].value
    return 0.0


def resample_daily(combined: Sequence[CombinedPoint]) -> CombinedTrajectory:
    """Keep the last combined record of each calendar day, in day order."""

    by_day: Dict[date, CombinedPoint] = {}
    for point in combined:
        by_day[point.timestamp.date()] = point
    return tuple(by_day[day] for day in sorted(by_day))


def combine(
    strategy1: Sequence[ValuePoint],
    strategy2: Sequence[ValuePoint],
    strategy3: Sequence[ValuePoint],
    resample_to_daily: bool = False,
) -> CombinedTrajectory:
    """Align three trajectories by position.

    ``strategy1`` drives the timeline. Positions missing from the other two
    trajectories are filled with ``0.0`` rather than rejected.
    """

    if not strategy1:
        return ()

    if len(strategy2) != len(strategy1) or len(strategy3) != len(strategy1):
        logger.debug(
            "Combining trajectories of unequal length (%d, %d, %d); missing values become 0",
            len(strategy1),
            len(strategy2),
            len(strategy3),
        )

    combined = tuple(
        CombinedPoint(
            timestamp=point.timestamp,
            strategy1=point.value,
            strategy2=_value_at(strategy2, index),
            strategy3=_value_at(strategy3, index),
        )
        for index, point in enumerate(strategy1)
    )
    if resample_to_daily:
        return resample_daily(combined)
    return combined


__all__ = ["combine", "resample_daily"]
