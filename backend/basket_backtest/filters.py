"""Date range filtering for price series."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Optional, Sequence, TypeVar, Union

from .errors import InvalidInputError
from .models import PriceObservation

T = TypeVar("T", bound=PriceObservation)

Bound = Union[date, datetime, None]


def _as_datetime(bound: Bound, *, end: bool) -> Optional[datetime]:
    if bound is None:
        return None
    if isinstance(bound, datetime):
        return bound
    # A bare date as the upper bound includes the whole day.
    return datetime.combine(bound, time.max if end else time.min)


def _comparable(bound: datetime, reference: datetime) -> datetime:
    """Align ``bound`` with the timezone convention of ``reference``.

    A naive bound is read as wall-clock time in the reference's timezone.
    Naive series timestamps are treated as UTC, so an aware bound is
    converted to UTC before its offset is dropped.
    """

    if reference.tzinfo is not None and bound.tzinfo is None:
        return bound.replace(tzinfo=reference.tzinfo)
    if reference.tzinfo is None and bound.tzinfo is not None:
        return bound.astimezone(timezone.utc).replace(tzinfo=None)
    return bound


def filter_by_range(series: Sequence[T], start: Bound = None, end: Bound = None) -> tuple[T, ...]:
    """Return the observations whose timestamp lies within ``[start, end]``."""

    start_dt = _as_datetime(start, end=False)
    end_dt = _as_datetime(end, end=True)
    if start_dt is not None and end_dt is not None and _comparable(start_dt, end_dt) > end_dt:
        raise InvalidInputError(f"Start {start} is after end {end}")
    if not series:
        return ()

    reference = series[0].timestamp
    if start_dt is not None:
        start_dt = _comparable(start_dt, reference)
    if end_dt is not None:
        end_dt = _comparable(end_dt, reference)

    return tuple(
        obs
        for obs in series
        if (start_dt is None or obs.timestamp >= start_dt)
        and (end_dt is None or obs.timestamp <= end_dt)
    )


__all__ = ["filter_by_range"]
