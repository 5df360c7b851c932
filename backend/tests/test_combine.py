"""Combiner tests."""

from __future__ import annotations

from datetime import datetime

from basket_backtest import ValuePoint, combine
from basket_backtest.models import StrategyKey


def _trajectory(values, timestamps):
    return tuple(ValuePoint(timestamp=ts, value=v) for ts, v in zip(timestamps, values))


DAYS = [datetime(2021, 1, d) for d in (1, 2, 3)]


def test_combine_aligns_by_position():
    combined = combine(
        _trajectory([1, 2, 3], DAYS),
        _trajectory([4, 5, 6], DAYS),
        _trajectory([7, 8, 9], DAYS),
    )
    assert len(combined) == 3
    assert combined[1].timestamp == DAYS[1]
    assert (combined[1].strategy1, combined[1].strategy2, combined[1].strategy3) == (2, 5, 8)
    assert combined[2].value(StrategyKey.REBALANCED_SPLIT) == 9


def test_missing_values_are_zero_filled():
    combined = combine(
        _trajectory([1, 2, 3], DAYS),
        _trajectory([4], DAYS),
        (),
    )
    assert [p.strategy2 for p in combined] == [4, 0.0, 0.0]
    assert [p.strategy3 for p in combined] == [0.0, 0.0, 0.0]


def test_first_trajectory_drives_length():
    combined = combine(
        _trajectory([1, 2], DAYS),
        _trajectory([4, 5, 6], DAYS),
        _trajectory([7, 8, 9], DAYS),
    )
    assert len(combined) == 2


def test_empty_first_trajectory_gives_empty_result():
    assert combine((), _trajectory([1], DAYS), _trajectory([1], DAYS)) == ()


def test_resample_keeps_last_record_of_each_day():
    stamps = [
        datetime(2024, 1, 1, 9),
        datetime(2024, 1, 1, 17),
        datetime(2024, 1, 2, 3),
    ]
    combined = combine(
        _trajectory([10, 11, 12], stamps),
        _trajectory([20, 21, 22], stamps),
        _trajectory([30, 31, 32], stamps),
        resample_to_daily=True,
    )
    assert len(combined) == 2
    first_day, second_day = combined
    assert first_day.timestamp == datetime(2024, 1, 1, 17)
    assert (first_day.strategy1, first_day.strategy2, first_day.strategy3) == (11, 21, 31)
    assert second_day.strategy1 == 12


def test_resample_without_flag_keeps_every_record():
    stamps = [datetime(2024, 1, 1, 9), datetime(2024, 1, 1, 17)]
    combined = combine(
        _trajectory([10, 11], stamps),
        _trajectory([20, 21], stamps),
        _trajectory([30, 31], stamps),
    )
    assert len(combined) == 2
