"""CSV loaders producing price series for the strategy engines."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, List, Sequence, Union

import pandas as pd

from .models import OHLCVBar, PricePoint

logger = logging.getLogger(__name__)

# A filesystem path or an open text buffer.
CsvSource = Union[str, Path, IO[str]]

DAILY_COLUMNS = ("date", "price")
INTRADAY_COLUMNS = ("datetime", "open", "high", "low", "close", "volume")


def _read_frame(source: CsvSource, time_column: str, numeric_columns: Sequence[str]) -> pd.DataFrame:
    try:
        df = pd.read_csv(source, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()

    df.columns = [str(c).strip().lower() for c in df.columns]
    required = {time_column, *numeric_columns}
    missing = required - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {sorted(missing)}")

    df[time_column] = pd.to_datetime(df[time_column], errors="coerce")
    for column in numeric_columns:
        df[column] = pd.to_numeric(df[column], errors="coerce")

    before = len(df)
    df = (
        df.dropna(subset=[time_column, *numeric_columns])
        .drop_duplicates(subset=[time_column], keep="last")
        .sort_values(time_column)
        .reset_index(drop=True)
    )
    if len(df) != before:
        logger.info("Dropped %d malformed or duplicate rows", before - len(df))
    return df


def parse_daily_csv(source: CsvSource) -> tuple[PricePoint, ...]:
    """Load a ``date,price`` CSV into chronologically ordered price points."""

    df = _read_frame(source, "date", ["price"])
    if df.empty:
        return ()
    return tuple(
        PricePoint(timestamp=ts.to_pydatetime(), price=float(price))
        for ts, price in zip(df["date"], df["price"])
    )


def parse_intraday_csv(source: CsvSource) -> tuple[OHLCVBar, ...]:
    """Load a ``datetime,open,high,low,close,volume`` CSV into hourly bars."""

    df = _read_frame(source, "datetime", list(INTRADAY_COLUMNS[1:]))
    if df.empty:
        return ()
    return tuple(
        OHLCVBar(
            timestamp=row.datetime.to_pydatetime(),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=float(row.volume),
        )
        for row in df.itertuples(index=False)
    )


def to_price_points(bars: Iterable[OHLCVBar]) -> tuple[PricePoint, ...]:
    """Price intraday bars at their close."""

    return tuple(PricePoint(timestamp=bar.timestamp, price=bar.close) for bar in bars)


def group_hourly_to_daily(bars: Iterable[OHLCVBar]) -> tuple[OHLCVBar, ...]:
    """Aggregate intraday bars into one candle per calendar day."""

    candles: List[OHLCVBar] = []
    for bar in bars:
        day_start = bar.timestamp.replace(hour=0, minute=0, second=0, microsecond=0)
        if candles and candles[-1].timestamp == day_start:
            current = candles[-1]
            candles[-1] = OHLCVBar(
                timestamp=day_start,
                open=current.open,
                high=max(current.high, bar.high),
                low=min(current.low, bar.low),
                close=bar.close,
                volume=current.volume + bar.volume,
            )
        else:
            candles.append(
                OHLCVBar(
                    timestamp=day_start,
                    open=bar.open,
                    high=bar.high,
                    low=bar.low,
                    close=bar.close,
                    volume=bar.volume,
                )
            )
    return tuple(candles)


__all__ = [
    "parse_daily_csv",
    "parse_intraday_csv",
    "to_price_points",
    "group_hourly_to_daily",
    "DAILY_COLUMNS",
    "INTRADAY_COLUMNS",
]
