"""Registry of bundled price datasets and their default strategy parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from basket_backtest.loader import parse_daily_csv, parse_intraday_csv
from basket_backtest.models import PricePoint, OHLCVBar, Resolution

from app.config import get_settings

logger = logging.getLogger(__name__)


class DatasetNotFoundError(KeyError):
    """Raised when an unknown dataset name is requested."""


@dataclass(frozen=True)
class DatasetSpec:
    name: str
    filename: str
    resolution: Resolution
    asset_label: str
    yield_asset_label: str
    cash_label: str
    asset_yield_pct: float
    cash_yield_pct: float


DATASETS: dict[str, DatasetSpec] = {
    "avalanche": DatasetSpec(
        name="avalanche",
        filename="avalanche.csv",
        resolution=Resolution.DAILY,
        asset_label="AVAX",
        yield_asset_label="sAVAX",
        cash_label="USDC",
        asset_yield_pct=6.0,
        cash_yield_pct=7.0,
    ),
    "bitcoin": DatasetSpec(
        name="bitcoin",
        filename="bitcoin_1hour_complete.csv",
        resolution=Resolution.HOURLY,
        asset_label="BTC",
        yield_asset_label="BTC",
        cash_label="USDC",
        asset_yield_pct=0.3,
        cash_yield_pct=7.0,
    ),
}


def get_dataset(name: str) -> DatasetSpec:
    """Return the dataset registered under ``name``."""

    try:
        return DATASETS[name.strip().lower()]
    except KeyError:
        raise DatasetNotFoundError(f"Unknown dataset '{name}'") from None


def dataset_path(entry: DatasetSpec, data_dir: Path | None = None) -> Path:
    base = data_dir or get_settings().data_dir
    return Path(base) / entry.filename


@lru_cache(maxsize=8)
def load_series(name: str, data_dir: Path | None = None) -> tuple[PricePoint, ...] | tuple[OHLCVBar, ...]:
    """Parse and cache the price file for ``name``."""

    entry = get_dataset(name)
    path = dataset_path(entry, data_dir)
    if not path.exists():
        raise FileNotFoundError(f"Missing price file for {entry.name}: {path}")
    if entry.resolution is Resolution.HOURLY:
        series = parse_intraday_csv(path)
    else:
        series = parse_daily_csv(path)
    logger.info("Loaded %d %s observations for %s", len(series), entry.resolution.value, entry.name)
    return series


__all__ = [
    "DATASETS",
    "DatasetNotFoundError",
    "DatasetSpec",
    "dataset_path",
    "get_dataset",
    "load_series",
]
