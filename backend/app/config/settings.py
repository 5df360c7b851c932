"""Application configuration and environment helpers."""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from basket_backtest.config import DEFAULT_INITIAL_INVESTMENT, DEFAULT_RISK_FREE_RATE_PCT

DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"


class AppSettings(BaseSettings):
    """Configuration options for the basket backtest service."""

    app_name: str = Field(default="Basket Strategy Backtester")
    log_level: str = Field(default="INFO")

    data_dir: Path = Field(
        default=DEFAULT_DATA_DIR,
        description="Directory holding the bundled price CSV files.",
    )

    default_initial_investment: float = Field(default=DEFAULT_INITIAL_INVESTMENT, gt=0)
    min_date: date = Field(default=date(2021, 1, 1))
    max_date: date = Field(default=date(2025, 1, 1))

    risk_free_rate_pct: float = Field(
        default=DEFAULT_RISK_FREE_RATE_PCT,
        description="Annual risk-free rate used for Sharpe ratios, in percent.",
    )
    resample_intraday_to_daily: bool = Field(
        default=True,
        description="Reduce hourly chart series to one point per day.",
    )

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="basket-backtest")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"telemetry_otlp_endpoint"}
        return {k: ("***" if k in hidden and v else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_DATA_DIR",
    "get_settings",
]
