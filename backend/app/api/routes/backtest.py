"""Basket backtest endpoints."""

from __future__ import annotations

import logging
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, status
from opentelemetry import trace

from basket_backtest import (
    BacktestResult,
    DegenerateInputError,
    InvalidInputError,
    PricePoint,
    Resolution,
    StrategyKey,
    StrategyParameters,
    run_backtest,
)
from basket_backtest.filters import Bound
from basket_backtest.models import PriceObservation

from app.api.dependencies.settings import get_app_settings
from app.config import AppSettings
from app.datasets import DATASETS, DatasetNotFoundError, dataset_path, get_dataset, load_series
from app.labels import strategy_labels
from app.schemas import (
    BacktestParameters,
    BacktestResponse,
    ChartPointSchema,
    DatasetSchema,
    InlineBacktestRequest,
    StrategyStatisticsSchema,
    SummaryStatisticsSchema,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

router = APIRouter()


def _run(
    series: Sequence[PriceObservation],
    params: BacktestParameters,
    resolution: Resolution,
    asset_yield_pct: float,
    cash_yield_pct: float,
    settings: AppSettings,
    *,
    start: Bound = None,
    end: Bound = None,
) -> BacktestResult:
    strategy_params = StrategyParameters(
        initial_investment=params.initial_investment or settings.default_initial_investment,
        asset_yield_pct=asset_yield_pct,
        cash_yield_pct=cash_yield_pct,
        rebalance_frequency_per_day=params.rebalance_frequency_per_day,
    )
    resample = params.resample_to_daily
    if resample is None:
        resample = resolution is Resolution.HOURLY and settings.resample_intraday_to_daily

    with tracer.start_as_current_span("basket_backtest.run") as span:
        span.set_attribute("backtest.resolution", resolution.value)
        span.set_attribute("backtest.observations", len(series))
        try:
            return run_backtest(
                series,
                strategy_params,
                resolution,
                start=start,
                end=end,
                resample_to_daily=resample,
                risk_free_rate_pct=settings.risk_free_rate_pct,
            )
        except (InvalidInputError, DegenerateInputError) as exc:
            logger.info("Backtest rejected: %s", exc)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _to_response(
    result: BacktestResult,
    resolution: Resolution,
    labels: dict[StrategyKey, str],
    dataset: str | None = None,
) -> BacktestResponse:
    summary = result.summary
    if summary is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No results to summarise.")
    return BacktestResponse(
        dataset=dataset,
        resolution=resolution,
        observations=len(result.combined),
        chart=[
            ChartPointSchema(
                timestamp=point.timestamp,
                strategy1=point.strategy1,
                strategy2=point.strategy2,
                strategy3=point.strategy3,
            )
            for point in result.chart
        ],
        summary=SummaryStatisticsSchema(
            initial_value=summary.initial_value,
            strategies={
                key.value: StrategyStatisticsSchema(
                    label=labels[key],
                    final_value=stats.final_value,
                    total_return_pct=stats.total_return_pct,
                    annualized_return_pct=stats.annualized_return_pct,
                    volatility_pct=stats.volatility_pct,
                    max_drawdown_pct=stats.max_drawdown_pct,
                    sharpe_ratio=stats.sharpe_ratio,
                )
                for key, stats in summary.strategies.items()
            },
        ),
    )


@router.get("/datasets", response_model=list[DatasetSchema])
async def list_datasets(settings: AppSettings = Depends(get_app_settings)) -> list[DatasetSchema]:
    """List bundled price datasets and whether their files are present."""

    return [
        DatasetSchema(
            name=entry.name,
            resolution=entry.resolution,
            asset_label=entry.asset_label,
            cash_label=entry.cash_label,
            asset_yield_pct=entry.asset_yield_pct,
            cash_yield_pct=entry.cash_yield_pct,
            available=dataset_path(entry, settings.data_dir).exists(),
        )
        for entry in DATASETS.values()
    ]


@router.post("/datasets/{name}", response_model=BacktestResponse)
async def run_dataset_backtest(
    name: str,
    params: BacktestParameters,
    settings: AppSettings = Depends(get_app_settings),
) -> BacktestResponse:
    """Run the three strategies over a bundled dataset."""

    try:
        entry = get_dataset(name)
    except DatasetNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown dataset '{name}'") from exc
    try:
        series = load_series(entry.name, settings.data_dir)
    except FileNotFoundError as exc:
        logger.error("Price file unavailable for %s: %s", entry.name, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Price data for {entry.name} is not available.",
        ) from exc
    if not series:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"No price data available for {entry.name}.",
        )

    asset_yield = entry.asset_yield_pct if params.asset_yield_pct is None else params.asset_yield_pct
    cash_yield = entry.cash_yield_pct if params.cash_yield_pct is None else params.cash_yield_pct
    result = _run(
        series,
        params,
        entry.resolution,
        asset_yield,
        cash_yield,
        settings,
        start=params.start_date or settings.min_date,
        end=params.end_date or settings.max_date,
    )
    labels = strategy_labels(
        entry.asset_label,
        entry.yield_asset_label,
        entry.cash_label,
        asset_yield,
        cash_yield,
        params.rebalance_frequency_per_day,
        entry.resolution,
    )
    return _to_response(result, entry.resolution, labels, dataset=entry.name)


@router.post("/run", response_model=BacktestResponse)
async def run_inline_backtest(
    request: InlineBacktestRequest,
    settings: AppSettings = Depends(get_app_settings),
) -> BacktestResponse:
    """Run the three strategies over a caller-supplied price series."""

    series = [PricePoint(timestamp=item.timestamp, price=item.price) for item in request.series]
    asset_yield = request.asset_yield_pct or 0.0
    cash_yield = request.cash_yield_pct or 0.0
    result = _run(
        series,
        request,
        request.resolution,
        asset_yield,
        cash_yield,
        settings,
        start=request.start_date,
        end=request.end_date,
    )
    labels = strategy_labels(
        "Asset",
        "Asset",
        "Cash",
        asset_yield,
        cash_yield,
        request.rebalance_frequency_per_day,
        request.resolution,
    )
    return _to_response(result, request.resolution, labels)


__all__ = ["router"]
