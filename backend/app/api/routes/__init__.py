"""Route registration helpers."""

from __future__ import annotations

from fastapi import APIRouter

from .backtest import router as backtest_router

api_router = APIRouter()
api_router.include_router(backtest_router, prefix="/backtest", tags=["backtest"])

__all__ = ["api_router"]
