import asyncio
import inspect
import pathlib
import sys
from datetime import datetime, timedelta

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from basket_backtest.models import OHLCVBar, PricePoint  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            kwargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
            loop.run_until_complete(test_function(**kwargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


def _daily_series(prices, start: datetime = datetime(2021, 1, 1)) -> tuple[PricePoint, ...]:
    return tuple(
        PricePoint(timestamp=start + timedelta(days=i), price=float(p)) for i, p in enumerate(prices)
    )


def _hourly_bars(prices, start: datetime = datetime(2024, 1, 1)) -> tuple[OHLCVBar, ...]:
    return tuple(
        OHLCVBar(
            timestamp=start + timedelta(hours=i),
            open=float(p),
            high=float(p) + 1,
            low=float(p) - 1,
            close=float(p),
            volume=10.0,
        )
        for i, p in enumerate(prices)
    )


@pytest.fixture()
def daily_series():
    """Factory building a daily series starting 2021-01-01."""

    return _daily_series


@pytest.fixture()
def hourly_bars():
    """Factory building hourly bars starting 2024-01-01 00:00."""

    return _hourly_bars


@pytest.fixture()
def wavy_prices():
    """Factory for deterministic, non-monotonic positive prices."""

    def _make(count: int) -> list[float]:
        return [100 + (i % 5) * 3 - (i % 3) * 4 for i in range(count)]

    return _make


@pytest.fixture()
def three_day_series() -> tuple[PricePoint, ...]:
    return _daily_series([100, 110, 100])
