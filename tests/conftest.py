from __future__ import annotations

from typing import Any

import pytest


class FakeExchange:
    """Stands in for a ccxt async exchange: some data attributes, some coroutines."""

    id = "fakex"

    def __init__(self) -> None:
        self.urls: dict[str, Any] = {"www": ["https://fake.example", "https://mirror.fake.example"]}
        self.headers: dict[str, str] = {"Accept": "application/json"}
        self.timeframes = {"1m": "1", "15m": "15"}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.markets_loaded = False
        self.closed = False

    async def load_markets(self) -> dict[str, Any]:
        self.markets_loaded = True
        return {}

    async def fetch_ohlcv(self, symbol, timeframe="1m", since=None, limit=None, params=None):
        self.calls.append(("fetch_ohlcv", (symbol, timeframe, since, limit)))
        return [[1_500_000_000_000, 1.0, 2.0, 0.5, 1.5, 10.0]]

    fetchOHLCV = fetch_ohlcv

    async def fetch_balance(self, params=None):
        self.calls.append(("fetch_balance", ()))
        return {"BTC": {"free": 1.0, "used": 0.0, "total": 1.0}}

    fetchBalance = fetch_balance

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_exchange() -> FakeExchange:
    return FakeExchange()
