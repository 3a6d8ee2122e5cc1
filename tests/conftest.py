from __future__ import annotations

from typing import Callable

import pytest

from stock_proxy.providers.http import UpstreamFetcher
from stock_proxy.providers.yahoo_finance import YahooFinanceClient
from stock_proxy.services.stock_service import StockDataService
from tests.fakes import FakeTransport, Responder, SleepRecorder


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_service(sleeps: SleepRecorder) -> Callable[[Responder], tuple[StockDataService, FakeTransport]]:
    def _make(responder: Responder) -> tuple[StockDataService, FakeTransport]:
        transport = FakeTransport(responder)
        fetcher = UpstreamFetcher(transport, provider="yahoo", user_agent="test-agent", sleep=sleeps)
        client = YahooFinanceClient(fetcher)
        return StockDataService(client, search_limit=15, news_limit=15), transport

    return _make
