"""Action handlers for the stock-data proxy."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable

from stock_proxy.lib.normalizers import (
    normalize_financials,
    normalize_history,
    normalize_news,
    normalize_quote,
    normalize_search,
)
from stock_proxy.providers.http import ProviderError
from stock_proxy.providers.models import (
    NormalizedFinancials,
    NormalizedHistory,
    NormalizedNewsItem,
    NormalizedQuote,
    NormalizedSearchResult,
)
from stock_proxy.providers.yahoo_finance import (
    FINANCIALS_WINDOW,
    HISTORY_WINDOW,
    QUOTE_WINDOW,
    YahooFinanceClient,
)
from stock_proxy.services.base import Action, StockDataRequest, require_symbol

LOGGER = logging.getLogger(__name__)

Handler = Callable[[StockDataRequest], Awaitable[object]]


class StockDataService:
    def __init__(self, client: YahooFinanceClient, search_limit: int = 15, news_limit: int = 15) -> None:
        self.client = client
        self.search_limit = search_limit
        self.news_limit = news_limit
        self._handlers: dict[Action, Handler] = {
            Action.SEARCH: self._handle_search,
            Action.QUOTE: self._handle_quote,
            Action.HISTORY: self._handle_history,
            Action.FINANCIALS: self._handle_financials,
            Action.NEWS: self._handle_news,
        }
        missing = set(Action) - set(self._handlers)
        if missing:
            raise RuntimeError(f"No handler registered for actions: {sorted(a.value for a in missing)}")

    async def execute(self, request: StockDataRequest) -> object:
        return await self._handlers[request.action](request)

    # ---------------------------------------------------------------- search

    async def search(self, query: str | None) -> list[NormalizedSearchResult]:
        if not query or not query.strip():
            return []
        raw = await self.client.search(query.strip(), limit=self.search_limit)
        results = normalize_search(raw, limit=self.search_limit)
        LOGGER.info("search complete: query=%s results=%s", query, len(results))
        return results

    # ----------------------------------------------------------------- quote

    async def _fetch_quote(self, symbol: str) -> NormalizedQuote | None:
        chart = await self.client.get_chart(symbol, QUOTE_WINDOW)
        if chart is None:
            LOGGER.info("no quote data: symbol=%s", symbol)
            return None
        return normalize_quote(symbol, chart)

    async def get_quotes(self, symbols: list[str]) -> list[NormalizedQuote]:
        """Fetch every symbol concurrently and keep only the ones that succeeded."""
        if not symbols:
            return []
        outcomes = await asyncio.gather(
            *(self._fetch_quote(symbol) for symbol in symbols),
            return_exceptions=True,
        )
        quotes: list[NormalizedQuote] = []
        for symbol, outcome in zip(symbols, outcomes):
            if isinstance(outcome, NormalizedQuote):
                quotes.append(outcome)
            elif isinstance(outcome, ProviderError):
                LOGGER.warning(
                    "quote fetch failed: symbol=%s code=%s status=%s transient=%s",
                    symbol,
                    outcome.code,
                    outcome.status,
                    outcome.transient,
                )
            elif isinstance(outcome, BaseException):
                LOGGER.error("quote fetch unexpected failure: symbol=%s", symbol, exc_info=outcome)
        LOGGER.info("quotes fetched: %s/%s", len(quotes), len(symbols))
        return quotes

    # --------------------------------------------------------------- history

    async def get_history(self, symbol: str) -> NormalizedHistory:
        chart = await self.client.get_chart(symbol, HISTORY_WINDOW)
        history = normalize_history(symbol, chart)
        LOGGER.info("history fetched: symbol=%s points=%s", symbol, len(history.history))
        return history

    # ------------------------------------------------------------ financials

    async def get_financials(self, symbol: str) -> NormalizedFinancials:
        chart = await self.client.get_chart(symbol, FINANCIALS_WINDOW)
        if chart is None:
            LOGGER.info("no financial data: symbol=%s", symbol)
        return normalize_financials(symbol, chart)

    # ------------------------------------------------------------------ news

    async def get_news(self, symbol: str) -> list[NormalizedNewsItem]:
        raw = await self.client.get_news(symbol, limit=self.news_limit)
        items = normalize_news(raw, limit=self.news_limit)
        LOGGER.info("news fetched: symbol=%s items=%s", symbol, len(items))
        return items

    # -------------------------------------------------------------- dispatch

    async def _handle_search(self, request: StockDataRequest) -> object:
        return await self.search(request.query)

    async def _handle_quote(self, request: StockDataRequest) -> object:
        return await self.get_quotes(request.symbols)

    async def _handle_history(self, request: StockDataRequest) -> object:
        return await self.get_history(require_symbol(request))

    async def _handle_financials(self, request: StockDataRequest) -> object:
        return await self.get_financials(require_symbol(request))

    async def _handle_news(self, request: StockDataRequest) -> object:
        return await self.get_news(require_symbol(request))
