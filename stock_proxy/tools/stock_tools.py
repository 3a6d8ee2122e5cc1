"""MCP tools mirroring the stock-data proxy actions."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from mcp.server.fastmcp import FastMCP

from stock_proxy.providers.http import ProviderError
from stock_proxy.runtime.response import to_json
from stock_proxy.services.base import Action, InvalidRequest, StockDataRequest, clean_symbols
from stock_proxy.services.swot_service import SwotNotConfigured

if TYPE_CHECKING:
    from stock_proxy.services.stock_service import StockDataService
    from stock_proxy.services.swot_service import SwotService


def _error_payload(message: str) -> str:
    return json.dumps({"error": message})


async def _run(stocks: StockDataService, request: StockDataRequest) -> str:
    try:
        return to_json(await stocks.execute(request))
    except (InvalidRequest, ProviderError) as error:
        return _error_payload(str(error))


def register_stock_tools(mcp: FastMCP, stocks: StockDataService, swot: SwotService | None = None) -> None:
    @mcp.tool(description="Search tickers and company names matching a free-text query.")
    async def search_stocks(query: str) -> str:
        return await _run(stocks, StockDataRequest(action=Action.SEARCH, query=query))

    @mcp.tool(description="Get quotes for one or more ticker symbols; symbols that fail are omitted.")
    async def get_quotes(symbols: list[str]) -> str:
        try:
            cleaned = clean_symbols(symbols)
        except InvalidRequest as error:
            return _error_payload(str(error))
        return await _run(stocks, StockDataRequest(action=Action.QUOTE, symbols=cleaned))

    @mcp.tool(description="Get five years of monthly OHLCV history for a ticker.")
    async def get_price_history(symbol: str) -> str:
        return await _run(stocks, StockDataRequest(action=Action.HISTORY, symbols=clean_symbols(symbol)))

    @mcp.tool(description="Get the yearly financial statement shell and available valuation ratios for a ticker.")
    async def get_financials(symbol: str) -> str:
        return await _run(stocks, StockDataRequest(action=Action.FINANCIALS, symbols=clean_symbols(symbol)))

    @mcp.tool(description="Get recent news headlines for a ticker.")
    async def get_stock_news(symbol: str) -> str:
        return await _run(stocks, StockDataRequest(action=Action.NEWS, symbols=clean_symbols(symbol)))

    if swot is None:
        return

    @mcp.tool(description="Generate a SWOT analysis for a company.")
    async def get_swot_analysis(
        ticker: str,
        company: str | None = None,
        price: float | None = None,
        change_percent: float | None = None,
        sector: str | None = None,
    ) -> str:
        body = {
            "ticker": ticker,
            "company": company,
            "price": price,
            "changePercent": change_percent,
            "sector": sector,
        }
        try:
            return to_json(await swot.analyze(body))
        except (InvalidRequest, ProviderError, SwotNotConfigured) as error:
            return _error_payload(str(error))
