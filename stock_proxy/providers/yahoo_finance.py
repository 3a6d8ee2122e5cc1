"""Yahoo Finance chart and search adapter."""

from __future__ import annotations

from urllib.parse import quote, urlencode

from stock_proxy.providers.http import UpstreamFetcher
from stock_proxy.providers.yahoo_schema import RawChart, RawSearch, parse_chart, parse_search

QUOTE_WINDOW = {"interval": "1d", "range": "5d", "includePrePost": "false"}
HISTORY_WINDOW = {"interval": "1mo", "range": "5y"}
FINANCIALS_WINDOW = {"interval": "1d", "range": "5y"}


class YahooFinanceClient:
    def __init__(
        self,
        fetcher: UpstreamFetcher,
        chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart",
        search_url: str = "https://query1.finance.yahoo.com/v1/finance/search",
    ) -> None:
        self.fetcher = fetcher
        self.chart_url = chart_url.rstrip("/")
        self.search_url = search_url

    def chart_url_for(self, symbol: str, window: dict[str, str]) -> str:
        return f"{self.chart_url}/{quote(symbol, safe='')}?{urlencode(window)}"

    async def get_chart(self, symbol: str, window: dict[str, str]) -> RawChart | None:
        data = await self.fetcher.fetch_json(self.chart_url_for(symbol, window))
        return parse_chart(data)

    async def search(self, query: str, limit: int = 15) -> RawSearch:
        params = {
            "q": query,
            "quotesCount": limit,
            "newsCount": 0,
            "enableFuzzyQuery": "false",
            "quotesQueryId": "tss_match_phrase_query",
        }
        data = await self.fetcher.fetch_json(f"{self.search_url}?{urlencode(params)}")
        return parse_search(data)

    async def get_news(self, symbol: str, limit: int = 15) -> RawSearch:
        params = {"q": symbol, "quotesCount": 0, "newsCount": limit}
        data = await self.fetcher.fetch_json(f"{self.search_url}?{urlencode(params)}")
        return parse_search(data)
