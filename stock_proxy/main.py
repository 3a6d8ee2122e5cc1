"""Application entrypoint for the stock-data proxy server."""

from __future__ import annotations

import asyncio
import logging
import os

from mcp.server.fastmcp import FastMCP

from stock_proxy.config.settings import Settings, get_settings
from stock_proxy.providers.anthropic_client import AnthropicClient
from stock_proxy.providers.http import HttpTransport, RequestsTransport, UpstreamFetcher
from stock_proxy.providers.yahoo_finance import YahooFinanceClient
from stock_proxy.runtime.monitoring import ServerMetrics
from stock_proxy.runtime.routes import ProxyRoutes
from stock_proxy.services.stock_service import StockDataService
from stock_proxy.services.swot_service import SwotService
from stock_proxy.tools.stock_tools import register_stock_tools

LOGGER = logging.getLogger(__name__)


def resolve_transport_mode(configured_mode: str) -> str:
    if configured_mode in {"stdio", "http"}:
        return configured_mode
    if os.getenv("RENDER") or os.getenv("PORT"):
        return "http"
    return "stdio"


def resolve_http_transport(configured_transport: str) -> str:
    if configured_transport in {"sse", "streamable"}:
        return configured_transport
    return "sse"


def build_stock_service(settings: Settings, transport: HttpTransport | None = None) -> StockDataService:
    fetcher = UpstreamFetcher(
        transport=transport or RequestsTransport(),
        provider="yahoo",
        user_agent=settings.upstream_user_agent,
        timeout_seconds=settings.request_timeout_seconds,
        max_attempts=settings.upstream_max_attempts,
        rate_limit_backoff_seconds=settings.rate_limit_backoff_seconds,
        network_backoff_seconds=settings.network_backoff_seconds,
    )
    client = YahooFinanceClient(fetcher, chart_url=settings.yahoo_chart_url, search_url=settings.yahoo_search_url)
    return StockDataService(client, search_limit=settings.search_result_limit, news_limit=settings.news_limit)


def build_swot_service(settings: Settings) -> SwotService:
    client = (
        AnthropicClient(settings.claude_api_key, settings.claude_model, settings.request_timeout_seconds)
        if settings.claude_api_key and settings.swot_enabled
        else None
    )
    return SwotService(client)


def create_server(settings: Settings, transport: HttpTransport | None = None) -> FastMCP:
    stocks = build_stock_service(settings, transport)
    swot = build_swot_service(settings)
    routes = ProxyRoutes(
        stocks,
        swot,
        metrics=ServerMetrics(),
        service_name=settings.app_name,
        service_version=settings.app_version,
        mode=resolve_transport_mode(settings.transport_mode),
    )
    mcp = FastMCP(
        name=settings.app_name,
        host=settings.host,
        port=settings.port,
        streamable_http_path=settings.mcp_path,
    )
    register_stock_tools(mcp, stocks, swot if settings.swot_enabled else None)
    mcp.custom_route(settings.stock_data_path, methods=["POST", "OPTIONS"])(routes.stock_data)
    mcp.custom_route(settings.health_path, methods=["GET"])(routes.health)
    if not settings.swot_enabled:
        LOGGER.info("SWOT disabled; %s is not mounted", settings.swot_path)
        return mcp
    mcp.custom_route(settings.swot_path, methods=["POST", "OPTIONS"])(routes.swot_analysis)
    if swot.client is None:
        LOGGER.warning("SWOT endpoint has no LLM client. Set CLAUDE_API_KEY or ANTHROPIC_API_KEY.")
    return mcp


async def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mcp = create_server(settings)
    resolved_mode = resolve_transport_mode(settings.transport_mode)
    resolved_http_transport = resolve_http_transport(settings.http_transport)
    LOGGER.info(
        "starting %s: mode=%s transport=%s host=%s port=%s",
        settings.app_name,
        resolved_mode,
        resolved_http_transport,
        settings.host,
        settings.port,
    )
    if resolved_mode == "stdio":
        await mcp.run_stdio_async()
    elif resolved_http_transport == "streamable":
        await mcp.run_streamable_http_async()
    else:
        await mcp.run_sse_async()


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
