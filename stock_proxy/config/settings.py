"""Environment-driven settings."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the proxy endpoints and the hosting server."""

    app_name: str = "stock-data-proxy"
    app_version: str = "1.0.0"
    transport_mode: str = "http"
    http_transport: str = "sse"
    host: str = "0.0.0.0"
    port: int = 8000
    mcp_path: str = "/mcp"
    health_path: str = "/health"
    stock_data_path: str = "/stock-data"
    swot_path: str = "/swot-analysis"
    yahoo_chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    yahoo_search_url: str = "https://query1.finance.yahoo.com/v1/finance/search"
    upstream_user_agent: str = DEFAULT_USER_AGENT
    request_timeout_seconds: float = 15.0
    upstream_max_attempts: int = 3
    rate_limit_backoff_seconds: float = 1.0
    network_backoff_seconds: float = 0.5
    search_result_limit: int = 15
    news_limit: int = 15
    claude_api_key: str | None = None
    claude_model: str = "claude-sonnet-4-5-20250929"
    swot_enabled: bool = True
    log_level: str = "INFO"


def _as_int(value: str | None, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _as_bool(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def get_settings() -> Settings:
    """Load runtime settings from environment variables."""
    load_dotenv()

    return Settings(
        app_name=os.getenv("APP_NAME", "stock-data-proxy"),
        transport_mode=os.getenv("TRANSPORT_MODE", "http").strip().lower(),
        http_transport=os.getenv("HTTP_TRANSPORT", "sse").strip().lower(),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_as_int(os.getenv("PORT"), 8000),
        mcp_path=os.getenv("MCP_PATH", "/mcp"),
        health_path=os.getenv("HEALTH_PATH", "/health"),
        stock_data_path=os.getenv("STOCK_DATA_PATH", "/stock-data"),
        swot_path=os.getenv("SWOT_PATH", "/swot-analysis"),
        yahoo_chart_url=os.getenv(
            "YAHOO_CHART_URL",
            "https://query1.finance.yahoo.com/v8/finance/chart",
        ).rstrip("/"),
        yahoo_search_url=os.getenv(
            "YAHOO_SEARCH_URL",
            "https://query1.finance.yahoo.com/v1/finance/search",
        ),
        upstream_user_agent=os.getenv("UPSTREAM_USER_AGENT") or DEFAULT_USER_AGENT,
        request_timeout_seconds=_as_float(os.getenv("REQUEST_TIMEOUT_SECONDS"), 15.0),
        upstream_max_attempts=max(1, _as_int(os.getenv("UPSTREAM_MAX_ATTEMPTS"), 3)),
        rate_limit_backoff_seconds=_as_float(os.getenv("RATE_LIMIT_BACKOFF_SECONDS"), 1.0),
        network_backoff_seconds=_as_float(os.getenv("NETWORK_BACKOFF_SECONDS"), 0.5),
        search_result_limit=max(1, _as_int(os.getenv("SEARCH_RESULT_LIMIT"), 15)),
        news_limit=max(1, _as_int(os.getenv("NEWS_LIMIT"), 15)),
        claude_api_key=os.getenv("CLAUDE_API_KEY") or os.getenv("ANTHROPIC_API_KEY"),
        claude_model=(
            os.getenv("CLAUDE_MODEL")
            or os.getenv("ANTHROPIC_MODEL")
            or "claude-sonnet-4-5-20250929"
        ),
        swot_enabled=_as_bool(os.getenv("SWOT_ENABLED"), True),
        log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
    )
