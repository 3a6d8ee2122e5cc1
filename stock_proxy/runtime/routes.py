"""HTTP route handlers for the stock-data and SWOT endpoints."""

from __future__ import annotations

import logging
import time
from typing import Any

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from stock_proxy.providers.http import ProviderError
from stock_proxy.runtime.monitoring import ServerMetrics, log_request_event, log_response_event
from stock_proxy.runtime.response import error_response, json_response, preflight_response
from stock_proxy.services.base import InvalidRequest, parse_request
from stock_proxy.services.stock_service import StockDataService
from stock_proxy.services.swot_service import SwotNotConfigured, SwotService

LOGGER = logging.getLogger(__name__)
SWOT_RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again later."
SWOT_QUOTA_MESSAGE = "AI credits exhausted. Please add funds."


class ProxyRoutes:
    def __init__(
        self,
        stocks: StockDataService,
        swot: SwotService,
        metrics: ServerMetrics | None = None,
        service_name: str = "stock-data-proxy",
        service_version: str = "1.0.0",
        mode: str = "http",
    ) -> None:
        self.stocks = stocks
        self.swot = swot
        self.metrics = metrics or ServerMetrics()
        self.service_name = service_name
        self.service_version = service_version
        self.mode = mode

    async def dispatch(self, body: Any) -> Response:
        """Route a decoded request body to its action handler."""
        if isinstance(body, dict):
            log_request_event(body.get("action"), body.get("symbols"), body.get("query"))
        else:
            log_request_event(None, None, None)
        try:
            request = parse_request(body)
            data = await self.stocks.execute(request)
            return json_response(data)
        except InvalidRequest as error:
            LOGGER.info("rejected stock-data request: %s", error)
            return error_response(str(error), 400)
        except ProviderError as error:
            LOGGER.warning(
                "upstream failure: provider=%s code=%s status=%s message=%s",
                error.provider,
                error.code,
                error.status,
                error.message,
            )
            return error_response(str(error), 500)
        except Exception as error:
            LOGGER.exception("stock-data request failed")
            return error_response(str(error) or "Unknown error", 500)

    async def stock_data(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return preflight_response()
        started = time.perf_counter()
        action: str | None = None
        try:
            body = await request.json()
        except ValueError as error:
            LOGGER.warning("stock-data body is not valid JSON: %s", error)
            response: Response = error_response(f"Invalid JSON body: {error}", 500)
        else:
            if isinstance(body, dict) and isinstance(body.get("action"), str):
                action = body["action"]
            response = await self.dispatch(body)
        self._observe("stock-data", action, started, response.status_code)
        return response

    async def swot_analysis(self, request: Request) -> Response:
        if request.method == "OPTIONS":
            return preflight_response()
        started = time.perf_counter()
        try:
            body = await request.json()
            analysis = await self.swot.analyze(body)
            response: Response = json_response(analysis)
        except InvalidRequest as error:
            response = error_response(str(error), 400)
        except ProviderError as error:
            LOGGER.warning("AI gateway error: code=%s status=%s", error.code, error.status)
            if error.code == "RATE_LIMIT":
                response = error_response(SWOT_RATE_LIMIT_MESSAGE, 429)
            elif error.code == "QUOTA":
                response = error_response(SWOT_QUOTA_MESSAGE, 402)
            else:
                response = error_response(str(error), 500)
        except SwotNotConfigured as error:
            LOGGER.error("swot-analysis unavailable: %s", error)
            response = error_response(str(error), 500)
        except Exception as error:
            LOGGER.exception("swot-analysis request failed")
            response = error_response(str(error) or "Unknown error", 500)
        self._observe("swot-analysis", None, started, response.status_code)
        return response

    async def health(self, _: Request) -> Response:
        snapshot = self.metrics.snapshot()
        return JSONResponse(
            {
                "status": "ok",
                "service": self.service_name,
                "version": self.service_version,
                "mode": self.mode,
                "requests": snapshot.total_requests,
                "error_rate": round(snapshot.error_rate, 4),
                "avg_latency_ms": round(snapshot.avg_latency_ms, 3),
                "uptime_seconds": round(snapshot.uptime_seconds, 3),
            }
        )

    def _observe(self, endpoint: str, action: str | None, started: float, status: int) -> None:
        latency_ms = (time.perf_counter() - started) * 1000.0
        warning = "slow_response" if latency_ms > 2000 else None
        log_response_event(endpoint, action, latency_ms, status, warning=warning)
        self.metrics.record(latency_ms=latency_ms, success=status < 500)
