"""Structured logging and health metrics aggregation."""

from __future__ import annotations

import json
import threading
import time
from dataclasses import dataclass
from typing import Any


@dataclass
class HealthSnapshot:
    uptime_seconds: float
    total_requests: int
    error_rate: float
    avg_latency_ms: float


class ServerMetrics:
    def __init__(self, started_at: float | None = None) -> None:
        self.started_at = started_at or time.time()
        self._lock = threading.Lock()
        self.total_requests = 0
        self.error_requests = 0
        self.total_latency_ms = 0.0

    def record(self, latency_ms: float, success: bool) -> None:
        with self._lock:
            self.total_requests += 1
            if not success:
                self.error_requests += 1
            self.total_latency_ms += max(0.0, latency_ms)

    def snapshot(self) -> HealthSnapshot:
        with self._lock:
            requests = self.total_requests
            avg_latency = (self.total_latency_ms / requests) if requests else 0.0
            error_rate = (self.error_requests / requests) if requests else 0.0
        return HealthSnapshot(
            uptime_seconds=max(0.0, time.time() - self.started_at),
            total_requests=requests,
            error_rate=error_rate,
            avg_latency_ms=avg_latency,
        )


def _emit(payload: dict[str, Any]) -> None:
    payload["timestamp"] = int(time.time())
    print(json.dumps(payload, ensure_ascii=True), flush=True)


def log_request_event(action: object, symbols: object, query: object) -> None:
    """Inbound request line, written before the action handler runs."""
    _emit({"event": "stock_data_request", "action": action, "symbols": symbols, "query": query})


def log_response_event(
    endpoint: str,
    action: str | None,
    latency_ms: float,
    status: int,
    warning: str | None = None,
) -> None:
    payload: dict[str, Any] = {
        "event": "response",
        "endpoint": endpoint,
        "action": action,
        "status": status,
        "latency_ms": round(latency_ms, 3),
        "success": status < 400,
    }
    if warning:
        payload["warning"] = warning
    _emit(payload)
