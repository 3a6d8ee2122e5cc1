"""HTTP utilities, retry policy and normalized provider errors."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Literal, Protocol

import requests
from requests.adapters import HTTPAdapter

from stock_proxy.providers.models import ProviderName

ProviderErrorCode = Literal["RATE_LIMIT", "AUTH", "QUOTA", "NOT_FOUND", "UPSTREAM", "NETWORK", "BAD_RESPONSE"]
TRANSIENT_ERROR_CODES = {"RATE_LIMIT", "NETWORK"}

Sleeper = Callable[[float], Awaitable[None]]


@dataclass
class ProviderError(Exception):
    provider: ProviderName
    code: ProviderErrorCode
    message: str
    status: int | None = None

    def __str__(self) -> str:
        return self.message

    @property
    def transient(self) -> bool:
        """True for rate limiting and network failures, False for every other upstream error."""
        return self.code in TRANSIENT_ERROR_CODES


def map_status_to_code(status: int) -> ProviderErrorCode:
    if status in {401, 403}:
        return "AUTH"
    if status == 402:
        return "QUOTA"
    if status == 404:
        return "NOT_FOUND"
    if status == 429:
        return "RATE_LIMIT"
    return "UPSTREAM"


@dataclass(frozen=True)
class TransportResponse:
    status: int
    text: str
    reason: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class HttpTransport(Protocol):
    async def get(self, url: str, headers: dict[str, str], timeout_seconds: float) -> TransportResponse: ...


class RequestsTransport:
    """Pooled ``requests`` session; blocking calls run on a worker thread."""

    def __init__(self, session: requests.Session | None = None) -> None:
        if session is None:
            session = requests.Session()
            session.mount("https://", HTTPAdapter(pool_connections=50, pool_maxsize=100))
            session.mount("http://", HTTPAdapter(pool_connections=50, pool_maxsize=100))
        self._session = session

    async def get(self, url: str, headers: dict[str, str], timeout_seconds: float) -> TransportResponse:
        response = await asyncio.to_thread(self._session.get, url, headers=headers, timeout=timeout_seconds)
        return TransportResponse(status=response.status_code, text=response.text or "", reason=response.reason or "")

    def close(self) -> None:
        self._session.close()


class UpstreamFetcher:
    """GET with linear backoff: 429 and network errors sleep, other statuses retry at once."""

    def __init__(
        self,
        transport: HttpTransport,
        provider: ProviderName,
        user_agent: str,
        timeout_seconds: float = 15.0,
        max_attempts: int = 3,
        rate_limit_backoff_seconds: float = 1.0,
        network_backoff_seconds: float = 0.5,
        sleep: Sleeper | None = None,
    ) -> None:
        self.transport = transport
        self.provider = provider
        self.timeout_seconds = timeout_seconds
        self.max_attempts = max(1, max_attempts)
        self.rate_limit_backoff_seconds = rate_limit_backoff_seconds
        self.network_backoff_seconds = network_backoff_seconds
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self._sleep = sleep or asyncio.sleep

    async def fetch_with_retry(self, url: str, max_attempts: int | None = None) -> TransportResponse:
        attempts = max(1, max_attempts or self.max_attempts)
        last_error: ProviderError | None = None
        for attempt in range(1, attempts + 1):
            try:
                response = await self.transport.get(url, self.headers, self.timeout_seconds)
            except requests.RequestException as error:
                last_error = ProviderError(self.provider, "NETWORK", f"Provider request failed due to network error: {error}")
                if attempt < attempts:
                    await self._sleep(self.network_backoff_seconds * attempt)
                continue

            if response.ok:
                return response

            code = map_status_to_code(response.status)
            last_error = ProviderError(
                self.provider,
                code,
                f"HTTP {response.status}: {response.reason}".rstrip(": "),
                response.status,
            )
            if code == "RATE_LIMIT" and attempt < attempts:
                await self._sleep(self.rate_limit_backoff_seconds * attempt)

        if last_error:
            raise last_error
        raise ProviderError(self.provider, "UPSTREAM", "Failed after retries")

    async def fetch_json(self, url: str, max_attempts: int | None = None) -> Any:
        """Fetch and decode JSON; a body that is not JSON raises ``BAD_RESPONSE``."""
        response = await self.fetch_with_retry(url, max_attempts=max_attempts)
        if not response.text:
            return {}
        try:
            return json.loads(response.text)
        except json.JSONDecodeError as error:
            raise ProviderError(
                self.provider,
                "BAD_RESPONSE",
                "Provider returned non-JSON content.",
                response.status,
            ) from error
