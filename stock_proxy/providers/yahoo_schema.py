"""Typed view of the raw Yahoo Finance chart and search payloads.

Every field is optional. Parsing never raises on missing keys or wrong
types; it only returns ``None`` from ``parse_chart`` when the payload has
no ``chart.result[0]`` object at all.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

# Epoch seconds representable as a datetime (0001-01-01 .. 9999-12-31 UTC).
MIN_EPOCH_SECONDS = -62135596800
MAX_EPOCH_SECONDS = 253402300799


def as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def as_epoch(value: Any) -> int | None:
    seconds = as_int(value)
    if seconds is None or not MIN_EPOCH_SECONDS <= seconds <= MAX_EPOCH_SECONDS:
        return None
    return seconds


def as_int(value: Any) -> int | None:
    number = as_float(value)
    return int(number) if number is not None else None


def as_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _float_series(value: Any) -> list[float | None]:
    return [as_float(item) for item in _as_list(value)]


@dataclass
class RawChartMeta:
    symbol: str | None = None
    currency: str | None = None
    exchange_name: str | None = None
    exchange: str | None = None
    long_name: str | None = None
    short_name: str | None = None
    sector: str | None = None
    regular_market_price: float | None = None
    regular_market_previous_close: float | None = None
    previous_close: float | None = None
    chart_previous_close: float | None = None
    regular_market_volume: float | None = None
    fifty_two_week_high: float | None = None
    fifty_two_week_low: float | None = None
    market_cap: float | None = None
    trailing_pe: float | None = None
    price_to_book: float | None = None
    dividend_yield: float | None = None
    beta: float | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> RawChartMeta:
        meta = _as_dict(payload)
        return cls(
            symbol=as_str(meta.get("symbol")),
            currency=as_str(meta.get("currency")),
            exchange_name=as_str(meta.get("exchangeName")),
            exchange=as_str(meta.get("exchange")),
            long_name=as_str(meta.get("longName")),
            short_name=as_str(meta.get("shortName")),
            sector=as_str(meta.get("sector")),
            regular_market_price=as_float(meta.get("regularMarketPrice")),
            regular_market_previous_close=as_float(meta.get("regularMarketPreviousClose")),
            previous_close=as_float(meta.get("previousClose")),
            chart_previous_close=as_float(meta.get("chartPreviousClose")),
            regular_market_volume=as_float(meta.get("regularMarketVolume")),
            fifty_two_week_high=as_float(meta.get("fiftyTwoWeekHigh")),
            fifty_two_week_low=as_float(meta.get("fiftyTwoWeekLow")),
            market_cap=as_float(meta.get("marketCap")),
            trailing_pe=as_float(meta.get("trailingPE")),
            price_to_book=as_float(meta.get("priceToBook")),
            dividend_yield=as_float(meta.get("dividendYield")),
            beta=as_float(meta.get("beta")),
        )


@dataclass
class RawQuoteSeries:
    open: list[float | None] = field(default_factory=list)
    high: list[float | None] = field(default_factory=list)
    low: list[float | None] = field(default_factory=list)
    close: list[float | None] = field(default_factory=list)
    volume: list[float | None] = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> RawQuoteSeries:
        quote = _as_dict(payload)
        return cls(
            open=_float_series(quote.get("open")),
            high=_float_series(quote.get("high")),
            low=_float_series(quote.get("low")),
            close=_float_series(quote.get("close")),
            volume=_float_series(quote.get("volume")),
        )

    @staticmethod
    def at(values: list[float | None], index: int) -> float | None:
        return values[index] if index < len(values) else None


@dataclass
class RawChart:
    meta: RawChartMeta
    timestamps: list[int | None] = field(default_factory=list)
    series: RawQuoteSeries = field(default_factory=RawQuoteSeries)


def parse_chart(payload: Any) -> RawChart | None:
    results = _as_list(_as_dict(_as_dict(payload).get("chart")).get("result"))
    if not results or not isinstance(results[0], dict):
        return None
    result = results[0]
    quotes = _as_list(_as_dict(result.get("indicators")).get("quote"))
    return RawChart(
        meta=RawChartMeta.from_payload(result.get("meta")),
        timestamps=[as_epoch(item) for item in _as_list(result.get("timestamp"))],
        series=RawQuoteSeries.from_payload(quotes[0] if quotes else None),
    )


@dataclass
class RawSearchQuote:
    symbol: str
    short_name: str | None = None
    long_name: str | None = None
    exchange: str | None = None
    exchange_display: str | None = None
    quote_type: str | None = None
    sector: str | None = None


@dataclass
class RawNewsItem:
    uuid: str | None = None
    title: str | None = None
    publisher: str | None = None
    link: str | None = None
    provider_publish_time: int | None = None
    thumbnail_url: str | None = None


@dataclass
class RawSearch:
    quotes: list[RawSearchQuote] = field(default_factory=list)
    news: list[RawNewsItem] = field(default_factory=list)


def _first_thumbnail(payload: Any) -> str | None:
    for resolution in _as_list(_as_dict(payload).get("resolutions")):
        url = as_str(_as_dict(resolution).get("url"))
        if url:
            return url
    return None


def parse_search(payload: Any) -> RawSearch:
    data = _as_dict(payload)
    quotes: list[RawSearchQuote] = []
    for item in _as_list(data.get("quotes")):
        entry = _as_dict(item)
        symbol = as_str(entry.get("symbol"))
        if not symbol:
            continue
        quotes.append(
            RawSearchQuote(
                symbol=symbol,
                short_name=as_str(entry.get("shortname")),
                long_name=as_str(entry.get("longname")),
                exchange=as_str(entry.get("exchange")),
                exchange_display=as_str(entry.get("exchDisp")),
                quote_type=as_str(entry.get("quoteType")),
                sector=as_str(entry.get("sector")),
            )
        )
    news: list[RawNewsItem] = []
    for item in _as_list(data.get("news")):
        entry = _as_dict(item)
        if not entry:
            continue
        news.append(
            RawNewsItem(
                uuid=as_str(entry.get("uuid")),
                title=as_str(entry.get("title")),
                publisher=as_str(entry.get("publisher")),
                link=as_str(entry.get("link")),
                provider_publish_time=as_epoch(entry.get("providerPublishTime")),
                thumbnail_url=_first_thumbnail(entry.get("thumbnail")),
            )
        )
    return RawSearch(quotes=quotes, news=news)
