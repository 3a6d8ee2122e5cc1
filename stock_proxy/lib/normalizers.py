"""Pure mappings from raw Yahoo payloads to the proxy's response models."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable

from stock_proxy.providers.models import (
    BalanceSheet,
    Cashflow,
    FinancialRatios,
    FinancialsMeta,
    IncomeStatement,
    NormalizedFinancials,
    NormalizedHistory,
    NormalizedHistoryPoint,
    NormalizedNewsItem,
    NormalizedQuote,
    NormalizedSearchResult,
)
from stock_proxy.providers.yahoo_schema import RawChart, RawQuoteSeries, RawSearch

FINANCIAL_YEARS = 4


def first_present(*values: float | None) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None


def derive_change(price: float, previous_close: float) -> tuple[float, float]:
    """Return ``(change, change_percent)`` rounded to two decimals.

    A non-positive previous close yields a zero percentage.
    """
    change = price - previous_close
    change_percent = (change / previous_close) * 100 if previous_close > 0 else 0.0
    return round(change, 2), round(change_percent, 2)


def epoch_to_date(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).date().isoformat()


def normalize_search(raw: RawSearch, limit: int = 15) -> list[NormalizedSearchResult]:
    return [
        NormalizedSearchResult(
            symbol=item.symbol,
            name=item.short_name or item.long_name or item.symbol,
            exchange=item.exchange or item.exchange_display,
            type=item.quote_type,
            sector=item.sector,
        )
        for item in raw.quotes[: max(0, limit)]
    ]


def normalize_quote(symbol: str, chart: RawChart) -> NormalizedQuote:
    """Map a 5-day chart onto a quote.

    Previous close prefers the regular-session close over
    ``chartPreviousClose``, which is the close before the chart window and
    so lags by several sessions on a 5-day range.
    """
    meta = chart.meta
    closes = [value for value in chart.series.close if value is not None]
    volumes = [value for value in chart.series.volume if value is not None]

    price = first_present(meta.regular_market_price, closes[-1] if closes else None) or 0.0
    previous_close = first_present(
        meta.regular_market_previous_close,
        meta.previous_close,
        meta.chart_previous_close,
        closes[-2] if len(closes) >= 2 else None,
        price,
    )
    change, change_percent = derive_change(price, previous_close or 0.0)

    if volumes:
        avg_volume = round(sum(volumes) / len(volumes))
    else:
        avg_volume = round(meta.regular_market_volume or 0)

    return NormalizedQuote(
        symbol=meta.symbol or symbol,
        name=meta.long_name or meta.short_name or symbol,
        price=price,
        change=change,
        change_percent=change_percent,
        currency=meta.currency or "USD",
        exchange=meta.exchange_name or meta.exchange or "N/A",
        market_cap=meta.market_cap or 0,
        pe_ratio=meta.trailing_pe or 0,
        dividend_yield=meta.dividend_yield or 0,
        fifty_two_week_high=meta.fifty_two_week_high or 0,
        fifty_two_week_low=meta.fifty_two_week_low or 0,
        volume=round(first_present(meta.regular_market_volume, volumes[-1] if volumes else None) or 0),
        avg_volume=avg_volume,
        sector=meta.sector or "N/A",
    )


def normalize_history(symbol: str, chart: RawChart | None) -> NormalizedHistory:
    if chart is None:
        return NormalizedHistory(symbol=symbol)
    series = chart.series
    points: list[NormalizedHistoryPoint] = []
    for idx, ts in enumerate(chart.timestamps):
        close = RawQuoteSeries.at(series.close, idx)
        if ts is None or close is None:
            continue
        points.append(
            NormalizedHistoryPoint(
                date=epoch_to_date(ts),
                open=first_present(RawQuoteSeries.at(series.open, idx), close),
                high=first_present(RawQuoteSeries.at(series.high, idx), close),
                low=first_present(RawQuoteSeries.at(series.low, idx), close),
                close=close,
                volume=round(RawQuoteSeries.at(series.volume, idx) or 0),
            )
        )
    return NormalizedHistory(symbol=symbol, currency=chart.meta.currency or "USD", history=points)


def _years_with_closes(chart: RawChart) -> list[int]:
    years: set[int] = set()
    for idx, ts in enumerate(chart.timestamps):
        if ts is None or RawQuoteSeries.at(chart.series.close, idx) is None:
            continue
        years.add(datetime.fromtimestamp(ts, tz=timezone.utc).year)
    return sorted(years, reverse=True)[:FINANCIAL_YEARS]


def normalize_financials(symbol: str, chart: RawChart | None) -> NormalizedFinancials:
    """Build the year-keyed statement shell.

    Statement values are always ``None``: the chart endpoint carries prices,
    not filings. Only ratios and meta fields present in the chart metadata
    are filled in.
    """
    if chart is None:
        return NormalizedFinancials(meta=FinancialsMeta(symbol=symbol))
    meta = chart.meta
    years = _years_with_closes(chart)
    return NormalizedFinancials(
        meta=FinancialsMeta(
            symbol=meta.symbol or symbol,
            currency=meta.currency,
            exchange=meta.exchange_name,
            current_price=meta.regular_market_price,
            prev_close=meta.chart_previous_close,
            fifty_two_week_high=meta.fifty_two_week_high,
            fifty_two_week_low=meta.fifty_two_week_low,
        ),
        income_statements=[IncomeStatement(year=year) for year in years],
        ratios=FinancialRatios(pe=meta.trailing_pe, pb=meta.price_to_book, beta=meta.beta),
        balance_sheets=[BalanceSheet(year=year) for year in years],
        cashflows=[Cashflow(year=year) for year in years],
    )


def normalize_news(
    raw: RawSearch,
    limit: int = 15,
    id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
) -> list[NormalizedNewsItem]:
    return [
        NormalizedNewsItem(
            id=item.uuid or id_factory(),
            title=item.title or "",
            publisher=item.publisher or "",
            link=item.link or "",
            publish_timestamp=item.provider_publish_time or 0,
            thumbnail_url=item.thumbnail_url,
        )
        for item in raw.news[: max(0, limit)]
    ]
