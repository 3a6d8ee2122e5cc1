"""Normalized response models returned by the proxy actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

ProviderName = Literal["yahoo", "anthropic"]


@dataclass
class NormalizedSearchResult:
    symbol: str
    name: str
    exchange: str | None = None
    type: str | None = None
    sector: str | None = None


@dataclass
class NormalizedQuote:
    symbol: str
    name: str
    price: float
    change: float
    change_percent: float
    currency: str = "USD"
    exchange: str = "N/A"
    market_cap: float = 0
    pe_ratio: float = 0
    dividend_yield: float = 0
    fifty_two_week_high: float = 0
    fifty_two_week_low: float = 0
    volume: int = 0
    avg_volume: int = 0
    sector: str = "N/A"


@dataclass
class NormalizedHistoryPoint:
    date: str
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass
class NormalizedHistory:
    symbol: str
    currency: str = "USD"
    history: list[NormalizedHistoryPoint] = field(default_factory=list)


@dataclass
class IncomeStatement:
    year: int
    revenue: float | None = None
    gross_profit: float | None = None
    operating_income: float | None = None
    net_income: float | None = None
    eps: float | None = None


@dataclass
class BalanceSheet:
    year: int
    total_assets: float | None = None
    total_liabilities: float | None = None
    total_equity: float | None = None
    cash: float | None = None
    total_debt: float | None = None


@dataclass
class Cashflow:
    year: int
    operating_cashflow: float | None = None
    investing_cashflow: float | None = None
    financing_cashflow: float | None = None
    free_cashflow: float | None = None


@dataclass
class FinancialRatios:
    roe: float | None = None
    roa: float | None = None
    profit_margin: float | None = None
    operating_margin: float | None = None
    current_ratio: float | None = None
    debt_to_equity: float | None = None
    pe: float | None = None
    pb: float | None = None
    ps: float | None = None
    peg_ratio: float | None = None
    beta: float | None = None


@dataclass
class FinancialsMeta:
    symbol: str
    currency: str | None = None
    exchange: str | None = None
    current_price: float | None = None
    prev_close: float | None = None
    fifty_two_week_high: float | None = None
    fifty_two_week_low: float | None = None
    # The chart endpoint never carries statement data.
    statements_available: bool = False


@dataclass
class NormalizedFinancials:
    meta: FinancialsMeta
    income_statements: list[IncomeStatement] = field(default_factory=list)
    ratios: FinancialRatios = field(default_factory=FinancialRatios)
    balance_sheets: list[BalanceSheet] = field(default_factory=list)
    cashflows: list[Cashflow] = field(default_factory=list)


@dataclass
class NormalizedNewsItem:
    id: str
    title: str
    publisher: str
    link: str
    publish_timestamp: int = 0
    thumbnail_url: str | None = None


@dataclass
class SwotAnalysis:
    strengths: list[str]
    weaknesses: list[str]
    opportunities: list[str]
    threats: list[str]
    summary: str
