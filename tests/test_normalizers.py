from dataclasses import asdict

from stock_proxy.lib.normalizers import (
    derive_change,
    normalize_financials,
    normalize_history,
    normalize_news,
    normalize_quote,
    normalize_search,
)
from stock_proxy.providers.yahoo_schema import parse_chart, parse_search
from tests.fakes import chart_payload

JAN_2_2024 = 1704153600
DAY = 86400


def test_change_percent_two_decimals() -> None:
    assert derive_change(110.0, 100.0) == (10.0, 10.0)
    assert derive_change(101.234, 100.0) == (1.23, 1.23)


def test_change_percent_zero_previous_close_is_zero() -> None:
    change, change_percent = derive_change(50.0, 0.0)
    assert change_percent == 0
    assert change == 50.0


def test_quote_uses_live_price_and_explicit_previous_close() -> None:
    chart = parse_chart(
        chart_payload(
            "AAPL",
            closes=[98.0, 99.0, 100.0],
            regularMarketPrice=110.0,
            previousClose=100.0,
            longName="Apple Inc.",
            exchangeName="NMS",
        )
    )
    quote = normalize_quote("AAPL", chart)

    assert quote.price == 110.0
    assert quote.change == 10.0
    assert quote.change_percent == 10.0
    assert quote.name == "Apple Inc."
    assert quote.exchange == "NMS"


def test_quote_falls_back_to_series_closes() -> None:
    chart = parse_chart(chart_payload("MSFT", closes=[200.0, None, 210.0]))
    quote = normalize_quote("MSFT", chart)

    assert quote.price == 210.0
    assert quote.change == 10.0
    assert quote.change_percent == 5.0


def test_quote_defaults_missing_fields() -> None:
    chart = parse_chart({"chart": {"result": [{"meta": {}}]}})
    quote = normalize_quote("ZZZ", chart)
    payload = asdict(quote)

    assert quote.symbol == "ZZZ"
    assert quote.name == "ZZZ"
    assert quote.price == 0
    assert quote.change_percent == 0
    assert quote.sector == "N/A"
    assert quote.currency == "USD"
    for key in ("market_cap", "pe_ratio", "dividend_yield", "fifty_two_week_high", "fifty_two_week_low", "volume", "avg_volume"):
        assert payload[key] == 0


def test_quote_average_volume_ignores_null_entries() -> None:
    chart = parse_chart(chart_payload("AAPL", closes=[1.0, 2.0, 3.0], volumes=[100, None, 300], regularMarketVolume=999))
    quote = normalize_quote("AAPL", chart)

    assert quote.avg_volume == 200
    assert quote.volume == 999


def test_quote_average_volume_falls_back_to_live_volume() -> None:
    chart = parse_chart(chart_payload("AAPL", closes=[1.0], volumes=[None], regularMarketVolume=4321))
    assert normalize_quote("AAPL", chart).avg_volume == 4321


def test_history_drops_points_without_close() -> None:
    chart = parse_chart(
        chart_payload(
            "AAPL",
            closes=[10.0, None, 12.0],
            timestamps=[JAN_2_2024, JAN_2_2024 + DAY, JAN_2_2024 + 2 * DAY],
        )
    )
    history = normalize_history("AAPL", chart)

    assert [point.date for point in history.history] == ["2024-01-02", "2024-01-04"]
    assert [point.close for point in history.history] == [10.0, 12.0]


def test_history_backfills_ohlc_from_close_and_keeps_order() -> None:
    chart = parse_chart(
        chart_payload(
            "AAPL",
            closes=[12.0, 10.0],
            timestamps=[JAN_2_2024 + DAY, JAN_2_2024],
            opens=[None, 9.5],
            highs=[None, 10.5],
            lows=[11.0, None],
            volumes=[None, 500],
        )
    )
    first, second = normalize_history("AAPL", chart).history

    assert first.date == "2024-01-03"
    assert (first.open, first.high, first.low, first.close, first.volume) == (12.0, 12.0, 11.0, 12.0, 0)
    assert (second.open, second.high, second.low) == (9.5, 10.5, 10.0)


def test_history_without_chart_result_is_empty() -> None:
    history = normalize_history("NOPE", parse_chart({"chart": {"result": []}}))
    assert history.symbol == "NOPE"
    assert history.currency == "USD"
    assert history.history == []


def test_financials_never_fabricate_statement_values() -> None:
    stamps = [1577923200, 1609459200 + DAY, 1641081600, 1672617600, 1704153600, 1735776000]
    chart = parse_chart(
        chart_payload("AAPL", closes=[1.0, 2.0, 3.0, 4.0, 5.0, 6.0], timestamps=stamps, trailingPE=28.5, regularMarketPrice=6.0)
    )
    financials = normalize_financials("AAPL", chart)

    assert [s.year for s in financials.income_statements] == [2025, 2024, 2023, 2022]
    assert [s.year for s in financials.balance_sheets] == [2025, 2024, 2023, 2022]
    assert [s.year for s in financials.cashflows] == [2025, 2024, 2023, 2022]
    for statement in financials.income_statements:
        assert statement.revenue is None
        assert statement.gross_profit is None
        assert statement.operating_income is None
        assert statement.net_income is None
        assert statement.eps is None
    for sheet in financials.balance_sheets:
        assert all(value is None for key, value in asdict(sheet).items() if key != "year")
    for flow in financials.cashflows:
        assert all(value is None for key, value in asdict(flow).items() if key != "year")
    assert financials.ratios.pe == 28.5
    assert financials.ratios.pb is None
    assert financials.ratios.roe is None
    assert financials.meta.current_price == 6.0
    assert financials.meta.statements_available is False


def test_financials_skip_years_with_only_null_closes() -> None:
    chart = parse_chart(chart_payload("AAPL", closes=[None, 5.0], timestamps=[1672617600, 1704153600]))
    financials = normalize_financials("AAPL", chart)
    assert [s.year for s in financials.income_statements] == [2024]


def test_financials_without_chart_result_keeps_full_ratio_set() -> None:
    financials = normalize_financials("NOPE", None)

    assert financials.income_statements == []
    assert financials.meta.symbol == "NOPE"
    assert set(asdict(financials.ratios)) == {
        "roe", "roa", "profit_margin", "operating_margin", "current_ratio",
        "debt_to_equity", "pe", "pb", "ps", "peg_ratio", "beta",
    }
    assert all(value is None for value in asdict(financials.ratios).values())


def test_search_prefers_short_name_and_caps_results() -> None:
    raw = parse_search(
        {
            "quotes": [
                {"symbol": "AAPL", "shortname": "Apple Inc.", "longname": "Apple Incorporated", "exchange": "NMS", "quoteType": "EQUITY"},
                {"symbol": "APLE", "longname": "Apple Hospitality REIT", "exchDisp": "NYSE"},
                {"symbol": "APPL.X"},
            ]
        }
    )
    results = normalize_search(raw, limit=2)

    assert [r.symbol for r in results] == ["AAPL", "APLE"]
    assert results[0].name == "Apple Inc."
    assert results[1].name == "Apple Hospitality REIT"
    assert results[1].exchange == "NYSE"
    assert normalize_search(raw)[2].name == "APPL.X"


def test_search_without_quotes_is_empty() -> None:
    assert normalize_search(parse_search({"count": 0})) == []


def test_news_generates_ids_and_picks_first_thumbnail() -> None:
    raw = parse_search(
        {
            "news": [
                {
                    "uuid": "abc-123",
                    "title": "Apple beats estimates",
                    "publisher": "Reuters",
                    "link": "https://example.test/a",
                    "providerPublishTime": 1704153600,
                    "thumbnail": {"resolutions": [{"url": "https://img.test/1.jpg"}, {"url": "https://img.test/2.jpg"}]},
                },
                {"title": "No id here"},
            ]
        }
    )
    items = normalize_news(raw, id_factory=lambda: "generated-id")

    assert items[0].id == "abc-123"
    assert items[0].thumbnail_url == "https://img.test/1.jpg"
    assert items[0].publish_timestamp == 1704153600
    assert items[1].id == "generated-id"
    assert items[1].thumbnail_url is None
    assert items[1].publish_timestamp == 0


def test_news_default_ids_are_unique() -> None:
    raw = parse_search({"news": [{"title": "a"}, {"title": "b"}]})
    first, second = normalize_news(raw)
    assert first.id != second.id


def test_out_of_range_timestamps_are_skipped() -> None:
    payload = chart_payload("AAPL", closes=[1.0, 2.0], timestamps=[99999999999999, JAN_2_2024])
    chart = parse_chart(payload)

    assert [point.date for point in normalize_history("AAPL", chart).history] == ["2024-01-02"]
    assert [s.year for s in normalize_financials("AAPL", chart).income_statements] == [2024]


def test_quote_ignores_infinite_price() -> None:
    chart = parse_chart(chart_payload("AAPL", closes=[100.0, 105.0], regularMarketPrice=float("inf")))
    quote = normalize_quote("AAPL", chart)
    assert quote.price == 105.0
    assert quote.change_percent == 5.0
