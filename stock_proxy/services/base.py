"""Request parsing, validation errors and the closed action set."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Action(str, Enum):
    SEARCH = "search"
    QUOTE = "quote"
    HISTORY = "history"
    FINANCIALS = "financials"
    NEWS = "news"


VALID_ACTIONS = ", ".join(action.value for action in Action)


class InvalidRequest(ValueError):
    """Malformed or missing request parameter. Surfaced as HTTP 400."""


class InvalidAction(InvalidRequest):
    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"Invalid action. Valid actions: {VALID_ACTIONS}")


@dataclass
class StockDataRequest:
    action: Action
    symbols: list[str] = field(default_factory=list)
    query: str | None = None

    @property
    def symbol(self) -> str | None:
        return self.symbols[0] if self.symbols else None


def parse_action(value: object) -> Action:
    if isinstance(value, str):
        try:
            return Action(value.strip().lower())
        except ValueError:
            pass
    raise InvalidAction(value)


def clean_symbols(value: object) -> list[str]:
    """Accept a string or list of strings; strip, upper-case and dedupe in order."""
    if value is None:
        return []
    raw = [value] if isinstance(value, str) else value
    if not isinstance(raw, list):
        raise InvalidRequest("`symbols` must be a string or a list of strings.")
    cleaned: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise InvalidRequest("`symbols` must be a string or a list of strings.")
        symbol = item.strip().upper()
        if symbol and symbol not in cleaned:
            cleaned.append(symbol)
    return cleaned


def parse_request(body: Any) -> StockDataRequest:
    if not isinstance(body, dict):
        raise InvalidRequest("Request body must be a JSON object.")
    action = parse_action(body.get("action"))
    query = body.get("query")
    if query is not None and not isinstance(query, str):
        raise InvalidRequest("`query` must be a string.")
    return StockDataRequest(
        action=action,
        symbols=clean_symbols(body.get("symbols")),
        query=query.strip() if query else None,
    )


def require_symbol(request: StockDataRequest) -> str:
    symbol = request.symbol
    if not symbol:
        raise InvalidRequest("Symbol required")
    return symbol
