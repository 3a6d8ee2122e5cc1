"""AI-generated SWOT analysis with a fixed fallback."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from stock_proxy.providers.anthropic_client import AnthropicClient
from stock_proxy.providers.models import SwotAnalysis
from stock_proxy.providers.yahoo_schema import as_float, as_str
from stock_proxy.services.base import InvalidRequest

LOGGER = logging.getLogger(__name__)
JSON_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")
SWOT_KEYS = ("strengths", "weaknesses", "opportunities", "threats")
SYSTEM_PROMPT = (
    "You are a senior financial analyst specializing in equity research. "
    "Always respond with valid JSON only, no markdown or additional text."
)


class SwotNotConfigured(RuntimeError):
    pass


def fallback_swot(company: str, sector: str | None) -> SwotAnalysis:
    return SwotAnalysis(
        strengths=["Strong market position", "Innovative product portfolio", "Solid financial performance"],
        weaknesses=["Market concentration risk", "Regulatory challenges", "Competition pressure"],
        opportunities=["Emerging market expansion", "New product development", "Strategic partnerships"],
        threats=["Economic uncertainty", "Technological disruption", "Changing consumer preferences"],
        summary=(
            f"{company} maintains a competitive position in the {sector or 'technology'} sector "
            "with both opportunities and challenges ahead."
        ),
    )


def build_prompt(company: str, ticker: str, price: float | None, change_percent: float | None, sector: str | None) -> str:
    price_text = f"{price}" if price is not None else "N/A"
    change_text = f"{change_percent:.2f}" if change_percent is not None else "N/A"
    return (
        f"Analyze {company} ({ticker}) and generate a SWOT analysis.\n"
        f"Current Price: ${price_text}\nPrice Change: {change_text}%\nSector: {sector or 'Technology'}\n"
        'Respond as JSON: {"strengths": [], "weaknesses": [], "opportunities": [], "threats": [], "summary": ""}'
    )


def parse_swot(text: str | None) -> SwotAnalysis | None:
    """Extract the first JSON object from model output; ``None`` when absent or malformed."""
    if not text:
        return None
    match = JSON_OBJECT_PATTERN.search(text)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    lists: dict[str, list[str]] = {}
    for key in SWOT_KEYS:
        value = data.get(key)
        if not isinstance(value, list):
            return None
        lists[key] = [str(item) for item in value if isinstance(item, (str, int, float))]
    summary = data.get("summary")
    return SwotAnalysis(summary=summary if isinstance(summary, str) else "", **lists)


class SwotService:
    def __init__(self, client: AnthropicClient | None) -> None:
        self.client = client

    async def analyze(self, body: Any) -> SwotAnalysis:
        if not isinstance(body, dict):
            raise InvalidRequest("Request body must be a JSON object.")
        ticker = as_str(body.get("ticker"))
        if not ticker:
            raise InvalidRequest("`ticker` is required.")
        company = as_str(body.get("company")) or ticker
        sector = as_str(body.get("sector"))
        if self.client is None:
            raise SwotNotConfigured("CLAUDE_API_KEY is not configured")

        LOGGER.info("generating SWOT analysis: ticker=%s", ticker)
        prompt = build_prompt(company, ticker, as_float(body.get("price")), as_float(body.get("changePercent")), sector)
        text = await self.client.generate_text_async(prompt, system=SYSTEM_PROMPT)
        parsed = parse_swot(text)
        if parsed is None:
            LOGGER.warning("SWOT response not parseable, using fallback: ticker=%s", ticker)
            return fallback_swot(company, sector)
        return parsed
