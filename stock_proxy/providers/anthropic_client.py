"""Anthropic Messages client used for the SWOT helper."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import requests

from stock_proxy.providers.http import ProviderError, map_status_to_code


class AnthropicClient:
    def __init__(self, api_key: str, model: str, timeout_seconds: float = 20.0) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.base_url = "https://api.anthropic.com/v1/messages"

    def generate_text(self, prompt: str, system: str | None = None, max_tokens: int = 1024) -> str | None:
        payload: dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": 0.2,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            payload["system"] = system
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": "2023-06-01",
            "content-type": "application/json",
        }
        try:
            response = requests.post(
                self.base_url,
                timeout=self.timeout_seconds,
                headers=headers,
                data=json.dumps(payload),
            )
        except requests.RequestException as error:
            raise ProviderError("anthropic", "NETWORK", f"Anthropic request failed: {error}") from error
        if not response.ok:
            raise ProviderError(
                "anthropic",
                map_status_to_code(response.status_code),
                f"AI gateway error: {response.status_code}",
                response.status_code,
            )
        try:
            data = response.json()
        except ValueError as error:
            raise ProviderError(
                "anthropic", "BAD_RESPONSE", "Anthropic returned non-JSON response.", response.status_code
            ) from error
        content = data.get("content")
        if not isinstance(content, list):
            return None
        texts = [item.get("text") for item in content if isinstance(item, dict) and isinstance(item.get("text"), str)]
        return "\n".join(texts).strip() if texts else None

    async def generate_text_async(self, prompt: str, system: str | None = None, max_tokens: int = 1024) -> str | None:
        return await asyncio.to_thread(self.generate_text, prompt, system, max_tokens)
