"""Response shaping helpers for the proxy endpoints."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from typing import Any

from starlette.responses import JSONResponse, Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _camelize(data: Any) -> Any:
    if isinstance(data, list):
        return [_camelize(item) for item in data]
    if isinstance(data, dict):
        return {camel_case(key) if isinstance(key, str) else key: _camelize(value) for key, value in data.items()}
    return data


def to_payload(data: Any) -> Any:
    """Dataclasses to plain JSON-ready structures with camelCase keys."""
    if is_dataclass(data) and not isinstance(data, type):
        return _camelize(asdict(data))
    if isinstance(data, list):
        return [to_payload(item) for item in data]
    if isinstance(data, dict):
        return {key: to_payload(value) for key, value in data.items()}
    return data


def to_json(data: Any) -> str:
    return json.dumps(to_payload(data), ensure_ascii=True)


def json_response(data: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(to_payload(data), status_code=status_code, headers=CORS_HEADERS)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code, headers=CORS_HEADERS)


def preflight_response() -> Response:
    return Response(content=None, status_code=200, headers=CORS_HEADERS)
