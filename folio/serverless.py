"""Serverless entry point for the asset proxy.

Function platforms (Netlify, AWS Lambda behind API Gateway) want a single
response value per invocation, so the asset body is read whole and returned
base64-encoded instead of streamed.
"""

from __future__ import annotations

import asyncio
import base64
import json
from collections.abc import Mapping
from typing import Any

import httpx

from folio.config import Settings, get_settings
from folio.lib.exceptions import AssetProxyError, error_body
from folio.lib.proxy import AssetProxy
from folio.lib.upstream import create_upstream_backend


def _event_identifier(event: Mapping[str, Any]) -> str | None:
    params = event.get("queryStringParameters") or {}
    path_params = event.get("pathParameters") or {}
    return params.get("id") or path_params.get("identifier") or path_params.get("id")


def _error_response(status_code: int, message: str) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(error_body(message)),
    }


async def handle_event(
    event: Mapping[str, Any],
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Answer one function invocation."""
    settings = settings or get_settings()
    proxy = AssetProxy(
        create_upstream_backend(settings, transport=transport),
        secret=settings.upstream_api_key,
    )
    try:
        content_type, body = await proxy.read(_event_identifier(event))
    except AssetProxyError as exc:
        return _error_response(exc.status_code, exc.detail)
    finally:
        await proxy.close()

    return {
        "statusCode": 200,
        "headers": {"Content-Type": content_type, **settings.proxy.response_headers()},
        "body": base64.b64encode(body).decode("ascii"),
        "isBase64Encoded": True,
    }


def handler(event: Mapping[str, Any], context: Any = None) -> dict[str, Any]:
    """Synchronous function-platform handler."""
    return asyncio.run(handle_event(event))
