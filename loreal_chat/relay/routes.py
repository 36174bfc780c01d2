"""Relay route: forwards chat transcripts to the upstream completion API."""

import json
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from ..config import Settings, get_settings
from ..logging_config import get_logger
from ..utils.responses import CORS_HEADERS, error_response, json_response

logger = get_logger(__name__)

router = APIRouter(tags=["relay"])


async def get_upstream_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    """HTTP client used to reach the upstream API (overridable in tests)."""
    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        yield client


@router.options("/")
async def relay_preflight() -> Response:
    """Answer CORS preflight requests."""
    return Response(content=b"", headers=dict(CORS_HEADERS))


@router.post("/")
async def relay_chat(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_upstream_client),
) -> JSONResponse:
    """Forward ``{"messages": [...]}`` upstream and return its JSON verbatim."""

    api_key = settings.direct_api_key
    if not api_key:
        logger.error("Relay called without OPENAI_API_KEY configured")
        return error_response(
            "OPENAI_API_KEY not configured in Worker environment",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    try:
        user_input = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return error_response("Invalid JSON body", status_code=status.HTTP_400_BAD_REQUEST)

    messages = user_input.get("messages") if isinstance(user_input, dict) else None

    request_body = {
        "model": settings.model,
        "messages": messages,
        "max_completion_tokens": settings.max_completion_tokens,
    }

    logger.info(f"🔁 RELAY: Forwarding {len(messages) if isinstance(messages, list) else 0} messages to {settings.model}")

    try:
        upstream = await client.post(
            settings.openai_api_url,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            json=request_body,
        )
    except httpx.HTTPError as e:
        logger.error(f"Upstream request failed: {type(e).__name__}")
        return error_response("Upstream request failed", status_code=status.HTTP_502_BAD_GATEWAY)

    try:
        data = upstream.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.error(f"Upstream returned non-JSON body (status {upstream.status_code})")
        return error_response(
            "Upstream returned an invalid response",
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    if not upstream.is_success:
        logger.warning(f"Upstream returned status {upstream.status_code}")

    return json_response(data, status_code=upstream.status_code)


__all__ = ["router", "get_upstream_client"]
