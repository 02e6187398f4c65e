"""httpx client factory shared by the outbound repositories."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0


async def _log_request(request: httpx.Request) -> None:
    body = request.content.decode("utf-8", errors="replace")
    logger.debug("--> %s %s %s", request.method, request.url, body)


async def _log_response(response: httpx.Response) -> None:
    await response.aread()
    logger.debug(
        "<-- %s %s %s",
        response.status_code,
        response.request.url,
        response.text[:2000],
    )


def make_http_client(
    base_url: str,
    *,
    production: bool,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Build an AsyncClient for an outbound provider.

    Outside production every request and response body is logged at DEBUG.
    """
    event_hooks: dict[str, list] = {"request": [], "response": []}
    if not production:
        event_hooks["request"].append(_log_request)
        event_hooks["response"].append(_log_response)

    return httpx.AsyncClient(
        base_url=base_url.rstrip("/"),
        headers=headers,
        timeout=httpx.Timeout(DEFAULT_TIMEOUT_S),
        event_hooks=event_hooks,
        transport=transport,
    )
