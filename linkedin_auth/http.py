from __future__ import annotations

import httpx

from .constants import LOGGER

DEFAULT_HTTP_TIMEOUT = 30.0
_MAX_LOGGED_BODY = 1000


async def log_request(request: httpx.Request) -> None:
    # Form bodies carry client_secret; only the request line is logged.
    LOGGER.info("LinkedIn request %s %s", request.method, request.url)


async def log_response(response: httpx.Response) -> None:
    LOGGER.info(
        "LinkedIn response %s %s -> %s",
        response.request.method,
        response.request.url,
        response.status_code,
    )
    if response.status_code >= 400:
        body = await response.aread()
        text = body.decode("utf-8", errors="replace")
        if len(text) > _MAX_LOGGED_BODY:
            text = text[:_MAX_LOGGED_BODY] + "...<truncated>"
        LOGGER.warning("LinkedIn error body: %s", text)


def build_http_client(
    *,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
    debug: bool = False,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    event_hooks: dict[str, list] = {"request": [], "response": []}
    if debug:
        event_hooks["request"].append(log_request)
        event_hooks["response"].append(log_response)

    return httpx.AsyncClient(
        timeout=timeout,
        transport=transport,
        event_hooks=event_hooks,
    )
