from __future__ import annotations

from typing import Any

import httpx

from .constants import LINKEDIN_TOKEN_URL, LOGGER
from .errors import DecodeError, MissingTokenError, TransportError
from .http import build_http_client
from .models import AuthConfiguration, TokenAccepted, TokenFailed, TokenResult

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def token_request_payload(configuration: AuthConfiguration, code: str) -> dict[str, str]:
    return {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": configuration.redirect_uri,
        "client_id": configuration.client_id,
        "client_secret": configuration.client_secret,
    }


def token_result_from_response(response: httpx.Response) -> TokenResult:
    try:
        payload: Any = response.json()
    except ValueError as error:
        decode_error = DecodeError(
            f"Token response is not valid JSON (status {response.status_code}).",
            status_code=response.status_code,
            text=response.text,
        )
        decode_error.__cause__ = error
        return TokenFailed(decode_error)

    if not isinstance(payload, dict):
        return TokenFailed(
            DecodeError(
                f"Token response must be a JSON object, got {type(payload).__name__}.",
                status_code=response.status_code,
                text=response.text,
            )
        )

    access_token = payload.get("access_token")
    if not isinstance(access_token, str) or not access_token:
        return TokenFailed(MissingTokenError(payload, status_code=response.status_code))

    expires_in = payload.get("expires_in")
    if not isinstance(expires_in, int) or isinstance(expires_in, bool):
        expires_in = None
    return TokenAccepted(access_token=access_token, expires_in=expires_in)


async def exchange_code(
    configuration: AuthConfiguration,
    code: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> TokenResult:
    """Trade an authorization code for an access token.

    A single attempt is made: LinkedIn codes are single-use, so any failure
    comes back as ``TokenFailed`` and the caller must restart authorization.
    """
    own_client = client is None
    http_client = client or build_http_client()

    LOGGER.info("Will request access token")
    try:
        response = await http_client.post(
            LINKEDIN_TOKEN_URL,
            data=token_request_payload(configuration, code),
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
    except httpx.TransportError as error:
        LOGGER.warning("Token request failed: %s", error)
        transport_error = TransportError(f"Token request failed: {error}")
        transport_error.__cause__ = error
        return TokenFailed(transport_error)
    finally:
        if own_client:
            await http_client.aclose()

    return token_result_from_response(response)
