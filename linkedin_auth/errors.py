from __future__ import annotations

from typing import Any

from .constants import USER_DECLINED_MESSAGE


class LinkedInAuthError(RuntimeError):
    """Base class for every error raised or reported by the flow."""


class InvalidConfigurationError(LinkedInAuthError, ValueError):
    pass


class InvalidURLError(LinkedInAuthError):
    def __init__(self, url: str | None = None) -> None:
        super().__init__(
            f"The URL built from the provided configuration is invalid. URL string: {url}"
        )
        self.url = url


class UserDeclinedError(LinkedInAuthError):
    def __init__(self, error: str | None = None, error_description: str | None = None) -> None:
        message = USER_DECLINED_MESSAGE
        if error:
            message = f"{message}: {error}"
            if error_description:
                message = f"{message} ({error_description})"
        super().__init__(message)
        self.error = error
        self.error_description = error_description


class TransportError(LinkedInAuthError):
    """The token request never produced a response."""


class DecodeError(LinkedInAuthError):
    def __init__(self, message: str, *, status_code: int, text: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.text = text


class MissingTokenError(LinkedInAuthError):
    """The token response decoded but carried no ``access_token``.

    ``payload`` holds the decoded response so callers can inspect the
    provider's ``error`` / ``error_description`` fields.
    """

    def __init__(self, payload: dict[str, Any], *, status_code: int) -> None:
        super().__init__(f"Didn't get access token. Response data: {payload!r}")
        self.payload = payload
        self.status_code = status_code


class AuthorizationTimeoutError(LinkedInAuthError):
    def __init__(self, timeout: float) -> None:
        super().__init__(f"User did not complete LinkedIn authorization within {timeout}s.")
        self.timeout = timeout


class FlowInProgressError(LinkedInAuthError):
    def __init__(self, message: str = "A LinkedIn authorization flow is already in progress.") -> None:
        super().__init__(message)
