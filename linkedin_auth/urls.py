from __future__ import annotations

import urllib.parse

from .constants import LINKEDIN_AUTHORIZE_URL, URL_QUERY_ALLOWED
from .errors import InvalidURLError
from .models import UNRELATED, AuthConfiguration, RedirectClassification, RedirectKind


def build_authorization_url(configuration: AuthConfiguration) -> str:
    """Build the LinkedIn authorization URL for ``configuration``.

    The query is assembled from raw values and then percent-encoded as a
    single string, separators included. The resulting byte layout is part of the
    wire contract with LinkedIn; values are never encoded one by one.
    """
    params = "?"
    params += "response_type=code"
    params += "&client_id=" + configuration.client_id
    params += "&redirect_uri=" + configuration.redirect_uri
    params += "&scope=" + configuration.scope_string

    try:
        url = urllib.parse.quote(
            LINKEDIN_AUTHORIZE_URL + params,
            safe=URL_QUERY_ALLOWED,
            errors="strict",
        )
    except UnicodeEncodeError as error:
        raise InvalidURLError(None) from error

    try:
        parsed = urllib.parse.urlsplit(url)
    except ValueError as error:
        raise InvalidURLError(url) from error
    if not parsed.scheme or not parsed.netloc:
        raise InvalidURLError(url)

    return url


def _first_query_value(query: list[tuple[str, str]], name: str) -> str | None:
    for key, value in query:
        if key == name:
            return value
    return None


def classify_redirect(url: str) -> RedirectClassification:
    try:
        raw_query = urllib.parse.urlsplit(url).query
        query = urllib.parse.parse_qsl(raw_query, keep_blank_values=True)
    except ValueError:
        return UNRELATED

    code = _first_query_value(query, "code")
    if code:
        return RedirectClassification(RedirectKind.CODE, code=code)

    error = _first_query_value(query, "error")
    if error is not None:
        return RedirectClassification(
            RedirectKind.ERROR,
            error=error,
            error_description=_first_query_value(query, "error_description"),
        )

    return UNRELATED
