from __future__ import annotations

from .env import (
    authorization_timeout_from_env,
    configuration_from_env,
    http_timeout_from_env,
    load_env,
    setup_logging,
    validate_env,
)
from .flow import LinkedInAuth
from .http import build_http_client
from .models import AuthConfiguration
from .surface import ModalPresenter, WebSurface


def create_linkedin_auth(
    surface: WebSurface,
    presenter: ModalPresenter,
) -> tuple[LinkedInAuth, AuthConfiguration]:
    """Wire a ``LinkedInAuth`` from ``LINKEDIN_*`` environment variables.

    The returned instance owns its HTTP client; call ``aclose()`` when done.
    """
    load_env()
    debug_enabled = setup_logging()
    validate_env()

    configuration = configuration_from_env()
    client = build_http_client(timeout=http_timeout_from_env(), debug=debug_enabled)
    linkedin_auth = LinkedInAuth(
        surface=surface,
        presenter=presenter,
        client=client,
        authorization_timeout=authorization_timeout_from_env(),
    )
    return linkedin_auth, configuration
