from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_SCOPES, DEFAULT_STATE, LOGGER
from .models import AuthConfiguration

REQUIRED_ENV = (
    "LINKEDIN_CLIENT_ID",
    "LINKEDIN_CLIENT_SECRET",
    "LINKEDIN_REDIRECT_URI",
)


def is_truthy(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_float(key: str, default: float | None) -> float | None:
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{key} must be a number.")


def load_env(path: str | Path | None = None) -> None:
    env_path = Path(path) if path is not None else Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(env_path, override=True)


def validate_env() -> None:
    missing = [key for key in REQUIRED_ENV if not os.getenv(key, "").strip()]
    if missing:
        raise RuntimeError(
            f"Missing required environment variables for LinkedIn auth: {', '.join(missing)}"
        )


def configuration_from_env() -> AuthConfiguration:
    scopes = os.getenv("LINKEDIN_SCOPES", DEFAULT_SCOPES).split()
    return AuthConfiguration(
        client_id=os.getenv("LINKEDIN_CLIENT_ID", "").strip(),
        client_secret=os.getenv("LINKEDIN_CLIENT_SECRET", "").strip(),
        redirect_uri=os.getenv("LINKEDIN_REDIRECT_URI", "").strip(),
        scopes=tuple(scopes),
        state=os.getenv("LINKEDIN_STATE", DEFAULT_STATE),
    )


def authorization_timeout_from_env() -> float | None:
    return _get_env_float("LINKEDIN_AUTH_TIMEOUT", None)


def http_timeout_from_env() -> float:
    return _get_env_float("LINKEDIN_HTTP_TIMEOUT", 30.0)


def setup_logging() -> bool:
    debug_enabled = is_truthy(os.getenv("LINKEDIN_AUTH_DEBUG", "1"))
    if debug_enabled:
        logging.basicConfig(level=logging.INFO)
        LOGGER.setLevel(logging.INFO)
    return debug_enabled
