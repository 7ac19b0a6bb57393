from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from pydantic import AnyUrl, ValidationError

from .constants import DEFAULT_STATE, LOGGER
from .errors import InvalidConfigurationError, UserDeclinedError


class Scope(Enum):
    BASIC_PROFILE = "r_basicprofile"
    LITE_PROFILE = "r_liteprofile"
    EMAIL_ADDRESS = "r_emailaddress"
    MEMBER_SOCIAL = "w_member_social"

    @classmethod
    def parse(cls, value: "Scope | str") -> "Scope":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidConfigurationError(f"Unknown LinkedIn scope: {value!r}.") from None


def serialize_scopes(scopes: Iterable[Scope]) -> str:
    return " ".join(scope.value for scope in scopes)


def _normalize_scopes(scopes: Iterable[Scope | str]) -> tuple[Scope, ...]:
    if isinstance(scopes, (str, Scope)):
        scopes = [scopes]

    normalized: list[Scope] = []
    for raw in scopes:
        scope = Scope.parse(raw)
        if scope in normalized:
            LOGGER.warning("Dropping duplicate LinkedIn scope %s", scope.value)
            continue
        normalized.append(scope)

    if not normalized:
        raise InvalidConfigurationError("At least one LinkedIn scope is required.")
    return tuple(normalized)


@dataclass(frozen=True)
class AuthConfiguration:
    client_id: str
    client_secret: str = field(repr=False)
    redirect_uri: str
    scopes: tuple[Scope, ...]
    state: str | None = DEFAULT_STATE

    def __post_init__(self) -> None:
        if not isinstance(self.client_id, str) or not self.client_id:
            raise InvalidConfigurationError("client_id is required.")
        if not isinstance(self.client_secret, str) or not self.client_secret:
            raise InvalidConfigurationError("client_secret is required.")
        if not isinstance(self.redirect_uri, str) or not self.redirect_uri:
            raise InvalidConfigurationError("redirect_uri is required.")
        try:
            AnyUrl(self.redirect_uri)
        except ValidationError as error:
            raise InvalidConfigurationError(
                f"redirect_uri must be an absolute URI: {self.redirect_uri!r}."
            ) from error

        object.__setattr__(self, "scopes", _normalize_scopes(self.scopes))

    @property
    def scope_string(self) -> str:
        return serialize_scopes(self.scopes)


class RedirectKind(Enum):
    CODE = "code"
    ERROR = "error"
    UNRELATED = "unrelated"


@dataclass(frozen=True)
class RedirectClassification:
    kind: RedirectKind
    code: str | None = None
    error: str | None = None
    error_description: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.kind is not RedirectKind.UNRELATED


UNRELATED = RedirectClassification(RedirectKind.UNRELATED)


@dataclass(frozen=True)
class AuthorizationAccepted:
    code: str


@dataclass(frozen=True)
class AuthorizationCancelled:
    error: UserDeclinedError


@dataclass(frozen=True)
class AuthorizationFailed:
    error: Exception


AuthorizationOutcome = Union[AuthorizationAccepted, AuthorizationCancelled, AuthorizationFailed]


@dataclass(frozen=True)
class TokenAccepted:
    access_token: str
    expires_in: int | None = None


@dataclass(frozen=True)
class TokenFailed:
    error: Exception


TokenResult = Union[TokenAccepted, TokenFailed]


class FlowState(Enum):
    IDLE = "idle"
    AWAITING_USER_ACTION = "awaiting_user_action"
    EXCHANGING_TOKEN = "exchanging_token"
    SUCCEEDED = "succeeded"
    CANCELLED = "cancelled"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {FlowState.SUCCEEDED, FlowState.CANCELLED, FlowState.FAILED, FlowState.TIMED_OUT}
)
