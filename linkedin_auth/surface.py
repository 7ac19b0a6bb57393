"""Capabilities the flow needs from the host's embedded browser and screen stack."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Protocol, runtime_checkable


class NavigationDecision(Enum):
    ALLOW = "allow"
    CANCEL = "cancel"


NavigationPolicy = Callable[[str], NavigationDecision]


@runtime_checkable
class WebSurface(Protocol):
    """An embedded web view the flow can drive.

    Implementations must call the installed policy once per navigation,
    serially and in navigation order, and must not load a URL for which the
    policy returned ``NavigationDecision.CANCEL``.
    """

    def load(self, url: str) -> None:
        ...

    def stop_loading(self) -> None:
        ...

    def set_navigation_policy(self, policy: NavigationPolicy | None) -> None:
        ...


@runtime_checkable
class ModalPresenter(Protocol):
    def present(self, surface: WebSurface) -> None:
        ...

    def dismiss(self, surface: WebSurface) -> None:
        ...
