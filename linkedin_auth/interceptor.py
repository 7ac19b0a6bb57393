from __future__ import annotations

from typing import TYPE_CHECKING

from .constants import LOGGER
from .errors import UserDeclinedError
from .models import RedirectKind
from .surface import NavigationDecision
from .urls import classify_redirect

if TYPE_CHECKING:
    from .flow import FlowSession


class RedirectInterceptor:
    """Navigation policy bound to one flow session.

    Lets provider login and consent pages load, and cancels any navigation
    whose query carries ``code`` or ``error``. The first such navigation while
    the session waits for the user closes the surface and advances the
    session; later ones are only cancelled.
    """

    def __init__(self, session: "FlowSession") -> None:
        self._session = session

    def __call__(self, url: str) -> NavigationDecision:
        classification = classify_redirect(url)
        if not classification.is_terminal:
            LOGGER.debug("Allowing navigation to %s", url)
            return NavigationDecision.ALLOW

        LOGGER.info("Found %s in redirect query, cancelling navigation", classification.kind.value)
        if not self._session.awaiting_user_action:
            LOGGER.debug(
                "Session already %s; ignoring %s redirect",
                self._session.state.value,
                classification.kind.value,
            )
            return NavigationDecision.CANCEL

        self._session.stop_loading()
        self._session.dismiss()
        if classification.kind is RedirectKind.CODE:
            self._session.accept(classification.code or "")
        else:
            self._session.decline(
                UserDeclinedError(classification.error, classification.error_description)
            )
        return NavigationDecision.CANCEL
