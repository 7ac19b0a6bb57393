from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

import httpx

from . import linkedin_oauth2
from .constants import LOGGER
from .errors import (
    AuthorizationTimeoutError,
    FlowInProgressError,
    InvalidConfigurationError,
    InvalidURLError,
    UserDeclinedError,
)
from .interceptor import RedirectInterceptor
from .models import (
    AuthConfiguration,
    AuthorizationAccepted,
    AuthorizationCancelled,
    AuthorizationFailed,
    AuthorizationOutcome,
    FlowState,
    TokenAccepted,
    TokenFailed,
    TokenResult,
)
from .surface import ModalPresenter, WebSurface
from .urls import build_authorization_url

SuccessCallback = Callable[[str], None]
FailureCallback = Callable[[Exception], None]
ExchangeCodeFn = Callable[..., Awaitable[TokenResult]]


class FlowSession:
    """State of a single ``authenticate`` call.

    The session delivers exactly one outcome. Signals that arrive once it
    has left ``AWAITING_USER_ACTION`` are ignored, and the surface is
    dismissed at most once.
    """

    def __init__(
        self,
        configuration: AuthConfiguration,
        *,
        success: SuccessCallback,
        fail: FailureCallback,
        surface: WebSurface,
        presenter: ModalPresenter,
        exchange_code_fn: ExchangeCodeFn,
        client: httpx.AsyncClient | None,
        loop: asyncio.AbstractEventLoop,
        on_finished: Callable[["FlowSession"], None],
    ) -> None:
        self.configuration = configuration
        self.state = FlowState.IDLE
        self.authorization_outcome: AuthorizationOutcome | None = None

        self._success = success
        self._fail = fail
        self._surface = surface
        self._presenter = presenter
        self._exchange_code_fn = exchange_code_fn
        self._client = client
        self._loop = loop
        self._on_finished = on_finished

        self._completion: asyncio.Future[TokenResult] = loop.create_future()
        self._presented = False
        self._timeout_handle: asyncio.TimerHandle | None = None
        self._exchange_task: asyncio.Task | None = None

    @property
    def done(self) -> bool:
        return self._completion.done()

    @property
    def awaiting_user_action(self) -> bool:
        return self.state is FlowState.AWAITING_USER_ACTION

    async def wait(self) -> TokenResult:
        return await asyncio.shield(self._completion)

    # -- lifecycle -------------------------------------------------------------

    def start(self, url: str, timeout: float | None) -> None:
        self.state = FlowState.AWAITING_USER_ACTION
        self._surface.set_navigation_policy(RedirectInterceptor(self))

        self._presenter.present(self._surface)
        self._presented = True

        LOGGER.info("Will request authorization from: %s", url)
        self._surface.load(url)

        if timeout is not None and self.awaiting_user_action:
            self._timeout_handle = self._loop.call_later(timeout, self._time_out, timeout)

    def fail_before_authorization(self, error: Exception) -> None:
        self.authorization_outcome = AuthorizationFailed(error)
        self._finish(FlowState.FAILED, TokenFailed(error))

    def abort(self, error: Exception) -> None:
        """End the session after a failed start without running the callbacks.

        The caller receives the error as an exception. The session removes its
        policy from the surface and settles as ``FAILED``.
        """
        self._cancel_timeout()
        self.dismiss()
        self._surface.set_navigation_policy(None)
        self.authorization_outcome = AuthorizationFailed(error)
        self.state = FlowState.FAILED
        if not self.done:
            self._completion.set_result(TokenFailed(error))
        self._on_finished(self)

    def stop_loading(self) -> None:
        self._surface.stop_loading()

    def dismiss(self) -> None:
        if not self._presented:
            return
        self._presented = False
        self._presenter.dismiss(self._surface)

    # -- interceptor signals ---------------------------------------------------

    def accept(self, code: str) -> None:
        if not self.awaiting_user_action:
            LOGGER.debug("Ignoring authorization code for %s session", self.state.value)
            return

        self._cancel_timeout()
        self.dismiss()
        self.authorization_outcome = AuthorizationAccepted(code)
        self.state = FlowState.EXCHANGING_TOKEN
        self._exchange_task = self._loop.create_task(self._exchange(code))
        self._exchange_task.add_done_callback(self._log_exchange_error)

    def decline(self, error: UserDeclinedError) -> None:
        if not self.awaiting_user_action:
            LOGGER.debug("Ignoring authorization error for %s session", self.state.value)
            return

        self.dismiss()
        self.authorization_outcome = AuthorizationCancelled(error)
        self._finish(FlowState.CANCELLED, TokenFailed(error))

    # -- internals -------------------------------------------------------------

    async def _exchange(self, code: str) -> None:
        try:
            result = await self._exchange_code_fn(self.configuration, code, client=self._client)
        except Exception as error:
            LOGGER.exception("Token exchange raised unexpectedly")
            result = TokenFailed(error)

        if isinstance(result, TokenAccepted):
            self._finish(FlowState.SUCCEEDED, result)
        else:
            self._finish(FlowState.FAILED, result)

    def _log_exchange_error(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            LOGGER.error("LinkedIn auth callback raised", exc_info=error)

    def _time_out(self, timeout: float) -> None:
        self._timeout_handle = None
        if not self.awaiting_user_action:
            return

        LOGGER.warning("LinkedIn authorization timed out after %ss", timeout)
        self.stop_loading()
        self.dismiss()
        error = AuthorizationTimeoutError(timeout)
        self.authorization_outcome = AuthorizationFailed(error)
        self._finish(FlowState.TIMED_OUT, TokenFailed(error))

    def _cancel_timeout(self) -> None:
        if self._timeout_handle is not None:
            self._timeout_handle.cancel()
            self._timeout_handle = None

    def _finish(self, state: FlowState, result: TokenResult) -> None:
        if self.done:
            return

        self._cancel_timeout()
        self.state = state
        self._completion.set_result(result)
        self._on_finished(self)

        if isinstance(result, TokenAccepted):
            LOGGER.info("LinkedIn authorization succeeded")
            self._success(result.access_token)
        else:
            LOGGER.info("LinkedIn authorization ended as %s: %s", state.value, result.error)
            self._fail(result.error)


class LinkedInAuth:
    def __init__(
        self,
        *,
        surface: WebSurface,
        presenter: ModalPresenter,
        exchange_code_fn: ExchangeCodeFn = linkedin_oauth2.exchange_code,
        client: httpx.AsyncClient | None = None,
        authorization_timeout: float | None = None,
    ) -> None:
        if authorization_timeout is not None and authorization_timeout <= 0:
            raise InvalidConfigurationError("authorization_timeout must be positive.")

        self.surface = surface
        self.presenter = presenter
        self.authorization_timeout = authorization_timeout

        self._exchange_code_fn = exchange_code_fn
        self._client = client
        self._session: FlowSession | None = None

    @property
    def active_session(self) -> FlowSession | None:
        return self._session

    def authenticate(
        self,
        configuration: AuthConfiguration,
        success: SuccessCallback,
        fail: FailureCallback,
    ) -> FlowSession:
        """Start an authorization flow and return its session.

        Must be called from the event loop thread. ``success`` receives the
        access token and ``fail`` the error; exactly one of them runs, once.
        Raises ``FlowInProgressError`` while another session is active.
        """
        if self._session is not None:
            raise FlowInProgressError()

        loop = asyncio.get_running_loop()
        LOGGER.info("Will authenticate with scope: %s", configuration.scope_string)

        session = FlowSession(
            configuration,
            success=success,
            fail=fail,
            surface=self.surface,
            presenter=self.presenter,
            exchange_code_fn=self._exchange_code_fn,
            client=self._client,
            loop=loop,
            on_finished=self._release,
        )

        try:
            url = build_authorization_url(configuration)
        except InvalidURLError as error:
            LOGGER.error("Could not build LinkedIn authorization URL: %s", error)
            session.fail_before_authorization(error)
            return session

        self._session = session
        try:
            session.start(url, self.authorization_timeout)
        except Exception as error:
            LOGGER.error("Could not start LinkedIn authorization: %s", error)
            session.abort(error)
            raise
        return session

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    def _release(self, session: FlowSession) -> None:
        if self._session is session:
            self._session = None
