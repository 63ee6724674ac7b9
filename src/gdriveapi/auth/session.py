"""Session lifecycle: authorize, refresh, dispose."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from gdriveapi.errors import (
    AlreadyAuthorizedError,
    NotAuthorizedError,
    ObjectDisposedError,
    OperationCancelledError,
)

from .options import DriveApiOptions
from .provider import AuthProvider, OAuthProvider, build_drive_service

ServiceFactory = Callable[[Any, Optional[str]], Any]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unauthenticated:
    """No credential yet."""


@dataclass(frozen=True)
class Authenticated:
    service: Any
    credentials: Any


@dataclass(frozen=True)
class Disposed:
    """Terminal state; every access raises ObjectDisposedError."""


SessionState = Union[Unauthenticated, Authenticated, Disposed]


class SessionManager:
    """
    Own the credential and the connected Drive service.

    States:
        Unauthenticated -> Authenticated (authorize)
        Unauthenticated | Authenticated -> Disposed (dispose)

    Lifecycle transitions are not synchronized; callers must not race
    authorize() against dispose().
    """

    def __init__(
        self,
        options: Optional[DriveApiOptions] = None,
        *,
        auth_provider: Optional[AuthProvider] = None,
        service_factory: Optional[ServiceFactory] = None,
    ) -> None:
        self._options = options if options is not None else DriveApiOptions()
        self._auth_provider: AuthProvider = (
            auth_provider if auth_provider is not None else OAuthProvider(self._options)
        )
        self._service_factory: ServiceFactory = (
            service_factory if service_factory is not None else build_drive_service
        )
        self._state: SessionState = Unauthenticated()

    @property
    def options(self) -> DriveApiOptions:
        return self._options

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_disposed(self) -> bool:
        return isinstance(self._state, Disposed)

    @property
    def is_authorized(self) -> bool:
        return isinstance(self._live_state(), Authenticated)

    @property
    def is_token_stale(self) -> bool:
        state = self._live_state()
        if not isinstance(state, Authenticated):
            return False
        return not bool(getattr(state.credentials, "valid", False))

    @property
    def service(self) -> Any:
        """The connected Drive service. Requires authorize() first."""
        state = self._live_state()
        if not isinstance(state, Authenticated):
            raise NotAuthorizedError("The session has not been authorized.")
        return state.service

    @property
    def credentials(self) -> Any:
        state = self._live_state()
        if not isinstance(state, Authenticated):
            raise NotAuthorizedError("The session has not been authorized.")
        return state.credentials

    def authorize(self, *, cancel: Optional[threading.Event] = None) -> None:
        """
        Obtain a credential from the auth provider and connect the service.

        Raises:
            AlreadyAuthorizedError: if the session is already authorized.
            ObjectDisposedError: if the session was disposed.
        """
        if isinstance(self._live_state(), Authenticated):
            raise AlreadyAuthorizedError("The session has been already authorized.")

        _check_cancelled(cancel)
        credentials = self._auth_provider.authorize()
        _check_cancelled(cancel)

        service = self._service_factory(credentials, self._options.application_name)
        self._state = Authenticated(service=service, credentials=credentials)
        logger.info("Session authorized for user %s", self._options.user_id)

    def refresh_if_stale(self, *, cancel: Optional[threading.Event] = None) -> bool:
        """
        Refresh the credential in place when it is stale.

        The transport refreshes on demand anyway; this only front-loads the cost.

        Returns:
            True if a refresh happened, False otherwise (including before authorize()).
        """
        state = self._live_state()
        if not isinstance(state, Authenticated) or not self.is_token_stale:
            return False

        _check_cancelled(cancel)
        self._auth_provider.refresh(state.credentials)
        logger.info("Refreshed stale token for user %s", self._options.user_id)
        return True

    def dispose(self) -> None:
        """Release the service and credential. Idempotent."""
        state = self._state
        if isinstance(state, Disposed):
            return

        self._state = Disposed()
        if isinstance(state, Authenticated):
            close = getattr(state.service, "close", None)
            if callable(close):
                close()
        logger.info("Session disposed")

    def __enter__(self) -> "SessionManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()

    def _live_state(self) -> SessionState:
        if isinstance(self._state, Disposed):
            raise ObjectDisposedError("The session has been disposed.")
        return self._state


def _check_cancelled(cancel: Optional[threading.Event]) -> None:
    if cancel is not None and cancel.is_set():
        raise OperationCancelledError("Operation was cancelled")
