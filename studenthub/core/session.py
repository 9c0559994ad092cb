"""
StudentHub Tracker — Store session.

Binds the repository to whoever the auth provider says is signed in. Each
auth notification goes through the pure transition ``on_auth_change``; when
the user changes, the repository is rebound and hydrated from storage
before it is handed out again. Presentation code subscribes for re-render
notifications and must release the subscription when it goes away, which
``subscription()`` guarantees.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterator

from studenthub.data.repository import NotAuthenticatedError

if TYPE_CHECKING:
    from studenthub.data.repository import TrackerRepository
    from studenthub.ports.auth_port import AuthPort, AuthState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionState:
    """Who the repository is bound to."""

    user_id: str | None = None
    is_loading: bool = True

    @property
    def is_signed_in(self) -> bool:
        return self.user_id is not None and not self.is_loading


SessionListener = Callable[[SessionState], None]


def on_auth_change(prev: SessionState, auth: AuthState) -> SessionState:
    """Next session state for an auth notification.

    Returns ``prev`` itself when nothing changed, so callers can skip work
    with an identity check.
    """
    user_id = auth.user.id if auth.user is not None else None
    new = SessionState(user_id=user_id, is_loading=auth.is_loading)
    if new == prev:
        return prev
    return new


class StoreSession:
    """Facade that exposes the repository only while a user is bound."""

    def __init__(self, repository: TrackerRepository, auth: AuthPort) -> None:
        self._repository = repository
        self._auth = auth
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._unsubscribe_auth: Callable[[], None] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def repository(self) -> TrackerRepository:
        """The bound repository; raises NotAuthenticatedError when signed out."""
        if not self._state.is_signed_in:
            raise NotAuthenticatedError("Sign in before using the tracker")
        return self._repository

    def start(self) -> None:
        """Start following the auth provider."""
        if self._unsubscribe_auth is None:
            self._unsubscribe_auth = self._auth.on_auth_state_changed(self.handle_auth_state)

    def close(self) -> None:
        """Stop following the auth provider and drop all listeners."""
        if self._unsubscribe_auth is not None:
            self._unsubscribe_auth()
            self._unsubscribe_auth = None
        self._listeners.clear()

    def __enter__(self) -> StoreSession:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def handle_auth_state(self, auth: AuthState) -> None:
        """Apply one auth notification."""
        prev = self._state
        new = on_auth_change(prev, auth)
        if new is prev:
            return

        if new.user_id != prev.user_id:
            if new.user_id is None:
                self._repository.unbind()
            else:
                # Hydrate before the new state makes the repository available.
                self._repository.bind_user(new.user_id)

        self._state = new
        logger.info("Session state: user=%s loading=%s", new.user_id, new.is_loading)
        self._notify()

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener; returns the function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @contextmanager
    def subscription(self, listener: SessionListener) -> Iterator[StoreSession]:
        """Scoped subscription, released even if the body raises."""
        unsubscribe = self.subscribe(listener)
        try:
            yield self
        finally:
            unsubscribe()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as exc:
                logger.error("Session listener %r failed: %s", listener, exc)
