"""Local auth adapter — implements AuthPort for a single local user.

There is no remote identity provider: ``login`` signs in a fixed user id
and every subscriber is told about it synchronously.
"""

from __future__ import annotations

import logging

from studenthub.ports.auth_port import AuthCallback, AuthState, AuthUser, Unsubscribe

logger = logging.getLogger(__name__)


class LocalAuthProvider:
    """In-process implementation of AuthPort."""

    def __init__(self, user_id: str | None = None) -> None:
        if user_id is None:
            from studenthub.config import settings
            user_id = settings.LOCAL_USER_ID

        self._default_user_id = user_id
        self._state = AuthState(user=None, is_loading=False)
        self._callbacks: list[AuthCallback] = []

    @property
    def state(self) -> AuthState:
        return self._state

    def on_auth_state_changed(self, callback: AuthCallback) -> Unsubscribe:
        """Register a callback; it is called at once with the current state."""
        self._callbacks.append(callback)
        callback(self._state)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def login(self, user_id: str | None = None) -> None:
        user = AuthUser(id=user_id or self._default_user_id)
        logger.info("User %s signed in", user.id)
        self._emit(AuthState(user=user, is_loading=False))

    def logout(self) -> None:
        if self._state.user is not None:
            logger.info("User %s signed out", self._state.user.id)
        self._emit(AuthState(user=None, is_loading=False))

    def _emit(self, state: AuthState) -> None:
        self._state = state
        for callback in list(self._callbacks):
            callback(state)
