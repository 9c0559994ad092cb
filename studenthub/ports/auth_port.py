"""Auth port — abstract interface for the sign-in provider.

The store session depends on this protocol, never on a specific provider.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol


@dataclass(frozen=True)
class AuthUser:
    """The signed-in user as reported by the provider."""

    id: str
    email: str | None = None
    display_name: str | None = None


@dataclass(frozen=True)
class AuthState:
    """One auth-state notification."""

    user: AuthUser | None = None
    is_loading: bool = False


AuthCallback = Callable[[AuthState], None]
Unsubscribe = Callable[[], None]


class AuthPort(Protocol):
    """Abstract auth provider used by the store session."""

    def on_auth_state_changed(self, callback: AuthCallback) -> Unsubscribe: ...

    def login(self) -> None: ...
