"""Storage port — abstract key/value interface for local persistence.

The persistence layer depends on this protocol, never on a specific backend.
"""

from __future__ import annotations

from typing import Protocol


class StorageError(Exception):
    """Raised when any storage backend operation fails."""


class StoragePort(Protocol):
    """Abstract key/value store holding one text blob per key."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...
