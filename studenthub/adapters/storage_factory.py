"""Storage adapter factory — creates the right backend based on config."""

from __future__ import annotations

from studenthub.config import settings
from studenthub.ports.storage_port import StoragePort


def create_storage_adapter(data_dir: str | None = None) -> StoragePort:
    """Return the storage adapter matching the STORAGE_BACKEND setting.

    Args:
        data_dir: Overrides DATA_DIR for the file backend.
    """
    backend = settings.STORAGE_BACKEND.lower()

    if backend == "file":
        from studenthub.adapters.local_storage import FileStorage

        return FileStorage(data_dir=data_dir)

    if backend == "memory":
        from studenthub.adapters.local_storage import MemoryStorage

        return MemoryStorage()

    raise ValueError(f"Unknown STORAGE_BACKEND: {backend!r}")
