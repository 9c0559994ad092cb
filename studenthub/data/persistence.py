"""
StudentHub Tracker — Snapshot persistence.

Mirrors one user's full dataset to a key/value store as a single JSON blob
under ``{APP_NAMESPACE}_{userId}``. Loads are lenient: a missing key gives an
empty snapshot, and malformed collections or records are dropped with a
warning instead of failing the load. Storage failures are logged and
swallowed, so the tracker keeps working in memory for the session.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from studenthub.data.models import COLLECTIONS, Snapshot
from studenthub.ports.storage_port import StorageError

if TYPE_CHECKING:
    from studenthub.ports.storage_port import StoragePort

logger = logging.getLogger(__name__)


class SnapshotStore:
    """Full-snapshot load/save of a user's dataset."""

    def __init__(
        self, storage: StoragePort | None = None, namespace: str | None = None,
    ) -> None:
        if storage is None:
            from studenthub.adapters.storage_factory import create_storage_adapter
            storage = create_storage_adapter()
        if namespace is None:
            from studenthub.config import settings
            namespace = settings.APP_NAMESPACE

        self._storage = storage
        self._namespace = namespace

    def key_for(self, user_id: str) -> str:
        return f"{self._namespace}_{user_id}"

    def load(self, user_id: str) -> Snapshot:
        """Return the stored snapshot for a user, or an empty one."""
        key = self.key_for(user_id)
        try:
            raw = self._storage.get_item(key)
        except (StorageError, OSError) as exc:
            logger.error("Failed to load snapshot %s: %s", key, exc)
            return Snapshot()

        if raw is None:
            logger.debug("No snapshot stored under %s", key)
            return Snapshot()

        snapshot = parse_snapshot(raw)
        logger.debug(
            "Loaded snapshot %s (%d tasks, %d habit logs)",
            key, len(snapshot.tasks), len(snapshot.habit_logs),
        )
        return snapshot

    def save(self, user_id: str, snapshot: Snapshot) -> bool:
        """Overwrite the stored snapshot in one write. Returns success."""
        key = self.key_for(user_id)
        try:
            self._storage.set_item(key, dump_snapshot(snapshot))
        except (StorageError, OSError) as exc:
            logger.error("Failed to save snapshot %s: %s", key, exc)
            return False
        return True


def dump_snapshot(snapshot: Snapshot) -> str:
    """Serialize a snapshot with camelCase keys, omitting unset optionals."""
    return snapshot.model_dump_json(by_alias=True, exclude_none=True)


def parse_snapshot(raw: str) -> Snapshot:
    """Parse a stored blob, recovering whatever collections are valid."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Stored snapshot is not valid JSON, starting empty: %s", exc)
        return Snapshot()

    if not isinstance(data, dict):
        logger.warning("Stored snapshot is a %s, not an object; starting empty", type(data).__name__)
        return Snapshot()

    collections: dict[str, list] = {}
    for attr, model in COLLECTIONS.items():
        alias = to_camel(attr)
        items = data.get(alias, data.get(attr))
        if items is None:
            collections[attr] = []
            continue
        if not isinstance(items, list):
            logger.warning("Snapshot key %r is not a list, ignoring it", alias)
            collections[attr] = []
            continue

        records = []
        for item in items:
            try:
                records.append(model.model_validate(item))
            except ValidationError as exc:
                logger.warning(
                    "Dropping malformed %s record: %d error(s)",
                    model.__name__, exc.error_count(),
                )
        collections[attr] = records

    return Snapshot(**collections)
