"""Shared test fixtures and configuration.

Sets environment variables before any studenthub import so settings use the
in-memory backend, and provides a repository bound to a test user.
"""

import os
import tempfile

# Patch env vars BEFORE any studenthub imports
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="studenthub-tests-"))
os.environ.setdefault("APP_NAMESPACE", "studentHub")
os.environ.setdefault("LOCAL_USER_ID", "local-user")
os.environ["TIMEZONE"] = ""

import pytest


USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest.fixture
def storage():
    """Return an empty in-memory key/value store."""
    from studenthub.adapters.local_storage import MemoryStorage
    return MemoryStorage()


@pytest.fixture
def snapshots(storage):
    """Return a SnapshotStore writing to the in-memory store."""
    from studenthub.data.persistence import SnapshotStore
    return SnapshotStore(storage, namespace="studentHub")


@pytest.fixture
def repo(snapshots):
    """Return a repository with no user bound."""
    from studenthub.data.repository import TrackerRepository
    return TrackerRepository(snapshots)


@pytest.fixture
def bound_repo(repo):
    """Return a repository bound to USER_ID."""
    repo.bind_user(USER_ID)
    return repo


@pytest.fixture
def today():
    from studenthub.core import clock
    return clock.today()
