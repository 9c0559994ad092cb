"""
StudentHub Tracker — Entry Point.

`python main.py` signs in the local user and prints today's dashboard.
"""

import logging

from studenthub.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from studenthub.adapters.local_auth import LocalAuthProvider
from studenthub.core.session import StoreSession
from studenthub.core.tracker_service import TrackerService
from studenthub.data.persistence import SnapshotStore
from studenthub.data.repository import TrackerRepository


def main() -> None:
    repository = TrackerRepository(SnapshotStore())
    auth = LocalAuthProvider()

    with StoreSession(repository, auth) as session:
        auth.login()
        service = TrackerService(session.repository)
        print(service.dashboard().render())


if __name__ == "__main__":
    main()
