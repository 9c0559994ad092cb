"""
StudentHub Tracker — Repository.

Owns every in-memory collection for the signed-in user. Reads are filtered
by owner; every mutation is followed by a full-snapshot save so the stored
copy never lags behind memory.

Starter habits and quotes live in their own arenas and are never mutated by
user operations: habits are merged into ``list_habits`` at read time, quotes
are global content shared by every user.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter
from pydantic.alias_generators import to_snake

from studenthub.core import clock
from studenthub.data.defaults import default_habits, default_quotes
from studenthub.data.models import (
    Goal,
    Habit,
    HabitLog,
    JournalEntry,
    Quote,
    Record,
    Review,
    Snapshot,
    Status,
    StudySession,
    Task,
    Workout,
)

if TYPE_CHECKING:
    from studenthub.data.persistence import SnapshotStore

logger = logging.getLogger(__name__)

# Fields the repository assigns; callers cannot set or change them.
_MANAGED_FIELDS = frozenset({"id", "user_id", "created_at", "updated_at"})

_STATUS = TypeAdapter(Status)


class TrackerError(Exception):
    """Base class for tracker errors."""


class NotAuthenticatedError(TrackerError):
    """Raised when an operation needs a signed-in user and none is bound."""


def _new_id() -> str:
    return uuid.uuid4().hex


def _caller_fields(fields: dict[str, Any]) -> dict[str, Any]:
    """Accept snake_case or camelCase keys; drop repository-managed ones."""
    normalized = {to_snake(k): v for k, v in fields.items()}
    return {k: v for k, v in normalized.items() if k not in _MANAGED_FIELDS}


class TrackerRepository:
    """In-memory collections for one bound user, mirrored to storage."""

    def __init__(self, snapshots: SnapshotStore | None = None) -> None:
        if snapshots is None:
            from studenthub.data.persistence import SnapshotStore
            snapshots = SnapshotStore()

        self._snapshots = snapshots
        self._user_id: str | None = None
        self._last_stamp: datetime | None = None

        seeded_at = self._stamp()
        self._seed_quotes = default_quotes(seeded_at)
        self._default_habits = default_habits(seeded_at)

        self._data = Snapshot()
        self._quotes: list[Quote] = list(self._seed_quotes)

    # ------------------------------------------------------------------
    # User binding
    # ------------------------------------------------------------------

    @property
    def user_id(self) -> str | None:
        return self._user_id

    def bind_user(self, user_id: str, snapshot: Snapshot | None = None) -> None:
        """Make ``user_id`` the owner of all operations.

        ``snapshot`` hydrates the collections; when omitted it is loaded
        from storage.
        """
        if snapshot is None:
            snapshot = self._snapshots.load(user_id)

        data = snapshot.model_copy(deep=True)
        # Starter habits come from the seed arena, never from storage.
        data.habits = [h for h in data.habits if h.user_id]
        self._quotes = list(data.quotes) if data.quotes else list(self._seed_quotes)
        data.quotes = []

        self._data = data
        self._user_id = user_id
        logger.info(
            "Repository bound to user %s (%d goals, %d tasks, %d habits)",
            user_id, len(data.goals), len(data.tasks), len(data.habits),
        )

    def unbind(self) -> None:
        """Forget the current user and drop their collections from memory."""
        if self._user_id is not None:
            logger.info("Repository unbound from user %s", self._user_id)
        self._user_id = None
        self._data = Snapshot()
        self._quotes = list(self._seed_quotes)

    def snapshot(self) -> Snapshot:
        """The full dataset as it is persisted."""
        data = self._data.model_copy(deep=True)
        data.quotes = [q.model_copy() for q in self._quotes]
        return data

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_user(self) -> str:
        if self._user_id is None:
            raise NotAuthenticatedError("No user is signed in")
        return self._user_id

    def _stamp(self) -> str:
        """UTC ISO timestamp strictly later than any previously issued."""
        current = clock.now().astimezone(timezone.utc)
        if self._last_stamp is not None and current <= self._last_stamp:
            current = self._last_stamp + timedelta(microseconds=1)
        self._last_stamp = current
        return current.isoformat(timespec="microseconds")

    def _persist(self) -> None:
        if self._user_id is None:
            return
        self._snapshots.save(self._user_id, self.snapshot())

    def _collection(self, name: str) -> list:
        return getattr(self._data, name)

    def _owned(self, name: str) -> list:
        return [r for r in self._collection(name) if r.user_id == self._user_id]

    def _index_of(self, name: str, record_id: str) -> int | None:
        for i, record in enumerate(self._collection(name)):
            if record.id == record_id and record.user_id == self._user_id:
                return i
        return None

    def _get(self, name: str, record_id: str):
        index = self._index_of(name, record_id)
        if index is None:
            return None
        return self._collection(name)[index]

    def _create(
        self, name: str, model: type[Record], fields: dict[str, Any],
        stamp: str | None = None,
    ):
        user_id = self._require_user()
        stamp = stamp or self._stamp()
        record = model.model_validate({
            **_caller_fields(fields),
            "id": _new_id(),
            "user_id": user_id,
            "created_at": stamp,
            "updated_at": stamp,
        })
        self._collection(name).append(record)
        self._persist()
        logger.info("Created %s %s for user %s", model.__name__, record.id, user_id)
        return record

    def _update(
        self, name: str, record_id: str, changes: dict[str, Any],
        stamp: str | None = None,
    ):
        self._require_user()
        index = self._index_of(name, record_id)
        if index is None:
            logger.debug("Update skipped: %s %s not found", name, record_id)
            return None

        collection = self._collection(name)
        current = collection[index]
        merged = {
            **current.model_dump(),
            **_caller_fields(changes),
            "updated_at": stamp or self._stamp(),
        }
        updated = type(current).model_validate(merged)
        collection[index] = updated
        self._persist()
        logger.info("Updated %s %s", type(current).__name__, record_id)
        return updated

    def _delete(self, name: str, record_id: str) -> bool:
        self._require_user()
        index = self._index_of(name, record_id)
        if index is None:
            return False
        removed = self._collection(name).pop(index)
        self._persist()
        logger.info("Deleted %s %s", type(removed).__name__, record_id)
        return True

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------

    def create_goal(self, **fields: Any) -> Goal:
        return self._create("goals", Goal, fields)

    def list_goals(self) -> list[Goal]:
        return self._owned("goals")

    def get_goal(self, goal_id: str) -> Goal | None:
        return self._get("goals", goal_id)

    def update_goal(self, goal_id: str, **changes: Any) -> Goal | None:
        return self._update("goals", goal_id, changes)

    def delete_goal(self, goal_id: str) -> bool:
        return self._delete("goals", goal_id)

    # ------------------------------------------------------------------
    # Tasks — completed_at follows status
    # ------------------------------------------------------------------

    def create_task(self, **fields: Any) -> Task:
        self._require_user()
        fields = _caller_fields(fields)
        stamp = self._stamp()
        if _STATUS.validate_python(fields.get("status", Status.NOT_STARTED)) is Status.COMPLETED:
            fields["completed_at"] = fields.get("completed_at") or stamp
        else:
            fields["completed_at"] = None
        return self._create("tasks", Task, fields, stamp=stamp)

    def list_tasks(self) -> list[Task]:
        return self._owned("tasks")

    def get_task(self, task_id: str) -> Task | None:
        return self._get("tasks", task_id)

    def update_task(self, task_id: str, **changes: Any) -> Task | None:
        """Update a task; completed_at is set exactly when the result is completed."""
        self._require_user()
        current = self.get_task(task_id)
        if current is None:
            return None

        changes = _caller_fields(changes)
        stamp = self._stamp()
        status = _STATUS.validate_python(changes.get("status", current.status))
        if status is not Status.COMPLETED:
            changes["completed_at"] = None
        elif not changes.get("completed_at"):
            changes["completed_at"] = current.completed_at or stamp
        return self._update("tasks", task_id, changes, stamp=stamp)

    def delete_task(self, task_id: str) -> bool:
        return self._delete("tasks", task_id)

    # ------------------------------------------------------------------
    # Study sessions
    # ------------------------------------------------------------------

    def create_study_session(self, **fields: Any) -> StudySession:
        return self._create("study_sessions", StudySession, fields)

    def list_study_sessions(self) -> list[StudySession]:
        return self._owned("study_sessions")

    def get_study_session(self, session_id: str) -> StudySession | None:
        return self._get("study_sessions", session_id)

    def update_study_session(self, session_id: str, **changes: Any) -> StudySession | None:
        return self._update("study_sessions", session_id, changes)

    def delete_study_session(self, session_id: str) -> bool:
        return self._delete("study_sessions", session_id)

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def create_workout(self, **fields: Any) -> Workout:
        return self._create("workouts", Workout, fields)

    def list_workouts(self) -> list[Workout]:
        return self._owned("workouts")

    def get_workout(self, workout_id: str) -> Workout | None:
        return self._get("workouts", workout_id)

    def update_workout(self, workout_id: str, **changes: Any) -> Workout | None:
        return self._update("workouts", workout_id, changes)

    def delete_workout(self, workout_id: str) -> bool:
        return self._delete("workouts", workout_id)

    # ------------------------------------------------------------------
    # Journal entries
    # ------------------------------------------------------------------

    def create_journal_entry(self, **fields: Any) -> JournalEntry:
        return self._create("journal_entries", JournalEntry, fields)

    def list_journal_entries(self) -> list[JournalEntry]:
        return self._owned("journal_entries")

    def get_journal_entry(self, entry_id: str) -> JournalEntry | None:
        return self._get("journal_entries", entry_id)

    def update_journal_entry(self, entry_id: str, **changes: Any) -> JournalEntry | None:
        return self._update("journal_entries", entry_id, changes)

    def delete_journal_entry(self, entry_id: str) -> bool:
        return self._delete("journal_entries", entry_id)

    # ------------------------------------------------------------------
    # Habits — starter habits merged in at read time
    # ------------------------------------------------------------------

    def create_habit(self, **fields: Any) -> Habit:
        return self._create("habits", Habit, fields)

    def list_habits(self) -> list[Habit]:
        """Starter habits, shown as the current user's, then the user's own."""
        owner = self._user_id or ""
        defaults = [h.model_copy(update={"user_id": owner}) for h in self._default_habits]
        return defaults + self._owned("habits")

    def get_habit(self, habit_id: str) -> Habit | None:
        for habit in self.list_habits():
            if habit.id == habit_id:
                return habit
        return None

    def update_habit(self, habit_id: str, **changes: Any) -> Habit | None:
        return self._update("habits", habit_id, changes)

    def delete_habit(self, habit_id: str) -> bool:
        return self._delete("habits", habit_id)

    # ------------------------------------------------------------------
    # Habit logs — one per (user, habit, date)
    # ------------------------------------------------------------------

    def log_habit(
        self,
        habit_id: str,
        completed: bool,
        notes: str | None = None,
        log_date: str | None = None,
    ) -> HabitLog:
        """Record today's (or ``log_date``'s) check-in, replacing any earlier one."""
        user_id = self._require_user()
        day = log_date or clock.today_iso()

        self._data.habit_logs = [
            log for log in self._data.habit_logs
            if not (log.user_id == user_id and log.habit_id == habit_id and log.date == day)
        ]
        entry = HabitLog(
            id=_new_id(),
            user_id=user_id,
            habit_id=habit_id,
            date=day,
            completed=completed,
            notes=notes,
            created_at=self._stamp(),
        )
        self._data.habit_logs.append(entry)
        self._persist()
        logger.info(
            "Habit %s logged %s on %s", habit_id, "done" if completed else "missed", day,
        )
        return entry

    def list_habit_logs(self, log_date: str | None = None) -> list[HabitLog]:
        logs = self._owned("habit_logs")
        if log_date:
            logs = [log for log in logs if log.date == log_date]
        return logs

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------

    def create_review(self, **fields: Any) -> Review:
        return self._create("reviews", Review, fields)

    def list_reviews(self) -> list[Review]:
        return self._owned("reviews")

    def get_review(self, review_id: str) -> Review | None:
        return self._get("reviews", review_id)

    def update_review(self, review_id: str, **changes: Any) -> Review | None:
        return self._update("reviews", review_id, changes)

    def delete_review(self, review_id: str) -> bool:
        return self._delete("reviews", review_id)

    # ------------------------------------------------------------------
    # Quotes — global, read-only apart from the favorite flag
    # ------------------------------------------------------------------

    def list_quotes(self) -> list[Quote]:
        return list(self._quotes)

    def toggle_quote_favorite(self, quote_id: str) -> Quote | None:
        self._require_user()
        for i, quote in enumerate(self._quotes):
            if quote.id == quote_id:
                toggled = quote.model_copy(update={"is_favorite": not quote.is_favorite})
                self._quotes[i] = toggled
                self._persist()
                return toggled
        return None
