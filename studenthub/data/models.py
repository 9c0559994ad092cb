"""
StudentHub Tracker — Data Models.

Every record the tracker keeps for a user: goals, tasks, study sessions,
workouts, journal entries, habits, habit logs, reviews and quotes.

Attributes are snake_case in Python and camelCase on disk (``userId``,
``createdAt``, ``studySessions``); both spellings are accepted on input.
Enumerated fields are validated when a record is built, so an unknown
category never reaches the repository. Numeric ranges (mood, energy,
percentages) are left to the caller.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class GoalCategory(str, Enum):
    ACADEMIC = "academic"
    FITNESS = "fitness"
    SPIRITUAL = "spiritual"
    PERSONAL = "personal"


class HabitCategory(str, Enum):
    SPIRITUAL = "spiritual"
    ACADEMIC = "academic"
    FITNESS = "fitness"
    PERSONAL = "personal"


class Status(str, Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WorkoutType(str, Enum):
    BOXING = "boxing"
    GYM = "gym"
    WRESTLING = "wrestling"
    CARDIO = "cardio"
    OTHER = "other"


class EntryType(str, Enum):
    MORNING_PRAYER = "morning_prayer"
    GRATITUDE = "gratitude"
    REFLECTION = "reflection"
    GENERAL = "general"


class ReviewType(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class QuoteCategory(str, Enum):
    MOTIVATION = "motivation"
    SPIRITUAL = "spiritual"
    ACADEMIC = "academic"
    FITNESS = "fitness"


# ---------------------------------------------------------------------------
# Base records
# ---------------------------------------------------------------------------


class TrackerModel(BaseModel):
    """Base model: camelCase aliases on disk, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Record(TrackerModel):
    """A stored record owned by one user.

    ``user_id`` is "" for seed data that belongs to nobody.
    """

    id: str
    user_id: str = ""
    created_at: str


class Entity(Record):
    """A record that can be edited after creation."""

    updated_at: str


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class Goal(Entity):
    title: str
    category: GoalCategory
    description: str | None = None
    initial_value: float = 0
    target_value: float
    current_value: float = 0
    status: Status = Status.NOT_STARTED
    deadline: str | None = None       # ISO date YYYY-MM-DD


class Task(Entity):
    title: str
    description: str | None = None
    status: Status = Status.NOT_STARTED
    priority: Priority = Priority.MEDIUM
    due_date: str | None = None       # ISO date YYYY-MM-DD
    tags: list[str] = Field(default_factory=list)
    goal_id: str | None = None
    estimated_duration: int | None = None   # minutes
    completed_at: str | None = None


class StudySession(Entity):
    title: str
    subject: str
    date: str                         # ISO date YYYY-MM-DD
    duration: int = 0                 # minutes
    resource: str | None = None
    notes: str | None = None
    completed: bool = False
    goal_id: str | None = None


class Workout(Entity):
    title: str
    type: WorkoutType
    date: str
    duration: int = 0                 # minutes
    details: str | None = None
    body_weight: float | None = None
    energy_mood: int = 5              # 1-10
    completed: bool = False
    goal_id: str | None = None


class JournalEntry(Entity):
    date: str
    entry_type: EntryType
    mood: int = 5                     # 1-10
    prayer_intentions: str | None = None
    gratitude_list: str | None = None
    notes: str | None = None


class Habit(Entity):
    name: str
    category: HabitCategory
    target_frequency: int = 1


class HabitLog(Record):
    """One day's check-in for a habit. Unique per (user, habit, date)."""

    habit_id: str
    date: str
    completed: bool
    notes: str | None = None


class Review(Entity):
    review_type: ReviewType
    date: str
    what_went_well: str | None = None
    what_to_improve: str | None = None
    habits_completed_percent: float = 0   # frozen at creation time
    notes: str | None = None


class Quote(Record):
    text: str
    author: str | None = None
    category: QuoteCategory
    is_favorite: bool = False


# ---------------------------------------------------------------------------
# Snapshot — the full per-user dataset
# ---------------------------------------------------------------------------


class Snapshot(TrackerModel):
    """Everything stored under one user's key.

    Each collection defaults to an empty list so snapshots written by an
    older shape still load.
    """

    goals: list[Goal] = Field(default_factory=list)
    tasks: list[Task] = Field(default_factory=list)
    study_sessions: list[StudySession] = Field(default_factory=list)
    workouts: list[Workout] = Field(default_factory=list)
    journal_entries: list[JournalEntry] = Field(default_factory=list)
    habits: list[Habit] = Field(default_factory=list)
    habit_logs: list[HabitLog] = Field(default_factory=list)
    reviews: list[Review] = Field(default_factory=list)
    quotes: list[Quote] = Field(default_factory=list)


# Snapshot attribute → record type, in persisted key order
COLLECTIONS: dict[str, type[Record]] = {
    "goals": Goal,
    "tasks": Task,
    "study_sessions": StudySession,
    "workouts": Workout,
    "journal_entries": JournalEntry,
    "habits": Habit,
    "habit_logs": HabitLog,
    "reviews": Review,
    "quotes": Quote,
}
