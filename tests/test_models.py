"""Tests for studenthub.data.models — entity records and snapshot shape."""

import json

import pytest
from pydantic import ValidationError

from studenthub.data.models import (
    COLLECTIONS,
    Goal,
    GoalCategory,
    HabitLog,
    Snapshot,
    Status,
    Task,
    Workout,
    WorkoutType,
)

STAMP = "2026-02-07T09:00:00+00:00"


def test_goal_creation_with_defaults():
    goal = Goal(
        id="g1", title="Read 12 books", category="academic",
        target_value=12, created_at=STAMP, updated_at=STAMP,
    )
    assert goal.category is GoalCategory.ACADEMIC
    assert goal.status is Status.NOT_STARTED
    assert goal.initial_value == 0
    assert goal.current_value == 0
    assert goal.deadline is None
    assert goal.user_id == ""


def test_unknown_category_rejected():
    with pytest.raises(ValidationError):
        Goal(
            id="g1", title="X", category="cooking",
            target_value=1, created_at=STAMP, updated_at=STAMP,
        )


def test_unknown_workout_type_rejected():
    with pytest.raises(ValidationError):
        Workout(
            id="w1", title="Swim", type="swimming", date="2026-02-07",
            created_at=STAMP, updated_at=STAMP,
        )


def test_out_of_range_mood_is_not_rejected():
    workout = Workout(
        id="w1", title="Sparring", type="boxing", date="2026-02-07",
        energy_mood=42, created_at=STAMP, updated_at=STAMP,
    )
    assert workout.type is WorkoutType.BOXING
    assert workout.energy_mood == 42


def test_task_tags_default_to_new_list():
    a = Task(id="t1", title="A", created_at=STAMP, updated_at=STAMP)
    b = Task(id="t2", title="B", created_at=STAMP, updated_at=STAMP)
    a.tags.append("exam")
    assert b.tags == []


def test_accepts_camel_case_input():
    task = Task.model_validate({
        "id": "t1", "userId": "u1", "title": "Essay", "dueDate": "2026-02-07",
        "estimatedDuration": 90, "createdAt": STAMP, "updatedAt": STAMP,
    })
    assert task.user_id == "u1"
    assert task.due_date == "2026-02-07"
    assert task.estimated_duration == 90


def test_dumps_camel_case_keys():
    log = HabitLog(
        id="l1", user_id="u1", habit_id="h1", date="2026-02-07",
        completed=True, created_at=STAMP,
    )
    data = json.loads(log.model_dump_json(by_alias=True))
    assert data["habitId"] == "h1"
    assert data["userId"] == "u1"
    assert "updatedAt" not in data


def test_habit_log_has_no_updated_at():
    assert "updated_at" not in HabitLog.model_fields


def test_snapshot_defaults_to_empty_collections():
    snapshot = Snapshot()
    for attr in COLLECTIONS:
        assert getattr(snapshot, attr) == []


def test_snapshot_persisted_keys():
    data = json.loads(Snapshot().model_dump_json(by_alias=True))
    assert set(data) == {
        "goals", "tasks", "studySessions", "workouts", "journalEntries",
        "habits", "habitLogs", "reviews", "quotes",
    }
