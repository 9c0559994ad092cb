"""
StudentHub Tracker — Analytics.

Read-side views over repository state: today's tasks, habit completion,
weekly study time and the quote of the day. Everything is recomputed on
each call; collections are small and in memory, so nothing is cached.

Functions that depend on the calendar accept an optional ``today`` so
callers (and tests) can pin the date.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

from studenthub.core import clock
from studenthub.data.models import Status

if TYPE_CHECKING:
    from studenthub.data.models import Goal, Quote, Task
    from studenthub.data.repository import TrackerRepository

WEEK_DAYS = 7


def today_tasks(repo: TrackerRepository, today: date | None = None) -> list[Task]:
    """Tasks due on the local calendar date."""
    day = (today or clock.today()).isoformat()
    return [t for t in repo.list_tasks() if t.due_date == day]


def habit_completion_rate(repo: TrackerRepository, on: date | str | None = None) -> float:
    """Percentage of habits (starter habits included) completed on a date.

    ``on`` is a date or a YYYY-MM-DD string. Returns 0 when there are no
    habits.
    """
    if on is None:
        on = clock.today()
    day = on if isinstance(on, str) else on.isoformat()

    habits = repo.list_habits()
    if not habits:
        return 0.0

    # Logs left behind by deleted habits do not count.
    habit_ids = {h.id for h in habits}
    completed = sum(
        1 for log in repo.list_habit_logs(day)
        if log.completed and log.habit_id in habit_ids
    )
    return completed / len(habits) * 100


def _week_start(today: date | None) -> date:
    return (today or clock.today()) - timedelta(days=WEEK_DAYS)


def weekly_study_minutes(repo: TrackerRepository, today: date | None = None) -> int:
    """Minutes of completed study within the last 7 days (inclusive)."""
    since = _week_start(today)
    total = 0
    for session in repo.list_study_sessions():
        day = clock.parse_day(session.date)
        if session.completed and day is not None and day >= since:
            total += session.duration
    return total


def weekly_workouts(repo: TrackerRepository, today: date | None = None) -> int:
    """Number of completed workouts within the last 7 days (inclusive)."""
    since = _week_start(today)
    count = 0
    for workout in repo.list_workouts():
        day = clock.parse_day(workout.date)
        if workout.completed and day is not None and day >= since:
            count += 1
    return count


def today_quote(repo: TrackerRepository, today: date | None = None) -> Quote | None:
    """Quote of the day: rotates by day of month, stable within a day."""
    quotes = repo.list_quotes()
    if not quotes:
        return None
    day_of_month = (today or clock.today()).day
    return quotes[day_of_month % len(quotes)]


def goal_progress(goal: Goal) -> float:
    """Progress from initial to target value, clamped to 0-100.

    A goal whose target equals its initial value counts as 100.
    """
    span = goal.target_value - goal.initial_value
    if span == 0:
        return 100.0
    progress = (goal.current_value - goal.initial_value) / span * 100
    return max(0.0, min(100.0, progress))


def task_completion_rate(tasks: list[Task]) -> float:
    """Percentage of the given tasks that are completed; 0 for none."""
    if not tasks:
        return 0.0
    done = sum(1 for t in tasks if t.status is Status.COMPLETED)
    return done / len(tasks) * 100
