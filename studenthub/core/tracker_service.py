"""
StudentHub Tracker — UI-Agnostic Tracker Service.

Workflows that span several repository calls: the dashboard summary,
ticking a task off, submitting a review with the habit percentage frozen at
submission time, and adding timer minutes to a study session.

Each UI (CLI, web, desktop) calls this service and renders the returned
objects in its own way.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

from pydantic.alias_generators import to_snake

from studenthub.core import analytics, clock
from studenthub.data.models import Status

if TYPE_CHECKING:
    from studenthub.data.models import Goal, Quote, Review, StudySession, Task
    from studenthub.data.repository import TrackerRepository

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    """Everything the home screen shows for one day."""

    date: str
    quote: Quote | None = None
    today_tasks: list[Task] = field(default_factory=list)
    completed_tasks: int = 0
    task_completion_rate: float = 0.0
    habit_completion_rate: float = 0.0
    weekly_study_minutes: int = 0
    weekly_workouts: int = 0

    def render(self) -> str:
        """Plain-text rendering for terminals and logs."""
        lines = [f"StudentHub — {self.date}"]
        if self.quote is not None:
            author = f" — {self.quote.author}" if self.quote.author else ""
            lines.append(f'"{self.quote.text}"{author}')
        lines.append("")
        lines.append(
            f"Tasks today: {self.completed_tasks}/{len(self.today_tasks)} done "
            f"({self.task_completion_rate:.0f}%)"
        )
        for task in self.today_tasks:
            mark = "x" if task.status is Status.COMPLETED else " "
            lines.append(f"  [{mark}] {task.title} ({task.priority.value})")
        lines.append(f"Habits today: {self.habit_completion_rate:.0f}%")
        lines.append(f"Study this week: {self.weekly_study_minutes} min")
        lines.append(f"Workouts this week: {self.weekly_workouts}")
        return "\n".join(lines)


class TrackerService:
    """Multi-step tracker workflows over one repository."""

    def __init__(self, repository: TrackerRepository) -> None:
        self._repo = repository

    def dashboard(self, today: date | None = None) -> DashboardSummary:
        day = today or clock.today()
        tasks = analytics.today_tasks(self._repo, day)
        return DashboardSummary(
            date=day.isoformat(),
            quote=analytics.today_quote(self._repo, day),
            today_tasks=tasks,
            completed_tasks=sum(1 for t in tasks if t.status is Status.COMPLETED),
            task_completion_rate=analytics.task_completion_rate(tasks),
            habit_completion_rate=analytics.habit_completion_rate(self._repo, day),
            weekly_study_minutes=analytics.weekly_study_minutes(self._repo, day),
            weekly_workouts=analytics.weekly_workouts(self._repo, day),
        )

    def set_task_completed(self, task_id: str, completed: bool) -> Task | None:
        """Tick a task off, or reopen it as not started."""
        status = Status.COMPLETED if completed else Status.NOT_STARTED
        return self._repo.update_task(task_id, status=status)

    def record_review(
        self, review_type: str, review_date: str | None = None, **fields: Any,
    ) -> Review:
        """Create a review with the habit completion rate of its date.

        The percentage is stored as computed now and is not refreshed if
        habit logs change later. A ``date`` among ``fields`` is used when
        ``review_date`` is not given; the type and percentage always come
        from this call.
        """
        fields = {to_snake(k): v for k, v in fields.items()}
        day = review_date or fields.get("date") or clock.today_iso()
        percent = analytics.habit_completion_rate(self._repo, day)
        review = self._repo.create_review(**{
            **fields,
            "review_type": review_type,
            "date": day,
            "habits_completed_percent": percent,
        })
        logger.info("Review %s recorded for %s at %.0f%% habits", review.id, day, percent)
        return review

    def add_study_minutes(self, session_id: str, minutes: int) -> StudySession | None:
        """Add timer minutes to a study session through the repository."""
        session = self._repo.get_study_session(session_id)
        if session is None:
            return None
        if minutes <= 0:
            return session
        return self._repo.update_study_session(
            session_id, duration=session.duration + minutes,
        )

    def goal_progress_report(self) -> list[tuple[Goal, float]]:
        return [(g, analytics.goal_progress(g)) for g in self._repo.list_goals()]
