"""
StudentHub Tracker — Seed data.

Quotes and starter habits that exist before the user authors anything.
Both belong to no user (``user_id == ""``) and carry fixed ids so habit
logs recorded against a starter habit still match after a reload.
"""

from __future__ import annotations

from studenthub.data.models import Habit, HabitCategory, Quote, QuoteCategory

_QUOTES: list[tuple[str, str, QuoteCategory]] = [
    (
        "The only way to do great work is to love what you do.",
        "Steve Jobs",
        QuoteCategory.MOTIVATION,
    ),
    (
        "Success is not final, failure is not fatal: "
        "it is the courage to continue that counts.",
        "Winston Churchill",
        QuoteCategory.MOTIVATION,
    ),
    (
        "And whoever relies upon Allah - then He is sufficient for him.",
        "Quran 65:3",
        QuoteCategory.SPIRITUAL,
    ),
    (
        "The best of people are those who benefit others.",
        "Prophet Muhammad (PBUH)",
        QuoteCategory.SPIRITUAL,
    ),
    (
        "Education is the most powerful weapon which you can use to change the world.",
        "Nelson Mandela",
        QuoteCategory.ACADEMIC,
    ),
]

# Starter habits for a student-athlete: (name, category, times per day)
_HABITS: list[tuple[str, HabitCategory, int]] = [
    ("Fajr Prayer", HabitCategory.SPIRITUAL, 1),
    ("Morning Workout", HabitCategory.FITNESS, 1),
    ("Study Session", HabitCategory.ACADEMIC, 2),
    ("Gratitude Journal", HabitCategory.PERSONAL, 1),
    ("Evening Review", HabitCategory.PERSONAL, 1),
]


def default_quotes(created_at: str) -> list[Quote]:
    return [
        Quote(
            id=f"default-quote-{i}",
            text=text,
            author=author,
            category=category,
            created_at=created_at,
        )
        for i, (text, author, category) in enumerate(_QUOTES, start=1)
    ]


def default_habits(created_at: str) -> list[Habit]:
    return [
        Habit(
            id=f"default-habit-{i}",
            name=name,
            category=category,
            target_frequency=frequency,
            created_at=created_at,
            updated_at=created_at,
        )
        for i, (name, category, frequency) in enumerate(_HABITS, start=1)
    ]
