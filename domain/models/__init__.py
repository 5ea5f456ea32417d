"""
Domain models for the progress analytics API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the core business concepts:
- WorkoutRecord: One logged session (date, duration, exercises)
- ExerciseEntry: One exercise performed within a session
- SetEntry: A single set (weight, reps, type, completed)

Usage:
    >>> from domain.models import WorkoutRecord, ExerciseEntry, SetEntry

    >>> record = WorkoutRecord(
    ...     id="w-1",
    ...     user_id="user-1",
    ...     date="2024-01-03",
    ...     duration_seconds=3600,
    ...     exercises=[
    ...         ExerciseEntry(
    ...             name="Bench Press",
    ...             sets=[SetEntry(weight=100, reps=5, completed=True)],
    ...         )
    ...     ],
    ... )
    >>> record.is_complete
    True
"""

from domain.models.workout import ExerciseEntry, SetEntry, SetType, WorkoutRecord

__all__ = [
    "WorkoutRecord",
    "ExerciseEntry",
    "SetEntry",
    "SetType",
]
