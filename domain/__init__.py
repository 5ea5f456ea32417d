"""
Domain layer for the progress analytics API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import ExerciseEntry, SetEntry, SetType, WorkoutRecord

__all__ = [
    "ExerciseEntry",
    "SetEntry",
    "SetType",
    "WorkoutRecord",
]
