"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutRecordRepository, create_workout_record_repo

    # Direct instantiation
    repo = FakeWorkoutRecordRepository()
    repo.seed([make_workout_row("w1", "2024-03-01", [...])])

    # Factory function with pre-populated data
    repo = create_workout_record_repo(user_id="user1", num_workouts=5)
"""
from datetime import date, timedelta
from typing import Optional

from tests.fakes.workout_record_repository import (
    FakeWorkoutRecordRepository,
    make_exercise,
    make_set,
    make_workout_row,
)


# =============================================================================
# Factory Functions
# =============================================================================


def create_workout_record_repo(
    *,
    user_id: str = "test_user",
    num_workouts: int = 0,
    num_drafts: int = 0,
    start: Optional[date] = None,
    gap_days: int = 2,
) -> FakeWorkoutRecordRepository:
    """
    Create a FakeWorkoutRecordRepository with optional pre-populated workouts.

    Complete workouts are spaced `gap_days` apart from `start` and each hold
    one bench press exercise whose weight rises by 5 per workout. Drafts have
    no duration and are dated after the last complete workout.

    Args:
        user_id: User ID for generated workouts
        num_workouts: Number of complete workouts to create
        num_drafts: Number of incomplete drafts to create
        start: Date of the first workout (default 2024-01-01)
        gap_days: Days between consecutive workouts

    Returns:
        Pre-populated FakeWorkoutRecordRepository
    """
    repo = FakeWorkoutRecordRepository()
    start = start or date(2024, 1, 1)

    rows = []
    for i in range(num_workouts):
        day = start + timedelta(days=i * gap_days)
        rows.append(make_workout_row(
            f"w{i + 1}",
            day.isoformat(),
            [make_exercise("Bench Press", [
                make_set(100 + i * 5, 5),
                make_set(100 + i * 5, 5),
            ])],
            user_id=user_id,
        ))

    for i in range(num_drafts):
        day = start + timedelta(days=num_workouts * gap_days + i)
        rows.append(make_workout_row(
            f"d{i + 1}",
            day.isoformat(),
            [],
            user_id=user_id,
            duration=None,
        ))

    repo.seed(rows)
    return repo


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Fake implementations
    "FakeWorkoutRecordRepository",
    # Row builders
    "make_set",
    "make_exercise",
    "make_workout_row",
    # Factory functions
    "create_workout_record_repo",
]
