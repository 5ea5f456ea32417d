"""
Domain converters for transforming stored rows into WorkoutRecord models.

- db_row_to_workout_record: Database row (from Supabase) -> WorkoutRecord
- db_rows_to_workout_records: Batch variant that skips undatable rows

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import db_row_to_workout_record
    >>> record = db_row_to_workout_record({
    ...     "id": "w-1",
    ...     "user_id": "user-1",
    ...     "date": "2024-01-03",
    ...     "duration": 3600,
    ...     "exercises": {"exercises": []},
    ... })
    >>> record.is_complete
    False
"""

from domain.converters.db_converters import (
    db_row_to_workout_record,
    db_rows_to_workout_records,
)

__all__ = [
    "db_row_to_workout_record",
    "db_rows_to_workout_records",
]
