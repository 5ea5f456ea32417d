"""
Converters: Database row format -> domain WorkoutRecord.

Database schema (workouts table):
- id: UUID
- user_id: Owner (Supabase auth user id)
- date: DATE (YYYY-MM-DD)
- start_time, end_time: Optional timestamps
- duration: Optional integer seconds
- exercises: JSONB of shape {"exercises": [{"name", "exerciseId", "muscleGroups",
  "sets": [{"weight", "reps", "type", "completed"}]}]}
- created_at: Timestamp

The JSONB column is loosely typed and rows written by older clients may
carry missing arrays, string numbers or unknown set types. Everything is
normalized here, once, so downstream analytics can rely on strict shapes:
missing or ill-shaped nested data becomes an empty list or a zero value
and never raises.
"""

import logging
import math
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional

from domain.models import ExerciseEntry, SetEntry, SetType, WorkoutRecord

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"true", "1", "yes"}


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def _parse_date(value: Any) -> Optional[date]:
    """Parse the calendar date column. Returns None when unusable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        result = float(value)
    elif isinstance(value, str):
        try:
            result = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(result) or math.isinf(result) or result < 0:
        return 0.0
    return result


def _to_int(value: Any) -> int:
    return int(_to_float(value))


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def _parse_set_type(value: Any) -> SetType:
    try:
        return SetType(value)
    except ValueError:
        return SetType.REGULAR


def _parse_duration(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return _to_int(value)
    return None


def _parse_exercise_id(value: Any) -> Optional[str]:
    # Older clients wrote numeric catalog ids.
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _parse_set(raw: Any) -> SetEntry:
    if not isinstance(raw, dict):
        return SetEntry()
    return SetEntry(
        weight=_to_float(raw.get("weight")),
        reps=_to_int(raw.get("reps")),
        type=_parse_set_type(raw.get("type")),
        completed=_to_bool(raw.get("completed")),
    )


def _parse_exercise(raw: Any) -> ExerciseEntry:
    # Malformed entries are kept as empty exercises so the exercise count
    # (and therefore completeness) is the same in every context.
    if not isinstance(raw, dict):
        return ExerciseEntry()

    name = raw.get("name")
    sets = raw.get("sets")
    exercise_id = raw.get("exerciseId")
    if exercise_id is None:
        exercise_id = raw.get("exercise_id")
    muscle_groups = raw.get("muscleGroups") or raw.get("muscle_groups")

    return ExerciseEntry(
        name=name if isinstance(name, str) else "",
        exercise_id=_parse_exercise_id(exercise_id),
        muscle_groups=[m for m in muscle_groups if isinstance(m, str)]
        if isinstance(muscle_groups, list)
        else [],
        sets=[_parse_set(s) for s in sets] if isinstance(sets, list) else [],
    )


def extract_exercises(exercises_column: Any) -> List[ExerciseEntry]:
    """
    Normalize the `exercises` JSONB column into a list of ExerciseEntry.

    Only the nested {"exercises": [...]} shape is recognized; anything else
    is treated as an empty workout.
    """
    if not isinstance(exercises_column, dict):
        return []
    items = exercises_column.get("exercises")
    if not isinstance(items, list):
        return []
    return [_parse_exercise(item) for item in items]


def _build_record(row: Dict[str, Any], workout_date: Optional[date]) -> WorkoutRecord:
    return WorkoutRecord(
        id=str(row.get("id") or ""),
        user_id=str(row.get("user_id") or ""),
        date=workout_date,
        duration_seconds=_parse_duration(row.get("duration")),
        exercises=extract_exercises(row.get("exercises")),
        start_time=_parse_datetime(row.get("start_time")),
        end_time=_parse_datetime(row.get("end_time")),
        created_at=_parse_datetime(row.get("created_at")),
    )


def db_row_to_workout_record(row: Dict[str, Any]) -> WorkoutRecord:
    """
    Convert a database row to a domain WorkoutRecord.

    Args:
        row: Dictionary representing a database row from the workouts table.

    Returns:
        WorkoutRecord with all nested data normalized.

    Raises:
        ValueError: If the row has no usable `date`.

    Examples:
        >>> record = db_row_to_workout_record({
        ...     "id": "w-1",
        ...     "user_id": "user-1",
        ...     "date": "2024-01-03",
        ...     "duration": 1800,
        ...     "exercises": {"exercises": [{"name": "Squat", "sets": "oops"}]},
        ... })
        >>> record.exercises[0].sets
        []
    """
    workout_date = _parse_date(row.get("date"))
    if workout_date is None:
        raise ValueError(f"Unparseable workout date: {row.get('date')!r}")
    return _build_record(row, workout_date)


def db_rows_to_workout_records(
    rows: Iterable[Dict[str, Any]],
    *,
    keep_undated: bool = False,
) -> List[WorkoutRecord]:
    """
    Convert a batch of rows.

    A record without a usable date cannot take part in any date-based
    analytic, so by default it is dropped with a warning rather than
    failing the whole batch. Draft detection passes `keep_undated=True`
    and gets such rows back with `date=None`.
    """
    records: List[WorkoutRecord] = []
    for row in rows:
        if not isinstance(row, dict):
            logger.warning(f"Skipping non-object workout row: {type(row)}")
            continue
        workout_date = _parse_date(row.get("date"))
        if workout_date is None and not keep_undated:
            logger.warning(f"Skipping workout {row.get('id')}: unparseable date {row.get('date')!r}")
            continue
        records.append(_build_record(row, workout_date))
    return records
