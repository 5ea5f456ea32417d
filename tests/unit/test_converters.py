"""
Unit tests for domain/converters/db_converters.py

Tests cover:
- Permissive normalization of the exercises JSONB column
- Numeric coercion of weights, reps and durations
- Batch conversion skipping undatable rows, or keeping them for draft detection
"""

import logging
from datetime import date, datetime, timezone

import pytest

from domain.converters import db_row_to_workout_record, db_rows_to_workout_records
from domain.converters.db_converters import extract_exercises
from domain.models import SetType


def _row(**overrides):
    row = {
        "id": "w-1",
        "user_id": "user-1",
        "date": "2024-01-03",
        "duration": 1800,
        "exercises": {"exercises": []},
        "created_at": "2024-01-03T10:00:00Z",
    }
    row.update(overrides)
    return row


@pytest.mark.unit
class TestDbRowToWorkoutRecord:
    """Test conversion of a single database row."""

    def test_basic_fields(self):
        record = db_row_to_workout_record(_row())

        assert record.id == "w-1"
        assert record.user_id == "user-1"
        assert record.date == date(2024, 1, 3)
        assert record.duration_seconds == 1800
        assert record.created_at == datetime(2024, 1, 3, 10, 0, tzinfo=timezone.utc)

    def test_nested_exercises_and_sets(self):
        record = db_row_to_workout_record(_row(exercises={"exercises": [
            {
                "name": "Bench Press",
                "exerciseId": "ex-1",
                "muscleGroups": ["chest", "triceps"],
                "sets": [
                    {"weight": 100, "reps": 5, "type": "regular", "completed": True},
                    {"weight": "60", "reps": "10", "type": "warmup", "completed": "true"},
                ],
            },
        ]}))

        exercise = record.exercises[0]
        assert exercise.name == "Bench Press"
        assert exercise.exercise_id == "ex-1"
        assert exercise.muscle_groups == ["chest", "triceps"]
        assert exercise.sets[0].weight == 100.0
        assert exercise.sets[1].weight == 60.0
        assert exercise.sets[1].reps == 10
        assert exercise.sets[1].type == SetType.WARMUP
        assert exercise.sets[1].completed is True

    def test_timestamp_datetime_in_date_column(self):
        record = db_row_to_workout_record(_row(date="2024-02-10T18:30:00+00:00"))
        assert record.date == date(2024, 2, 10)

    def test_missing_duration_is_none(self):
        record = db_row_to_workout_record(_row(duration=None))
        assert record.duration_seconds is None
        assert record.is_complete is False

    def test_string_duration_coerced(self):
        record = db_row_to_workout_record(_row(duration="2400"))
        assert record.duration_seconds == 2400

    def test_negative_duration_becomes_zero(self):
        record = db_row_to_workout_record(_row(duration=-50))
        assert record.duration_seconds == 0

    def test_missing_date_raises(self):
        with pytest.raises(ValueError):
            db_row_to_workout_record(_row(date=None))

    def test_impossible_date_raises(self):
        with pytest.raises(ValueError):
            db_row_to_workout_record(_row(date="2024-13-45"))

    def test_bad_timestamp_becomes_none(self):
        record = db_row_to_workout_record(_row(created_at="yesterday"))
        assert record.created_at is None


@pytest.mark.unit
class TestExtractExercises:
    """Test normalization of the loosely typed exercises column."""

    def test_none_column_is_empty(self):
        assert extract_exercises(None) == []

    def test_bare_list_is_not_recognized(self):
        assert extract_exercises([{"name": "Squat", "sets": []}]) == []

    def test_non_list_exercises_key_is_empty(self):
        assert extract_exercises({"exercises": "Squat"}) == []

    def test_malformed_entry_kept_as_empty_exercise(self):
        exercises = extract_exercises({"exercises": ["oops", {"name": "Squat"}]})

        assert len(exercises) == 2
        assert exercises[0].name == ""
        assert exercises[0].sets == []
        assert exercises[1].name == "Squat"

    def test_non_list_sets_become_empty(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "sets": {"weight": 1}}]})
        assert exercises[0].sets == []

    def test_bad_numbers_become_zero(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "sets": [
            {"weight": "heavy", "reps": None, "completed": True},
            {"weight": float("nan"), "reps": 5, "completed": True},
            {"weight": -20, "reps": 5, "completed": True},
            {"weight": True, "reps": 5, "completed": True},
        ]}]})

        assert [s.weight for s in exercises[0].sets] == [0.0, 0.0, 0.0, 0.0]
        assert exercises[0].sets[0].reps == 0

    def test_unknown_set_type_defaults_to_regular(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "sets": [
            {"weight": 100, "reps": 5, "type": "dropset", "completed": True},
        ]}]})
        assert exercises[0].sets[0].type == SetType.REGULAR

    def test_missing_completed_is_false(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "sets": [
            {"weight": 100, "reps": 5},
        ]}]})
        assert exercises[0].sets[0].completed is False

    @pytest.mark.parametrize("raw_id, expected", [
        (42, "42"),
        ({"id": 1}, None),
        (["x"], None),
        (True, None),
        ("", None),
    ])
    def test_non_string_exercise_id_is_normalized(self, raw_id, expected):
        exercises = extract_exercises({"exercises": [
            {"name": "Squat", "exerciseId": raw_id, "sets": [{"weight": 100, "reps": 5, "completed": True}]},
        ]})

        assert exercises[0].exercise_id == expected
        assert exercises[0].sets[0].is_qualifying

    def test_snake_case_exercise_id(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "exercise_id": "ex-9"}]})
        assert exercises[0].exercise_id == "ex-9"

    def test_non_dict_set_becomes_empty_set(self):
        exercises = extract_exercises({"exercises": [{"name": "Squat", "sets": [42]}]})
        assert exercises[0].sets[0].weight == 0.0
        assert exercises[0].sets[0].is_qualifying is False


@pytest.mark.unit
class TestDbRowsToWorkoutRecords:
    """Test batch conversion."""

    def test_converts_all_valid_rows(self):
        records = db_rows_to_workout_records([_row(id="a"), _row(id="b", date="2024-01-04")])
        assert [r.id for r in records] == ["a", "b"]

    def test_skips_undatable_rows_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="domain.converters.db_converters"):
            records = db_rows_to_workout_records([_row(id="a"), _row(id="bad", date="")])

        assert [r.id for r in records] == ["a"]
        assert "bad" in caplog.text

    def test_malformed_exercise_id_keeps_the_workout(self):
        records = db_rows_to_workout_records([_row(id="a", exercises={"exercises": [
            {"name": "Squat", "exerciseId": 42, "sets": [{"weight": 100, "reps": 5, "completed": True}]},
            {"name": "Row", "exerciseId": {"id": 1}, "sets": []},
        ]})])

        assert [r.id for r in records] == ["a"]
        assert [e.exercise_id for e in records[0].exercises] == ["42", None]

    def test_keep_undated_returns_rows_without_date(self, caplog):
        with caplog.at_level(logging.WARNING, logger="domain.converters.db_converters"):
            records = db_rows_to_workout_records(
                [_row(id="a"), _row(id="undated", date=None, duration=None)],
                keep_undated=True,
            )

        assert [r.id for r in records] == ["a", "undated"]
        assert records[1].date is None
        assert records[1].is_complete is False
        assert "undated" not in caplog.text

    def test_skips_non_dict_rows(self):
        records = db_rows_to_workout_records([None, _row(id="a")])
        assert [r.id for r in records] == ["a"]

    def test_empty_input(self):
        assert db_rows_to_workout_records([]) == []
