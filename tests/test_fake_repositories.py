"""
Tests for the in-memory fake repositories.

The fakes stand in for Supabase across the unit and API tests, so their
filtering, ordering and failure behavior must match the real adapter.
"""
import pytest
from datetime import date

from application.exceptions import FetchError
from tests.fakes import (
    FakeWorkoutRecordRepository,
    create_workout_record_repo,
    make_exercise,
    make_set,
    make_workout_row,
)

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


class TestFakeWorkoutRecordRepository:
    """Test the fake record source."""

    def test_rows_returned_in_date_order(self):
        repo = FakeWorkoutRecordRepository()
        repo.seed([
            make_workout_row("b", "2024-01-05", []),
            make_workout_row("a", "2024-01-01", []),
        ])

        rows = repo.fetch_workout_records("test_user")

        assert [r["id"] for r in rows] == ["a", "b"]

    def test_date_bounds_inclusive(self):
        repo = create_workout_record_repo(num_workouts=5, gap_days=1)

        rows = repo.fetch_workout_records(
            "test_user",
            start_date=date(2024, 1, 2),
            end_date=date(2024, 1, 4),
        )

        assert [r["date"] for r in rows] == ["2024-01-02", "2024-01-03", "2024-01-04"]

    def test_rows_scoped_to_user(self):
        repo = FakeWorkoutRecordRepository()
        repo.seed([make_workout_row("a", "2024-01-01", [], user_id="someone_else")])

        assert repo.fetch_workout_records("test_user") == []

    def test_undated_rows_excluded_from_date_ranges(self):
        repo = FakeWorkoutRecordRepository()
        repo.seed([
            make_workout_row("a", "2024-01-02", []),
            make_workout_row("undated", None, [], duration=None),
        ])

        ranged = repo.fetch_workout_records("test_user", start_date=date(2024, 1, 1))
        everything = repo.fetch_workout_records("test_user")

        assert [r["id"] for r in ranged] == ["a"]
        assert sorted(r["id"] for r in everything) == ["a", "undated"]

    def test_fetch_single_row(self):
        repo = create_workout_record_repo(num_workouts=2)

        assert repo.fetch_workout_record("test_user", "w2")["id"] == "w2"
        assert repo.fetch_workout_record("test_user", "missing") is None
        assert repo.fetch_workout_record("someone_else", "w2") is None

    def test_failure_toggle(self):
        repo = create_workout_record_repo(num_workouts=1)
        repo.fail_with = "unreachable"

        with pytest.raises(FetchError):
            repo.fetch_workout_records("test_user")
        with pytest.raises(FetchError):
            repo.fetch_workout_record("test_user", "w1")
        with pytest.raises(FetchError):
            repo.delete_workouts("test_user", ["w1"])

    def test_delete(self):
        repo = create_workout_record_repo(num_workouts=2, num_drafts=1)

        assert repo.delete_workouts("test_user", ["d1", "missing"]) == 1
        assert [r["id"] for r in repo.all_rows("test_user")] == ["w1", "w2"]

    def test_reset(self):
        repo = create_workout_record_repo(num_workouts=2)
        repo.fail_with = "x"
        repo.reset()

        assert repo.fail_with is None
        assert repo.fetch_workout_records("test_user") == []

    def test_row_builders_shape(self):
        row = make_workout_row("w", "2024-01-01", [make_exercise("Squat", [make_set(100, 5)])])

        assert row["exercises"] == {"exercises": [{
            "name": "Squat",
            "sets": [{"weight": 100, "reps": 5, "completed": True, "type": "regular"}],
        }]}
        assert row["duration"] == 3600
