"""
Integration tests for Progress API endpoints.

Tests cover:
- Stats, streaks, volume, frequency and trend endpoints
- Exercise detail including 404 for unknown exercises
- 502 when the record source fails
- Drafts never reaching any response
"""
import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.core.progress_service import ProgressAnalyticsService
from backend.settings import Settings
from api.deps import get_current_user, get_progress_service, get_settings
from tests.fakes import FakeWorkoutRecordRepository, make_exercise, make_set, make_workout_row

TODAY = date(2024, 1, 10)


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def record_repo():
    """Create a fake record repository with test data."""
    repo = FakeWorkoutRecordRepository()
    repo.seed([
        make_workout_row("w1", "2024-01-06", [
            make_exercise("Squat", [make_set(200, 5), make_set(180, 5)]),
        ]),
        make_workout_row("w2", "2024-01-08", [
            make_exercise("Squat", [make_set(220, 3)]),
            make_exercise("Bench Press", [make_set(100, 5)]),
        ]),
        make_workout_row("draft", "2024-01-09", [], duration=0),
    ])
    return repo


@pytest.fixture
def client(record_repo):
    """Create a test client with fake dependencies."""
    settings = Settings(environment="test", _env_file=None)
    app = create_app(settings=settings)

    async def mock_user():
        return "test_user"

    def mock_service():
        return ProgressAnalyticsService(record_repo, clock=lambda: TODAY)

    app.dependency_overrides[get_current_user] = mock_user
    app.dependency_overrides[get_progress_service] = mock_service
    app.dependency_overrides[get_settings] = lambda: settings

    yield TestClient(app)

    app.dependency_overrides.clear()


# =============================================================================
# Stats
# =============================================================================


@pytest.mark.integration
class TestStatsEndpoints:
    """Tests for /progress/stats and /progress/streaks."""

    def test_stats(self, client):
        response = client.get("/progress/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["total_workouts"] == 2
        assert data["current_streak"] == 2
        assert data["longest_streak"] == 2
        assert data["total_volume_all_time"] == 3060.0

    def test_enhanced_stats(self, client):
        response = client.get("/progress/stats/enhanced")

        assert response.status_code == 200
        data = response.json()
        assert data["this_week_workouts"] == 2
        assert data["personal_records"] == 2
        assert data["average_workout_minutes"] == 60

    def test_streaks(self, client):
        response = client.get("/progress/streaks")
        assert response.json() == {"current_streak": 2, "longest_streak": 2}


# =============================================================================
# Volume and frequency
# =============================================================================


@pytest.mark.integration
class TestVolumeEndpoints:
    """Tests for /progress/volume and /progress/frequency."""

    def test_volume_default_window(self, client):
        response = client.get("/progress/volume")

        assert response.status_code == 200
        data = response.json()
        assert data["window_days"] == 30
        assert data["data"] == [
            {"date": "2024-01-06", "total_volume": 1900.0, "total_sets": 2, "workout_count": 1},
            {"date": "2024-01-08", "total_volume": 1160.0, "total_sets": 2, "workout_count": 1},
        ]

    def test_volume_custom_window(self, client):
        response = client.get("/progress/volume?window_days=3")
        assert [d["date"] for d in response.json()["data"]] == ["2024-01-08"]

    def test_volume_rejects_zero_window(self, client):
        response = client.get("/progress/volume?window_days=0")
        assert response.status_code == 422

    def test_frequency(self, client):
        response = client.get("/progress/frequency?weeks=4")

        assert response.status_code == 200
        assert [w["week_start"] for w in response.json()["data"]] == ["2023-12-31", "2024-01-07"]


# =============================================================================
# Exercises
# =============================================================================


@pytest.mark.integration
class TestExerciseEndpoints:
    """Tests for /progress/exercises."""

    def test_trends(self, client):
        response = client.get("/progress/exercises")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        squat = data["exercises"][0]
        assert squat["exercise_name"] == "Squat"
        assert squat["current_max"] == 220
        assert squat["previous_max"] == 200
        assert squat["trend_percent"] == 10.0
        assert squat["last_workout_date"] == "2024-01-08"

    def test_trends_limit(self, client):
        response = client.get("/progress/exercises?limit=1")
        assert response.json()["total"] == 1

    def test_detail(self, client):
        response = client.get("/progress/exercises/Squat")

        assert response.status_code == 200
        data = response.json()
        assert data["first_recorded"] == "2024-01-06"
        assert data["all_time_max"] == 220
        assert [pr["weight"] for pr in data["personal_records"]] == [200, 220]

    def test_detail_with_space_in_name(self, client):
        response = client.get("/progress/exercises/Bench%20Press")
        assert response.status_code == 200
        assert response.json()["total_sets"] == 1

    def test_detail_unknown_exercise(self, client):
        response = client.get("/progress/exercises/Deadlift")
        assert response.status_code == 404


# =============================================================================
# Overview and failures
# =============================================================================


@pytest.mark.integration
class TestOverviewAndFailures:
    """Tests for /progress/overview and source failures."""

    def test_overview(self, client, record_repo):
        response = client.get("/progress/overview")

        assert response.status_code == 200
        data = response.json()
        assert data["stats"]["total_workouts"] == 2
        assert len(data["volume"]) == 2
        assert len(data["trends"]) == 2
        assert record_repo.fetch_calls == 1

    @pytest.mark.parametrize("path", [
        "/progress/stats",
        "/progress/stats/enhanced",
        "/progress/streaks",
        "/progress/volume",
        "/progress/frequency",
        "/progress/exercises",
        "/progress/exercises/Squat",
        "/progress/overview",
    ])
    def test_fetch_failure_returns_502(self, client, record_repo, path):
        record_repo.fail_with = "Supabase unavailable"

        response = client.get(path)

        assert response.status_code == 502
        assert "Supabase unavailable" in response.json()["detail"]


@pytest.mark.integration
class TestAuthRequired:
    """Endpoints require authentication."""

    def test_missing_credentials(self):
        app = create_app(settings=Settings(environment="test", _env_file=None))
        app.dependency_overrides[get_progress_service] = lambda: ProgressAnalyticsService(
            FakeWorkoutRecordRepository()
        )

        response = TestClient(app).get("/progress/stats")

        assert response.status_code == 401
