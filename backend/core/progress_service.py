"""
Progress Analytics Service.

This module provides the business logic behind the progress page:
- Volume over time (daily) and workout frequency (weekly)
- Current and longest streaks
- Per-exercise strength trends and exercise detail with personal records
- Headline progress stats
- Workout history cards, single-workout view and deletion
- Incomplete-draft cleanup

Every operation takes the user id explicitly, fetches that user's raw
records once from the WorkoutRecordRepository, normalizes them, applies
the completeness filter and runs pure aggregation functions over the
result. Nothing is cached between calls.

Fetch failures are not retried. They come back as a failed
AnalyticsResult carrying the FetchError; a failed result never holds
partial data.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Callable, List, Optional, TypeVar
import logging

from application.exceptions import FetchError
from application.ports.workout_record_repository import WorkoutRecordRepository
from application.results import AnalyticsResult
from domain.converters import db_rows_to_workout_records
from domain.models import WorkoutRecord
from backend.core.completeness import split_workouts
from backend.core.stats import (
    EnhancedProgressStats,
    ProgressStats,
    compute_enhanced_progress_stats,
    compute_progress_stats,
)
from backend.core.streaks import STREAK_GAP_TOLERANCE_DAYS, StreakState, calculate_streaks
from backend.core.summaries import (
    WorkoutDetail,
    WorkoutSummary,
    build_workout_detail,
    build_workout_history,
    history_start_date,
)
from backend.core.trends import (
    ExerciseDetail,
    ExerciseTrend,
    analyze_exercise_trends,
    build_exercise_detail,
)
from backend.core.volume import (
    VolumeSample,
    WeeklyFrequency,
    build_volume_series,
    build_weekly_frequency,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ProgressOverview:
    """Everything the progress page needs, computed from a single fetch."""
    stats: EnhancedProgressStats
    volume: List[VolumeSample] = field(default_factory=list)
    trends: List[ExerciseTrend] = field(default_factory=list)
    window_days: int = 30


class ProgressAnalyticsService:
    """
    Service for workout progress analytics.

    Provides business logic on top of repository data access, including:
    - Completeness filtering of raw records
    - Volume, streak and trend aggregation
    - Draft detection and deletion
    """

    def __init__(
        self,
        record_repo: WorkoutRecordRepository,
        *,
        streak_tolerance_days: int = STREAK_GAP_TOLERANCE_DAYS,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize the analytics service.

        Args:
            record_repo: Repository supplying raw workout rows
            streak_tolerance_days: Maximum gap in days that keeps a streak alive
            clock: Returns "today"; injectable for deterministic tests
        """
        self._record_repo = record_repo
        self._streak_tolerance_days = streak_tolerance_days
        self._clock = clock

    # -------------------------------------------------------------------------
    # Internal helpers
    # -------------------------------------------------------------------------

    def _today(self) -> date:
        return self._clock()

    def _fetch(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        keep_undated: bool = False,
    ) -> List[WorkoutRecord]:
        rows = self._record_repo.fetch_workout_records(
            user_id,
            start_date=start_date,
            end_date=end_date,
        )
        return db_rows_to_workout_records(rows, keep_undated=keep_undated)

    def _run(
        self,
        operation: str,
        user_id: str,
        compute: Callable[[List[WorkoutRecord]], T],
        *,
        start_date: Optional[date] = None,
        keep_undated: bool = False,
    ) -> AnalyticsResult[T]:
        try:
            records = self._fetch(user_id, start_date=start_date, keep_undated=keep_undated)
        except FetchError as e:
            logger.error(f"{operation} failed for user {user_id}: {e}")
            return AnalyticsResult.fail(e)
        return AnalyticsResult.ok(compute(records))

    # -------------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------------

    def get_volume_series(
        self,
        user_id: str,
        window_days: int = 30,
    ) -> AnalyticsResult[List[VolumeSample]]:
        """
        Get daily training volume over the last `window_days` days.

        Args:
            user_id: User ID
            window_days: Size of the window (e.g. 30, 60, 90)

        Returns:
            AnalyticsResult with one VolumeSample per active date, ascending
        """
        if window_days < 1:
            raise ValueError("window_days must be at least 1")

        start_date = self._today() - timedelta(days=window_days)
        return self._run(
            "Volume series",
            user_id,
            lambda records: build_volume_series(records, start_date=start_date),
            start_date=start_date,
        )

    def get_workout_frequency(
        self,
        user_id: str,
        weeks: int = 12,
    ) -> AnalyticsResult[List[WeeklyFrequency]]:
        """
        Get workout count and volume per week over the last `weeks` weeks.

        Weeks start on Sunday.
        """
        if weeks < 1:
            raise ValueError("weeks must be at least 1")

        start_date = self._today() - timedelta(days=weeks * 7)
        return self._run(
            "Workout frequency",
            user_id,
            lambda records: build_weekly_frequency(records, start_date=start_date),
            start_date=start_date,
        )

    def get_streak_stats(self, user_id: str) -> AnalyticsResult[StreakState]:
        """Get current and longest streaks over the whole history."""
        today = self._today()

        def compute(records: List[WorkoutRecord]) -> StreakState:
            complete, _ = split_workouts(records)
            return calculate_streaks(
                (r.date for r in complete),
                today=today,
                tolerance_days=self._streak_tolerance_days,
            )

        return self._run("Streak stats", user_id, compute)

    def get_exercise_trends(
        self,
        user_id: str,
        limit: int = 5,
    ) -> AnalyticsResult[List[ExerciseTrend]]:
        """
        Get strength trends for the user's most trained exercises.

        Args:
            user_id: User ID
            limit: Maximum exercises to return

        Returns:
            AnalyticsResult with ExerciseTrend list sorted by completed sets
        """
        return self._run(
            "Exercise trends",
            user_id,
            lambda records: analyze_exercise_trends(records, limit=limit),
        )

    def get_exercise_detail(
        self,
        user_id: str,
        exercise_name: str,
    ) -> AnalyticsResult[Optional[ExerciseDetail]]:
        """
        Get the full history of one exercise.

        The result value is None when no complete workout contains the
        exercise (names are compared exactly as stored).
        """
        return self._run(
            "Exercise detail",
            user_id,
            lambda records: build_exercise_detail(records, exercise_name),
        )

    def get_progress_stats(self, user_id: str) -> AnalyticsResult[ProgressStats]:
        """Get all-time totals, streaks and weekly average."""
        today = self._today()
        return self._run(
            "Progress stats",
            user_id,
            lambda records: compute_progress_stats(
                records, today=today, tolerance_days=self._streak_tolerance_days
            ),
        )

    def get_enhanced_progress_stats(
        self,
        user_id: str,
    ) -> AnalyticsResult[EnhancedProgressStats]:
        """Get progress stats plus this-week/this-month counts and PR count."""
        today = self._today()
        return self._run(
            "Enhanced progress stats",
            user_id,
            lambda records: compute_enhanced_progress_stats(
                records, today=today, tolerance_days=self._streak_tolerance_days
            ),
        )

    def get_progress_overview(
        self,
        user_id: str,
        *,
        window_days: int = 30,
        limit: int = 5,
    ) -> AnalyticsResult[ProgressOverview]:
        """
        Get stats, volume and trends from a single fetch.

        All three analyses share one snapshot of the user's records, so they
        either all succeed or all fail together.
        """
        if window_days < 1:
            raise ValueError("window_days must be at least 1")

        today = self._today()
        start_date = today - timedelta(days=window_days)

        def compute(records: List[WorkoutRecord]) -> ProgressOverview:
            return ProgressOverview(
                stats=compute_enhanced_progress_stats(
                    records, today=today, tolerance_days=self._streak_tolerance_days
                ),
                volume=build_volume_series(records, start_date=start_date),
                trends=analyze_exercise_trends(records, limit=limit),
                window_days=window_days,
            )

        return self._run("Progress overview", user_id, compute)

    # -------------------------------------------------------------------------
    # History and drafts
    # -------------------------------------------------------------------------

    def list_workout_history(
        self,
        user_id: str,
        *,
        time_filter: str = "all",
        search: Optional[str] = None,
        limit: int = 20,
    ) -> AnalyticsResult[List[WorkoutSummary]]:
        """
        Get history cards for complete workouts, newest first.

        Args:
            user_id: User ID
            time_filter: "all", "week" or "month"
            search: Case-insensitive exercise name filter
            limit: Maximum workouts to load before searching

        Returns:
            AnalyticsResult with WorkoutSummary list
        """
        start_date = history_start_date(time_filter, self._today())
        return self._run(
            "Workout history",
            user_id,
            lambda records: build_workout_history(records, search=search, limit=limit),
            start_date=start_date,
        )

    def list_incomplete_workouts(self, user_id: str) -> AnalyticsResult[List[WorkoutRecord]]:
        """
        Get drafts: records with no exercises or no positive duration.

        Rows whose date could not be read are included here (with date=None)
        even though every date-based analytic skips them.
        """
        return self._run(
            "Incomplete workouts",
            user_id,
            lambda records: split_workouts(records)[1],
            keep_undated=True,
        )

    def delete_incomplete_workouts(self, user_id: str) -> AnalyticsResult[int]:
        """
        Delete every incomplete draft of the user.

        Returns:
            AnalyticsResult with the number of deleted rows
        """
        drafts = self.list_incomplete_workouts(user_id)
        if not drafts.success:
            return AnalyticsResult.fail(drafts.error)

        draft_ids = [r.id for r in drafts.value if r.id]
        if not draft_ids:
            return AnalyticsResult.ok(0)

        try:
            deleted = self._record_repo.delete_workouts(user_id, draft_ids)
        except FetchError as e:
            logger.error(f"Draft cleanup failed for user {user_id}: {e}")
            return AnalyticsResult.fail(e)

        logger.info(f"Removed {deleted} incomplete workouts for user {user_id}")
        return AnalyticsResult.ok(deleted)

    def get_workout(
        self,
        user_id: str,
        workout_id: str,
    ) -> AnalyticsResult[Optional[WorkoutDetail]]:
        """
        Get one workout with its exercises and sets.

        The result value is None when the user has no workout with that ID.
        Drafts are returned too, flagged as incomplete.
        """
        try:
            row = self._record_repo.fetch_workout_record(user_id, workout_id)
        except FetchError as e:
            logger.error(f"Workout lookup failed for user {user_id}: {e}")
            return AnalyticsResult.fail(e)

        if row is None:
            return AnalyticsResult.ok(None)
        records = db_rows_to_workout_records([row], keep_undated=True)
        return AnalyticsResult.ok(build_workout_detail(records[0]) if records else None)

    def delete_workout(self, user_id: str, workout_id: str) -> AnalyticsResult[bool]:
        """
        Delete one of the user's workouts.

        Returns:
            AnalyticsResult with True if a row was removed, False if the user
            has no workout with that ID
        """
        try:
            deleted = self._record_repo.delete_workouts(user_id, [workout_id])
        except FetchError as e:
            logger.error(f"Workout deletion failed for user {user_id}: {e}")
            return AnalyticsResult.fail(e)

        if deleted:
            logger.info(f"Deleted workout {workout_id} for user {user_id}")
        else:
            logger.warning(f"No workout {workout_id} found for user {user_id}")
        return AnalyticsResult.ok(deleted > 0)
