"""
Progress router for workout analytics.

This router provides endpoints for:
- Headline progress stats (totals, streaks, weekly average)
- Current and longest streaks
- Daily volume series and weekly workout frequency
- Strength trends per exercise and exercise detail with personal records
- A combined overview computed from a single fetch

Every endpoint passes the authenticated user id explicitly to the service.
A failed analytics result (the record source could not be read) maps to 502.
"""
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_progress_service, get_settings
from application.results import AnalyticsResult
from backend.core.progress_service import ProgressAnalyticsService
from backend.settings import Settings

router = APIRouter(
    prefix="/progress",
    tags=["Progress"],
)


# =============================================================================
# Response Models
# =============================================================================


class ProgressStatsResponse(BaseModel):
    """Response model for all-time progress stats."""
    total_workouts: int
    current_streak: int
    longest_streak: int
    average_workouts_per_week: float
    total_volume_all_time: float


class EnhancedProgressStatsResponse(ProgressStatsResponse):
    """Progress stats plus recent activity and personal record count."""
    this_week_workouts: int
    this_month_workouts: int
    personal_records: int
    average_workout_minutes: Optional[int] = None


class StreakResponse(BaseModel):
    """Response model for streak stats."""
    current_streak: int
    longest_streak: int


class VolumeSampleItem(BaseModel):
    """Training volume for one calendar date."""
    date: date
    total_volume: float
    total_sets: int
    workout_count: int


class VolumeSeriesResponse(BaseModel):
    """Response model for the volume series endpoint."""
    data: List[VolumeSampleItem] = Field(default_factory=list)
    window_days: int


class WeeklyFrequencyItem(BaseModel):
    """Workout count and volume for one Sunday-started week."""
    week_start: date
    workout_count: int
    total_volume: float


class WorkoutFrequencyResponse(BaseModel):
    """Response model for the workout frequency endpoint."""
    data: List[WeeklyFrequencyItem] = Field(default_factory=list)
    weeks: int


class TrendPointItem(BaseModel):
    """Heaviest completed weight for an exercise in one workout."""
    date: date
    max_weight: float


class ExerciseTrendItem(BaseModel):
    """Strength trend for one exercise."""
    exercise_name: str
    current_max: float
    previous_max: float
    trend_percent: float
    last_workout_date: date
    total_completed_sets: int
    series: List[TrendPointItem] = Field(default_factory=list)


class ExerciseTrendsResponse(BaseModel):
    """Response model for the exercise trends endpoint."""
    exercises: List[ExerciseTrendItem]
    total: int


class PersonalRecordItem(BaseModel):
    """A set that set a new best weight for the exercise."""
    date: date
    weight: float
    reps: int


class VolumePointItem(BaseModel):
    """Exercise volume for one workout."""
    date: date
    volume: float


class StrengthPointItem(BaseModel):
    """Heaviest set of one workout."""
    date: date
    weight: float
    reps: int


class ExerciseDetailResponse(BaseModel):
    """Response model for the exercise detail endpoint."""
    exercise_name: str
    current_max: float
    all_time_max: float
    first_recorded: date
    total_workouts: int
    total_sets: int
    total_volume: float
    personal_records: List[PersonalRecordItem] = Field(default_factory=list)
    volume_history: List[VolumePointItem] = Field(default_factory=list)
    strength_history: List[StrengthPointItem] = Field(default_factory=list)


class ProgressOverviewResponse(BaseModel):
    """Everything the progress page renders, from one snapshot."""
    stats: EnhancedProgressStatsResponse
    volume: List[VolumeSampleItem] = Field(default_factory=list)
    trends: List[ExerciseTrendItem] = Field(default_factory=list)
    window_days: int


# =============================================================================
# Helpers
# =============================================================================


def _unwrap(result: AnalyticsResult):
    """Return the result value or raise 502 when the record source failed."""
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)
    return result.value


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/stats", response_model=ProgressStatsResponse)
def get_progress_stats(
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> ProgressStatsResponse:
    """
    Get headline progress stats.

    Counts only complete workouts (at least one exercise and a positive duration).
    """
    stats = _unwrap(service.get_progress_stats(user_id))
    return ProgressStatsResponse(**asdict(stats))


@router.get("/stats/enhanced", response_model=EnhancedProgressStatsResponse)
def get_enhanced_progress_stats(
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> EnhancedProgressStatsResponse:
    """Get progress stats with this-week/this-month counts and PR count."""
    stats = _unwrap(service.get_enhanced_progress_stats(user_id))
    return EnhancedProgressStatsResponse(**asdict(stats))


@router.get("/streaks", response_model=StreakResponse)
def get_streak_stats(
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> StreakResponse:
    """
    Get current and longest streaks.

    Workouts up to the configured gap tolerance apart keep a streak alive.
    """
    streaks = _unwrap(service.get_streak_stats(user_id))
    return StreakResponse(**asdict(streaks))


@router.get("/volume", response_model=VolumeSeriesResponse)
def get_volume_series(
    window_days: Optional[int] = Query(
        None, ge=1, le=365, description="Days to look back (default from settings)"
    ),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
    settings: Settings = Depends(get_settings),
) -> VolumeSeriesResponse:
    """
    Get total volume per active date, ascending.

    Dates without a complete workout are omitted rather than reported as zero.
    """
    window_days = window_days or settings.default_volume_window_days
    samples = _unwrap(service.get_volume_series(user_id, window_days=window_days))
    return VolumeSeriesResponse(
        data=[VolumeSampleItem(**asdict(s)) for s in samples],
        window_days=window_days,
    )


@router.get("/frequency", response_model=WorkoutFrequencyResponse)
def get_workout_frequency(
    weeks: int = Query(12, ge=1, le=52, description="Weeks to look back"),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> WorkoutFrequencyResponse:
    """Get workout count and volume per week (weeks start on Sunday)."""
    buckets = _unwrap(service.get_workout_frequency(user_id, weeks=weeks))
    return WorkoutFrequencyResponse(
        data=[WeeklyFrequencyItem(**asdict(b)) for b in buckets],
        weeks=weeks,
    )


@router.get("/exercises", response_model=ExerciseTrendsResponse)
def get_exercise_trends(
    limit: Optional[int] = Query(
        None, ge=1, le=50, description="Maximum exercises to return (default from settings)"
    ),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
    settings: Settings = Depends(get_settings),
) -> ExerciseTrendsResponse:
    """
    Get strength trends for the most trained exercises.

    Sorted by total completed sets, descending.
    """
    limit = limit or settings.default_trend_limit
    trends = _unwrap(service.get_exercise_trends(user_id, limit=limit))
    return ExerciseTrendsResponse(
        exercises=[ExerciseTrendItem(**asdict(t)) for t in trends],
        total=len(trends),
    )


@router.get("/exercises/{exercise_name}", response_model=ExerciseDetailResponse)
def get_exercise_detail(
    exercise_name: str = Path(..., description="Exercise name exactly as logged"),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> ExerciseDetailResponse:
    """
    Get the history of one exercise.

    Includes the last 10 personal records, per-workout volume and heaviest sets.
    """
    detail = _unwrap(service.get_exercise_detail(user_id, exercise_name))
    if detail is None:
        raise HTTPException(
            status_code=404,
            detail=f"No history found for exercise '{exercise_name}'",
        )
    return ExerciseDetailResponse(**asdict(detail))


@router.get("/overview", response_model=ProgressOverviewResponse)
def get_progress_overview(
    window_days: Optional[int] = Query(None, ge=1, le=365),
    limit: Optional[int] = Query(None, ge=1, le=50),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
    settings: Settings = Depends(get_settings),
) -> ProgressOverviewResponse:
    """Get stats, volume series and exercise trends from a single fetch."""
    overview = _unwrap(
        service.get_progress_overview(
            user_id,
            window_days=window_days or settings.default_volume_window_days,
            limit=limit or settings.default_trend_limit,
        )
    )
    return ProgressOverviewResponse(**asdict(overview))
