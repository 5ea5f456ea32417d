"""
Workouts router for history cards and draft cleanup.

This router contains endpoints for:
- /workouts/history - Complete workouts, newest first, with search and time filter
- /workouts/drafts - List or delete incomplete workouts (no exercises or no duration)
- /workouts/{workout_id} - Get or delete a single workout

Drafts never appear in history or in any analytics; they are only reachable
through the drafts endpoints.
"""

import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_progress_service
from backend.core.progress_service import ProgressAnalyticsService
from domain.models import ExerciseEntry

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Response Models
# =============================================================================


class WorkoutSummaryItem(BaseModel):
    """History card for one complete workout."""
    id: str
    date: date
    workout_name: str
    duration_seconds: int
    duration_display: str
    exercise_count: int
    total_volume: float
    total_sets: int
    completion_rate: int


class WorkoutHistoryResponse(BaseModel):
    """Response model for the workout history endpoint."""
    workouts: List[WorkoutSummaryItem] = Field(default_factory=list)
    count: int
    time_filter: str


class DraftItem(BaseModel):
    """An incomplete workout left behind by an abandoned session."""
    id: str
    date: Optional[date]
    duration_seconds: Optional[int] = None
    exercise_count: int
    created_at: Optional[datetime] = None


class DraftsResponse(BaseModel):
    """Response model for listing drafts."""
    drafts: List[DraftItem] = Field(default_factory=list)
    count: int


class DeleteDraftsResponse(BaseModel):
    """Response model for deleting drafts."""
    success: bool
    deleted: int


class WorkoutDetailResponse(BaseModel):
    """A single workout with its exercises and sets."""
    id: str
    date: Optional[date]
    workout_name: str
    duration_seconds: Optional[int] = None
    is_complete: bool
    exercise_count: int
    total_volume: float
    total_sets: int
    completion_rate: int
    exercises: List[ExerciseEntry] = Field(default_factory=list)


class DeleteWorkoutResponse(BaseModel):
    """Response model for deleting a single workout."""
    success: bool
    workout_id: str


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/history", response_model=WorkoutHistoryResponse)
def get_workout_history(
    time_filter: Literal["all", "week", "month"] = Query("all", description="Time window"),
    search: Optional[str] = Query(None, description="Filter by exercise name"),
    limit: int = Query(20, ge=1, le=100, description="Maximum workouts to load"),
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> WorkoutHistoryResponse:
    """
    Get history cards for the user's complete workouts.

    The limit is applied to the newest workouts before the search filter,
    so a search never reaches further back than the loaded page.
    """
    result = service.list_workout_history(
        user_id,
        time_filter=time_filter,
        search=search,
        limit=limit,
    )
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)

    return WorkoutHistoryResponse(
        workouts=[WorkoutSummaryItem(**asdict(s)) for s in result.value],
        count=len(result.value),
        time_filter=time_filter,
    )


@router.get("/drafts", response_model=DraftsResponse)
def get_drafts(
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> DraftsResponse:
    """List incomplete workouts (no exercises or no positive duration)."""
    result = service.list_incomplete_workouts(user_id)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)

    drafts = [
        DraftItem(
            id=record.id,
            date=record.date,
            duration_seconds=record.duration_seconds,
            exercise_count=len(record.exercises),
            created_at=record.created_at,
        )
        for record in result.value
    ]
    return DraftsResponse(drafts=drafts, count=len(drafts))


@router.delete("/drafts", response_model=DeleteDraftsResponse)
def delete_drafts(
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> DeleteDraftsResponse:
    """Delete every incomplete workout of the user."""
    result = service.delete_incomplete_workouts(user_id)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)

    return DeleteDraftsResponse(success=True, deleted=result.value)


# Registered after /history and /drafts so those paths are not taken as IDs.
@router.get("/{workout_id}", response_model=WorkoutDetailResponse)
def get_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> WorkoutDetailResponse:
    """Get one workout, draft or not, with its exercises and sets."""
    result = service.get_workout(user_id, workout_id)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)
    if result.value is None:
        raise HTTPException(status_code=404, detail=f"Workout '{workout_id}' not found")

    detail = result.value
    return WorkoutDetailResponse(
        id=detail.id,
        date=detail.date,
        workout_name=detail.workout_name,
        duration_seconds=detail.duration_seconds,
        is_complete=detail.is_complete,
        exercise_count=detail.exercise_count,
        total_volume=detail.total_volume,
        total_sets=detail.total_sets,
        completion_rate=detail.completion_rate,
        exercises=detail.exercises,
    )


@router.delete("/{workout_id}", response_model=DeleteWorkoutResponse)
def delete_workout(
    workout_id: str,
    user_id: str = Depends(get_current_user),
    service: ProgressAnalyticsService = Depends(get_progress_service),
) -> DeleteWorkoutResponse:
    """Delete one of the user's workouts."""
    result = service.delete_workout(user_id, workout_id)
    if not result.success:
        raise HTTPException(status_code=502, detail=result.error_message)
    if not result.value:
        raise HTTPException(status_code=404, detail=f"Workout '{workout_id}' not found")

    return DeleteWorkoutResponse(success=True, workout_id=workout_id)
