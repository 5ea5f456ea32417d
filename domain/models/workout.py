"""
Workout record entities for progress analytics.

A WorkoutRecord is one logged session from the hosted `workouts` table.
Its nested exercises/sets arrive as a JSONB blob; by the time a record
reaches this model the blob has already been normalized by
domain.converters.db_row_to_workout_record, so every field here is strict.
"""

from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class SetType(str, Enum):
    """Kind of set. Informational only, never affects volume."""

    REGULAR = "regular"
    WARMUP = "warmup"
    FAILURE = "failure"


class SetEntry(BaseModel):
    """
    A single set within an exercise.

    Examples:
        >>> SetEntry(weight=100, reps=5, completed=True).is_qualifying
        True
        >>> SetEntry(weight=0, reps=12, completed=True).is_qualifying
        False
    """

    weight: float = Field(default=0.0, ge=0, description="Load lifted (0 = bodyweight)")
    reps: int = Field(default=0, ge=0, description="Repetitions performed")
    type: SetType = Field(default=SetType.REGULAR, description="Set type")
    completed: bool = Field(default=False, description="Whether the set was checked off")

    @property
    def is_qualifying(self) -> bool:
        """True if the set counts toward volume, set counts, maxima and PRs."""
        return self.completed and self.weight > 0 and self.reps > 0

    @property
    def volume(self) -> float:
        """weight × reps for qualifying sets, 0 otherwise."""
        if not self.is_qualifying:
            return 0.0
        return self.weight * self.reps


class ExerciseEntry(BaseModel):
    """One exercise performed within a workout."""

    name: str = Field(default="", description="Exercise name as stored (case-sensitive)")
    exercise_id: Optional[str] = Field(
        default=None, description="Reference into the exercise catalog"
    )
    muscle_groups: List[str] = Field(default_factory=list)
    sets: List[SetEntry] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.name.upper()

    @property
    def completed_sets(self) -> List[SetEntry]:
        return [s for s in self.sets if s.completed]

    @property
    def max_completed_weight(self) -> float:
        """Heaviest completed, positive-weight set (0 if none)."""
        weights = [s.weight for s in self.sets if s.completed and s.weight > 0]
        return max(weights) if weights else 0.0


class WorkoutRecord(BaseModel):
    """
    One logged workout session.

    A record is complete iff it has at least one exercise AND a positive
    duration. Incomplete records are drafts: they are excluded from every
    analytic and are candidates for deletion.

    `date` is None only for rows whose date column could not be read. Such
    records are handed to draft detection and never to date-based analytics.
    """

    id: str
    user_id: str = ""
    date: Optional[date]
    duration_seconds: Optional[int] = Field(default=None, ge=0)
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    created_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return len(self.exercises) > 0 and (self.duration_seconds or 0) > 0

    def exercises_named(self, name: str) -> List[ExerciseEntry]:
        """All entries in this workout whose name matches exactly."""
        return [e for e in self.exercises if e.name == name]
