"""
Workout history summaries.

Turns complete workouts into the compact cards shown in the history list,
and applies the list's time-window and exercise-name filters. Also builds
the full view of a single workout, draft or not.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional

from domain.models import ExerciseEntry, WorkoutRecord
from backend.core.completeness import filter_complete_workouts
from backend.core.trends import round_half_up
from backend.core.volume import workout_volume

TIME_FILTERS = ("all", "week", "month")


@dataclass
class WorkoutSummary:
    """History-card view of a complete workout."""
    id: str
    date: date
    workout_name: str
    duration_seconds: int
    duration_display: str
    exercise_count: int
    total_volume: float
    total_sets: int
    completion_rate: int


@dataclass
class WorkoutDetail:
    """Full view of one workout, including its exercises and sets."""
    id: str
    date: Optional[date]
    workout_name: str
    duration_seconds: Optional[int]
    is_complete: bool
    exercise_count: int
    total_volume: float
    total_sets: int
    completion_rate: int
    exercises: List[ExerciseEntry] = field(default_factory=list)


def format_duration(seconds: int) -> str:
    """Format duration in seconds to MM:SS or HH:MM:SS."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def workout_name_for(record: WorkoutRecord) -> str:
    """'<first word of first exercise> Day', or 'Workout' when unnamed."""
    if record.exercises and record.exercises[0].name.strip():
        return f"{record.exercises[0].name.split()[0]} Day"
    return "Workout"


def completion_rate(record: WorkoutRecord) -> int:
    """Percentage of sets (any weight) checked off as completed."""
    total = sum(len(e.sets) for e in record.exercises)
    if total == 0:
        return 0
    done = sum(len(e.completed_sets) for e in record.exercises)
    return int(round_half_up(done / total * 100, 0))


def summarize_workout(record: WorkoutRecord) -> WorkoutSummary:
    volume = workout_volume(record)
    duration = record.duration_seconds or 0
    return WorkoutSummary(
        id=record.id,
        date=record.date,
        workout_name=workout_name_for(record),
        duration_seconds=duration,
        duration_display=format_duration(duration),
        exercise_count=len(record.exercises),
        total_volume=volume.total_volume,
        total_sets=volume.total_sets,
        completion_rate=completion_rate(record),
    )


def build_workout_detail(record: WorkoutRecord) -> WorkoutDetail:
    """
    Detail view of any workout.

    Drafts are shown too, flagged with is_complete=False; the volume figures
    still count qualifying sets only.
    """
    volume = workout_volume(record)
    return WorkoutDetail(
        id=record.id,
        date=record.date,
        workout_name=workout_name_for(record),
        duration_seconds=record.duration_seconds,
        is_complete=record.is_complete,
        exercise_count=len(record.exercises),
        total_volume=volume.total_volume,
        total_sets=volume.total_sets,
        completion_rate=completion_rate(record),
        exercises=list(record.exercises),
    )


def one_month_before(day: date) -> date:
    """Same day of the previous month, clamped to that month's length."""
    first_of_month = day.replace(day=1)
    last_of_previous = first_of_month - timedelta(days=1)
    return last_of_previous.replace(day=min(day.day, last_of_previous.day))


def history_start_date(time_filter: str, today: date) -> Optional[date]:
    """Lower bound for a history time filter ('all' has none)."""
    if time_filter == "week":
        return today - timedelta(days=7)
    if time_filter == "month":
        return one_month_before(today)
    if time_filter == "all":
        return None
    raise ValueError(f"Unknown time filter '{time_filter}'. Must be one of: {TIME_FILTERS}")


def matches_search(record: WorkoutRecord, search: Optional[str]) -> bool:
    """Case-insensitive substring match against exercise names."""
    if not search or not search.strip():
        return True
    needle = search.strip().lower()
    return any(needle in e.name.lower() for e in record.exercises)


def build_workout_history(
    records: Iterable[WorkoutRecord],
    *,
    search: Optional[str] = None,
    limit: int = 20,
) -> List[WorkoutSummary]:
    """
    Summaries of complete workouts, newest first.

    The limit is applied before the search filter, mirroring a history page
    that loads the latest workouts and then narrows them client-side.
    """
    newest_first = sorted(filter_complete_workouts(records), key=lambda r: r.date, reverse=True)
    page = newest_first[:max(limit, 0)]
    return [summarize_workout(r) for r in page if matches_search(r, search)]
