"""
Exercise trend analysis and per-exercise detail.

Sets are grouped by exercise name (compared exactly as stored). For each
exercise the per-workout maximum weight over completed, positive-weight
sets forms a chronological series, from which the current max, previous
max and trend percentage are derived.
"""
import math
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional

from domain.models import SetEntry, WorkoutRecord
from backend.core.completeness import filter_complete_workouts

# Most recent personal records kept in an exercise detail.
MAX_PERSONAL_RECORDS = 10


@dataclass
class TrendPoint:
    """Maximum weight lifted for an exercise in one workout."""
    date: date
    max_weight: float


@dataclass
class ExerciseTrend:
    """Strength trend of a single exercise."""
    exercise_name: str
    current_max: float
    previous_max: float
    trend_percent: float
    last_workout_date: date
    total_completed_sets: int
    series: List[TrendPoint] = field(default_factory=list)


@dataclass
class PersonalRecordEntry:
    """A set heavier than every earlier set of the same exercise."""
    date: date
    weight: float
    reps: int


@dataclass
class StrengthPoint:
    """Heaviest qualifying set of one workout."""
    date: date
    weight: float
    reps: int


@dataclass
class VolumePoint:
    """Exercise volume of one workout."""
    date: date
    volume: float


@dataclass
class ExerciseDetail:
    """Full history of a single exercise."""
    exercise_name: str
    current_max: float
    all_time_max: float
    first_recorded: date
    total_workouts: int
    total_sets: int
    total_volume: float
    personal_records: List[PersonalRecordEntry] = field(default_factory=list)
    volume_history: List[VolumePoint] = field(default_factory=list)
    strength_history: List[StrengthPoint] = field(default_factory=list)


def round_half_up(value: float, ndigits: int = 1) -> float:
    """Round to `ndigits` decimals with halves going up (toward +inf)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def calculate_trend_percent(current_max: float, previous_max: float) -> float:
    """
    Percentage change from previous_max to current_max, one decimal.

    Returns 0 when previous_max is 0.

    Examples:
        >>> calculate_trend_percent(220, 200)
        10.0
        >>> calculate_trend_percent(50, 0)
        0.0
    """
    if previous_max == 0:
        return 0.0
    return round_half_up((current_max - previous_max) / previous_max * 100, 1)


def _chronological(records: Iterable[WorkoutRecord]) -> List[WorkoutRecord]:
    # sorted() is stable, so same-day workouts keep their fetch order
    return sorted(filter_complete_workouts(records), key=lambda r: r.date)


def _sets_for(record: WorkoutRecord, name: str) -> List[SetEntry]:
    return [s for entry in record.exercises_named(name) for s in entry.sets]


def _exercise_names(record: WorkoutRecord) -> List[str]:
    """Distinct exercise names of a workout, in order of appearance."""
    seen: Dict[str, None] = {}
    for entry in record.exercises:
        if entry.name:
            seen.setdefault(entry.name, None)
    return list(seen)


class _TrendAccumulator:
    def __init__(self) -> None:
        self.series: List[TrendPoint] = []
        self.total_completed_sets = 0


def analyze_exercise_trends(
    records: Iterable[WorkoutRecord],
    *,
    limit: int = 5,
) -> List[ExerciseTrend]:
    """
    Build strength trends for the most frequently trained exercises.

    Args:
        records: Workout records (incomplete ones are ignored)
        limit: Maximum number of exercises to return

    Returns:
        ExerciseTrend list sorted by total completed sets, descending.
        Exercises that never had a completed positive-weight set are omitted.
    """
    accumulators: Dict[str, _TrendAccumulator] = {}

    for record in _chronological(records):
        for name in _exercise_names(record):
            sets = _sets_for(record, name)
            acc = accumulators.setdefault(name, _TrendAccumulator())
            acc.total_completed_sets += sum(1 for s in sets if s.completed)

            weights = [s.weight for s in sets if s.completed and s.weight > 0]
            if weights:
                acc.series.append(TrendPoint(date=record.date, max_weight=max(weights)))

    trends: List[ExerciseTrend] = []
    for name, acc in accumulators.items():
        if not acc.series:
            continue

        current_max = acc.series[-1].max_weight
        earlier = [p.max_weight for p in acc.series[:-1]]
        previous_max = max(earlier) if earlier else current_max

        trends.append(ExerciseTrend(
            exercise_name=name,
            current_max=current_max,
            previous_max=previous_max,
            trend_percent=calculate_trend_percent(current_max, previous_max),
            last_workout_date=acc.series[-1].date,
            total_completed_sets=acc.total_completed_sets,
            series=acc.series,
        ))

    trends.sort(key=lambda t: t.total_completed_sets, reverse=True)
    return trends[:max(limit, 0)]


def build_exercise_detail(
    records: Iterable[WorkoutRecord],
    exercise_name: str,
) -> Optional[ExerciseDetail]:
    """
    Build the full history of one exercise.

    Personal records are detected in chronological order: a qualifying set
    is a PR when its weight exceeds every weight seen before it. Only the
    MAX_PERSONAL_RECORDS most recent PRs are kept.

    Args:
        records: Workout records (incomplete ones are ignored)
        exercise_name: Exact (case-sensitive) exercise name

    Returns:
        ExerciseDetail, or None if no complete workout contains the exercise
    """
    workouts = [r for r in _chronological(records) if r.exercises_named(exercise_name)]
    if not workouts:
        return None

    total_sets = 0
    total_volume = 0.0
    all_time_max = 0.0
    personal_records: List[PersonalRecordEntry] = []
    volume_history: List[VolumePoint] = []
    strength_history: List[StrengthPoint] = []

    for record in workouts:
        qualifying = [s for s in _sets_for(record, exercise_name) if s.is_qualifying]
        total_sets += len(qualifying)

        workout_volume = 0.0
        best: Optional[SetEntry] = None

        for set_entry in qualifying:
            workout_volume += set_entry.volume
            if best is None or set_entry.weight > best.weight:
                best = set_entry
            if set_entry.weight > all_time_max:
                all_time_max = set_entry.weight
                personal_records.append(PersonalRecordEntry(
                    date=record.date,
                    weight=set_entry.weight,
                    reps=set_entry.reps,
                ))

        total_volume += workout_volume

        if best is not None:
            strength_history.append(StrengthPoint(
                date=record.date, weight=best.weight, reps=best.reps
            ))
        if workout_volume > 0:
            volume_history.append(VolumePoint(date=record.date, volume=workout_volume))

    return ExerciseDetail(
        exercise_name=exercise_name,
        current_max=strength_history[-1].weight if strength_history else 0.0,
        all_time_max=all_time_max,
        first_recorded=workouts[0].date,
        total_workouts=len(workouts),
        total_sets=total_sets,
        total_volume=total_volume,
        personal_records=personal_records[-MAX_PERSONAL_RECORDS:],
        volume_history=volume_history,
        strength_history=strength_history,
    )


def count_personal_record_exercises(records: Iterable[WorkoutRecord]) -> int:
    """Number of distinct exercises with at least one completed positive-weight set."""
    names = set()
    for record in filter_complete_workouts(records):
        for entry in record.exercises:
            if entry.name and entry.max_completed_weight > 0:
                names.add(entry.name)
    return len(names)
