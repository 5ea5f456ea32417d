"""
Volume aggregation and time-bucketed rollups.

Volume is the sum of weight × reps over qualifying sets (completed, with
positive weight and positive reps). Every other set contributes nothing
and is skipped silently.

- aggregate_workout_volume: one workout's exercises -> (volume, sets)
- build_volume_series: daily VolumeSample per active date (volume chart)
- build_weekly_frequency: workouts and volume per Sunday-based week
"""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from domain.models import ExerciseEntry, WorkoutRecord
from backend.core.completeness import filter_complete_workouts


@dataclass
class WorkoutVolume:
    """Volume and qualifying set count of a single workout."""
    total_volume: float = 0.0
    total_sets: int = 0


@dataclass
class VolumeSample:
    """Volume accumulated across all complete workouts on one date."""
    date: date
    total_volume: float
    total_sets: int
    workout_count: int


@dataclass
class WeeklyFrequency:
    """Workout count and volume for one week (weeks start on Sunday)."""
    week_start: date
    workout_count: int
    total_volume: float


def aggregate_workout_volume(exercises: Iterable[ExerciseEntry]) -> WorkoutVolume:
    """
    Reduce a workout's exercises to total volume and qualifying set count.

    Exercises without sets contribute zero.

    Examples:
        >>> from domain.models import ExerciseEntry, SetEntry
        >>> aggregate_workout_volume([
        ...     ExerciseEntry(name="Bench Press", sets=[
        ...         SetEntry(weight=100, reps=5, completed=True),
        ...         SetEntry(weight=0, reps=5, completed=True),
        ...         SetEntry(weight=100, reps=5, completed=False),
        ...     ])
        ... ])
        WorkoutVolume(total_volume=500.0, total_sets=1)
    """
    result = WorkoutVolume()
    for exercise in exercises:
        for set_entry in exercise.sets:
            if set_entry.is_qualifying:
                result.total_volume += set_entry.weight * set_entry.reps
                result.total_sets += 1
    return result


def workout_volume(record: WorkoutRecord) -> WorkoutVolume:
    return aggregate_workout_volume(record.exercises)


def total_volume(records: Iterable[WorkoutRecord]) -> float:
    """All-time volume across complete workouts."""
    return sum(workout_volume(r).total_volume for r in filter_complete_workouts(records))


def _in_window(day: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    if start_date is not None and day < start_date:
        return False
    if end_date is not None and day > end_date:
        return False
    return True


def build_volume_series(
    records: Iterable[WorkoutRecord],
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[VolumeSample]:
    """
    Bucket complete workouts by date.

    Only dates with at least one complete workout appear; empty days are
    not synthesized. Samples are sorted ascending by date.

    Args:
        records: Workout records (incomplete ones are ignored)
        start_date: Inclusive lower bound, or None for no bound
        end_date: Inclusive upper bound, or None for no bound

    Returns:
        List of VolumeSample, one per active date
    """
    buckets: Dict[date, VolumeSample] = {}

    for record in filter_complete_workouts(records):
        if not _in_window(record.date, start_date, end_date):
            continue

        volume = workout_volume(record)
        sample = buckets.get(record.date)
        if sample is None:
            buckets[record.date] = VolumeSample(
                date=record.date,
                total_volume=volume.total_volume,
                total_sets=volume.total_sets,
                workout_count=1,
            )
        else:
            sample.total_volume += volume.total_volume
            sample.total_sets += volume.total_sets
            sample.workout_count += 1

    return [buckets[d] for d in sorted(buckets)]


def week_start_for(day: date) -> date:
    """Sunday on or before `day`."""
    # date.weekday(): Monday=0 ... Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def build_weekly_frequency(
    records: Iterable[WorkoutRecord],
    *,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[WeeklyFrequency]:
    """Bucket complete workouts by Sunday-based week, ascending."""
    buckets: Dict[date, WeeklyFrequency] = {}

    for record in filter_complete_workouts(records):
        if not _in_window(record.date, start_date, end_date):
            continue

        key = week_start_for(record.date)
        week = buckets.get(key)
        if week is None:
            week = buckets[key] = WeeklyFrequency(
                week_start=key, workout_count=0, total_volume=0.0
            )
        week.workout_count += 1
        week.total_volume += workout_volume(record).total_volume

    return [buckets[k] for k in sorted(buckets)]
