"""
Headline progress statistics.

Combines the streak calculator and the volume aggregator into the stat
cards of the progress page: totals, streaks, weekly average, and the
recent-activity counters.
"""
import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional

from domain.models import WorkoutRecord
from backend.core.completeness import filter_complete_workouts
from backend.core.streaks import STREAK_GAP_TOLERANCE_DAYS, calculate_streaks
from backend.core.trends import count_personal_record_exercises, round_half_up
from backend.core.volume import total_volume

# Workouts shorter than this are ignored when averaging workout time.
MIN_TIMED_WORKOUT_MINUTES = 5
# Longer workouts are capped to this when averaging workout time.
MAX_TIMED_WORKOUT_MINUTES = 180


@dataclass
class ProgressStats:
    """All-time progress figures."""
    total_workouts: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    average_workouts_per_week: float = 0.0
    total_volume_all_time: float = 0.0


@dataclass
class EnhancedProgressStats(ProgressStats):
    """ProgressStats plus recent activity counters."""
    this_week_workouts: int = 0
    this_month_workouts: int = 0
    personal_records: int = 0
    average_workout_minutes: Optional[int] = None


def average_workouts_per_week(records: Iterable[WorkoutRecord]) -> float:
    """Complete workouts divided by the number of weeks they span (at least 1)."""
    complete = filter_complete_workouts(records)
    if not complete:
        return 0.0
    days = sorted(r.date for r in complete)
    weeks = max(1, math.ceil((days[-1] - days[0]).days / 7))
    return round_half_up(len(complete) / weeks, 1)


def average_workout_minutes(records: Iterable[WorkoutRecord]) -> Optional[int]:
    """Mean duration in minutes of complete workouts, or None without usable data."""
    durations = []
    for record in filter_complete_workouts(records):
        minutes = min(MAX_TIMED_WORKOUT_MINUTES, (record.duration_seconds or 0) / 60)
        if minutes > MIN_TIMED_WORKOUT_MINUTES:
            durations.append(minutes)
    if not durations:
        return None
    return int(round_half_up(sum(durations) / len(durations), 0))


def compute_progress_stats(
    records: Iterable[WorkoutRecord],
    *,
    today: date,
    tolerance_days: int = STREAK_GAP_TOLERANCE_DAYS,
) -> ProgressStats:
    complete = filter_complete_workouts(records)
    streaks = calculate_streaks(
        (r.date for r in complete), today=today, tolerance_days=tolerance_days
    )
    return ProgressStats(
        total_workouts=len(complete),
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        average_workouts_per_week=average_workouts_per_week(complete),
        total_volume_all_time=total_volume(complete),
    )


def compute_enhanced_progress_stats(
    records: Iterable[WorkoutRecord],
    *,
    today: date,
    tolerance_days: int = STREAK_GAP_TOLERANCE_DAYS,
) -> EnhancedProgressStats:
    complete = filter_complete_workouts(records)
    base = compute_progress_stats(complete, today=today, tolerance_days=tolerance_days)

    week_start = today - timedelta(days=7)
    month_start = today - timedelta(days=30)

    return EnhancedProgressStats(
        total_workouts=base.total_workouts,
        current_streak=base.current_streak,
        longest_streak=base.longest_streak,
        average_workouts_per_week=base.average_workouts_per_week,
        total_volume_all_time=base.total_volume_all_time,
        this_week_workouts=sum(1 for r in complete if r.date >= week_start),
        this_month_workouts=sum(1 for r in complete if r.date >= month_start),
        personal_records=count_personal_record_exercises(complete),
        average_workout_minutes=average_workout_minutes(complete),
    )
