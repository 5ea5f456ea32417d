"""
Completeness filter for workout records.

A workout is complete when it has at least one exercise AND a positive
duration. This is the only definition used anywhere: analytics, volume
charts, history lists and draft detection all go through these helpers,
so a record excluded in one place is excluded everywhere.
"""
from typing import Iterable, List, Tuple

from domain.models import WorkoutRecord


def is_complete_workout(record: WorkoutRecord) -> bool:
    """True if the record is a finished workout rather than a draft."""
    return record.is_complete


def filter_complete_workouts(records: Iterable[WorkoutRecord]) -> List[WorkoutRecord]:
    """Return only complete workouts, preserving input order."""
    return [r for r in records if is_complete_workout(r)]


def split_workouts(
    records: Iterable[WorkoutRecord],
) -> Tuple[List[WorkoutRecord], List[WorkoutRecord]]:
    """
    Partition records into (complete, incomplete).

    Incomplete records are drafts and are the candidates for deletion.
    """
    complete: List[WorkoutRecord] = []
    incomplete: List[WorkoutRecord] = []
    for record in records:
        if is_complete_workout(record):
            complete.append(record)
        else:
            incomplete.append(record)
    return complete, incomplete
