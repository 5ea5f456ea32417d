"""
Workout Record Repository Interface (Port).

This module defines the abstract interface for reading a user's raw workout
records. It is the Record Source collaborator of the analytics core: the
core only reads, never writes, except for removing incomplete drafts.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Protocol, Sequence


class WorkoutRecordRepository(Protocol):
    """
    Abstract interface for workout record access.

    Implementations return raw, unfiltered rows. Completeness filtering and
    normalization happen in the domain layer, not here.
    """

    def fetch_workout_records(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        Fetch a user's workout rows, ordered by date ascending.

        Args:
            user_id: Owner of the records
            start_date: Inclusive lower bound on the workout date
            end_date: Inclusive upper bound on the workout date

        Returns:
            List of raw workout rows (id, user_id, date, duration, exercises, ...)

        Raises:
            FetchError: If the backend cannot supply the data
        """
        ...

    def delete_workouts(
        self,
        user_id: str,
        workout_ids: Sequence[str],
    ) -> int:
        """
        Delete workouts owned by the user.

        Args:
            user_id: Owner of the records (rows of other users are never touched)
            workout_ids: IDs to delete

        Returns:
            Number of rows deleted

        Raises:
            FetchError: If the backend rejects the request
        """
        ...

    def fetch_workout_record(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch one workout row owned by the user.

        Returns:
            The raw row, or None if the user has no workout with that ID

        Raises:
            FetchError: If the backend cannot supply the data
        """
        ...
