"""
Supabase Workout Record Repository Implementation.

This module implements the WorkoutRecordRepository protocol using Supabase.
Reads the `workouts` table, whose `exercises` JSONB column holds the nested
exercise/set data of each session.
"""
from datetime import date
from typing import Any, Dict, List, Optional, Sequence
import logging

from supabase import Client

from application.exceptions import FetchError

logger = logging.getLogger(__name__)

WORKOUT_COLUMNS = "id, user_id, date, start_time, end_time, duration, exercises, created_at"


class SupabaseWorkoutRecordRepository:
    """
    Supabase implementation of WorkoutRecordRepository.

    Failures are logged and re-raised as FetchError; nothing is retried and
    no empty fallback is returned, so callers can tell "no workouts" apart
    from "could not load workouts".
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def fetch_workout_records(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Fetch a user's workout rows, ordered by date ascending."""
        try:
            query = self._client.table("workouts") \
                .select(WORKOUT_COLUMNS) \
                .eq("user_id", user_id)

            if start_date is not None:
                query = query.gte("date", start_date.isoformat())
            if end_date is not None:
                query = query.lte("date", end_date.isoformat())

            result = query.order("date", desc=False).execute()
            return result.data or []

        except Exception as e:
            logger.exception(f"Error fetching workouts for user {user_id}: {e}")
            raise FetchError(f"Failed to fetch workouts: {e}", user_id=user_id) from e

    def fetch_workout_record(
        self,
        user_id: str,
        workout_id: str,
    ) -> Optional[Dict[str, Any]]:
        """Fetch one workout row owned by the user."""
        try:
            result = self._client.table("workouts") \
                .select(WORKOUT_COLUMNS) \
                .eq("user_id", user_id) \
                .eq("id", workout_id) \
                .limit(1) \
                .execute()
            return result.data[0] if result.data else None

        except Exception as e:
            logger.exception(f"Error fetching workout {workout_id} for user {user_id}: {e}")
            raise FetchError(f"Failed to fetch workout: {e}", user_id=user_id) from e

    def delete_workouts(
        self,
        user_id: str,
        workout_ids: Sequence[str],
    ) -> int:
        """Delete workouts owned by the user."""
        ids = [wid for wid in workout_ids if wid]
        if not ids:
            return 0

        try:
            result = self._client.table("workouts") \
                .delete() \
                .eq("user_id", user_id) \
                .in_("id", ids) \
                .execute()

            deleted = len(result.data or [])
            logger.info(f"Deleted {deleted} workouts for user {user_id}")
            return deleted

        except Exception as e:
            logger.exception(f"Error deleting workouts for user {user_id}: {e}")
            raise FetchError(f"Failed to delete workouts: {e}", user_id=user_id) from e
