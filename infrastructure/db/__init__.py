"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports. These implementations can be
injected into services and routers for clean separation of concerns and
testability.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseWorkoutRecordRepository

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repository with injected client
    record_repo = SupabaseWorkoutRecordRepository(client)
"""

from infrastructure.db.workout_record_repository import SupabaseWorkoutRecordRepository

__all__ = [
    # Workout records (Record Source)
    "SupabaseWorkoutRecordRepository",
]
