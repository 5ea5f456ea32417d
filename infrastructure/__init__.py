"""
Infrastructure Layer for the progress analytics API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import SupabaseWorkoutRecordRepository

__all__ = [
    "SupabaseWorkoutRecordRepository",
]
