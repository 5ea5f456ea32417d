"""
API package for the progress analytics API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_supabase_client,
    get_supabase_client_required,
    get_workout_record_repo,
    get_progress_service,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_workout_record_repo",
    # Services
    "get_progress_service",
    # Authentication
    "get_current_user",
]
