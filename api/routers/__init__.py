"""
Router package for the progress analytics API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- progress: Stats, streaks, volume, frequency and exercise trends
- workouts: Workout history cards and incomplete-draft cleanup
"""

from api.routers.health import router as health_router
from api.routers.progress import router as progress_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "health_router",
    "progress_router",
    "workouts_router",
]
