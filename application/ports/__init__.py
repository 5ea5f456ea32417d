"""
Repository Interfaces (Ports) for the progress analytics API.

This package defines abstract interfaces that decouple the analytics core
from infrastructure (database, external services). Implementations are
provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutRecordRepository

    class ProgressAnalyticsService:
        def __init__(self, record_repo: WorkoutRecordRepository):
            self._record_repo = record_repo
"""

from application.ports.workout_record_repository import WorkoutRecordRepository

__all__ = [
    "WorkoutRecordRepository",
]
