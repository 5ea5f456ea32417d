"""
Explicit result type for analytics operations.

Every ProgressAnalyticsService method returns an AnalyticsResult rather than
raising or returning an empty fallback, so callers must check `success`
before reading `value`. A failed result never carries a partial value.
"""
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from application.exceptions import FetchError

T = TypeVar("T")


@dataclass
class AnalyticsResult(Generic[T]):
    """Result of an analytics operation."""
    success: bool
    value: Optional[T] = None
    error: Optional[FetchError] = None

    @classmethod
    def ok(cls, value: T) -> "AnalyticsResult[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: FetchError) -> "AnalyticsResult[T]":
        return cls(success=False, error=error)

    @property
    def error_message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None

    def unwrap(self) -> T:
        """Return the value, or raise the carried FetchError."""
        if not self.success:
            raise self.error or FetchError("Analytics request failed")
        return self.value
