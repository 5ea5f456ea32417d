"""
Streak calculation over active workout dates.

Two active dates are chain-connected when they are at most
STREAK_GAP_TOLERANCE_DAYS calendar days apart, so rest days inside the
window do not break a streak. Several sessions on the same day count as a
single active day.
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

# Maximum gap in days between two active dates that still continues a streak.
# Also the maximum age of the most recent workout for the current streak to
# be alive. Overridable through Settings.streak_gap_tolerance_days.
STREAK_GAP_TOLERANCE_DAYS = 3


@dataclass
class StreakState:
    """Current and longest streak, in active days."""
    current_streak: int = 0
    longest_streak: int = 0


def active_days(dates: Iterable[date]) -> List[date]:
    """Distinct dates, ascending."""
    return sorted(set(dates))


def _longest_run(days: List[date], tolerance_days: int) -> int:
    if not days:
        return 0
    longest = 1
    run = 1
    for previous, current in zip(days, days[1:]):
        if (current - previous).days <= tolerance_days:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
    return max(longest, run)


def _current_run(days: List[date], today: date, tolerance_days: int) -> int:
    if not days:
        return 0
    if (today - days[-1]).days > tolerance_days:
        return 0

    run = 1
    for i in range(len(days) - 1, 0, -1):
        if (days[i] - days[i - 1]).days <= tolerance_days:
            run += 1
        else:
            break
    return run


def calculate_streaks(
    dates: Iterable[date],
    *,
    today: Optional[date] = None,
    tolerance_days: int = STREAK_GAP_TOLERANCE_DAYS,
) -> StreakState:
    """
    Compute current and longest streaks from workout dates.

    Args:
        dates: Dates on which a complete workout happened (duplicates allowed)
        today: Reference date for the current streak (default: date.today())
        tolerance_days: Maximum gap that keeps a chain connected

    Returns:
        StreakState. longest_streak is always >= current_streak.

    Examples:
        >>> calculate_streaks(
        ...     [date(2024, 1, 1), date(2024, 1, 2), date(2024, 1, 3)],
        ...     today=date(2024, 1, 3),
        ... )
        StreakState(current_streak=3, longest_streak=3)
        >>> calculate_streaks(
        ...     [date(2024, 1, 1), date(2024, 1, 10)],
        ...     today=date(2024, 1, 10),
        ... )
        StreakState(current_streak=1, longest_streak=1)
    """
    if today is None:
        today = date.today()

    days = active_days(dates)
    return StreakState(
        current_streak=_current_run(days, today, tolerance_days),
        longest_streak=_longest_run(days, tolerance_days),
    )
