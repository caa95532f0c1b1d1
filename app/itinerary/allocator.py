"""Itinerary allocation engine.

Deterministic, greedy partition of catalog activities across trip days:
- Activities matching the interest profile score higher and are placed first
- Ties break on ascending price level, then ascending name
- Each activity goes to the least-loaded day that still has room, lowest day first
- A day never exceeds the daily capacity and an activity is used at most once

No randomness and no I/O: identical inputs always produce identical plans.
"""

from collections.abc import Iterable, Sequence

from loguru import logger

from app.itinerary.errors import AllocationUsageError
from app.itinerary.interests import normalize_category
from app.itinerary.types import CatalogActivity, InterestProfile, ItineraryPlan

DAILY_CAPACITY_HOURS = 8.0
INTEREST_MATCH_SCORE = 2


def score_activity(activity: CatalogActivity, interest_profile: InterestProfile) -> int:
    """Score an activity against the interest profile (+2 on category match, else 0)."""
    if normalize_category(activity.category) in interest_profile:
        return INTEREST_MATCH_SCORE
    return 0


def rank_activities(
    activities: Iterable[CatalogActivity],
    interest_profile: InterestProfile,
) -> list[CatalogActivity]:
    """Sort activities by score descending, then price level ascending, then name ascending.

    The sort is stable, so activities equal on all three keys keep their input order.
    """
    return sorted(
        activities,
        key=lambda a: (-score_activity(a, interest_profile), a.price_level, a.name),
    )


def shortfall_warning(empty_days: int, days_count: int) -> str | None:
    """Warning text for a plan with empty days, None when every day is covered."""
    if empty_days == 0:
        return None
    return f"insufficient activities for {empty_days} of {days_count} days"


def empty_plan(days_count: int, warning: str | None) -> ItineraryPlan:
    """Plan with days_count empty days and the given warning."""
    _validate_days_count(days_count)
    return ItineraryPlan(days=tuple(() for _ in range(days_count)), warning=warning)


def _validate_days_count(days_count: int) -> None:
    if isinstance(days_count, bool) or not isinstance(days_count, int) or days_count < 1:
        raise AllocationUsageError(f"days_count must be a positive integer, got {days_count!r}")


def _pick_day(loads: Sequence[float], duration: float, capacity: float) -> int | None:
    """Index of the least-loaded day that can take `duration` hours, lowest index on ties."""
    best: int | None = None
    for index, load in enumerate(loads):
        if load + duration > capacity:
            continue
        if best is None or load < loads[best]:
            best = index
    return best


def allocate(
    activities: Sequence[CatalogActivity],
    days_count: int,
    interest_profile: InterestProfile,
    *,
    daily_capacity_hours: float = DAILY_CAPACITY_HOURS,
) -> ItineraryPlan:
    """Allocate activities to days.

    Args:
        activities: Candidate pool (may be empty)
        days_count: Number of days in the trip (positive integer)
        interest_profile: Normalized interest tokens (see parse_interests)
        daily_capacity_hours: Maximum summed duration per day

    Returns:
        ItineraryPlan with exactly days_count days. Activities that fit no
        day are left out. A warning is attached when any day stays empty.

    Raises:
        AllocationUsageError: If days_count or daily_capacity_hours is not
            positive, or an activity has a non-positive duration
    """
    _validate_days_count(days_count)
    if daily_capacity_hours <= 0:
        raise AllocationUsageError(f"daily_capacity_hours must be positive, got {daily_capacity_hours!r}")
    for activity in activities:
        if activity.duration_hours <= 0:
            raise AllocationUsageError(
                f"Activity {activity.id!r} ({activity.name!r}) has non-positive duration {activity.duration_hours!r}"
            )

    days: list[list[CatalogActivity]] = [[] for _ in range(days_count)]
    loads = [0.0] * days_count
    used: set[int] = set()
    skipped = 0

    for activity in rank_activities(activities, interest_profile):
        if all(load >= daily_capacity_hours for load in loads):
            break
        if activity.id in used:
            continue
        day_index = _pick_day(loads, activity.duration_hours, daily_capacity_hours)
        if day_index is None:
            skipped += 1
            continue
        days[day_index].append(activity)
        loads[day_index] += activity.duration_hours
        used.add(activity.id)

    empty_days = sum(1 for day in days if not day)
    plan = ItineraryPlan(
        days=tuple(tuple(day) for day in days),
        warning=shortfall_warning(empty_days, days_count),
    )

    logger.debug(
        "Allocation complete",
        days_count=days_count,
        pool_size=len(activities),
        placed=len(used),
        skipped=skipped,
        empty_days=empty_days,
    )
    return plan
