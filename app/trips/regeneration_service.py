"""Service orchestrator for trip regeneration.

This is the public entry point for regenerating a trip's itinerary.

Flow:
1. Load the trip and check ownership (not found / not owner)
2. Validate the optional interests override
3. Take the regeneration lock with one conditional UPDATE, committed on its own
4. In one transaction: re-read the catalog, allocate, delete and recreate
   the day plans, persist the override
5. Always clear the lock afterwards, whatever happened in step 4

The lock expires on its own after the configured TTL, so a crashed holder
blocks the trip for at most that long and a failed unlock is only logged.
"""

from datetime import datetime, timedelta, timezone

from loguru import logger
from sqlalchemy.orm import Session

from app.catalog.repository import list_activities_for_destination
from app.config.settings import settings
from app.db.session import get_session
from app.trips import repository
from app.trips.errors import RegenerationInProgressError, TripNotFoundError
from app.trips.service import build_plan_result, load_owned_trip, plan_for_destination
from app.trips.types import TripPlanResult
from app.trips.validators import validate_interests_override


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _lock_ttl() -> timedelta:
    return timedelta(seconds=settings.regen_lock_ttl_seconds)


def _acquire_lock(trip_id: int, user_id: str) -> datetime:
    """Take the trip's regeneration lock or raise RegenerationInProgressError."""
    now = _utcnow()
    lock_until = now + _lock_ttl()
    with get_session() as session:
        acquired = repository.acquire_regeneration_lock(
            session,
            trip_id=trip_id,
            user_id=user_id,
            now=now,
            lock_until=lock_until,
        )
    if not acquired:
        logger.info("Regeneration refused, lock held", trip_id=trip_id, user_id=user_id)
        raise RegenerationInProgressError(trip_id)
    logger.info("Regeneration lock acquired", trip_id=trip_id, lock_until=lock_until.isoformat())
    return lock_until


def _release_lock(trip_id: int, user_id: str) -> None:
    """Clear the lock. Failures are logged and swallowed; the TTL covers them."""
    try:
        with get_session() as session:
            repository.release_regeneration_lock(session, trip_id=trip_id, user_id=user_id)
    except Exception as e:
        logger.warning(f"Failed to release regeneration lock for trip {trip_id}, it will expire on its own: {e}")
        return
    logger.debug("Regeneration lock released", trip_id=trip_id)


def _regenerate_in_transaction(
    session: Session,
    trip_id: int,
    interests_override: str | None,
) -> TripPlanResult:
    trip = repository.get_trip(session, trip_id)
    if trip is None:
        raise TripNotFoundError(trip_id)

    effective_interests = interests_override if interests_override is not None else trip.interests
    activities = list_activities_for_destination(session, trip.destination)
    plan = plan_for_destination(activities, trip.days_count, effective_interests)

    repository.replace_day_plans(session, trip.id, plan)
    if effective_interests != trip.interests:
        trip.interests = effective_interests
    session.flush()

    return build_plan_result(session, trip.id, plan.warning)


def regenerate_trip(
    trip_id: int,
    user_id: str,
    interests_override: object = None,
) -> TripPlanResult:
    """Regenerate a trip's itinerary and atomically replace the persisted one.

    Args:
        trip_id: Trip to regenerate
        user_id: Caller; must own the trip
        interests_override: Optional new interests, persisted with the new plan

    Returns:
        TripPlanResult with the updated trip and the allocation warning, if any

    Raises:
        TripNotFoundError: If the trip does not exist
        TripAccessDeniedError: If the caller does not own the trip
        InvalidTripRequestError: If the override is blank or not a string
        RegenerationInProgressError: If another regeneration holds the lock
    """
    with get_session() as session:
        load_owned_trip(session, trip_id, user_id)

    override = validate_interests_override(interests_override)
    _acquire_lock(trip_id, user_id)

    try:
        with get_session() as session:
            result = _regenerate_in_transaction(session, trip_id, override)
    except Exception:
        logger.exception("Regeneration failed, previous itinerary kept", trip_id=trip_id, user_id=user_id)
        raise
    finally:
        _release_lock(trip_id, user_id)

    logger.info(
        "Regeneration complete",
        trip_id=trip_id,
        user_id=user_id,
        planned_activities=sum(len(day.activities) for day in result.trip.day_plans),
        warning=result.warning,
    )
    return result
