"""Trip service: creation, reads and deletion.

Every write runs inside a single get_session() transaction, so a trip is
never observable without its full set of day plans.
"""

from collections.abc import Sequence

from loguru import logger
from sqlalchemy.orm import Session

from app.catalog.repository import list_activities_for_destination
from app.config.settings import settings
from app.db.models import Trip
from app.db.session import get_session
from app.itinerary.allocator import allocate, empty_plan
from app.itinerary.interests import parse_interests
from app.itinerary.types import CatalogActivity, ItineraryPlan
from app.trips import repository
from app.trips.errors import TripAccessDeniedError, TripNotFoundError
from app.trips.types import CreateTripRequest, TripDetail, TripPlanResult, TripSummary
from app.trips.validators import validate_create_request

NO_ACTIVITIES_WARNING = "no activities found for destination"


def parse_trip_id(raw: object) -> int:
    """Convert a path value to a trip id; anything but a positive integer is not found."""
    try:
        trip_id = int(str(raw))
    except ValueError as e:
        raise TripNotFoundError(raw) from e
    if trip_id <= 0:
        raise TripNotFoundError(raw)
    return trip_id


def load_owned_trip(session: Session, trip_id: int, user_id: str) -> Trip:
    """Load a trip and check the caller owns it.

    Raises:
        TripNotFoundError: If the trip does not exist
        TripAccessDeniedError: If the trip belongs to someone else
    """
    trip = repository.get_trip(session, trip_id)
    if trip is None:
        raise TripNotFoundError(trip_id)
    if trip.user_id != user_id:
        raise TripAccessDeniedError(trip_id, user_id)
    return trip


def plan_for_destination(
    activities: Sequence[CatalogActivity],
    days_count: int,
    interests: str,
) -> ItineraryPlan:
    """Build an itinerary for a destination's catalog.

    An empty catalog short-circuits to an all-empty plan with a fixed warning
    instead of running the allocator.
    """
    if not activities:
        return empty_plan(days_count, NO_ACTIVITIES_WARNING)
    return allocate(activities, days_count, parse_interests(interests))


def build_plan_result(session: Session, trip_id: int, warning: str | None) -> TripPlanResult:
    """Snapshot the persisted trip (inside the open transaction) together with the plan warning."""
    trip = repository.get_trip_with_plans(session, trip_id)
    if trip is None:
        raise TripNotFoundError(trip_id)
    return TripPlanResult(trip=TripDetail.from_model(trip), warning=warning)


def create_trip(user_id: str, req: CreateTripRequest) -> TripPlanResult:
    """Create a trip and persist its generated itinerary in one transaction.

    Args:
        user_id: Owner of the new trip
        req: Create request (validated here)

    Returns:
        TripPlanResult with the persisted trip and the allocation warning, if any

    Raises:
        InvalidTripRequestError: If the request is invalid
    """
    validated = validate_create_request(req, settings.max_trip_days)

    with get_session() as session:
        activities = list_activities_for_destination(session, validated.destination)
        plan = plan_for_destination(activities, validated.days_count, validated.interests)

        trip = repository.create_trip(
            session,
            user_id=user_id,
            destination=validated.destination,
            days_count=validated.days_count,
            budget=validated.budget,
            interests=validated.interests,
        )
        repository.create_day_plans(session, trip.id, plan)
        result = build_plan_result(session, trip.id, plan.warning)

    logger.info(
        "Trip created",
        trip_id=result.trip.id,
        user_id=user_id,
        destination=validated.destination,
        days_count=validated.days_count,
        catalog_size=len(activities),
        warning=plan.warning,
    )
    return result


def get_trip_detail(session: Session, trip_id: int, user_id: str) -> TripDetail:
    """Get a trip's full itinerary for its owner."""
    load_owned_trip(session, trip_id, user_id)
    trip = repository.get_trip_with_plans(session, trip_id)
    if trip is None:
        raise TripNotFoundError(trip_id)
    return TripDetail.from_model(trip)


def list_trip_summaries(session: Session, user_id: str) -> list[TripSummary]:
    """List the caller's trips, newest first."""
    return [
        TripSummary(
            id=trip.id,
            destination=trip.destination,
            days_count=trip.days_count,
            budget=trip.budget,
            interests=trip.interests,
            created_at=trip.created_at,
            total_planned_activities=total,
        )
        for trip, total in repository.list_trips_for_user(session, user_id)
    ]


def delete_trip(trip_id: int, user_id: str) -> None:
    """Delete a trip and, by cascade, its whole itinerary."""
    with get_session() as session:
        trip = load_owned_trip(session, trip_id, user_id)
        repository.delete_trip(session, trip)
    logger.info("Trip deleted", trip_id=trip_id, user_id=user_id)
