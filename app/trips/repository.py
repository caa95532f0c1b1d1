"""Repository functions for trip persistence.

Handles trips, their day plans and planned activities, and the trip
regeneration lock. Single responsibility: database operations only.
Callers own the transaction (see app.db.session.get_session).
"""

from datetime import datetime

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session, selectinload

from app.db.models import DayPlan, PlannedActivity, Trip
from app.itinerary.types import CatalogActivity, ItineraryPlan


def get_trip(session: Session, trip_id: int) -> Trip | None:
    """Get a trip without loading its itinerary."""
    return session.get(Trip, trip_id)


def get_trip_with_plans(session: Session, trip_id: int) -> Trip | None:
    """Get a trip with day plans, planned activities and catalog activities loaded."""
    query = (
        select(Trip)
        .where(Trip.id == trip_id)
        .options(selectinload(Trip.day_plans).selectinload(DayPlan.planned_activities))
        .execution_options(populate_existing=True)
    )
    return session.execute(query).scalar_one_or_none()


def list_trips_for_user(session: Session, user_id: str) -> list[tuple[Trip, int]]:
    """List a user's trips, newest first, each with its total planned activity count."""
    totals = (
        select(DayPlan.trip_id, func.count(PlannedActivity.id).label("total"))
        .join(PlannedActivity, PlannedActivity.day_plan_id == DayPlan.id)
        .group_by(DayPlan.trip_id)
        .subquery()
    )
    query = (
        select(Trip, func.coalesce(totals.c.total, 0))
        .outerjoin(totals, totals.c.trip_id == Trip.id)
        .where(Trip.user_id == user_id)
        .order_by(Trip.created_at.desc(), Trip.id.desc())
    )
    return [(trip, int(total)) for trip, total in session.execute(query).all()]


def create_trip(
    session: Session,
    *,
    user_id: str,
    destination: str,
    days_count: int,
    budget: float | None,
    interests: str,
) -> Trip:
    """Create a trip record (without day plans)."""
    trip = Trip(
        user_id=user_id,
        destination=destination,
        days_count=days_count,
        budget=budget,
        interests=interests,
    )
    session.add(trip)
    session.flush()
    return trip


def delete_trip(session: Session, trip: Trip) -> None:
    """Delete a trip; day plans and planned activities cascade."""
    session.delete(trip)
    session.flush()


def acquire_regeneration_lock(
    session: Session,
    *,
    trip_id: int,
    user_id: str,
    now: datetime,
    lock_until: datetime,
) -> bool:
    """Atomically take the trip's regeneration lock.

    Single conditional UPDATE: it only matches when the lock is absent or
    expired, so of two concurrent callers at most one sees a matched row.

    Returns:
        True if the lock was acquired, False if another holder owns it
    """
    statement = (
        update(Trip)
        .where(
            Trip.id == trip_id,
            Trip.user_id == user_id,
            or_(Trip.regen_lock_until.is_(None), Trip.regen_lock_until < now),
        )
        .values(regen_lock_until=lock_until)
        .execution_options(synchronize_session=False)
    )
    result = session.execute(statement)
    return result.rowcount == 1


def release_regeneration_lock(session: Session, *, trip_id: int, user_id: str) -> None:
    """Unconditionally clear the trip's regeneration lock."""
    statement = (
        update(Trip)
        .where(Trip.id == trip_id, Trip.user_id == user_id)
        .values(regen_lock_until=None)
        .execution_options(synchronize_session=False)
    )
    session.execute(statement)


def delete_day_plans(session: Session, trip_id: int) -> int:
    """Delete every planned activity and day plan owned by the trip.

    Returns:
        Number of day plans deleted
    """
    day_plan_ids = select(DayPlan.id).where(DayPlan.trip_id == trip_id)
    session.execute(
        delete(PlannedActivity)
        .where(PlannedActivity.day_plan_id.in_(day_plan_ids))
        .execution_options(synchronize_session=False)
    )
    result = session.execute(
        delete(DayPlan).where(DayPlan.trip_id == trip_id).execution_options(synchronize_session=False)
    )
    return result.rowcount


def add_planned_activity(
    session: Session,
    day_plan: DayPlan,
    activity: CatalogActivity,
    order_index: int,
) -> PlannedActivity:
    """Place one catalog activity on a day at a 1-based order index."""
    planned = PlannedActivity(day_plan_id=day_plan.id, activity_id=activity.id, order_index=order_index)
    session.add(planned)
    return planned


def create_day_plans(session: Session, trip_id: int, plan: ItineraryPlan) -> list[DayPlan]:
    """Persist an itinerary plan as day plans 1..N with contiguous order indexes.

    Returns:
        Created day plans ordered by day number
    """
    day_plans = [DayPlan(trip_id=trip_id, day_number=day_number) for day_number in range(1, plan.days_count + 1)]
    session.add_all(day_plans)
    session.flush()

    for day_plan, activities in zip(day_plans, plan.days, strict=True):
        for order_index, activity in enumerate(activities, start=1):
            add_planned_activity(session, day_plan, activity, order_index)
    session.flush()
    return day_plans


def replace_day_plans(session: Session, trip_id: int, plan: ItineraryPlan) -> list[DayPlan]:
    """Delete the trip's itinerary and recreate it from the plan.

    Must run inside the caller's transaction: a failure part way leaves the
    old itinerary in place once the transaction rolls back.
    """
    delete_day_plans(session, trip_id)
    session.flush()
    return create_day_plans(session, trip_id, plan)
