"""Repository functions for the activity catalog.

Single responsibility: database operations only. The itinerary engine only
ever reads the catalog; upsert exists for seeding.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.db.models import Activity


def list_activities_for_destination(session: Session, destination: str) -> list[Activity]:
    """All catalog activities for one destination, ordered by name then id."""
    query = select(Activity).where(Activity.destination == destination).order_by(Activity.name, Activity.id)
    return list(session.execute(query).scalars().all())


def upsert_activity(session: Session, data: dict) -> tuple[Activity, bool]:
    """Insert or update an activity keyed by (destination, name).

    Args:
        session: Database session
        data: Activity fields (destination, name, category, duration_hours, price_level,
            optional latitude/longitude)

    Returns:
        Tuple of (activity, created) where created is False for an update
    """
    existing = session.execute(
        select(Activity).where(
            Activity.destination == data["destination"],
            Activity.name == data["name"],
        )
    ).scalar_one_or_none()

    if existing is None:
        activity = Activity(**data)
        session.add(activity)
        session.flush()
        return activity, True

    for field, value in data.items():
        setattr(existing, field, value)
    session.flush()
    return existing, False
