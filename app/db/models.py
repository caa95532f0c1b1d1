from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Base class for all database models."""


class Activity(Base):
    """Destination activity catalog entry.

    The catalog is read-only from the itinerary engine's point of view.
    Rows are created by the seed command (or by catalog administration,
    which lives outside this service).

    Stores:
    - destination/name: unique pair identifying the activity
    - category: free-form tag matched against trip interests (culture, nature, ...)
    - duration_hours: time the activity takes, always > 0
    - price_level: 1 (cheap) to 5 (expensive)
    - latitude/longitude: optional coordinates
    """

    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    destination: Mapped[str] = mapped_column(String, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False, index=True)
    duration_hours: Mapped[float] = mapped_column(Float, nullable=False)
    price_level: Mapped[int] = mapped_column(Integer, nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    __table_args__ = (
        UniqueConstraint("destination", "name", name="uq_activities_destination_name"),
        CheckConstraint("duration_hours > 0", name="ck_activities_duration_positive"),
        CheckConstraint("price_level BETWEEN 1 AND 5", name="ck_activities_price_level_range"),
    )

    def __repr__(self) -> str:
        return f"Activity(id={self.id!r}, destination={self.destination!r}, name={self.name!r})"


class Trip(Base):
    """A traveler's trip and the root of its persisted itinerary.

    Owned by exactly one user (users live in the external auth service, so
    user_id is a plain string). regen_lock_until is the regeneration lock:
    NULL or a past timestamp means unlocked, a future timestamp means a
    regeneration currently owns the trip.
    """

    __tablename__ = "trips"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    destination: Mapped[str] = mapped_column(String, nullable=False)
    days_count: Mapped[int] = mapped_column(Integer, nullable=False)
    budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    interests: Mapped[str] = mapped_column(Text, nullable=False)
    regen_lock_until: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    day_plans: Mapped[list[DayPlan]] = relationship(
        "DayPlan",
        back_populates="trip",
        order_by="DayPlan.day_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("idx_trips_user_created", "user_id", "created_at"),)


class DayPlan(Base):
    """One day (1-based day_number) of a trip's itinerary.

    Only ever created or deleted as part of a full-trip (re)generation.
    """

    __tablename__ = "day_plans"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    trip_id: Mapped[int] = mapped_column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    day_number: Mapped[int] = mapped_column(Integer, nullable=False)

    trip: Mapped[Trip] = relationship("Trip", back_populates="day_plans")
    planned_activities: Mapped[list[PlannedActivity]] = relationship(
        "PlannedActivity",
        back_populates="day_plan",
        order_by="PlannedActivity.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("trip_id", "day_number", name="uq_day_plans_trip_day"),)


class PlannedActivity(Base):
    """Catalog activity placed on a day, at a 1-based order_index unique within the day."""

    __tablename__ = "planned_activities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    day_plan_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("day_plans.id", ondelete="CASCADE"), nullable=False, index=True
    )
    activity_id: Mapped[int] = mapped_column(Integer, ForeignKey("activities.id"), nullable=False)
    order_index: Mapped[int] = mapped_column(Integer, nullable=False)

    day_plan: Mapped[DayPlan] = relationship("DayPlan", back_populates="planned_activities")
    activity: Mapped[Activity] = relationship("Activity", lazy="joined")

    __table_args__ = (UniqueConstraint("day_plan_id", "order_index", name="uq_planned_activities_day_order"),)
