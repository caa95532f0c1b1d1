"""Domain types for trips.

Request types are deliberately permissive (strings and fractions are
accepted for numeric fields, any JSON value for text fields) so that
validation errors surface as InvalidTripRequestError with a readable
message instead of a schema error.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict

from app.db.models import DayPlan, Trip


class CreateTripRequest(BaseModel):
    """Request to create a trip and generate its first itinerary."""

    destination: Any = None
    days_count: int | float | str | None = None
    budget: Any = None
    interests: Any = None


class RegenerateTripRequest(BaseModel):
    """Request to regenerate a trip's itinerary.

    Attributes:
        interests: Optional override; when given it must be non-empty and it
            replaces the trip's stored interests
    """

    interests: Any = None


class ValidatedTripRequest(BaseModel):
    """Create request after validation and normalization."""

    destination: str
    days_count: int
    budget: float | None
    interests: str


class ActivitySnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    destination: str
    name: str
    category: str
    duration_hours: float
    price_level: int
    latitude: float | None = None
    longitude: float | None = None


class PlannedActivitySnapshot(BaseModel):
    order_index: int
    activity: ActivitySnapshot


class DayPlanSnapshot(BaseModel):
    day_number: int
    activities: list[PlannedActivitySnapshot]

    @classmethod
    def from_model(cls, day_plan: DayPlan) -> DayPlanSnapshot:
        return cls(
            day_number=day_plan.day_number,
            activities=[
                PlannedActivitySnapshot(
                    order_index=planned.order_index,
                    activity=ActivitySnapshot.model_validate(planned.activity),
                )
                for planned in day_plan.planned_activities
            ],
        )


class TripDetail(BaseModel):
    """Trip with its full itinerary, days ordered by day number, activities by order index."""

    id: int
    user_id: str
    destination: str
    days_count: int
    budget: float | None
    interests: str
    created_at: datetime
    day_plans: list[DayPlanSnapshot]

    @classmethod
    def from_model(cls, trip: Trip) -> TripDetail:
        return cls(
            id=trip.id,
            user_id=trip.user_id,
            destination=trip.destination,
            days_count=trip.days_count,
            budget=trip.budget,
            interests=trip.interests,
            created_at=trip.created_at,
            day_plans=[DayPlanSnapshot.from_model(dp) for dp in trip.day_plans],
        )


class TripSummary(BaseModel):
    id: int
    destination: str
    days_count: int
    budget: float | None
    interests: str
    created_at: datetime
    total_planned_activities: int


class TripPlanResult(BaseModel):
    """Outcome of creating or regenerating a trip."""

    trip: TripDetail
    warning: str | None = None
