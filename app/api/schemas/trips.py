"""Response schemas for the trips API."""

from pydantic import BaseModel

from app.trips.types import TripDetail, TripSummary


class TripResponse(BaseModel):
    trip: TripDetail
    warning: str | None = None


class TripListResponse(BaseModel):
    trips: list[TripSummary]


class MessageResponse(BaseModel):
    message: str
