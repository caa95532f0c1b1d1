"""Trips API endpoints.

Create, read, list, delete and regenerate trip itineraries. Domain errors
from the trip services map to HTTP statuses here and nowhere else.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.orm import Session

from app.api.dependencies.auth import get_current_user_id
from app.api.schemas.trips import MessageResponse, TripListResponse, TripResponse
from app.db.session import get_db
from app.trips.errors import (
    InvalidTripRequestError,
    RegenerationInProgressError,
    TripAccessDeniedError,
    TripNotFoundError,
)
from app.trips.regeneration_service import regenerate_trip
from app.trips.service import create_trip, delete_trip, get_trip_detail, list_trip_summaries, parse_trip_id
from app.trips.types import CreateTripRequest, RegenerateTripRequest

router = APIRouter(prefix="/api/trips", tags=["trips"])


def _http_error(e: Exception) -> HTTPException:
    """Map a trip domain error to an HTTPException."""
    if isinstance(e, TripNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Trip not found")
    if isinstance(e, TripAccessDeniedError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    if isinstance(e, RegenerationInProgressError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Regeneration already in progress")
    if isinstance(e, InvalidTripRequestError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")


_DOMAIN_ERRORS = (TripNotFoundError, TripAccessDeniedError, RegenerationInProgressError, InvalidTripRequestError)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
def create_trip_endpoint(
    req: CreateTripRequest,
    user_id: str = Depends(get_current_user_id),
) -> TripResponse:
    """Create a trip and generate its itinerary.

    Returns:
        TripResponse with the persisted trip and an optional shortfall warning

    Raises:
        HTTPException: 400 on invalid input, 500 on unexpected failure
    """
    try:
        result = create_trip(user_id, req)
    except _DOMAIN_ERRORS as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Failed to create trip", user_id=user_id)
        raise _http_error(e) from e
    return TripResponse(trip=result.trip, warning=result.warning)


@router.get("/my", response_model=TripListResponse)
def list_my_trips(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> TripListResponse:
    """List the caller's trips, newest first, with planned activity totals."""
    return TripListResponse(trips=list_trip_summaries(db, user_id))


@router.get("/{trip_id}", response_model=TripResponse)
def get_trip(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> TripResponse:
    """Get one trip with its full itinerary (404 unknown, 403 not owner)."""
    try:
        trip = get_trip_detail(db, parse_trip_id(trip_id), user_id)
    except _DOMAIN_ERRORS as e:
        raise _http_error(e) from e
    return TripResponse(trip=trip)


@router.delete("/{trip_id}", response_model=MessageResponse)
def delete_trip_endpoint(
    trip_id: str,
    user_id: str = Depends(get_current_user_id),
) -> MessageResponse:
    """Delete a trip and its itinerary (404 unknown, 403 not owner)."""
    try:
        delete_trip(parse_trip_id(trip_id), user_id)
    except _DOMAIN_ERRORS as e:
        raise _http_error(e) from e
    return MessageResponse(message="Trip deleted")


@router.post("/{trip_id}/regenerate", response_model=TripResponse)
def regenerate_trip_endpoint(
    trip_id: str,
    req: RegenerateTripRequest | None = None,
    user_id: str = Depends(get_current_user_id),
) -> TripResponse:
    """Regenerate a trip's itinerary, optionally with new interests.

    Raises:
        HTTPException: 404 unknown trip, 403 not owner, 400 invalid interests,
            409 regeneration already in progress, 500 on unexpected failure
            (the previous itinerary is kept)
    """
    interests = req.interests if req is not None else None
    try:
        result = regenerate_trip(parse_trip_id(trip_id), user_id, interests)
    except _DOMAIN_ERRORS as e:
        raise _http_error(e) from e
    except Exception as e:
        logger.exception("Failed to regenerate trip", trip_id=trip_id, user_id=user_id)
        raise _http_error(e) from e
    return TripResponse(trip=result.trip, warning=result.warning)
