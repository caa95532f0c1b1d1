"""Validators for trip requests.

Hard input checks run before any database work, so a rejected request
leaves no trace.
"""

import math

from app.trips.errors import InvalidTripRequestError
from app.trips.types import CreateTripRequest, ValidatedTripRequest


def _parse_days_count(raw: int | float | str | None, max_days: int) -> int:
    """Accept integers and integral numbers or numeric strings ("3", "3.0")."""
    message = f"days_count must be integer 1-{max_days}"
    if raw is None or isinstance(raw, bool):
        raise InvalidTripRequestError(message)
    if isinstance(raw, str):
        try:
            raw = float(raw.strip())
        except ValueError as e:
            raise InvalidTripRequestError(message) from e
    if isinstance(raw, float):
        if not raw.is_integer():
            raise InvalidTripRequestError(message)
        raw = int(raw)
    if not 1 <= raw <= max_days:
        raise InvalidTripRequestError(message)
    return raw


def _parse_budget(raw: object) -> float | None:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return None
    message = "budget must be a number >= 0"
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise InvalidTripRequestError(message) from e
    if not math.isfinite(value) or value < 0:
        raise InvalidTripRequestError(message)
    return value


def validate_create_request(req: CreateTripRequest, max_days: int) -> ValidatedTripRequest:
    """Validate a create-trip request.

    Rules:
    1. destination is a non-empty string
    2. days_count is an integer in 1..max_days (integral floats and numeric
       strings accepted)
    3. budget, when present, is a number >= 0
    4. interests is a non-empty comma-separated string

    Raises:
        InvalidTripRequestError: If any rule fails
    """
    destination = req.destination.strip() if isinstance(req.destination, str) else ""
    if not destination:
        raise InvalidTripRequestError("destination is required")

    days_count = _parse_days_count(req.days_count, max_days)
    budget = _parse_budget(req.budget)

    interests = req.interests.strip() if isinstance(req.interests, str) else ""
    if not interests:
        raise InvalidTripRequestError("interests is required (comma-separated)")

    return ValidatedTripRequest(
        destination=destination,
        days_count=days_count,
        budget=budget,
        interests=interests,
    )


def validate_interests_override(interests: object) -> str | None:
    """Validate an optional interests override for regeneration.

    Returns:
        The trimmed override, or None when no override was given

    Raises:
        InvalidTripRequestError: If an override was given but is not a
            non-empty string
    """
    if interests is None:
        return None
    trimmed = interests.strip() if isinstance(interests, str) else ""
    if not trimmed:
        raise InvalidTripRequestError("interests must be a non-empty string")
    return trimmed
