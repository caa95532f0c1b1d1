"""Error types for trip operations.

Each maps to one distinguishable response in the API layer:
- TripNotFoundError: 404
- TripAccessDeniedError: 403
- RegenerationInProgressError: 409 (retryable once the current holder finishes or its lock expires)
- InvalidTripRequestError: 400
"""


class TripNotFoundError(LookupError):
    """Raised when a trip id does not exist (or is not a valid id)."""

    def __init__(self, trip_id: object):
        self.trip_id = trip_id
        super().__init__(f"Trip not found: {trip_id}")


class TripAccessDeniedError(PermissionError):
    """Raised when the caller does not own the trip."""

    def __init__(self, trip_id: int, user_id: str):
        self.trip_id = trip_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own trip {trip_id}")


class RegenerationInProgressError(RuntimeError):
    """Raised when another request currently holds the trip's regeneration lock."""

    def __init__(self, trip_id: int):
        self.trip_id = trip_id
        super().__init__("Regeneration already in progress")


class InvalidTripRequestError(ValueError):
    """Raised when a create or regenerate request carries invalid input."""
