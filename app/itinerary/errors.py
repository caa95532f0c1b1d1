"""Error types for itinerary allocation."""


class AllocationUsageError(ValueError):
    """Raised when the allocation engine is called in violation of its contract.

    Examples: a non-positive day count or an activity with a non-positive
    duration. A small or empty activity pool is NOT an error; it is reported
    through the plan's warning.
    """
