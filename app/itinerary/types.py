"""Domain types for itinerary allocation."""

from dataclasses import dataclass
from typing import Protocol, TypeAlias

InterestProfile: TypeAlias = frozenset[str]


class CatalogActivity(Protocol):
    """Read-only view of a catalog activity as seen by the allocation engine.

    The ORM Activity model satisfies this protocol; tests use plain dataclasses.
    """

    @property
    def id(self) -> int: ...

    @property
    def name(self) -> str: ...

    @property
    def category(self) -> str: ...

    @property
    def duration_hours(self) -> float: ...

    @property
    def price_level(self) -> int: ...


@dataclass(frozen=True)
class ItineraryPlan:
    """Result of an allocation.

    Attributes:
        days: One tuple of activities per day (index 0 is day 1), in placement order.
            Days may be empty.
        warning: Informational shortfall message, None when every day has activities
    """

    days: tuple[tuple[CatalogActivity, ...], ...]
    warning: str | None = None

    @property
    def days_count(self) -> int:
        return len(self.days)

    @property
    def empty_days(self) -> int:
        return sum(1 for day in self.days if not day)

    def activity_ids(self) -> list[int]:
        """All placed activity ids, day by day, in placement order."""
        return [activity.id for day in self.days for activity in day]
