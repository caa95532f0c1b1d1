"""Tests for the itinerary allocation engine.

Tests cover:
- Determinism for identical input (and independence from input order)
- Daily capacity and no-repeat invariants
- Coverage-first placement and shortfall warnings
- Interest scoring and price/name tie-breaks
- Usage faults
"""

from dataclasses import dataclass

import pytest

from app.itinerary.allocator import DAILY_CAPACITY_HOURS, allocate, empty_plan, rank_activities
from app.itinerary.errors import AllocationUsageError
from app.itinerary.interests import parse_interests


@dataclass(frozen=True)
class StubActivity:
    id: int
    name: str
    category: str
    duration_hours: float
    price_level: int


def _names(day) -> list[str]:
    return [activity.name for activity in day]


@pytest.fixture
def paris() -> list[StubActivity]:
    return [
        StubActivity(1, "Louvre Museum", "culture", 3, 3),
        StubActivity(2, "Eiffel Tower", "culture", 2, 3),
        StubActivity(3, "Montmartre Walk", "nature", 2, 1),
    ]


@pytest.fixture
def large_pool() -> list[StubActivity]:
    categories = ["culture", "nature", "gastronomy", "nightlife"]
    durations = [1, 1.5, 2, 2.5, 3, 4, 5]
    return [
        StubActivity(
            id=i,
            name=f"Activity {i:02d}",
            category=categories[i % len(categories)],
            duration_hours=durations[i % len(durations)],
            price_level=1 + (i * 7) % 5,
        )
        for i in range(1, 41)
    ]


def test_identical_input_gives_identical_output(large_pool):
    profile = parse_interests("culture, nature")
    first = allocate(large_pool, 5, profile)
    second = allocate(large_pool, 5, profile)
    assert first == second
    assert first.activity_ids() == second.activity_ids()


def test_input_order_does_not_change_output(large_pool):
    profile = parse_interests("gastronomy")
    forward = allocate(large_pool, 4, profile)
    backward = allocate(list(reversed(large_pool)), 4, profile)
    assert forward.activity_ids() == backward.activity_ids()


@pytest.mark.parametrize("days_count", [1, 2, 3, 7, 12])
def test_no_day_exceeds_capacity(large_pool, days_count):
    plan = allocate(large_pool, days_count, parse_interests("culture"))
    for day in plan.days:
        assert sum(activity.duration_hours for activity in day) <= DAILY_CAPACITY_HOURS


def test_no_activity_repeats_across_days(large_pool):
    pool_with_duplicates = large_pool + large_pool[:10]
    plan = allocate(pool_with_duplicates, 6, frozenset())
    ids = plan.activity_ids()
    assert len(ids) == len(set(ids))


def test_enough_activities_fill_every_day_without_warning(large_pool):
    plan = allocate(large_pool, 5, parse_interests("nature"))
    assert plan.days_count == 5
    assert plan.empty_days == 0
    assert plan.warning is None


def test_two_activities_over_five_days_leave_three_empty():
    pool = [
        StubActivity(1, "Colosseum", "culture", 2, 3),
        StubActivity(2, "Villa Borghese Park", "nature", 2, 1),
    ]
    plan = allocate(pool, 5, frozenset())

    non_empty = [day for day in plan.days if day]
    assert len(non_empty) == 2
    assert plan.empty_days == 3
    assert plan.warning == "insufficient activities for 3 of 5 days"


def test_empty_pool_yields_all_empty_days_with_warning():
    plan = allocate([], 4, parse_interests("culture"))
    assert plan.days == ((), (), (), ())
    assert plan.warning == "insufficient activities for 4 of 4 days"


def test_activity_longer_than_a_day_is_skipped(paris):
    marathon_tour = StubActivity(9, "All-Day Castle Tour", "culture", 9, 1)
    plan = allocate(paris + [marathon_tour], 2, parse_interests("culture"))
    assert 9 not in plan.activity_ids()
    assert sorted(plan.activity_ids()) == [1, 2, 3]


def test_interest_matches_are_placed_first(paris):
    culture_plan = allocate(paris, 1, parse_interests("culture"))
    assert _names(culture_plan.days[0]) == ["Eiffel Tower", "Louvre Museum", "Montmartre Walk"]

    nature_plan = allocate(paris, 1, parse_interests("Nature"))
    assert _names(nature_plan.days[0]) == ["Montmartre Walk", "Eiffel Tower", "Louvre Museum"]


def test_interest_matching_ignores_category_case_and_padding():
    pool = [
        StubActivity(1, "A Museum", "museum", 2, 1),
        StubActivity(2, "B Food", " Gastronomy ", 2, 5),
    ]
    plan = allocate(pool, 1, parse_interests("gastronomy"))
    assert _names(plan.days[0]) == ["B Food", "A Museum"]


def test_ties_break_on_price_then_name():
    pool = [
        StubActivity(1, "Zoo", "nature", 1, 2),
        StubActivity(2, "Aquarium", "nature", 1, 2),
        StubActivity(3, "Park", "nature", 1, 1),
    ]
    ranked = rank_activities(pool, parse_interests("nature"))
    assert [a.name for a in ranked] == ["Park", "Aquarium", "Zoo"]


def test_each_activity_goes_to_least_loaded_day_that_fits(paris):
    plan = allocate(paris, 3, parse_interests("culture"))
    assert [_names(day) for day in plan.days] == [["Eiffel Tower"], ["Louvre Museum"], ["Montmartre Walk"]]

    pool = [
        StubActivity(1, "A", "x", 4, 1),
        StubActivity(2, "B", "x", 1, 1),
        StubActivity(3, "C", "x", 1, 1),
        StubActivity(4, "D", "x", 1, 1),
    ]
    plan = allocate(pool, 2, frozenset())
    assert [_names(day) for day in plan.days] == [["A"], ["B", "C", "D"]]


def test_full_days_stop_the_pass():
    pool = [
        StubActivity(1, "A", "x", 4, 1),
        StubActivity(2, "B", "x", 4, 1),
        StubActivity(3, "C", "x", 1, 1),
    ]
    plan = allocate(pool, 1, frozenset())
    assert _names(plan.days[0]) == ["A", "B"]
    assert plan.warning is None


def test_custom_daily_capacity():
    pool = [StubActivity(i, f"A{i}", "x", 2, 1) for i in range(1, 5)]
    plan = allocate(pool, 1, frozenset(), daily_capacity_hours=4)
    assert len(plan.days[0]) == 2


@pytest.mark.parametrize("days_count", [0, -1, True, 2.5, "3"])
def test_invalid_days_count_is_a_usage_fault(paris, days_count):
    with pytest.raises(AllocationUsageError, match="days_count"):
        allocate(paris, days_count, frozenset())


def test_non_positive_duration_is_a_usage_fault(paris):
    broken = StubActivity(4, "Broken", "culture", 0, 1)
    with pytest.raises(ValueError, match="non-positive duration"):
        allocate(paris + [broken], 2, frozenset())


def test_non_positive_capacity_is_a_usage_fault(paris):
    with pytest.raises(AllocationUsageError, match="daily_capacity_hours"):
        allocate(paris, 2, frozenset(), daily_capacity_hours=0)


def test_empty_plan_shape():
    plan = empty_plan(3, "no activities found for destination")
    assert plan.days == ((), (), ())
    assert plan.empty_days == 3
    assert plan.warning == "no activities found for destination"
