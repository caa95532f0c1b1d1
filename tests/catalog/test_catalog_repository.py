"""Tests for catalog reads and the seed upsert."""

from app.catalog.repository import list_activities_for_destination, upsert_activity
from app.db.session import get_session


def test_list_for_destination_is_ordered_by_name(seeded_catalog):
    with get_session() as session:
        names = [activity.name for activity in list_activities_for_destination(session, "Rome")]
    assert names == ["Colosseum", "Trastevere Food Tour", "Villa Borghese Park"]


def test_unknown_destination_is_empty(seeded_catalog):
    with get_session() as session:
        assert list_activities_for_destination(session, "Atlantis") == []


def test_upsert_updates_existing_activity(seeded_catalog):
    with get_session() as session:
        activity, created = upsert_activity(
            session,
            {
                "destination": "Paris",
                "name": "Louvre Museum",
                "category": "culture",
                "duration_hours": 4.0,
                "price_level": 4,
            },
        )
        assert not created
        assert activity.id == seeded_catalog["Louvre Museum"]

    with get_session() as session:
        louvre = [a for a in list_activities_for_destination(session, "Paris") if a.name == "Louvre Museum"]
    assert len(louvre) == 1
    assert louvre[0].duration_hours == 4.0
    assert louvre[0].price_level == 4
