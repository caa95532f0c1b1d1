"""Tests for interest string parsing."""

import pytest

from app.itinerary.interests import normalize_category, parse_interests


def test_tokens_are_trimmed_lowercased_and_deduplicated():
    assert parse_interests(" Culture, nature ,CULTURE,Gastronomy ") == frozenset({"culture", "nature", "gastronomy"})


@pytest.mark.parametrize("raw", ["", "   ", None, ",,,", " , ,"])
def test_blank_input_is_no_preference(raw):
    assert parse_interests(raw) == frozenset()


def test_single_token():
    assert parse_interests("nature") == frozenset({"nature"})


def test_category_normalization_matches_token_normalization():
    assert normalize_category("  Nature ") in parse_interests("NATURE")
