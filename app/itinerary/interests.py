"""Interest string parsing."""

from app.itinerary.types import InterestProfile


def parse_interests(raw: str | None) -> InterestProfile:
    """Normalize a comma-separated interest string into a set of category tokens.

    Tokens are trimmed and lower-cased; empty tokens and duplicates are dropped.
    An empty or whitespace-only string yields an empty profile, meaning
    "no preference".

    Example:
        >>> sorted(parse_interests(" Culture, nature ,,CULTURE "))
        ['culture', 'nature']
    """
    if not raw:
        return frozenset()
    return frozenset(token.strip().lower() for token in raw.split(",") if token.strip())


def normalize_category(category: str) -> str:
    """Normalize an activity category the same way interest tokens are normalized."""
    return category.strip().lower()
