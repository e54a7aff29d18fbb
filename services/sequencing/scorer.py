"""Narration scoring: which rooms does the script talk about."""

from collections.abc import Iterable, Mapping

from shared.enums import RoomCategory

from .catalog import CANONICAL_ORDER, CATEGORY_KEYWORDS, FORCED_CATEGORIES


def score_categories(
    text: str,
    keywords: Mapping[RoomCategory, Iterable[str]] = CATEGORY_KEYWORDS,
) -> dict[RoomCategory, int]:
    """Count keyword occurrences per category in the narration.

    Matching is case-insensitive and substring based, so "bed" also counts
    inside "bedroom". Occurrences of one keyword do not overlap.
    """
    lowered = (text or "").lower()
    scores: dict[RoomCategory, int] = {}
    for category, category_keywords in keywords.items():
        scores[category] = sum(lowered.count(keyword.lower()) for keyword in category_keywords if keyword)
    return scores


def build_category_order(
    text: str,
    keywords: Mapping[RoomCategory, Iterable[str]] = CATEGORY_KEYWORDS,
    canonical_order: Iterable[RoomCategory] = CANONICAL_ORDER,
    forced: Iterable[RoomCategory] = FORCED_CATEGORIES,
) -> list[RoomCategory]:
    """Canonical order restricted to categories the narration mentions.

    Categories are filtered, never re-sorted by score. Forced categories are
    kept even with a zero score, so an empty narration still yields the
    opening shot and the catch-all bucket.
    """
    scores = score_categories(text, keywords)
    forced_set = set(forced)
    return [
        category
        for category in canonical_order
        if scores.get(category, 0) > 0 or category in forced_set
    ]
