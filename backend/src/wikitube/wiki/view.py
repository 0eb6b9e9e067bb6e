# backend/src/wikitube/wiki/view.py
"""View projections over encyclopaedia entries.

All functions are pure and synchronous: they are recomputed on every request
from the current entries, never cached, and never mutate an entry.
"""

from collections import Counter
from typing import Iterable

from wikitube.wiki.models import WikiEntry

ALL_CATEGORY = "All"
FEATURED_LIMIT = 5
SERIES_LABEL_LENGTH = 15


def matches_search(entry: WikiEntry, search: str) -> bool:
    """Check whether title or summary contains the search text, ignoring case."""
    needle = search.lower()
    return needle in entry.title.lower() or needle in entry.summary.lower()


def matches_category(entry: WikiEntry, category: str) -> bool:
    """Check whether the entry is in the category ("All" matches everything)."""
    return category == ALL_CATEGORY or entry.category == category


def filter_by_search(entries: Iterable[WikiEntry], search: str) -> list[WikiEntry]:
    return [entry for entry in entries if matches_search(entry, search)]


def filter_by_category(entries: Iterable[WikiEntry], category: str) -> list[WikiEntry]:
    return [entry for entry in entries if matches_category(entry, category)]


def filter_entries(
    entries: Iterable[WikiEntry],
    search: str = "",
    category: str = ALL_CATEGORY,
) -> list[WikiEntry]:
    """Select entries matching both the search text and the category.

    Args:
        entries: Entries to filter, in display order.
        search: Case-insensitive substring of title or summary. Empty matches all.
        category: Exact category, or ``ALL_CATEGORY``.

    Returns:
        Matching entries in their original order.
    """
    return [
        entry
        for entry in entries
        if matches_search(entry, search) and matches_category(entry, category)
    ]


def derive_categories(entries: Iterable[WikiEntry]) -> list[str]:
    """List unique categories in order of first appearance, with "All" first."""
    categories = dict.fromkeys(entry.category for entry in entries)
    return [ALL_CATEGORY, *categories]


def featured_entries(entries: list[WikiEntry], limit: int = FEATURED_LIMIT) -> list[WikiEntry]:
    return entries[:limit]


def sentiment_series(entries: Iterable[WikiEntry]) -> list[dict[str, float | str]]:
    """Sentiment per entry, labelled by a truncated title."""
    return [
        {"name": entry.title[:SERIES_LABEL_LENGTH] + "...", "sentiment": entry.sentiment_score}
        for entry in entries
    ]


def category_distribution(entries: Iterable[WikiEntry]) -> list[dict[str, int | str]]:
    """Count entries per category, in order of first appearance."""
    counts = Counter(entry.category for entry in entries)
    return [{"name": name, "value": count} for name, count in counts.items()]
