# backend/src/wikitube/wiki/__init__.py
"""Encyclopaedia data model and view projections."""

from wikitube.wiki.models import (
    Entity,
    GeneratedEntry,
    GeneratedWiki,
    WikiData,
    WikiEntry,
    response_schema,
)
from wikitube.wiki.view import (
    ALL_CATEGORY,
    category_distribution,
    derive_categories,
    featured_entries,
    filter_entries,
    sentiment_series,
)

__all__ = [
    "ALL_CATEGORY",
    "Entity",
    "GeneratedEntry",
    "GeneratedWiki",
    "WikiData",
    "WikiEntry",
    "category_distribution",
    "derive_categories",
    "featured_entries",
    "filter_entries",
    "response_schema",
    "sentiment_series",
]
