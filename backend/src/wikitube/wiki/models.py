# backend/src/wikitube/wiki/models.py
"""Encyclopaedia data model.

Two layers share one set of field definitions:

- ``GeneratedWiki`` / ``GeneratedEntry`` / ``Entity`` are the response contract
  demanded of the model. ``response_schema()`` turns them into the JSON schema
  passed with the request, so the reply is constrained by the provider rather
  than parsed out of free text.
- ``WikiData`` / ``WikiEntry`` are the client-side records. They add the
  fields the generator never supplies: ``id`` and ``channel_name`` on entries
  and ``total_videos`` on the root.

Field names serialize in camelCase to match the contract.
"""

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

RESPONSE_SCHEMA_NAME = "wiki_data"


class WikiModel(BaseModel):
    """Immutable camelCase model base."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "frozen": True,
    }


class Entity(WikiModel):
    """A keyword or concept extracted from a video."""

    name: str
    type: str = Field(..., description="Category of entity, e.g., Person, Tool, Concept")


class GeneratedEntry(WikiModel):
    """One encyclopaedia entry as supplied by the generator."""

    video_id: str
    title: str
    publish_date: str
    summary: str = Field(..., description="A concise 80-word encyclopaedia summary.")
    full_content: str = Field(
        ...,
        description=(
            "A longer, multi-paragraph encyclopaedia article about the video topic "
            "(approx 300 words)."
        ),
    )
    entities: list[Entity]
    category: str
    sentiment_score: float = Field(..., description="0 is negative, 100 is positive")
    views: float = Field(..., description="A realistic view count")


class GeneratedWiki(WikiModel):
    """Root of the generator's reply. Carries no video count."""

    channel_name: str
    channel_description: str
    subscribers: str
    entries: list[GeneratedEntry]


class WikiEntry(GeneratedEntry):
    """A generated entry with its client-assigned identity."""

    id: str = Field(..., description="Session-unique id assigned after generation")
    channel_name: str = Field(..., description="Owning channel, for display")


class WikiData(WikiModel):
    """The encyclopaedia for one channel.

    Created once per successful generation and replaced wholesale on the next
    run. ``total_videos`` always equals ``len(entries)``.
    """

    channel_name: str
    channel_description: str
    subscribers: str
    total_videos: int
    entries: list[WikiEntry]

    def get_entry(self, entry_id: str) -> WikiEntry | None:
        """Find an entry by id."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None


def _inline_refs(node: Any, defs: dict[str, Any]) -> Any:
    """Replace ``$ref`` pointers with their definitions and drop title annotations.

    Every object node is closed with ``additionalProperties: false`` so the
    schema is accepted by providers that enforce strict structured output.
    """
    if isinstance(node, dict):
        ref = node.get("$ref")
        if ref is not None:
            return _inline_refs(defs[ref.rsplit("/", 1)[-1]], defs)
        # A string "title" is an annotation; a dict "title" is the entry property.
        result = {
            key: _inline_refs(value, defs)
            for key, value in node.items()
            if key != "$defs" and not (key == "title" and isinstance(value, str))
        }
        if result.get("type") == "object":
            result["additionalProperties"] = False
        return result
    if isinstance(node, list):
        return [_inline_refs(item, defs) for item in node]
    return node


def response_schema() -> dict[str, Any]:
    """Build the self-contained JSON schema for the generator's reply.

    Every field of ``GeneratedWiki`` and its nested models is required.

    Returns:
        JSON schema dict with nested definitions inlined.
    """
    schema = GeneratedWiki.model_json_schema(by_alias=True)
    return _inline_refs(schema, schema.get("$defs", {}))
