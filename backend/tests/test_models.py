"""Encyclopaedia model and response contract tests."""

import json

import pytest
from pydantic import ValidationError

from wikitube.wiki.models import GeneratedWiki, WikiData, response_schema


def _walk(node):
    """Yield every dict in a nested schema."""
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _walk(value)
    elif isinstance(node, list):
        for item in node:
            yield from _walk(item)


def test_response_schema_uses_camel_case_root_fields():
    """Root properties match the contract names."""
    schema = response_schema()

    assert set(schema["properties"]) == {
        "channelName",
        "channelDescription",
        "subscribers",
        "entries",
    }
    assert set(schema["required"]) == set(schema["properties"])


def test_response_schema_excludes_client_side_fields():
    """The model is never asked for ids, channel names on entries or counts."""
    schema = response_schema()
    entry = schema["properties"]["entries"]["items"]

    assert "totalVideos" not in schema["properties"]
    assert "id" not in entry["properties"]
    assert "channelName" not in entry["properties"]


def test_response_schema_requires_every_entry_field():
    """Every entry field is required."""
    entry = response_schema()["properties"]["entries"]["items"]

    assert set(entry["required"]) == {
        "videoId",
        "title",
        "publishDate",
        "summary",
        "fullContent",
        "entities",
        "category",
        "sentimentScore",
        "views",
    }


def test_response_schema_is_self_contained():
    """No $ref or $defs remain after inlining."""
    schema = response_schema()

    for node in _walk(schema):
        assert "$ref" not in node
        assert "$defs" not in node


def test_response_schema_keeps_title_property():
    """The entry's title field survives removal of title annotations."""
    entry = response_schema()["properties"]["entries"]["items"]

    assert entry["properties"]["title"]["type"] == "string"
    assert "title" not in entry


def test_response_schema_numeric_types():
    """Sentiment and views are both numbers."""
    entry = response_schema()["properties"]["entries"]["items"]

    assert entry["properties"]["sentimentScore"]["type"] == "number"
    assert entry["properties"]["views"]["type"] == "number"


def test_response_schema_entities_are_name_type_pairs():
    """Entities are objects with name and type."""
    entities = response_schema()["properties"]["entries"]["items"]["properties"]["entities"]

    assert entities["type"] == "array"
    assert set(entities["items"]["required"]) == {"name", "type"}


def test_generated_wiki_parses_camel_case_json(wiki_payload):
    """The model's reply parses from camelCase JSON."""
    wiki = GeneratedWiki.model_validate_json(json.dumps(wiki_payload))

    assert wiki.channel_name == "Fireship"
    assert wiki.entries[0].full_content.startswith("The content explores")
    assert wiki.entries[0].sentiment_score == 72


def test_generated_wiki_rejects_missing_field(wiki_payload):
    """A reply missing a required entry field is rejected."""
    del wiki_payload["entries"][0]["views"]

    with pytest.raises(ValidationError):
        GeneratedWiki.model_validate(wiki_payload)


def test_out_of_range_sentiment_is_accepted(wiki_payload):
    """Sentiment outside 0-100 passes through unchanged."""
    wiki_payload["entries"][0]["sentimentScore"] = 140

    wiki = GeneratedWiki.model_validate(wiki_payload)

    assert wiki.entries[0].sentiment_score == 140


def test_wiki_data_serializes_camel_case(wiki_data: WikiData):
    """Client records dump with contract names."""
    dumped = wiki_data.model_dump(by_alias=True)

    assert dumped["totalVideos"] == 6
    assert dumped["entries"][0]["channelName"] == "Fireship"
    assert "videoId" in dumped["entries"][0]


def test_wiki_data_get_entry(wiki_data: WikiData):
    """Entries are found by id; unknown ids return None."""
    first = wiki_data.entries[0]

    assert wiki_data.get_entry(first.id) == first
    assert wiki_data.get_entry("missing") is None


def test_wiki_data_is_immutable(wiki_data: WikiData):
    """Records cannot be modified after creation."""
    with pytest.raises(ValidationError):
        wiki_data.entries[0].title = "Changed"


def test_response_schema_closes_every_object():
    """Every object node forbids extra keys, as strict output modes require."""
    objects = [node for node in _walk(response_schema()) if node.get("type") == "object"]

    assert len(objects) == 3
    for node in objects:
        assert node["additionalProperties"] is False


def test_response_schema_object_properties_are_all_required():
    """Strict mode also needs every declared property listed as required."""
    for node in _walk(response_schema()):
        if node.get("type") == "object":
            assert set(node["required"]) == set(node["properties"])


def test_fractional_views_are_accepted(wiki_payload):
    """A fractional view count passes through unchanged."""
    wiki_payload["entries"][0]["views"] = 1250.5

    wiki = GeneratedWiki.model_validate(wiki_payload)

    assert wiki.entries[0].views == 1250.5
