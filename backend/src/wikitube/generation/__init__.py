# backend/src/wikitube/generation/__init__.py
"""Encyclopaedia generation module."""

from wikitube.generation.errors import (
    ConfigurationError,
    ContentError,
    GenerationError,
    TransportError,
)
from wikitube.generation.generator import WikiGenerator, build_wiki_data
from wikitube.generation.prompts import (
    ENCYCLOPAEDIA_TEMPLATE,
    SYSTEM_PROMPT,
    PromptTemplate,
    get_encyclopaedia_prompt,
)

__all__ = [
    "ConfigurationError",
    "ContentError",
    "ENCYCLOPAEDIA_TEMPLATE",
    "GenerationError",
    "PromptTemplate",
    "SYSTEM_PROMPT",
    "TransportError",
    "WikiGenerator",
    "build_wiki_data",
    "get_encyclopaedia_prompt",
]
