# backend/src/wikitube/generation/generator.py
"""Encyclopaedia generator.

Issues exactly one schema-constrained request per channel, validates the
reply against the response contract and post-processes it into WikiData.
Nothing is cached or retried: the user resubmits after a failure.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from pydantic import ValidationError

from wikitube.constants.generation import (
    ARTICLE_WORDS,
    ENTRY_COUNT,
    ENTRY_ID_PREFIX,
    GENERATION_TEMPERATURE,
    SUMMARY_WORDS,
)
from wikitube.generation.errors import (
    ConfigurationError,
    ContentError,
    TransportError,
)
from wikitube.generation.prompts import SYSTEM_PROMPT, get_encyclopaedia_prompt
from wikitube.llm.client import LLMClient, LLMError
from wikitube.wiki.models import (
    RESPONSE_SCHEMA_NAME,
    GeneratedWiki,
    WikiData,
    WikiEntry,
    response_schema,
)

logger = logging.getLogger(__name__)


def build_wiki_data(generated: GeneratedWiki, generated_at_ms: int) -> WikiData:
    """Turn a validated reply into client-side WikiData.

    Each entry gets an id from its position and the generation timestamp, so
    ids are unique within a run even for field-for-field identical entries.
    The channel name is stamped onto every entry, and total_videos is counted
    from the entries actually delivered.

    Args:
        generated: Validated generator reply.
        generated_at_ms: Generation timestamp in milliseconds.

    Returns:
        A new WikiData.
    """
    entries = [
        WikiEntry(
            **entry.model_dump(),
            id=f"{ENTRY_ID_PREFIX}_{idx}_{generated_at_ms}",
            channel_name=generated.channel_name,
        )
        for idx, entry in enumerate(generated.entries)
    ]
    return WikiData(
        channel_name=generated.channel_name,
        channel_description=generated.channel_description,
        subscribers=generated.subscribers,
        total_videos=len(entries),
        entries=entries,
    )


class WikiGenerator:
    """Generates a channel encyclopaedia through a single structured request."""

    def __init__(
        self,
        llm_client: LLMClient,
        entry_count: int = ENTRY_COUNT,
        summary_words: int = SUMMARY_WORDS,
        article_words: int = ARTICLE_WORDS,
        temperature: float = GENERATION_TEMPERATURE,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the generator.

        Args:
            llm_client: LLM client used for the request.
            entry_count: Number of entries requested per channel.
            summary_words: Target summary length given to the model.
            article_words: Target article length given to the model.
            temperature: Sampling temperature.
            clock: Returns the current time in seconds (used for entry ids).
        """
        self.llm_client = llm_client
        self.entry_count = entry_count
        self.summary_words = summary_words
        self.article_words = article_words
        self.temperature = temperature
        self.clock = clock

    def ensure_configured(self) -> None:
        """Fail fast when the API credential is absent.

        Raises:
            ConfigurationError: If no API key is configured.
        """
        if not self.llm_client.api_key:
            raise ConfigurationError()

    async def generate(self, channel_name: str) -> WikiData:
        """Generate the encyclopaedia for a channel.

        Args:
            channel_name: Free-text channel name; must be non-blank.

        Returns:
            Fully populated WikiData.

        Raises:
            ValueError: If channel_name is blank.
            ConfigurationError: If the API key is missing (no request is made).
            ContentError: If the reply is empty or does not match the contract.
            TransportError: If the request fails.
        """
        name = channel_name.strip()
        if not name:
            raise ValueError("channel_name must not be empty")

        self.ensure_configured()

        prompt = get_encyclopaedia_prompt(
            channel_name=name,
            entry_count=self.entry_count,
            summary_words=self.summary_words,
            article_words=self.article_words,
        )

        try:
            text = await self.llm_client.generate_structured(
                prompt,
                schema=response_schema(),
                schema_name=RESPONSE_SCHEMA_NAME,
                system_prompt=SYSTEM_PROMPT,
                temperature=self.temperature,
            )
        except LLMError as e:
            logger.error(f"Generation request failed for '{name}': {e}")
            raise TransportError() from e
        except Exception as e:
            logger.exception(f"Unexpected failure calling the model for '{name}'")
            raise TransportError() from e

        if not text.strip():
            logger.error(f"Empty response from model for '{name}'")
            raise ContentError()

        try:
            generated = GeneratedWiki.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Response for '{name}' does not match the schema: {e}")
            raise ContentError() from e

        wiki = build_wiki_data(generated, int(self.clock() * 1000))
        logger.info(f"Generated {wiki.total_videos} entries for '{wiki.channel_name}'")
        return wiki
