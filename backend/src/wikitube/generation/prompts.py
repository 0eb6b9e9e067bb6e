# backend/src/wikitube/generation/prompts.py
"""Prompt templates for encyclopaedia generation."""

from dataclasses import dataclass
from typing import Any

from wikitube.constants.generation import ARTICLE_WORDS, ENTRY_COUNT, SUMMARY_WORDS


@dataclass
class PromptTemplate:
    """A template for generating prompts with variable substitution."""

    template: str

    def render(self, **kwargs: Any) -> str:
        """Render the template with the given variables.

        Args:
            **kwargs: Variables to substitute into the template.

        Returns:
            The rendered template string.

        Raises:
            KeyError: If a required variable is missing.
        """
        return self.template.format(**kwargs)


# =============================================================================
# System Prompt
# =============================================================================

SYSTEM_PROMPT = """You are an automated pipeline component that converts a YouTube channel
into a formal encyclopaedia. Your output is published as reference material, so:

1. Write in an academic, objective, third-person register
2. Describe subject matter directly rather than the video itself
3. Prefer accuracy for channels you know; invent plausible content otherwise
4. Keep every field consistent with the requested JSON structure"""


# =============================================================================
# Encyclopaedia Template
# =============================================================================

ENCYCLOPAEDIA_TEMPLATE = PromptTemplate(
    """I will provide a channel name: "{channel_name}".

You must simulate the output of the "Content Extraction" and "NLP Processing" stages
for {entry_count} representative videos from this channel.
If the channel is real (like "Veritasium", "MrBeast", "Fireship"), use your knowledge
to create accurate entries.
If the channel is generic or unknown, invent realistic content fitting the name.

For each video, generate:
1. Title and realistic publish date.
2. "summary": An abstract-style summary (approx {summary_words} words).
3. "fullContent": A detailed, academic-style article body (approx {article_words} words).
   Use objective, third-person language. Avoid "In this video...". Instead use
   "The content explores..." or describe the subject matter directly.
4. "entities": Extract key entities (People, Technologies, Locations).
5. "category": A broad topic classification.
6. "sentimentScore": 0-100 based on the video's tone.
7. "views": A realistic view count.

Also describe the channel itself ("channelDescription") and give a realistic
subscriber count as display text ("subscribers", e.g. "3.1M").

Ensure the tone is academic, objective, and structured, suitable for a MediaWiki
publication."""
)


def get_encyclopaedia_prompt(
    channel_name: str,
    entry_count: int = ENTRY_COUNT,
    summary_words: int = SUMMARY_WORDS,
    article_words: int = ARTICLE_WORDS,
) -> str:
    """Generate the instruction for one channel's encyclopaedia.

    Args:
        channel_name: Channel name as typed by the user (already trimmed).
        entry_count: Number of entries to request.
        summary_words: Target summary length.
        article_words: Target article body length.

    Returns:
        The rendered prompt string.
    """
    return ENCYCLOPAEDIA_TEMPLATE.render(
        channel_name=channel_name,
        entry_count=entry_count,
        summary_words=summary_words,
        article_words=article_words,
    )
