"""Encyclopaedia generation configuration.

These settings control what is requested from the model for one channel and
the fixed wording of the failure surfaced to end users.
"""

# =============================================================================
# Entry Shape
# =============================================================================
# ENTRY_COUNT is fixed: the browsing view assumes a small, bounded entry set.
# SUMMARY_WORDS and ARTICLE_WORDS are length targets written into the prompt,
# never enforced on the reply.

ENTRY_COUNT = 6
SUMMARY_WORDS = 80
ARTICLE_WORDS = 300

# =============================================================================
# Sampling
# =============================================================================
# Low temperature keeps the encyclopaedic tone consistent between runs.

GENERATION_TEMPERATURE = 0.5

# =============================================================================
# Identifiers
# =============================================================================
# Entry ids are "<prefix>_<position>_<generation timestamp in ms>".

ENTRY_ID_PREFIX = "vid"

# =============================================================================
# User-facing Messages
# =============================================================================

GENERATION_FAILED_MESSAGE = "Failed to process channel data via AI pipeline."
MISSING_API_KEY_MESSAGE = "API_KEY is missing in environment variables."
