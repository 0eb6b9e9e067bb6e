"""Processing pipeline pacing.

The processing screen advances through a fixed list of steps on a timer that
is independent of the real request. These values set that cadence.
"""

# =============================================================================
# Timing (seconds)
# =============================================================================
# One step advances every TICK_INTERVAL_SECONDS; the last step becomes active
# after len(steps) * TICK_INTERVAL_SECONDS. SETTLE_DELAY_SECONDS is the pause
# between "everything finished" and switching to the wiki.

TICK_INTERVAL_SECONDS = 1.2
SETTLE_DELAY_SECONDS = 0.8

# =============================================================================
# Steps
# =============================================================================
# (label, details) for each step, in display order.

PIPELINE_STEPS: tuple[tuple[str, str], ...] = (
    ("Channel Metadata Retrieval", "Querying YouTube Data API v3..."),
    ("Content Extraction", "Fetching transcripts via Caption API..."),
    ("Natural Language Processing", "Entity extraction & summarization (Google Cloud NLP)..."),
    ("Data Consolidation", "Merging metadata with semantic analysis..."),
    ("Encyclopaedia Publication", "Generating pages via MediaWiki Action API..."),
)
