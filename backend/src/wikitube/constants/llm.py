"""LLM client configuration.

Default parameters for LLM API calls. These can be overridden per-call
but provide sensible defaults for most use cases.
"""

# =============================================================================
# Generation Defaults
# =============================================================================
# MAX_TOKENS caps response length; six full articles need a generous budget.
# JSON_TEMPERATURE is used for structured output when a caller gives none.

MAX_TOKENS = 8192
JSON_TEMPERATURE = 0.3

# =============================================================================
# Provider Defaults
# =============================================================================

DEFAULT_PROVIDER = "gemini"
DEFAULT_MODEL = "gemini-2.5-flash"
