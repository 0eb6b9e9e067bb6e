# backend/src/wikitube/generation/errors.py
"""Generation error taxonomy.

Every failure inside WikiGenerator.generate is raised as one of these. The
string form of the exception is the message shown to end users; the original
cause is chained and logged, never shown.
"""

from wikitube.constants.generation import GENERATION_FAILED_MESSAGE, MISSING_API_KEY_MESSAGE


class GenerationError(Exception):
    """Base exception for encyclopaedia generation failures."""

    default_message = GENERATION_FAILED_MESSAGE

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class ConfigurationError(GenerationError):
    """Raised before any request when the API credential is missing."""

    default_message = MISSING_API_KEY_MESSAGE


class ContentError(GenerationError):
    """Raised when the reply is empty, malformed, or does not match the schema."""

    pass


class TransportError(GenerationError):
    """Raised when the request itself fails (network, auth, quota, provider)."""

    pass
