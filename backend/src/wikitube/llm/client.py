# backend/src/wikitube/llm/client.py
"""LiteLLM-based LLM client."""

import json
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from litellm import acompletion
from litellm.exceptions import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    BadRequestError,
    RateLimitError,
)

from wikitube.constants.llm import JSON_TEMPERATURE, MAX_TOKENS


class LLMError(Exception):
    """Base exception for LLM client errors."""

    pass


class LLMConnectionError(LLMError):
    """Raised when unable to connect to the LLM provider."""

    pass


class LLMAuthenticationError(LLMError):
    """Raised when authentication with the LLM provider fails."""

    pass


class LLMRateLimitError(LLMError):
    """Raised when rate limited by the LLM provider."""

    pass


class LLMClient:
    """LLM client issuing schema-constrained requests via LiteLLM."""

    def __init__(
        self,
        provider: str,
        model: str,
        api_key: str | None = None,
        max_tokens: int = MAX_TOKENS,
        log_path: Path | None = None,
    ):
        """Initialize LLM client.

        Args:
            provider: LLM provider (gemini, openai, anthropic, ...).
            model: Model name.
            api_key: API key for the provider. Required before any request.
            max_tokens: Maximum response tokens.
            log_path: Optional path to JSONL log file for query logging.
        """
        self.provider = provider
        self.model = model
        self.api_key = api_key
        self.max_tokens = max_tokens
        self.log_path = log_path

    def _log_query(
        self,
        system_prompt: str | None,
        prompt: str,
        temperature: float,
        response: str | None,
        duration_ms: int,
        error: str | None,
        error_details: dict | None = None,
    ) -> None:
        """Log a query to the JSONL log file.

        Args:
            system_prompt: System prompt used.
            prompt: User prompt.
            temperature: Temperature setting.
            response: Response text (None if error).
            duration_ms: Request duration in milliseconds.
            error: Error message (None if success).
            error_details: Optional dict with status_code, headers, etc.
        """
        if not self.log_path:
            return

        entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "provider": self.provider,
            "model": self.model,
            "request": {
                "system_prompt": system_prompt,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": self.max_tokens,
            },
            "response": response,
            "duration_ms": duration_ms,
            "error": error,
        }

        if error_details:
            entry["error_details"] = error_details

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(entry) + "\n")
        except OSError:
            # Don't let logging failures break the application
            pass

    def _extract_error_details(self, e: Exception) -> dict | None:
        """Extract HTTP details from LiteLLM exceptions.

        Args:
            e: The exception to extract details from.

        Returns:
            Dict with status_code, headers, and provider if available.
        """
        details: dict = {}

        if hasattr(e, "status_code"):
            details["status_code"] = e.status_code

        response = getattr(e, "response", None)
        if response is not None:
            if hasattr(response, "status_code"):
                details["status_code"] = response.status_code
            headers = getattr(response, "headers", None)
            if headers is not None:
                relevant_headers = {
                    k: v
                    for k, v in dict(headers).items()
                    if k.lower() in ("retry-after", "x-request-id", "x-goog-request-id")
                }
                if relevant_headers:
                    details["response_headers"] = relevant_headers

        if hasattr(e, "llm_provider"):
            details["llm_provider"] = e.llm_provider

        if hasattr(e, "message"):
            details["message"] = str(e.message)

        return details if details else None

    def _get_model_string(self) -> str:
        """Get LiteLLM model string.

        Returns:
            Model string in provider/model format.
        """
        if self.provider == "openai":
            return self.model  # OpenAI is default
        return f"{self.provider}/{self.model}"

    async def generate_structured(
        self,
        prompt: str,
        schema: dict[str, Any],
        schema_name: str,
        system_prompt: str | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a completion constrained to a JSON schema.

        The schema is sent as the provider's response format, so the model's
        output is constrained at the protocol level. No free-text JSON
        extraction is attempted on the reply.

        Args:
            prompt: User prompt.
            schema: JSON schema the response must satisfy.
            schema_name: Name of the schema in the request.
            system_prompt: Optional system prompt.
            temperature: Sampling temperature.

        Returns:
            Raw JSON text of the response (may be empty).
        """
        if temperature is None:
            temperature = JSON_TEMPERATURE

        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self._get_model_string(),
            "messages": messages,
            "temperature": temperature,
            "max_tokens": self.max_tokens,
            "response_format": {
                "type": "json_schema",
                "json_schema": {"name": schema_name, "schema": schema, "strict": True},
            },
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key

        start_time = time.perf_counter()
        try:
            response = await acompletion(**kwargs)
            result: str = str(response.choices[0].message.content or "")
        except AuthenticationError as e:
            self._log_failure(system_prompt, prompt, temperature, start_time, e)
            raise LLMAuthenticationError(f"Authentication failed: {e}") from e
        except RateLimitError as e:
            self._log_failure(system_prompt, prompt, temperature, start_time, e)
            raise LLMRateLimitError(f"Rate limit exceeded: {e}") from e
        except APIConnectionError as e:
            self._log_failure(system_prompt, prompt, temperature, start_time, e)
            raise LLMConnectionError(f"Connection failed: {e}") from e
        except (BadRequestError, APIError) as e:
            self._log_failure(system_prompt, prompt, temperature, start_time, e)
            raise LLMError(f"LLM API error: {e}") from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log_query(
            system_prompt,
            prompt,
            temperature,
            response=result,
            duration_ms=duration_ms,
            error=None,
        )
        return result

    def _log_failure(
        self,
        system_prompt: str | None,
        prompt: str,
        temperature: float,
        start_time: float,
        e: Exception,
    ) -> None:
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        self._log_query(
            system_prompt,
            prompt,
            temperature,
            response=None,
            duration_ms=duration_ms,
            error=str(e),
            error_details=self._extract_error_details(e),
        )
