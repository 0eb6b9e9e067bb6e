"""Global application state for the active session."""

from __future__ import annotations

from typing import Optional

from wikitube.config import load_settings
from wikitube.generation.generator import WikiGenerator
from wikitube.llm.client import LLMClient
from wikitube.session import WikiSession


def build_generator() -> WikiGenerator:
    """Build a generator for one run from the current settings."""
    settings = load_settings()
    llm_client = LLMClient(
        provider=settings.llm_provider,
        model=settings.llm_model,
        api_key=settings.llm_api_key,
        max_tokens=settings.llm.max_tokens,
        log_path=settings.llm_log_path,
    )
    return WikiGenerator(
        llm_client,
        entry_count=settings.generation.entry_count,
        summary_words=settings.generation.summary_words,
        article_words=settings.generation.article_words,
        temperature=settings.generation.temperature,
    )


class AppState:
    """Application state singleton."""

    _instance: Optional["AppState"] = None

    def __new__(cls) -> "AppState":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._session = None
        return cls._instance

    @property
    def session(self) -> WikiSession:
        if self._session is None:
            settings = load_settings()
            self._session = WikiSession(
                generator_factory=build_generator,
                tick_interval=settings.pipeline.tick_interval,
                settle_delay=settings.pipeline.settle_delay,
            )
        return self._session

    @session.setter
    def session(self, value: Optional[WikiSession]) -> None:
        self._session = value


def get_app_state() -> AppState:
    """Get the application state singleton."""
    return AppState()


def reset_app_state() -> None:
    """Reset the application state (for testing)."""
    AppState._instance = None
