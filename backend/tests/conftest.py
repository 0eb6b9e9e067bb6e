"""Shared pytest fixtures for all tests.

Every test runs against a fresh data directory, empty settings caches and a
new application session, with no API key in the environment.
"""

import pytest

from wikitube.generation.errors import ConfigurationError
from wikitube.generation.generator import build_wiki_data
from wikitube.wiki.models import GeneratedWiki, WikiData


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point settings at a temporary data directory and clear caches.

    Yields:
        Path to the temporary data directory.
    """
    from wikitube.api.deps import get_settings
    from wikitube.config import load_settings
    from wikitube.state import reset_app_state

    data_dir = tmp_path / "wikitube"
    data_dir.mkdir()
    monkeypatch.setenv("WIKITUBE_DATA_DIR", str(data_dir))
    for name in ("GEMINI_API_KEY", "API_KEY", "ACTIVE_PROVIDER", "ACTIVE_MODEL"):
        monkeypatch.delenv(name, raising=False)

    load_settings.cache_clear()
    get_settings.cache_clear()
    reset_app_state()

    yield data_dir

    reset_app_state()
    load_settings.cache_clear()
    get_settings.cache_clear()


def make_entry_payload(idx: int, title: str | None = None, category: str = "Tech") -> dict:
    """Build one entry as the model would return it (camelCase)."""
    return {
        "videoId": f"yt_{idx}",
        "title": title or f"Video number {idx}",
        "publishDate": "2024-03-01",
        "summary": f"An abstract-style summary of video {idx}.",
        "fullContent": f"The content explores topic {idx} in depth.",
        "entities": [{"name": "JavaScript", "type": "Technology"}],
        "category": category,
        "sentimentScore": 72,
        "views": 150000 + idx,
    }


def make_wiki_payload(channel_name: str = "Fireship", count: int = 6) -> dict:
    """Build a full generator reply."""
    return {
        "channelName": channel_name,
        "channelDescription": "High-intensity code tutorials.",
        "subscribers": "3.1M",
        "entries": [make_entry_payload(idx) for idx in range(count)],
    }


@pytest.fixture
def wiki_payload() -> dict:
    """A six-entry generator reply for "Fireship"."""
    return make_wiki_payload()


@pytest.fixture
def wiki_data(wiki_payload) -> WikiData:
    """Client-side WikiData built from the sample reply."""
    return build_wiki_data(GeneratedWiki.model_validate(wiki_payload), 1700000000000)


class FakeGenerator:
    """Stand-in for WikiGenerator that resolves on demand.

    ``generate`` waits until ``release`` (or ``fail``) is called, so tests
    control when data arrives relative to the animator.
    """

    def __init__(self, data: WikiData | None = None, configured: bool = True):
        import asyncio

        self.data = data
        self.configured = configured
        self.calls: list[str] = []
        self._released = asyncio.Event()
        self._error: Exception | None = None

    def ensure_configured(self) -> None:
        if not self.configured:
            raise ConfigurationError()

    def release(self) -> None:
        self._released.set()

    def fail(self, error: Exception) -> None:
        self._error = error
        self._released.set()

    async def generate(self, channel_name: str) -> WikiData:
        self.calls.append(channel_name)
        await self._released.wait()
        if self._error is not None:
            raise self._error
        assert self.data is not None
        return self.data


@pytest.fixture
def fake_generator_cls():
    """The FakeGenerator class, for tests that build their own instances."""
    return FakeGenerator


@pytest.fixture
def make_payload():
    """Factory for generator replies: make_payload(channel_name, count)."""
    return make_wiki_payload


@pytest.fixture
def make_entry():
    """Factory for single entry payloads: make_entry(idx, title, category)."""
    return make_entry_payload
