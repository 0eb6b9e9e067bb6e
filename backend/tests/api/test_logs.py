"""Tests for the logs API endpoints."""

from pathlib import Path

import pytest
from httpx import AsyncClient, ASGITransport

from wikitube.main import app


@pytest.fixture
async def client():
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


def _write_logs(data_dir: Path, content: str) -> Path:
    log_file = data_dir / "logs" / "llm-queries.jsonl"
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.write_text(content)
    return log_file


async def test_get_llm_logs_returns_content(client, isolated_settings):
    """GET returns the file content and entry count."""
    content = '{"prompt": "a"}\n{"prompt": "b"}\n'
    _write_logs(isolated_settings, content)

    response = await client.get("/api/logs/llm-queries")

    assert response.status_code == 200
    data = response.json()
    assert data["content"] == content
    assert data["entry_count"] == 2
    assert data["size_bytes"] == len(content.encode())


async def test_get_llm_logs_not_found(client, isolated_settings):
    response = await client.get("/api/logs/llm-queries")

    assert response.status_code == 404


async def test_delete_llm_logs(client, isolated_settings):
    log_file = _write_logs(isolated_settings, '{"prompt": "a"}\n')

    response = await client.delete("/api/logs/llm-queries")

    assert response.status_code == 200
    assert not log_file.exists()


async def test_delete_llm_logs_not_found(client, isolated_settings):
    response = await client.delete("/api/logs/llm-queries")

    assert response.status_code == 404
