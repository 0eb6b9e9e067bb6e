"""Session API tests."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from wikitube.main import app
from wikitube.session import WikiSession
from wikitube.state import get_app_state


@pytest.fixture
async def client():
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def fake(fake_generator_cls, wiki_data):
    """Install a fast session backed by a controllable generator."""
    generator = fake_generator_cls(data=wiki_data)
    get_app_state().session = WikiSession(
        generator_factory=lambda: generator,
        tick_interval=0.01,
        settle_delay=0.01,
    )
    return generator


async def wait_for_screen(client: AsyncClient, screen: str) -> dict:
    for _ in range(100):
        data = (await client.get("/api/session")).json()
        if data["screen"] == screen:
            return data
        await asyncio.sleep(0.01)
    raise AssertionError(f"session never reached {screen}")


async def test_initial_session_is_entry(client):
    response = await client.get("/api/session")

    assert response.status_code == 200
    data = response.json()
    assert data["screen"] == "entry"
    assert data["error"] is None
    assert data["steps"] == []


async def test_start_run_returns_processing(client, fake):
    """POST /api/session/runs starts processing."""
    response = await client.post("/api/session/runs", json={"channel_name": "Fireship"})

    assert response.status_code == 202
    data = response.json()
    assert data["screen"] == "processing"
    assert data["channel_name"] == "Fireship"
    assert len(data["steps"]) == 5
    assert all(step["status"] == "pending" for step in data["steps"])

    fake.release()
    await wait_for_screen(client, "browsing")


async def test_run_completes_to_browsing(client, fake):
    await client.post("/api/session/runs", json={"channel_name": "Fireship"})
    fake.release()

    data = await wait_for_screen(client, "browsing")

    assert data["channel_name"] == "Fireship"
    assert data["steps"] == []


async def test_blank_channel_name_returns_422(client, fake):
    response = await client.post("/api/session/runs", json={"channel_name": "   "})

    assert response.status_code == 422


async def test_missing_api_key_returns_503(client):
    """Without a key the run is refused and the error shown on entry."""
    response = await client.post("/api/session/runs", json={"channel_name": "Fireship"})

    assert response.status_code == 503
    assert "API_KEY" in response.json()["detail"]

    state = (await client.get("/api/session")).json()
    assert state["screen"] == "entry"
    assert "API_KEY" in state["error"]


async def test_second_run_while_processing_returns_409(client, fake):
    await client.post("/api/session/runs", json={"channel_name": "Fireship"})

    response = await client.post("/api/session/runs", json={"channel_name": "MrBeast"})

    assert response.status_code == 409
    fake.release()
    await wait_for_screen(client, "browsing")


async def test_failed_run_returns_to_entry_with_error(client, fake):
    from wikitube.generation.errors import ContentError

    await client.post("/api/session/runs", json={"channel_name": "Fireship"})
    fake.fail(ContentError())

    data = await wait_for_screen(client, "entry")

    assert data["error"] == "Failed to process channel data via AI pipeline."


async def test_reset_returns_to_entry(client, fake):
    await client.post("/api/session/runs", json={"channel_name": "Fireship"})
    fake.release()
    await wait_for_screen(client, "browsing")

    response = await client.post("/api/session/reset")

    assert response.status_code == 200
    assert response.json()["screen"] == "entry"
    assert (await client.get("/api/wiki")).status_code == 404


async def test_stream_ends_with_complete_event(client, fake):
    """The SSE stream reports progress and closes on completion."""
    await client.post("/api/session/runs", json={"channel_name": "Fireship"})
    fake.release()

    response = await client.get("/api/session/stream")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    assert "event: complete" in response.text


async def test_stream_on_entry_screen_closes_immediately(client):
    response = await client.get("/api/session/stream")

    assert "event: cancelled" in response.text


async def test_stream_reports_error_event(client, fake):
    from wikitube.generation.errors import TransportError

    await client.post("/api/session/runs", json={"channel_name": "Fireship"})
    fake.fail(TransportError())
    await wait_for_screen(client, "entry")

    response = await client.get("/api/session/stream")

    assert "event: error" in response.text
