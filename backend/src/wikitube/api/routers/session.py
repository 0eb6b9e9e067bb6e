"""Session endpoints: start a run, reset, and follow processing progress."""

import asyncio
import json

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from wikitube.api.deps import get_session
from wikitube.api.schemas import RunRequest, SessionState, StepState
from wikitube.generation.errors import ConfigurationError
from wikitube.session import EntryScreen, ProcessingScreen, SessionStateError, WikiSession

router = APIRouter(prefix="/api/session", tags=["session"])

STREAM_POLL_SECONDS = 0.5


def session_state(session: WikiSession) -> SessionState:
    """Build the API view of the session's current screen."""
    screen = session.screen
    channel_name = None
    error = None
    if isinstance(screen, ProcessingScreen):
        channel_name = screen.channel_name
    elif isinstance(screen, EntryScreen):
        error = screen.error
    elif session.wiki_data is not None:
        channel_name = session.wiki_data.channel_name

    return SessionState(
        screen=screen.name,
        channel_name=channel_name,
        error=error,
        data_ready=session.data_ready,
        steps=[
            StepState(
                id=step.id,
                label=step.label,
                details=step.details,
                status=step.status.value,
            )
            for step in session.steps
        ],
    )


@router.get("", response_model=SessionState)
async def get_session_state(
    session: WikiSession = Depends(get_session),
) -> SessionState:
    """Get the current screen."""
    return session_state(session)


@router.post("/runs", response_model=SessionState, status_code=202)
async def start_run(
    request: RunRequest,
    session: WikiSession = Depends(get_session),
) -> SessionState:
    """Start processing a channel."""
    try:
        session.start(request.channel_name)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    except SessionStateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return session_state(session)


@router.post("/reset", response_model=SessionState)
async def reset_session(
    session: WikiSession = Depends(get_session),
) -> SessionState:
    """Discard the current run or wiki and return to the entry screen."""
    session.reset()
    return session_state(session)


@router.get("/stream")
async def stream_progress(
    session: WikiSession = Depends(get_session),
):
    """Stream processing progress via SSE."""

    async def event_generator():
        """Generate SSE events until the session leaves the processing screen."""
        while True:
            state = session_state(session)
            event_data = state.model_dump()

            if state.screen == "browsing":
                yield f"event: complete\ndata: {json.dumps(event_data)}\n\n"
                break
            elif state.screen == "entry":
                event = "error" if state.error else "cancelled"
                yield f"event: {event}\ndata: {json.dumps(event_data)}\n\n"
                break
            else:
                yield f"event: progress\ndata: {json.dumps(event_data)}\n\n"

            await asyncio.sleep(STREAM_POLL_SECONDS)

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
