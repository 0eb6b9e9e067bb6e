"""FastAPI dependency injection functions."""

from functools import lru_cache

from fastapi import Depends, HTTPException, status

from wikitube.config import Config, load_settings
from wikitube.session import WikiSession
from wikitube.state import get_app_state
from wikitube.wiki.models import WikiData


@lru_cache
def get_settings() -> Config:
    """Get cached application settings."""
    return load_settings()


def get_session() -> WikiSession:
    """Get the session owned by the application."""
    return get_app_state().session


def require_wiki(session: WikiSession = Depends(get_session)) -> WikiData:
    """Get the loaded encyclopaedia.

    Raises:
        HTTPException: 404 if no encyclopaedia is loaded.
    """
    data = session.wiki_data
    if data is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No encyclopaedia is loaded. Process a channel first.",
        )
    return data
