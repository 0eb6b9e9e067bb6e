"""Mock authentication endpoints."""

from fastapi import APIRouter, Depends

from wikitube.api.deps import get_session
from wikitube.api.schemas import AuthState
from wikitube.session import WikiSession

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=AuthState)
async def get_current_user(session: WikiSession = Depends(get_session)) -> AuthState:
    """Get the signed-in user."""
    return AuthState(user=session.auth.current_user)


@router.post("/login", response_model=AuthState)
async def login(session: WikiSession = Depends(get_session)) -> AuthState:
    """Sign in the demo user."""
    return AuthState(user=session.auth.login())


@router.post("/logout", response_model=AuthState)
async def logout(session: WikiSession = Depends(get_session)) -> AuthState:
    """Sign out."""
    session.auth.logout()
    return AuthState(user=None)
