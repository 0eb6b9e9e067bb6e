# backend/src/wikitube/auth.py
"""Mock authentication.

Identity only gates the "save article" action; nothing else depends on it.
"""

from pydantic import BaseModel

MOCK_USER = {
    "id": "u_123",
    "name": "Researcher User",
    "email": "researcher@example.com",
    "avatar": "https://picsum.photos/id/64/200/200",
}


class AuthUser(BaseModel):
    """Signed-in user."""

    id: str
    name: str
    email: str
    avatar: str


class MockAuthProvider:
    """Signs in a fixed demo user."""

    def __init__(self):
        self._user: AuthUser | None = None

    @property
    def current_user(self) -> AuthUser | None:
        return self._user

    def login(self) -> AuthUser:
        self._user = AuthUser(**MOCK_USER)
        return self._user

    def logout(self) -> None:
        self._user = None
