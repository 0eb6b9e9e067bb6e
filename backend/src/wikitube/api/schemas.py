"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field, field_validator

from wikitube.auth import AuthUser
from wikitube.wiki.models import WikiEntry


class RunRequest(BaseModel):
    """Request to process a channel."""

    channel_name: str = Field(..., description="Channel name as typed by the user")

    @field_validator("channel_name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("channel_name must not be empty")
        return value


class StepState(BaseModel):
    """One processing step."""

    id: int
    label: str
    details: str
    status: str


class SessionState(BaseModel):
    """Current screen of the session."""

    screen: str = Field(..., description="entry, processing or browsing")
    channel_name: str | None = None
    error: str | None = None
    data_ready: bool = False
    steps: list[StepState] = Field(default_factory=list)


class WikiOverview(BaseModel):
    """Channel header, categories and featured entries."""

    channel_name: str
    channel_description: str
    subscribers: str
    total_videos: int
    categories: list[str]
    featured: list[WikiEntry]


class EntryList(BaseModel):
    """Filtered entries."""

    search: str
    category: str
    count: int
    entries: list[WikiEntry]


class SentimentPoint(BaseModel):
    name: str
    sentiment: float


class CategoryCount(BaseModel):
    name: str
    value: int


class WikiStats(BaseModel):
    """Aggregates for charting."""

    sentiment: list[SentimentPoint]
    categories: list[CategoryCount]


class SaveResult(BaseModel):
    """Result of toggling a saved article."""

    entry_id: str
    saved: bool
    saved_articles: list[str]


class AuthState(BaseModel):
    """Signed-in user, if any."""

    user: AuthUser | None = None
