"""Encyclopaedia browsing endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from wikitube.api.deps import get_session, require_wiki
from wikitube.api.schemas import (
    CategoryCount,
    EntryList,
    SaveResult,
    SentimentPoint,
    WikiOverview,
    WikiStats,
)
from wikitube.session import SessionStateError, WikiSession
from wikitube.wiki.models import WikiData, WikiEntry
from wikitube.wiki.view import (
    ALL_CATEGORY,
    category_distribution,
    derive_categories,
    featured_entries,
    filter_entries,
    sentiment_series,
)

router = APIRouter(prefix="/api/wiki", tags=["wiki"])


@router.get("", response_model=WikiOverview)
async def get_overview(data: WikiData = Depends(require_wiki)) -> WikiOverview:
    """Get the channel header, categories and featured entries."""
    return WikiOverview(
        channel_name=data.channel_name,
        channel_description=data.channel_description,
        subscribers=data.subscribers,
        total_videos=data.total_videos,
        categories=derive_categories(data.entries),
        featured=featured_entries(data.entries),
    )


@router.get("/entries", response_model=EntryList)
async def list_entries(
    search: str = Query("", description="Case-insensitive text in title or summary"),
    category: str = Query(ALL_CATEGORY, description="Exact category, or All"),
    data: WikiData = Depends(require_wiki),
) -> EntryList:
    """List entries matching the search text and category."""
    entries = filter_entries(data.entries, search=search, category=category)
    return EntryList(search=search, category=category, count=len(entries), entries=entries)


@router.get("/entries/{entry_id}", response_model=WikiEntry)
async def get_entry(entry_id: str, data: WikiData = Depends(require_wiki)) -> WikiEntry:
    """Get one article."""
    entry = data.get_entry(entry_id)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry not found: {entry_id}",
        )
    return entry


@router.get("/stats", response_model=WikiStats)
async def get_stats(data: WikiData = Depends(require_wiki)) -> WikiStats:
    """Get sentiment and category aggregates."""
    return WikiStats(
        sentiment=[SentimentPoint(**point) for point in sentiment_series(data.entries)],
        categories=[CategoryCount(**item) for item in category_distribution(data.entries)],
    )


@router.post("/entries/{entry_id}/save", response_model=SaveResult)
async def toggle_saved(
    entry_id: str,
    session: WikiSession = Depends(get_session),
) -> SaveResult:
    """Save or unsave an article for the signed-in user."""
    try:
        saved = session.toggle_saved(entry_id)
    except SessionStateError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Entry not found: {entry_id}",
        )
    except PermissionError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    return SaveResult(entry_id=entry_id, saved=saved, saved_articles=session.saved_articles)
