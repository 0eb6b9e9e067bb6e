"""API endpoints for the LLM query log."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from wikitube.api.deps import get_settings
from wikitube.config import Config

router = APIRouter(prefix="/api/logs", tags=["logs"])


class LogsResponse(BaseModel):
    """Response containing log file content."""

    content: str
    size_bytes: int
    entry_count: int


class DeleteLogsResponse(BaseModel):
    """Response after deleting logs."""

    message: str


@router.get("/llm-queries", response_model=LogsResponse)
async def get_llm_logs(settings: Config = Depends(get_settings)) -> LogsResponse:
    """Get the LLM query log."""
    log_file = settings.llm_log_path

    if not log_file.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No logs found",
        )

    content = log_file.read_text()
    entry_count = sum(1 for line in content.strip().split("\n") if line.strip())

    return LogsResponse(
        content=content,
        size_bytes=log_file.stat().st_size,
        entry_count=entry_count,
    )


@router.delete("/llm-queries", response_model=DeleteLogsResponse)
async def delete_llm_logs(settings: Config = Depends(get_settings)) -> DeleteLogsResponse:
    """Delete the LLM query log."""
    log_file = settings.llm_log_path

    if not log_file.exists():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No logs to delete",
        )

    log_file.unlink()

    return DeleteLogsResponse(message="Logs deleted successfully")
