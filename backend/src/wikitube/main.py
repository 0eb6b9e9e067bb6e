"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Logging constants defined here (not in constants/) because logging.basicConfig()
# must run before any module imports that might create loggers.
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    format=LOG_FORMAT,
    datefmt=DATE_FORMAT,
    level=logging.INFO,
)

# Unify uvicorn loggers with app format
for uvicorn_logger_name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    uvicorn_logger.addHandler(handler)

from wikitube.api.routers import auth, logs, session, wiki  # noqa: E402
from wikitube.config import load_settings  # noqa: E402

logger = logging.getLogger(__name__)


def _ensure_data_dir() -> Path:
    """Ensure the WIKITUBE_DATA_DIR exists and return its path.

    Creates the directory structure if it doesn't exist:
    - ~/.wikitube/ (or WIKITUBE_DATA_DIR)
    - ~/.wikitube/logs/

    Returns:
        Path to the data directory.
    """
    settings = load_settings()
    settings.logs_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Data directory: {settings.data_dir}")
    return settings.data_dir


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan handler for startup and shutdown events.

    On startup:
    - Ensures WIKITUBE_DATA_DIR exists
    - Warns when no API key is configured
    """
    _ensure_data_dir()

    settings = load_settings()
    if not settings.llm_api_key:
        logger.warning("No API key configured - channel processing will fail until one is set")
    logger.info(f"Model: {settings.llm_provider}/{settings.llm_model}")

    logger.info("WikiTube started")

    yield


app = FastAPI(
    title="WikiTube",
    description="AI-generated encyclopaedias of YouTube channels",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


# Include routers
app.include_router(session.router)
app.include_router(wiki.router)
app.include_router(auth.router)
app.include_router(logs.router)
