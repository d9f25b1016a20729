"""
Pairs Backend - FastAPI Application

Memory-matching game: hosts game sessions played against boards of
term/definition pairs.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root (parent of backend/)
# Must happen before importing modules that use environment variables
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(env_path)

from fastapi import FastAPI  # noqa: E402
from fastapi.middleware.cors import CORSMiddleware  # noqa: E402

from pairs import __version__  # noqa: E402
from pairs.api.dependencies import cleanup_dependencies, init_dependencies  # noqa: E402
from pairs.api.routes import boards_router, games_router  # noqa: E402
from pairs.config import (  # noqa: E402
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    get_cors_allow_credentials,
    get_cors_origins,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan manager for startup/shutdown events.

    Startup:
    - Initialize singleton dependencies

    Shutdown:
    - End hosted games (cancel their timers)
    - Close HTTP connections
    """
    logger.info("Starting pairs backend...")
    await init_dependencies()
    logger.info("Dependencies initialized")

    yield

    logger.info("Shutting down pairs backend...")
    await cleanup_dependencies()
    logger.info("Shutdown complete")


app = FastAPI(
    title="Pairs API",
    description="Memory-matching game sessions for term/definition boards",
    version=__version__,
    lifespan=lifespan,
)

# CORS configuration - loaded from environment with restrictive defaults
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=get_cors_allow_credentials(),
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
)

# Register API routers
app.include_router(boards_router)
app.include_router(games_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "pairs-backend",
        "version": __version__,
    }
