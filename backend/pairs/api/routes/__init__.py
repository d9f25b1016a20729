"""API routes module."""

from .boards import router as boards_router
from .games import router as games_router

__all__ = ["boards_router", "games_router"]
