"""FastAPI dependency injection module.

Provides singleton instances of services for API routes.
Uses lifespan events for initialization and cleanup.
"""

import logging
from typing import Annotated

from fastapi import Depends

from pairs.composition import (
    create_board_repository,
    create_game_manager,
    create_score_service,
)
from pairs.domain.services.game_manager import GameManager
from pairs.ports.board_repository import BoardRepository
from pairs.ports.score_service import ScoreService

logger = logging.getLogger(__name__)


# Singletons stored at module level
_board_repository: BoardRepository | None = None
_score_service: ScoreService | None = None
_game_manager: GameManager | None = None


async def init_dependencies() -> None:
    """Initialize all singleton dependencies.

    Called during FastAPI lifespan startup.
    """
    global _board_repository, _score_service, _game_manager

    _board_repository = create_board_repository()
    _score_service = create_score_service()
    _game_manager = create_game_manager(_board_repository, _score_service)


async def cleanup_dependencies() -> None:
    """Cleanup dependencies on shutdown.

    Called during FastAPI lifespan shutdown.
    Ends hosted games (cancelling their timers) and closes connections.
    """
    global _board_repository, _score_service, _game_manager

    if _game_manager is not None:
        ended = _game_manager.end_all_games()
        logger.info(f"Ended {ended} hosted games")

    if _score_service is not None and hasattr(_score_service, "close"):
        await _score_service.close()

    _board_repository = None
    _score_service = None
    _game_manager = None


def get_board_repository() -> BoardRepository:
    """Dependency: Get BoardRepository instance."""
    if _board_repository is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _board_repository


def get_score_service() -> ScoreService:
    """Dependency: Get ScoreService instance."""
    if _score_service is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _score_service


def get_game_manager() -> GameManager:
    """Dependency: Get GameManager instance."""
    if _game_manager is None:
        raise RuntimeError("Dependencies not initialized. Call init_dependencies first.")
    return _game_manager


# Type aliases for dependency injection
BoardRepositoryDep = Annotated[BoardRepository, Depends(get_board_repository)]
ScoreServiceDep = Annotated[ScoreService, Depends(get_score_service)]
GameManagerDep = Annotated[GameManager, Depends(get_game_manager)]
