"""API layer - FastAPI routes and dependencies."""

from .dependencies import (
    BoardRepositoryDep,
    GameManagerDep,
    ScoreServiceDep,
    cleanup_dependencies,
    get_board_repository,
    get_game_manager,
    get_score_service,
    init_dependencies,
)
from .routes import boards_router, games_router

__all__ = [
    # Routes
    "boards_router",
    "games_router",
    # Dependencies
    "init_dependencies",
    "cleanup_dependencies",
    "get_board_repository",
    "get_score_service",
    "get_game_manager",
    # Type aliases
    "BoardRepositoryDep",
    "ScoreServiceDep",
    "GameManagerDep",
]
