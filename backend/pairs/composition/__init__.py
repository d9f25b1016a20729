"""
Composition Root.

Centralized dependency wiring for the application.
All factory functions that instantiate adapters belong here so the
domain never imports from adapters.
"""

import logging

from pairs.adapters.asyncio_scheduler import AsyncioScheduler
from pairs.adapters.http_scores import HttpScoreService
from pairs.adapters.local_boards import LocalBoardRepository
from pairs.adapters.memory_scores import InMemoryScoreService
from pairs.adapters.sound_cues import QueuedSoundPlayer
from pairs.config import (
    get_board_source,
    get_boards_path,
    get_max_games,
    get_revert_delay_ms,
    get_score_service_timeout,
    get_score_service_type,
    get_score_service_url,
    get_time_limit_sec,
)
from pairs.domain.services.game_manager import GameManager
from pairs.ports.board_repository import BoardRepository
from pairs.ports.score_service import ScoreService

logger = logging.getLogger(__name__)


def create_board_repository() -> BoardRepository:
    """Create the board repository selected by BOARD_SOURCE.

    Raises:
        ValueError: If BOARD_SOURCE is not recognized
    """
    source = get_board_source()
    if source == "local":
        path = get_boards_path()
        logger.info(f"Using local boards ({path or 'embedded'})")
        return LocalBoardRepository(path)
    raise ValueError(f"Invalid BOARD_SOURCE: '{source}'. Valid options: 'local'")


def create_score_service() -> ScoreService:
    """Create the score service selected by SCORE_SERVICE.

    Raises:
        ValueError: If SCORE_SERVICE is not recognized
    """
    service_type = get_score_service_type()
    if service_type == "memory":
        logger.info("Using in-memory score service")
        return InMemoryScoreService()
    if service_type == "http":
        url = get_score_service_url()
        logger.info(f"Submitting scores to {url}")
        return HttpScoreService(base_url=url, timeout=get_score_service_timeout())
    raise ValueError(
        f"Invalid SCORE_SERVICE: '{service_type}'. Valid options: 'memory', 'http'"
    )


def create_game_manager(
    board_repository: BoardRepository,
    score_service: ScoreService,
) -> GameManager:
    """Create GameManager on the running event loop with configured limits."""
    return GameManager(
        board_repository=board_repository,
        score_service=score_service,
        scheduler=AsyncioScheduler(),
        sound_player_factory=QueuedSoundPlayer,
        time_limit_sec=get_time_limit_sec(),
        revert_delay_ms=get_revert_delay_ms(),
        max_games=get_max_games(),
    )
