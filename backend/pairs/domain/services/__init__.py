"""Domain services - orchestration and business logic."""

from .board_validator import (
    InvalidBoardError,
    find_board_problems,
    validate_board,
)
from .deck_builder import (
    build_deck,
    deck_pairs_from_board,
    shuffle,
)
from .game_manager import (
    BoardNotFoundError,
    GameManager,
    GameNotFoundError,
    GameRecord,
    LevelRef,
    Notice,
    NoticeKind,
)
from .game_session import GameSession
from .time_format import format_clock, format_elapsed_ms

__all__ = [
    "InvalidBoardError",
    "find_board_problems",
    "validate_board",
    "build_deck",
    "deck_pairs_from_board",
    "shuffle",
    "GameSession",
    "GameManager",
    "GameRecord",
    "LevelRef",
    "GameNotFoundError",
    "BoardNotFoundError",
    "Notice",
    "NoticeKind",
    "format_clock",
    "format_elapsed_ms",
]
