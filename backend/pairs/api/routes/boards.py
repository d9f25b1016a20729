"""Board read API routes."""

import logging

from fastapi import APIRouter
from pydantic import BaseModel

from pairs.api.dependencies import BoardRepositoryDep, ScoreServiceDep
from pairs.api.errors import ErrorResponse, board_not_found
from pairs.domain.entities.board import Board
from pairs.domain.services.time_format import format_elapsed_ms
from pairs.ports.score_service import ScoreSubmissionError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/boards", tags=["boards"])


# =============================================================================
# Response Models
# =============================================================================


class PairResponse(BaseModel):
    """Pair in API response."""

    id: str
    term: str
    definition: str


class BoardSummaryResponse(BaseModel):
    """Board without its pairs."""

    id: str
    title: str
    card_count: int
    level: int
    tags: list[str]
    time_limit_sec: int | None = None


class BoardDetailResponse(BoardSummaryResponse):
    """Board with its pairs."""

    pairs: list[PairResponse]


class BoardsResponse(BaseModel):
    """Response for board listing."""

    boards: list[BoardSummaryResponse]


class PlayedBoardResponse(BoardSummaryResponse):
    """Board with the last recorded time on it."""

    last_time_ms: int
    last_time: str


class PlayedBoardsResponse(BaseModel):
    """Response for the played boards listing."""

    boards: list[PlayedBoardResponse]


def _summary(board: Board) -> BoardSummaryResponse:
    return BoardSummaryResponse(
        id=board.id,
        title=board.title,
        card_count=board.card_count,
        level=board.level,
        tags=list(board.tags),
        time_limit_sec=board.time_limit_sec,
    )


# =============================================================================
# Routes
# =============================================================================


@router.get("", response_model=BoardsResponse)
async def list_boards(board_repository: BoardRepositoryDep) -> BoardsResponse:
    """List playable boards sorted by title, then level."""
    boards = await board_repository.list_boards()
    return BoardsResponse(boards=[_summary(board) for board in boards])


@router.get("/played", response_model=PlayedBoardsResponse)
async def list_played_boards(
    board_repository: BoardRepositoryDep, score_service: ScoreServiceDep
) -> PlayedBoardsResponse:
    """List boards that have a recorded time, with that time."""
    played = []
    for board in await board_repository.list_boards():
        try:
            last_ms = await score_service.get_last_score(board.id)
        except ScoreSubmissionError as e:
            logger.warning(f"Skipping board {board.id} in played list: {e}")
            continue
        if last_ms is None:
            continue
        played.append(
            PlayedBoardResponse(
                **_summary(board).model_dump(),
                last_time_ms=last_ms,
                last_time=format_elapsed_ms(last_ms),
            )
        )
    return PlayedBoardsResponse(boards=played)


@router.get(
    "/{board_id}",
    response_model=BoardDetailResponse,
    responses={404: {"model": ErrorResponse, "description": "Board not found"}},
)
async def get_board(board_id: str, board_repository: BoardRepositoryDep) -> BoardDetailResponse:
    """Get a board with its pairs."""
    board = await board_repository.get_board(board_id)
    if board is None:
        raise board_not_found(board_id)

    return BoardDetailResponse(
        **_summary(board).model_dump(),
        pairs=[PairResponse(**pair.to_dict()) for pair in board.pairs],
    )
