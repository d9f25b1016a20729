"""Game session API routes."""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from pairs.api.dependencies import GameManagerDep
from pairs.api.errors import ErrorResponse, api_error, board_not_found, game_not_found
from pairs.domain.services.board_validator import InvalidBoardError
from pairs.domain.services.game_manager import (
    BoardNotFoundError,
    GameNotFoundError,
    GameRecord,
)
from pairs.domain.services.time_format import format_clock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/games", tags=["games"])


# =============================================================================
# Request/Response Models
# =============================================================================


class CreateGameRequest(BaseModel):
    """Request body for creating a game."""

    board_id: str


class SoundRequest(BaseModel):
    """Request body for the sound toggle."""

    sound_on: bool


class CardResponse(BaseModel):
    """Tile in API response."""

    index: int
    pair_id: str
    value: str
    status: str


class LevelResponse(BaseModel):
    """Level of the board title, for level navigation."""

    level: int
    board_id: str


class NoticeResponse(BaseModel):
    """Notice for the client to show as a toast."""

    type: str
    title: str
    message: str


class GameResponse(BaseModel):
    """Game view with pending client-side effects."""

    game_id: str
    board_id: str
    board_title: str
    level: int
    levels: list[LevelResponse]
    phase: str
    running: bool
    can_start: bool
    finished: bool
    time_sec: int
    clock: str
    matched_pairs: int
    total_pairs: int
    cards: list[CardResponse]
    sound_on: bool
    sounds: list[str]
    notices: list[NoticeResponse]
    last_score_ms: int | None = None
    last_score: str | None = None


def _game_response(record: GameRecord) -> GameResponse:
    """Project a game record, draining its queued sounds and notices."""
    view = record.session.snapshot()
    return GameResponse(
        game_id=record.id,
        board_id=record.board.id,
        board_title=record.board.title,
        level=record.board.level,
        levels=[LevelResponse(level=ref.level, board_id=ref.board_id) for ref in record.levels],
        phase=view.phase.value,
        running=view.running,
        can_start=not view.running,
        finished=view.phase.is_terminal(),
        time_sec=view.time_sec,
        clock=format_clock(view.time_sec),
        matched_pairs=view.matched_pairs,
        total_pairs=record.board.pair_count,
        cards=[
            CardResponse(index=i, pair_id=card.pair_id, value=card.value, status=card.status.value)
            for i, card in enumerate(view.cards)
        ],
        sound_on=record.sounds.sound_on,
        sounds=[effect.value for effect in record.drain_sounds()],
        notices=[
            NoticeResponse(type=notice.kind.value, title=notice.title, message=notice.message)
            for notice in record.drain_notices()
        ],
        last_score_ms=record.last_score_ms,
        last_score=(
            format_clock(record.last_score_ms // 1000) if record.last_score_ms is not None else None
        ),
    )


_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Game not found"}}


# =============================================================================
# Routes
# =============================================================================


@router.post(
    "",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Board not found"},
        422: {"model": ErrorResponse, "description": "Board not playable"},
    },
)
async def create_game(request: CreateGameRequest, game_manager: GameManagerDep) -> GameResponse:
    """Host a new idle game for a board."""
    try:
        record = await game_manager.create_game(request.board_id)
    except BoardNotFoundError:
        raise board_not_found(request.board_id) from None
    except InvalidBoardError as e:
        logger.warning(f"Board {request.board_id} rejected: {e.problems}")
        raise api_error(
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "INVALID_BOARD",
            "Board can't be played",
            details={"problems": e.problems},
        ) from None

    return _game_response(record)


@router.get("/{game_id}", response_model=GameResponse, responses=_NOT_FOUND)
async def get_game(game_id: str, game_manager: GameManagerDep) -> GameResponse:
    """Poll a game: current view plus sounds and notices since the last poll."""
    try:
        return _game_response(game_manager.get_game(game_id))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.post("/{game_id}/start", response_model=GameResponse, responses=_NOT_FOUND)
async def start_game(game_id: str, game_manager: GameManagerDep) -> GameResponse:
    """Deal a fresh deck and start the clock."""
    try:
        return _game_response(game_manager.start_game(game_id))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.post("/{game_id}/stop", response_model=GameResponse, responses=_NOT_FOUND)
async def stop_game(game_id: str, game_manager: GameManagerDep) -> GameResponse:
    """Stop the clock, keeping the board visible."""
    try:
        return _game_response(game_manager.stop_game(game_id))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.post("/{game_id}/reset", response_model=GameResponse, responses=_NOT_FOUND)
async def reset_game(game_id: str, game_manager: GameManagerDep) -> GameResponse:
    """Clear the board and clock."""
    try:
        return _game_response(game_manager.reset_game(game_id))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.post("/{game_id}/cards/{index}", response_model=GameResponse, responses=_NOT_FOUND)
async def mark_card(game_id: str, index: int, game_manager: GameManagerDep) -> GameResponse:
    """Click a card.

    Clicks the game can't accept (not running, locked board, matched card,
    out of range) are ignored and return the unchanged view.
    """
    try:
        return _game_response(await game_manager.mark_card(game_id, index))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.put("/{game_id}/sound", response_model=GameResponse, responses=_NOT_FOUND)
async def set_sound(
    game_id: str, request: SoundRequest, game_manager: GameManagerDep
) -> GameResponse:
    """Turn sound cues on or off for a game."""
    try:
        return _game_response(game_manager.set_sound(game_id, request.sound_on))
    except GameNotFoundError:
        raise game_not_found(game_id) from None


@router.delete(
    "/{game_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_NOT_FOUND,
)
async def end_game(game_id: str, game_manager: GameManagerDep) -> Response:
    """End a game and release it."""
    try:
        game_manager.end_game(game_id)
    except GameNotFoundError:
        raise game_not_found(game_id) from None
    return Response(status_code=status.HTTP_204_NO_CONTENT)
