"""Game manager service hosting game sessions."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from uuid import uuid4

from pairs.domain.constants import REVERT_DELAY_MS, NoticeMessages
from pairs.domain.entities.board import Board
from pairs.domain.services.board_validator import validate_board
from pairs.domain.services.deck_builder import deck_pairs_from_board
from pairs.domain.services.game_session import GameSession
from pairs.domain.value_objects.sound_effect import SoundEffect
from pairs.ports.board_repository import BoardRepository
from pairs.ports.scheduler import Scheduler
from pairs.ports.score_service import ScoreService, ScoreSubmissionError
from pairs.ports.sound_player import SoundCueQueue

logger = logging.getLogger(__name__)


class BoardNotFoundError(Exception):
    """Raised when the requested board doesn't exist."""

    def __init__(self, board_id: str):
        self.board_id = board_id
        super().__init__(f"Board {board_id} not found")


class GameNotFoundError(Exception):
    """Raised when no hosted game matches the id."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game {game_id} not found")


class NoticeKind(StrEnum):
    """Severity of a notice shown to the player."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Notice:
    """Message for the player (shown as a toast by the client)."""

    kind: NoticeKind
    title: str
    message: str


@dataclass(frozen=True)
class LevelRef:
    """One level of a board title, for switching between levels."""

    level: int
    board_id: str


@dataclass
class GameRecord:
    """A hosted game: one board, one engine, and its pending outputs.

    Attributes:
        id: Unique game identifier (UUID v4)
        board: Board being played
        session: Engine instance
        sounds: Cue queue handed to the engine as its sound player
        levels: Every level sharing the board title, ordered by level
        last_score_ms: Last recorded time for the board, if any
        notices: Notices not yet delivered to the client
        pending_finish_ms: Finish time waiting to be submitted
        created_at: When the game was created
    """

    board: Board
    session: GameSession
    sounds: SoundCueQueue
    id: str = field(default_factory=lambda: str(uuid4()))
    levels: list[LevelRef] = field(default_factory=list)
    last_score_ms: int | None = None
    notices: list[Notice] = field(default_factory=list)
    pending_finish_ms: int | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def drain_notices(self) -> list[Notice]:
        notices, self.notices = self.notices, []
        return notices

    def drain_sounds(self) -> list[SoundEffect]:
        return self.sounds.drain()


class GameManager:
    """Hosts game sessions for remote clients.

    Responsibilities:
    - Loading and validating boards before a session exists
    - One GameSession per hosted game, keyed by game id
    - Wiring on_finish to score submission and on_timeout to a notice
    - Bounding the number of hosted games (oldest evicted first)

    The engine emits on_finish synchronously from inside mark_card; the
    finish time is parked on the record and submitted before mark_card
    returns to the caller.
    """

    def __init__(
        self,
        board_repository: BoardRepository,
        score_service: ScoreService,
        scheduler: Scheduler,
        sound_player_factory: Callable[[], SoundCueQueue],
        time_limit_sec: int | None = None,
        revert_delay_ms: int = REVERT_DELAY_MS,
        max_games: int = 100,
    ):
        """Initialize game manager.

        Args:
            board_repository: Port for loading boards
            score_service: Port for submitting finish times
            scheduler: Event-loop scheduling shared by all sessions
            sound_player_factory: Creates a cue queue per game
            time_limit_sec: Default time limit, overridden by the board's own
            revert_delay_ms: Mismatch display window
            max_games: Maximum number of hosted games
        """
        self._board_repository = board_repository
        self._score_service = score_service
        self._scheduler = scheduler
        self._sound_player_factory = sound_player_factory
        self._time_limit_sec = time_limit_sec
        self._revert_delay_ms = revert_delay_ms
        self._max_games = max_games
        self._games: dict[str, GameRecord] = {}

    @property
    def game_count(self) -> int:
        return len(self._games)

    async def create_game(self, board_id: str) -> GameRecord:
        """Load a board and host an idle game for it.

        Args:
            board_id: Board to play

        Returns:
            New GameRecord with an idle session

        Raises:
            BoardNotFoundError: If the board doesn't exist
            InvalidBoardError: If the board can't be played
        """
        board = await self._board_repository.get_board(board_id)
        if board is None:
            raise BoardNotFoundError(board_id)
        validate_board(board)

        last_score_ms = await self._load_last_score(board_id)
        levels = await self._load_levels(board)

        sounds = self._sound_player_factory()
        time_limit = (
            board.time_limit_sec if board.time_limit_sec is not None else self._time_limit_sec
        )
        # Callbacks resolve `record` when they fire, after it is bound below
        session = GameSession(
            deck_pairs_from_board(board),
            self._scheduler,
            sound_player=sounds,
            on_finish=lambda elapsed_ms: self._on_finish(record, elapsed_ms),
            on_timeout=lambda: self._on_timeout(record),
            time_limit_sec=time_limit,
            revert_delay_ms=self._revert_delay_ms,
        )
        record = GameRecord(
            board=board,
            session=session,
            sounds=sounds,
            levels=levels,
            last_score_ms=last_score_ms,
        )

        self._evict_if_full()
        self._games[record.id] = record
        logger.info(f"Game {record.id} created for board {board_id} (limit={time_limit})")
        return record

    def get_game(self, game_id: str) -> GameRecord:
        """Get a hosted game.

        Raises:
            GameNotFoundError: If no game matches
        """
        record = self._games.get(game_id)
        if record is None:
            raise GameNotFoundError(game_id)
        return record

    def start_game(self, game_id: str) -> GameRecord:
        record = self.get_game(game_id)
        record.session.start()
        return record

    def stop_game(self, game_id: str) -> GameRecord:
        record = self.get_game(game_id)
        record.session.stop()
        return record

    def reset_game(self, game_id: str) -> GameRecord:
        record = self.get_game(game_id)
        record.session.reset()
        record.pending_finish_ms = None
        return record

    def set_sound(self, game_id: str, sound_on: bool) -> GameRecord:
        record = self.get_game(game_id)
        record.sounds.sound_on = sound_on
        return record

    async def mark_card(self, game_id: str, index: int) -> GameRecord:
        """Forward a click and submit the score if it finished the game.

        Raises:
            GameNotFoundError: If no game matches
        """
        record = self.get_game(game_id)
        record.session.mark_card(index)
        if record.pending_finish_ms is not None:
            await self._submit_score(record)
        return record

    def end_game(self, game_id: str) -> None:
        """Tear down a hosted game, cancelling its scheduled work.

        Raises:
            GameNotFoundError: If no game matches
        """
        record = self._games.pop(game_id, None)
        if record is None:
            raise GameNotFoundError(game_id)
        record.session.reset()
        logger.info(f"Game {game_id} ended")

    def end_all_games(self) -> int:
        """Tear down every hosted game (for graceful shutdown).

        Returns:
            Number of games ended
        """
        count = 0
        for game_id in list(self._games):
            self.end_game(game_id)
            count += 1
        return count

    def _on_finish(self, record: GameRecord, elapsed_ms: int) -> None:
        logger.info(f"Game {record.id} finished in {elapsed_ms}ms")
        record.pending_finish_ms = elapsed_ms

    def _on_timeout(self, record: GameRecord) -> None:
        logger.info(f"Game {record.id} timed out")
        record.notices.append(
            Notice(NoticeKind.WARNING, NoticeMessages.TIMEOUT_TITLE, NoticeMessages.TIMEOUT)
        )

    async def _submit_score(self, record: GameRecord) -> None:
        elapsed_ms = record.pending_finish_ms
        record.pending_finish_ms = None

        try:
            score = await self._score_service.submit_score(record.board.id, elapsed_ms)
        except ScoreSubmissionError as e:
            logger.warning(f"Score submission failed for game {record.id}: {e}")
            record.notices.append(
                Notice(
                    NoticeKind.ERROR,
                    NoticeMessages.SCORE_FAILED_TITLE,
                    NoticeMessages.SCORE_FAILED,
                )
            )
            return

        record.last_score_ms = score.elapsed_ms
        record.notices.append(
            Notice(NoticeKind.SUCCESS, NoticeMessages.SCORE_SAVED_TITLE, NoticeMessages.SCORE_SAVED)
        )
        logger.info(f"Score {score.id} saved for board {record.board.id} (new={score.is_new})")

    async def _load_last_score(self, board_id: str) -> int | None:
        try:
            return await self._score_service.get_last_score(board_id)
        except ScoreSubmissionError as e:
            logger.warning(f"Could not load last score for board {board_id}: {e}")
            return None

    async def _load_levels(self, board: Board) -> list[LevelRef]:
        boards = await self._board_repository.list_boards()
        siblings = [LevelRef(b.level, b.id) for b in boards if b.title == board.title]
        return sorted(siblings, key=lambda ref: ref.level)

    def _evict_if_full(self) -> None:
        while self._games and len(self._games) >= self._max_games:
            oldest = min(self._games.values(), key=lambda r: r.created_at)
            logger.info(f"Evicting game {oldest.id} (limit {self._max_games} reached)")
            self.end_game(oldest.id)
