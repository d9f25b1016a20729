"""Port interface for the scoring collaborator."""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


class ScoreSubmissionError(Exception):
    """Raised when a score could not be recorded."""

    def __init__(self, board_id: str, reason: str):
        self.board_id = board_id
        self.reason = reason
        super().__init__(f"Score for board {board_id} not saved: {reason}")


@dataclass(frozen=True)
class ScoreRecord:
    """Stored score as returned by the scoring collaborator.

    Attributes:
        id: Score record identifier
        board_id: Board the time was achieved on
        elapsed_ms: Recorded time
        is_new: False when an earlier score for the board was overwritten
    """

    id: str
    board_id: str
    elapsed_ms: int
    is_new: bool


@runtime_checkable
class ScoreService(Protocol):
    """Port for submitting finished-game times."""

    async def submit_score(self, board_id: str, elapsed_ms: int) -> ScoreRecord:
        """Record the latest time for a board.

        Args:
            board_id: Board that was completed
            elapsed_ms: Positive elapsed time in milliseconds

        Returns:
            Stored score record

        Raises:
            ScoreSubmissionError: If the score was rejected or couldn't be stored
        """
        ...

    async def get_last_score(self, board_id: str) -> int | None:
        """Get the last recorded time for a board, or None."""
        ...
