"""In-memory score service for development and testing."""

import logging
from uuid import uuid4

from pairs.ports.score_service import ScoreRecord, ScoreSubmissionError

logger = logging.getLogger(__name__)


class InMemoryScoreService:
    """ScoreService implementation keeping the latest time per board.

    Scores are lost on restart. A later submission overwrites the earlier
    one for the same board and keeps its record id.
    """

    def __init__(self) -> None:
        self._scores: dict[str, ScoreRecord] = {}

    async def submit_score(self, board_id: str, elapsed_ms: int) -> ScoreRecord:
        if not isinstance(elapsed_ms, int) or elapsed_ms <= 0:
            raise ScoreSubmissionError(board_id, "elapsed_ms must be a positive integer")

        existing = self._scores.get(board_id)
        record = ScoreRecord(
            id=existing.id if existing else str(uuid4()),
            board_id=board_id,
            elapsed_ms=elapsed_ms,
            is_new=existing is None,
        )
        self._scores[board_id] = record
        logger.debug(f"Stored score {record.id} for board {board_id}: {elapsed_ms}ms")
        return record

    async def get_last_score(self, board_id: str) -> int | None:
        record = self._scores.get(board_id)
        return record.elapsed_ms if record else None

    async def close(self) -> None:
        """No-op cleanup."""
        pass
