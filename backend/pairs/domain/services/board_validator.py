"""Board validation performed by the host before a session is created."""

from pairs.domain.constants import ALLOWED_CARD_COUNTS
from pairs.domain.entities.board import Board


class InvalidBoardError(Exception):
    """Raised when a board can't be played."""

    def __init__(self, board_id: str, problems: list[str]):
        self.board_id = board_id
        self.problems = problems
        super().__init__(f"Board {board_id} is not playable: {'; '.join(problems)}")


def find_board_problems(board: Board) -> list[str]:
    """List everything that makes a board unplayable.

    Rules:
    - card_count is one of ALLOWED_CARD_COUNTS
    - exactly card_count / 2 pairs
    - pair ids are unique
    - no empty term or definition
    - level is at least 1 and any time limit is positive

    Returns:
        Human-readable problems, empty when the board is valid
    """
    problems = []

    if board.card_count not in ALLOWED_CARD_COUNTS:
        allowed = ", ".join(str(c) for c in sorted(ALLOWED_CARD_COUNTS))
        problems.append(f"card_count must be one of {allowed}, got {board.card_count}")
    elif board.pair_count != board.expected_pair_count:
        problems.append(
            f"expected {board.expected_pair_count} pairs for {board.card_count} cards, "
            f"got {board.pair_count}"
        )

    seen: set[str] = set()
    for pair in board.pairs:
        if pair.id in seen:
            problems.append(f"duplicate pair id {pair.id}")
        seen.add(pair.id)
        if not pair.term.strip() or not pair.definition.strip():
            problems.append(f"pair {pair.id} has an empty term or definition")

    if board.level < 1:
        problems.append(f"level must be at least 1, got {board.level}")
    if board.time_limit_sec is not None and board.time_limit_sec <= 0:
        problems.append(f"time_limit_sec must be positive, got {board.time_limit_sec}")

    return problems


def validate_board(board: Board) -> None:
    """Raise InvalidBoardError if the board can't be played."""
    problems = find_board_problems(board)
    if problems:
        raise InvalidBoardError(board.id, problems)
