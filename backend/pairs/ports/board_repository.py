"""Port interface for the board data source."""

from typing import Protocol, runtime_checkable

from pairs.domain.entities.board import Board


@runtime_checkable
class BoardRepository(Protocol):
    """Read-only access to boards.

    Board CRUD lives elsewhere; the game only needs to load boards.
    """

    async def get_board(self, board_id: str) -> Board | None:
        """Get a board by id.

        Args:
            board_id: Board identifier

        Returns:
            Board, or None if it doesn't exist
        """
        ...

    async def list_boards(self) -> list[Board]:
        """Get all boards sorted by title, then level."""
        ...
