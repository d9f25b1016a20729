"""Local board repository for development and testing.

Loads boards from an embedded JSON file (or a file given by path),
so the game can be played without the board service.
Use BOARD_SOURCE=local to enable.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from pairs.domain.constants import DEFAULT_CARD_COUNT
from pairs.domain.entities.board import Board, Pair

logger = logging.getLogger(__name__)


class LocalBoardRepository:
    """BoardRepository implementation backed by a JSON document.

    Boards are read once at construction and never modified.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        boards: list[Board] | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            path: JSON file to load, the embedded boards when None
            boards: In-memory boards, used instead of any file when given
        """
        if boards is None:
            data = self._load_data(path)
            boards = [self._parse_board(board_data) for board_data in data["boards"]]
        self._boards: dict[str, Board] = {board.id: board for board in boards}
        logger.info(f"Loaded {len(self._boards)} local boards")

    def _load_data(self, path: str | Path | None) -> dict[str, Any]:
        """Load the JSON document.

        Uses importlib.resources for the embedded file so it works from an
        installed package; an explicit path is read from disk.
        """
        if path is not None:
            with open(path, encoding="utf-8") as f:
                return json.load(f)

        try:
            data_path = resources.files("pairs.adapters.data").joinpath("boards.json")
            with data_path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (ModuleNotFoundError, FileNotFoundError, TypeError):
            file_path = Path(__file__).parent / "data" / "boards.json"
            with open(file_path, encoding="utf-8") as f:
                return json.load(f)

    @staticmethod
    def _parse_board(board_data: dict[str, Any]) -> Board:
        return Board(
            id=str(board_data["id"]),
            title=board_data["title"],
            card_count=int(board_data.get("card_count", DEFAULT_CARD_COUNT)),
            pairs=tuple(
                Pair(id=str(p["id"]), term=p["term"], definition=p["definition"])
                for p in board_data.get("pairs", [])
            ),
            level=int(board_data.get("level", 1)),
            tags=tuple(board_data.get("tags", [])),
            time_limit_sec=board_data.get("time_limit_sec"),
        )

    async def get_board(self, board_id: str) -> Board | None:
        return self._boards.get(board_id)

    async def list_boards(self) -> list[Board]:
        return sorted(self._boards.values(), key=lambda b: (b.title.lower(), b.level))
