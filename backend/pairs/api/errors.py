"""Error envelope shared by API routes."""

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    """Error detail structure."""

    code: str
    message: str
    details: dict | None = None


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    error: ErrorDetail


def api_error(status_code: int, code: str, message: str, details: dict | None = None) -> HTTPException:
    """Build an HTTPException carrying the error envelope."""
    error: dict = {"code": code, "message": message}
    if details is not None:
        error["details"] = details
    return HTTPException(status_code=status_code, detail={"error": error})


def game_not_found(game_id: str) -> HTTPException:
    return api_error(
        status.HTTP_404_NOT_FOUND,
        "GAME_NOT_FOUND",
        f"Game {game_id} not found or already ended",
    )


def board_not_found(board_id: str) -> HTTPException:
    return api_error(status.HTTP_404_NOT_FOUND, "BOARD_NOT_FOUND", f"Board {board_id} not found")
