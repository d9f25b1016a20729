"""HTTP score service adapter for the boards API."""

import logging
from typing import Any

import httpx

from pairs.infrastructure.retry import TransientError, retrying
from pairs.ports.score_service import ScoreRecord, ScoreSubmissionError

logger = logging.getLogger(__name__)


class HttpScoreService:
    """ScoreService implementation posting to the boards API.

    Contract:
        POST {base_url}/api/boards/{board_id}/scores  {"elapsedMs": int}
        201 -> new score, 200 -> existing score overwritten
        body: {"id": str, "elapsedMs": int}

    Network errors and 5xx responses are retried with backoff; any other
    failure, a malformed success body included, is reported as
    ScoreSubmissionError. The API has no "last score" read for a single
    board, so the last time submitted through this adapter is remembered
    per board.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
        retry_policy: dict[str, Any] | None = None,
    ):
        """Initialize adapter.

        Args:
            base_url: Boards API root, e.g. http://localhost:4321
            timeout: Request timeout in seconds
            client: Preconfigured client (tests inject a MockTransport one)
            retry_policy: Keyword arguments for infrastructure.retry.retrying
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._retry_policy = retry_policy or {}
        self._last_scores: dict[str, int] = {}

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy client initialization for connection reuse."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def submit_score(self, board_id: str, elapsed_ms: int) -> ScoreRecord:
        if elapsed_ms <= 0:
            raise ScoreSubmissionError(board_id, "elapsed_ms must be a positive integer")

        try:
            response = await retrying(**self._retry_policy)(self._post_score, board_id, elapsed_ms)
        except (TransientError, httpx.HTTPError) as e:
            raise ScoreSubmissionError(board_id, f"scores API unavailable: {e}") from e

        if response.status_code not in (200, 201):
            raise ScoreSubmissionError(board_id, self._error_code(response))

        try:
            body = response.json()
            record = ScoreRecord(
                id=str(body["id"]),
                board_id=board_id,
                elapsed_ms=int(body.get("elapsedMs", elapsed_ms)),
                is_new=response.status_code == 201,
            )
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Unreadable score response for board {board_id}: {e!r}")
            raise ScoreSubmissionError(board_id, "malformed response") from e

        self._last_scores[board_id] = record.elapsed_ms
        return record

    async def get_last_score(self, board_id: str) -> int | None:
        return self._last_scores.get(board_id)

    async def _post_score(self, board_id: str, elapsed_ms: int) -> httpx.Response:
        client = await self._get_client()
        url = f"{self._base_url}/api/boards/{board_id}/scores"
        try:
            response = await client.post(url, json={"elapsedMs": elapsed_ms})
        except httpx.TransportError as e:
            raise TransientError(str(e)) from e

        if response.status_code >= 500:
            raise TransientError(f"scores API returned {response.status_code}")
        return response

    @staticmethod
    def _error_code(response: httpx.Response) -> str:
        try:
            body: Any = response.json()
        except ValueError:
            return f"HTTP {response.status_code}"
        if isinstance(body, dict) and body.get("error"):
            return str(body["error"])
        return f"HTTP {response.status_code}"

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
