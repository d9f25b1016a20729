"""Card status value object for per-card display state."""

from enum import StrEnum


class CardStatus(StrEnum):
    """Transient display state of a single card in a session.

    Stored in the session's status map keyed by card position,
    never on the Card itself.

    States:
        IDLE: Face down, clickable
        SELECTED: First pick, waiting for the second one
        SUCCESS: Part of a matched pair (final for the session)
        FAILURE: Part of a mismatched pick, reverts to IDLE shortly
    """

    IDLE = "idle"
    SELECTED = "selected"
    SUCCESS = "success"
    FAILURE = "failure"

    def is_clickable(self) -> bool:
        """Check if a click on a card in this state may change it."""
        return self is CardStatus.IDLE
