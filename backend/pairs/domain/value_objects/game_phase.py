"""Game phase value object for session lifecycle management."""

from enum import StrEnum


class GamePhase(StrEnum):
    """Game session lifecycle phases.

    State machine:
        IDLE -> RUNNING -> COMPLETE
                   |  \\-> TIMED_OUT
                   v
                STOPPED

        STOPPED / COMPLETE / TIMED_OUT --start()--> RUNNING (fresh deck)
        any --reset()--> IDLE

    States:
        IDLE: No deck dealt yet (or reset)
        RUNNING: Clock ticking, clicks accepted
        STOPPED: Halted by the player, board frozen for inspection
        COMPLETE: All pairs matched
        TIMED_OUT: Time limit reached before completion
    """

    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"
    COMPLETE = "complete"
    TIMED_OUT = "timed_out"

    def is_running(self) -> bool:
        """Check if the clock is ticking and clicks are accepted."""
        return self is GamePhase.RUNNING

    def is_terminal(self) -> bool:
        """Check if the session reached an outcome."""
        return self in (GamePhase.COMPLETE, GamePhase.TIMED_OUT)

