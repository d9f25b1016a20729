"""Read-only projection of a game session for the presentation layer."""

from dataclasses import dataclass

from pairs.domain.value_objects.card_status import CardStatus
from pairs.domain.value_objects.game_phase import GamePhase


@dataclass(frozen=True)
class CardView:
    """One tile as the client renders it."""

    pair_id: str
    value: str
    status: CardStatus


@dataclass(frozen=True)
class GameView:
    """Snapshot of a session (immutable value object).

    Attributes:
        cards: Tiles in deck order
        time_sec: Whole seconds elapsed
        running: Whether the clock is ticking
        phase: Lifecycle phase
        matched_pairs: Number of pairs found so far
    """

    cards: tuple[CardView, ...]
    time_sec: int
    running: bool
    phase: GamePhase
    matched_pairs: int

    @property
    def total_pairs(self) -> int:
        return len(self.cards) // 2

