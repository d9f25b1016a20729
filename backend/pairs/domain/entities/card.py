"""Card entity and the deck input unit."""

from dataclasses import dataclass


@dataclass(frozen=True)
class DeckPair:
    """Engine input unit: one pair and the texts of its two cards.

    When counterpart is None both cards show value.

    Attributes:
        pair_id: Identifier shared by both cards
        value: Text on the first card
        counterpart: Text on the second card, if different
    """

    pair_id: str
    value: str
    counterpart: str | None = None

    def faces(self) -> tuple[str, str]:
        """Texts of the two cards this pair contributes."""
        second = self.value if self.counterpart is None else self.counterpart
        return self.value, second


@dataclass(frozen=True)
class Card:
    """One face of the deck.

    Immutable once the deck is built; a new deck is dealt on every start.

    Attributes:
        pair_id: Identifier shared with exactly one other card
        value: Text shown on the card
        position_index: Position in the shuffled deck
    """

    pair_id: str
    value: str
    position_index: int

    def matches(self, other: "Card") -> bool:
        """Check if two distinct cards form a pair."""
        return self.position_index != other.position_index and self.pair_id == other.pair_id
