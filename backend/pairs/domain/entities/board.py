"""Board entity - a named collection of term/definition pairs."""

from dataclasses import dataclass, field
from typing import TypedDict


class PairDict(TypedDict):
    """Pair data structure for serialization."""

    id: str
    term: str
    definition: str


@dataclass(frozen=True)
class Pair:
    """One term/definition unit contributing two cards to the deck.

    Attributes:
        id: Unique pair identifier
        term: Text shown on the first card
        definition: Text shown on the second card
    """

    id: str
    term: str
    definition: str

    def to_dict(self) -> PairDict:
        return {"id": self.id, "term": self.term, "definition": self.definition}


@dataclass(frozen=True)
class Board:
    """Board entity.

    Attributes:
        id: Unique board identifier
        title: Display title
        card_count: Configured number of cards (16 or 24)
        pairs: Term/definition pairs, card_count / 2 of them on a valid board
        level: Position among the boards sharing this title, from 1
        tags: Free-form labels
        time_limit_sec: Optional board-specific time limit
    """

    id: str
    title: str
    card_count: int
    pairs: tuple[Pair, ...] = ()
    level: int = 1
    tags: tuple[str, ...] = field(default_factory=tuple)
    time_limit_sec: int | None = None

    @property
    def pair_count(self) -> int:
        return len(self.pairs)

    @property
    def expected_pair_count(self) -> int:
        return self.card_count // 2
