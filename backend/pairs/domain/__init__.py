# Domain layer - Business logic (NO external dependencies)

from .entities import Board, Card, DeckPair, Pair
from .value_objects import (
    CardStatus,
    CardView,
    GamePhase,
    GameView,
    SoundEffect,
)

__all__ = [
    "Board",
    "Card",
    "CardStatus",
    "CardView",
    "DeckPair",
    "GamePhase",
    "GameView",
    "Pair",
    "SoundEffect",
]
