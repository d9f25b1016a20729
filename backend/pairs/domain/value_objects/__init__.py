"""Domain value objects - immutable objects without identity."""

from .card_status import CardStatus
from .game_phase import GamePhase
from .game_view import CardView, GameView
from .sound_effect import SoundEffect

__all__ = [
    "CardStatus",
    "CardView",
    "GamePhase",
    "GameView",
    "SoundEffect",
]
