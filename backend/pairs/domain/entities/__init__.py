"""Domain entities - objects with identity."""

from .board import Board, Pair
from .card import Card, DeckPair

__all__ = ["Board", "Card", "DeckPair", "Pair"]
