"""Deck construction: pairs in, shuffled cards out."""

import random
from collections.abc import Sequence
from typing import TypeVar

from pairs.domain.entities.board import Board
from pairs.domain.entities.card import Card, DeckPair

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of items (Fisher-Yates).

    Args:
        items: Items to shuffle, left untouched
        rng: Random source; module-level random when None

    Returns:
        New list with the same items in random order
    """
    randrange = rng.randrange if rng is not None else random.randrange
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def build_deck(pairs: Sequence[DeckPair], rng: random.Random | None = None) -> list[Card]:
    """Deal a shuffled deck with two cards per pair.

    Both cards of a pair share pair_id. Positions are assigned after the
    shuffle, so position_index always equals the card's index in the deck.
    Every call shuffles independently.

    Args:
        pairs: Deck pairs; an empty sequence yields an empty deck
        rng: Random source for deterministic dealing in tests

    Returns:
        Shuffled list of 2 * len(pairs) cards
    """
    faces: list[tuple[str, str]] = []
    for pair in pairs:
        first, second = pair.faces()
        faces.append((pair.pair_id, first))
        faces.append((pair.pair_id, second))

    return [
        Card(pair_id=pair_id, value=value, position_index=index)
        for index, (pair_id, value) in enumerate(shuffle(faces, rng))
    ]


def deck_pairs_from_board(board: Board) -> list[DeckPair]:
    """Map board pairs to deck pairs: term on one card, definition on the other."""
    return [
        DeckPair(pair_id=pair.id, value=pair.term, counterpart=pair.definition)
        for pair in board.pairs
    ]
