"""Shared test fixtures."""

import random

import pytest

from pairs.adapters.local_boards import LocalBoardRepository
from pairs.adapters.memory_scores import InMemoryScoreService
from pairs.adapters.sound_cues import QueuedSoundPlayer
from pairs.domain.entities.board import Board, Pair
from pairs.domain.entities.card import DeckPair
from pairs.domain.services.game_manager import GameManager
from pairs.domain.services.game_session import GameSession


class FakeHandle:
    def __init__(self, when, seq, callback):
        self.when = when
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Scheduler with a manual clock. Callbacks run only inside advance()."""

    def __init__(self):
        self.now = 0.0
        self._seq = 0
        self._pending = []

    def time(self):
        return self.now

    def call_later(self, delay_sec, callback):
        self._seq += 1
        handle = FakeHandle(self.now + delay_sec, self._seq, callback)
        self._pending.append(handle)
        return handle

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = [h for h in self._pending if not h.cancelled and h.when <= target + 1e-9]
            if not due:
                break
            handle = min(due, key=lambda h: (h.when, h.seq))
            self._pending.remove(handle)
            self.now = max(self.now, handle.when)
            handle.callback()
        self.now = target
        self._pending = [h for h in self._pending if not h.cancelled]

    @property
    def pending_count(self):
        return len([h for h in self._pending if not h.cancelled])


class RecordingSoundPlayer:
    def __init__(self):
        self.played = []

    def play(self, effect):
        self.played.append(effect)


def make_deck_pairs(n):
    return [DeckPair(pair_id=f"p{i}", value=f"value {i}") for i in range(n)]


def make_board(board_id="b1", card_count=16, time_limit_sec=None, title=None, level=1):
    pairs = tuple(
        Pair(id=f"{board_id}-{i}", term=f"term {i}", definition=f"definition {i}")
        for i in range(card_count // 2)
    )
    return Board(
        id=board_id,
        title=title or f"Board {board_id}",
        card_count=card_count,
        pairs=pairs,
        level=level,
        time_limit_sec=time_limit_sec,
    )


def pair_positions(session):
    """Map pair_id -> [index, index] for the currently dealt deck."""
    positions = {}
    for i, card in enumerate(session.cards):
        positions.setdefault(card.pair_id, []).append(i)
    return positions


def mismatched_indices(session):
    """Two indices holding cards of different pairs."""
    first = session.cards[0]
    for i, card in enumerate(session.cards):
        if card.pair_id != first.pair_id:
            return 0, i
    raise AssertionError("deck has a single pair")


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def sounds():
    return RecordingSoundPlayer()


@pytest.fixture
def events():
    """Collected engine callbacks."""
    return {"finish": [], "timeout": 0}


@pytest.fixture
def make_session(scheduler, sounds, events):
    """Factory for sessions wired to the fake scheduler and recorders."""

    def factory(n_pairs=8, time_limit_sec=None, revert_delay_ms=800, seed=7):
        def on_timeout():
            events["timeout"] += 1

        return GameSession(
            make_deck_pairs(n_pairs),
            scheduler,
            sound_player=sounds,
            on_finish=events["finish"].append,
            on_timeout=on_timeout,
            time_limit_sec=time_limit_sec,
            revert_delay_ms=revert_delay_ms,
            rng=random.Random(seed),
        )

    return factory


@pytest.fixture
def boards():
    return [
        make_board("b16", 16),
        make_board("b16-2", 16, title="Board b16", level=2),
        make_board("b24", 24),
        make_board("timed", 16, time_limit_sec=5),
        Board(id="broken", title="Broken", card_count=16, pairs=(Pair("x", "a", "b"),)),
    ]


@pytest.fixture
def board_repository(boards):
    return LocalBoardRepository(boards=boards)


@pytest.fixture
def score_service():
    return InMemoryScoreService()


@pytest.fixture
def game_manager(board_repository, score_service, scheduler):
    return GameManager(
        board_repository=board_repository,
        score_service=score_service,
        scheduler=scheduler,
        sound_player_factory=QueuedSoundPlayer,
        revert_delay_ms=800,
    )
