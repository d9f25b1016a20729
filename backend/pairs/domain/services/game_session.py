"""Game session engine for one play-through of a board."""

import logging
import random
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType

from pairs.domain.constants import REVERT_DELAY_MS, TICK_INTERVAL_MS
from pairs.domain.entities.card import Card, DeckPair
from pairs.domain.services.deck_builder import build_deck
from pairs.domain.value_objects.card_status import CardStatus
from pairs.domain.value_objects.game_phase import GamePhase
from pairs.domain.value_objects.game_view import CardView, GameView
from pairs.domain.value_objects.sound_effect import SoundEffect
from pairs.ports.scheduler import ScheduledHandle, Scheduler
from pairs.ports.sound_player import SoundPlayer

logger = logging.getLogger(__name__)


class GameSession:
    """Memory-matching session engine.

    Responsibilities:
    - Dealing a freshly shuffled deck on every start
    - Per-card status tracking (kept apart from the immutable cards)
    - Match checking for pairs of picks
    - Game clock and optional time limit
    - Lifecycle events: finish (with elapsed ms) and timeout

    The engine is single-threaded and never sleeps. The clock tick and the
    mismatch revert are scheduled through the Scheduler port and tagged with
    the session generation; every state-clearing transition bumps the
    generation and cancels the handles, so a late callback is a no-op.

    Public operations never raise. Invalid clicks are ignored and failures
    in injected collaborators (sound, callbacks) are logged.
    """

    def __init__(
        self,
        pairs: Sequence[DeckPair],
        scheduler: Scheduler,
        *,
        sound_player: SoundPlayer | None = None,
        on_finish: Callable[[int], None] | None = None,
        on_timeout: Callable[[], None] | None = None,
        time_limit_sec: int | None = None,
        revert_delay_ms: int = REVERT_DELAY_MS,
        rng: random.Random | None = None,
    ):
        """Initialize an idle session.

        Args:
            pairs: Deck pairs dealt on every start
            scheduler: Event-loop scheduling and monotonic clock
            sound_player: Audio feedback capability, silent when None
            on_finish: Called with elapsed milliseconds when all pairs are matched
            on_timeout: Called when time_limit_sec is reached first
            time_limit_sec: Time limit in seconds, None for no limit
            revert_delay_ms: How long mismatched cards stay in failure state
            rng: Random source for shuffling
        """
        self._pairs = tuple(pairs)
        self._scheduler = scheduler
        self._sound_player = sound_player
        self._on_finish = on_finish
        self._on_timeout = on_timeout
        self._time_limit_sec = time_limit_sec
        self._revert_delay_ms = revert_delay_ms
        self._rng = rng

        self._cards: list[Card] = []
        self._status_map: dict[int, CardStatus] = {}
        self._matched_pairs: set[str] = set()
        self._time_sec = 0
        self._phase = GamePhase.IDLE
        self._first_pick: int | None = None
        self._failed_picks: tuple[int, int] | None = None

        self._generation = 0
        self._tick_handle: ScheduledHandle | None = None
        self._revert_handle: ScheduledHandle | None = None
        self._started_at: float | None = None
        self._elapsed_ms = 0

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def cards(self) -> tuple[Card, ...]:
        return tuple(self._cards)

    @property
    def status_map(self) -> Mapping[int, CardStatus]:
        return MappingProxyType(self._status_map)

    @property
    def matched_pairs(self) -> frozenset[str]:
        return frozenset(self._matched_pairs)

    @property
    def time_sec(self) -> int:
        return self._time_sec

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def running(self) -> bool:
        return self._phase.is_running()

    @property
    def is_locked(self) -> bool:
        """True while two mismatched cards wait to be turned back."""
        return self._failed_picks is not None

    @property
    def selected_indices(self) -> list[int]:
        return [i for i, status in self._status_map.items() if status is CardStatus.SELECTED]

    @property
    def elapsed_ms(self) -> int:
        """Elapsed milliseconds, live while running and frozen otherwise."""
        if self.running:
            return self._measure_elapsed_ms()
        return self._elapsed_ms

    def status_of(self, index: int) -> CardStatus:
        return self._status_map.get(index, CardStatus.IDLE)

    def snapshot(self) -> GameView:
        """Read-only projection for the presentation layer."""
        return GameView(
            cards=tuple(
                CardView(pair_id=card.pair_id, value=card.value, status=self.status_of(i))
                for i, card in enumerate(self._cards)
            ),
            time_sec=self._time_sec,
            running=self.running,
            phase=self._phase,
            matched_pairs=len(self._matched_pairs),
        )

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> None:
        """Deal a fresh deck and start the clock. No-op while running."""
        if self.running:
            return

        self._clear()
        self._cards = build_deck(self._pairs, self._rng)
        self._status_map = {i: CardStatus.IDLE for i in range(len(self._cards))}
        self._started_at = self._scheduler.time()

        if not self._cards:
            # Nothing to match: trivially won at zero seconds
            logger.info("Empty deck, session complete on start")
            self._phase = GamePhase.COMPLETE
            self._emit_finish(0)
            return

        self._phase = GamePhase.RUNNING
        logger.info(f"Session started with {len(self._cards)} cards")
        self._schedule_tick()

    def stop(self) -> None:
        """Halt the clock, keeping the board visible. No-op unless running."""
        if not self.running:
            return

        self._elapsed_ms = self._measure_elapsed_ms()
        failed = self._failed_picks
        self._cancel_scheduled()
        self._generation += 1

        # Turn mismatched cards back now, their revert was just cancelled
        if failed is not None:
            self._revert_failed(failed)

        self._phase = GamePhase.STOPPED
        logger.info(f"Session stopped at {self._time_sec}s")

    def reset(self) -> None:
        """Return to the pre-session state. Always safe."""
        self._clear()
        self._cards = []
        self._status_map = {}
        self._phase = GamePhase.IDLE

    # -------------------------------------------------------------------------
    # Interaction
    # -------------------------------------------------------------------------

    def mark_card(self, index: int) -> None:
        """Handle a click on the card at index.

        Ignored when the session isn't running, the index is out of range,
        the board is locked by a pending mismatch, or the card isn't idle.
        The first pick is selected; the second one resolves the pair.
        """
        if not self.running:
            logger.debug(f"Ignoring click on {index}: session {self._phase}")
            return
        if not isinstance(index, int) or not 0 <= index < len(self._cards):
            logger.debug(f"Ignoring click on {index}: out of range")
            return
        if self.is_locked:
            logger.debug(f"Ignoring click on {index}: board locked")
            return
        if not self.status_of(index).is_clickable():
            logger.debug(f"Ignoring click on {index}: card is {self.status_of(index)}")
            return

        if self._first_pick is None:
            self._status_map[index] = CardStatus.SELECTED
            self._first_pick = index
            return

        first = self._first_pick
        self._first_pick = None

        if self._cards[first].matches(self._cards[index]):
            self._resolve_match(first, index)
        else:
            self._resolve_mismatch(first, index)

    def _resolve_match(self, first: int, second: int) -> None:
        self._status_map[first] = CardStatus.SUCCESS
        self._status_map[second] = CardStatus.SUCCESS
        self._matched_pairs.add(self._cards[first].pair_id)
        self._play(SoundEffect.SUCCESS)

        if len(self._matched_pairs) * 2 == len(self._cards):
            self._complete()

    def _resolve_mismatch(self, first: int, second: int) -> None:
        self._status_map[first] = CardStatus.FAILURE
        self._status_map[second] = CardStatus.FAILURE
        self._failed_picks = (first, second)
        self._play(SoundEffect.FAILURE)

        generation = self._generation
        picks = self._failed_picks
        self._revert_handle = self._scheduler.call_later(
            self._revert_delay_ms / 1000,
            lambda: self._on_revert_due(generation, picks),
        )

    def _on_revert_due(self, generation: int, picks: tuple[int, int]) -> None:
        if generation != self._generation or self._failed_picks != picks:
            return
        self._revert_handle = None
        self._revert_failed(picks)

    def _revert_failed(self, picks: tuple[int, int]) -> None:
        for index in picks:
            if self._status_map.get(index) is CardStatus.FAILURE:
                self._status_map[index] = CardStatus.IDLE
        self._failed_picks = None

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def _schedule_tick(self) -> None:
        # Aim at the next whole second since start so ticks don't drift
        next_at = self._started_at + (self._time_sec + 1) * TICK_INTERVAL_MS / 1000
        delay = max(0.0, next_at - self._scheduler.time())
        generation = self._generation
        self._tick_handle = self._scheduler.call_later(delay, lambda: self._on_tick(generation))

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation or not self.running:
            return

        self._tick_handle = None
        self._time_sec += 1

        if self._time_limit_sec is not None and self._time_sec >= self._time_limit_sec:
            self._time_out()
            return

        self._schedule_tick()

    def _measure_elapsed_ms(self) -> int:
        if self._started_at is None:
            return 0
        return max(0, round((self._scheduler.time() - self._started_at) * 1000))

    # -------------------------------------------------------------------------
    # Terminal transitions
    # -------------------------------------------------------------------------

    def _complete(self) -> None:
        self._elapsed_ms = self._measure_elapsed_ms()
        self._cancel_scheduled()
        self._generation += 1
        self._phase = GamePhase.COMPLETE
        logger.info(f"Session complete in {self._elapsed_ms}ms ({self._time_sec} ticks)")
        self._emit_finish(self._elapsed_ms)

    def _time_out(self) -> None:
        self._elapsed_ms = self._measure_elapsed_ms()
        self._cancel_scheduled()
        self._generation += 1
        self._phase = GamePhase.TIMED_OUT
        logger.info(f"Session timed out after {self._time_sec}s")
        self._emit_timeout()

    def _clear(self) -> None:
        self._cancel_scheduled()
        self._generation += 1
        self._matched_pairs = set()
        self._time_sec = 0
        self._first_pick = None
        self._failed_picks = None
        self._started_at = None
        self._elapsed_ms = 0

    def _cancel_scheduled(self) -> None:
        if self._tick_handle is not None:
            self._tick_handle.cancel()
            self._tick_handle = None
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------

    def _play(self, effect: SoundEffect) -> None:
        if self._sound_player is None:
            return
        try:
            self._sound_player.play(effect)
        except Exception as e:
            logger.warning(f"Sound {effect} failed: {e}")

    def _emit_finish(self, elapsed_ms: int) -> None:
        if self._on_finish is None:
            return
        try:
            self._on_finish(elapsed_ms)
        except Exception:
            logger.exception("on_finish callback failed")

    def _emit_timeout(self) -> None:
        if self._on_timeout is None:
            return
        try:
            self._on_timeout()
        except Exception:
            logger.exception("on_timeout callback failed")
