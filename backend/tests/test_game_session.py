"""Tests for the GameSession engine."""

from conftest import mismatched_indices, pair_positions

from pairs.domain.entities.card import DeckPair
from pairs.domain.services.game_session import GameSession
from pairs.domain.value_objects.card_status import CardStatus
from pairs.domain.value_objects.game_phase import GamePhase
from pairs.domain.value_objects.sound_effect import SoundEffect


def _match(session, pair_id):
    first, second = pair_positions(session)[pair_id]
    session.mark_card(first)
    session.mark_card(second)


# =============================================================================
# Lifecycle
# =============================================================================


def test_new_session_is_idle(make_session):
    session = make_session()
    assert session.phase is GamePhase.IDLE
    assert session.running is False
    assert session.cards == ()
    assert session.time_sec == 0


def test_start_deals_deck_and_runs(make_session, scheduler):
    session = make_session(n_pairs=8)
    session.start()

    assert session.running is True
    assert session.phase is GamePhase.RUNNING
    assert len(session.cards) == 16
    assert all(session.status_of(i) is CardStatus.IDLE for i in range(16))
    assert session.matched_pairs == frozenset()
    assert scheduler.pending_count == 1  # clock tick


def test_start_while_running_is_noop(make_session):
    session = make_session()
    session.start()
    deck = session.cards
    session.mark_card(0)

    session.start()

    assert session.cards == deck
    assert session.status_of(0) is CardStatus.SELECTED


def test_clock_ticks_every_second(make_session, scheduler):
    session = make_session()
    session.start()

    scheduler.advance(0.5)
    assert session.time_sec == 0
    scheduler.advance(0.5)
    assert session.time_sec == 1
    scheduler.advance(3)
    assert session.time_sec == 4


def test_stop_freezes_clock_and_board(make_session, scheduler):
    session = make_session()
    session.start()
    scheduler.advance(2)
    _match(session, session.cards[0].pair_id)

    session.stop()
    scheduler.advance(10)

    assert session.running is False
    assert session.phase is GamePhase.STOPPED
    assert session.time_sec == 2
    assert len(session.cards) == 16
    assert len(session.matched_pairs) == 1
    assert scheduler.pending_count == 0


def test_stop_when_not_running_is_noop(make_session):
    session = make_session()
    session.stop()
    assert session.phase is GamePhase.IDLE


def test_stop_turns_back_pending_mismatch(make_session, scheduler):
    session = make_session()
    session.start()
    first, second = mismatched_indices(session)
    session.mark_card(first)
    session.mark_card(second)

    session.stop()

    assert session.status_of(first) is CardStatus.IDLE
    assert session.status_of(second) is CardStatus.IDLE
    assert session.is_locked is False
    assert scheduler.pending_count == 0


def test_start_after_stop_is_fresh_session(make_session, scheduler):
    session = make_session()
    session.start()
    scheduler.advance(3)
    _match(session, session.cards[0].pair_id)
    session.stop()

    session.start()

    assert session.running is True
    assert session.time_sec == 0
    assert session.matched_pairs == frozenset()
    assert all(status is CardStatus.IDLE for status in session.status_map.values())


def test_reset_returns_to_pre_session_state(make_session, scheduler):
    session = make_session()
    session.start()
    scheduler.advance(2)
    session.mark_card(0)

    session.reset()

    assert session.phase is GamePhase.IDLE
    assert session.running is False
    assert session.cards == ()
    assert dict(session.status_map) == {}
    assert session.time_sec == 0
    assert session.matched_pairs == frozenset()
    assert scheduler.pending_count == 0


def test_reset_is_always_safe(make_session):
    session = make_session()
    session.reset()
    session.reset()
    assert session.phase is GamePhase.IDLE


# =============================================================================
# Matching
# =============================================================================


def test_first_click_selects(make_session):
    session = make_session()
    session.start()
    session.mark_card(3)
    assert session.status_of(3) is CardStatus.SELECTED
    assert session.selected_indices == [3]


def test_matching_pair_succeeds(make_session, sounds):
    session = make_session()
    session.start()
    pair_id = session.cards[0].pair_id

    _match(session, pair_id)

    first, second = pair_positions(session)[pair_id]
    assert session.status_of(first) is CardStatus.SUCCESS
    assert session.status_of(second) is CardStatus.SUCCESS
    assert session.matched_pairs == frozenset({pair_id})
    assert sounds.played == [SoundEffect.SUCCESS]


def test_each_match_adds_exactly_one_pair(make_session):
    session = make_session(n_pairs=4)
    session.start()
    for count, pair_id in enumerate(list(pair_positions(session))[:3], start=1):
        _match(session, pair_id)
        assert len(session.matched_pairs) == count


def test_mismatch_fails_then_reverts(make_session, scheduler, sounds):
    session = make_session(revert_delay_ms=800)
    session.start()
    first, second = mismatched_indices(session)

    session.mark_card(first)
    session.mark_card(second)

    assert session.status_of(first) is CardStatus.FAILURE
    assert session.status_of(second) is CardStatus.FAILURE
    assert session.is_locked is True
    assert sounds.played == [SoundEffect.FAILURE]

    scheduler.advance(0.7)
    assert session.status_of(first) is CardStatus.FAILURE

    scheduler.advance(0.1)
    assert session.status_of(first) is CardStatus.IDLE
    assert session.status_of(second) is CardStatus.IDLE
    assert session.is_locked is False
    assert session.matched_pairs == frozenset()


def test_clock_keeps_running_during_revert_window(make_session, scheduler):
    session = make_session(revert_delay_ms=800)
    session.start()
    scheduler.advance(0.5)
    first, second = mismatched_indices(session)
    session.mark_card(first)
    session.mark_card(second)

    scheduler.advance(0.9)

    assert session.time_sec == 1
    assert session.is_locked is False


def test_clicks_ignored_while_locked(make_session, scheduler):
    session = make_session()
    session.start()
    first, second = mismatched_indices(session)
    session.mark_card(first)
    session.mark_card(second)
    third = next(i for i in range(len(session.cards)) if i not in (first, second))

    session.mark_card(third)

    assert session.status_of(third) is CardStatus.IDLE

    scheduler.advance(0.8)
    session.mark_card(third)
    assert session.status_of(third) is CardStatus.SELECTED


def test_reset_cancels_pending_revert(make_session, scheduler):
    session = make_session()
    session.start()
    first, second = mismatched_indices(session)
    session.mark_card(first)
    session.mark_card(second)

    session.reset()
    session.start()
    session.mark_card(first)
    scheduler.advance(1.0)

    # The stale revert from the previous deal must not touch the new one
    assert session.status_of(first) is CardStatus.SELECTED


# =============================================================================
# Ignored clicks
# =============================================================================


def _state(session):
    return dict(session.status_map), session.matched_pairs


def test_click_while_not_running_is_ignored(make_session):
    session = make_session()
    session.mark_card(0)
    assert dict(session.status_map) == {}

    session.start()
    session.stop()
    before = _state(session)
    session.mark_card(0)
    assert _state(session) == before


def test_out_of_range_click_is_ignored(make_session):
    session = make_session(n_pairs=8)
    session.start()
    before = _state(session)

    session.mark_card(-1)
    session.mark_card(16)
    session.mark_card(1000)

    assert _state(session) == before


def test_click_on_matched_card_is_ignored(make_session):
    session = make_session()
    session.start()
    pair_id = session.cards[0].pair_id
    _match(session, pair_id)
    before = _state(session)

    session.mark_card(pair_positions(session)[pair_id][0])

    assert _state(session) == before
    assert session.selected_indices == []


def test_click_on_selected_card_is_ignored(make_session):
    session = make_session()
    session.start()
    session.mark_card(5)
    session.mark_card(5)

    assert session.status_of(5) is CardStatus.SELECTED
    assert session.matched_pairs == frozenset()


def test_at_most_one_card_selected(make_session):
    session = make_session()
    session.start()
    first, second = mismatched_indices(session)
    session.mark_card(first)
    session.mark_card(second)
    assert session.selected_indices == []


# =============================================================================
# Completion
# =============================================================================


def test_two_pair_board_completes_after_two_matches(make_session, scheduler, events):
    session = make_session(n_pairs=2)
    session.start()
    assert len(session.cards) == 4
    seen = set()

    for pair_id in list(pair_positions(session)):
        first, second = pair_positions(session)[pair_id]
        session.mark_card(first)
        seen.add(session.status_of(first))
        session.mark_card(second)
        seen.update(session.status_map.values())

    assert CardStatus.FAILURE not in seen
    assert session.running is False
    assert session.phase is GamePhase.COMPLETE
    assert len(events["finish"]) == 1


def test_finish_reports_elapsed_ms_consistent_with_ticks(make_session, scheduler, events):
    session = make_session(n_pairs=2)
    session.start()
    scheduler.advance(3)
    pair_ids = list(pair_positions(session))

    _match(session, pair_ids[0])
    scheduler.advance(2)
    _match(session, pair_ids[1])

    assert session.time_sec == 5
    assert events["finish"] == [5000]
    assert session.elapsed_ms == 5000


def test_finish_keeps_sub_second_precision(make_session, scheduler, events):
    session = make_session(n_pairs=2)
    session.start()
    scheduler.advance(2.25)

    for pair_id in list(pair_positions(session)):
        _match(session, pair_id)

    assert session.time_sec == 2
    assert events["finish"] == [2250]


def test_finish_fires_once_and_clock_stops(make_session, scheduler, events):
    session = make_session(n_pairs=2)
    session.start()
    for pair_id in list(pair_positions(session)):
        _match(session, pair_id)

    scheduler.advance(5)
    session.mark_card(0)

    assert events["finish"] == [0]
    assert session.time_sec == 0
    assert scheduler.pending_count == 0


def test_start_after_complete_begins_new_session(make_session, events):
    session = make_session(n_pairs=2)
    session.start()
    for pair_id in list(pair_positions(session)):
        _match(session, pair_id)

    session.start()

    assert session.running is True
    assert session.matched_pairs == frozenset()
    assert len(events["finish"]) == 1


def test_empty_deck_is_trivially_won(scheduler, events):
    session = GameSession([], scheduler, on_finish=events["finish"].append)

    session.start()

    assert session.cards == ()
    assert session.phase is GamePhase.COMPLETE
    assert session.running is False
    assert session.time_sec == 0
    assert events["finish"] == [0]
    assert scheduler.pending_count == 0


# =============================================================================
# Timeout
# =============================================================================


def test_time_limit_times_out(make_session, scheduler, events):
    session = make_session(time_limit_sec=3)
    session.start()

    scheduler.advance(2)
    assert session.running is True

    scheduler.advance(1)

    assert session.phase is GamePhase.TIMED_OUT
    assert session.running is False
    assert session.time_sec == 3
    assert events["timeout"] == 1
    assert events["finish"] == []

    scheduler.advance(10)
    assert events["timeout"] == 1
    assert session.time_sec == 3


def test_no_time_limit_never_times_out(make_session, scheduler, events):
    session = make_session(time_limit_sec=None)
    session.start()
    scheduler.advance(3600)
    assert session.running is True
    assert session.time_sec == 3600
    assert events["timeout"] == 0


def test_clicks_ignored_after_timeout(make_session, scheduler):
    session = make_session(time_limit_sec=1)
    session.start()
    scheduler.advance(1)

    session.mark_card(0)

    assert session.status_of(0) is CardStatus.IDLE


# =============================================================================
# Collaborator failures
# =============================================================================


class ExplodingSoundPlayer:
    def play(self, effect):
        raise RuntimeError("no audio device")


def test_sound_failure_does_not_break_session(scheduler):
    session = GameSession(
        [DeckPair("a", "A"), DeckPair("b", "B")],
        scheduler,
        sound_player=ExplodingSoundPlayer(),
    )
    session.start()
    for pair_id in list(pair_positions(session)):
        _match(session, pair_id)

    assert session.phase is GamePhase.COMPLETE


def test_callback_failure_does_not_break_session(scheduler):
    def on_finish(elapsed_ms):
        raise RuntimeError("host crashed")

    session = GameSession([DeckPair("a", "A")], scheduler, on_finish=on_finish)
    session.start()
    _match(session, "a")

    assert session.phase is GamePhase.COMPLETE
    assert session.running is False


# =============================================================================
# View model
# =============================================================================


def test_snapshot_projects_cards_with_status(make_session, scheduler):
    session = make_session(n_pairs=2)
    session.start()
    scheduler.advance(1)
    session.mark_card(2)

    view = session.snapshot()

    assert len(view.cards) == 4
    assert view.cards[2].status is CardStatus.SELECTED
    assert view.cards[2].pair_id == session.cards[2].pair_id
    assert view.cards[2].value == session.cards[2].value
    assert view.time_sec == 1
    assert view.running is True
    assert view.phase is GamePhase.RUNNING
    assert view.total_pairs == 2


def test_shuffle_differs_across_starts(scheduler):
    session = GameSession([DeckPair(f"p{i}", f"v{i}") for i in range(8)], scheduler)
    orders = set()
    for _ in range(100):
        session.reset()
        session.start()
        orders.add(tuple(card.pair_id for card in session.cards))
    assert len(orders) > 1
