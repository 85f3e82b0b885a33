"""Tests for the round/session state machine."""

import pytest

from core.events import Correct, Incorrect, RoundChanged, SessionEnded, Tick, TimesUp
from core.game import ROUND_SCOPE, EngineState


def _wrong_index(engine):
    return (engine.round.correct_index + 1) % len(engine.round.tiles)


def _of_type(events, kind):
    return [e for e in events if isinstance(e, kind)]


class TestStartSession:
    def test_starts_active_with_first_round(self, engine, events):
        engine.start_session("easy", shape_mode=False, now=0.0)

        assert engine.state == EngineState.ACTIVE
        assert engine.score == 0
        assert engine.streak == 0
        assert engine.round_number == 1
        assert len(engine.round.tiles) == 9
        assert engine.round_time_left(0.0) == 15
        assert engine.session_time_left(0.0) == 45
        assert isinstance(events[-1], RoundChanged)

    @pytest.mark.parametrize(("mode_id", "cells", "round_s", "session_s"), [
        ("easy", 9, 15, 45),
        ("moderate", 25, 25, 60),
        ("hard", 49, 35, 75),
    ])
    def test_mode_table(self, engine, mode_id, cells, round_s, session_s):
        engine.start_session(mode_id, now=0.0)

        assert len(engine.round.tiles) == cells
        assert engine.round_time_left(0.0) == round_s
        assert engine.session_time_left(0.0) == session_s

    def test_restart_resets_score_and_streak(self, engine):
        engine.start_session("easy", now=0.0)
        engine.tap_tile(engine.round.correct_index, now=0.5)

        engine.start_session("moderate", shape_mode=True, now=3.0)

        assert engine.score == 0
        assert engine.streak == 0
        assert engine.mode.id == "moderate"
        assert engine.shape_mode is True
        assert engine.round_number == 1

    def test_unknown_mode(self, engine):
        with pytest.raises(KeyError):
            engine.start_session("impossible", now=0.0)


class TestTapTile:
    def test_fast_correct_tap_reaching_streak_three(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.session.streak = 2
        first_round = engine.round

        result = engine.tap_tile(first_round.correct_index, now=1.0)

        assert result is True
        assert engine.score == 6
        assert engine.streak == 3
        correct = _of_type(events, Correct)[-1]
        assert correct.gained == 6
        assert [b.title for b in correct.bonuses] == ["Speed Bonus!", "Streak!"]
        assert engine.round is not first_round
        assert engine.round_number == 2

    @pytest.mark.parametrize(("elapsed", "gained"), [
        (0.0, 4),
        (2.0, 4),
        (2.5, 4),
        (3.0, 3),
        (5.0, 3),
        (5.5, 3),
        (6.0, 1),
        (14.0, 1),
    ])
    def test_speed_bonus_by_elapsed_time(self, engine, elapsed, gained):
        engine.start_session("easy", now=0.0)

        engine.tap_tile(engine.round.correct_index, now=elapsed)

        assert engine.score == gained

    def test_correct_tap_resets_round_timer_not_session(self, engine):
        engine.start_session("easy", now=0.0)

        engine.tap_tile(engine.round.correct_index, now=10.0)

        assert engine.round_time_left(10.0) == 15
        assert engine.session_time_left(10.0) == 35

    def test_hot_streak_at_five_then_nothing_extra(self, engine):
        engine.start_session("easy", now=0.0)
        gains = []
        for _ in range(7):
            before = engine.score
            engine.tap_tile(engine.round.correct_index, now=0.0)
            gains.append(engine.score - before)

        assert gains == [4, 4, 6, 4, 9, 4, 4]
        assert engine.streak == 7

    def test_wrong_tap_resets_streak_and_keeps_round(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.tap_tile(engine.round.correct_index, now=0.0)
        score = engine.score
        current = engine.round

        result = engine.tap_tile(_wrong_index(engine), now=1.0)

        assert result is False
        assert engine.streak == 0
        assert engine.score == score
        assert engine.round is current
        assert isinstance(events[-1], Incorrect)

    @pytest.mark.parametrize("index", [-1, 9, 100])
    def test_out_of_range_tap_is_ignored(self, engine, events, index):
        engine.start_session("easy", now=0.0)
        engine.session.streak = 2
        count = len(events)

        assert engine.tap_tile(index, now=1.0) is None
        assert engine.streak == 2
        assert len(events) == count

    def test_tap_after_session_deadline_before_tick_is_ignored(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.tap_tile(engine.round.correct_index, now=1.0)
        score = engine.score
        count = len(events)

        assert engine.tap_tile(engine.round.correct_index, now=45.1) is None
        assert engine.score == score
        assert len(events) == count

        engine.tick(45.2)
        assert engine.state == EngineState.ENDED
        assert events[-1].score == score

    def test_tap_before_session_is_ignored(self, engine, events):
        assert engine.tap_tile(0, now=0.0) is None
        assert events == []


class TestTick:
    def test_tick_reports_remaining_time(self, engine, events):
        engine.start_session("moderate", now=0.0)

        engine.tick(0.2)

        assert events[-1] == Tick(round_time_left=25, session_time_left=60)

    def test_round_timeout_deals_new_round(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.tap_tile(engine.round.correct_index, now=0.0)
        score = engine.score
        first_round = engine.round

        engine.tick(15.0)

        assert len(_of_type(events, TimesUp)) == 1
        assert engine.streak == 0
        assert engine.score == score
        assert engine.round is not first_round
        assert engine.state == EngineState.ACTIVE
        assert engine.round_time_left(15.0) == 15
        assert engine.session_time_left(15.0) == 30

    def test_no_timeout_before_deadline(self, engine, events):
        engine.start_session("easy", now=0.0)

        engine.tick(14.9)

        assert _of_type(events, TimesUp) == []
        assert engine.round_number == 1

    def test_session_end_ranks_final_score(self, engine, events):
        engine.start_session("easy", now=0.0)
        for _ in range(3):
            engine.tap_tile(engine.round.correct_index, now=0.0)

        engine.tick(45.0)

        assert engine.state == EngineState.ENDED
        ended = events[-1]
        assert ended == SessionEnded(
            rank="Explorer",
            message="Solid! You're getting the hang of it.",
            score=14,
            mode="easy",
        )

    def test_session_end_beats_simultaneous_round_timeout(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.tick(15.0)
        engine.tick(30.0)
        rounds_before = engine.round_number

        # Round and session both expire at 45
        engine.tick(45.0)

        assert len(_of_type(events, TimesUp)) == 2
        assert len(_of_type(events, SessionEnded)) == 1
        assert engine.round_number == rounds_before
        assert engine.state == EngineState.ENDED

    def test_taps_ignored_after_session_end(self, engine):
        engine.start_session("easy", now=0.0)
        engine.tick(50.0)

        assert engine.tap_tile(engine.round.correct_index, now=50.0) is None
        assert engine.score == 0

    def test_tick_after_end_is_noop(self, engine, events):
        engine.start_session("easy", now=0.0)
        engine.tick(45.0)
        count = len(events)

        engine.tick(46.0)

        assert len(events) == count

    def test_tick_while_idle_is_noop(self, engine, events):
        engine.tick(10.0)

        assert events == []

    def test_late_tick_clamps_to_zero(self, engine, events):
        engine.start_session("easy", now=0.0)

        engine.tick(1000.0)

        assert _of_type(events, Tick)[-1] == Tick(0, 0)
        assert engine.state == EngineState.ENDED


class TestScopesAndLeave:
    def test_new_round_expires_round_scoped_callbacks(self, engine):
        engine.start_session("easy", now=0.0)
        fired = []
        engine.scheduler.call_later(0.25, lambda: fired.append(1), scope=ROUND_SCOPE, now=0.0)

        engine.tap_tile(engine.round.correct_index, now=0.1)
        engine.scheduler.poll(1.0)

        assert fired == []

    def test_wrong_tap_keeps_round_scoped_callbacks(self, engine):
        engine.start_session("easy", now=0.0)
        fired = []
        engine.scheduler.call_later(0.25, lambda: fired.append(1), scope=ROUND_SCOPE, now=0.0)

        engine.tap_tile(_wrong_index(engine), now=0.1)
        engine.scheduler.poll(1.0)

        assert fired == [1]

    def test_leave_returns_to_idle(self, engine):
        engine.start_session("easy", now=0.0)

        engine.leave()

        assert engine.state == EngineState.IDLE
        assert engine.round is None
        assert engine.score == 0
        assert engine.round_fill(1.0) == 0.0
        assert engine.session_time_left(1.0) == 0

    def test_unsubscribe(self, engine):
        received = []
        unsubscribe = engine.subscribe(received.append)

        unsubscribe()
        engine.start_session("easy", now=0.0)

        assert received == []
