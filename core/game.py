"""
core/game.py — Round/session state machine for ColorNova.

GameEngine owns the session state and orchestrates the core subsystems:
    - Session        (score, streak, scoring rules)
    - Countdown x2   (round timer nested inside the session timer)
    - RoundFactory   (target + grid generation)
    - DeferredScheduler scopes (invalidated on every round/session change)

States:
    IDLE    — no session yet, or the player left the game screen
    ACTIVE  — a session is running; rounds come and go inside it
    ENDED   — session timer ran out; taps are ignored

Transitions:
    IDLE / ENDED → ACTIVE : start_session()
    ACTIVE → ACTIVE       : correct tap or round timeout starts a new round
    ACTIVE → ENDED        : session timer reaches zero on a tick
    any → IDLE            : leave()

Inputs are start_session(), tick(now) and tap_tile(index). Outputs are the
events in core/events.py, delivered synchronously to every subscriber.
game.py never draws anything and never touches pygame; core/app.py turns
the events into screens and popups.
"""

from __future__ import annotations
import logging
import random
import time
from enum import Enum, auto
from typing import Callable

from core.events import (
    Correct, GameEvent, Incorrect, Listener, RoundChanged, SessionEnded, Tick, TimesUp,
)
from core.modes import GameMode, get_mode
from core.round_factory import RoundFactory, RoundState
from core.scheduler import DeferredScheduler
from core.session import Session, rank_for
from core.timer import Countdown

logger = logging.getLogger(__name__)

# Scheduler scopes bumped by the engine
ROUND_SCOPE = "round"
SESSION_SCOPE = "session"


class EngineState(Enum):
    """Top-level state machine states."""
    IDLE   = auto()
    ACTIVE = auto()
    ENDED  = auto()


class GameEngine:
    """Timer-driven round/session state machine.

    Attributes:
        state:        Current EngineState.
        session:      Session for the current or last game. None while IDLE.
        round:        Current RoundState. None while IDLE.
        round_number: Rounds started this session, 1-based.
        factory:      RoundFactory used for every new round.
        scheduler:    DeferredScheduler whose scopes track rounds/sessions.
    """

    def __init__(
        self,
        factory: RoundFactory | None = None,
        scheduler: DeferredScheduler | None = None,
        clock: Callable[[], float] = time.monotonic,
        rng: random.Random | None = None,
    ) -> None:
        """Initialise an idle engine.

        Args:
            factory:   Round generator. Built from `rng` if omitted.
            scheduler: Shared deferred-callback scheduler. A private one is
                       created if omitted.
            clock:     Time source used whenever `now` is not passed.
            rng:       Random source for a default factory.
        """
        self._clock = clock
        self.factory = factory or RoundFactory(rng)
        self.scheduler = scheduler or DeferredScheduler(clock)
        self.state: EngineState = EngineState.IDLE
        self.session: Session | None = None
        self.round: RoundState | None = None
        self.round_number: int = 0
        self._round_timer = Countdown()
        self._session_timer = Countdown()
        self._listeners: list[Listener] = []

    # ── Listeners ─────────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a callable for every engine event.

        Returns:
            A zero-argument function that unsubscribes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    # ── State transitions ─────────────────────────────────────────────────────

    def start_session(self, mode: GameMode | str, shape_mode: bool = False,
                      now: float | None = None) -> None:
        """Begin a new session and its first round.

        Any previous session is discarded, together with every deferred
        callback scoped to it.
        """
        now = self._now(now)
        mode = get_mode(mode)
        self.scheduler.invalidate(SESSION_SCOPE, ROUND_SCOPE)
        self.session = Session(mode, shape_mode)
        self.round_number = 0
        self._session_timer.start(now, mode.session_seconds)
        self.state = EngineState.ACTIVE
        logger.info("Session started: mode=%s shape_mode=%s", mode.id, shape_mode)
        self.start_round(now)

    def start_round(self, now: float | None = None) -> None:
        """Generate a new round and restart the round timer.

        Score and streak are left as they are. No-op unless ACTIVE.
        """
        if self.state != EngineState.ACTIVE:
            return
        now = self._now(now)
        self.scheduler.invalidate(ROUND_SCOPE)
        self.round = self.factory.generate(self.session.mode, self.session.shape_mode)
        self.round_number += 1
        self._round_timer.start(now, self.session.mode.round_seconds)
        logger.debug("Round %d: correct_index=%d", self.round_number, self.round.correct_index)
        self._emit(RoundChanged(self.round, self.round_number))

    def leave(self) -> None:
        """Drop the current session, e.g. when the player leaves the screen."""
        self.scheduler.invalidate(SESSION_SCOPE, ROUND_SCOPE)
        self.state = EngineState.IDLE
        self.session = None
        self.round = None
        self.round_number = 0

    def _end_session(self) -> None:
        self.state = EngineState.ENDED
        rank = rank_for(self.session.score)
        logger.info("Session ended: mode=%s score=%d rank=%s",
                    self.session.mode.id, self.session.score, rank.title)
        self._emit(SessionEnded(
            rank=rank.title,
            message=rank.message,
            score=self.session.score,
            mode=self.session.mode.id,
        ))

    # ── Inputs ────────────────────────────────────────────────────────────────

    def tick(self, now: float | None = None) -> None:
        """Advance the timers to `now`.

        Session expiry wins over round expiry when both happen on the same
        tick. A round timeout resets the streak and deals a new round
        without touching the session timer or the score.
        """
        if self.state != EngineState.ACTIVE:
            return
        now = self._now(now)
        round_left = self._round_timer.remaining(now)
        session_left = self._session_timer.remaining(now)
        self._emit(Tick(round_left, session_left))

        if session_left == 0:
            self._end_session()
        elif round_left == 0:
            self.session.register_miss()
            logger.debug("Round %d timed out", self.round_number)
            self._emit(TimesUp())
            self.start_round(now)

    def tap_tile(self, index: int, now: float | None = None) -> bool | None:
        """Handle a tap on the tile at `index`.

        Returns:
            True for a correct tap, False for a wrong one, None if the tap
            was ignored (no active session, session time already used up,
            or index outside the grid).
        """
        if self.state != EngineState.ACTIVE or self.round is None:
            return None
        if not 0 <= index < len(self.round.tiles):
            logger.debug("Ignoring tap on out-of-range index %d", index)
            return None
        now = self._now(now)
        # The session may expire between ticks; tick() ends it
        if self._session_timer.remaining(now) == 0:
            return None

        if self.round.matches(index):
            elapsed = self.session.mode.round_seconds - self._round_timer.remaining(now)
            gained, bonuses = self.session.register_correct(elapsed)
            self._emit(Correct(
                index=index,
                gained=gained,
                bonuses=tuple(bonuses),
                score=self.session.score,
                streak=self.session.streak,
            ))
            self.start_round(now)
            return True

        self.session.register_miss()
        self._emit(Incorrect(index=index, streak=0))
        return False

    # ── Snapshot reads ────────────────────────────────────────────────────────

    @property
    def mode(self) -> GameMode | None:
        return self.session.mode if self.session else None

    @property
    def shape_mode(self) -> bool:
        return bool(self.session and self.session.shape_mode)

    @property
    def score(self) -> int:
        return self.session.score if self.session else 0

    @property
    def streak(self) -> int:
        return self.session.streak if self.session else 0

    def round_time_left(self, now: float | None = None) -> int:
        if self.session is None:
            return 0
        return self._round_timer.remaining(self._now(now))

    def session_time_left(self, now: float | None = None) -> int:
        if self.session is None:
            return 0
        return self._session_timer.remaining(self._now(now))

    def round_fill(self, now: float | None = None) -> float:
        if self.state != EngineState.ACTIVE:
            return 0.0
        return self._round_timer.fill(self._now(now))

    def session_fill(self, now: float | None = None) -> float:
        if self.state != EngineState.ACTIVE:
            return 0.0
        return self._session_timer.fill(self._now(now))
