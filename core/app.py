"""
core/app.py — Screen controller for ColorNova.

App sits between pygame and the engine. It owns the top-level screen enum,
turns mouse/keyboard events into engine calls, turns engine events into
popups and flashes, and draws the current screen.

Screens:
    MENU        — name field, mode cards, Shape Mode toggle
    PLAYING     — active (or just-ended) session
    GAMEOVER    — save-score panel after a session ends
    LEADERBOARD — top scores with mode filter
    HOWTO       — rule cards

Transitions:
    MENU        → PLAYING     : player clicks a mode card
    MENU        → LEADERBOARD : player clicks Leaderboard
    MENU        → HOWTO       : player clicks How to Play
    PLAYING     → GAMEOVER    : SAVE_PANEL_DELAY_S after SessionEnded
    GAMEOVER    → MENU        : Save or Skip
    LEADERBOARD → MENU        : Back
    HOWTO       → MENU        : Back
    any         → MENU        : Escape (an active session is abandoned)

Every short-lived effect goes through the shared DeferredScheduler:
    popups         scope "popup"    (a newer popup expires the older timer)
    wrong outline  scope "round"    (a new round expires it)
    correct flash  scope "session"
    save panel     scope "session"  (leaving the game expires it)

app.py does NOT call pygame.display.flip() or manage the window. That is
main.py's responsibility.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

import pygame

from core.events import Correct, GameEvent, Incorrect, RoundChanged, SessionEnded, TimesUp
from core.game import EngineState, GameEngine, SESSION_SCOPE, ROUND_SCOPE
from core.leaderboard import LeaderboardStore, normalize_name
from core.modes import get_mode
from core.scheduler import DeferredScheduler
from renderer import ui
from renderer.grid import TileGrid
from renderer.howto import draw_howto
from renderer.leaderboard import draw_leaderboard
from renderer.menu import draw_menu
from settings import (
    COLOR, NAME_MAX_LEN, TIPS,
    TICK_INTERVAL_S, POPUP_DURATION_S, CORRECT_FLASH_S, WRONG_FLASH_S,
    SAVE_PANEL_DELAY_S, TIP_ROTATE_S,
)

logger = logging.getLogger(__name__)

POPUP_SCOPE = "popup"


class Screen(Enum):
    """Top-level screens."""
    MENU        = auto()
    PLAYING     = auto()
    GAMEOVER    = auto()
    LEADERBOARD = auto()
    HOWTO       = auto()


@dataclass(frozen=True)
class Popup:
    title:    str
    subtitle: str
    accent:   tuple


class App:
    """Presentation controller for one window.

    Attributes:
        screen:        Current Screen.
        engine:        GameEngine driving the session.
        leaderboard:   LeaderboardStore, constructed by the caller.
        scheduler:     DeferredScheduler shared with the engine.
        player_name:   Text in the name fields.
        shape_mode:    Shape Mode toggle state for the next session.
        popup:         Popup being shown, or None.
        show_wrong:    True while non-matching tiles are outlined.
        correct_flash: Clock value at which the green flash started, or None.
        final:         SessionEnded event of the last session, or None.
        board_filter:  Leaderboard filter mode id, or None for all.
    """

    def __init__(
        self,
        leaderboard: LeaderboardStore,
        engine: GameEngine | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self.leaderboard = leaderboard
        self.scheduler = engine.scheduler if engine else DeferredScheduler(clock)
        self.engine = engine or GameEngine(scheduler=self.scheduler, clock=clock)
        self.engine.subscribe(self._on_engine_event)

        self.screen: Screen = Screen.MENU
        self.player_name: str = ""
        self.shape_mode: bool = False
        self.popup: Popup | None = None
        self.show_wrong: bool = False
        self.correct_flash: float | None = None
        self.final: SessionEnded | None = None
        self.board_filter: str | None = None

        self._grid: TileGrid | None = None
        self._name_focused: bool = False
        self._next_tick: float = 0.0
        self._rects: dict[str, pygame.Rect] = {}
        self._started_at = clock()

    # ── Screen transitions ────────────────────────────────────────────────────

    def open_menu(self) -> None:
        """Return to the menu, abandoning any session in progress."""
        if self.engine.state != EngineState.IDLE:
            self.engine.leave()
        self.scheduler.invalidate(POPUP_SCOPE)
        self.popup = None
        self.show_wrong = False
        self.correct_flash = None
        self._name_focused = False
        self.screen = Screen.MENU

    def open_leaderboard(self) -> None:
        self._name_focused = False
        self.screen = Screen.LEADERBOARD

    def open_howto(self) -> None:
        self._name_focused = False
        self.screen = Screen.HOWTO

    def start_game(self, mode_id: str, now: float | None = None) -> None:
        """Start a session in `mode_id` with the current Shape Mode setting."""
        now = self._clock() if now is None else now
        mode = get_mode(mode_id)
        self.player_name = self.player_name.strip()
        self._grid = TileGrid(mode.grid)
        self.final = None
        self.popup = None
        self._name_focused = False
        self.screen = Screen.PLAYING
        self.engine.start_session(mode, self.shape_mode, now)
        self._next_tick = now + TICK_INTERVAL_S

    def save_score(self) -> None:
        """Store the last session's score under the entered name."""
        if self.final is not None:
            self.player_name = normalize_name(self.player_name)
            self.leaderboard.upsert_best_score(self.player_name, self.final.score, self.final.mode)
        self.open_menu()

    def _open_save_panel(self) -> None:
        self._name_focused = False
        self.screen = Screen.GAMEOVER

    # ── Popups / flashes ──────────────────────────────────────────────────────

    def show_popup(self, title: str, subtitle: str, accent: tuple, now: float | None = None) -> None:
        """Show a popup that dismisses itself after POPUP_DURATION_S.

        A newer popup replaces the current one and expires its timer.
        """
        self.popup = Popup(title, subtitle, accent)
        self.scheduler.invalidate(POPUP_SCOPE)
        self.scheduler.call_later(POPUP_DURATION_S, self._dismiss_popup, scope=POPUP_SCOPE, now=now)

    def _dismiss_popup(self) -> None:
        self.popup = None

    def _clear_wrong(self) -> None:
        self.show_wrong = False

    def _clear_flash(self) -> None:
        self.correct_flash = None

    def _accent(self) -> tuple:
        mode = self.engine.mode
        return mode.accent if mode else COLOR["text"]

    def _on_engine_event(self, event: GameEvent) -> None:
        now = self._clock()
        if isinstance(event, RoundChanged):
            self.show_wrong = False

        elif isinstance(event, Correct):
            for bonus in event.bonuses:
                self.show_popup(bonus.title, bonus.subtitle, self._accent(), now)
            self.correct_flash = now
            self.scheduler.call_later(CORRECT_FLASH_S, self._clear_flash, scope=SESSION_SCOPE, now=now)

        elif isinstance(event, Incorrect):
            self.show_wrong = True
            self.scheduler.call_later(WRONG_FLASH_S, self._clear_wrong, scope=ROUND_SCOPE, now=now)

        elif isinstance(event, TimesUp):
            self.show_popup(event.title, event.message, self._accent(), now)

        elif isinstance(event, SessionEnded):
            self.final = event
            self.show_popup(event.rank, event.message, self._accent(), now)
            self.scheduler.call_later(SAVE_PANEL_DELAY_S, self._open_save_panel,
                                      scope=SESSION_SCOPE, now=now)

    # ── Per-frame update ──────────────────────────────────────────────────────

    def update(self, now: float | None = None) -> None:
        """Run due deferred callbacks and tick the engine on its cadence."""
        now = self._clock() if now is None else now
        self.scheduler.poll(now)
        if self.screen == Screen.PLAYING and now >= self._next_tick:
            self.engine.tick(now)
            self._next_tick = now + TICK_INTERVAL_S

    # ── Event handling ────────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event) -> None:
        """Route a pygame event to the handler for the current screen.

        Mouse positions are expected in game coordinates already; main.py
        translates them via Scaler before calling this.
        """
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.open_menu()
            return

        if self._name_focused and self._handle_text(event):
            return

        if event.type != pygame.MOUSEBUTTONDOWN or event.button != 1:
            return

        if self.screen == Screen.MENU:
            self._click_menu(event.pos)
        elif self.screen == Screen.PLAYING:
            self._click_playing(event.pos)
        elif self.screen == Screen.GAMEOVER:
            self._click_gameover(event.pos)
        elif self.screen == Screen.LEADERBOARD:
            self._click_leaderboard(event.pos)
        elif self.screen == Screen.HOWTO:
            self._click_howto(event.pos)

    def _handle_text(self, event: pygame.event.Event) -> bool:
        """Edit the player name. Returns True if the event was consumed."""
        if event.type == pygame.TEXTINPUT:
            room = NAME_MAX_LEN - len(self.player_name)
            if room > 0:
                self.player_name += event.text[:room]
            return True
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_BACKSPACE:
                self.player_name = self.player_name[:-1]
                return True
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self._name_focused = False
                return True
        return False

    def _hit(self, pos) -> str | None:
        for key, rect in self._rects.items():
            if rect.collidepoint(pos):
                return key
        return None

    def _click_menu(self, pos) -> None:
        key = self._hit(pos)
        self._name_focused = key == "name"
        if key is None:
            return
        if key.startswith("mode:"):
            self.start_game(key.split(":", 1)[1])
        elif key == "shape_toggle":
            self.shape_mode = not self.shape_mode
        elif key == "leaderboard":
            self.open_leaderboard()
        elif key == "howto":
            self.open_howto()

    def _click_playing(self, pos) -> None:
        if self._grid is None:
            return
        index = self._grid.hit_test(*pos)
        if index is not None:
            self.engine.tap_tile(index)

    def _click_gameover(self, pos) -> None:
        key = self._hit(pos)
        self._name_focused = key == "name"
        if key == "save":
            self.save_score()
        elif key == "skip":
            self.open_menu()

    def _click_leaderboard(self, pos) -> None:
        key = self._hit(pos)
        if key == "back":
            self.open_menu()
        elif key and key.startswith("filter:"):
            choice = key.split(":", 1)[1]
            self.board_filter = None if choice == "all" else choice

    def _click_howto(self, pos) -> None:
        if self._hit(pos) == "back":
            self.open_menu()

    # ── Rendering ─────────────────────────────────────────────────────────────

    def render(self, surface: pygame.Surface, now: float | None = None) -> None:
        """Draw the current screen onto the native game surface."""
        now = self._clock() if now is None else now
        t = now - self._started_at
        ui.draw_background(surface, t)

        if self.screen == Screen.MENU:
            tip = TIPS[int(t / TIP_ROTATE_S) % len(TIPS)]
            self._rects = draw_menu(surface, t, self.player_name, self._name_focused,
                                    self.shape_mode, tip)

        elif self.screen in (Screen.PLAYING, Screen.GAMEOVER):
            self._render_playing(surface, now)

        elif self.screen == Screen.LEADERBOARD:
            rows = self.leaderboard.top_entries(self.board_filter)
            self._rects = draw_leaderboard(surface, rows, self.board_filter)

        elif self.screen == Screen.HOWTO:
            self._rects = draw_howto(surface)

    def _render_playing(self, surface: pygame.Surface, now: float) -> None:
        engine = self.engine
        if engine.session is None or engine.round is None:
            return

        ui.draw_header(surface, engine.mode, engine.score, engine.streak)
        ui.draw_timers(
            surface,
            engine.round_time_left(now), engine.round_fill(now),
            engine.session_time_left(now), engine.session_fill(now),
        )
        ui.draw_target(surface, engine.round)
        self._grid.render(surface, engine.round, show_wrong=self.show_wrong)

        if self.correct_flash is not None:
            alpha = 1.0 - (now - self.correct_flash) / CORRECT_FLASH_S
            ui.draw_flash(surface, COLOR["pass"], alpha)

        if self.screen == Screen.GAMEOVER and self.final is not None:
            self._rects = ui.draw_save_panel(
                surface, self.final.score, engine.mode, self.final.rank,
                self.player_name, self._name_focused,
            )
        elif self.popup is not None:
            ui.draw_popup(surface, self.popup.title, self.popup.subtitle, self.popup.accent)
