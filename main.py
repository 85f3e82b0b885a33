"""
main.py — Entry point and game loop for ColorNova.

Responsibilities:
    - Configure logging and open the preferences file
    - Initialise pygame and create the window
    - Own the Scaler (window → game coordinate translation)
    - Run the main loop: handle events → update → render → flip
    - Wrap the loop in async for pygbag (WASM/itch.io export)

Architecture note:
    main.py is intentionally thin. It owns the pygame lifecycle, the
    window and the construction of the long-lived objects (leaderboard
    store, app). Game rules live in core/game.py, screens in core/app.py.

Usage (local):
    python main.py

Usage (WASM export):
    pygbag main.py
"""

import asyncio
import logging
import time

import pygame

from core.app import App
from core.leaderboard import LeaderboardStore
from core.storage import JsonFileStore
from settings import SCREEN_W, SCREEN_H, FPS, TITLE, PREFS_PATH, LOG_DIR, LOG_LEVEL
from utils.logging import setup_logging
from utils.scaler import Scaler

logger = logging.getLogger(__name__)

# ── Window configuration ──────────────────────────────────────────────────────
# Desktop window starts at 1.25x native; pygbag overrides with the canvas size.
_WINDOW_W = int(SCREEN_W * 1.25)
_WINDOW_H = int(SCREEN_H * 1.25)

_MOUSE_EVENTS = (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION)


async def main() -> None:
    """Async main loop, compatible with both CPython and pygbag WASM.

    Each iteration yields to the event loop via asyncio.sleep(0), which
    pygbag uses to hand control back to the browser.
    """
    log_file = setup_logging(LOG_DIR, LOG_LEVEL)
    logger.info("Starting %s (log file: %s)", TITLE, log_file)

    pygame.init()
    window = pygame.display.set_mode((_WINDOW_W, _WINDOW_H), pygame.RESIZABLE)
    pygame.display.set_caption(TITLE)

    game_surface = pygame.Surface((SCREEN_W, SCREEN_H))
    scaler = Scaler(window.get_size())

    leaderboard = LeaderboardStore(JsonFileStore(PREFS_PATH))
    app = App(leaderboard, clock=time.monotonic)
    clock = pygame.time.Clock()

    running = True
    while running:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.VIDEORESIZE:
                scaler.resize((event.w, event.h))

            elif event.type in _MOUSE_EVENTS:
                # Drop clicks in the letterbox bars, translate the rest
                pos = scaler.to_game(event.pos)
                if pos is not None:
                    translated = pygame.event.Event(event.type, {**event.dict, "pos": pos})
                    app.handle_event(translated)

            else:
                app.handle_event(event)

        now = time.monotonic()
        app.update(now)
        app.render(game_surface, now)
        scaler.present(window, game_surface)
        pygame.display.flip()

        await asyncio.sleep(0)

    logger.info("Shutting down")
    pygame.quit()


def run() -> None:
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
