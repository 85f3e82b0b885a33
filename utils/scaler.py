"""
utils/scaler.py — Letterboxing for ColorNova.

The game is drawn at 360x640 (9:16 portrait) on an off-screen surface.
Scaler fits that surface into whatever window size the player picks, with
black bars on the spare axis, and maps mouse positions back into game
space so hit detection never has to know about the window.

Usage:
    scaler = Scaler((window_w, window_h))
    scaler.present(window, game_surface)
    pos = scaler.to_game(event.pos)     # None inside a letterbox bar
"""

from __future__ import annotations

import pygame

from settings import SCREEN_H, SCREEN_W


class Scaler:
    """Uniform scale + centering of the native surface inside the window.

    Attributes:
        scale: Window pixels per game pixel.
        rect:  Where the scaled game surface lands in the window.
    """

    def __init__(self, window_size: tuple[int, int]) -> None:
        self.resize(window_size)

    def resize(self, window_size: tuple[int, int]) -> None:
        """Recompute the fit. Call on every VIDEORESIZE / WINDOWRESIZED."""
        window_w, window_h = window_size
        self.scale = max(1e-6, min(window_w / SCREEN_W, window_h / SCREEN_H))
        size = (round(SCREEN_W * self.scale), round(SCREEN_H * self.scale))
        self.rect = pygame.Rect((0, 0), size)
        self.rect.center = (window_w // 2, window_h // 2)

    def present(self, window: pygame.Surface, game_surface: pygame.Surface) -> None:
        """Scale the game surface into the window, clearing the bars."""
        window.fill((0, 0, 0))
        window.blit(pygame.transform.smoothscale(game_surface, self.rect.size), self.rect)

    def to_game(self, window_pos: tuple[int, int]) -> tuple[int, int] | None:
        """Map a window position to game coordinates.

        Returns:
            (x, y) in native 360x640 space, or None if the point is in a
            letterbox bar.
        """
        if not self.rect.collidepoint(window_pos):
            return None
        x = (window_pos[0] - self.rect.x) / self.scale
        y = (window_pos[1] - self.rect.y) / self.scale
        return int(x), int(y)
