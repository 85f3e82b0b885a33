"""
renderer/leaderboard.py — Leaderboard screen for ColorNova.

Filter pills (All / Easy / Moderate / Hard) sit above up to ten rows of
"#rank  name  mode  score". An empty list shows a short hint instead.
"""

from __future__ import annotations

import pygame

from core.leaderboard import ScoreEntry
from core.modes import all_modes, get_mode
from renderer.shapes import draw_button
from renderer.ui import blit_centered, font
from settings import SCREEN_W, BUTTON_H, COLOR, FONT_SIZE_XL, FONT_SIZE_MD, FONT_SIZE_SM

_ROW_H = 40


def _draw_pill(surface: pygame.Surface, x: int, y: int, text: str, active: bool) -> pygame.Rect:
    label = font(FONT_SIZE_SM, bold=True).render(text, True, COLOR["text"] if active else COLOR["text_dim"])
    rect = label.get_rect().inflate(20, 12)
    rect.topleft = (x, y)
    pygame.draw.rect(surface, COLOR["panel_border"] if active else COLOR["panel"], rect,
                     border_radius=rect.height // 2)
    surface.blit(label, label.get_rect(center=rect.center))
    return rect


def draw_leaderboard(
    surface: pygame.Surface,
    rows: list[ScoreEntry],
    active_filter: str | None,
) -> dict[str, pygame.Rect]:
    """Draw the leaderboard and return its interactive rects.

    Args:
        surface:       Native game surface (background already drawn).
        rows:          Entries to list, best first.
        active_filter: Selected mode id, or None for "All".

    Returns:
        Rects keyed "filter:all", "filter:<id>" per mode and "back".
    """
    rects: dict[str, pygame.Rect] = {}
    blit_centered(surface, "Leaderboard", FONT_SIZE_XL, COLOR["text"], 48, bold=True)

    pills = [("all", "All")] + [(mode.id, mode.title) for mode in all_modes()]
    x = 20
    for key, text in pills:
        active = (active_filter or "all") == key
        rect = _draw_pill(surface, x, 84, text, active)
        rects[f"filter:{key}"] = rect
        x = rect.right + 8

    if not rows:
        blit_centered(surface, "No scores yet.", FONT_SIZE_MD, COLOR["text_dim"], 240)
        blit_centered(surface, "Play a game and save your score at the end!", FONT_SIZE_SM,
                      COLOR["text_dim"], 264)

    y = 130
    for position, entry in enumerate(rows, start=1):
        row = pygame.Rect(20, y, SCREEN_W - 40, _ROW_H - 6)
        pygame.draw.rect(surface, COLOR["panel"], row, border_radius=10)
        mode = get_mode(entry.mode)

        surface.blit(font(FONT_SIZE_MD, bold=True).render(f"#{position}", True, mode.accent),
                     (row.x + 10, row.y + 8))
        surface.blit(font(FONT_SIZE_MD).render(entry.name, True, COLOR["text"]), (row.x + 52, row.y + 2))
        surface.blit(font(FONT_SIZE_SM).render(mode.title, True, COLOR["text_dim"]),
                     (row.x + 52, row.y + 19))
        score = font(FONT_SIZE_MD, bold=True).render(str(entry.score), True, COLOR["text"])
        surface.blit(score, score.get_rect(midright=(row.right - 12, row.centery)))
        y += _ROW_H

    rects["back"] = draw_button(
        surface,
        pygame.Rect(20, 580, SCREEN_W - 40, BUTTON_H),
        font(FONT_SIZE_MD, bold=True).render("Back", True, COLOR["text"]),
    )
    return rects
