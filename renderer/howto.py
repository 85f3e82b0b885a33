"""
renderer/howto.py — How to Play screen for ColorNova.

A column of rule cards (title plus one or two short lines each) read from
settings.HOWTO_CARDS, and a Back button.
"""

import pygame

from renderer.shapes import draw_button
from renderer.ui import blit_centered, font
from settings import SCREEN_W, BUTTON_H, COLOR, HOWTO_CARDS, FONT_SIZE_XL, FONT_SIZE_MD, FONT_SIZE_SM

_MARGIN    = 20
_CARD_GAP  = 10
_LINE_H    = 17


def _draw_card(surface: pygame.Surface, y: int, title: str, lines: tuple) -> int:
    """Draw one rule card at `y` and return the y below it."""
    rect = pygame.Rect(_MARGIN, y, SCREEN_W - 2 * _MARGIN, 34 + _LINE_H * len(lines))
    pygame.draw.rect(surface, COLOR["panel"], rect, border_radius=14)
    pygame.draw.rect(surface, COLOR["panel_border"], rect, width=1, border_radius=14)

    surface.blit(font(FONT_SIZE_MD, bold=True).render(title, True, COLOR["text"]),
                 (rect.x + 14, rect.y + 8))
    for i, line in enumerate(lines):
        surface.blit(font(FONT_SIZE_SM).render(line, True, COLOR["text_dim"]),
                     (rect.x + 14, rect.y + 28 + i * _LINE_H))
    return rect.bottom + _CARD_GAP


def draw_howto(surface: pygame.Surface) -> dict[str, pygame.Rect]:
    """Draw the rule cards and return {"back": rect}."""
    blit_centered(surface, "How to Play", FONT_SIZE_XL, COLOR["text"], 48, bold=True)

    y = 84
    for title, lines in HOWTO_CARDS:
        y = _draw_card(surface, y, title, lines)

    back = draw_button(
        surface,
        pygame.Rect(_MARGIN, 580, SCREEN_W - 2 * _MARGIN, BUTTON_H),
        font(FONT_SIZE_MD, bold=True).render("Back", True, COLOR["text"]),
    )
    return {"back": back}
