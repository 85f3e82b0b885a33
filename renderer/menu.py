"""
renderer/menu.py — Main menu screen for ColorNova.

Layout, top to bottom:
    - Title and tagline
    - Rotating tip line
    - Player name field
    - One card per mode (title, grid size, timers, tip)
    - Shape Mode toggle
    - Leaderboard and How to Play buttons

draw_menu() is stateless: core/app.py passes in the current name, toggle
state and tip, and gets back the rects it needs for hit detection.
"""

import pygame

from core.modes import all_modes
from renderer.shapes import draw_button
from renderer.ui import blit_centered, draw_text_field, font
from settings import (
    SCREEN_W, BUTTON_H, COLOR,
    FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)

_CARD_H   = 74
_CARD_GAP = 10
_MARGIN   = 20


def _draw_mode_card(surface: pygame.Surface, rect: pygame.Rect, mode, pulse: float) -> None:
    pygame.draw.rect(surface, COLOR["panel"], rect, border_radius=14)
    border_w = 2 if pulse > 0.5 else 1
    pygame.draw.rect(surface, mode.accent, rect, width=border_w, border_radius=14)

    pygame.draw.circle(surface, mode.accent, (rect.x + 30, rect.centery), 16)

    title = font(FONT_SIZE_LG, bold=True).render(f"Play {mode.title}", True, COLOR["text"])
    surface.blit(title, (rect.x + 58, rect.y + 10))
    detail = f"{mode.subtitle} - {mode.round_seconds}s - Session {mode.session_seconds}s"
    surface.blit(font(FONT_SIZE_SM).render(detail, True, COLOR["text_dim"]), (rect.x + 58, rect.y + 34))
    surface.blit(font(FONT_SIZE_SM).render(mode.tip, True, COLOR["text_dim"]), (rect.x + 58, rect.y + 52))


def _draw_toggle(surface: pygame.Surface, rect: pygame.Rect, on: bool) -> None:
    pygame.draw.rect(surface, COLOR["panel"], rect, border_radius=14)
    label = font(FONT_SIZE_MD, bold=True).render("Shape Mode (Color + Shape)", True, COLOR["text"])
    surface.blit(label, label.get_rect(midleft=(rect.x + 14, rect.centery)))

    track = pygame.Rect(0, 0, 46, 24)
    track.midright = (rect.right - 14, rect.centery)
    pygame.draw.rect(surface, COLOR["toggle_on"] if on else COLOR["toggle_off"], track,
                     border_radius=12)
    knob_x = track.right - 12 if on else track.left + 12
    pygame.draw.circle(surface, COLOR["text"], (knob_x, track.centery), 10)


def draw_menu(
    surface: pygame.Surface,
    t: float,
    name: str,
    name_focused: bool,
    shape_mode: bool,
    tip: str,
) -> dict[str, pygame.Rect]:
    """Draw the menu and return its interactive rects.

    Args:
        surface:      Native game surface (background already drawn).
        t:            Seconds since start; drives the card pulse.
        name:         Current player name text.
        name_focused: True while the name field takes keyboard input.
        shape_mode:   Current Shape Mode toggle state.
        tip:          Tip line to show this frame.

    Returns:
        Rects keyed "name", "mode:<id>" per mode, "shape_toggle",
        "leaderboard" and "howto".
    """
    rects: dict[str, pygame.Rect] = {}

    blit_centered(surface, "ColorNova", FONT_SIZE_XL + 8, COLOR["text"], 58, bold=True)
    blit_centered(surface, "Match fast. Score big. Shine.", FONT_SIZE_MD, COLOR["text_dim"], 96)
    blit_centered(surface, tip, FONT_SIZE_SM, COLOR["round_bar"], 124, bold=True)

    width = SCREEN_W - 2 * _MARGIN
    rects["name"] = draw_text_field(
        surface, pygame.Rect(_MARGIN, 146, width, BUTTON_H), name, "Your name (optional)", name_focused,
    )

    # Triangle wave 0→1→0 every 2.4 s for the card border
    phase = (t % 2.4) / 1.2
    pulse = phase if phase <= 1.0 else 2.0 - phase

    y = 206
    for mode in all_modes():
        rect = pygame.Rect(_MARGIN, y, width, _CARD_H)
        _draw_mode_card(surface, rect, mode, pulse)
        rects[f"mode:{mode.id}"] = rect
        y += _CARD_H + _CARD_GAP

    rects["shape_toggle"] = pygame.Rect(_MARGIN, y + 4, width, 48)
    _draw_toggle(surface, rects["shape_toggle"], shape_mode)

    half = (width - _CARD_GAP) // 2
    label = font(FONT_SIZE_MD, bold=True)
    rects["leaderboard"] = draw_button(
        surface,
        pygame.Rect(_MARGIN, y + 64, half, BUTTON_H),
        label.render("Leaderboard", True, COLOR["text"]),
    )
    rects["howto"] = draw_button(
        surface,
        pygame.Rect(SCREEN_W - _MARGIN - half, y + 64, half, BUTTON_H),
        label.render("How to Play", True, COLOR["text"]),
    )
    return rects
