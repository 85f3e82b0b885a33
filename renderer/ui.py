"""
renderer/ui.py — Game screen chrome for ColorNova.

Draws all non-grid interface elements of the playing and game-over screens:
    - Starfield background
    - Header (mode, score, streak pill)
    - Round and session timer bars
    - Target preview
    - Popup card (bonuses, time's up, rank)
    - Correct-tap flash overlay
    - Text field and the save-score panel

All functions are stateless: they take explicit data arguments, draw to
the provided surface and return the rects the caller needs for hit
detection. No global state is read except constants from settings.py and
the font cache below.
"""

from __future__ import annotations
import math
import random

import pygame

from core.modes import GameMode
from core.round_factory import RoundState
from renderer.shapes import draw_bar, draw_button, draw_shape, draw_tile
from settings import (
    SCREEN_W, SCREEN_H,
    HEADER_H, BAR_H, TARGET_SIZE, BUTTON_H,
    COLOR,
    FONT_FAMILY, FONT_SIZE_XL, FONT_SIZE_LG, FONT_SIZE_MD, FONT_SIZE_SM,
)
from utils.color import RGBColor, with_alpha

# ── Font cache ────────────────────────────────────────────────────────────────
# pygame.font.SysFont falls back to the default font if FONT_FAMILY is missing.
_fonts: dict[tuple[int, bool], pygame.font.Font] = {}


def font(size: int, bold: bool = False) -> pygame.font.Font:
    """Return a cached font at the given size."""
    key = (size, bold)
    if key not in _fonts:
        _fonts[key] = pygame.font.SysFont(FONT_FAMILY, size, bold=bold)
    return _fonts[key]


def blit_centered(surface: pygame.Surface, text: str, size: int, color, cy: int,
                  bold: bool = False) -> pygame.Rect:
    label = font(size, bold).render(text, True, color)
    rect = label.get_rect(center=(SCREEN_W // 2, cy))
    surface.blit(label, rect)
    return rect


# ── Background ────────────────────────────────────────────────────────────────
# Fixed seed so the starfield is identical every launch
_STARS = [
    (rng.randint(0, SCREEN_W), rng.randint(0, SCREEN_H), rng.choice((1, 1, 2)), rng.uniform(0, math.tau))
    for rng in [random.Random(42)]
    for _ in range(70)
]


def draw_background(surface: pygame.Surface, t: float) -> None:
    """Fill the background and draw softly twinkling stars.

    Args:
        surface: Native game surface.
        t:       Seconds since start; drives the twinkle phase.
    """
    surface.fill(COLOR["background"])
    for x, y, r, phase in _STARS:
        level = 140 + int(90 * (0.5 + 0.5 * math.sin(t * 1.3 + phase)))
        pygame.draw.circle(surface, (level, level, min(255, level + 20)), (x, y), r)


# ── Header ────────────────────────────────────────────────────────────────────

def draw_header(surface: pygame.Surface, mode: GameMode, score: int, streak: int) -> None:
    """Draw the title line, the mode label and the score/streak pills.

    The streak pill only appears once the streak reaches 2.
    """
    title = font(FONT_SIZE_LG, bold=True).render("ColorNova", True, COLOR["text"])
    surface.blit(title, (16, 12))

    sub = font(FONT_SIZE_SM).render(f"{mode.title} - {mode.subtitle}", True, mode.accent)
    surface.blit(sub, (16, 38))

    x = SCREEN_W - 16
    pills = [f"Score {score}"]
    if streak >= 2:
        pills.append(f"Streak {streak}")
    for text in pills:
        label = font(FONT_SIZE_SM, bold=True).render(text, True, COLOR["text"])
        rect = label.get_rect().inflate(16, 8)
        rect.topright = (x, 14)
        pygame.draw.rect(surface, COLOR["panel"], rect, border_radius=rect.height // 2)
        surface.blit(label, label.get_rect(center=rect.center))
        x = rect.left - 6


# ── Timer bars ────────────────────────────────────────────────────────────────

def draw_timers(
    surface: pygame.Surface,
    round_left: int,
    round_fill: float,
    session_left: int,
    session_fill: float,
) -> None:
    """Draw the round bar above the session bar, each with seconds left."""
    y = HEADER_H + 6
    rows = (
        ("Round", round_left, round_fill, COLOR["round_bar"]),
        ("Session", session_left, session_fill, COLOR["session_bar"]),
    )
    for label_text, seconds, fill, color in rows:
        label = font(FONT_SIZE_SM).render(f"{label_text} {seconds}s", True, COLOR["text_dim"])
        surface.blit(label, (16, y))
        draw_bar(surface, pygame.Rect(92, y + 4, SCREEN_W - 108, BAR_H), fill, color)
        y += 24


# ── Target preview ────────────────────────────────────────────────────────────

def draw_target(surface: pygame.Surface, state: RoundState) -> None:
    """Draw the target swatch (or shape, in shape mode) and its caption."""
    box = pygame.Rect(0, 0, TARGET_SIZE + 24, TARGET_SIZE + 24)
    box.midtop = (SCREEN_W // 2, HEADER_H + 58)
    pygame.draw.rect(surface, COLOR["panel"], box, border_radius=18)
    pygame.draw.rect(surface, COLOR["panel_border"], box, width=2, border_radius=18)

    inner = pygame.Rect(0, 0, TARGET_SIZE - 12, TARGET_SIZE - 12)
    inner.center = box.center
    if state.shape_mode:
        draw_shape(surface, state.target_shape, inner, state.target_color)
        caption = "Match color + shape"
    else:
        draw_tile(surface, inner, state.target_color, radius=14)
        caption = "Match this color"

    label = font(FONT_SIZE_MD, bold=True).render(caption, True, COLOR["text"])
    surface.blit(label, label.get_rect(midtop=(SCREEN_W // 2, box.bottom + 6)))


# ── Popup / flash ─────────────────────────────────────────────────────────────

def draw_popup(surface: pygame.Surface, title: str, subtitle: str, accent: RGBColor) -> None:
    """Draw a centered popup card over the game."""
    card = pygame.Rect(0, 0, 260, 120)
    card.center = (SCREEN_W // 2, SCREEN_H // 2)
    shade = pygame.Surface(card.size, pygame.SRCALPHA)
    pygame.draw.rect(shade, with_alpha(COLOR["overlay"], 220), shade.get_rect(), border_radius=22)
    surface.blit(shade, card)
    pygame.draw.rect(surface, accent, card, width=2, border_radius=22)

    head = font(FONT_SIZE_XL, bold=True).render(title, True, COLOR["text"])
    if head.get_width() > card.width - 20:
        head = font(FONT_SIZE_LG, bold=True).render(title, True, COLOR["text"])
    surface.blit(head, head.get_rect(center=(card.centerx, card.top + 44)))
    sub = font(FONT_SIZE_SM).render(subtitle, True, COLOR["text_dim"])
    surface.blit(sub, sub.get_rect(center=(card.centerx, card.top + 86)))


def draw_flash(surface: pygame.Surface, color: RGBColor, alpha: float) -> None:
    """Tint the whole screen. `alpha` 1.0 is the strongest tint."""
    if alpha <= 0.0:
        return
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(with_alpha(color, int(alpha * 90)))
    surface.blit(overlay, (0, 0))


# ── Text field / save panel ───────────────────────────────────────────────────

def draw_text_field(surface: pygame.Surface, rect: pygame.Rect, text: str,
                    placeholder: str, focused: bool) -> pygame.Rect:
    """Draw a single-line text field. A bar caret is shown while focused."""
    pygame.draw.rect(surface, COLOR["overlay"], rect, border_radius=10)
    border = COLOR["text"] if focused else COLOR["panel_border"]
    pygame.draw.rect(surface, border, rect, width=2, border_radius=10)
    shown = text + ("|" if focused else "")
    color = COLOR["text"] if text else COLOR["text_dim"]
    label = font(FONT_SIZE_MD).render(shown if text or focused else placeholder, True, color)
    surface.blit(label, label.get_rect(midleft=(rect.x + 12, rect.centery)))
    return rect


def draw_save_panel(
    surface: pygame.Surface,
    score: int,
    mode: GameMode,
    rank: str,
    name: str,
    name_focused: bool,
) -> dict[str, pygame.Rect]:
    """Draw the game-over sheet with the name field and Save/Skip buttons.

    Returns:
        Rects keyed "name", "save" and "skip".
    """
    overlay = pygame.Surface((SCREEN_W, SCREEN_H), pygame.SRCALPHA)
    overlay.fill(with_alpha(COLOR["overlay"], 200))
    surface.blit(overlay, (0, 0))

    sheet = pygame.Rect(20, 170, SCREEN_W - 40, 280)
    pygame.draw.rect(surface, COLOR["panel"], sheet, border_radius=20)
    pygame.draw.rect(surface, mode.accent, sheet, width=2, border_radius=20)

    blit_centered(surface, "Game Over", FONT_SIZE_XL, COLOR["text"], sheet.top + 36, bold=True)
    blit_centered(surface, rank, FONT_SIZE_LG, mode.accent, sheet.top + 76, bold=True)
    blit_centered(surface, f"Score: {score} - {mode.title}", FONT_SIZE_MD, COLOR["text_dim"],
                  sheet.top + 106)

    name_rect = pygame.Rect(sheet.x + 20, sheet.top + 134, sheet.width - 40, BUTTON_H)
    draw_text_field(surface, name_rect, name, "Name (optional)", name_focused)

    half = (sheet.width - 52) // 2
    skip = pygame.Rect(sheet.x + 20, sheet.top + 200, half, BUTTON_H)
    save = pygame.Rect(skip.right + 12, skip.y, half, BUTTON_H)
    draw_button(surface, skip, font(FONT_SIZE_MD).render("Skip", True, COLOR["text"]))
    draw_button(surface, save, font(FONT_SIZE_MD, bold=True).render("Save Score", True, COLOR["text"]),
                fill=COLOR["pass"], border=COLOR["pass"])
    return {"name": name_rect, "save": save, "skip": skip}
