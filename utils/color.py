"""
utils/color.py — Color helpers for ColorNova.

Tile colors travel through the game as plain RGB tuples so they can be
compared and hashed. pygame.Color is used only for the HSV conversion,
which keeps the palette math in one well-tested place.
"""

from typing import Tuple

import pygame

RGBColor = Tuple[int, int, int]


def clamp(value: int, lo: int = 0, hi: int = 255) -> int:
    """Clamp an integer value to [lo, hi]."""
    return max(lo, min(hi, value))


def hsv_to_rgb(hue: float, saturation: float, brightness: float) -> RGBColor:
    """Convert unit-range HSV components to an RGB tuple.

    Args:
        hue:        Hue in [0.0, 1.0). Wraps around past 1.0.
        saturation: Saturation in [0.0, 1.0].
        brightness: Value/brightness in [0.0, 1.0].

    Returns:
        RGB tuple with channels in 0–255.
    """
    color = pygame.Color(0, 0, 0)
    # pygame expects h in [0, 360], s/v/a in [0, 100]
    color.hsva = (
        (hue % 1.0) * 360.0,
        max(0.0, min(1.0, saturation)) * 100.0,
        max(0.0, min(1.0, brightness)) * 100.0,
        100.0,
    )
    return (color.r, color.g, color.b)


def lighter(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return a lightened copy of an RGB color (tile bevel highlight)."""
    r, g, b = color
    return (clamp(r + amount), clamp(g + amount), clamp(b + amount))


def darker(color: RGBColor, amount: int = 40) -> RGBColor:
    """Return a darkened copy of an RGB color (tile bevel shadow)."""
    r, g, b = color
    return (clamp(r - amount), clamp(g - amount), clamp(b - amount))


def with_alpha(color: RGBColor, alpha: int) -> Tuple[int, int, int, int]:
    """Append an alpha channel for drawing on SRCALPHA surfaces."""
    return (color[0], color[1], color[2], clamp(alpha))
