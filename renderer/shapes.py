"""
renderer/shapes.py — Vector drawing primitives for ColorNova.

Every visual element is built from pygame.draw calls: no sprites, no
image files. This module holds the reusable pieces:

    - draw_tile     a rounded, bevelled color tile
    - draw_shape    circle / diamond / triangle / star glyphs
    - draw_bar      a horizontal progress bar
    - draw_button   a rounded button with a centered label

Coordinate system: native 360x640 game space. Scaler handles the rest.
"""

from __future__ import annotations
import math

import pygame

from core.round_factory import Shape
from settings import COLOR
from utils.color import RGBColor, darker, lighter

# Points on the star glyph and inner/outer radius ratio
_STAR_POINTS = 5
_STAR_INNER_RATIO = 0.45


def shape_points(shape: Shape, rect: pygame.Rect) -> list[tuple[float, float]]:
    """Return polygon vertices for a polygonal shape inside `rect`.

    Circles are not polygons; callers draw them with pygame.draw.circle.
    """
    cx, cy = rect.center
    w, h = rect.width, rect.height

    if shape == Shape.DIAMOND:
        return [(cx, rect.top), (rect.right, cy), (cx, rect.bottom), (rect.left, cy)]

    if shape == Shape.TRIANGLE:
        return [(cx, rect.top), (rect.right, rect.bottom), (rect.left, rect.bottom)]

    if shape == Shape.STAR:
        outer = min(w, h) / 2
        inner = outer * _STAR_INNER_RATIO
        points = []
        for i in range(_STAR_POINTS * 2):
            radius = outer if i % 2 == 0 else inner
            angle = -math.pi / 2 + i * math.pi / _STAR_POINTS
            points.append((cx + math.cos(angle) * radius, cy + math.sin(angle) * radius))
        return points

    raise ValueError(f"{shape} is not drawn as a polygon")


def draw_shape(surface: pygame.Surface, shape: Shape, rect: pygame.Rect, color) -> None:
    """Draw a filled shape glyph fitted to `rect`."""
    if shape == Shape.CIRCLE:
        pygame.draw.circle(surface, color, rect.center, min(rect.width, rect.height) // 2)
    else:
        pygame.draw.polygon(surface, color, shape_points(shape, rect))


def draw_tile(
    surface: pygame.Surface,
    rect: pygame.Rect,
    color: RGBColor,
    radius: int = 8,
    outline: RGBColor | None = None,
) -> None:
    """Draw a color tile with a 2px bevel and optional outline.

    The bevel is a lighter rim on the top-left and a darker one on the
    bottom-right, which keeps very dark and very light tiles readable
    against the background.

    Args:
        surface: Target surface.
        rect:    Tile bounds.
        color:   Fill color.
        radius:  Corner radius in pixels.
        outline: Optional 3px outline color (wrong-tap feedback).
    """
    shadow = rect.move(2, 2)
    pygame.draw.rect(surface, darker(color, 60), shadow, border_radius=radius)
    pygame.draw.rect(surface, lighter(color, 30), rect, border_radius=radius)
    pygame.draw.rect(surface, color, rect.inflate(-4, -4), border_radius=max(0, radius - 2))
    if outline is not None:
        pygame.draw.rect(surface, outline, rect.inflate(6, 6), width=3, border_radius=radius + 3)


def draw_bar(
    surface: pygame.Surface,
    rect: pygame.Rect,
    fill: float,
    fill_color: RGBColor,
    bg_color: RGBColor = COLOR["bar_bg"],
) -> None:
    """Draw a left-to-right progress bar. `fill` is clamped to [0, 1]."""
    fill = max(0.0, min(1.0, fill))
    radius = rect.height // 2
    pygame.draw.rect(surface, bg_color, rect, border_radius=radius)
    filled_w = int(rect.width * fill)
    if filled_w > 0:
        pygame.draw.rect(surface, fill_color, (rect.x, rect.y, filled_w, rect.height),
                         border_radius=radius)


def draw_button(
    surface: pygame.Surface,
    rect: pygame.Rect,
    label: pygame.Surface,
    fill: RGBColor = COLOR["panel"],
    border: RGBColor = COLOR["panel_border"],
) -> pygame.Rect:
    """Draw a rounded button with a pre-rendered label. Returns `rect`."""
    pygame.draw.rect(surface, fill, rect, border_radius=12)
    pygame.draw.rect(surface, border, rect, width=1, border_radius=12)
    surface.blit(label, label.get_rect(center=rect.center))
    return rect
