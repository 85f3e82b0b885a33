"""
renderer/grid.py — Tile grid layout and hit detection for ColorNova.

TileGrid turns a grid side length into pixel rectangles and back:
    - Computing tile positions inside the square grid area
    - Hit detection from native game coordinates to a tile index
    - Rendering a RoundState's tiles, with optional shape glyphs and the
      wrong-tap outline

Indexes are row-major, the same order RoundState.tiles uses, so the index
returned by hit_test() can go straight to GameEngine.tap_tile().

The grid is always centered horizontally within the 360px game width.
Larger grids use smaller gaps so the tiles stay tappable on 7x7.
"""

from __future__ import annotations

import pygame

from core.round_factory import RoundState
from renderer.shapes import draw_shape, draw_tile
from settings import COLOR, GRID_AREA_W, GRID_GAP, GRID_TOP, SCREEN_W

# Shape glyph size relative to the tile
_GLYPH_RATIO = 0.42


class TileGrid:
    """Layout for an NxN grid of square tiles.

    Attributes:
        size:     Tiles per row/column.
        gap:      Pixels between adjacent tiles.
        tile:     Tile edge length in pixels.
        origin_x: X of the top-left tile.
        origin_y: Y of the top-left tile.
    """

    def __init__(self, size: int, top: int = GRID_TOP, area_w: int = GRID_AREA_W) -> None:
        """Compute tile size and origin for a `size` x `size` grid.

        Args:
            size:   Grid side length (3, 5 or 7).
            top:    Y coordinate of the grid area.
            area_w: Width (and height) of the square area to fill.
        """
        self.size = size
        self.gap = GRID_GAP.get(size, 6)
        self.tile = (area_w - (size - 1) * self.gap) // size

        grid_w = size * self.tile + (size - 1) * self.gap
        self.origin_x = (SCREEN_W - grid_w) // 2
        self.origin_y = top

    @property
    def cells(self) -> int:
        return self.size * self.size

    def tile_rect(self, index: int) -> pygame.Rect:
        """Return the rect of the tile at row-major `index`."""
        row, col = divmod(index, self.size)
        x = self.origin_x + col * (self.tile + self.gap)
        y = self.origin_y + row * (self.tile + self.gap)
        return pygame.Rect(x, y, self.tile, self.tile)

    def bounds(self) -> pygame.Rect:
        span = self.size * self.tile + (self.size - 1) * self.gap
        return pygame.Rect(self.origin_x, self.origin_y, span, span)

    def hit_test(self, gx: int, gy: int) -> int | None:
        """Return the index of the tile under a game coordinate, or None.

        Points in the gaps between tiles and outside the grid return None.
        """
        if not self.bounds().collidepoint(gx, gy):
            return None
        pitch = self.tile + self.gap
        col, col_off = divmod(gx - self.origin_x, pitch)
        row, row_off = divmod(gy - self.origin_y, pitch)
        if col_off >= self.tile or row_off >= self.tile:
            return None
        return row * self.size + col

    def render(self, surface: pygame.Surface, state: RoundState, show_wrong: bool = False) -> None:
        """Draw every tile of `state`.

        Args:
            surface:    Native game surface.
            state:      Round to draw. Must have `cells` tiles.
            show_wrong: Outline every non-matching tile in the fail color.
        """
        glyph = int(self.tile * _GLYPH_RATIO)
        for index, tile in enumerate(state.tiles):
            rect = self.tile_rect(index)
            outline = COLOR["fail"] if show_wrong and not state.matches(index) else None
            draw_tile(surface, rect, tile.color, radius=max(4, self.tile // 8), outline=outline)
            if state.shape_mode:
                glyph_rect = pygame.Rect(0, 0, glyph, glyph)
                glyph_rect.center = rect.center
                draw_shape(surface, tile.shape, glyph_rect, COLOR["shape_ink"])
