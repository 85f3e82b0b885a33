"""Tests for tile grid layout and hit detection."""

import pytest

from core.modes import all_modes
from renderer.grid import TileGrid
from settings import SCREEN_H, SCREEN_W


class TestTileGrid:
    @pytest.mark.parametrize("size", [3, 5, 7])
    def test_center_of_each_tile_hits_its_index(self, size):
        grid = TileGrid(size)

        for index in range(grid.cells):
            assert grid.hit_test(*grid.tile_rect(index).center) == index

    def test_row_major_order(self):
        grid = TileGrid(3)

        assert grid.tile_rect(1).y == grid.tile_rect(0).y
        assert grid.tile_rect(1).x > grid.tile_rect(0).x
        assert grid.tile_rect(3).x == grid.tile_rect(0).x
        assert grid.tile_rect(3).y > grid.tile_rect(0).y

    def test_gap_between_tiles_misses(self):
        grid = TileGrid(3)
        first = grid.tile_rect(0)

        assert grid.hit_test(first.right + grid.gap // 2, first.centery) is None

    def test_outside_grid_misses(self):
        grid = TileGrid(5)
        bounds = grid.bounds()

        assert grid.hit_test(bounds.left - 1, bounds.top) is None
        assert grid.hit_test(bounds.right, bounds.bottom) is None
        assert grid.hit_test(-50, -50) is None

    @pytest.mark.parametrize("mode", all_modes(), ids=lambda m: m.id)
    def test_grid_fits_on_screen(self, mode):
        grid = TileGrid(mode.grid)
        bounds = grid.bounds()

        assert bounds.left >= 0
        assert bounds.right <= SCREEN_W
        assert bounds.bottom <= SCREEN_H
        assert grid.tile >= 30

    def test_grid_is_centered(self):
        bounds = TileGrid(7).bounds()

        assert abs(bounds.centerx - SCREEN_W // 2) <= 1
