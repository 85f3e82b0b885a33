"""
core/round_factory.py — Round generation for ColorNova.

A round is a target (color, optional shape) plus a grid of tiles in which
exactly one tile matches the target. The factory follows four rules:

    1. Palette   — a shuffled palette sized well above the cell count is
                   consumed front-to-back, so distractor colors never repeat.
    2. Placement — the matching tile lands on a uniformly random index.
    3. Collision — in shape mode a distractor that would reproduce the
                   target (color, shape) pair gets a different shape.
    4. Verify    — the finished grid is counted; anything other than one
                   match is discarded and regenerated.

game.py calls generate() once per round and never mutates the result.

Design note:
    The factory owns its random.Random. Tests seed it directly, which makes
    every round reproducible without touching global random state.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum

from core.modes import GameMode, get_mode
from core.palette import generate_distinct_colors, palette_size
from utils.color import RGBColor

logger = logging.getLogger(__name__)

# Upper bound on regeneration attempts; a single retry is already rare
_MAX_ATTEMPTS = 16


class Shape(Enum):
    """Glyphs a tile can carry in shape mode."""
    CIRCLE   = "circle"
    DIAMOND  = "diamond"
    TRIANGLE = "triangle"
    STAR     = "star"


SHAPES: tuple[Shape, ...] = tuple(Shape)

# Decorative shape used when shape mode is off; ignored by matching
DEFAULT_SHAPE = Shape.CIRCLE


@dataclass(frozen=True)
class Tile:
    color: RGBColor
    shape: Shape = DEFAULT_SHAPE


@dataclass(frozen=True)
class RoundState:
    """One generated round.

    Attributes:
        target_color:  Color the player is looking for.
        target_shape:  Shape the player is looking for (shape mode only).
        tiles:         Tiles in row-major order, len == grid * grid.
        correct_index: Index of the single matching tile.
        shape_mode:    True if shape must match as well as color.
    """

    target_color:  RGBColor
    target_shape:  Shape
    tiles:         tuple[Tile, ...]
    correct_index: int
    shape_mode:    bool = False

    @property
    def target(self) -> Tile:
        return Tile(self.target_color, self.target_shape)

    def tile_matches(self, tile: Tile) -> bool:
        """Apply the active match predicate to a tile."""
        if self.shape_mode:
            return tile.color == self.target_color and tile.shape == self.target_shape
        return tile.color == self.target_color

    def matches(self, index: int) -> bool:
        """Return True if the tile at `index` matches. Out of range is False."""
        if not 0 <= index < len(self.tiles):
            return False
        return self.tile_matches(self.tiles[index])

    def match_count(self) -> int:
        return sum(1 for tile in self.tiles if self.tile_matches(tile))


class RoundFactory:
    """Builds RoundState instances for a mode.

    Attributes:
        rng: Random source for palette jitter, shuffling and placement.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng or random.Random()

    def generate(self, mode: GameMode | str, shape_mode: bool = False) -> RoundState:
        """Return a fresh round with exactly one matching tile.

        Args:
            mode:       GameMode record or identifier.
            shape_mode: True to require color + shape matches.

        Returns:
            A RoundState with exactly one matching tile.

        Raises:
            RuntimeError: If no valid grid could be built. This only happens
                          if the palette collapses to fewer distinct colors
                          than there are cells.
        """
        mode = get_mode(mode)
        for attempt in range(1, _MAX_ATTEMPTS + 1):
            state = self._build(mode, shape_mode)
            if state.match_count() == 1:
                return state
            logger.debug("Discarding %s round with %d matches (attempt %d)",
                         mode.id, state.match_count(), attempt)
        raise RuntimeError(f"Could not generate a single-match round for mode {mode.id!r}")

    def _build(self, mode: GameMode, shape_mode: bool) -> RoundState:
        cells = mode.cells
        palette = generate_distinct_colors(palette_size(cells), self.rng)
        self.rng.shuffle(palette)

        target_color = palette.pop(0)
        target_shape = self.rng.choice(SHAPES)
        correct_index = self.rng.randrange(cells)

        tiles = []
        for i in range(cells):
            if i == correct_index:
                tiles.append(Tile(target_color, target_shape if shape_mode else DEFAULT_SHAPE))
                continue

            color = palette.pop(0)
            if not shape_mode:
                tiles.append(Tile(color, DEFAULT_SHAPE))
                continue

            shape = self.rng.choice(SHAPES)
            if color == target_color and shape == target_shape:
                shape = self.rng.choice([s for s in SHAPES if s != target_shape])
            tiles.append(Tile(color, shape))

        return RoundState(
            target_color=target_color,
            target_shape=target_shape,
            tiles=tuple(tiles),
            correct_index=correct_index,
            shape_mode=shape_mode,
        )
