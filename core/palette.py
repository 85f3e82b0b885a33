"""
core/palette.py — Distinct color generation for a round.

Colors are spread evenly around the hue wheel and only saturation and
brightness are jittered. Pure random sampling tends to produce pairs that
look identical on screen; fixed hue spacing avoids that while the jitter
keeps neighbouring hues from looking like a smooth gradient.

The result is in hue order. Callers shuffle it and pop from the front.
"""

from __future__ import annotations
import random

from settings import (
    PALETTE_MIN_SIZE, PALETTE_MARGIN,
    SATURATION_BAND, BRIGHTNESS_BAND,
)
from utils.color import RGBColor, hsv_to_rgb


def palette_size(cells: int) -> int:
    """Number of colors to generate for a grid with `cells` tiles."""
    return max(cells + PALETTE_MARGIN, PALETTE_MIN_SIZE)


def generate_distinct_colors(count: int, rng: random.Random | None = None) -> list[RGBColor]:
    """Return `count` colors with evenly spaced hues.

    Args:
        count: Number of colors. Zero or negative yields an empty list.
        rng:   Random source for the saturation/brightness jitter.
               Defaults to a fresh unseeded random.Random.

    Returns:
        List of RGB tuples, hue i/count for i in [0, count).
    """
    rng = rng or random.Random()
    colors = []
    for i in range(max(0, count)):
        colors.append(hsv_to_rgb(
            i / count,
            rng.uniform(*SATURATION_BAND),
            rng.uniform(*BRIGHTNESS_BAND),
        ))
    return colors
