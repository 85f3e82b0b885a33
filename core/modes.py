"""
core/modes.py — The fixed difficulty table as frozen records.

settings.py holds the raw numbers; this module turns them into GameMode
records once at import time. The set is closed: there is no way to build
a mode at runtime, only to look one up by identifier.

Usage:
    mode = get_mode("moderate")
    mode.grid, mode.cells, mode.round_seconds, mode.session_seconds
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Literal

from settings import MODE_TABLE, MODE_ORDER
from utils.color import RGBColor

# Mode identifiers as saved in leaderboard rows, same set as MODE_ORDER
ModeId = Literal["easy", "moderate", "hard"]


@dataclass(frozen=True)
class GameMode:
    """One row of the difficulty table.

    Attributes:
        id:              Identifier used in saves and lookups ("easy", ...).
        grid:            Side length of the square tile grid.
        round_seconds:   Time allowed per round.
        session_seconds: Total session length.
        title:           Display name.
        accent:          Accent color for cards and popups.
        tip:             One-line hint shown on the mode card.
    """

    id:              str
    grid:            int
    round_seconds:   int
    session_seconds: int
    title:           str
    accent:          RGBColor
    tip:             str

    @property
    def cells(self) -> int:
        return self.grid * self.grid

    @property
    def subtitle(self) -> str:
        return f"{self.grid} x {self.grid} Grid"


MODES: dict[str, GameMode] = {
    mode_id: GameMode(
        id=mode_id,
        grid=row["grid"],
        round_seconds=row["round"],
        session_seconds=row["session"],
        title=row["title"],
        accent=row["accent"],
        tip=row["tip"],
    )
    for mode_id, row in MODE_TABLE.items()
}


def get_mode(mode: GameMode | str) -> GameMode:
    """Resolve a mode identifier to its record. Records pass through.

    Raises:
        KeyError: If the identifier is not in the table.
    """
    if isinstance(mode, GameMode):
        return mode
    return MODES[mode]


def all_modes() -> list[GameMode]:
    """Return every mode in menu order."""
    return [MODES[mode_id] for mode_id in MODE_ORDER]
