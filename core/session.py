"""
core/session.py — Score and streak state for one ColorNova session.

Session tracks the mutable numbers that persist across rounds:
    - Score
    - Streak (consecutive correct taps)

and applies the scoring rules:
    - 1 point per correct tap
    - Speed Bonus (+3) if the tap came within 2 s of the round starting,
      otherwise Quick Bonus (+2) within 5 s
    - Streak (+2) when the streak reaches exactly 3,
      HOT STREAK! (+5) when it reaches exactly 5

Session does NOT own the timers, the round, or any rendering. game.py is
the sole caller.

Usage:
    session = Session(mode, shape_mode=False)

    # on correct tap:
    gained, bonuses = session.register_correct(elapsed=1)

    # on wrong tap or round timeout:
    session.register_miss()

    # at session end:
    rank = rank_for(session.score)
"""

from __future__ import annotations
from dataclasses import dataclass

from core.modes import GameMode
from settings import (
    BASE_POINTS, SPEED_BONUS, QUICK_BONUS, STREAK_BONUSES, RANK_TIERS,
)


@dataclass(frozen=True)
class Bonus:
    """One line of a correct-tap breakdown, e.g. ("Speed Bonus!", 3)."""
    title:  str
    points: int

    @property
    def subtitle(self) -> str:
        return f"+{self.points} Points"


@dataclass(frozen=True)
class Rank:
    """End-of-session tier for a final score."""
    title:   str
    message: str


def rank_for(score: int) -> Rank:
    """Map a final score to its rank tier.

    Tiers: 0–9 Rookie, 10–24 Explorer, 25–44 Star Runner, 45–69 Nova Pro,
    70+ Galaxy Legend. Negative scores cannot occur but rank as Rookie.
    """
    for floor, title, message in RANK_TIERS:
        if score >= floor:
            return Rank(title, message)
    _, title, message = RANK_TIERS[-1]
    return Rank(title, message)


def speed_bonus(elapsed: float) -> Bonus | None:
    """Return the speed bonus earned for a tap `elapsed` seconds into a round."""
    for title, points, max_elapsed in (SPEED_BONUS, QUICK_BONUS):
        if elapsed <= max_elapsed:
            return Bonus(title, points)
    return None


class Session:
    """Mutable scoring state for one session.

    Attributes:
        mode:       GameMode being played.
        shape_mode: True if tiles match on color + shape.
        score:      Points earned so far. Never negative.
        streak:     Consecutive correct taps. Resets on a miss or timeout.
    """

    def __init__(self, mode: GameMode, shape_mode: bool = False) -> None:
        self.mode = mode
        self.shape_mode = shape_mode
        self.score: int = 0
        self.streak: int = 0

    def register_correct(self, elapsed: float) -> tuple[int, list[Bonus]]:
        """Record a correct tap and return what it earned.

        The speed bonus is judged before the streak increments; streak
        bonuses fire only on the exact tap that reaches 3 or 5.

        Args:
            elapsed: Whole seconds since the round started.

        Returns:
            (points gained including base, bonuses in award order).
        """
        bonuses = []
        bonus = speed_bonus(max(0, elapsed))
        if bonus:
            bonuses.append(bonus)

        self.streak += 1
        if self.streak in STREAK_BONUSES:
            bonuses.append(Bonus(*STREAK_BONUSES[self.streak]))

        gained = BASE_POINTS + sum(b.points for b in bonuses)
        self.score += gained
        return gained, bonuses

    def register_miss(self) -> None:
        """Record a wrong tap or round timeout. Only the streak is affected."""
        self.streak = 0
