"""
core/events.py — Notifications emitted by the game engine.

The engine knows nothing about pygame. Anything that wants to react to
the game (the App controller, tests) subscribes a
callable and receives these frozen dataclasses.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Union

from core.round_factory import RoundState
from core.session import Bonus


@dataclass(frozen=True)
class RoundChanged:
    round: RoundState
    round_number: int


@dataclass(frozen=True)
class Tick:
    round_time_left: int
    session_time_left: int


@dataclass(frozen=True)
class Correct:
    index: int
    gained: int
    bonuses: tuple[Bonus, ...]
    score: int
    streak: int


@dataclass(frozen=True)
class Incorrect:
    index: int
    streak: int


@dataclass(frozen=True)
class TimesUp:
    title: str = "Time's Up!"
    message: str = "Round restarted - keep going!"


@dataclass(frozen=True)
class SessionEnded:
    rank: str
    message: str
    score: int
    mode: str


GameEvent = Union[RoundChanged, Tick, Correct, Incorrect, TimesUp, SessionEnded]
Listener = Callable[[GameEvent], None]
