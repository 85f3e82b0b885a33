"""
core/timer.py — Deadline countdowns for ColorNova.

The engine runs two of these: one per round and one per session. A
Countdown stores an absolute deadline rather than accumulating frame
deltas, so a late or skipped tick never drifts the clock. Times are plain
floats from whatever clock the caller uses (time.monotonic in the game,
hand-picked numbers in tests).

Countdown owns only its own state. game.py polls remaining() on every
tick and reacts when it reaches zero.

Usage:
    countdown = Countdown()
    countdown.start(now, seconds=15)

    # each tick:
    left = countdown.remaining(now)     # whole seconds, ceil, >= 0
    fill = countdown.fill(now)          # 0.0–1.0 for the progress bar
"""

import math


class Countdown:
    """A restartable countdown to an absolute deadline.

    Attributes:
        _duration: Length of the current countdown in seconds.
        _deadline: Clock value at which the countdown reaches zero.
    """

    def __init__(self) -> None:
        """Initialise an already-expired countdown."""
        self._duration: float = 0.0
        self._deadline: float = 0.0

    def start(self, now: float, seconds: float) -> None:
        """Start (or restart) the countdown.

        Args:
            now:     Current clock value.
            seconds: Countdown length. Negative values are treated as zero.
        """
        self._duration = max(0.0, float(seconds))
        self._deadline = now + self._duration

    def remaining(self, now: float) -> int:
        """Return whole seconds left, rounded up and floored at zero.

        A countdown started with 15 seconds reports 15 until a full second
        has passed, then 14, and so on; it reports 0 only once the deadline
        itself is reached.
        """
        return max(0, math.ceil(self._deadline - now))

    def remaining_exact(self, now: float) -> float:
        return max(0.0, self._deadline - now)

    def fill(self, now: float) -> float:
        """Return the remaining time as a fraction of the total duration.

        Returns:
            Float in [0.0, 1.0]. 1.0 = full time left, 0.0 = expired.
        """
        if self._duration <= 0:
            return 0.0
        return max(0.0, min(1.0, self.remaining_exact(now) / self._duration))

