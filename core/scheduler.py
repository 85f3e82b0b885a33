"""
core/scheduler.py — Deferred callbacks scoped to rounds and sessions.

Popups, flashes and the save panel all fire a short time after the event
that caused them. Each callback can be tied to a named scope ("round",
"session", "popup", ...). invalidate(scope) bumps that scope's generation;
any pending callback that captured an older generation is dropped when it
comes due instead of acting on a round or session that no longer exists.

The scheduler never runs anything by itself. The owner calls poll(now)
from the main loop, so callbacks run on the same thread as everything else.

Usage:
    scheduler = DeferredScheduler()
    scheduler.call_later(0.25, clear_wrong_flash, scope="round", now=now)
    scheduler.invalidate("round")       # new round: the flash is stale
    scheduler.poll(now + 1.0)           # stale callback is skipped
"""

from __future__ import annotations
import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

logger = logging.getLogger(__name__)


@dataclass(order=True)
class Deferred:
    """A pending callback. Ordered by due time, then by insertion order."""
    due:        float
    seq:        int
    callback:   Callable[[], None] = field(compare=False)
    scope:      str | None         = field(compare=False, default=None)
    generation: int                = field(compare=False, default=0)


class DeferredScheduler:
    """Min-heap of deferred callbacks with per-scope generation tokens.

    Attributes:
        _clock:       Time source used when callers omit `now`.
        _queue:       Heap of Deferred entries.
        _generations: Current generation per scope name.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: list[Deferred] = []
        self._generations: dict[str, int] = {}
        self._seq = itertools.count()

    def call_later(
        self,
        delay: float,
        callback: Callable[[], None],
        scope: str | None = None,
        now: float | None = None,
    ) -> None:
        """Schedule `callback` to run `delay` seconds from `now`.

        Args:
            delay:    Seconds until due. Negative values mean "next poll".
            callback: Zero-argument callable.
            scope:    Optional scope name; the callback is dropped if the
                      scope is invalidated before it is due.
            now:      Current clock value. Defaults to the scheduler clock.
        """
        now = self._clock() if now is None else now
        entry = Deferred(
            due=now + max(0.0, delay),
            seq=next(self._seq),
            callback=callback,
            scope=scope,
            generation=self.generation(scope),
        )
        heapq.heappush(self._queue, entry)

    def generation(self, scope: str | None) -> int:
        if scope is None:
            return 0
        return self._generations.get(scope, 0)

    def invalidate(self, *scopes: str) -> None:
        """Expire every pending callback captured under the given scopes."""
        for scope in scopes:
            self._generations[scope] = self._generations.get(scope, 0) + 1

    def is_stale(self, entry: Deferred) -> bool:
        return entry.generation != self.generation(entry.scope)

    def poll(self, now: float | None = None) -> int:
        """Run every callback due at or before `now`.

        Callbacks scheduled from inside a callback run on a later poll
        unless they are already due.

        Returns:
            Number of callbacks actually executed.
        """
        now = self._clock() if now is None else now
        ran = 0
        while self._queue and self._queue[0].due <= now:
            entry = heapq.heappop(self._queue)
            if self.is_stale(entry):
                continue
            entry.callback()
            ran += 1
        return ran

