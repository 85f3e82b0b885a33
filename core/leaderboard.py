"""
core/leaderboard.py — Best-score leaderboard for ColorNova.

The leaderboard keeps at most one entry per (player, mode). Player names
compare case-insensitively, so "alice" and "ALICE" on easy are the same
player. A new submission either adds an entry or raises the existing
entry's score; it never lowers one.

After every submission the whole collection is re-sorted by score
(highest first), cut down to LEADERBOARD_CAP entries and written back to
the key/value store as a JSON array:

    [{"id": "...", "name": "alice", "score": 40, "mode": "easy",
      "date": "2026-10-18T12:00:00+00:00"}, ...]

Rows are validated with pydantic on load. Anything that does not parse
into that shape loads as an empty leaderboard; the game keeps running and
the bad blob is overwritten on the next save. Rows that repeat a
(player, mode) pair are merged into the best of them.

Usage:
    store = LeaderboardStore(JsonFileStore(PREFS_PATH))
    store.upsert_best_score("alice", 40, "easy")
    rows = store.top_entries("easy")
"""

from __future__ import annotations
import json
import logging
import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from core.modes import GameMode, ModeId, get_mode
from core.storage import KeyValueStore
from settings import (
    DEFAULT_PLAYER, LEADERBOARD_CAP, LEADERBOARD_KEY, LEADERBOARD_TOP_N,
)

logger = logging.getLogger(__name__)


def _utcnow() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def normalize_name(name: str | None) -> str:
    """Trim whitespace; blank or missing names become DEFAULT_PLAYER."""
    clean = (name or "").strip()
    return clean or DEFAULT_PLAYER


class ScoreEntry(BaseModel):
    """One persisted leaderboard row.

    Attributes:
        id:    Stable unique id, kept when the score is raised.
        name:  Player name, trimmed and non-empty.
        score: Best score for this player and mode. Never negative.
        mode:  Mode identifier ("easy", "moderate", "hard").
        date:  ISO-8601 UTC timestamp of the last improvement.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id:    str = Field(min_length=1)
    name:  str = Field(min_length=1)
    score: int = Field(ge=0, strict=True)
    mode:  ModeId
    date:  str

    @classmethod
    def create(cls, name: str, score: int, mode: str) -> ScoreEntry:
        return cls(id=str(uuid.uuid4()), name=name, score=score, mode=mode, date=_utcnow())

    def player_key(self) -> tuple[str, str]:
        return self.name.lower(), self.mode


_ENTRY_LIST = TypeAdapter(list[ScoreEntry])


def _by_score(entries: list[ScoreEntry]) -> list[ScoreEntry]:
    return sorted(entries, key=lambda e: e.score, reverse=True)


class LeaderboardStore:
    """Persisted best-score collection.

    The store is loaded once on construction and written back after every
    upsert. It is the only writer of its key.

    Attributes:
        _storage: KeyValueStore holding the JSON blob.
        _key:     Key the blob is stored under.
        _entries: Current collection, sorted by score descending.
    """

    def __init__(self, storage: KeyValueStore, key: str = LEADERBOARD_KEY) -> None:
        self._storage = storage
        self._key = key
        self._entries: list[ScoreEntry] = []
        self.load()

    @property
    def entries(self) -> tuple[ScoreEntry, ...]:
        return tuple(self._entries)

    def load(self) -> None:
        """Rehydrate from storage. Corrupt data yields an empty collection."""
        self._entries = self._decode(self._storage.get(self._key))
        logger.debug("Loaded %d leaderboard entries", len(self._entries))

    def _decode(self, blob: str | None) -> list[ScoreEntry]:
        if blob is None:
            return []
        try:
            rows = _ENTRY_LIST.validate_json(blob)
        except (ValidationError, ValueError, RecursionError) as exc:
            logger.warning("Discarding corrupt leaderboard data: %s", exc)
            return []

        best: dict[tuple[str, str], ScoreEntry] = {}
        for row in rows:
            key = row.player_key()
            if key not in best or row.score > best[key].score:
                best[key] = row
        if len(best) < len(rows):
            logger.warning("Merged %d duplicate leaderboard rows", len(rows) - len(best))
        return _by_score(list(best.values()))[:LEADERBOARD_CAP]

    def _persist(self) -> None:
        blob = json.dumps([entry.model_dump() for entry in self._entries], ensure_ascii=False)
        self._storage.set(self._key, blob)

    def upsert_best_score(self, name: str | None, score: int, mode: GameMode | str) -> ScoreEntry:
        """Record a finished session's score for a player.

        Args:
            name:  Player name. Trimmed; blank becomes DEFAULT_PLAYER.
            score: Final session score. Negative values are clamped to 0.
            mode:  GameMode record or identifier.

        Returns:
            The stored entry for this player and mode after the update. It
            can have dropped off the capped list if the board is full of
            higher scores, in which case it is returned but not stored.
        """
        final_name = normalize_name(name)
        mode_id = get_mode(mode).id
        score = max(0, int(score))

        key = (final_name.lower(), mode_id)
        index = next((i for i, e in enumerate(self._entries) if e.player_key() == key), None)
        if index is None:
            result = ScoreEntry.create(final_name, score, mode_id)
            self._entries.append(result)
            logger.info("New leaderboard entry: %s %s %d", final_name, mode_id, score)
        elif score > self._entries[index].score:
            result = self._entries[index].model_copy(
                update={"name": final_name, "score": score, "date": _utcnow()},
            )
            self._entries[index] = result
            logger.info("Raised best score: %s %s %d", final_name, mode_id, score)
        else:
            result = self._entries[index]

        self._entries = _by_score(self._entries)[:LEADERBOARD_CAP]
        self._persist()
        return result

    def top_entries(self, mode: GameMode | str | None = None) -> list[ScoreEntry]:
        """Return up to LEADERBOARD_TOP_N entries, best first.

        Args:
            mode: Restrict to one mode. None returns all modes mixed.
        """
        rows = self._entries
        if mode is not None:
            mode_id = get_mode(mode).id
            rows = [e for e in rows if e.mode == mode_id]
        return _by_score(rows)[:LEADERBOARD_TOP_N]
