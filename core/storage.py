"""
core/storage.py — Key/value preference storage for ColorNova.

The leaderboard is saved the way a mobile app saves user defaults: one
string value under a fixed key. KeyValueStore is the seam; two backends
implement it:

    JsonFileStore: a single JSON object on disk (prefs.json). Writes go
                   through a temp file and an atomic rename so a crash
                   mid-write never leaves a truncated file behind.
    MemoryStore:   a dict, for tests and for running without a disk.

Neither backend raises on I/O trouble. A file that cannot be read or
parsed loads as empty; a failed write is logged and the in-memory value
still wins for the rest of the process.
"""

from __future__ import annotations
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Protocol for string preferences keyed by name."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Dict-backed KeyValueStore. Nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """KeyValueStore persisted as one JSON object in a file.

    The file is read once on construction. Every set() rewrites the whole
    file, which is fine for a handful of small keys.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._values: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError:
            logger.exception("Cannot read preferences file %s", self._path)
            return {}
        except UnicodeDecodeError:
            logger.warning("Preferences file %s is not UTF-8, starting empty", self._path)
            return {}

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Preferences file %s is not valid JSON, starting empty", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file %s is not a JSON object, starting empty", self._path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        try:
            self._write()
        except OSError:
            logger.exception("Failed to write preferences file %s", self._path)

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self._path.parent), suffix=".tmp", prefix=".prefs_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                json.dump(self._values, f, ensure_ascii=False, indent=2)
                f.flush()
                os.fsync(f.fileno())
            Path(tmp_path).replace(self._path)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.debug("Saved preferences to %s", self._path)
