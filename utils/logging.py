"""
utils/logging.py — Logging setup for ColorNova.

Every module logs through logging.getLogger(__name__). main.py calls
setup_logging() once at startup to point the root logger at stdout and,
on desktop builds, at a per-launch file under LOG_DIR:

    ~/.colornova/logs/colornova_2026-10-18_12-00-00.log

Only the newest LOG_KEEP launch files are kept. The level comes from
COLORNOVA_LOG_LEVEL, so an unknown name there must not stop the game from
starting; it falls back to INFO with a warning.
"""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from settings import LOG_KEEP

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
LOG_FILE_PREFIX = "colornova_"
LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def resolve_level(level: int | str) -> int | None:
    """Turn a level number or name ("debug", "INFO") into a number.

    Returns None for names the logging module does not know.
    """
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    return value if isinstance(value, int) else None


def prune_logs(log_dir: Path, keep: int = LOG_KEEP) -> list[Path]:
    """Delete all but the `keep` newest launch files. Returns what was removed.

    Timestamped names sort chronologically, so no stat() calls are needed.
    """
    files = sorted(log_dir.glob(f"{LOG_FILE_PREFIX}*.log"))
    stale = files[:-keep] if keep > 0 else files
    removed = []
    for path in stale:
        try:
            path.unlink()
        except OSError:
            continue
        removed.append(path)
    return removed


def _open_log_file(log_dir: Path, formatter: logging.Formatter) -> logging.FileHandler:
    log_dir.mkdir(parents=True, exist_ok=True)
    prune_logs(log_dir, keep=LOG_KEEP - 1)
    stamp = datetime.now(tz=timezone.utc).strftime(LOG_FILE_TIMESTAMP_FORMAT)
    handler = logging.FileHandler(log_dir / f"{LOG_FILE_PREFIX}{stamp}.log", encoding="utf-8")
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    log_dir: Path | str | None = None,
    level: int | str = logging.INFO,
) -> Path | None:
    """Route the root logger to stdout and, optionally, a launch file.

    Calling it again swaps the handlers instead of adding more.

    Args:
        log_dir: Directory for launch files. None logs to stdout only,
                 which is also the fallback when the directory is not
                 writable.
        level:   Level number or name, e.g. ``logging.DEBUG`` or ``"debug"``.

    Returns:
        Path of the launch file, or None when logging to stdout only.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    resolved = resolve_level(level)
    root_logger.setLevel(logging.INFO if resolved is None else resolved)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if resolved is None:
        root_logger.warning("Unknown log level %r, using INFO", level)

    if log_dir is None:
        return None
    try:
        file_handler = _open_log_file(Path(log_dir), formatter)
    except OSError:
        root_logger.warning("Cannot write logs to %s, logging to stdout only", log_dir)
        return None
    root_logger.addHandler(file_handler)
    return Path(file_handler.baseFilename)
