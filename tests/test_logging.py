"""Tests for root logger setup."""

import logging
import sys

import pytest

from settings import LOG_KEEP
from utils.logging import LOG_FILE_PREFIX, prune_logs, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in saved_handlers and type(handler) in (logging.StreamHandler, logging.FileHandler):
            handler.close()
            root.removeHandler(handler)
    root.setLevel(saved_level)


class TestSetupLogging:
    def test_stdout_only(self):
        result = setup_logging()

        root = logging.getLogger()
        assert result is None
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stdout

    def test_file_handler_created(self, tmp_path):
        log_dir = tmp_path / "logs"

        result = setup_logging(log_dir, "DEBUG")

        assert result is not None
        assert result.parent == log_dir
        assert result.suffix == ".log"
        assert logging.getLogger().level == logging.DEBUG
        assert any(isinstance(h, logging.FileHandler) for h in logging.getLogger().handlers)

    def test_messages_reach_file(self, tmp_path):
        result = setup_logging(tmp_path, logging.INFO)

        logging.getLogger("colornova.test").info("hello from test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from test" in result.read_text(encoding="utf-8")

    def test_repeated_calls_do_not_stack_handlers(self, tmp_path):
        setup_logging(tmp_path)
        setup_logging(tmp_path)

        assert len(logging.getLogger().handlers) == 2

    def test_unusable_directory_falls_back_to_stdout(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")

        result = setup_logging(blocker / "logs")

        assert result is None
        assert len(logging.getLogger().handlers) == 1

    def test_level_name_is_case_insensitive(self):
        setup_logging(level="debug")

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self, capsys):
        result = setup_logging(level="LOUD")

        assert result is None
        assert logging.getLogger().level == logging.INFO
        assert "Unknown log level 'LOUD'" in capsys.readouterr().out

    def test_launch_file_name(self, tmp_path):
        result = setup_logging(tmp_path)

        assert result.name.startswith(LOG_FILE_PREFIX)

    def test_old_launch_files_are_pruned(self, tmp_path):
        old = [tmp_path / f"{LOG_FILE_PREFIX}2000-01-01_00-00-{i:02d}.log" for i in range(LOG_KEEP + 2)]
        for path in old:
            path.write_text("old")
        unrelated = tmp_path / "notes.txt"
        unrelated.write_text("keep me")

        result = setup_logging(tmp_path)

        remaining = sorted(tmp_path.glob(f"{LOG_FILE_PREFIX}*.log"))
        assert len(remaining) == LOG_KEEP
        assert result in remaining
        assert not old[0].exists()
        assert old[-1].exists()
        assert unrelated.exists()


class TestHelpers:
    @pytest.mark.parametrize(("level", "expected"), [
        (logging.WARNING, logging.WARNING),
        ("warning", logging.WARNING),
        (" Error ", logging.ERROR),
        ("nope", None),
    ])
    def test_resolve_level(self, level, expected):
        assert resolve_level(level) == expected

    def test_prune_logs_keeps_newest(self, tmp_path):
        names = [f"{LOG_FILE_PREFIX}2001-01-0{day}_00-00-00.log" for day in range(1, 5)]
        for name in names:
            (tmp_path / name).write_text("x")

        removed = prune_logs(tmp_path, keep=2)

        assert [p.name for p in removed] == names[:2]
        assert sorted(p.name for p in tmp_path.iterdir()) == names[2:]

    def test_prune_logs_keep_zero_removes_all(self, tmp_path):
        (tmp_path / f"{LOG_FILE_PREFIX}2001-01-01_00-00-00.log").write_text("x")

        prune_logs(tmp_path, keep=0)

        assert list(tmp_path.iterdir()) == []
