"""Tests for taskdeck.logging_setup."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taskdeck.logging_setup import setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, (logging.FileHandler, logging.NullHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def test_writes_to_log_file(tmp_path: Path, restore_root_logger):
    log_file = tmp_path / "nested" / "taskdeck.log"

    assert setup_logging(log_file, logging.DEBUG) is True
    logging.getLogger("taskdeck.test").info("hello")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert "INFO taskdeck.test: hello" in log_file.read_text(encoding="utf-8")


def test_unwritable_log_dir_falls_back(tmp_path: Path, restore_root_logger, capsys):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    log_file = blocker / "taskdeck.log"

    assert setup_logging(log_file) is False

    handlers = restore_root_logger.handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.NullHandler)
    # Logging after the fallback must not raise.
    logging.getLogger("taskdeck.test").warning("dropped")
    assert "cannot write log file" in capsys.readouterr().err


def test_repeated_setup_replaces_handlers(tmp_path: Path, restore_root_logger):
    setup_logging(tmp_path / "a.log")
    setup_logging(tmp_path / "b.log")

    file_handlers = [h for h in restore_root_logger.handlers if isinstance(h, logging.FileHandler)]
    assert len(file_handlers) == 1
    assert file_handlers[0].baseFilename == str(tmp_path / "b.log")
