import logging
from logging.handlers import RotatingFileHandler

import pytest

from sitwatch.utils import log


@pytest.fixture
def fresh_root(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    monkeypatch.setattr(log, "_INITIALIZED", False)
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)


def test_file_handler_and_level_from_environment(fresh_root, monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_TO_FILE", "true")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

    logger = log.get_logger("sitwatch.test")
    assert logger.name == "sitwatch.test"
    assert fresh_root.level == logging.DEBUG
    files = [h for h in fresh_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(files) == 1
    assert files[0].baseFilename == str(tmp_path / "logs" / "sitwatch.log")

    logger.debug("new video %s", 42)
    files[0].flush()
    assert "new video 42" in (tmp_path / "logs" / "sitwatch.log").read_text(encoding="utf-8")


def test_console_only_by_default_and_set_up_once(fresh_root, monkeypatch):
    monkeypatch.delenv("LOG_TO_FILE", raising=False)
    monkeypatch.setenv("LOG_LEVEL", "nonsense")

    log.get_logger("sitwatch")
    handlers = list(fresh_root.handlers)
    assert fresh_root.level == logging.INFO
    assert len(handlers) == 1
    assert not isinstance(handlers[0], RotatingFileHandler)

    log.get_logger("sitwatch.other")
    assert fresh_root.handlers == handlers
