import json
import logging
from logging.handlers import RotatingFileHandler

from levelgen import app, logging_utils
from levelgen.logging_utils import _format, get_logger
from levelgen.server import _configure_logging


def test_format_key_value(monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    line = _format("info", event="layout generated", seed=42, skipped=None)
    assert line.startswith("level=info ts=")
    assert "event=layout_generated" in line
    assert "seed=42" in line
    assert "skipped" not in line


def test_format_json(monkeypatch):
    monkeypatch.setattr(logging_utils, "JSON_MODE", True)
    rec = json.loads(_format("warn", event="x", rooms=3, skipped=None))
    assert rec["level"] == "warn"
    assert rec["rooms"] == 3
    assert "skipped" not in rec


def test_logger_writes_stderr_and_respects_level(monkeypatch, capsys):
    monkeypatch.setattr(logging_utils, "JSON_MODE", False)
    monkeypatch.setattr(logging_utils, "CURRENT_LEVEL", logging_utils.LEVELS["info"])
    log = get_logger("levelgen.test")
    log.debug(event="hidden")
    log.info(event="shown")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "event=shown" in captured.err
    assert "logger=levelgen.test" in captured.err
    assert "hidden" not in captured.err


def test_get_logger_is_cached():
    assert get_logger("levelgen.cache") is get_logger("levelgen.cache")


def test_configure_logging_creates_file(tmp_path, monkeypatch):
    monkeypatch.setattr(app, "instance_path", str(tmp_path / "instance"))
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        # Run twice to ensure handlers are replaced, not stacked
        _configure_logging()
        _configure_logging()
        assert len(root.handlers) == 2
        logging.getLogger("levelgen.test").info("hello")
        for h in root.handlers:
            h.flush()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
    log_file = tmp_path / "instance" / "app.log"
    assert log_file.exists()
    assert "hello" in log_file.read_text()


def test_configure_logging_closes_replaced_file_handler(tmp_path, monkeypatch):
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    try:
        _configure_logging()
        first_file = next(h for h in root.handlers if isinstance(h, RotatingFileHandler))
        _configure_logging()
        assert first_file not in root.handlers
        # FileHandler.close() drops its stream
        assert first_file.stream is None
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved_handlers:
            root.addHandler(h)
        root.setLevel(saved_level)
