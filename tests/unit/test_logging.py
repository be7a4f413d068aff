"""Tests for tokensmith logging setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from tokensmith.logging import (
    LOG_FILE,
    ROOT_LOGGER,
    ConsoleFormatter,
    JSONLFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)


def _record(level: int = logging.INFO, msg: str = "hello", **extra: object) -> logging.LogRecord:
    record = logging.LogRecord("tokensmith.cache.stores", level, __file__, 10, msg, None, None, "fn")
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONLFormatter:
    def test_basic_fields(self) -> None:
        entry = json.loads(JSONLFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["component"] == "tokensmith.cache.stores"
        assert entry["message"] == "hello"
        assert entry["timestamp"].endswith("Z")
        assert "source" not in entry

    def test_context_and_component(self) -> None:
        record = _record(component="cli", context={"backend": "file"})
        entry = json.loads(JSONLFormatter().format(record))
        assert entry["component"] == "cli"
        assert entry["context"] == {"backend": "file"}

    def test_warning_has_source(self) -> None:
        entry = json.loads(JSONLFormatter().format(_record(logging.WARNING)))
        assert entry["source"]["line"] == 10
        assert entry["source"]["function"] == "fn"


class TestConsoleFormatter:
    def test_info_has_no_level(self) -> None:
        text = ConsoleFormatter().format(_record())
        assert text.endswith("[stores] hello")
        assert "INFO" not in text

    def test_warning_shows_level(self) -> None:
        assert "WARNING: hello" in ConsoleFormatter().format(_record(logging.WARNING))

    def test_color(self) -> None:
        assert "\033[" in ConsoleFormatter(color=True).format(_record())


class TestSetupLogging:
    def test_console_only(self) -> None:
        assert setup_logging("warning") is None
        root = logging.getLogger(ROOT_LOGGER)
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert root.propagate is False

    def test_repeated_setup_replaces_handlers(self, tmp_path: Path) -> None:
        setup_logging("INFO", tmp_path)
        setup_logging("INFO", tmp_path)
        assert len(logging.getLogger(ROOT_LOGGER).handlers) == 2

    def test_jsonl_file(self, tmp_path: Path) -> None:
        log_file = setup_logging("DEBUG", tmp_path / "logs")
        assert log_file == tmp_path / "logs" / LOG_FILE

        logger = get_logger("cache")
        log_with_context(logger, logging.INFO, "Cleared", removed=3)
        for handler in logging.getLogger(ROOT_LOGGER).handlers:
            handler.flush()

        entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        cleared = [e for e in entries if e["message"] == "Cleared"]
        assert cleared[0]["component"] == "cache"
        assert cleared[0]["context"] == {"removed": 3}

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging("chatty")
        assert logging.getLogger(ROOT_LOGGER).level == logging.INFO


class TestGetLogger:
    def test_namespaced_and_memoized(self) -> None:
        logger = get_logger("Preview Runtime")
        assert logger.name == "tokensmith.preview_runtime"
        assert get_logger("Preview Runtime") is logger

    def test_component_tag(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="tokensmith.registry"):
            get_logger("registry").info("loaded")
        assert caplog.records[-1].component == "registry"
