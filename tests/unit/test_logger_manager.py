"""
Unit tests for bot_logging/logger_manager.py.

Log directories are redirected to tmp_path so tests never touch logs/.
"""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

from bot_logging import logger_manager
from bot_logging.logger_manager import (
    HumanReadableFormatter,
    JSONFormatter,
    RawMessageFormatter,
    create_module_log_directories,
    setup_module_logger,
)


def _record(msg: str = "hello %s", args: tuple = ("world",), **extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.WARNING, __file__, 10, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestFormatters:

    def test_json_formatter_core_fields(self):
        payload = json.loads(JSONFormatter().format(_record()))
        assert payload["level"] == "WARNING"
        assert payload["message"] == "hello world"
        assert payload["logger"] == "test"

    def test_json_formatter_includes_known_extras_only(self):
        record = _record(block_number=18_000_000, error="bad topic", unrelated="x")
        payload = json.loads(JSONFormatter().format(record))
        assert payload["block_number"] == 18_000_000
        assert payload["error"] == "bad topic"
        assert "unrelated" not in payload

    def test_raw_formatter_passes_message_through(self):
        assert RawMessageFormatter().format(_record('{"a": %d}', (1,))) == '{"a": 1}'

    def test_human_readable_formatter_layout(self):
        line = HumanReadableFormatter().format(_record())
        assert "| WARNING  |" in line
        assert line.endswith("hello world")


class TestSetupModuleLogger:

    def test_writes_to_module_folder(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            logger = setup_module_logger(
                "test_lm_file", "out.log", module_folder="Test_Logs", use_raw_formatter=True
            )
            logger.info("line one")
        for handler in logger.handlers:
            handler.flush()
        assert (tmp_path / "Test_Logs" / "out.log").read_text().strip() == "line one"
        assert logger.propagate is False

    def test_cached_per_name(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            first = setup_module_logger("test_lm_cache", "a.log")
            second = setup_module_logger("test_lm_cache", "a.log")
        assert first is second
        assert len(first.handlers) == 1

    def test_console_handler_added(self, tmp_path):
        with patch.object(logger_manager, "_LOG_DIR", str(tmp_path)):
            logger = setup_module_logger("test_lm_console", "c.log", console=True)
        assert any(type(h) is logging.StreamHandler for h in logger.handlers)

    def test_create_module_log_directories(self, tmp_path):
        folders = {"scanner": "Scanner_Logs", "reports": "Report_Logs"}
        with (
            patch.object(logger_manager, "_LOG_DIR", str(tmp_path)),
            patch.object(logger_manager, "_MODULE_FOLDERS", folders),
        ):
            created = create_module_log_directories()
        assert set(created) == {"scanner", "reports"}
        assert (tmp_path / "Scanner_Logs").is_dir()
        assert (tmp_path / "Report_Logs").is_dir()
