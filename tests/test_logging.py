"""
Tests for the structured logging helpers.
"""

import json
import logging
from unittest.mock import patch

from hedera_agent.utils.logging import (
    ConsoleFormatter,
    JSONFormatter,
    get_contextual_logger,
    log_with_data,
    setup_logging,
)


def make_record(message="Tool called", **extra_fields):
    record = logging.LogRecord("hedera_agent.test", logging.INFO, __file__, 10, message, None, None)
    if extra_fields:
        record.extra_fields = extra_fields
    return record


class TestFormatters:

    def test_json_formatter_promotes_tool_context(self):
        output = json.loads(JSONFormatter().format(
            make_record(tool="sauceswap_get_pools", tool_call_id="c1", session="0.0.123456", pool_count=5)
        ))

        assert output["message"] == "Tool called"
        assert output["level"] == "INFO"
        assert output["tool"] == "sauceswap_get_pools"
        assert output["tool_call_id"] == "c1"
        assert output["session"] == "0.0.123456"
        assert output["data"] == {"pool_count": 5}

    def test_json_formatter_without_context(self):
        output = json.loads(JSONFormatter().format(make_record()))

        assert output["tool"] is None
        assert output["tool_call_id"] is None
        assert output["session"] is None
        assert "data" not in output

    def test_console_formatter_appends_context(self):
        line = ConsoleFormatter().format(make_record(tool="hedera_get_topic_info", tool_call_id="c9"))

        assert "hedera_agent.test: Tool called" in line
        assert line.endswith("[tool=hedera_get_topic_info tool_call_id=c9]")

    def test_console_formatter_plain(self):
        line = ConsoleFormatter().format(make_record())

        assert "INFO" in line
        assert line.endswith("hedera_agent.test: Tool called")


class TestLoggerHelpers:

    def test_contextual_logger_attaches_context(self, caplog):
        logger = get_contextual_logger("hedera_agent.test", tool="hedera_get_topic_info", tool_call_id="c1")

        with caplog.at_level(logging.INFO, logger="hedera_agent.test"):
            logger.info("Setting up custodial mode")

        assert caplog.records[-1].extra_fields == {"tool": "hedera_get_topic_info", "tool_call_id": "c1"}

    def test_log_with_data(self, caplog):
        logger = logging.getLogger("hedera_agent.test")

        with caplog.at_level(logging.INFO, logger="hedera_agent.test"):
            log_with_data(logger, "info", "Cached pools snapshot", session="0.0.1", pool_count=5)

        assert caplog.records[-1].extra_fields == {"session": "0.0.1", "pool_count": 5}


class TestSetupLogging:

    def setup_method(self):
        self.level = logging.getLogger().level

    def teardown_method(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            handler.close()
            root.removeHandler(handler)
        root.setLevel(self.level)

    def test_writes_json_file(self, tmp_path):
        root = setup_logging(level="DEBUG", log_dir=str(tmp_path), log_file="agent.log", console=False)

        logging.getLogger("hedera_agent.test").debug("hello")
        for handler in root.handlers:
            handler.flush()

        lines = (tmp_path / "agent.log").read_text().splitlines()
        assert json.loads(lines[-1])["message"] == "hello"

    def test_defaults_come_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))

        root = setup_logging(console=False)

        assert root.level == logging.WARNING
        assert (tmp_path / "logs" / "hedera_agent.log").exists()

    def test_console_handler_uses_stderr(self, tmp_path):
        with patch("hedera_agent.utils.logging.sys.stderr") as stderr:
            root = setup_logging(log_dir=str(tmp_path))

        stream_handlers = [h for h in root.handlers if type(h) is logging.StreamHandler]
        assert [h.stream for h in stream_handlers] == [stderr]
