"""Tests for confscope.logger module."""

import io
import json
import logging
import os
import sys
from unittest import mock

import pytest

from confscope.logger import (
    JsonFormatter,
    Logger,
    StructuredLogger,
    TextFormatter,
    create_logger,
    get_logger,
)
from confscope.logger import _get_env_prefix


def capture(logger: StructuredLogger, formatter: logging.Formatter) -> io.StringIO:
    """Redirect a StructuredLogger's console handler into a buffer."""
    stream = io.StringIO()
    handler = logger._logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    handler.setStream(stream)
    handler.setFormatter(formatter)
    return stream


class TestLoggerInterface:
    """Tests for the Logger abstract interface."""

    def test_logger_is_abstract(self):
        """Test that Logger cannot be instantiated directly."""
        with pytest.raises(TypeError):
            Logger()  # type: ignore

    def test_logger_has_required_methods(self):
        for method in ("debug", "info", "warning", "error", "critical", "get_session_id"):
            assert hasattr(Logger, method)


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_is_logger(self):
        assert isinstance(StructuredLogger(name="confscope-test"), Logger)

    def test_session_id(self):
        logger = StructuredLogger(name="confscope-test")
        assert len(logger.get_session_id()) == 8
        assert logger.get_session_id() != StructuredLogger(name="confscope-test").get_session_id()

    def test_writes_to_stderr_by_default(self):
        logger = StructuredLogger(name="confscope-test")
        handler = logger._logger.handlers[0]
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr

    def test_reinitialising_does_not_duplicate_handlers(self):
        StructuredLogger(name="confscope-dup")
        logger = StructuredLogger(name="confscope-dup")
        assert len(logger._logger.handlers) == 1

    def test_text_output_with_extra_fields(self):
        logger = StructuredLogger(name="confscope-text", level=logging.DEBUG)
        stream = capture(logger, TextFormatter("[%(levelname)s] %(message)s"))

        logger.debug("Skipping out of scope key", key="staging.a", section="db")

        output = stream.getvalue()
        assert "[DEBUG] Skipping out of scope key" in output
        assert "key=staging.a" in output
        assert "section=db" in output

    def test_json_output(self):
        logger = StructuredLogger(name="confscope-json", json_format=True)
        stream = capture(logger, JsonFormatter())

        logger.info("Configuration loaded", source="app.ini", sections=2)

        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["message"] == "Configuration loaded"
        assert record["logger"] == "confscope-json"
        assert record["session_id"] == logger.get_session_id()
        assert record["source"] == "app.ini"
        assert record["sections"] == 2

    def test_level_filters(self):
        logger = StructuredLogger(name="confscope-level", level=logging.WARNING)
        stream = capture(logger, TextFormatter("%(message)s"))
        logger.info("hidden")
        logger.error("shown")
        assert stream.getvalue().strip() == "shown"

    def test_reserved_kwargs_are_prefixed(self):
        """Test kwargs clashing with LogRecord attributes do not raise"""
        logger = StructuredLogger(name="confscope-reserved", json_format=True)
        stream = capture(logger, JsonFormatter())
        logger.warning("clash", filename="app.ini", name="x")
        record = json.loads(stream.getvalue())
        assert record["_filename"] == "app.ini"
        assert record["_name"] == "x"

    def test_log_file(self, tmp_path):
        log_file = tmp_path / "confscope.log"
        logger = StructuredLogger(name="confscope-file", log_file=str(log_file))
        logger.error("written")
        for handler in logger._logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text()

    def test_unwritable_log_file_falls_back(self, tmp_path, capsys):
        logger = StructuredLogger(name="confscope-nofile", log_file=str(tmp_path / "no" / "x.log"))
        assert len(logger._logger.handlers) == 1
        assert "Failed to setup log file" in capsys.readouterr().err


class TestFactories:
    """Tests for create_logger / get_logger."""

    def test_env_prefix(self):
        assert _get_env_prefix("confscope") == "CONFSCOPE"
        assert _get_env_prefix("confscope-cli") == "CONFSCOPE_CLI"

    def test_create_logger_explicit(self):
        logger = create_logger(name="confscope-explicit", level=logging.DEBUG)
        assert isinstance(logger, StructuredLogger)
        assert logging.getLogger("confscope-explicit").level == logging.DEBUG

    def test_create_logger_from_env(self):
        with mock.patch.dict(os.environ, {"CONFSCOPE_ENVLVL_LOG_LEVEL": "ERROR"}):
            create_logger(name="confscope-envlvl")
        assert logging.getLogger("confscope-envlvl").level == logging.ERROR

    def test_invalid_level_falls_back_to_info(self):
        with mock.patch.dict(os.environ, {"CONFSCOPE_BADLVL_LOG_LEVEL": "LOUD"}):
            create_logger(name="confscope-badlvl")
        assert logging.getLogger("confscope-badlvl").level == logging.INFO

    def test_json_from_env(self):
        with mock.patch.dict(os.environ, {"CONFSCOPE_JS_LOG_JSON": "true"}):
            logger = create_logger(name="confscope-js")
        handler = logger._logger.handlers[0]  # type: ignore[attr-defined]
        assert isinstance(handler.formatter, JsonFormatter)

    def test_get_logger_default_name(self):
        logger = get_logger()
        assert isinstance(logger, StructuredLogger)
        assert logger.name == "confscope"
