"""
Tests for the logging module.

Covers the custom levels, the formatters, the standalone configuration and the pytest
hooks that set up the per-worker log files.
"""

import io
import logging
import re
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from ..logging import (
    FAIL_LEVEL,
    VERBOSE_LEVEL,
    ColorFormatter,
    LiteDebugLogger,
    LogLevel,
    UTCFormatter,
    configure_logging,
    get_logger,
    report_outcome,
)


@pytest.fixture
def clean_root_logger():
    """Restore the root logger's handlers and level after the test."""
    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers.copy()
    original_level = root_logger.level
    yield root_logger
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


class TestLoggerSetup:
    """Test the custom levels and the logger class."""

    def test_custom_levels_registered(self):
        """The custom levels can be looked up by name and by number."""
        assert logging.getLevelName(VERBOSE_LEVEL) == "VERBOSE"
        assert logging.getLevelName(FAIL_LEVEL) == "FAIL"
        assert logging.getLevelName("VERBOSE") == VERBOSE_LEVEL
        assert logging.getLevelName("FAIL") == FAIL_LEVEL

    def test_get_logger(self):
        """`get_logger` returns a logger with the custom methods."""
        logger = get_logger("litedebug.test_logger")
        assert isinstance(logger, LiteDebugLogger)
        assert logger.name == "litedebug.test_logger"


class TestLiteDebugLogger:
    """Test the custom logger methods."""

    def setup_method(self):
        """Attach a handler that writes to a string buffer."""
        self.log_output = io.StringIO()
        self.logger = get_logger("litedebug.test_methods")
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        handler = logging.StreamHandler(self.log_output)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        self.logger.addHandler(handler)
        self.logger.setLevel(logging.DEBUG)

    def test_verbose_and_fail(self):
        self.logger.verbose("polling receipt")
        self.logger.fail("unexpected error message")
        assert "VERBOSE: polling receipt" in self.log_output.getvalue()
        assert "FAIL: unexpected error message" in self.log_output.getvalue()

    def test_levels_are_filtered(self):
        """VERBOSE is below INFO and FAIL is above WARNING."""
        self.logger.setLevel(logging.INFO)
        self.logger.verbose("hidden")
        self.logger.fail("shown")
        assert "hidden" not in self.log_output.getvalue()
        assert "shown" in self.log_output.getvalue()


@pytest.mark.parametrize(
    "value,expected",
    [
        ("debug", logging.DEBUG),
        ("verbose", VERBOSE_LEVEL),
        ("INFO", logging.INFO),
        ("Fail", FAIL_LEVEL),
        ("25", 25),
    ],
)
def test_log_level_from_cli(value: str, expected: int):
    assert LogLevel.from_cli(value) == expected


def test_log_level_from_cli_invalid():
    with pytest.raises(ValueError, match="Invalid log level 'chatty'"):
        LogLevel.from_cli("chatty")


class TestFormatters:
    """Test the custom log formatters."""

    def test_utc_formatter(self):
        formatter = UTCFormatter(fmt="%(asctime)s: %(message)s")
        record = logging.makeLogRecord({"msg": "Test message", "created": 1609459200.0})
        assert re.match(
            r"2021-01-01 00:00:00\.\d{3}\+00:00: Test message", formatter.format(record)
        )

    def test_color_formatter(self, monkeypatch):
        """Colors are only applied outside of docker."""
        formatter = ColorFormatter(fmt="[%(levelname)s] %(message)s")
        record = logging.makeLogRecord(
            {"levelno": FAIL_LEVEL, "levelname": "FAIL", "msg": "Fail message"}
        )

        monkeypatch.setattr(ColorFormatter, "running_in_docker", False)
        assert "\033[35mFAIL\033[0m" in formatter.format(record)

        monkeypatch.setattr(ColorFormatter, "running_in_docker", True)
        formatted = formatter.format(record)
        assert "\033[35m" not in formatted
        assert "[FAIL] Fail message" in formatted
        assert record.levelname == "FAIL"


class TestStandaloneConfiguration:
    """Test `configure_logging`."""

    def test_defaults(self, clean_root_logger):
        with patch("sys.stdout", new=io.StringIO()):
            handler = configure_logging()
        assert handler is None
        assert clean_root_logger.level == logging.INFO
        assert any(isinstance(h, logging.StreamHandler) for h in clean_root_logger.handlers)

    def test_with_file(self, clean_root_logger, tmp_path: Path):
        log_file = tmp_path / "nested" / "session.log"
        handler = configure_logging(log_level="VERBOSE", log_file=log_file, log_to_stdout=False)
        assert isinstance(handler, logging.FileHandler)
        assert clean_root_logger.level == VERBOSE_LEVEL

        get_logger("litedebug.test_config").verbose("receipt found")
        handler.flush()
        assert "[VERBOSE] litedebug.test_config: receipt found" in log_file.read_text()


class TestPytestIntegration:
    """Test the pytest hooks of the logging plugin."""

    def test_pytest_configure(self, clean_root_logger, monkeypatch, tmp_path: Path):
        """A per-worker log file is created in the configured directory."""
        from ..logging import pytest_configure

        options = {"litedebug_log_level": logging.INFO, "litedebug_log_dir": tmp_path}
        config = SimpleNamespace(
            option=MagicMock(), workerinput={}, getoption=lambda name: options[name]
        )
        monkeypatch.setattr("sys.argv", ["litedebug"])
        monkeypatch.setenv("PYTEST_XDIST_WORKER", "gw1")

        with patch("sys.stdout", new=io.StringIO()):
            pytest_configure(config)

        log_file_path = config.option.litedebug_log_file_path
        assert log_file_path.parent == tmp_path
        assert log_file_path.name.startswith("litedebug-")
        assert log_file_path.name.endswith("-gw1.log")
        assert log_file_path.exists()

    @pytest.mark.parametrize(
        "outcome,expected",
        [
            ({"passed": True}, ("PASSED", logging.INFO)),
            ({"failed": True}, ("FAILED", FAIL_LEVEL)),
            ({"skipped": True}, ("SKIPPED", logging.INFO)),
            ({"skipped": True, "wasxfail": ""}, ("XFAIL", logging.INFO)),
            ({"failed": True, "wasxfail": ""}, ("XFAIL ERROR", logging.ERROR)),
        ],
    )
    def test_report_outcome(self, outcome, expected):
        report = SimpleNamespace(**({"passed": False, "failed": False, "skipped": False} | outcome))
        assert report_outcome(report) == expected
