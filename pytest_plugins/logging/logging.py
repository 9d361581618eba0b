"""
A pytest plugin that configures logging for simulator sessions.

Pytest's own log capture does not timestamp the records it attaches to a test report,
and that captured output is exactly what hive shows as the simulator log of a failed
test. Timestamps are needed there to line the simulator's actions up with the client
logs, so this plugin installs its own handlers.

The module can also be used without pytest via `configure_logging`.
"""

import functools
import logging
import os
import sys
from datetime import datetime, timezone
from logging import LogRecord
from pathlib import Path
from typing import Any, ClassVar, Optional, Union, cast

import pytest
from _pytest.terminal import TerminalReporter

file_handler: Optional[logging.FileHandler] = None

VERBOSE_LEVEL = 15  # Between DEBUG (10) and INFO (20)
FAIL_LEVEL = 35  # Between WARNING (30) and ERROR (40)

logging.addLevelName(VERBOSE_LEVEL, "VERBOSE")
logging.addLevelName(FAIL_LEVEL, "FAIL")

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LiteDebugLogger(logging.Logger):
    """Logger with the additional `verbose` and `fail` severities."""

    def verbose(
        self,
        msg: object,
        *args: Any,
        exc_info: Union[BaseException, bool, None] = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Log a message with VERBOSE level severity (15).

        Used for progress messages that are too chatty for INFO, e.g. every poll attempt
        that eventually succeeds.
        """
        if self.isEnabledFor(VERBOSE_LEVEL):
            self._log(VERBOSE_LEVEL, msg, args, exc_info, extra, stack_info, stacklevel)

    def fail(
        self,
        msg: object,
        *args: Any,
        exc_info: Union[BaseException, bool, None] = None,
        stack_info: bool = False,
        stacklevel: int = 1,
        extra: Optional[dict[str, Any]] = None,
    ) -> None:
        """Log a message with FAIL level severity (35), used for failed checks."""
        if self.isEnabledFor(FAIL_LEVEL):
            self._log(FAIL_LEVEL, msg, args, exc_info, extra, stack_info, stacklevel)


logging.setLoggerClass(LiteDebugLogger)


def get_logger(name: str) -> LiteDebugLogger:
    """Get a logger that provides the `verbose` and `fail` levels."""
    return cast(LiteDebugLogger, logging.getLogger(name))


logger = get_logger(__name__)


class UTCFormatter(logging.Formatter):
    """Log formatter that formats UTC timestamps with milliseconds and +00:00 suffix."""

    def formatTime(self, record, datefmt=None):  # noqa: D102,N802  # camelcase required
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + "+00:00"


class ColorFormatter(UTCFormatter):
    """Formatter that colors the level name for terminal output."""

    # hive runs simulators in docker, where the output ends up in plain log files
    running_in_docker: ClassVar[bool] = Path("/.dockerenv").exists()

    COLORS = {
        logging.DEBUG: "\033[37m",
        VERBOSE_LEVEL: "\033[36m",
        logging.INFO: "\033[36m",
        logging.WARNING: "\033[33m",
        FAIL_LEVEL: "\033[35m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: LogRecord) -> str:
        """Color the level name of a copy of the record, unless running in docker."""
        record_copy = logging.makeLogRecord(record.__dict__)
        if not self.running_in_docker:
            color = self.COLORS.get(record_copy.levelno, self.RESET)
            record_copy.levelname = f"{color}{record_copy.levelname}{self.RESET}"
        return super().format(record_copy)


class LogLevel:
    """Parse a log level provided on the command line."""

    @classmethod
    def from_cli(cls, value: str) -> int:
        """Accept level names in any case (e.g. 'verbose', 'INFO') or numeric values."""
        try:
            return int(value)
        except ValueError:
            pass

        level = logging.getLevelName(value.upper())
        if isinstance(level, int):
            return level

        valid = ", ".join(logging.getLevelNamesMapping().keys())
        raise ValueError(f"Invalid log level '{value}'. Expected one of: {valid} or a number.")


def configure_logging(
    log_level: Union[int, str] = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    log_to_stdout: bool = True,
    log_format: str = DEFAULT_LOG_FORMAT,
    use_color: Optional[bool] = None,
) -> Optional[logging.FileHandler]:
    """
    Configure the root logger with UTC timestamps and the custom levels.

    Args:
        log_level: The logging level to use (name or numeric value)
        log_file: Path to the log file (if None, no file logging is set up)
        log_to_stdout: Whether to log to stdout
        log_format: The log format string
        use_color: Whether to use colors in stdout output (auto-detected if None)

    Returns:
        The file handler if log_file is provided, otherwise None

    """
    root_logger = logging.getLogger()

    if isinstance(log_level, str):
        log_level = LogLevel.from_cli(log_level)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    file_handler_instance = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(exist_ok=True, parents=True)
        file_handler_instance = logging.FileHandler(log_path, mode="w")
        file_handler_instance.setFormatter(UTCFormatter(fmt=log_format))
        root_logger.addHandler(file_handler_instance)

    if log_to_stdout:
        stream_handler = logging.StreamHandler(sys.stdout)
        if use_color is None:
            use_color = not ColorFormatter.running_in_docker
        formatter_class = ColorFormatter if use_color else UTCFormatter
        stream_handler.setFormatter(formatter_class(fmt=log_format))
        root_logger.addHandler(stream_handler)

    logger.verbose("Logging configured successfully.")
    return file_handler_instance


def pytest_addoption(parser):  # noqa: D103
    logging_group = parser.getgroup(
        "logging", "Arguments related to logging from the simulator fixtures and tests."
    )
    logging_group.addoption(
        "--litedebug-log-level",  # --log-level is defined by pytest's built-in logging
        action="store",
        default="INFO",
        type=LogLevel.from_cli,
        dest="litedebug_log_level",
        help=(
            "The logging level to use in the test session: DEBUG, VERBOSE, INFO, WARNING, "
            "FAIL, ERROR or CRITICAL, default - INFO. An integer in [0, 50] may be also "
            "provided."
        ),
    )
    logging_group.addoption(
        "--litedebug-log-dir",
        action="store",
        default="logs",
        type=Path,
        dest="litedebug_log_dir",
        help="Directory the session log files are written to, default - ./logs.",
    )


@functools.cache
def get_log_stem(argv0: str, argv1: Optional[str]) -> str:
    """Generate the stem (prefix-subcommand-timestamp) for log files."""
    stem = Path(argv0).stem
    prefix = "pytest" if stem in ("", "-c", "__main__") else stem
    subcommand = argv1 if argv1 and not argv1.startswith("-") else None
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return "-".join(part for part in (prefix, subcommand, timestamp) if part)


def _current_log_stem() -> str:
    return get_log_stem(sys.argv[0], sys.argv[1] if len(sys.argv) > 1 else None)


def pytest_configure_node(node):
    """Share the log file stem of the main process with an xdist worker."""
    node.workerinput["log_stem"] = _current_log_stem()


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:
    """
    Initialize logging for the session.

    Every xdist worker writes its own log file; all files of one session share the
    timestamp of the main process.
    """
    global file_handler

    log_stem = getattr(config, "workerinput", {}).get("log_stem") or _current_log_stem()
    worker_id = os.getenv("PYTEST_XDIST_WORKER", "main")
    log_file_path = Path(config.getoption("litedebug_log_dir")) / f"{log_stem}-{worker_id}.log"
    config.option.litedebug_log_file_path = log_file_path

    file_handler = configure_logging(
        log_level=config.getoption("litedebug_log_level"),
        log_file=log_file_path,
        log_to_stdout=True,
    )


def pytest_report_header(config: pytest.Config) -> list[str]:
    """Show the log file path in the test session header."""
    if log_file_path := config.option.litedebug_log_file_path:
        return [f"Log file: {log_file_path}"]
    return []


def pytest_terminal_summary(terminalreporter: TerminalReporter, exitstatus: int) -> None:
    """Repeat the log file path at the end of the session."""
    if terminalreporter.config.option.collectonly:
        return
    if log_file_path := terminalreporter.config.option.litedebug_log_file_path:
        terminalreporter.write_sep("-", f"Log file: {log_file_path.resolve()}", yellow=True)


def log_only_to_file(level: int, msg: str, *args) -> None:
    """Log a message only to the file handler, bypassing stdout."""
    if not file_handler or not logger.isEnabledFor(level):
        return
    record = logger.makeRecord(
        logger.name, level, fn=__file__, lno=0, msg=msg, args=args, exc_info=None
    )
    file_handler.handle(record)


def report_outcome(report: pytest.TestReport) -> tuple[str, int]:
    """Map a test report to the status written to the log file and its log level."""
    if hasattr(report, "wasxfail"):
        if report.skipped:
            return "XFAIL", logging.INFO
        if report.passed:
            return "XPASS", logging.INFO
        return "XFAIL ERROR", logging.ERROR
    if report.skipped:
        return "SKIPPED", logging.INFO
    if report.failed:
        return "FAILED", FAIL_LEVEL
    return "PASSED", logging.INFO


def pytest_runtest_logstart(nodeid: str, location: tuple[str, int, str]) -> None:
    """Log test start to file."""
    log_only_to_file(logging.INFO, f"START TEST: {nodeid}")


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    """Log test status and duration to file after it runs."""
    if report.when != "call":
        return
    status, level = report_outcome(report)
    log_only_to_file(level, f"{status} in {report.duration:.2f}s: {report.nodeid}")


def pytest_runtest_logfinish(nodeid: str, location: tuple[str, int, str]) -> None:
    """Log end of test to file."""
    log_only_to_file(logging.INFO, f"END TEST: {nodeid}")
