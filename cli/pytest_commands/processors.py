"""Argument processors for the litedebug command."""

import os
import warnings
from typing import List

import click

from .base import ArgumentProcessor


class HelpFlagsProcessor(ArgumentProcessor):
    """Processes help-related flags to provide cleaner help output."""

    def __init__(self, command_type: str):
        """
        Initialize the help processor.

        Args:
            command_type: The name of the command, used for its `--<command>-help` flag

        """
        self.command_type = command_type

    def process_args(self, args: List[str]) -> List[str]:
        """
        Replace the arguments with the concise help flag if `--help` was given.

        `pytest --help` is extremely verbose and lists all flags from pytest and
        pytest plugins, so it is only shown for `--pytest-help`.
        """
        ctx = click.get_current_context()

        if ctx.params.get("help_flag"):
            return [f"--{self.command_type}-help"]
        elif ctx.params.get("pytest_help_flag"):
            return ["--help"]

        return args


class HiveEnvironmentProcessor(ArgumentProcessor):
    """Translates the environment hive runs simulators with into pytest flags."""

    def process_args(self, args: List[str]) -> List[str]:
        """Convert hive environment variables into pytest flags."""
        modified_args = args[:]

        hive_test_pattern = os.getenv("HIVE_TEST_PATTERN")
        if hive_test_pattern and "--sim.limit" not in args:
            modified_args.extend(["--sim.limit", hive_test_pattern])

        hive_parallelism = os.getenv("HIVE_PARALLELISM")
        if hive_parallelism not in [None, "", "1"] and "-n" not in args:
            modified_args.extend(["-n", str(hive_parallelism)])

        if os.getenv("HIVE_RANDOM_SEED") is not None:
            warnings.warn("HIVE_RANDOM_SEED is not supported.", stacklevel=2)

        if os.getenv("HIVE_LOGLEVEL") is not None and not any(
            arg.startswith("--litedebug-log-level") for arg in args
        ):
            log_level = hive_log_level(os.environ["HIVE_LOGLEVEL"])
            modified_args.extend(["--litedebug-log-level", log_level])

        return modified_args


# hive log levels: 0 - silent ... 5 - trace
HIVE_LOG_LEVELS = {
    "0": "CRITICAL",
    "1": "ERROR",
    "2": "WARNING",
    "3": "INFO",
    "4": "VERBOSE",
    "5": "DEBUG",
}


def hive_log_level(value: str) -> str:
    """Map a `HIVE_LOGLEVEL` value to a log level name; unknown values map to INFO."""
    return HIVE_LOG_LEVELS.get(value.strip(), "INFO")
