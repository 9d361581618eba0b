"""CLI entry point for the `litedebug` pytest-based command."""

from pathlib import Path
from typing import List

import click

from .base import PytestCommand, common_pytest_options
from .processors import HelpFlagsProcessor, HiveEnvironmentProcessor

COMMAND_LOGIC_TEST_PATHS = [
    Path("pytest_plugins/litedebug/simulator_logic/test_via_litedebug.py"),
]


def create_litedebug_command() -> PytestCommand:
    """Initialize the litedebug command with its test logic and processors."""
    return PytestCommand(
        config_file="pytest-litedebug.ini",
        command_logic_test_paths=COMMAND_LOGIC_TEST_PATHS,
        argument_processors=[HelpFlagsProcessor("litedebug"), HiveEnvironmentProcessor()],
    )


@click.command(context_settings={"ignore_unknown_options": True})
@common_pytest_options
def litedebug(pytest_args: List[str], **kwargs) -> None:
    """
    Check the lite debug RPC mode of the hive execution clients.

    Starts a client per scenario and client type via the hive simulator given by
    HIVE_SIMULATOR, mines a value transfer and checks which debug methods are served.
    """
    create_litedebug_command().execute(list(pytest_args))
