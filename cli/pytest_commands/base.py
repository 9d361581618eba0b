"""Base classes and utilities for the pytest-based CLI command."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from os.path import realpath
from pathlib import Path
from typing import Any, Callable, List

import click
import pytest
from rich.console import Console

CURRENT_FOLDER = Path(realpath(__file__)).parent
PACKAGE_INSTALL_FOLDER = CURRENT_FOLDER.parent.parent
PYTEST_INI_FOLDER = CURRENT_FOLDER / "pytest_ini_files"


class ArgumentProcessor(ABC):
    """Base class for processing command-line arguments."""

    @abstractmethod
    def process_args(self, args: List[str]) -> List[str]:
        """Process the given arguments and return modified arguments."""
        pass


@dataclass(kw_only=True)
class PytestCommand:
    """
    A CLI command that runs pytest with a dedicated configuration file on a fixed
    set of test files (the command logic), after processing the user's arguments.
    """

    config_file: str
    """File name of the pytest configuration file (e.g., 'pytest-litedebug.ini')."""

    command_logic_test_paths: List[Path] = field(default_factory=list)
    """Test files, relative to the package install folder, that implement the command."""

    argument_processors: List[ArgumentProcessor] = field(default_factory=list)
    """Processors to apply to the pytest arguments."""

    pytest_ini_folder: Path = PYTEST_INI_FOLDER
    """Folder where the pytest configuration files are located."""

    console: Console = field(default_factory=lambda: Console(highlight=False))
    """Console used to print the executed command."""

    @property
    def config_path(self) -> Path:
        """Path to the pytest configuration file."""
        return self.pytest_ini_folder / self.config_file

    def process_arguments(self, args: List[str]) -> List[str]:
        """Apply all argument processors to the given arguments."""
        processed_args = args[:]
        for processor in self.argument_processors:
            processed_args = processor.process_args(processed_args)
        return processed_args

    def pytest_args(self, args: List[str]) -> List[str]:
        """Return the full pytest argument list for the given user arguments."""
        pytest_args = ["-c", str(self.config_path), "--rootdir", "."]
        pytest_args += [str(PACKAGE_INSTALL_FOLDER / path) for path in self.command_logic_test_paths]
        pytest_args += self.process_arguments(args)
        if self.command_logic_test_paths:
            pytest_args += ["-p", "pytest_plugins.fix_package_test_path"]
        return pytest_args

    def execute(self, args: List[str]) -> None:
        """Run pytest and exit with its exit code."""
        pytest_args = self.pytest_args(args)
        if is_verbose(args):
            self.console.print(f"Executing: [bold]pytest {' '.join(pytest_args)}[/bold]")
        sys.exit(pytest.main(pytest_args))


def is_verbose(args: List[str]) -> bool:
    """Check if verbose output is requested."""
    return any(arg in ["-v", "--verbose", "-vv", "-vvv"] for arg in args)


def common_pytest_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Apply common Click options for pytest-based commands.

    This decorator adds the standard help options that all pytest commands use.
    """
    func = click.option(
        "-h",
        "--help",
        "help_flag",
        is_flag=True,
        default=False,
        expose_value=True,
        help="Show help message.",
    )(func)

    func = click.option(
        "--pytest-help",
        "pytest_help_flag",
        is_flag=True,
        default=False,
        expose_value=True,
        help="Show pytest's help message.",
    )(func)

    return click.argument("pytest_args", nargs=-1, type=click.UNPROCESSED)(func)
