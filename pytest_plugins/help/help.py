"""
A small pytest plugin that shows a concise help string that only contains the
options defined by the litedebug simulator's plugins.
"""

import argparse
from pathlib import Path

import pytest

LITEDEBUG_HELP_GROUPS = ["litedebug simulator", "pytest hive", "logging"]


def pytest_addoption(parser):
    """Add the `--litedebug-help` flag."""
    help_group = parser.getgroup("help_options", "Help options for different commands")
    help_group.addoption(
        "--litedebug-help",
        action="store_true",
        dest="show_litedebug_help",
        default=False,
        help="Show help options specific to the litedebug command and exit.",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config):
    """Display the litedebug help and exit if requested."""
    if config.getoption("show_litedebug_help"):
        show_specific_help(config, "pytest-litedebug.ini", LITEDEBUG_HELP_GROUPS)


def show_specific_help(config, expected_ini, substrings):
    """Print the options of the argument groups whose title contains one of `substrings`."""
    pytest_ini = Path(config.inifile)
    if pytest_ini.name != expected_ini:
        raise ValueError(f"Unexpected {expected_ini} file option generating help.")

    help_parser = argparse.ArgumentParser(prog="litedebug")
    for group in config._parser.optparser._action_groups:
        if not any(substring in group.title for substring in substrings):
            continue
        new_group = help_parser.add_argument_group(group.title, group.description)
        for action in group._group_actions:
            kwargs = {"default": action.default, "help": action.help}
            if isinstance(action, argparse._StoreTrueAction):
                kwargs["action"] = "store_true"
            else:
                kwargs["type"] = action.type
            new_group.add_argument(*action.option_strings, **kwargs)

    print(help_parser.format_help())
    pytest.exit("After displaying help.", returncode=pytest.ExitCode.OK)
