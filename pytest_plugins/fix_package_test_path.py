"""
Pytest plugin to shorten the ids of the tests collected from the simulator logic
test file, e.g. `test_via_litedebug[litedebug-only-kcc]` becomes `litedebug-only-kcc`.
"""

from typing import List

import pytest


def strip_runner_name(name: str, runner_name: str) -> str:
    """Remove the `runner_name[...]` wrapper from a test name or node id."""
    prefix = f"{runner_name}["
    if prefix not in name:
        return name
    return name[name.index(prefix) + len(prefix) : -1]


def pytest_collection_modifyitems(items: List[pytest.Item]):
    """Modify collected item names to remove the test runner function from the name."""
    for item in items:
        original_name = item.originalname  # type: ignore
        item.name = strip_runner_name(item.name, original_name)
        item._nodeid = strip_runner_name(item.nodeid, original_name)
