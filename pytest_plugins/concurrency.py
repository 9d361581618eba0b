"""
Pytest plugin to create a temporary folder for the session where
multi-process tests can store data that is shared between processes.

The `session_temp_folder` fixture is used by the hive plugin to make sure that only
one hive test suite is started when the scenarios are distributed across several
pytest-xdist workers.
"""

import shutil
from pathlib import Path
from tempfile import gettempdir as get_temp_dir  # noqa: SC200
from typing import Generator

import pytest
from filelock import FileLock


class SharedCounter:
    """
    An integer stored in a file, shared by all xdist workers of a session.

    Updates take the counter's file lock. The lock is reentrant, so callers can hold
    `counter.lock` around an update to act on the new value atomically.
    """

    def __init__(self, path: Path):
        """Initialize the counter backed by `path`; a missing file reads as zero."""
        self.path = path
        self.lock = FileLock(path.with_name(f"{path.name}.lock"))

    def value(self) -> int:
        """Return the current value."""
        with self.lock:
            if not self.path.exists():
                return 0
            return int(self.path.read_text())

    def add(self, delta: int) -> int:
        """Add `delta` to the counter and return the new value."""
        with self.lock:
            value = self.value() + delta
            self.path.write_text(str(value))
            return value

    def remove(self) -> None:
        """Delete the file backing the counter."""
        with self.lock:
            self.path.unlink(missing_ok=True)


@pytest.fixture(scope="session")
def session_temp_folder_name(testrun_uid: str) -> str:  # noqa: SC200
    """
    Define the name of the temporary folder that will be shared among all the
    xdist workers to coordinate the tests.

    "testrun_uid" is a fixture provided by the xdist plugin, and is unique for each test run,
    so it is used to create the unique folder name.
    """
    return f"pytest-{testrun_uid}"  # noqa: SC200


@pytest.fixture(scope="session")
def session_temp_folder(
    session_temp_folder_name: str,
) -> Generator[Path, None, None]:
    """
    Create a global temporary folder that will be shared among all the
    xdist workers to coordinate the tests.

    The folder is removed by the last worker that stops using it.
    """
    session_temp_folder = Path(get_temp_dir()) / session_temp_folder_name
    session_temp_folder.mkdir(exist_ok=True)

    folder_users = SharedCounter(session_temp_folder / "folder_users")
    folder_users.add(1)

    yield session_temp_folder

    with folder_users.lock:
        if folder_users.add(-1) == 0:
            shutil.rmtree(session_temp_folder)
