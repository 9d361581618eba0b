"""
A pytest plugin providing the hive simulator back-end for the litedebug tests.

Simulators using this plugin must define three pytest fixtures:

1. `test_suite_name`: The name of the hive test suite.
2. `test_suite_description`: The description of the hive test suite.
3. `test_case_description`: The description of the current hive test.

A `test_case_name` fixture may be defined to name the hive test; by default the
pytest test name is used.

Result reporting:
-----------------
Every pytest test is mirrored by a hive test that is ended in the teardown of the
`hive_test` fixture. As `hive_test` depends on `test_suite`, pytest tears it down
before the suite, and after every fixture requested by the test itself (such as the
client). The hive test therefore receives the outcome of all three phases together
with the output captured in each of them.
"""

import json
import os
import re
import warnings
from dataclasses import asdict
from pathlib import Path
from typing import List

import pytest
from filelock import FileLock
from hive.client import ClientRole
from hive.simulation import Simulation
from hive.testing import HiveTest, HiveTestResult, HiveTestSuite

from ..concurrency import SharedCounter
from ..logging import get_logger
from .hive_info import ClientFile, HiveInfo

logger = get_logger(__name__)


def pytest_addoption(parser: pytest.Parser):  # noqa: D103
    pytest_hive_group = parser.getgroup("pytest_hive", "Arguments related to pytest hive")
    pytest_hive_group.addoption(
        "--hive-simulator",
        action="store",
        dest="hive_simulator",
        default=os.environ.get("HIVE_SIMULATOR"),
        help=(
            "The Hive simulator endpoint, e.g. http://127.0.0.1:3000. By default, the value is "
            "taken from the HIVE_SIMULATOR environment variable."
        ),
    )
    pytest_hive_group.addoption(
        "--sim.limit",
        action="store",
        dest="sim_limit",
        default=None,
        help=(
            "Only run the tests whose id matches this regular expression (as hive's "
            "--sim.limit does). Set from HIVE_TEST_PATTERN by the litedebug command."
        ),
    )


def pytest_configure(config):  # noqa: D103
    if config.getoption("help"):
        return
    hive_simulator_url = config.getoption("hive_simulator")
    if hive_simulator_url is None:
        pytest.exit(
            "The HIVE_SIMULATOR environment variable is not set.\n\n"
            "If running locally, start hive in --dev mode, for example:\n"
            "./hive --dev --client kcc\n\n"
            "and set the HIVE_SIMULATOR to the reported URL. For example, in bash:\n"
            "export HIVE_SIMULATOR=http://127.0.0.1:3000"
        )
    # The client types are needed at collection time to parametrize `client_type`.
    config.hive_simulator_url = hive_simulator_url
    config.hive_simulator = Simulation(url=hive_simulator_url)
    try:
        config.hive_execution_clients = config.hive_simulator.client_types(
            role=ClientRole.ExecutionClient
        )
    except Exception as e:
        message = (
            f"Error connecting to hive simulator at {hive_simulator_url}.\n\n"
            "Did you forget to start hive in --dev mode?\n"
            "./hive --dev --client kcc\n\n"
        )
        if config.option.verbose > 0:
            message += f"Error details:\n{str(e)}"
        else:
            message += "Re-run with -v for more details."
        pytest.exit(message)
    logger.verbose(
        f"Execution clients available in hive: "
        f"{', '.join(c.name for c in config.hive_execution_clients)}"
    )


def get_hive_info(simulator: Simulation) -> HiveInfo | None:
    """Fetch and return the Hive instance information."""
    try:
        return HiveInfo(**simulator.hive_instance())
    except Exception as e:
        warnings.warn(
            f"Error fetching hive information: {str(e)}\n\n"
            "Hive might need to be updated to a newer version.",
            stacklevel=2,
        )
    return None


@pytest.hookimpl(trylast=True)
def pytest_report_header(config, start_path):
    """Add the hive instance to pytest's console output header."""
    if config.option.collectonly:
        return
    header_lines = [f"hive simulator: {config.hive_simulator_url}"]
    if hive_info := get_hive_info(config.hive_simulator):
        header_lines += [
            f"hive command: {' '.join(hive_info.command)}",
            f"hive commit: {hive_info.commit}",
            f"hive date: {hive_info.date}",
        ]
        for client in hive_info.client_file.root:
            header_lines.append(
                f"hive client ({client.client}): {client.model_dump_json(exclude_none=True)}"
            )
    return header_lines


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: List[pytest.Item]):
    """Deselect the tests whose id does not match `--sim.limit`."""
    sim_limit = config.getoption("sim_limit")
    if not sim_limit:
        return
    pattern = re.compile(sim_limit)
    selected = [item for item in items if pattern.search(item.nodeid)]
    deselected = [item for item in items if not pattern.search(item.nodeid)]
    if deselected:
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Store the report of each phase on the item as `result_setup`, `result_call` and
    `result_teardown`, so that `hive_test` can read them in its teardown.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"result_{report.when}", report)


@pytest.fixture(scope="session")
def simulator(request) -> Simulation:
    """Return the Hive simulator instance."""
    return request.config.hive_simulator


@pytest.fixture(scope="session")
def hive_info(simulator: Simulation) -> HiveInfo | None:
    """Fetch and return the Hive instance information."""
    return get_hive_info(simulator)


@pytest.fixture(scope="session")
def client_file(hive_info: HiveInfo | None) -> ClientFile:
    """Return the client file used when launching hive."""
    if hive_info is None:
        return ClientFile(root=[])
    return hive_info.client_file


@pytest.fixture(scope="session")
def test_suite(
    simulator: Simulation,
    session_temp_folder: Path,
    test_suite_name: str,
    test_suite_description: str,
):
    """
    Start the hive test suite, or join the one another xdist worker already started,
    and end it once the last worker is done with it.
    """
    suite_file = session_temp_folder / f"test_suite_{test_suite_name}"
    with FileLock(session_temp_folder / f"{suite_file.name}.lock"):
        if suite_file.exists():
            suite = HiveTestSuite(**json.loads(suite_file.read_text()))
        else:
            suite = simulator.start_suite(name=test_suite_name, description=test_suite_description)
            suite_file.write_text(json.dumps(asdict(suite)))
            logger.info(f"Started hive test suite '{test_suite_name}'")

    users = SharedCounter(session_temp_folder / f"{suite_file.name}_users")
    users.add(1)

    yield suite

    with users.lock:
        if users.add(-1) == 0:
            suite.end()
            suite_file.unlink()
            users.remove()
            logger.info(f"Ended hive test suite '{test_suite_name}'")


def captured_output(node: pytest.Item) -> str:
    """Return the output captured in each phase of the test, as a markdown document."""
    captured = []
    setup_out = ""
    for phase in ("setup", "call", "teardown"):
        report = getattr(node, f"result_{phase}", None)
        if report is None:
            continue
        stdout = report.capstdout or "None"
        stderr = report.capstderr or "None"
        if phase == "setup":
            setup_out = stdout
        elif phase == "call" and stdout.startswith(setup_out):
            # the call phase repeats the output of the setup phase
            stdout = stdout[len(setup_out) :]
        captured.append(
            f"# Captured Output from Test {phase.capitalize()}\n\n"
            f"## stdout:\n{stdout}\n"
            f"## stderr:\n{stderr}\n"
        )
    return "\n".join(captured)


def hive_test_result(node: pytest.Item) -> HiveTestResult:
    """Summarize the reports of all test phases into the result reported to hive."""
    output = captured_output(node)
    result_setup = getattr(node, "result_setup", None)
    result_call = getattr(node, "result_call", None)
    result_teardown = getattr(node, "result_teardown", None)

    if result_setup is not None and not result_setup.passed:
        details = f"Test setup failed.\n\n{result_setup.longreprtext}\n{output}"
        return HiveTestResult(test_pass=False, details=details)
    if result_call is None:
        details = f"Test failed for unknown reason (call status unknown).\n\n{output}"
        return HiveTestResult(test_pass=False, details=details)
    if not result_call.passed:
        return HiveTestResult(test_pass=False, details=f"{result_call.longreprtext}\n{output}")
    if result_teardown is not None and not result_teardown.passed:
        details = f"Test teardown failed.\n\n{result_teardown.longreprtext}\n{output}"
        return HiveTestResult(test_pass=False, details=details)
    return HiveTestResult(test_pass=True, details=f"Test passed.\n\n{output}")


@pytest.fixture(scope="function")
def hive_test(request, test_suite: HiveTestSuite):
    """
    Start a hive test for the current pytest test and end it with the test's result
    and captured output.
    """
    try:
        test_case_description = request.getfixturevalue("test_case_description")
    except pytest.FixtureLookupError:
        pytest.exit(
            "Error: The 'test_case_description' fixture has not been defined by the simulator "
            "or pytest plugin using this plugin!"
        )

    try:
        test_case_name = request.getfixturevalue("test_case_name")
    except pytest.FixtureLookupError:
        test_case_name = request.node.name

    test: HiveTest = test_suite.start_test(
        name=test_case_name,
        description=test_case_description,
    )
    yield test

    try:
        result = hive_test_result(request.node)
    except Exception as e:
        logger.error(f"Error processing the result of {request.node.nodeid}: {e}")
        result = HiveTestResult(
            test_pass=False, details=f"Exception whilst processing test result: {e}"
        )
    test.end(result=result)
    logger.verbose(f"Reported result of {request.node.nodeid} to hive")
