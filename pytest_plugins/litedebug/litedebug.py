"""
A pytest plugin that provisions a KCC client through hive for every litedebug
scenario and provides RPC clients connected to it.

Each test is parametrized with a `scenario` from `SCENARIOS` and a `client_type`
from the execution clients hive was started with.
"""

import io
import json
from pathlib import Path
from typing import Dict, Generator, Mapping, cast

import pytest
from hive.client import Client, ClientType
from hive.testing import HiveTest

from config import ChainConfig
from litedebug_rpc import DebugRPC, EthRPC

from ..logging import get_logger
from .scenarios import SCENARIOS, LiteDebugScenario

logger = get_logger(__name__)

RPC_PORT = 8545


def pytest_addoption(parser: pytest.Parser):  # noqa: D103
    litedebug_group = parser.getgroup("litedebug", "Arguments related to the litedebug simulator")
    litedebug_group.addoption(
        "--tx-wait-timeout",
        action="store",
        dest="tx_wait_timeout",
        type=float,
        default=120,
        help=(
            "Maximum time in seconds to wait for the test transaction to be included in a "
            "block, default - 120."
        ),
    )
    litedebug_group.addoption(
        "--chain-config",
        action="store",
        dest="chain_config_file",
        type=Path,
        default=None,
        help=(
            "YAML file overriding the chain parameters the clients are started with "
            "(chain id, POSA period and epoch, fork blocks, miner key, transfer values)."
        ),
    )
    litedebug_group.addoption(
        "--rpc-request-timeout",
        action="store",
        dest="rpc_request_timeout",
        type=float,
        default=30,
        help="Timeout in seconds of a single JSON-RPC request, default - 30.",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config):
    """Load the chain configuration once per session."""
    chain_config_file = config.getoption("chain_config_file")
    if chain_config_file is None:
        config.chain_config = ChainConfig()
        return
    try:
        config.chain_config = ChainConfig.from_yaml(chain_config_file)
    except (OSError, ValueError) as e:
        raise pytest.UsageError(f"Unable to load --chain-config: {e}") from e
    logger.info(f"Loaded chain configuration from {chain_config_file}")


def pytest_generate_tests(metafunc: pytest.Metafunc):
    """Run every test once per scenario and hive execution client."""
    if "scenario" in metafunc.fixturenames:
        metafunc.parametrize("scenario", SCENARIOS, ids=[s.id for s in SCENARIOS])
    if "client_type" in metafunc.fixturenames:
        clients = metafunc.config.hive_execution_clients
        metafunc.parametrize("client_type", clients, ids=[client.name for client in clients])


@pytest.fixture(scope="session")
def test_suite_name() -> str:
    """The name of the hive test suite used in this simulator."""
    return "litedebug mode"


@pytest.fixture(scope="session")
def test_suite_description() -> str:
    """The description of the hive test suite used in this simulator."""
    return "Testcase for litedebug mode"


@pytest.fixture(scope="function")
def test_case_name(scenario: LiteDebugScenario, client_type: ClientType) -> str:
    """The name of the hive test of the current scenario."""
    return f"{scenario.name} ({client_type.name})"


@pytest.fixture(scope="function")
def test_case_description(scenario: LiteDebugScenario) -> str:
    """The description of the hive test of the current scenario."""
    return (
        f"Start the client with `{scenario.flag}=1`, mine a value transfer, trace its "
        f"block with `debug_traceBlockByNumber` and expect `debug_traceBlockFromFile` to "
        f"fail with: {scenario.expected_error}"
    )


@pytest.fixture(scope="session")
def chain_config(request: pytest.FixtureRequest) -> ChainConfig:
    """Return the chain configuration of the session."""
    return request.config.chain_config


@pytest.fixture(scope="session")
def tx_wait_timeout(request: pytest.FixtureRequest) -> float:
    """Return the maximum time to wait for a transaction receipt."""
    return request.config.getoption("tx_wait_timeout")


@pytest.fixture(scope="function")
def environment(scenario: LiteDebugScenario, chain_config: ChainConfig) -> Dict[str, str]:
    """Define the environment that hive will start the client with."""
    return scenario.environment(chain_config.hive_parameters())


@pytest.fixture(scope="session")
def client_genesis(chain_config: ChainConfig) -> dict:
    """Return the genesis the clients are started with, as JSON data."""
    return chain_config.genesis().client_genesis()


@pytest.fixture(scope="function")
def buffered_genesis(client_genesis: dict) -> io.BufferedReader:
    """Create a buffered reader for the genesis file of the client."""
    genesis_bytes = json.dumps(client_genesis).encode("utf-8")
    return io.BufferedReader(cast(io.RawIOBase, io.BytesIO(genesis_bytes)))


@pytest.fixture(scope="function")
def client_files(buffered_genesis: io.BufferedReader) -> Mapping[str, io.BufferedReader]:
    """Define the files that hive will start the client with."""
    return {"/genesis.json": buffered_genesis}


@pytest.fixture(scope="function")
def client(
    hive_test: HiveTest,
    client_files: Mapping[str, io.BufferedReader],
    environment: Dict[str, str],
    client_type: ClientType,
) -> Generator[Client, None, None]:
    """Start a fresh client for the scenario and stop it afterwards."""
    logger.info(f"Starting client ({client_type.name})...")
    client = hive_test.start_client(
        client_type=client_type, environment=environment, files=client_files
    )
    assert client is not None, (
        f"Unable to connect to the client container ({client_type.name}) via Hive during test "
        "setup. Check the client or Hive server logs for more information."
    )
    logger.info(f"Client ({client_type.name}) ready at {client.ip}")
    yield client
    logger.info(f"Stopping client ({client_type.name})...")
    client.stop()
    logger.info(f"Client ({client_type.name}) stopped!")


@pytest.fixture(scope="function")
def eth_rpc(request: pytest.FixtureRequest, client: Client, tx_wait_timeout: float) -> EthRPC:
    """Initialize the `eth` RPC client for the client under test."""
    return EthRPC(
        f"http://{client.ip}:{RPC_PORT}",
        request_timeout=request.config.getoption("rpc_request_timeout"),
        transaction_wait_timeout=tx_wait_timeout,
    )


@pytest.fixture(scope="function")
def debug_rpc(request: pytest.FixtureRequest, client: Client) -> DebugRPC:
    """Initialize the `debug` RPC client for the client under test."""
    return DebugRPC(
        f"http://{client.ip}:{RPC_PORT}",
        request_timeout=request.config.getoption("rpc_request_timeout"),
    )
