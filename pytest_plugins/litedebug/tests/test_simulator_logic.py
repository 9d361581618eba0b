"""Test the checks the litedebug simulator runs against every client."""

from unittest.mock import MagicMock

import pytest

from config import ChainConfig
from litedebug_base_types import Hash
from litedebug_rpc import DebugRPC, EthRPC, JSONRPCError

from ..scenarios import FILE_NOT_FOUND_ERROR, METHOD_UNAVAILABLE_ERROR, SCENARIOS, TRACE_FILE_NAME

# imported as a module so that pytest does not collect the hive test itself
from ..simulator_logic import test_via_litedebug as simulator

TX_HASH = Hash("0x" + "ab" * 32)
BLOCK_NUMBER = 12

NODE_ERRORS = {
    METHOD_UNAVAILABLE_ERROR: JSONRPCError(-32601, METHOD_UNAVAILABLE_ERROR),
    FILE_NOT_FOUND_ERROR: JSONRPCError(-32000, FILE_NOT_FOUND_ERROR),
}


@pytest.fixture
def sent_transfers(monkeypatch) -> list:
    """Replace the value transfer with one that is mined in `BLOCK_NUMBER` right away."""
    calls = []

    def send_value_transfer(eth_rpc, chain_config, *, timeout=None):
        calls.append(timeout)
        return TX_HASH, BLOCK_NUMBER

    monkeypatch.setattr(simulator, "send_value_transfer", send_value_transfer)
    return calls


@pytest.fixture
def debug_rpc() -> MagicMock:
    debug_rpc = MagicMock(spec=DebugRPC)
    debug_rpc.trace_block_by_number.return_value = [{"result": {"gas": 21000}}]
    return debug_rpc


def run_scenario(scenario, debug_rpc):
    simulator.test_via_litedebug(
        scenario=scenario,
        chain_config=ChainConfig(),
        eth_rpc=MagicMock(spec=EthRPC),
        debug_rpc=debug_rpc,
        tx_wait_timeout=30,
    )


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
def test_expected_error_passes(scenario, sent_transfers, debug_rpc):
    """The node error the mode must produce makes the scenario pass."""
    debug_rpc.trace_block_from_file.side_effect = NODE_ERRORS[scenario.expected_error]

    run_scenario(scenario, debug_rpc)

    assert sent_transfers == [30]
    debug_rpc.trace_block_by_number.assert_called_once_with(BLOCK_NUMBER)
    debug_rpc.trace_block_from_file.assert_called_once_with(TRACE_FILE_NAME)


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
def test_mismatched_error_fails(scenario, sent_transfers, debug_rpc):
    """The error of the other mode means the client runs with the wrong debug API."""
    other_error = (
        FILE_NOT_FOUND_ERROR
        if scenario.expected_error == METHOD_UNAVAILABLE_ERROR
        else METHOD_UNAVAILABLE_ERROR
    )
    debug_rpc.trace_block_from_file.side_effect = NODE_ERRORS[other_error]

    with pytest.raises(simulator.LoggedError, match="unexpected error") as exc_info:
        run_scenario(scenario, debug_rpc)
    assert other_error in str(exc_info.value)
    assert scenario.expected_error in str(exc_info.value)


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
def test_trace_from_file_success_fails(scenario, sent_transfers, debug_rpc):
    debug_rpc.trace_block_from_file.return_value = []

    with pytest.raises(simulator.LoggedError, match="unexpectedly succeeded"):
        run_scenario(scenario, debug_rpc)


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda s: s.id)
def test_trace_by_number_failure_fails(scenario, sent_transfers, debug_rpc):
    """Every mode must serve `debug_traceBlockByNumber`."""
    debug_rpc.trace_block_by_number.side_effect = JSONRPCError(
        -32601, "the method debug_traceBlockByNumber does not exist/is not available"
    )

    with pytest.raises(simulator.LoggedError, match=r"debug_traceBlockByNumber\(0xc\) failed"):
        run_scenario(scenario, debug_rpc)
    debug_rpc.trace_block_from_file.assert_not_called()


def test_error_substring_match(sent_transfers, debug_rpc):
    """Clients may wrap the error, only the expected text has to be contained."""
    scenario = SCENARIOS[0]
    debug_rpc.trace_block_from_file.side_effect = JSONRPCError(
        -32601, f"rpc: {METHOD_UNAVAILABLE_ERROR} (namespace debug)"
    )
    run_scenario(scenario, debug_rpc)
