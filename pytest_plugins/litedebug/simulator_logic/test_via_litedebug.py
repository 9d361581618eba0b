"""
A hive based simulator that checks which debug RPC methods a KCC client serves in
its lite debug mode.

For every scenario the simulator:
1. Starts a fresh client with the scenario's RPC mode flag.
2. Sends a value transfer from the miner account and waits until it is mined.
3. Traces the block of the transfer with `debug_traceBlockByNumber`, which every mode
   must serve.
4. Calls `debug_traceBlockFromFile` with a file that does not exist and checks the
   error: lite debug mode rejects the method, full debug mode fails to read the file.
"""

from config import ChainConfig
from litedebug_rpc import DebugRPC, EthRPC, JSONRPCError

from ...logging import get_logger
from ..scenarios import TRACE_FILE_NAME, LiteDebugScenario
from ..sender import send_value_transfer

logger = get_logger(__name__)


class LoggedError(Exception):
    """Exception that uses the logger to log the failure."""

    def __init__(self, *args: object) -> None:
        """Initialize the exception and log the failure."""
        super().__init__(*args)
        logger.fail(str(self))


def test_via_litedebug(
    scenario: LiteDebugScenario,
    chain_config: ChainConfig,
    eth_rpc: EthRPC,
    debug_rpc: DebugRPC,
    tx_wait_timeout: float,
):
    """Check the debug methods available in the scenario's RPC mode."""
    tx_hash, block_number = send_value_transfer(eth_rpc, chain_config, timeout=tx_wait_timeout)

    try:
        traces = debug_rpc.trace_block_by_number(block_number)
    except JSONRPCError as e:
        raise LoggedError(
            f"debug_traceBlockByNumber({hex(block_number)}) failed in {scenario.name} mode: {e}"
        ) from e
    logger.info(f"Traces of block {block_number} (transaction {tx_hash}): {traces}")

    try:
        result = debug_rpc.trace_block_from_file(TRACE_FILE_NAME)
    except JSONRPCError as e:
        if scenario.expected_error not in e.message:
            raise LoggedError(
                f"debug_traceBlockFromFile returned an unexpected error in {scenario.name} "
                f"mode: expected '{scenario.expected_error}', got '{e.message}'"
            ) from e
        logger.info(f"debug_traceBlockFromFile failed as expected: {e.message}")
    else:
        raise LoggedError(
            f"debug_traceBlockFromFile unexpectedly succeeded in {scenario.name} mode: {result}"
        )
