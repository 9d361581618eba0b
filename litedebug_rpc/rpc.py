"""JSON-RPC methods used by the litedebug hive simulator."""

from itertools import count
from typing import Any, ClassVar, Dict, Literal, Union

import requests
from pydantic import ValidationError

from litedebug_base_types import Address, Hash
from litedebug_types import Transaction, TransactionReceipt
from pytest_plugins.logging import get_logger

from .polling import poll_until
from .types import JSONRPCError, SendTransactionExceptionError

logger = get_logger(__name__)

BlockNumberType = Union[int, Literal["latest", "earliest", "pending"]]

RECEIPT_NOT_FOUND_MESSAGE = "not found"


def block_number_param(block_number: BlockNumberType) -> str:
    """Encode a block number, or block tag, as a JSON-RPC parameter."""
    return hex(block_number) if isinstance(block_number, int) else block_number


class BaseRPC:
    """Represents a base RPC class for every RPC call used within the simulator."""

    namespace: ClassVar[str]

    def __init__(
        self,
        url: str,
        extra_headers: Dict | None = None,
        *,
        request_timeout: float | None = None,
    ):
        """Initialize BaseRPC class with the given url."""
        if extra_headers is None:
            extra_headers = {}
        self.url = url
        self.request_id_counter = count(1)
        self.extra_headers = extra_headers
        self.request_timeout = request_timeout

    def __init_subclass__(cls) -> None:
        """Set namespace of the RPC class to the lowercase of the class name."""
        namespace = cls.__name__
        if namespace.endswith("RPC"):
            namespace = namespace[:-3]
        cls.namespace = namespace.lower()

    def post_request(self, method: str, *params: Any, extra_headers: Dict | None = None) -> Any:
        """
        Send a JSON-RPC POST request to the client and return the `result` field.

        Raises `JSONRPCError` if the client answered with an error object and a
        `requests` exception on transport or HTTP errors.
        """
        if extra_headers is None:
            extra_headers = {}
        assert self.namespace, "RPC namespace not set"

        payload = {
            "jsonrpc": "2.0",
            "method": f"{self.namespace}_{method}",
            "params": params,
            "id": next(self.request_id_counter),
        }
        headers = {"Content-Type": "application/json"} | self.extra_headers | extra_headers

        logger.debug(f"Sending request {payload['method']} with params {params}")
        response = requests.post(
            self.url, json=payload, headers=headers, timeout=self.request_timeout
        )
        response.raise_for_status()
        response_json = response.json()

        if "error" in response_json:
            raise JSONRPCError(**response_json["error"])

        assert "result" in response_json, "RPC response didn't contain a result field"
        return response_json["result"]


class EthRPC(BaseRPC):
    """Represents an `eth_X` RPC class for the standard methods used by the simulator."""

    transaction_wait_timeout: float = 120
    poll_interval: float = 1

    def __init__(
        self,
        url: str,
        extra_headers: Dict | None = None,
        *,
        request_timeout: float | None = None,
        transaction_wait_timeout: float = 120,
        poll_interval: float = 1,
    ):
        """Initialize EthRPC class with the given url and transaction wait timeout."""
        super().__init__(url, extra_headers, request_timeout=request_timeout)
        self.transaction_wait_timeout = transaction_wait_timeout
        self.poll_interval = poll_interval

    def chain_id(self) -> int:
        """`eth_chainId`: Returns the chain id of the client."""
        return int(self.post_request("chainId"), 16)

    def block_number(self) -> int:
        """`eth_blockNumber`: Returns the number of the most recent block."""
        return int(self.post_request("blockNumber"), 16)

    def get_transaction_count(
        self, address: Address, block_number: BlockNumberType = "latest"
    ) -> int:
        """`eth_getTransactionCount`: Returns the number of transactions sent from an address."""
        return int(
            self.post_request("getTransactionCount", f"{address}", block_number_param(block_number)),
            16,
        )

    def send_transaction(self, transaction: Transaction) -> Hash:
        """`eth_sendRawTransaction`: Send a signed transaction to the client."""
        try:
            result_hash = Hash(
                self.post_request("sendRawTransaction", f"{transaction.rlp().hex()}")
            )
        except Exception as e:
            raise SendTransactionExceptionError(str(e), tx=transaction) from e
        if result_hash != transaction.hash:
            raise SendTransactionExceptionError(
                f"client returned hash {result_hash}, expected {transaction.hash}",
                tx=transaction,
            )
        return transaction.hash

    def get_transaction_receipt(self, transaction_hash: Hash) -> TransactionReceipt | None:
        """
        `eth_getTransactionReceipt`: Returns the receipt of a transaction, or `None` if the
        client does not know the transaction (yet).
        """
        try:
            response = self.post_request("getTransactionReceipt", f"{transaction_hash}")
        except JSONRPCError as e:
            if e.message == RECEIPT_NOT_FOUND_MESSAGE:
                return None
            raise
        if response is None:
            return None
        try:
            return TransactionReceipt.model_validate(response)
        except ValidationError as e:
            logger.error(f"Unable to parse receipt of {transaction_hash}: {e.errors()}")
            raise

    def wait_for_transaction_receipt(
        self, transaction: Transaction, timeout: float | None = None
    ) -> TransactionReceipt:
        """
        Poll `eth_getTransactionReceipt` until the receipt of the transaction reports a
        block number.
        """
        tx_hash = transaction.hash
        return poll_until(
            lambda: self.get_transaction_receipt(tx_hash),
            timeout=self.transaction_wait_timeout if timeout is None else timeout,
            interval=self.poll_interval,
            predicate=lambda receipt: receipt is not None and receipt.included,
            description=f"receipt of transaction {tx_hash}",
        )

    def send_wait_transaction(
        self, transaction: Transaction, timeout: float | None = None
    ) -> TransactionReceipt:
        """Send transaction and wait until it is included in a block."""
        self.send_transaction(transaction)
        return self.wait_for_transaction_receipt(transaction, timeout=timeout)


class DebugRPC(EthRPC):
    """
    Represents a `debug_X` RPC class for the tracing methods whose availability is
    checked by the simulator.
    """

    def trace_block_by_number(self, block_number: BlockNumberType) -> Any:
        """`debug_traceBlockByNumber`: Returns the traces of all transactions in a block."""
        return self.post_request("traceBlockByNumber", block_number_param(block_number))

    def trace_block_by_hash(self, block_hash: Hash) -> Any:
        """`debug_traceBlockByHash`: Returns the traces of all transactions in a block."""
        return self.post_request("traceBlockByHash", f"{block_hash}")

    def trace_block_from_file(self, filename: str) -> Any:
        """
        `debug_traceBlockFromFile`: Returns the traces of the RLP encoded block stored in a
        file on the client's filesystem.
        """
        return self.post_request("traceBlockFromFile", filename)
