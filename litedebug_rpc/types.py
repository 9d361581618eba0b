"""Error types raised by the JSON-RPC client."""

from typing import Any

from litedebug_types import Transaction


class JSONRPCError(Exception):
    """Error object returned by the node in place of a JSON-RPC result."""

    code: int
    message: str
    data: Any

    def __init__(self, code: int | str, message: str, data: Any = None, **kwargs):
        """Initialize the JSONRPCError."""
        super().__init__(code, message)
        self.code = int(code)
        self.message = message
        self.data = data

    def __str__(self) -> str:
        """Return string representation of the JSONRPCError."""
        return f"JSONRPCError(code={self.code}, message={self.message})"


class SendTransactionExceptionError(Exception):
    """Represent an exception that is raised when a transaction fails to be sent."""

    tx: Transaction | None = None

    def __init__(self, *args, tx: Transaction | None = None):
        """Initialize SendTransactionExceptionError class with the given transaction."""
        super().__init__(*args)
        self.tx = tx

    def __str__(self):
        """Return string representation of the exception."""
        if self.tx is not None:
            return f"{super().__str__()} Transaction={self.tx.model_dump_json(by_alias=True)}"
        return super().__str__()


class WaitTimeoutError(Exception):
    """A polled condition did not become true before the deadline."""

    def __init__(self, description: str, timeout: float, last_result: Any = None):
        """Initialize the error with what was being waited for."""
        super().__init__(f"timeout after {timeout} seconds while waiting for {description}")
        self.description = description
        self.timeout = timeout
        self.last_result = last_result
