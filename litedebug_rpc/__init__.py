"""
JSON-RPC client for the methods exercised by the litedebug simulator.
"""

from .polling import poll_until
from .rpc import BaseRPC, BlockNumberType, DebugRPC, EthRPC
from .types import JSONRPCError, SendTransactionExceptionError, WaitTimeoutError

__all__ = (
    "BaseRPC",
    "BlockNumberType",
    "DebugRPC",
    "EthRPC",
    "JSONRPCError",
    "SendTransactionExceptionError",
    "WaitTimeoutError",
    "poll_until",
)
