"""The node configurations the litedebug simulator runs against."""

from dataclasses import dataclass
from typing import Dict, Tuple

TRACE_FILE_NAME = "non-exist-file"
"""File passed to `debug_traceBlockFromFile`; it never exists on the client."""

METHOD_UNAVAILABLE_ERROR = "the method debug_traceBlockFromFile does not exist/is not available"
FILE_NOT_FOUND_ERROR = f"could not read file: open {TRACE_FILE_NAME}: no such file or directory"


@dataclass(frozen=True)
class LiteDebugScenario:
    """
    A client configuration and the `debug_traceBlockFromFile` error it must produce.

    In lite debug mode the client only serves the cheap debug methods, so tracing from a
    file must be rejected as an unknown method. With the full debug API enabled the call
    reaches the handler and fails on the missing file instead.
    """

    id: str
    name: str
    flag: str
    expected_error: str

    def environment(self, base_parameters: Dict[str, str]) -> Dict[str, str]:
        """Return the hive client environment: the chain parameters plus the mode flag."""
        return base_parameters | {self.flag: "1"}


SCENARIOS: Tuple[LiteDebugScenario, ...] = (
    LiteDebugScenario(
        id="litedebug-only",
        name="litedebug(only)",
        flag="HIVE_RPC_LITE_DEBUG_ONLY",
        expected_error=METHOD_UNAVAILABLE_ERROR,
    ),
    LiteDebugScenario(
        id="litedebug-and-full-debug",
        name="litedebug + full debug",
        flag="HIVE_RPC_LITE_DEBUG_AND_DEBUG",
        expected_error=FILE_NOT_FOUND_ERROR,
    ),
    LiteDebugScenario(
        id="full-debug-only",
        name="full debug (only)",
        # unknown to the client, which then starts with its default (full) debug API
        flag="NOT_USED_OPTION",
        expected_error=FILE_NOT_FOUND_ERROR,
    ),
)
