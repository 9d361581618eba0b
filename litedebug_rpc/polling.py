"""Bounded fixed-interval polling."""

import time
from typing import Callable, TypeVar

from pytest_plugins.logging import get_logger

from .types import WaitTimeoutError

T = TypeVar("T")

logger = get_logger(__name__)


def is_not_none(result: object) -> bool:
    """Default success predicate: the operation returned something."""
    return result is not None


def poll_until(
    operation: Callable[[], T],
    *,
    timeout: float,
    interval: float = 1.0,
    predicate: Callable[[T], bool] = is_not_none,
    description: str = "condition",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call `operation` every `interval` seconds until `predicate` accepts its result.

    The deadline is checked before every attempt, so no attempt starts after `timeout`
    seconds have elapsed; in that case `WaitTimeoutError` is raised. Exceptions raised by
    `operation` are not retried and propagate to the caller.
    """
    deadline = clock() + timeout
    attempts = 0
    last_result: T | None = None
    while clock() <= deadline:
        attempts += 1
        last_result = operation()
        if predicate(last_result):
            logger.verbose(f"{description} satisfied after {attempts} attempt(s)")
            return last_result
        sleep(interval)
    raise WaitTimeoutError(description, timeout, last_result)
