# ================================================================================
# Condition Waits
# ================================================================================
#
# Bounded condition polling for browser interactions.
#
# Every wait in the harness goes through ``wait_until``: the condition is
# checked, and if it is not yet satisfied the caller sleeps for one poll
# interval (never past the deadline) and checks again. The loop runs in the
# calling thread; there is no background poller.
#
# Usage:
#   element = wait_until(lambda: find(locator), timeout=20, description="submit")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from loguru import logger


T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.25


class WaitTimeoutError(Exception):
    """Raised when a condition is not met within its bound."""
    pass


@dataclass
class Clock:
    """
    Time source used by waits.

    Tests swap in a fake clock so bounded waits can be verified without
    spending wall-clock time.
    """
    now: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep


SYSTEM_CLOCK = Clock()


def wait_until(
    condition: Callable[[], Optional[T]],
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    description: str = "condition",
    clock: Clock = SYSTEM_CLOCK,
) -> T:
    """
    Poll ``condition`` until it returns a truthy value.

    The condition is always checked at least once, and a timeout is reported
    only after the elapsed time has reached ``timeout``.

    Args:
        condition: Zero-argument check; a truthy return ends the wait
        timeout: Upper bound in seconds
        poll_interval: Delay between checks in seconds
        description: Human-readable description for logging
        clock: Time source

    Returns:
        The first truthy value returned by ``condition``

    Raises:
        WaitTimeoutError: If the bound is reached first
    """
    start = clock.now()
    deadline = start + max(timeout, 0.0)
    attempt = 0

    while True:
        attempt += 1
        result = condition()
        if result:
            if attempt > 1:
                logger.debug(
                    f"Wait satisfied after {attempt} checks "
                    f"({clock.now() - start:.2f}s): {description}"
                )
            return result

        now = clock.now()
        if now >= deadline:
            raise WaitTimeoutError(
                f"Timeout after {now - start:.1f}s waiting for: {description}"
            )

        clock.sleep(min(poll_interval, deadline - now))


__all__ = [
    "Clock",
    "DEFAULT_POLL_INTERVAL",
    "SYSTEM_CLOCK",
    "WaitTimeoutError",
    "wait_until",
]
