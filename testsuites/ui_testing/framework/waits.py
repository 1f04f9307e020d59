# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Bounded waiting for UI state that Playwright's `expect` cannot express
# directly (e.g. "line item count becomes > 0").
#
# Key Features:
#   - Named timeout budgets shared by every page object
#   - Bounded async polling with optional backoff
#   - Failure message carries the last observed value
#   - Allure integration for step reporting
#
# Usage:
#   count = await poll_until(items.count, lambda n: n > 0,
#                            description="cart line items loaded")
#
# ================================================================================

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar, Union

import allure
from loguru import logger


T = TypeVar("T")


# Timeouts in milliseconds, Playwright's unit.
TIMEOUTS: Dict[str, int] = {
    "default": 15_000,
    "radio_checked": 10_000,
    "checkout_start": 20_000,
    "payment": 20_000,
    "confirmation": 30_000,
    "order_complete": 90_000,
}

SCENARIO_TIMEOUT_SECONDS = 120.0


def timeout_for(name: str) -> int:
    """
    Get the timeout budget (ms) for a named wait.

    Args:
        name: Budget name (e.g., "payment", "order_complete")

    Returns:
        Timeout in milliseconds, or the default budget if not found
    """
    return TIMEOUTS.get(name, TIMEOUTS["default"])


@dataclass
class PollConfig:
    """
    Configuration for a polling wait.

    Attributes:
        timeout: Total timeout in seconds
        interval: Initial interval between probes in seconds
        multiplier: Interval growth factor (1.0 = fixed interval)
        max_interval: Upper bound for the interval
    """
    timeout: float = 15.0
    interval: float = 0.25
    multiplier: float = 1.5
    max_interval: float = 2.0

    def next_interval(self, current: float) -> float:
        return min(current * self.multiplier, self.max_interval)


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""

    def __init__(self, message: str, last_value: Any = None, last_error: Optional[str] = None):
        super().__init__(message)
        self.last_value = last_value
        self.last_error = last_error


async def _call(probe: Callable[[], Union[T, Awaitable[T]]]) -> T:
    result = probe()
    if inspect.isawaitable(result):
        result = await result
    return result


async def poll_until(
    probe: Callable[[], Union[T, Awaitable[T]]],
    predicate: Callable[[T], bool],
    description: str = "condition",
    timeout: Optional[float] = None,
    config: Optional[PollConfig] = None,
) -> T:
    """
    Poll ``probe`` until ``predicate(value)`` holds or the timeout expires.

    The probe is always evaluated at least once, and once more right at the
    deadline, so a condition that becomes true on the last tick still passes.
    Probe exceptions count as "not yet" and are reported if the wait fails.

    Args:
        probe: Sync or async callable returning the observed value
        predicate: Condition on the observed value
        description: Human-readable description for logs and failures
        timeout: Timeout in seconds (overrides ``config.timeout``)
        config: Poll interval settings

    Returns:
        The first observed value satisfying the predicate

    Raises:
        WaitTimeoutError: With the last observed value and last probe error
    """
    config = config or PollConfig()
    deadline_s = config.timeout if timeout is None else timeout
    interval = config.interval
    start = time.monotonic()
    attempt = 0
    last_value: Any = None
    last_error: Optional[str] = None

    with allure.step(f"Wait until: {description}"):
        while True:
            attempt += 1
            try:
                last_value = await _call(probe)
                if predicate(last_value):
                    logger.debug(
                        f"Wait satisfied after {attempt} attempt(s) "
                        f"({time.monotonic() - start:.2f}s): {description}"
                    )
                    return last_value
            except Exception as e:
                last_error = f"{type(e).__name__}: {e}"
                logger.debug(f"Probe for '{description}' raised: {last_error}")

            elapsed = time.monotonic() - start
            if elapsed >= deadline_s:
                message = (
                    f"Timeout after {elapsed:.1f}s waiting for: {description}. "
                    f"Last observed: {last_value!r}"
                )
                if last_error:
                    message += f", last error: {last_error}"
                logger.error(message)
                raise WaitTimeoutError(message, last_value=last_value, last_error=last_error)

            await asyncio.sleep(min(interval, max(deadline_s - elapsed, 0)))
            interval = config.next_interval(interval)


__all__ = [
    "PollConfig",
    "SCENARIO_TIMEOUT_SECONDS",
    "TIMEOUTS",
    "WaitTimeoutError",
    "poll_until",
    "timeout_for",
]
