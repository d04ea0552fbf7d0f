"""Retry policy for polling asynchronous remote work.

Asset processing on the content store is asynchronous: after requesting
processing the client has to poll until the file URL appears.  The policy
for that loop (how many attempts, how long to wait before each one, and an
overall deadline) is a value object so it can come from configuration and
be swapped for a zero-delay policy in tests.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from mural_publisher.utils.logging import get_logger

_T = TypeVar("_T")


def linear_backoff(base_delay: float) -> Callable[[int], float]:
    """Return a backoff function waiting ``base_delay * attempt`` seconds."""

    def _delay(attempt: int) -> float:
        return base_delay * attempt

    return _delay


class RetryExhaustedError(Exception):
    """Raised by :func:`poll_until` when no attempt satisfied the condition."""

    def __init__(self, attempts: int, timed_out: bool = False) -> None:
        self.attempts = attempts
        self.timed_out = timed_out
        reason = "timed out" if timed_out else "exhausted"
        super().__init__(f"Polling {reason} after {attempts} attempt(s)")


@dataclass(frozen=True)
class RetryPolicy:
    """Bounded polling policy.

    Parameters
    ----------
    max_attempts:
        Number of polls before giving up.  Must be at least 1.
    base_delay:
        Seconds fed to the default linear backoff (``base_delay * attempt``).
    timeout:
        Overall deadline in seconds for the whole polling loop, or ``None``
        for no deadline beyond the attempt budget.
    backoff:
        Optional custom backoff; receives the 1-based attempt number and
        returns the seconds to wait before that attempt.
    """

    max_attempts: int = 10
    base_delay: float = 2.0
    timeout: float | None = 120.0
    backoff: Callable[[int], float] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be positive when set")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait before the given 1-based attempt."""
        if self.backoff is not None:
            return max(0.0, self.backoff(attempt))
        return linear_backoff(self.base_delay)(attempt)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> RetryPolicy:
        """Build a policy from the ``asset_processing`` config section."""
        timeout = config.get("timeout")
        return cls(
            max_attempts=int(config.get("max_attempts", cls.max_attempts)),
            base_delay=float(config.get("base_delay", cls.base_delay)),
            timeout=float(timeout) if timeout else None,
        )


async def poll_until(
    fetch: Callable[[], Awaitable[_T]],
    is_done: Callable[[_T], bool],
    policy: RetryPolicy,
    *,
    label: str = "",
) -> _T:
    """Call *fetch* until *is_done* accepts its result.

    Waits ``policy.delay_for(attempt)`` before every attempt.  Exceptions
    raised by *fetch* propagate unchanged.  The loop is an ordinary
    coroutine, so cancelling the calling task cancels the wait.

    Raises
    ------
    RetryExhaustedError
        When every attempt was used, or the overall timeout elapsed.
    """
    attempts = 0

    async def _loop() -> _T:
        nonlocal attempts
        for attempt in range(1, policy.max_attempts + 1):
            attempts = attempt
            await asyncio.sleep(policy.delay_for(attempt))
            result = await fetch()
            if is_done(result):
                return result
            get_logger(__name__).debug("poll_not_ready", label=label, attempt=attempt)
        raise RetryExhaustedError(attempts)

    if policy.timeout is None:
        return await _loop()
    try:
        return await asyncio.wait_for(_loop(), timeout=policy.timeout)
    except asyncio.TimeoutError as exc:
        raise RetryExhaustedError(attempts, timed_out=True) from exc
