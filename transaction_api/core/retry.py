import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Optional, TypeVar

from transaction_api.core.errors import RetryExhaustedError

T = TypeVar("T")

Backoff = Callable[[int], float]
FailureHook = Callable[[int, int, BaseException], None]


def constant_backoff(delay: float) -> Backoff:
    """Wait the same ``delay`` seconds after every failed attempt"""
    return lambda attempt: delay


@dataclass
class RetryPolicy:
    """Bounded retry of an async operation.

    ``backoff`` maps the 1-based number of the attempt that just failed to the
    number of seconds to wait before the next one. ``sleep`` is injectable so
    the policy can be exercised without wall-clock delay.
    """

    max_attempts: int = 30
    backoff: Backoff = field(default_factory=lambda: constant_backoff(1.0))
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        on_failure: Optional[FailureHook] = None,
    ) -> T:
        last_error: Optional[BaseException] = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                return await operation()
            except Exception as e:
                last_error = e
                if on_failure is not None:
                    on_failure(attempt, self.max_attempts, e)
                await self.sleep(self.backoff(attempt))

        raise RetryExhaustedError(self.max_attempts, last_error)
