"""
Timeout and bounded exponential-backoff retry for provider calls.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from ...common.exceptions import ProviderError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    timeout_s: float  # per attempt
    retries: int = 2
    backoff_ms: float = 200.0
    deadline_s: Optional[float] = None  # whole attempt chain

    def delay_for(self, retry_number: int) -> float:
        """Seconds to wait before retry ``retry_number`` (1-based)."""
        return (self.backoff_ms / 1000.0) * (2 ** (retry_number - 1))


FLOW_POLICY = RetryPolicy(timeout_s=6.0, retries=2, backoff_ms=200.0)
INCIDENTS_POLICY = RetryPolicy(timeout_s=8.0, retries=2, backoff_ms=300.0)
ROUTING_POLICY = RetryPolicy(timeout_s=8.0, retries=2, backoff_ms=300.0, deadline_s=8.0)


def is_retriable(exc: BaseException) -> bool:
    """Timeouts, I/O errors and 5xx are retried; 4xx and bad bodies are not."""
    if isinstance(exc, ProviderError):
        return exc.retriable
    return isinstance(exc, (asyncio.TimeoutError, TimeoutError, OSError))


async def call_with_retry(
    func: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """
    Awaits ``func()`` under ``policy``. The last error is re-raised once the
    retries are spent or as soon as a non-retriable error occurs.
    """
    async def attempts() -> T:
        retry = 0
        while True:
            try:
                return await asyncio.wait_for(func(), timeout=policy.timeout_s)
            except Exception as e:
                if retry >= policy.retries or not is_retriable(e):
                    raise
                retry += 1
                delay = policy.delay_for(retry)
                logger.debug(f"Retry {retry}/{policy.retries} in {delay:.2f}s after: {e!r}")
                await sleep(delay)

    if policy.deadline_s is None:
        return await attempts()
    return await asyncio.wait_for(attempts(), timeout=policy.deadline_s)
