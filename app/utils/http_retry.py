import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Dict, FrozenSet, Iterable, Optional

import httpx

logger = logging.getLogger(__name__)

UA_CHROME = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

DEFAULT_RETRY_STATUS_CODES = frozenset([408, 429, *range(500, 600)])

# Failures with no usable response that are worth another attempt
RETRYABLE_ERRORS = (httpx.TimeoutException, httpx.NetworkError, asyncio.TimeoutError)

Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Fixed-delay retry policy for idempotent GET requests"""
    attempts: int = 3
    delay: float = 1.0
    status_codes: FrozenSet[int] = field(default_factory=lambda: DEFAULT_RETRY_STATUS_CODES)

    @classmethod
    def build(cls, attempts: int, delay: float, status_codes: Iterable[int]) -> "RetryPolicy":
        return cls(attempts=max(1, attempts), delay=delay, status_codes=frozenset(status_codes))

    def should_retry(self, status_code: int) -> bool:
        return status_code in self.status_codes


class HttpRetryClient:
    """
    GET with an explicit retry loop.
    Retries on the policy's status codes and on timeouts/network errors,
    sleeping a fixed delay between attempts. The sleep is injectable so
    tests can run without waiting.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        policy: Optional[RetryPolicy] = None,
        sleep: Sleep = asyncio.sleep
    ):
        self.client = client
        self.policy = policy or RetryPolicy()
        self.sleep = sleep

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, str]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> httpx.Response:
        """
        Returns the first non-retryable response, or the last response once
        attempts are exhausted. Re-raises the transport error of the final
        attempt. The timeout bounds each whole attempt, body included.
        """
        attempts = self.policy.attempts

        for attempt in range(1, attempts + 1):
            try:
                resp = await asyncio.wait_for(
                    self.client.get(url, params=params, headers=headers, timeout=timeout),
                    timeout=timeout
                )
            except RETRYABLE_ERRORS as e:
                if attempt >= attempts:
                    raise
                logger.info(f"Retry attempt #{attempt} after {type(e).__name__}: {str(e) or 'timed out'}")
                await self.sleep(self.policy.delay)
                continue

            if self.policy.should_retry(resp.status_code) and attempt < attempts:
                logger.info(f"Retry attempt #{attempt} after HTTP {resp.status_code}")
                await self.sleep(self.policy.delay)
                continue

            return resp

        # attempts is always >= 1, so the loop returns or raises
        raise RuntimeError("retry loop exited without a result")
