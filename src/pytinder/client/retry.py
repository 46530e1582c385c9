# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Retry with a fixed or growing interval and an overall time ceiling."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

import structlog

from pytinder.config.properties.client import RetryProperties
from pytinder.kernel.exceptions import OperationTimeoutException, RetryExhaustedException

logger = structlog.get_logger("pytinder.client.retry")

RetryPredicate = Callable[[Exception], bool]


class _CeilingReached(Exception):
    """The overall retry timeout elapsed while an attempt was running."""


class RetryPolicy:
    """Retry policy with an overall wall-clock ceiling.

    The first retry waits ``interval``; each later one multiplies the
    previous delay by ``backoff`` (``1.0`` keeps it constant), capped at
    ``max_interval``. No retry is scheduled that would start after the
    ``timeout`` ceiling, and a running attempt is cancelled when the
    ceiling is reached.

    When retries run out, ``throw_original`` re-raises the last underlying
    error; otherwise :class:`RetryExhaustedException` wraps it.

    Args:
        max_attempts: Maximum number of attempts (including the first).
        interval: Delay before the first retry.
        timeout: Overall ceiling for all attempts and delays, or ``None``.
        throw_original: Surface the last error instead of a wrapper.
        backoff: Multiplier applied to the delay after each retry.
        max_interval: Upper bound for a single delay.
        retry_on: Exception types to retry on, or a predicate. Defaults to all.
    """

    def __init__(
        self,
        max_attempts: int = 2,
        interval: timedelta = timedelta(seconds=1),
        timeout: timedelta | None = timedelta(seconds=16),
        throw_original: bool = True,
        backoff: float = 1.0,
        max_interval: timedelta | None = None,
        retry_on: tuple[type[Exception], ...] | RetryPredicate = (Exception,),
    ) -> None:
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._max_attempts = max_attempts
        self._interval = interval.total_seconds()
        self._timeout = timeout.total_seconds() if timeout is not None else None
        self._throw_original = throw_original
        self._backoff = backoff
        self._max_interval = max_interval.total_seconds() if max_interval is not None else None
        self._retry_on = retry_on

    @classmethod
    def from_properties(
        cls,
        properties: RetryProperties,
        retry_on: tuple[type[Exception], ...] | RetryPredicate = (Exception,),
    ) -> RetryPolicy:
        return cls(
            max_attempts=properties.max_tries,
            interval=properties.interval,
            timeout=properties.timeout,
            throw_original=properties.throw_original,
            backoff=properties.backoff,
            max_interval=properties.max_interval,
            retry_on=retry_on,
        )

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        delay = self._interval * (self._backoff ** (attempt - 1))
        if self._max_interval is not None:
            delay = min(delay, self._max_interval)
        return delay

    async def execute(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """Execute a function with retry logic."""
        started = time.monotonic()
        last_exception: Exception | None = None
        attempts = 0

        while attempts < self._max_attempts:
            attempts += 1
            try:
                return await self._attempt(started, func, *args, **kwargs)
            except _CeilingReached:
                break
            except Exception as exc:
                if not self._should_retry(exc):
                    raise
                last_exception = exc

            if attempts >= self._max_attempts:
                break
            delay = self.delay_for(attempts)
            if self._timeout is not None and time.monotonic() - started + delay >= self._timeout:
                break
            logger.info("retry_scheduled", attempt=attempts, delay=delay, error=str(last_exception))
            await asyncio.sleep(delay)

        raise self._give_up(attempts, last_exception)

    async def _attempt(self, started: float, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        if self._timeout is None:
            return await func(*args, **kwargs)
        remaining = self._timeout - (time.monotonic() - started)
        if remaining <= 0:
            raise _CeilingReached
        try:
            return await asyncio.wait_for(func(*args, **kwargs), timeout=remaining)
        except TimeoutError as exc:
            raise _CeilingReached from exc

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(self._retry_on, tuple):
            return isinstance(exc, self._retry_on)
        return self._retry_on(exc)

    def _give_up(self, attempts: int, last_exception: Exception | None) -> Exception:
        logger.warning("retry_exhausted", attempts=attempts, error=str(last_exception))
        if last_exception is None:
            return OperationTimeoutException(
                f"operation timed out after {self._timeout}s",
                context={"timeout": self._timeout, "attempts": attempts},
            )
        if self._throw_original:
            return last_exception
        return RetryExhaustedException(attempts, last_exception)
