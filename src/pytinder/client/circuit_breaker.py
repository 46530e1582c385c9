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
"""Circuit breaker with a rolling failure-rate window."""

from __future__ import annotations

import asyncio
import threading
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, auto
from typing import Any

import structlog

from pytinder.config.properties.client import BreakerProperties
from pytinder.kernel.exceptions import CircuitBreakerException
from pytinder.resilience.time_limiter import time_limiter

logger = structlog.get_logger("pytinder.client.circuit_breaker")


class CircuitState(Enum):
    """Circuit breaker states."""

    CLOSED = auto()
    OPEN = auto()
    HALF_OPEN = auto()


@dataclass
class _Bucket:
    started_at: float
    successes: int = 0
    failures: int = 0


@dataclass(frozen=True)
class BreakerStats:
    """Snapshot of the calls recorded in the rolling window."""

    successes: int
    failures: int

    @property
    def total(self) -> int:
        return self.successes + self.failures

    @property
    def failure_rate(self) -> float:
        """Failure percentage (0-100) over the window."""
        if self.total == 0:
            return 0.0
        return self.failures * 100.0 / self.total


class CircuitBreaker:
    """Circuit breaker that opens on a high failure *rate*.

    Outcomes are counted in ``bucket_count`` buckets of ``bucket_span``
    each. Once the window holds at least ``wait_threshold`` calls and the
    failure percentage reaches ``threshold``, the circuit opens and every
    call is rejected with :class:`CircuitBreakerException` for
    ``circuit_duration``. The circuit then turns half-open and admits up to
    ``half_open_max_calls`` concurrent probes: a successful probe closes it
    and clears the window, a failed one opens it again.

    Every call is bounded by ``timeout``; a call that exceeds it raises
    :class:`~pytinder.kernel.exceptions.OperationTimeoutException` and is
    counted as a failure.

    Bookkeeping happens under a lock that is never held across an
    ``await``, so one breaker may be shared by concurrent calls.

    Args:
        name: Identifier used in errors and log events.
        timeout: Per-call time limit.
        threshold: Failure percentage (0-100] that opens the circuit.
        circuit_duration: How long the circuit stays open.
        bucket_span: Width of one statistics bucket.
        bucket_count: Number of buckets in the rolling window.
        wait_threshold: Minimum calls in the window before the rate is evaluated.
        half_open_max_calls: Concurrent probes admitted while half-open.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        name: str = "default",
        timeout: timedelta = timedelta(seconds=12),
        threshold: float = 80.0,
        circuit_duration: timedelta = timedelta(hours=3),
        bucket_span: timedelta = timedelta(seconds=1),
        bucket_count: int = 60,
        wait_threshold: int = 100,
        half_open_max_calls: int = 1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not 0 < threshold <= 100:
            raise ValueError(f"threshold must be in (0, 100], got {threshold}")
        self.name = name
        self._timeout = timeout
        self._threshold = threshold
        self._circuit_duration = circuit_duration.total_seconds()
        self._bucket_span = bucket_span.total_seconds()
        self._window = self._bucket_span * bucket_count
        self._wait_threshold = wait_threshold
        self._half_open_max_calls = half_open_max_calls
        self._clock = clock

        self._lock = threading.Lock()
        self._buckets: deque[_Bucket] = deque(maxlen=bucket_count)
        self._state = CircuitState.CLOSED
        self._opened_at: float | None = None
        self._probes_in_flight = 0

    @classmethod
    def from_properties(
        cls,
        name: str,
        properties: BreakerProperties,
        clock: Callable[[], float] = time.monotonic,
    ) -> CircuitBreaker:
        return cls(
            name=name,
            timeout=properties.timeout,
            threshold=properties.threshold,
            circuit_duration=properties.circuit_duration,
            bucket_span=properties.bucket_span,
            bucket_count=properties.bucket_count,
            wait_threshold=properties.wait_threshold,
            half_open_max_calls=properties.half_open_max_calls,
            clock=clock,
        )

    @property
    def state(self) -> CircuitState:
        """Current circuit state, accounting for the open duration."""
        with self._lock:
            return self._current_state()

    def stats(self) -> BreakerStats:
        """Counts recorded in the current rolling window."""
        with self._lock:
            return self._window_stats(self._clock())

    async def call(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """Execute a function through the circuit breaker."""
        probe = self._acquire()
        limited = time_limiter(self._timeout)(func)

        try:
            result = await limited(*args, **kwargs)
        except asyncio.CancelledError:
            self._release(probe)
            raise
        except Exception:
            self._on_failure(probe)
            raise

        self._on_success(probe)
        return result

    # -- state machine (lock held by callers of the underscore helpers) --

    def _current_state(self) -> CircuitState:
        if self._state is CircuitState.OPEN and self._opened_at is not None:
            if self._clock() - self._opened_at >= self._circuit_duration:
                self._state = CircuitState.HALF_OPEN
                self._probes_in_flight = 0
                logger.info("circuit_half_open", circuit=self.name)
        return self._state

    def _acquire(self) -> bool:
        """Admit a call or raise; returns True when the call is a half-open probe."""
        with self._lock:
            state = self._current_state()
            if state is CircuitState.OPEN:
                now = self._clock()
                remaining = self._circuit_duration - (now - (self._opened_at or now))
                raise CircuitBreakerException(
                    f"Circuit breaker '{self.name}' is open",
                    context={"circuit": self.name, "retry_after": max(remaining, 0.0)},
                )
            if state is CircuitState.HALF_OPEN:
                if self._probes_in_flight >= self._half_open_max_calls:
                    raise CircuitBreakerException(
                        f"Circuit breaker '{self.name}' is half-open and probing",
                        context={"circuit": self.name},
                    )
                self._probes_in_flight += 1
                return True
            return False

    def _release(self, probe: bool) -> None:
        if probe:
            with self._lock:
                self._probes_in_flight = max(self._probes_in_flight - 1, 0)

    def _on_success(self, probe: bool) -> None:
        with self._lock:
            if probe and self._state is CircuitState.HALF_OPEN:
                self._state = CircuitState.CLOSED
                self._opened_at = None
                self._probes_in_flight = 0
                self._buckets.clear()
                logger.info("circuit_closed", circuit=self.name)
                return
            self._bucket(self._clock()).successes += 1

    def _on_failure(self, probe: bool) -> None:
        with self._lock:
            now = self._clock()
            if probe and self._state is CircuitState.HALF_OPEN:
                self._probes_in_flight = max(self._probes_in_flight - 1, 0)
                self._trip(now, reason="probe_failed")
                return
            self._bucket(now).failures += 1
            if self._state is not CircuitState.CLOSED:
                return
            stats = self._window_stats(now)
            if stats.total >= self._wait_threshold and stats.failure_rate >= self._threshold:
                self._trip(now, reason="failure_rate", failure_rate=stats.failure_rate, calls=stats.total)

    def _trip(self, now: float, **details: Any) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = now
        logger.warning("circuit_opened", circuit=self.name, duration=self._circuit_duration, **details)

    def _bucket(self, now: float) -> _Bucket:
        if not self._buckets or now - self._buckets[-1].started_at >= self._bucket_span:
            self._buckets.append(_Bucket(started_at=now))
        return self._buckets[-1]

    def _window_stats(self, now: float) -> BreakerStats:
        horizon = now - self._window
        while self._buckets and self._buckets[0].started_at <= horizon:
            self._buckets.popleft()
        return BreakerStats(
            successes=sum(b.successes for b in self._buckets),
            failures=sum(b.failures for b in self._buckets),
        )
