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
"""Tests for RetryPolicy."""

from __future__ import annotations

import asyncio
from datetime import timedelta

import pytest

from pytinder.client.retry import RetryPolicy
from pytinder.config.properties.client import RetryProperties
from pytinder.kernel.exceptions import OperationTimeoutException, RetryExhaustedException


def fast_policy(**overrides):
    options = {"max_attempts": 3, "interval": timedelta(milliseconds=5), "timeout": timedelta(seconds=2)}
    options.update(overrides)
    return RetryPolicy(**options)


class TestRetryPolicy:
    @pytest.mark.asyncio
    async def test_succeeds_first_try(self):
        policy = fast_policy()
        call_count = 0

        async def operation():
            nonlocal call_count
            call_count += 1
            return "ok"

        assert await policy.execute(operation) == "ok"
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_retries_on_failure(self):
        policy = fast_policy()
        call_count = 0

        async def flaky():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ConnectionError("flaky")
            return "ok"

        assert await policy.execute(flaky) == "ok"
        assert call_count == 3

    @pytest.mark.asyncio
    async def test_throw_original_surfaces_last_error(self):
        policy = fast_policy(max_attempts=2)
        call_count = 0

        async def always_fail():
            nonlocal call_count
            call_count += 1
            raise ConnectionError(f"failure {call_count}")

        with pytest.raises(ConnectionError, match="failure 2"):
            await policy.execute(always_fail)
        assert call_count == 2

    @pytest.mark.asyncio
    async def test_wraps_error_without_throw_original(self):
        policy = fast_policy(max_attempts=2, throw_original=False)

        async def always_fail():
            raise ConnectionError("permanent failure")

        with pytest.raises(RetryExhaustedException) as exc_info:
            await policy.execute(always_fail)
        assert exc_info.value.attempts == 2
        assert isinstance(exc_info.value.last_error, ConnectionError)

    @pytest.mark.asyncio
    async def test_only_retries_matching_exceptions(self):
        policy = fast_policy(retry_on=(ConnectionError,))
        call_count = 0

        async def type_error():
            nonlocal call_count
            call_count += 1
            raise TypeError("not retryable")

        with pytest.raises(TypeError):
            await policy.execute(type_error)
        assert call_count == 1

    @pytest.mark.asyncio
    async def test_predicate_selects_retryable_errors(self):
        policy = fast_policy(retry_on=lambda exc: "transient" in str(exc))
        errors = [RuntimeError("transient"), RuntimeError("fatal")]

        async def operation():
            raise errors.pop(0)

        with pytest.raises(RuntimeError, match="fatal"):
            await policy.execute(operation)
        assert errors == []

    @pytest.mark.asyncio
    async def test_overall_timeout_cancels_running_attempt(self):
        policy = fast_policy(timeout=timedelta(milliseconds=50))

        async def hang():
            await asyncio.sleep(5)

        with pytest.raises(OperationTimeoutException):
            await policy.execute(hang)

    @pytest.mark.asyncio
    async def test_no_retry_scheduled_past_the_ceiling(self):
        policy = fast_policy(interval=timedelta(seconds=1), timeout=timedelta(milliseconds=200))
        call_count = 0

        async def always_fail():
            nonlocal call_count
            call_count += 1
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await policy.execute(always_fail)
        assert call_count == 1

    def test_constant_interval_by_default(self):
        policy = RetryPolicy(interval=timedelta(seconds=1))
        assert [policy.delay_for(n) for n in (1, 2, 3)] == [1.0, 1.0, 1.0]

    def test_backoff_is_capped(self):
        policy = RetryPolicy(interval=timedelta(seconds=1), backoff=2.0, max_interval=timedelta(seconds=3))
        assert [policy.delay_for(n) for n in (1, 2, 3, 4)] == [1.0, 2.0, 3.0, 3.0]

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValueError):
            RetryPolicy(max_attempts=0)

    @pytest.mark.asyncio
    async def test_from_properties(self):
        policy = RetryPolicy.from_properties(RetryProperties(max_tries=4, interval=1), retry_on=(ConnectionError,))
        call_count = 0

        async def always_fail():
            nonlocal call_count
            call_count += 1
            raise ConnectionError("down")

        with pytest.raises(ConnectionError):
            await policy.execute(always_fail)
        assert call_count == 4
        assert policy.delay_for(1) == 0.001
