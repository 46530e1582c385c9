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
"""Shared fakes for client tests."""

from __future__ import annotations

from typing import Any

import httpx
import pytest


class FakeHttpClient:
    """Scripted HttpClientPort: plays back outcomes, the last one repeats."""

    def __init__(self, *outcomes: httpx.Response | Exception) -> None:
        self.outcomes: list[httpx.Response | Exception] = list(outcomes) or [httpx.Response(200, json={})]
        self.calls: list[dict[str, Any]] = []
        self.closed = False

    def queue(self, *outcomes: httpx.Response | Exception) -> None:
        self.outcomes = list(outcomes)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def close(self) -> None:
        self.closed = True


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# Durations in milliseconds; keeps retries fast.
FAST_PROPERTIES: dict[str, Any] = {
    "retry": {"max_tries": 3, "interval": 1, "timeout": 2000},
    "breaker": {"timeout": 1000, "wait_threshold": 4, "threshold": 50, "circuit_duration": 60_000},
}


@pytest.fixture
def fast_properties() -> dict[str, Any]:
    return {section: dict(values) for section, values in FAST_PROPERTIES.items()}
