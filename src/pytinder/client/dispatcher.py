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
"""Resilient request dispatcher: circuit breaker and retry around a transport."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
import structlog

from pytinder.client.circuit_breaker import CircuitBreaker
from pytinder.client.ports.outbound import HttpClientPort
from pytinder.client.retry import RetryPolicy
from pytinder.config.properties.client import TinderProperties
from pytinder.kernel.exceptions import PyTinderException, TransientHttpException

logger = structlog.get_logger("pytinder.client.dispatcher")

BREAKER_METHODS = ("GET", "POST")


@dataclass(frozen=True)
class RequestSpec:
    """Description of one outbound call."""

    method: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    json: Any = None
    params: Mapping[str, Any] | None = None

    def request_kwargs(self, base_headers: Mapping[str, str]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"headers": {**base_headers, **self.headers}}
        if self.json is not None:
            kwargs["json"] = self.json
        if self.params:
            kwargs["params"] = dict(self.params)
        return kwargs


def is_retryable(exc: Exception) -> bool:
    """Transport errors, 5xx responses and per-call timeouts are retried."""
    if isinstance(exc, httpx.TransportError):
        return True
    return isinstance(exc, PyTinderException) and exc.kind.retryable


class ResilientDispatcher:
    """Runs every request through ``retry(breaker(transport))``.

    Each HTTP verb gets its own :class:`CircuitBreaker`, so a failing POST
    endpoint does not stop reads. A response is a breaker success whatever
    its status; statuses ``>= 500`` are turned into
    :class:`TransientHttpException` afterwards so that the retry policy
    sees them. Any other response is returned to the caller untouched.

        dispatcher = ResilientDispatcher.from_properties(transport, TinderProperties())
        response = await dispatcher.dispatch(RequestSpec("GET", "/meta"))
    """

    def __init__(
        self,
        http_client: HttpClientPort,
        retry_policy: RetryPolicy,
        breakers: Mapping[str, CircuitBreaker],
        base_headers: Mapping[str, str] | None = None,
    ) -> None:
        self._client = http_client
        self._retry = retry_policy
        self._breakers = dict(breakers)
        self._base_headers = dict(base_headers or {})

    @classmethod
    def from_properties(
        cls,
        http_client: HttpClientPort,
        properties: TinderProperties,
        clock: Callable[[], float] = time.monotonic,
    ) -> ResilientDispatcher:
        breakers = {
            method: CircuitBreaker.from_properties(method, properties.breaker, clock=clock)
            for method in BREAKER_METHODS
        }
        return cls(
            http_client=http_client,
            retry_policy=RetryPolicy.from_properties(properties.retry, retry_on=is_retryable),
            breakers=breakers,
            base_headers=properties.request.headers,
        )

    def breaker(self, method: str) -> CircuitBreaker:
        try:
            return self._breakers[method.upper()]
        except KeyError:
            raise ValueError(f"No circuit breaker configured for {method!r}") from None

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a GET request."""
        return await self.dispatch(RequestSpec("GET", path, **kwargs))

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Send a POST request."""
        return await self.dispatch(RequestSpec("POST", path, **kwargs))

    async def dispatch(self, spec: RequestSpec) -> httpx.Response:
        """Execute *spec* with circuit breaking, 5xx classification and retry."""
        breaker = self.breaker(spec.method)
        kwargs = spec.request_kwargs(self._base_headers)

        async def attempt() -> httpx.Response:
            response = await breaker.call(self._client.request, spec.method, spec.path, **kwargs)
            if response.status_code >= 500:
                raise TransientHttpException(response.status_code, response.reason_phrase)
            return response

        logger.debug("request_dispatched", method=spec.method, path=spec.path)
        return await self._retry.execute(attempt)
