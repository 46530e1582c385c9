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
"""pytinder client: Tinder API client with circuit breaker and retry."""

from pytinder.client.adapters.httpx_adapter import HttpxClientAdapter
from pytinder.client.circuit_breaker import BreakerStats, CircuitBreaker, CircuitState
from pytinder.client.dispatcher import RequestSpec, ResilientDispatcher, is_retryable
from pytinder.client.ports.outbound import HttpClientPort
from pytinder.client.responses import interpret_response, read_body
from pytinder.client.retry import RetryPolicy
from pytinder.client.tinder import TinderClient, format_activity_date

__all__ = [
    "BreakerStats",
    "CircuitBreaker",
    "CircuitState",
    "HttpClientPort",
    "HttpxClientAdapter",
    "RequestSpec",
    "ResilientDispatcher",
    "RetryPolicy",
    "TinderClient",
    "format_activity_date",
    "interpret_response",
    "is_retryable",
    "read_body",
]
