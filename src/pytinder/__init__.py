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
"""pytinder: resilient asynchronous client for the Tinder API."""

from pytinder.client import TinderClient
from pytinder.config.properties import BreakerProperties, RequestProperties, RetryProperties, TinderProperties
from pytinder.core.config import Config
from pytinder.kernel.exceptions import (
    ApplicationException,
    CircuitBreakerException,
    HttpException,
    InvalidArgumentsException,
    NotAuthorizedException,
    OperationTimeoutException,
    OutOfLikesException,
    PyTinderException,
    RetryExhaustedException,
    TransientHttpException,
)
from pytinder.kernel.types import ErrorKind

__version__ = "0.1.0"

__all__ = [
    "ApplicationException",
    "BreakerProperties",
    "CircuitBreakerException",
    "Config",
    "ErrorKind",
    "HttpException",
    "InvalidArgumentsException",
    "NotAuthorizedException",
    "OperationTimeoutException",
    "OutOfLikesException",
    "PyTinderException",
    "RequestProperties",
    "RetryExhaustedException",
    "RetryProperties",
    "TinderClient",
    "TinderProperties",
    "TransientHttpException",
]
