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
"""Translation of raw responses into payloads or classified errors."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from pytinder.kernel.exceptions import ApplicationException, HttpException, NotAuthorizedException

SUCCESS_STATUS = 200


def read_body(response: httpx.Response) -> Any:
    """Decode a JSON body; non-JSON bodies come back as text, empty ones as None."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def interpret_response(response: httpx.Response) -> Any:
    """Return the body of a successful response or raise the matching error.

    Raises:
        NotAuthorizedException: The API answered 401.
        HttpException: Any other status ``>= 300``.
        ApplicationException: A ``< 300`` response whose body carries a
            ``status`` other than 200.
    """
    if response.status_code >= 300:
        if response.status_code == httpx.codes.UNAUTHORIZED:
            raise NotAuthorizedException()
        raise HttpException(response.status_code, response.reason_phrase)

    body = read_body(response)
    if isinstance(body, Mapping):
        status = body.get("status")
        if status and status != SUCCESS_STATUS:
            raise ApplicationException(status, body.get("error"))
    return body
