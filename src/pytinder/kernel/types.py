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
"""Error tags and structured error details.

Every :class:`~pytinder.kernel.exceptions.PyTinderException` carries an
:class:`ErrorKind` so callers can branch on the failure category without
parsing messages. All types use only the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Classifies a client failure by how the caller should react to it."""

    NOT_AUTHORIZED = "NOT_AUTHORIZED"
    OUT_OF_LIKES = "OUT_OF_LIKES"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    TRANSIENT_HTTP = "TRANSIENT_HTTP"
    GENERIC_HTTP = "GENERIC_HTTP"
    CIRCUIT_OPEN = "CIRCUIT_OPEN"
    TIMEOUT = "TIMEOUT"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    UNKNOWN = "UNKNOWN"

    @property
    def retryable(self) -> bool:
        """Whether the dispatcher may retry a failure of this kind."""
        return self in (ErrorKind.TRANSIENT_HTTP, ErrorKind.TIMEOUT)


@dataclass(frozen=True)
class FieldError:
    """Describes a rejected caller argument."""

    field: str
    message: str
    rejected_value: Any = None
