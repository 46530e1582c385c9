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
"""Client configuration properties (pytinder.client.*).

Durations accept a :class:`~datetime.timedelta`, a number of milliseconds,
or an ISO-8601 duration string. Partial overrides are merged over the
defaults once, at construction; the resulting models are frozen.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import timedelta
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator

from pytinder.core.config import config_properties

BASE_URL = "https://api.gotinder.com"

DEFAULT_HEADERS: dict[str, str] = {
    "User-Agent": "Tinder Android Version 4.5.5",
    "os_version": "23",
    "platform": "android",
    "app-version": "854",
    "Accept-Language": "en",
}


def _from_millis(value: Any) -> Any:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return timedelta(milliseconds=value)
    if isinstance(value, str) and value.strip().lstrip("-").replace(".", "", 1).isdigit():
        return timedelta(milliseconds=float(value))
    return value


Millis = Annotated[timedelta, BeforeValidator(_from_millis)]


class _Properties(BaseModel):
    """Frozen properties model that also accepts the upstream option spellings.

    Alias keys such as ``circuitDuration`` or ``max-tries`` are folded onto
    the field name before validation, and an alias wins over the field name.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _fold_aliases(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        folded = dict(data)
        for name, field in cls.model_fields.items():
            alias = field.validation_alias
            if not isinstance(alias, AliasChoices):
                continue
            for choice in alias.choices:
                if isinstance(choice, str) and choice != name and choice in folded:
                    folded[name] = folded.pop(choice)
        return folded


class RequestProperties(_Properties):
    """Base request shaping applied to every call."""

    headers: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))
    locale: str = "en"

    @field_validator("headers", mode="before")
    @classmethod
    def _merge_default_headers(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {**DEFAULT_HEADERS, **{str(k): str(v) for k, v in value.items()}}
        return value


class RetryProperties(_Properties):
    """Retry policy: attempts, spacing and overall wall-clock ceiling."""

    max_tries: int = Field(default=2, ge=1, validation_alias=AliasChoices("max_tries", "max-tries"))
    interval: Millis = timedelta(seconds=1)
    timeout: Millis = timedelta(seconds=16)
    throw_original: bool = Field(default=True, validation_alias=AliasChoices("throw_original", "throw-original"))
    backoff: float = Field(default=1.0, ge=1.0)
    max_interval: Millis | None = Field(
        default=None, validation_alias=AliasChoices("max_interval", "max-interval")
    )


class BreakerProperties(_Properties):
    """Circuit-breaker policy shared by the GET and POST breakers."""

    timeout: Millis = timedelta(seconds=12)
    threshold: float = Field(default=80.0, gt=0, le=100)
    circuit_duration: Millis = Field(
        default=timedelta(hours=3),
        validation_alias=AliasChoices("circuit_duration", "circuitDuration", "circuit-duration"),
    )
    bucket_span: Millis = Field(
        default=timedelta(seconds=1), validation_alias=AliasChoices("bucket_span", "bucketSpan", "bucket-span")
    )
    bucket_count: int = Field(
        default=60, ge=1, validation_alias=AliasChoices("bucket_count", "bucketNum", "bucket-count")
    )
    wait_threshold: int = Field(
        default=100, ge=1, validation_alias=AliasChoices("wait_threshold", "waitThreshold", "wait-threshold")
    )
    half_open_max_calls: int = Field(
        default=1, ge=1, validation_alias=AliasChoices("half_open_max_calls", "half-open-max-calls")
    )


@config_properties(prefix="pytinder.client")
class TinderProperties(_Properties):
    """Configuration for :class:`~pytinder.client.tinder.TinderClient`."""

    base_url: str = Field(default=BASE_URL, validation_alias=AliasChoices("base_url", "base-url"))
    request: RequestProperties = Field(default_factory=RequestProperties)
    retry: RetryProperties = Field(default_factory=RetryProperties)
    breaker: BreakerProperties = Field(default_factory=BreakerProperties)

    @classmethod
    def of(cls, options: TinderProperties | Mapping[str, Any] | None = None) -> TinderProperties:
        """Build properties from a model, a partial mapping, or nothing."""
        if options is None:
            return cls()
        if isinstance(options, TinderProperties):
            return options
        return cls.model_validate(dict(options))
