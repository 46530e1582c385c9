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
"""Tinder API client."""

from __future__ import annotations

import time
from collections.abc import Callable, Mapping
from datetime import date, datetime, timezone
from typing import Any

import structlog

from pytinder.client.adapters.httpx_adapter import HttpxClientAdapter
from pytinder.client.dispatcher import RequestSpec, ResilientDispatcher
from pytinder.client.ports.outbound import HttpClientPort
from pytinder.client.responses import interpret_response
from pytinder.config.properties.client import TinderProperties
from pytinder.core.config import Config
from pytinder.kernel.exceptions import InvalidArgumentsException, NotAuthorizedException, OutOfLikesException

logger = structlog.get_logger("pytinder.client.tinder")

AUTH_HEADER = "X-Auth-Token"


def _require(field: str, value: Any) -> None:
    if not value:
        raise InvalidArgumentsException(field, value)


def format_activity_date(value: datetime | date | str) -> str:
    """Normalize ``last_activity_date`` to the ISO-8601 form the API expects.

    A ``datetime`` becomes UTC with millisecond precision and a ``Z``
    suffix (naive values are taken as UTC). A plain ``date`` is midnight
    UTC. Strings must be empty or ISO-8601 and are sent as given.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"
    if isinstance(value, str):
        if value:
            try:
                datetime.fromisoformat(value)
            except ValueError:
                raise InvalidArgumentsException("last_activity_date", value) from None
        return value
    raise InvalidArgumentsException("last_activity_date", value)


class TinderClient:
    """Asynchronous client for the Tinder API.

    Every call goes through a :class:`ResilientDispatcher` (one circuit
    breaker per verb, retries for 5xx and transport failures) and its
    response through :func:`interpret_response`. The session token
    obtained by :meth:`authorize` is held on the instance; share one
    client per session.

        async with TinderClient({"retry": {"max_tries": 3}}) as client:
            await client.authorize(fb_token, fb_user_id)
            recs = await client.get_recommendations()

    Args:
        properties: A :class:`TinderProperties`, a partial mapping of
            overrides, or ``None`` for the defaults.
        http_client: Transport to use instead of an owned httpx client.
        clock: Monotonic clock driving the circuit breakers.
    """

    def __init__(
        self,
        properties: TinderProperties | Mapping[str, Any] | None = None,
        *,
        http_client: HttpClientPort | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._properties = TinderProperties.of(properties)
        self._owns_http_client = http_client is None
        self._http_client: HttpClientPort = http_client or HttpxClientAdapter(
            base_url=self._properties.base_url,
            timeout=self._properties.breaker.timeout,
        )
        self._dispatcher = ResilientDispatcher.from_properties(self._http_client, self._properties, clock=clock)
        self._auth_token: str | None = None

    @classmethod
    def from_config(cls, config: Config, **kwargs: Any) -> TinderClient:
        """Create a client from the ``pytinder.client`` section of *config*."""
        return cls(config.bind(TinderProperties), **kwargs)

    @property
    def properties(self) -> TinderProperties:
        return self._properties

    @property
    def dispatcher(self) -> ResilientDispatcher:
        return self._dispatcher

    @property
    def auth_token(self) -> str | None:
        """Session token; assign one to resume a previous session."""
        return self._auth_token

    @auth_token.setter
    def auth_token(self, auth_token: str | None) -> None:
        self._auth_token = auth_token

    # -- lifecycle --

    async def start(self) -> None:
        """No-op -- the client is usable right after construction."""

    async def stop(self) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            await self._http_client.close()

    async def __aenter__(self) -> TinderClient:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    # -- endpoints --

    async def authorize(self, facebook_token: str, facebook_user_id: str) -> Any:
        """Exchange Facebook credentials for a session token."""
        _require("facebook_token", facebook_token)
        _require("facebook_user_id", facebook_user_id)

        body = {
            "facebook_token": facebook_token,
            "facebook_id": facebook_user_id,
            "locale": self._properties.request.locale,
        }
        data = await self._send(RequestSpec("POST", "/auth", json=body))
        self._auth_token = data.get("token") if isinstance(data, Mapping) else None
        logger.info("authorized", authenticated=self._auth_token is not None)
        return data

    async def get_recommendations(self) -> Any:
        return await self._send(RequestSpec("GET", "/user/recs", headers=self._auth_headers()))

    async def get_account(self) -> Any:
        return await self._send(RequestSpec("GET", "/meta", headers=self._auth_headers()))

    async def get_user(self, user_id: str) -> Any:
        _require("user_id", user_id)
        return await self._send(RequestSpec("GET", f"/user/{user_id}", headers=self._auth_headers()))

    async def get_updates(self, last_activity_date: datetime | date | str = "") -> Any:
        """Poll for changes since *last_activity_date* (everything when empty).

        The API takes the date in a POST body rather than a query string.
        """
        activity_date = format_activity_date(last_activity_date)
        headers = self._auth_headers()
        return await self._send(
            RequestSpec("POST", "/updates", headers=headers, json={"last_activity_date": activity_date})
        )

    async def send_message(self, match_id: str, message: str) -> Any:
        _require("match_id", match_id)
        _require("message", message)
        headers = self._auth_headers()
        return await self._send(
            RequestSpec("POST", f"/user/matches/{match_id}", headers=headers, json={"message": message})
        )

    async def like(
        self,
        user_id: str,
        photo_id: str | None = None,
        content_hash: str | None = None,
        s_number: int | str | None = None,
    ) -> Any:
        """Like a user.

        Raises:
            OutOfLikesException: The response reports no likes remaining.
        """
        _require("user_id", user_id)
        headers = self._auth_headers()
        params = {
            name: value
            for name, value in (("photoId", photo_id), ("content_hash", content_hash), ("s_number", s_number))
            if value is not None
        }
        data = await self._send(RequestSpec("GET", f"/like/{user_id}", headers=headers, params=params))
        if data is not None and not (isinstance(data, Mapping) and data.get("likes_remaining")):
            until = data.get("rate_limited_until") if isinstance(data, Mapping) else None
            raise OutOfLikesException(rate_limited_until=until)
        return data

    async def pass_(self, user_id: str) -> Any:
        """Pass on a user (``pass`` is a reserved word)."""
        _require("user_id", user_id)
        return await self._send(RequestSpec("GET", f"/pass/{user_id}", headers=self._auth_headers()))

    # -- helpers --

    def _auth_headers(self) -> dict[str, str]:
        if not self._auth_token:
            raise NotAuthorizedException()
        return {AUTH_HEADER: self._auth_token}

    async def _send(self, spec: RequestSpec) -> Any:
        response = await self._dispatcher.dispatch(spec)
        return interpret_response(response)
