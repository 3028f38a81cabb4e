# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""Key-value client backed by Redis.

A thin pass-through over ``redis.asyncio``: each call maps to exactly one
store command. There is no retry, queueing or serialization here; store
errors reach the caller unchanged.
"""

from collections.abc import Awaitable, Callable, Mapping
import inspect
import logging
from typing import Any

from redis.asyncio import Redis

from .settings import settings

logger = logging.getLogger(__name__)

ConnectCallback = Callable[[Exception | None], Awaitable[None] | None]


class RedisClient:
    """Read and write values in a Redis store.

    Args:
        host: Store host name. Defaults to the ``redis.host`` setting.
        port: Store TCP port. Defaults to the ``redis.port`` setting.
        db: Logical database index
        password: AUTH password, if the store requires one
        decode_responses: Return values as str rather than bytes. Defaults to
            the ``redis.decode_responses`` setting.
        on_connect: Called by ``connect()`` with ``None`` once the store
            answers, or with the exception that prevented it
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        db: int | None = None,
        password: str | None = None,
        decode_responses: bool | None = None,
        on_connect: ConnectCallback | None = None,
    ) -> None:
        redis_settings = settings.redis
        self.host = host or redis_settings.host
        self.port = port or redis_settings.port
        self.db = redis_settings.db if db is None else db
        self.password = password if password is not None else redis_settings.password
        self.decode_responses = (
            redis_settings.decode_responses if decode_responses is None else decode_responses
        )
        self._on_connect = on_connect

        # The connection pool connects lazily on the first command
        self._client = Redis(
            host=self.host,
            port=self.port,
            db=self.db,
            password=self.password,
            socket_timeout=redis_settings.socket_timeout_seconds,
            decode_responses=self.decode_responses,
        )

    @classmethod
    def from_gateway_config(
        cls,
        edgemicro: Mapping[str, Any],
        on_connect: ConnectCallback | None = None,
    ) -> "RedisClient":
        """Build a client from the ``edgemicro`` section of a gateway configuration.

        Uses ``redisHost``, ``redisPort``, ``redisDb`` and ``redisPassword``;
        missing fields fall back to the package settings.
        """
        return cls(
            edgemicro.get("redisHost"),
            edgemicro.get("redisPort"),
            db=edgemicro.get("redisDb"),
            password=edgemicro.get("redisPassword"),
            on_connect=on_connect,
        )

    async def connect(self) -> None:
        """Check the connection and report the outcome to ``on_connect``.

        Raises:
            redis.exceptions.RedisError: If the store cannot be reached
        """
        try:
            await self._client.ping()
        except Exception as e:
            logger.warning("Redis at %s:%s is unreachable: %s", self.host, self.port, e)
            await self._notify(e)
            raise

        logger.debug("Connected to Redis at %s:%s db=%s", self.host, self.port, self.db)
        await self._notify(None)

    async def _notify(self, error: Exception | None) -> None:
        if self._on_connect is None:
            return
        outcome = self._on_connect(error)
        if inspect.isawaitable(outcome):
            await outcome

    async def read(self, key: str) -> Any | None:
        """Return the value stored under ``key``, or None when there is none."""
        return await self._client.get(key)

    async def write(self, key: str, value: Any) -> bool:
        """Store ``value`` under ``key`` and return the store's acknowledgement."""
        return bool(await self._client.set(key, value))

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RedisClient":
        try:
            await self.connect()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
