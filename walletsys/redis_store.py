"""Redis-backed string store with read-through JSON caching."""

from __future__ import annotations

import json
import os
from datetime import timedelta
from typing import Any, Callable

import redis

from walletsys import log

_DEFAULT_HOST = "localhost"
_DEFAULT_PORT = 6379


def _split_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        return addr or _DEFAULT_HOST, _DEFAULT_PORT
    return host or _DEFAULT_HOST, int(port) if port else _DEFAULT_PORT


class RedisStore:
    """Thin wrapper around a Redis client."""

    def __init__(self, client) -> None:
        self._client = client

    @classmethod
    def from_env(cls) -> "RedisStore":
        """Connect to ``REDIS_ADDR`` with ``REDIS_PASSWORD`` and ping the server."""
        host, port = _split_addr(os.environ.get("REDIS_ADDR", ""))
        password = os.environ.get("REDIS_PASSWORD") or None
        client = redis.Redis(host=host, port=port, password=password, decode_responses=True)
        client.ping()
        return cls(client)

    def get(self, key: str) -> str | None:
        """Return the stored string, or ``None`` when the key does not exist."""
        value = self._client.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def set_ex(self, key: str, value: Any, expiration: timedelta):
        return self._client.setex(key, expiration, value)

    def delete(self, *args: str) -> int:
        return int(self._client.delete(*args))

    def fetch(self, key: str, expiration: timedelta, fetch: Callable[[], Any]) -> str:
        """Return the cached string or store ``fetch()`` as JSON and return it.

        Redis failures are logged and do not stop the fetch; errors from
        ``fetch`` itself propagate.
        """
        try:
            cached = self.get(key)
        except redis.RedisError as exc:
            log.errorln("Redis.Fetch.Get", key, exc)
        else:
            if cached is not None:
                return cached

        data = json.dumps(fetch(), separators=(",", ":"))

        try:
            self.set_ex(key, data, expiration)
        except redis.RedisError as exc:
            log.errorln("Redis.Fetch.SetEx", key, exc)

        return data