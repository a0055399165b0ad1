import logging
import os
import threading
import time
from typing import NamedTuple, Optional

import redis

logger = logging.getLogger(__name__)

CACHE_KEY_RESPONSE = "owm_response"
CACHE_KEY_URL = "owm_url"


class InMemoryTTLCache:
    def __init__(self):
        self._store = {}  # key -> (expires_at, value)
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            item = self._store.get(key)
            if not item:
                return None
            expires_at, value = item
            if time.time() >= expires_at:
                del self._store[key]
                return None
            return value

    def set(self, key: str, value: str, ttl_minutes: int) -> None:
        with self._lock:
            self._store[key] = (time.time() + ttl_minutes * 60, value)


class RedisTTLCache:
    def __init__(self, client):
        self._client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisTTLCache":
        return cls(redis.Redis.from_url(url, encoding="utf-8", decode_responses=True))

    def get(self, key: str) -> Optional[str]:
        try:
            return self._client.get(key)
        except redis.RedisError as e:
            logger.warning("cache: redis get %s failed, treating as miss: %r", key, e)
            return None

    def set(self, key: str, value: str, ttl_minutes: int) -> None:
        try:
            self._client.set(key, value, ex=ttl_minutes * 60)
        except redis.RedisError as e:
            logger.warning("cache: redis set %s failed: %r", key, e)


_inmem = InMemoryTTLCache()
_store = None


def get_cache_store():
    global _store
    if _store is None:
        redis_url = os.getenv("REDIS_URL")
        if redis_url:
            try:
                _store = RedisTTLCache.from_url(redis_url)
                logger.debug("cache: using redis")
            except ValueError as e:
                logger.warning("cache: invalid REDIS_URL, falling back to in-memory cache: %r", e)
                _store = _inmem
        else:
            _store = _inmem
    return _store


class Snapshot(NamedTuple):
    body: str
    url: str


def store_snapshot(env, url: str, body: str, ttl_minutes: int) -> None:
    """Write the response body and its request URL together."""
    env.cache_set(CACHE_KEY_RESPONSE, body, ttl_minutes)
    env.cache_set(CACHE_KEY_URL, url, ttl_minutes)


def load_snapshot(env) -> Optional[Snapshot]:
    """
    Read a cached response. Returns None on a miss.

    The URL is informational only, so a missing URL entry still yields a
    snapshot with an empty url.
    """
    body = env.cache_get(CACHE_KEY_RESPONSE)
    if body is None:
        return None
    url = env.cache_get(CACHE_KEY_URL) or ""
    return Snapshot(body=body, url=url)
