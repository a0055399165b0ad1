import logging
import os
from typing import Dict, Optional, Protocol

from .cache import get_cache_store
from .http_client import HTTPClient

logger = logging.getLogger(__name__)


class Environment(Protocol):
    def getenv(self, name: str) -> str: ...

    def http_get(self, url: str, headers: Optional[Dict[str, str]], timeout_ms: int) -> bytes: ...

    def cache_get(self, key: str) -> Optional[str]: ...

    def cache_set(self, key: str, value: str, ttl_minutes: int) -> None: ...

    def report_error(self, error: Exception) -> None: ...


class HostEnvironment:
    def __init__(self, cache=None, http_client=HTTPClient):
        self._cache = cache if cache is not None else get_cache_store()
        self._http = http_client

    def getenv(self, name: str) -> str:
        return os.getenv(name, "")

    def http_get(self, url, headers=None, timeout_ms=20):
        return self._http.get(url, headers=headers, timeout_ms=timeout_ms)

    def cache_get(self, key):
        return self._cache.get(key)

    def cache_set(self, key, value, ttl_minutes):
        self._cache.set(key, value, ttl_minutes)

    def report_error(self, error):
        logger.error("%s: %s", type(error).__name__, error)
