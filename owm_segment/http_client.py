import logging
import re
import threading
from typing import Dict, Optional

import httpx

from .errors import TransportFailure

logger = logging.getLogger(__name__)

_APPID_RE = re.compile(r"(appid=)[^&]*")


def mask_url(url: str) -> str:
    return _APPID_RE.sub(r"\1***", url)


class HTTPClient:
    _client: Optional[httpx.Client] = None
    _lock = threading.Lock()

    @classmethod
    def get_client(cls) -> httpx.Client:
        if cls._client is None or cls._client.is_closed:
            with cls._lock:
                if cls._client is None or cls._client.is_closed:
                    cls._client = httpx.Client()
                    logger.debug("HTTPClient: created new httpx Client")
        return cls._client

    @classmethod
    def get(cls, url: str, headers: Optional[Dict[str, str]] = None, timeout_ms: int = 20) -> bytes:
        """Single GET, no retries. Any transport or status error becomes TransportFailure."""
        client = cls.get_client()
        try:
            resp = client.get(url, headers=headers, timeout=timeout_ms / 1000.0)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportFailure(
                f"Weather API returned {e.response.status_code} for {mask_url(url)}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportFailure(f"Network error while fetching {mask_url(url)}: {e!r}") from e
        logger.debug("HTTPClient: %s -> %s (%d bytes)", mask_url(url), resp.status_code, len(resp.content))
        return resp.content

    @classmethod
    def close(cls):
        if cls._client and not cls._client.is_closed:
            cls._client.close()
            logger.debug("HTTPClient: Client closed")
        cls._client = None
