import sys
from pathlib import Path
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from owm_segment.cache import InMemoryTTLCache


@pytest.fixture(autouse=True)
def _test_env(monkeypatch):
    for name in ("POSH_OWM_API_KEY", "POSH_OWM_LOCATION", "POSH_OWM_LAT", "POSH_OWM_LON", "REDIS_URL"):
        monkeypatch.delenv(name, raising=False)

@pytest.fixture(autouse=True)
def _block_network(monkeypatch, request):
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("network"):
        return

    import httpx

    def _boom(*args, **kwargs):
        raise RuntimeError(
            "Network is blocked in unit tests. "
            "Mock httpx or mark the test with @pytest.mark.network"
        )

    monkeypatch.setattr(httpx.Client, "request", _boom, raising=True)


class FakeEnv:
    """Host environment double: dict-backed env vars, canned HTTP bodies, real TTL cache."""

    def __init__(self, env=None, body=b"", error=None):
        self.env = dict(env or {})
        self.body = body
        self.error = error
        self.cache = InMemoryTTLCache()
        self.requests = []
        self.reported = []

    def getenv(self, name):
        return self.env.get(name, "")

    def http_get(self, url, headers=None, timeout_ms=20):
        self.requests.append((url, timeout_ms))
        if self.error is not None:
            raise self.error
        return self.body

    def cache_get(self, key):
        return self.cache.get(key)

    def cache_set(self, key, value, ttl_minutes):
        self.cache.set(key, value, ttl_minutes)

    def report_error(self, error):
        self.reported.append(error)


@pytest.fixture
def make_env():
    return FakeEnv
