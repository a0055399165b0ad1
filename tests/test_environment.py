import logging

from owm_segment.cache import InMemoryTTLCache
from owm_segment.environment import HostEnvironment
from owm_segment.errors import EmptyWeatherData


class FakeHTTPClient:
    calls = []

    @classmethod
    def get(cls, url, headers=None, timeout_ms=20):
        cls.calls.append((url, headers, timeout_ms))
        return b"{}"


def test_host_environment_delegates_to_collaborators():
    cache = InMemoryTTLCache()
    env = HostEnvironment(cache=cache, http_client=FakeHTTPClient)

    env.cache_set("owm_url", "https://example", 5)
    assert cache.get("owm_url") == "https://example"
    assert env.cache_get("owm_url") == "https://example"

    assert env.http_get("https://example", None, 250) == b"{}"
    assert FakeHTTPClient.calls[-1] == ("https://example", None, 250)


def test_report_error_logs(caplog):
    env = HostEnvironment(cache=InMemoryTTLCache())
    with caplog.at_level(logging.ERROR, logger="owm_segment.environment"):
        env.report_error(EmptyWeatherData("no weather data"))
    assert "EmptyWeatherData: no weather data" in caplog.text
