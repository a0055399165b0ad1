from dataclasses import dataclass
from typing import Any, Mapping, Optional

from dotenv import load_dotenv

from .errors import MissingAPIKey

load_dotenv()

# segment property names
API_KEY = "api_key"
API_KEY_ALIAS = "apiKey"
LOCATION = "location"
LATITUDE = "lat"
LONGITUDE = "lon"
UNITS = "units"
CACHE_TIMEOUT = "cache_timeout"
HTTP_TIMEOUT = "http_timeout"

# environment fallbacks
POSH_OWM_API_KEY = "POSH_OWM_API_KEY"
POSH_OWM_LOCATION = "POSH_OWM_LOCATION"
POSH_OWM_LAT = "POSH_OWM_LAT"
POSH_OWM_LON = "POSH_OWM_LON"

DEFAULT_LOCATION = "De Bilt,NL"
DEFAULT_COORDINATE = "0"
DEFAULT_UNITS = "standard"
DEFAULT_CACHE_TIMEOUT = 10  # minutes
DEFAULT_HTTP_TIMEOUT = 20  # milliseconds


class Properties:
    """Typed lookups over the properties configured for a segment."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values = dict(values or {})

    def get_string(self, key: str, default: str = "") -> str:
        value = self._values.get(key)
        if value is None:
            return default
        return str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        value = self._values.get(key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def has_any(self, *keys: str) -> bool:
        return any(key in self._values for key in keys)

    def one_of(self, default: str, *keys: str) -> str:
        for key in keys:
            value = self._values.get(key)
            if value is not None and str(value) != "":
                return str(value)
        return default


@dataclass(frozen=True)
class Settings:
    api_key: str
    location: str
    latitude: str
    longitude: str
    units: str
    cache_timeout: int
    http_timeout: int


def _prop_or_env(props: Properties, env, env_key: str, default: str, *prop_keys: str) -> str:
    value = props.one_of("", *prop_keys)
    if not value:
        value = env.getenv(env_key) or ""
    # an explicitly blank property disables the default
    if not value and not props.has_any(*prop_keys):
        value = default
    return value


def get_settings(props: Properties, env) -> Settings:
    api_key = _prop_or_env(props, env, POSH_OWM_API_KEY, "", API_KEY, API_KEY_ALIAS)
    if not api_key:
        raise MissingAPIKey("no api key found")

    return Settings(
        api_key=api_key,
        location=_prop_or_env(props, env, POSH_OWM_LOCATION, DEFAULT_LOCATION, LOCATION),
        latitude=_prop_or_env(props, env, POSH_OWM_LAT, DEFAULT_COORDINATE, LATITUDE),
        longitude=_prop_or_env(props, env, POSH_OWM_LON, DEFAULT_COORDINATE, LONGITUDE),
        units=props.get_string(UNITS, DEFAULT_UNITS),
        cache_timeout=props.get_int(CACHE_TIMEOUT, DEFAULT_CACHE_TIMEOUT),
        http_timeout=props.get_int(HTTP_TIMEOUT, DEFAULT_HTTP_TIMEOUT),
    )
