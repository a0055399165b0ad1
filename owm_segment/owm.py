"""
OpenWeatherMap prompt segment.

Resolves settings, serves the last response from the cache while it is
fresh, otherwise queries the current-weather endpoint once, and derives the
glyph, rounded temperature and unit glyph shown in the prompt.
"""

import logging
import math
from types import MappingProxyType
from typing import Optional
from urllib.parse import quote_plus

from .cache import load_snapshot, store_snapshot
from .config import Properties, Settings, get_settings
from .errors import (
    CacheDeserializationFailure,
    EmptyWeatherData,
    ResponseDeserializationFailure,
)
from .http_client import mask_url
from .models import RenderState, WeatherResponse

logger = logging.getLogger(__name__)

OWM_URL = "https://api.openweathermap.org/data/2.5/weather"

TEMPLATE = " {Weather} ({Temperature}{UnitIcon}) "

# https://openweathermap.org/weather-conditions#Icon-list
WEATHER_ICONS = MappingProxyType({
    "01d": "\ue30d",  # clear
    "01n": "\ue32b",
    "02d": "\ue302",  # few clouds
    "02n": "\ue37e",
    "03d": "\ue33d",  # scattered clouds
    "03n": "\ue33d",
    "04d": "\ue312",  # broken clouds
    "04n": "\ue312",
    "09d": "\ue319",  # shower rain
    "09n": "\ue319",
    "10d": "\ue308",  # rain
    "10n": "\ue325",
    "11d": "\ue30f",  # thunderstorm
    "11n": "\ue32a",
    "13d": "\ue31a",  # snow
    "13n": "\ue31a",
    "50d": "\ue313",  # mist
    "50n": "\ue313",
})

UNIT_ICONS = MappingProxyType({
    "imperial": "°F",
    "metric": "°C",
})
DEFAULT_UNIT_ICON = "°K"


def weather_icon(type_id: str) -> str:
    return WEATHER_ICONS.get(type_id, "")


def unit_icon(units: str) -> str:
    return UNIT_ICONS.get(units, DEFAULT_UNIT_ICON)


def round_half_away_from_zero(value: float) -> int:
    magnitude = abs(value)
    rounded = math.floor(magnitude)
    if magnitude - rounded >= 0.5:
        rounded += 1
    return -rounded if value < 0 else rounded


def build_url(settings: Settings) -> str:
    if settings.location:
        return f"{OWM_URL}?q={quote_plus(settings.location)}&units={settings.units}&appid={settings.api_key}"
    lat = quote_plus(settings.latitude)
    lon = quote_plus(settings.longitude)
    return f"{OWM_URL}?lat={lat}&lon={lon}&units={settings.units}&appid={settings.api_key}"


def derive_state(response: WeatherResponse, units: str, url: str = "") -> RenderState:
    if not response.observations:
        raise EmptyWeatherData("no weather data")

    return RenderState(
        temperature=round_half_away_from_zero(response.temperature),
        weather=weather_icon(response.observations[0].type_id),
        unit_icon=unit_icon(units),
        url=url,
    )


class Owm:
    def __init__(self, props: Properties, env):
        self._props = props
        self._env = env
        self.state: Optional[RenderState] = None

    @property
    def temperature(self) -> int:
        return self.state.temperature if self.state else 0

    @property
    def weather(self) -> str:
        return self.state.weather if self.state else ""

    @property
    def unit_icon(self) -> str:
        return self.state.unit_icon if self.state else ""

    @property
    def url(self) -> str:
        return self.state.url if self.state else ""

    def template(self) -> str:
        return TEMPLATE

    def render(self) -> str:
        return self.template().format(
            Weather=self.weather,
            Temperature=self.temperature,
            UnitIcon=self.unit_icon,
        )

    def is_available(self) -> bool:
        """Run the pipeline; failures are reported to the host and never raised."""
        try:
            state = self.fetch_state()
        except Exception as e:
            self._env.report_error(e)
            return False
        self.state = state
        return True

    def fetch_state(self) -> RenderState:
        settings = get_settings(self._props, self._env)
        response, url = self._get_result(settings)
        return derive_state(response, settings.units, url)

    def _get_result(self, settings: Settings):
        if settings.cache_timeout > 0:
            snapshot = load_snapshot(self._env)
            if snapshot is not None:
                try:
                    response = WeatherResponse.from_json(snapshot.body)
                except ValueError as e:
                    raise CacheDeserializationFailure(f"cached weather response is invalid: {e}") from e
                logger.debug("owm: cache hit for %s", mask_url(snapshot.url))
                return response, snapshot.url
            logger.debug("owm: cache miss")

        url = build_url(settings)
        body = self._env.http_get(url, None, settings.http_timeout)
        try:
            response = WeatherResponse.from_json(body)
        except ValueError as e:
            raise ResponseDeserializationFailure(f"weather response is invalid: {e}") from e

        if settings.cache_timeout > 0:
            if isinstance(body, bytes):
                body = body.decode("utf-8")
            store_snapshot(self._env, url, body, settings.cache_timeout)
        return response, url
