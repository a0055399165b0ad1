import json
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class WeatherObservation:
    short_description: str = ""
    description: str = ""
    type_id: str = ""  # OWM icon code, e.g. "01d"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherObservation":
        if not isinstance(data, dict):
            raise ValueError(f"weather entry must be an object, got {type(data).__name__}")
        return cls(
            short_description=_as_str(data.get("main"), "main"),
            description=_as_str(data.get("description"), "description"),
            type_id=_as_str(data.get("icon"), "icon"),
        )


@dataclass(frozen=True)
class WeatherResponse:
    observations: List[WeatherObservation] = field(default_factory=list)
    temperature: float = 0.0

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "WeatherResponse":
        """
        Parse a current-weather payload.

        Only ``weather`` and ``main.temp`` are read; absent keys fall back to
        empty values. Raises ValueError for malformed JSON or mistyped fields.
        """
        data = json.loads(raw, parse_constant=_reject_constant)
        if not isinstance(data, dict):
            raise ValueError(f"payload must be an object, got {type(data).__name__}")

        weather = data.get("weather") or []
        if not isinstance(weather, list):
            raise ValueError("'weather' must be a list")

        main = data.get("main") or {}
        if not isinstance(main, dict):
            raise ValueError("'main' must be an object")

        temp = main.get("temp", 0.0)
        if isinstance(temp, bool) or not isinstance(temp, (int, float)):
            raise ValueError(f"'main.temp' must be a number, got {temp!r}")
        try:
            temp = float(temp)
        except OverflowError as e:
            raise ValueError("'main.temp' is out of range") from e
        if not math.isfinite(temp):
            raise ValueError(f"'main.temp' must be finite, got {temp!r}")

        return cls(
            observations=[WeatherObservation.from_dict(w) for w in weather],
            temperature=temp,
        )


@dataclass(frozen=True)
class RenderState:
    temperature: int
    weather: str
    unit_icon: str
    url: str = ""


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not valid JSON")


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{name}' must be a string, got {value!r}")
    return value
