import pytest

from owm_segment.models import WeatherResponse


def test_parses_current_weather_payload():
    raw = (
        '{"weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"},'
        ' {"main": "Mist", "description": "mist", "icon": "50d"}],'
        ' "main": {"temp": 20.6, "humidity": 40}, "name": "De Bilt"}'
    )
    response = WeatherResponse.from_json(raw)
    assert len(response.observations) == 2
    first = response.observations[0]
    assert first.short_description == "Clear"
    assert first.description == "clear sky"
    assert first.type_id == "01d"
    assert response.temperature == 20.6


def test_accepts_bytes_and_missing_fields():
    response = WeatherResponse.from_json(b'{"cod": 200}')
    assert response.observations == []
    assert response.temperature == 0.0


def test_integer_temperature_becomes_float():
    response = WeatherResponse.from_json('{"weather": [{"icon": "04n"}], "main": {"temp": -3}}')
    assert response.temperature == -3.0
    assert isinstance(response.temperature, float)


@pytest.mark.parametrize("raw", [
    "not json",
    "[]",
    '{"weather": {"icon": "01d"}}',
    '{"weather": [{"icon": 1}]}',
    '{"weather": [], "main": {"temp": "warm"}}',
    '{"weather": [], "main": [1]}',
])
def test_malformed_payloads_raise_value_error(raw):
    with pytest.raises(ValueError):
        WeatherResponse.from_json(raw)


@pytest.mark.parametrize("temp", ["NaN", "Infinity", "-Infinity", "1e400", "1" + "0" * 400])
def test_non_finite_temperature_rejected(temp):
    with pytest.raises(ValueError):
        WeatherResponse.from_json('{"weather": [{"icon": "01d"}], "main": {"temp": %s}}' % temp)
