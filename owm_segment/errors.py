class WeatherError(Exception):
    pass


class MissingAPIKey(WeatherError):
    pass


class CacheDeserializationFailure(WeatherError):
    pass


class TransportFailure(WeatherError):
    pass


class ResponseDeserializationFailure(WeatherError):
    pass


class EmptyWeatherData(WeatherError):
    pass
