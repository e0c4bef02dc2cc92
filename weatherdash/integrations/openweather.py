import logging
from enum import Enum
from flask import current_app
import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = 'https://api.openweathermap.org'
DEFAULT_TIMEOUT = 10.0


class ResourceKind(Enum):
    CURRENT = 'current'
    FORECAST = 'forecast'
    AIR_POLLUTION = 'air_pollution'
    AIR_POLLUTION_FORECAST = 'air_pollution_forecast'
    UV_INDEX = 'uv_index'
    ONECALL = 'onecall'


# path, extra query params, whether a city name is accepted
RESOURCES = {
    ResourceKind.CURRENT: ('/data/2.5/weather', {'units': 'metric'}, True),
    ResourceKind.FORECAST: ('/data/2.5/forecast', {'units': 'metric'}, True),
    ResourceKind.AIR_POLLUTION: ('/data/2.5/air_pollution', {}, False),
    ResourceKind.AIR_POLLUTION_FORECAST: ('/data/2.5/air_pollution/forecast', {}, False),
    ResourceKind.UV_INDEX: ('/data/2.5/uvi', {}, False),
    ResourceKind.ONECALL: (
        '/data/3.0/onecall',
        {'units': 'metric', 'exclude': 'minutely,hourly,daily'},
        False,
    ),
}


class WeatherError(Exception):
    status_code = 500

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigError(WeatherError):
    status_code = 500


class ValidationError(WeatherError):
    status_code = 400


class UpstreamHTTPError(WeatherError):
    def __init__(self, status_code, message=None):
        self.provider_message = message
        super().__init__(message or f'OpenWeather API error: {status_code}', status_code)


class NetworkError(WeatherError):
    status_code = 500


class OpenWeatherClient:
    def __init__(self, app_config=None, session=None):
        config = app_config or current_app.config
        self.api_key = config.get('OPENWEATHER_API_KEY')
        self.base_url = (config.get('OPENWEATHER_BASE_URL') or DEFAULT_BASE_URL).rstrip('/')
        self.timeout = config.get('UPSTREAM_TIMEOUT_SECONDS', DEFAULT_TIMEOUT)
        self.session = session

    @property
    def configured(self):
        return bool(self.api_key)

    def build_request(self, kind, lat=None, lon=None, city=None):
        """Return (url, params) for one provider resource. Never does I/O."""
        kind = ResourceKind(kind)
        path, extra, accepts_city = RESOURCES[kind]

        if lat is not None and lon is not None:
            location = {'lat': lat, 'lon': lon}
        elif city and accepts_city:
            location = {'q': city}
        elif accepts_city:
            raise ValidationError('Location required')
        else:
            raise ValidationError('Coordinates required')

        params = {**location, 'appid': self.api_key, **extra}
        return f'{self.base_url}{path}', params

    def _request(self, kind, lat=None, lon=None, city=None):
        """
        Single GET against the provider. Returns (response, parsed body).
        Raises ConfigError / ValidationError before any network call,
        UpstreamHTTPError on non-2xx, NetworkError on transport failure
        or a body that is not JSON.
        """
        if not self.api_key:
            raise ConfigError('API key not configured')

        url, params = self.build_request(kind, lat=lat, lon=lon, city=city)
        getter = self.session.get if self.session is not None else requests.get

        try:
            resp = getter(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"OpenWeather request failed ({ResourceKind(kind).value}): {e}")
            raise NetworkError(f'Failed to reach weather service: {e}') from e

        if not resp.ok:
            message = _provider_message(resp)
            logger.error(f"OpenWeather error {resp.status_code} ({ResourceKind(kind).value}): {message or resp.reason}")
            raise UpstreamHTTPError(resp.status_code, message)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"OpenWeather returned invalid JSON ({ResourceKind(kind).value}): {e}")
            raise NetworkError('Weather service returned an unreadable response') from e
        return resp, data

    def fetch(self, kind, lat=None, lon=None, city=None):
        """Parsed JSON body of one provider resource."""
        return self._request(kind, lat=lat, lon=lon, city=city)[1]

    def fetch_raw(self, kind, lat=None, lon=None, city=None):
        """Body bytes exactly as the provider sent them, for relaying."""
        return self._request(kind, lat=lat, lon=lon, city=city)[0].content

    def current_weather(self, lat=None, lon=None, city=None):
        return self.fetch(ResourceKind.CURRENT, lat=lat, lon=lon, city=city)

    def forecast(self, lat=None, lon=None, city=None):
        return self.fetch(ResourceKind.FORECAST, lat=lat, lon=lon, city=city)

    def air_pollution(self, lat, lon):
        return self.fetch(ResourceKind.AIR_POLLUTION, lat=lat, lon=lon)

    def air_pollution_forecast(self, lat, lon):
        return self.fetch(ResourceKind.AIR_POLLUTION_FORECAST, lat=lat, lon=lon)

    def uv_index(self, lat, lon):
        return self.fetch(ResourceKind.UV_INDEX, lat=lat, lon=lon)

    def onecall_alerts(self, lat, lon):
        """Fetch the One Call payload and reshape its alerts into AlertRecords."""
        from weatherdash.pipeline.normalize import alerts_from_onecall
        return alerts_from_onecall(self.fetch(ResourceKind.ONECALL, lat=lat, lon=lon))


def _provider_message(resp):
    """OpenWeather puts a human-readable reason in the body's "message" field."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return None
