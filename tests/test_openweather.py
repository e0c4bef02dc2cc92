import pytest
import requests
from unittest.mock import patch, MagicMock
from weatherdash.integrations.openweather import (
    OpenWeatherClient, ResourceKind, ConfigError, ValidationError,
    UpstreamHTTPError, NetworkError,
)
from weatherdash.models import Severity

CONFIG = {
    'OPENWEATHER_API_KEY': 'abc123',
    'OPENWEATHER_BASE_URL': 'https://api.openweathermap.org',
    'UPSTREAM_TIMEOUT_SECONDS': 7.5,
}


@pytest.fixture
def ow_client():
    return OpenWeatherClient(app_config=CONFIG)


class TestBuildRequest:
    def test_coordinates(self, ow_client):
        url, params = ow_client.build_request(ResourceKind.CURRENT, lat=40.71, lon=-74.01)
        assert url == 'https://api.openweathermap.org/data/2.5/weather'
        assert params == {'lat': 40.71, 'lon': -74.01, 'appid': 'abc123', 'units': 'metric'}

    def test_city(self, ow_client):
        url, params = ow_client.build_request(ResourceKind.FORECAST, city='Paris')
        assert url.endswith('/data/2.5/forecast')
        assert params['q'] == 'Paris'
        assert 'lat' not in params

    def test_coordinates_win_over_city(self, ow_client):
        _, params = ow_client.build_request(ResourceKind.CURRENT, lat=1.0, lon=2.0, city='Paris')
        assert 'q' not in params
        assert params['lat'] == 1.0

    def test_air_pollution_has_no_units(self, ow_client):
        url, params = ow_client.build_request(ResourceKind.AIR_POLLUTION, lat=1.0, lon=2.0)
        assert url.endswith('/data/2.5/air_pollution')
        assert 'units' not in params

    def test_uv_path(self, ow_client):
        url, _ = ow_client.build_request('uv_index', lat=1.0, lon=2.0)
        assert url.endswith('/data/2.5/uvi')

    def test_onecall_excludes_sections(self, ow_client):
        url, params = ow_client.build_request(ResourceKind.ONECALL, lat=1.0, lon=2.0)
        assert url.endswith('/data/3.0/onecall')
        assert params['exclude'] == 'minutely,hourly,daily'

    def test_missing_location(self, ow_client):
        with pytest.raises(ValidationError) as exc:
            ow_client.build_request(ResourceKind.CURRENT)
        assert exc.value.message == 'Location required'
        assert exc.value.status_code == 400

    def test_city_not_accepted_for_uv(self, ow_client):
        with pytest.raises(ValidationError) as exc:
            ow_client.build_request(ResourceKind.UV_INDEX, city='Paris')
        assert exc.value.message == 'Coordinates required'

    def test_half_coordinates_is_missing(self, ow_client):
        with pytest.raises(ValidationError):
            ow_client.build_request(ResourceKind.AIR_POLLUTION, lat=1.0)


class TestFetch:
    def test_returns_body_unchanged(self, ow_client, make_response, current_payload):
        with patch('weatherdash.integrations.openweather.requests.get',
                   return_value=make_response(current_payload)) as mock_get:
            data = ow_client.current_weather(lat=40.71, lon=-74.01)

        assert data == current_payload
        mock_get.assert_called_once()
        assert mock_get.call_args.kwargs['timeout'] == 7.5

    def test_missing_key_makes_no_call(self):
        ow_client = OpenWeatherClient(app_config={**CONFIG, 'OPENWEATHER_API_KEY': None})
        with patch('weatherdash.integrations.openweather.requests.get') as mock_get:
            with pytest.raises(ConfigError) as exc:
                ow_client.current_weather(lat=1.0, lon=2.0)
        assert exc.value.status_code == 500
        assert str(exc.value) == 'API key not configured'
        mock_get.assert_not_called()

    def test_missing_location_makes_no_call(self, ow_client):
        with patch('weatherdash.integrations.openweather.requests.get') as mock_get:
            with pytest.raises(ValidationError):
                ow_client.current_weather()
        mock_get.assert_not_called()

    def test_provider_message_preferred(self, ow_client, make_response):
        resp = make_response({'cod': '404', 'message': 'city not found'}, status=404, reason='Not Found')
        with patch('weatherdash.integrations.openweather.requests.get', return_value=resp):
            with pytest.raises(UpstreamHTTPError) as exc:
                ow_client.current_weather(city='Atlantis')
        assert exc.value.status_code == 404
        assert exc.value.message == 'city not found'

    def test_generic_message_when_body_unreadable(self, ow_client, make_response):
        resp = make_response(ValueError('no json'), status=502, reason='Bad Gateway')
        with patch('weatherdash.integrations.openweather.requests.get', return_value=resp):
            with pytest.raises(UpstreamHTTPError) as exc:
                ow_client.uv_index(1.0, 2.0)
        assert exc.value.status_code == 502
        assert exc.value.message == 'OpenWeather API error: 502'
        assert exc.value.provider_message is None

    def test_transport_failure(self, ow_client):
        with patch('weatherdash.integrations.openweather.requests.get',
                   side_effect=requests.ConnectionError('dns failure')):
            with pytest.raises(NetworkError):
                ow_client.air_pollution(1.0, 2.0)

    def test_timeout_is_network_error(self, ow_client):
        with patch('weatherdash.integrations.openweather.requests.get',
                   side_effect=requests.Timeout('read timed out')):
            with pytest.raises(NetworkError):
                ow_client.forecast(lat=1.0, lon=2.0)

    def test_invalid_json_on_success(self, ow_client, make_response):
        with patch('weatherdash.integrations.openweather.requests.get',
                   return_value=make_response(ValueError('bad json'))):
            with pytest.raises(NetworkError):
                ow_client.current_weather(lat=1.0, lon=2.0)

    def test_session_is_used_when_given(self, make_response, current_payload):
        session = MagicMock()
        session.get.return_value = make_response(current_payload)
        ow_client = OpenWeatherClient(app_config=CONFIG, session=session)

        with patch('weatherdash.integrations.openweather.requests.get') as mock_get:
            ow_client.current_weather(lat=1.0, lon=2.0)

        session.get.assert_called_once()
        mock_get.assert_not_called()

    def test_onecall_alerts_are_reshaped(self, ow_client, make_response, onecall_payload):
        with patch('weatherdash.integrations.openweather.requests.get',
                   return_value=make_response(onecall_payload)):
            alerts = ow_client.onecall_alerts(40.71, -74.01)

        assert [a.event for a in alerts] == ['Flood Warning', 'Wind Advisory']
        assert alerts[0].severity == Severity.SEVERE

    def test_reads_flask_config(self, app):
        with app.app_context():
            ow_client = OpenWeatherClient()
        assert ow_client.api_key == 'test-key'
        assert ow_client.timeout == 5.0

    def test_fetch_raw_returns_provider_bytes(self, ow_client, make_response, uv_payload):
        text = b'{"value":6.2,"date":1737374400}'
        with patch('weatherdash.integrations.openweather.requests.get',
                   return_value=make_response(uv_payload, content=text)):
            assert ow_client.fetch_raw(ResourceKind.UV_INDEX, lat=1.0, lon=2.0) == text

    def test_air_pollution_forecast_path(self, ow_client):
        url, params = ow_client.build_request(ResourceKind.AIR_POLLUTION_FORECAST, lat=1.0, lon=2.0)
        assert url.endswith('/data/2.5/air_pollution/forecast')
        assert 'units' not in params
