import json
import os
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

# Set test env vars before importing app
os.environ.pop('FF_WEATHER_ALERTS', None)

from weatherdash import create_app
from weatherdash import feature_flags
from config import TestConfig


class NoKeyConfig(TestConfig):
    OPENWEATHER_API_KEY = None


@pytest.fixture(scope='session')
def app():
    """Create app with test config."""
    app = create_app(TestConfig)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def no_key_client():
    return create_app(NoKeyConfig).test_client()


@pytest.fixture(autouse=True)
def reset_flags():
    feature_flags.init_flags()
    yield
    feature_flags.init_flags()


def mock_response(json_data=None, status=200, reason='OK', content=None):
    """Stand-in for requests.Response. `content` defaults to the JSON text of json_data."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.reason = reason
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
        resp.content = content if content is not None else b'<html>not json</html>'
    else:
        resp.json.return_value = json_data
        resp.content = content if content is not None else json.dumps(json_data).encode()
    return resp


@pytest.fixture
def make_response():
    return mock_response


@pytest.fixture
def current_payload():
    """OpenWeather /data/2.5/weather response (metric) for New York."""
    return {
        'coord': {'lon': -74.01, 'lat': 40.71},
        'weather': [{'id': 500, 'main': 'Rain', 'description': 'light rain', 'icon': '10d'}],
        'main': {
            'temp': 12.4,
            'feels_like': 11.2,
            'temp_min': 10.9,
            'temp_max': 13.8,
            'pressure': 1012,
            'humidity': 81,
        },
        'visibility': 10000,
        'wind': {'speed': 5.0, 'deg': 230},
        'dt': 1737381600,
        'sys': {'country': 'US', 'sunrise': 1737374400, 'sunset': 1737410400},
        'timezone': -18000,
        'id': 5128581,
        'name': 'New York',
        'cod': 200,
    }


@pytest.fixture
def forecast_payload():
    """
    Five days of 3-hour slots starting 2025-01-20 00:00 UTC, for New York
    (UTC-5): local days run 19 Jan (2 slots), 20-23 Jan (8 each), 24 Jan (6).
    Every fourth slot has 0.5 mm of rain.
    """
    start = datetime(2025, 1, 20, tzinfo=timezone.utc)
    items = []
    for i in range(40):
        slot = start + timedelta(hours=3 * i)
        item = {
            'dt': int(slot.timestamp()),
            'main': {'temp': 10.0 + i * 0.5, 'feels_like': 9.0 + i * 0.5, 'humidity': 70, 'pressure': 1012},
            'weather': [{'main': 'Clouds', 'description': 'scattered clouds', 'icon': '03d'}],
            'clouds': {'all': 40},
            'wind': {'speed': 2.5, 'deg': 180},
            'visibility': 8000 if i % 2 else None,
            'pop': 0.2,
            'dt_txt': slot.strftime('%Y-%m-%d %H:%M:%S'),
        }
        if i % 4 == 0:
            item['rain'] = {'3h': 0.5}
        items.append(item)
    return {
        'cod': '200',
        'cnt': len(items),
        'list': items,
        'city': {
            'name': 'New York',
            'country': 'US',
            'coord': {'lat': 40.71, 'lon': -74.01},
            'timezone': -18000,
            'sunrise': 1737374400,
            'sunset': 1737410400,
        },
    }


@pytest.fixture
def onecall_payload():
    return {
        'lat': 40.71,
        'lon': -74.01,
        'timezone': 'America/New_York',
        'current': {'temp': 12.4},
        'alerts': [
            {
                'sender_name': 'NWS New York City',
                'event': 'Flood Warning',
                'start': 1737381600,
                'end': 1737468000,
                'description': 'River flooding expected.',
                'tags': ['Severe', 'Flood'],
            },
            {
                'event': 'Wind Advisory',
                'start': 1737381600,
                'end': 1737396000,
                'tags': ['Wind'],
            },
        ],
    }


@pytest.fixture
def air_payload():
    return {
        'coord': {'lon': -74.01, 'lat': 40.71},
        'list': [{
            'main': {'aqi': 2},
            'components': {'co': 201.94, 'no2': 0.77, 'o3': 68.66, 'pm2_5': 0.5, 'pm10': 0.54},
            'dt': 1737381600,
        }],
    }


@pytest.fixture
def uv_payload():
    return {'lat': 40.71, 'lon': -74.01, 'date_iso': '2025-01-20T12:00:00Z', 'date': 1737374400, 'value': 6.2}


@pytest.fixture
def air_forecast_payload():
    """Hourly air pollution forecast for 2025-01-20 and 2025-01-21 (UTC)."""
    start = datetime(2025, 1, 20, tzinfo=timezone.utc)
    samples = []
    for i in range(48):
        samples.append({
            'dt': int((start + timedelta(hours=i)).timestamp()),
            'main': {'aqi': 1 if i < 24 else 3},
            'components': {'co': 200.0, 'no2': 10.0, 'o3': 60.0, 'pm2_5': 8.0 if i < 24 else 40.0, 'pm10': 12.0},
        })
    return {'coord': {'lon': -74.01, 'lat': 40.71}, 'list': samples}
