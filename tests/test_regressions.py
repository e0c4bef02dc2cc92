import re
from pathlib import Path
from unittest.mock import patch

from config import TestConfig
from weatherdash import create_app
from weatherdash.controllers import CurrentWeatherController, ViewState
from weatherdash.integrations.openweather import OpenWeatherClient

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


class TestCredentialHandling:
    def test_no_key_literal_in_source(self):
        # OpenWeather keys are 32 hex characters
        pattern = re.compile(r'["\'][0-9a-f]{32}["\']')
        sources = list((PACKAGE_ROOT / 'weatherdash').rglob('*.py')) + [PACKAGE_ROOT / 'config.py']
        offenders = [str(p) for p in sources if pattern.search(p.read_text())]
        assert offenders == []

    def test_unset_key_has_no_fallback(self, monkeypatch):
        monkeypatch.delenv('OPENWEATHER_API_KEY', raising=False)

        class EnvlessConfig(TestConfig):
            OPENWEATHER_API_KEY = None

        app = create_app(EnvlessConfig)
        with app.app_context():
            assert OpenWeatherClient().configured is False

    def test_controller_reports_missing_key(self):
        ow_client = OpenWeatherClient(app_config={'OPENWEATHER_API_KEY': ''})
        controller = CurrentWeatherController(ow_client)
        with patch('weatherdash.integrations.openweather.requests.get') as mock_get:
            controller.search_city('Paris')
        assert controller.state == ViewState.ERROR
        assert controller.error == 'API key not configured'
        mock_get.assert_not_called()
