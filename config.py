import os
from dotenv import load_dotenv

load_dotenv()


class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

    # OpenWeatherMap (no fallback key: the credential must come from the server environment)
    OPENWEATHER_API_KEY = os.getenv('OPENWEATHER_API_KEY')
    OPENWEATHER_BASE_URL = os.getenv('OPENWEATHER_BASE_URL', 'https://api.openweathermap.org')
    UPSTREAM_TIMEOUT_SECONDS = float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', '10'))

    # View controllers
    CONTROLLER_WORKERS = int(os.getenv('CONTROLLER_WORKERS', '4'))

    # Page preferences (dark mode, units). Unset keeps them in process memory.
    SETTINGS_PATH = os.getenv('SETTINGS_PATH')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')


class TestConfig(Config):
    TESTING = True
    OPENWEATHER_API_KEY = 'test-key'
    OPENWEATHER_BASE_URL = 'https://api.openweathermap.org'
    UPSTREAM_TIMEOUT_SECONDS = 5.0
    SETTINGS_PATH = None
