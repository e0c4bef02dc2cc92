"""
Per-page orchestration: resolve a location, fetch, normalize, hold state.

State machine: IDLE -> LOADING -> {SUCCESS, ERROR}; any new trigger
(mount, search, current location, suggestion, refresh) re-enters LOADING.
Errors never escape a controller; they become display strings.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from enum import Enum

from weatherdash.integrations.openweather import (
    WeatherError, ConfigError, ValidationError, UpstreamHTTPError, NetworkError,
)
from weatherdash.models import Coordinate
from weatherdash.pipeline.normalize import offset_tz
from weatherdash.services import conditions
from weatherdash.services.settings_service import PageSettings
from weatherdash.utils.units import format_temp, round_half_up, wind_direction

logger = logging.getLogger(__name__)

NAIROBI = Coordinate(lat=-1.2921, lon=36.8219)
NEW_YORK = Coordinate(lat=40.7128, lon=-74.0060)


class ViewState(Enum):
    IDLE = 'idle'
    LOADING = 'loading'
    SUCCESS = 'success'
    ERROR = 'error'


GEOLOCATION_MESSAGES = {
    'denied': 'Location access denied. Please enable location services and try again.',
    'unavailable': 'Location information is unavailable.',
    'timeout': 'Location request timed out.',
    'unsupported': 'Geolocation is not supported by this browser.',
}


class GeolocationError(Exception):
    def __init__(self, kind):
        if kind not in GEOLOCATION_MESSAGES:
            kind = 'unavailable'
        self.kind = kind
        super().__init__(GEOLOCATION_MESSAGES[kind])


def error_message(error, city=None):
    """Map a failure from the fetch chain to the sentence shown to the user."""
    if isinstance(error, UpstreamHTTPError):
        status = error.status_code
        if status == 404:
            if city:
                return f'City "{city}" not found. Please check the spelling and try again.'
            return 'Location not found. Please check the city name or enable GPS.'
        if status == 401:
            return 'API key error. Please check your configuration.'
        if status == 429:
            return 'Too many requests. Please try again in a moment.'
        if status >= 500:
            return 'Weather service temporarily unavailable. Please try again later.'
        return error.provider_message or f'Weather service error ({status}). Please try again later.'
    if isinstance(error, ConfigError):
        return 'API key not configured'
    if isinstance(error, NetworkError):
        return 'Failed to fetch weather data'
    if isinstance(error, WeatherError):
        return error.message
    if isinstance(error, ValueError):
        return 'Received an unexpected response from the weather service.'
    return 'An error occurred while fetching weather data'


class ViewController:
    page = None
    default_location = NAIROBI
    default_location_name = 'Nairobi, Kenya'

    def __init__(self, client, settings_service=None, max_workers=4, clock=None):
        self.client = client
        self.settings_service = settings_service
        self.max_workers = max_workers
        self.clock = clock or time.time

        self.state = ViewState.IDLE
        self.error = None
        self.error_status = None
        self.notice = None
        self.warnings = []
        self.data = None
        self.last_updated = None
        self.current_location = None
        self.settings = PageSettings()

        self._lock = threading.Lock()
        self._generation = 0
        self._last_request = None

    # ── Triggers ──────────────────────────────────────

    def load_settings(self):
        if self.settings_service is not None:
            self.settings = self.settings_service.load(self.page)
        return self.settings

    def mount(self, coord=None, geo_error=None):
        """Load preferences, then fetch for the browser position or the page default."""
        self.load_settings()

        if coord is not None and geo_error is None:
            self.current_location = coord
            return self.load(lat=coord.lat, lon=coord.lon)

        failure = GeolocationError(geo_error or 'unsupported')
        logger.info(f"[{self.page}] geolocation failed ({failure.kind}), using {self.default_location_name}")
        self.notice = str(failure)
        self.current_location = self.default_location
        return self.load(lat=self.default_location.lat, lon=self.default_location.lon)

    def search_city(self, text):
        city = (text or '').strip()
        if not city:
            with self._lock:
                self._generation += 1
                self._set_error('Please enter a city name.', ValidationError.status_code)
            return self.state
        return self.load(city=city)

    def use_current_location(self):
        location = self.current_location or self.default_location
        return self.load(lat=location.lat, lon=location.lon)

    def select_city(self, name, lat, lon):
        logger.info(f"[{self.page}] suggestion selected: {name}")
        return self.load(lat=lat, lon=lon)

    def refresh(self):
        if self._last_request is None:
            return self.use_current_location()
        return self.load(**self._last_request)

    def toggle_dark_mode(self):
        return self._save_settings(PageSettings(dark_mode=not self.settings.dark_mode,
                                                celsius=self.settings.celsius))

    def set_units(self, celsius):
        return self._save_settings(PageSettings(dark_mode=self.settings.dark_mode,
                                                celsius=bool(celsius)))

    def _save_settings(self, settings):
        self.settings = settings
        if self.settings_service is not None:
            self.settings_service.save(self.page, settings)
        return settings

    # ── Loading ───────────────────────────────────────

    def load(self, lat=None, lon=None, city=None):
        with self._lock:
            self._generation += 1
            generation = self._generation
            self.state = ViewState.LOADING
            self.error = None
            self.error_status = None
            self._last_request = {'lat': lat, 'lon': lon, 'city': city}

        warnings = []
        try:
            data = self.fetch(lat=lat, lon=lon, city=city, warnings=warnings)
        except (WeatherError, ValueError) as e:
            logger.error(f"[{self.page}] load failed: {e}")
            with self._lock:
                if generation != self._generation:
                    logger.debug(f"[{self.page}] discarding stale failure (generation {generation})")
                    return self.state
                self._set_error(error_message(e, city=city), getattr(e, 'status_code', 500))
            return self.state

        with self._lock:
            if generation != self._generation:
                logger.debug(f"[{self.page}] discarding stale response (generation {generation})")
                return self.state
            self.data = data
            self.warnings = warnings
            self.state = ViewState.SUCCESS
            self.last_updated = datetime.now(timezone.utc)
            place = data.get('snapshot') or data.get('city')
            if place is not None:
                self.current_location = place.coord
        return self.state

    def _set_error(self, message, status):
        # Clear-on-error: a failed primary fetch never leaves stale data on screen
        self.state = ViewState.ERROR
        self.error = message
        self.error_status = status
        self.data = None
        self.warnings = []

    def fetch(self, lat=None, lon=None, city=None, warnings=None):
        """Return a dict of records for this page. Raise to signal a primary failure."""
        raise NotImplementedError

    def _secondary(self, tasks, warnings):
        """
        Run independent secondary fetches concurrently.
        tasks: {name: callable}. A failing task yields None and a warning.
        """
        results = {}
        if not tasks:
            return results
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {name: executor.submit(fn) for name, fn in tasks.items()}
            for name, future in futures.items():
                try:
                    results[name] = future.result()
                except (WeatherError, ValueError) as e:
                    logger.warning(f"[{self.page}] {name} fetch failed: {e}")
                    warnings.append(f'{name}: {error_message(e)}')
                    results[name] = None
        return results

    # ── Presentation ──────────────────────────────────

    def local_tz(self):
        data = self.data or {}
        place = data.get('snapshot') or data.get('city')
        return offset_tz(place.timezone_offset if place is not None else None)

    def present(self, data):
        raise NotImplementedError

    def to_dict(self):
        return {
            'page': self.page,
            'state': self.state.value,
            'error': self.error,
            'notice': self.notice,
            'warnings': list(self.warnings),
            'settings': self.settings.to_dict(),
            'current_location': self.current_location.to_dict() if self.current_location else None,
            'last_updated': self.last_updated.isoformat() if self.last_updated else None,
            'view_model': self.present(self.data) if self.data is not None else None,
        }


def present_snapshot(snapshot, celsius=True):
    """Display fields for the current-conditions card."""
    return {
        **snapshot.to_dict(),
        'location': snapshot.display_name,
        'temperature': format_temp(snapshot.temperature_c, celsius),
        'feels_like': format_temp(snapshot.feels_like_c, celsius),
        'unit': 'C' if celsius else 'F',
        'wind_kmh': round_half_up(snapshot.wind_speed_kmh),
        'wind_direction': wind_direction(snapshot.wind_deg),
        'icon': conditions.condition_icon(snapshot.condition_main),
        'theme': conditions.background_theme(snapshot.condition_main, snapshot.temperature_c),
        'message': conditions.weather_message(snapshot.temperature_c),
    }
